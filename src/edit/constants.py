"""
Shared constants for the map editor.

Key symbols are the values the front end forwards from keyboard events;
status labels are the fixed set of strings shown to the user.
"""

# Keyboard commands
KEY_ADD_NODE_MENU = 'n'
KEY_CHOOSE_DESTINATION = 'd'
KEY_CHOOSE_ROAD = 'r'
KEY_REMOVE_NODE = 'x'
KEY_ADD_EDGE = 'e'
KEY_REMOVE_EDGE = 'c'
KEY_FIND_PATH = 'p'
KEY_END_SESSION = 'Escape'

# Status labels
STATUS_IDLE = 'Idle'
STATUS_CHOOSE_CATEGORY = 'Choose node type: Destination or Road'
STATUS_ADD_DESTINATION = 'Click on the map to add a destination'
STATUS_ADD_ROAD = 'Click on the map to add a road node'
STATUS_REMOVE_NODE = 'Click a node to remove it'
STATUS_ADD_EDGE_FIRST = 'Add edge: select the first node'
STATUS_ADD_EDGE_SECOND = 'Add edge: select the second node'
STATUS_REMOVE_EDGE_FIRST = 'Remove edge: select the first node'
STATUS_REMOVE_EDGE_SECOND = 'Remove edge: select the second node'
STATUS_FIND_PATH_FIRST = 'Find path: select the start destination'
STATUS_FIND_PATH_SECOND = 'Find path: select the goal destination'
STATUS_PATH_FOUND = 'Path found'
STATUS_NO_PATH = 'No path found'
STATUS_SESSION_ENDED = 'Session ended'

STATUS_LABELS = (
    STATUS_IDLE,
    STATUS_CHOOSE_CATEGORY,
    STATUS_ADD_DESTINATION,
    STATUS_ADD_ROAD,
    STATUS_REMOVE_NODE,
    STATUS_ADD_EDGE_FIRST,
    STATUS_ADD_EDGE_SECOND,
    STATUS_REMOVE_EDGE_FIRST,
    STATUS_REMOVE_EDGE_SECOND,
    STATUS_FIND_PATH_FIRST,
    STATUS_FIND_PATH_SECOND,
    STATUS_PATH_FOUND,
    STATUS_NO_PATH,
    STATUS_SESSION_ENDED,
)

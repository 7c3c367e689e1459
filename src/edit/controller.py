"""
Editor Controller - Single source of truth for map editing state.

This controller interprets abstract input events against the current mode:
- hover updates from the pointer (once per frame)
- clicks in world (map pixel) coordinates
- key symbols and toolbar commands

and issues mutations to the GraphStore or queries to the path engine.
The front end only reads snapshot() to draw the map.

Invalid targets are silent no-ops: a click that hits nothing actionable
leaves the mode unchanged. Any mode change drops the last computed path.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from src.edit.constants import (
    KEY_ADD_EDGE,
    KEY_ADD_NODE_MENU,
    KEY_CHOOSE_DESTINATION,
    KEY_CHOOSE_ROAD,
    KEY_END_SESSION,
    KEY_FIND_PATH,
    KEY_REMOVE_EDGE,
    KEY_REMOVE_NODE,
    STATUS_ADD_DESTINATION,
    STATUS_ADD_EDGE_FIRST,
    STATUS_ADD_EDGE_SECOND,
    STATUS_ADD_ROAD,
    STATUS_CHOOSE_CATEGORY,
    STATUS_FIND_PATH_FIRST,
    STATUS_FIND_PATH_SECOND,
    STATUS_IDLE,
    STATUS_NO_PATH,
    STATUS_PATH_FOUND,
    STATUS_REMOVE_EDGE_FIRST,
    STATUS_REMOVE_EDGE_SECOND,
    STATUS_REMOVE_NODE,
    STATUS_SESSION_ENDED,
)
from src.edit.states import (
    AddEdge,
    AddNode,
    FindPath,
    Idle,
    InteractionState,
    RemoveEdge,
    RemoveNode,
    TWO_STEP_MODES,
)
from src.graph_store import GraphStore, Node, NodeCategory, Position
from src.path_engine import path_length, shortest_path
from src.persistence import PersistenceAdapter

logger = logging.getLogger(__name__)


@dataclass
class EditorSnapshot:
    """Everything the renderer needs for one frame."""
    mode: str
    status: str
    nodes: List[Node] = field(default_factory=list)
    edges: List[Tuple[Position, Position]] = field(default_factory=list)
    path: List[Position] = field(default_factory=list)
    path_length: float = 0.0
    no_path: bool = False
    hovered: Optional[Node] = None
    pending: Optional[Node] = None
    chooser_open: bool = False


class EditorStateMachine:
    """Manages the editing mode and applies user commands to the graph."""

    def __init__(self, store: GraphStore,
                 persistence: Optional[PersistenceAdapter] = None,
                 canvas_size: Tuple[float, float] = (float('inf'), float('inf'))):
        self.store = store
        self.persistence = persistence
        self.canvas_width, self.canvas_height = canvas_size
        self._state: InteractionState = Idle()
        # None means no query since the last mode change; [] means no path
        self._path: Optional[List[Position]] = None
        self._hovered: Optional[Node] = None
        self._pointer: Optional[Position] = None
        self._session_ended = False
        self._on_state_change: Optional[Callable[['EditorStateMachine'], None]] = None

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def path(self) -> List[Position]:
        return list(self._path or [])

    @property
    def hovered(self) -> Optional[Node]:
        return self._hovered

    @property
    def pending(self) -> Optional[Node]:
        if isinstance(self._state, TWO_STEP_MODES) and self._state.pending_first is not None:
            return self.store.get(self._state.pending_first)
        return None

    @property
    def session_ended(self) -> bool:
        return self._session_ended

    def set_on_state_change(self, callback: Callable[['EditorStateMachine'], None]):
        self._on_state_change = callback

    # --- Mode commands ---

    def open_add_node_menu(self) -> InteractionState:
        return self._enter(Idle(chooser_open=True))

    def choose_category(self, category: NodeCategory) -> InteractionState:
        if not (isinstance(self._state, Idle) and self._state.chooser_open):
            return self._state
        return self._enter(AddNode(NodeCategory(category)))

    def toggle_remove_node(self) -> InteractionState:
        return self._toggle(RemoveNode)

    def toggle_add_edge(self) -> InteractionState:
        return self._toggle(AddEdge)

    def toggle_remove_edge(self) -> InteractionState:
        return self._toggle(RemoveEdge)

    def toggle_find_path(self) -> InteractionState:
        return self._toggle(FindPath)

    def key_pressed(self, symbol: str) -> bool:
        """Run the command bound to a key symbol. Returns False for unbound keys."""
        if self._session_ended:
            return False
        if len(symbol) == 1:
            symbol = symbol.lower()

        commands = {
            KEY_ADD_NODE_MENU: self.open_add_node_menu,
            KEY_CHOOSE_DESTINATION: lambda: self.choose_category(NodeCategory.DESTINATION),
            KEY_CHOOSE_ROAD: lambda: self.choose_category(NodeCategory.ROAD),
            KEY_REMOVE_NODE: self.toggle_remove_node,
            KEY_ADD_EDGE: self.toggle_add_edge,
            KEY_REMOVE_EDGE: self.toggle_remove_edge,
            KEY_FIND_PATH: self.toggle_find_path,
            KEY_END_SESSION: self.session_ending,
        }
        command = commands.get(symbol)
        if command is None:
            return False
        command()
        return True

    # --- Pointer events ---

    def hover_updated(self, world_pos: Position) -> Optional[Node]:
        """Recompute the hovered node for the current pointer position."""
        if self._session_ended:
            return self._hovered
        self._pointer = world_pos
        hovered = self.store.hit_test(world_pos)
        if hovered != self._hovered:
            self._hovered = hovered
            self._notify_change()
        return hovered

    def pointer_clicked(self, world_pos: Position) -> InteractionState:
        """
        Apply a click in world coordinates to the current mode.

        Edge and path modes act on the hovered node; adding and removing
        nodes use the click position itself.
        """
        if self._session_ended:
            return self._state

        state = self._state
        if isinstance(state, AddNode):
            self._click_add_node(state, world_pos)
        elif isinstance(state, RemoveNode):
            self._click_remove_node(world_pos)
        elif isinstance(state, (AddEdge, RemoveEdge)):
            self._click_edge_endpoint(state)
        elif isinstance(state, FindPath):
            self._click_path_endpoint(state)
        return self._state

    def _click_add_node(self, state: AddNode, world_pos: Position):
        if not self._inside_canvas(world_pos):
            return
        node = self.store.add_node(world_pos, state.category)
        logger.info(f"Added {node.category.value} node at {node.position}")
        self._refresh_hover()
        self._set_state(Idle())

    def _click_remove_node(self, world_pos: Position):
        node = self.store.hit_test(world_pos)
        if node is None:
            return
        self.store.remove_node(node)
        logger.info(f"Removed {node.category.value} node at {node.position}")
        self._refresh_hover()
        self._set_state(Idle())

    def _click_edge_endpoint(self, state):
        target = self._hovered
        if target is None:
            return
        if state.pending_first is None:
            self._set_state(type(state)(pending_first=target.handle))
            return

        first = self.store.get(state.pending_first)
        if first is None:
            self._set_state(type(state)())
            return

        if isinstance(state, AddEdge):
            self.store.add_edge(first, target)
            logger.info(f"Added edge {first.position} <-> {target.position}")
        elif self.store.remove_edge(first, target):
            logger.info(f"Removed edge {first.position} <-> {target.position}")
        self._set_state(Idle())

    def _click_path_endpoint(self, state: FindPath):
        target = self._hovered
        if target is None or not target.is_destination:
            return
        if state.pending_first is None:
            self._set_state(FindPath(pending_first=target.handle))
            return
        if target.handle == state.pending_first:
            return

        path = shortest_path(self.store, state.pending_first, target)
        if path:
            logger.info(f"Found path with {len(path)} node(s), length {path_length(path):.1f}")
        self._path = path
        self._set_state(Idle())

    # --- Session ---

    def session_ending(self) -> None:
        """Persist the graph and stop accepting input."""
        if self._session_ended:
            return
        if self.persistence is not None:
            try:
                self.persistence.save(self.store)
            except OSError as e:
                logger.error(f"Failed to save graph: {e}")
        self._session_ended = True
        self._enter(Idle())

    # --- Output ---

    @property
    def status(self) -> str:
        state = self._state
        if self._session_ended:
            return STATUS_SESSION_ENDED
        if isinstance(state, Idle):
            if state.chooser_open:
                return STATUS_CHOOSE_CATEGORY
            if self._path is not None:
                return STATUS_PATH_FOUND if self._path else STATUS_NO_PATH
            return STATUS_IDLE
        if isinstance(state, AddNode):
            if state.category is NodeCategory.DESTINATION:
                return STATUS_ADD_DESTINATION
            return STATUS_ADD_ROAD
        if isinstance(state, RemoveNode):
            return STATUS_REMOVE_NODE

        first, second = {
            AddEdge: (STATUS_ADD_EDGE_FIRST, STATUS_ADD_EDGE_SECOND),
            RemoveEdge: (STATUS_REMOVE_EDGE_FIRST, STATUS_REMOVE_EDGE_SECOND),
            FindPath: (STATUS_FIND_PATH_FIRST, STATUS_FIND_PATH_SECOND),
        }[type(state)]
        return first if state.pending_first is None else second

    def snapshot(self) -> EditorSnapshot:
        path = self.path
        return EditorSnapshot(
            mode=type(self._state).__name__,
            status=self.status,
            nodes=self.store.nodes(),
            edges=self.store.edge_segments(),
            path=path,
            path_length=path_length(path),
            no_path=self._path == [],
            hovered=self._hovered,
            pending=self.pending,
            chooser_open=isinstance(self._state, Idle) and self._state.chooser_open,
        )

    # --- Internals ---

    def _toggle(self, mode_cls) -> InteractionState:
        if isinstance(self._state, mode_cls):
            return self._enter(Idle())
        return self._enter(mode_cls())

    def _enter(self, state: InteractionState) -> InteractionState:
        """Switch modes, dropping sub-selections and the retained path."""
        self._path = None
        return self._set_state(state)

    def _set_state(self, state: InteractionState) -> InteractionState:
        self._state = state
        self._notify_change()
        return state

    def _inside_canvas(self, world_pos: Position) -> bool:
        x, y = world_pos
        return 0 <= x <= self.canvas_width and 0 <= y <= self.canvas_height

    def _refresh_hover(self):
        self._hovered = self.store.hit_test(self._pointer) if self._pointer is not None else None

    def _notify_change(self):
        if self._on_state_change:
            self._on_state_change(self)

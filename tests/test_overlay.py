from src.edit import EditorSnapshot, MapOverlay
from src.edit.overlay import NODE_COLORS, PATH_COLOR, PENDING_COLOR, HOVER_COLOR
from src.graph_store import Node, NodeCategory


DEST = Node(0, (10.0, 20.0), NodeCategory.DESTINATION)
ROAD = Node(1, (30.5, 20.0), NodeCategory.ROAD)


def test_nodes_use_category_colors():
    svg = MapOverlay(radius=5).render(EditorSnapshot(mode='Idle', status='Idle', nodes=[DEST, ROAD]))

    assert '<circle cx="10" cy="20" r="5" fill="%s" />' % NODE_COLORS[NodeCategory.DESTINATION] in svg
    assert '<circle cx="30.5" cy="20" r="5" fill="%s" />' % NODE_COLORS[NodeCategory.ROAD] in svg


def test_edges_are_drawn_below_nodes():
    snapshot = EditorSnapshot(mode='Idle', status='Idle', nodes=[DEST, ROAD],
                              edges=[(DEST.position, ROAD.position)])
    svg = MapOverlay().render(snapshot)

    assert '<line x1="10" y1="20" x2="30.5" y2="20"' in svg
    assert svg.index('<line') < svg.index('<circle')


def test_path_polyline_is_highlighted():
    snapshot = EditorSnapshot(mode='Idle', status='Path found', nodes=[DEST, ROAD],
                              path=[DEST.position, ROAD.position])
    svg = MapOverlay().render(snapshot)

    assert 'points="10,20 30.5,20"' in svg
    assert PATH_COLOR in svg


def test_empty_path_draws_no_polyline():
    svg = MapOverlay().render(EditorSnapshot(mode='Idle', status='No path found', no_path=True))
    assert '<polyline' not in svg


def test_hover_and_pending_rings():
    snapshot = EditorSnapshot(mode='AddEdge', status='', nodes=[DEST, ROAD],
                              hovered=ROAD, pending=DEST)
    svg = MapOverlay().render(snapshot)

    assert f'stroke="{PENDING_COLOR}"' in svg
    assert f'stroke="{HOVER_COLOR}"' in svg


def test_update_without_attached_image_is_noop():
    MapOverlay().update(EditorSnapshot(mode='Idle', status='Idle'))

import pytest

from src.graph_store import GraphStore, NodeCategory


DEST = NodeCategory.DESTINATION
ROAD = NodeCategory.ROAD


@pytest.fixture
def store():
    return GraphStore()


class TestNodes:
    def test_add_node_appends_to_category_list(self, store):
        a = store.add_node((10, 10), DEST)
        r = store.add_node((20, 20), ROAD)
        b = store.add_node((30, 30), DEST)

        assert store.destinations() == [a, b]
        assert store.roads() == [r]
        assert len(store) == 3
        # Destinations come first in the combined view
        assert store.nodes() == [a, b, r]
        assert store.all_node_positions() == [(10.0, 10.0), (30.0, 30.0), (20.0, 20.0)]

    def test_coincident_positions_are_not_deduplicated(self, store):
        first = store.add_node((5, 5), ROAD)
        second = store.add_node((5, 5), ROAD)
        assert first.handle != second.handle
        assert len(store.roads()) == 2

    def test_remove_node_shifts_later_indices(self, store):
        a = store.add_node((0, 0), DEST)
        b = store.add_node((50, 0), DEST)
        c = store.add_node((100, 0), DEST)

        assert store.index_of(c) == (DEST, 2)
        assert store.remove_node(b) is True
        assert store.destinations() == [a, c]
        assert store.index_of(c) == (DEST, 1)
        assert store.index_of(b) is None

    def test_remove_unknown_node_is_noop(self, store):
        store.add_node((0, 0), DEST)
        assert store.remove_node(999) is False
        assert len(store) == 1

    def test_handles_are_not_reused(self, store):
        a = store.add_node((0, 0), DEST)
        store.remove_node(a)
        b = store.add_node((0, 0), DEST)
        assert b.handle != a.handle
        assert a not in store
        assert b in store


class TestHitTest:
    def test_hit_at_exact_position_returns_node(self, store):
        nodes = [
            store.add_node((100, 100), DEST),
            store.add_node((200, 100), ROAD),
            store.add_node((300, 100), DEST),
        ]
        for node in nodes:
            assert store.hit_test(node.position) == node

    def test_hit_within_radius(self, store):
        node = store.add_node((100, 100), ROAD)
        assert store.hit_test((103, 104)) == node  # distance 5, on the edge of the disc
        assert store.hit_test((104, 104)) is None

    def test_destination_wins_over_road_at_same_position(self, store):
        road = store.add_node((50, 50), ROAD)
        dest = store.add_node((50, 50), DEST)
        assert store.hit_test((50, 50)) == dest
        store.remove_node(dest)
        assert store.hit_test((50, 50)) == road

    def test_insertion_order_breaks_ties_within_category(self, store):
        first = store.add_node((50, 50), ROAD)
        store.add_node((52, 50), ROAD)
        assert store.hit_test((51, 50)) == first

    def test_custom_radius(self):
        store = GraphStore(hit_radius=20)
        node = store.add_node((0, 0), DEST)
        assert store.hit_test((15, 0)) == node

    def test_find_at_requires_exact_position(self, store):
        node = store.add_node((1.5, 2.5), ROAD)
        assert store.find_at((1.5, 2.5)) == node
        assert store.find_at((1.5, 2.6)) is None


class TestEdges:
    def test_add_edge_allows_parallel_edges_and_self_loops(self, store):
        a = store.add_node((0, 0), DEST)
        b = store.add_node((10, 0), ROAD)

        store.add_edge(a, b)
        store.add_edge(b, a)
        store.add_edge(a, a)
        assert len(store.edges()) == 3

    def test_add_edge_rejects_unknown_handle(self, store):
        a = store.add_node((0, 0), DEST)
        with pytest.raises(KeyError):
            store.add_edge(a, 42)

    def test_remove_edge_matches_either_direction_and_removes_first(self, store):
        a = store.add_node((0, 0), DEST)
        b = store.add_node((10, 0), ROAD)
        c = store.add_node((20, 0), ROAD)
        store.add_edge(a, b)
        store.add_edge(b, c)
        store.add_edge(a, b)

        assert store.remove_edge(b, a) is True
        assert [(e.a, e.b) for e in store.edges()] == [(b.handle, c.handle), (a.handle, b.handle)]

    def test_remove_missing_edge_is_noop(self, store):
        a = store.add_node((0, 0), DEST)
        b = store.add_node((10, 0), ROAD)
        assert store.remove_edge(a, b) is False

    def test_positions_resolve_to_nodes(self, store):
        a = store.add_node((0, 0), DEST)
        b = store.add_node((10, 0), ROAD)
        store.add_edge((0, 0), (10.0, 0.0))
        store.add_edge(a, b)

        assert store.remove_edge((10, 0), (0, 0)) is True
        assert store.remove_edge([0, 0], [10, 0]) is True
        assert store.remove_edge((0, 0), (10, 0)) is False
        assert store.get((10, 0)) == b
        assert (5, 5) not in store
        with pytest.raises(KeyError):
            store.add_edge((0, 0), (5, 5))

    def test_remove_edge_by_position_finds_coincident_node(self, store):
        store.add_node((0, 0), ROAD)
        twin = store.add_node((0, 0), ROAD)
        b = store.add_node((10, 0), DEST)
        store.add_edge(twin, b)

        assert store.remove_edge((0, 0), (10, 0)) is True
        assert store.edges() == []

    def test_remove_node_by_position(self, store):
        a = store.add_node((0, 0), DEST)
        b = store.add_node((10, 0), ROAD)
        store.add_edge(a, b)

        assert store.remove_node((10, 0)) is True
        assert store.nodes() == [a]
        assert store.edges() == []
        assert store.remove_node((10, 0)) is False

    def test_remove_node_cascades_to_incident_edges(self, store):
        a = store.add_node((0, 0), DEST)
        b = store.add_node((10, 0), ROAD)
        c = store.add_node((20, 0), DEST)
        store.add_edge(a, b)
        store.add_edge(b, c)
        store.add_edge(a, c)
        store.add_edge(b, b)

        store.remove_node(b)

        assert all(not e.touches(b.handle) for e in store.edges())
        assert store.edge_segments() == [((0.0, 0.0), (20.0, 0.0))]

    def test_cascade_keeps_edges_of_coincident_node(self, store):
        a = store.add_node((0, 0), ROAD)
        twin = store.add_node((0, 0), ROAD)
        b = store.add_node((10, 0), DEST)
        store.add_edge(twin, b)

        store.remove_node(a)

        assert len(store.edges()) == 1

    def test_clear(self, store):
        a = store.add_node((0, 0), DEST)
        store.add_edge(a, a)
        store.clear()
        assert len(store) == 0
        assert store.edges() == []

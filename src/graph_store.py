"""
Graph storage for Path Finder.

The store owns two ordered node lists (destinations and roads) and a list of
undirected edges. Every node gets an integer handle that is never reused, and
edges reference nodes by handle, so removing a node cascades to its edges by
identity instead of by coordinate equality.

Hit testing follows a fixed tie-break rule: destinations are scanned before
roads, each list in insertion order, and the first node whose disc contains
the point wins.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

Position = Tuple[float, float]

# Radius of the clickable disc around a node, in world (map pixel) units
HIT_RADIUS = 5.0


class NodeCategory(str, Enum):
    DESTINATION = 'destination'
    ROAD = 'road'


# Scan order for hit tests and lookups
CATEGORY_ORDER = (NodeCategory.DESTINATION, NodeCategory.ROAD)


@dataclass(frozen=True)
class Node:
    handle: int
    position: Position
    category: NodeCategory

    @property
    def is_destination(self) -> bool:
        return self.category is NodeCategory.DESTINATION


@dataclass(frozen=True)
class Edge:
    """Undirected edge between two node handles."""
    a: int
    b: int

    def connects(self, first: int, second: int) -> bool:
        return (self.a, self.b) in ((first, second), (second, first))

    def touches(self, handle: int) -> bool:
        return handle in (self.a, self.b)


# A node, its handle, or an exact (x, y) position resolved with find_at
NodeRef = Union[Node, int, Position]


class GraphStore:
    """Nodes and edges of the map graph, with hit testing and cascade delete."""

    def __init__(self, hit_radius: float = HIT_RADIUS):
        self.hit_radius = hit_radius
        self._lists: Dict[NodeCategory, List[Node]] = {c: [] for c in CATEGORY_ORDER}
        self._by_handle: Dict[int, Node] = {}
        self._edges: List[Edge] = []
        self._next_handle = 0

    def __len__(self) -> int:
        return len(self._by_handle)

    def __contains__(self, ref: NodeRef) -> bool:
        return self.get(ref) is not None

    # --- Nodes ---

    def add_node(self, position: Position, category: NodeCategory) -> Node:
        """Append a node to its category list. Coincident positions are allowed."""
        category = NodeCategory(category)
        node = Node(self._next_handle, (float(position[0]), float(position[1])), category)
        self._next_handle += 1
        self._lists[category].append(node)
        self._by_handle[node.handle] = node
        logger.debug(f"Added {category.value} node {node.handle} at {node.position}")
        return node

    def remove_node(self, ref: NodeRef) -> bool:
        """
        Erase a node and every edge incident to it.

        Later nodes in the same category list shift down by one index.
        A position removes the node find_at picks there. Returns False (and
        changes nothing) when ref names no node.
        """
        node = self.get(ref)
        if node is None:
            return False
        handle = node.handle
        del self._by_handle[handle]

        self._lists[node.category].remove(node)
        before = len(self._edges)
        self._edges = [e for e in self._edges if not e.touches(handle)]
        logger.debug(f"Removed node {handle} and {before - len(self._edges)} incident edge(s)")
        return True

    def get(self, ref: NodeRef) -> Optional[Node]:
        """Resolve a node, handle or exact position to a live node of this store."""
        if isinstance(ref, Node):
            return self._by_handle.get(ref.handle)
        if isinstance(ref, (tuple, list)):
            return self.find_at(ref)
        return self._by_handle.get(ref)

    def nodes(self) -> List[Node]:
        """All nodes, destinations first, each in insertion order."""
        return [node for category in CATEGORY_ORDER for node in self._lists[category]]

    def destinations(self) -> List[Node]:
        return list(self._lists[NodeCategory.DESTINATION])

    def roads(self) -> List[Node]:
        return list(self._lists[NodeCategory.ROAD])

    def all_node_positions(self) -> List[Position]:
        return [node.position for node in self.nodes()]

    def index_of(self, ref: NodeRef) -> Optional[Tuple[NodeCategory, int]]:
        """(category, index) of a node within its list; indices go stale on removal."""
        node = self.get(ref)
        if node is None:
            return None
        return node.category, self._lists[node.category].index(node)

    def hit_test(self, world_pos: Position) -> Optional[Node]:
        """First node whose hit disc contains world_pos, destinations before roads."""
        x, y = world_pos
        for node in self._iter_scan_order():
            if math.hypot(node.position[0] - x, node.position[1] - y) <= self.hit_radius:
                return node
        return None

    def find_at(self, position: Position) -> Optional[Node]:
        """First node sitting exactly at position, destinations before roads."""
        target = (float(position[0]), float(position[1]))
        for node in self._iter_scan_order():
            if node.position == target:
                return node
        return None

    def _iter_scan_order(self) -> Iterator[Node]:
        for category in CATEGORY_ORDER:
            yield from self._lists[category]

    # --- Edges ---

    def add_edge(self, first: NodeRef, second: NodeRef) -> Edge:
        """
        Append an undirected edge. Parallel edges and self-loops are kept.

        Endpoints given as positions bind to the node find_at picks there.
        Raises KeyError if either endpoint is not a node of this store.
        """
        a, b = self._handle(first), self._handle(second)
        edge = Edge(a, b)
        self._edges.append(edge)
        logger.debug(f"Added edge {a} <-> {b}")
        return edge

    def remove_edge(self, first: NodeRef, second: NodeRef) -> bool:
        """
        Remove the first edge joining the two nodes in either direction.

        Positions match every node sitting there, so an edge bound to any
        coincident node is found. Returns False when no
        edge matches.
        """
        firsts, seconds = self._handles(first), self._handles(second)
        for i, edge in enumerate(self._edges):
            if any(edge.connects(a, b) for a in firsts for b in seconds):
                del self._edges[i]
                logger.debug(f"Removed edge {edge.a} <-> {edge.b}")
                return True
        return False

    def _handle(self, ref: NodeRef) -> int:
        node = self.get(ref)
        if node is None:
            raise KeyError(f"Unknown node: {ref!r}")
        return node.handle

    def _handles(self, ref: NodeRef) -> List[int]:
        if isinstance(ref, (tuple, list)):
            target = (float(ref[0]), float(ref[1]))
            return [n.handle for n in self._iter_scan_order() if n.position == target]
        node = self.get(ref)
        return [node.handle] if node is not None else []

    def edges(self) -> List[Edge]:
        return list(self._edges)

    def edge_segments(self) -> List[Tuple[Position, Position]]:
        """Edges as (from, to) coordinate pairs, for rendering and persistence."""
        return [
            (self._by_handle[e.a].position, self._by_handle[e.b].position)
            for e in self._edges
        ]

    def clear(self) -> None:
        for nodes in self._lists.values():
            nodes.clear()
        self._by_handle.clear()
        self._edges.clear()

"""
Shortest path queries over the map graph.

Uses NetworkX to build an undirected graph keyed by node position, with each
edge weighted by the Euclidean distance between its endpoints, and runs
Dijkstra between two positions. Nodes sitting at the same coordinates share
one vertex, which is also what a save/load cycle produces, so a query gives
the same answer before and after the graph is persisted.

NetworkX pops the frontier by tentative distance with insertion order as the
tie-break and stops as soon as the goal is settled, so results are
deterministic for a given store.
"""

import logging
import math
from typing import List, Optional, Sequence

import networkx as nx

from src.graph_store import GraphStore, NodeRef, Position

logger = logging.getLogger(__name__)


def euclidean(p: Position, q: Position) -> float:
    return math.hypot(q[0] - p[0], q[1] - p[1])


def build_graph(store: GraphStore) -> nx.Graph:
    """
    Build the weighted NetworkX view of the store.

    Every node position is added, isolated ones included. Parallel edges
    collapse into one since they share the same Euclidean weight.
    """
    G = nx.Graph()
    for node in store.nodes():
        if node.position not in G:
            G.add_node(node.position, handle=node.handle, category=node.category.value)
    for p, q in store.edge_segments():
        G.add_edge(p, q, weight=euclidean(p, q))
    return G


def _vertex(store: GraphStore, ref: NodeRef) -> Optional[Position]:
    node = store.get(ref)
    return node.position if node is not None else None


def shortest_path(store: GraphStore, start: NodeRef, goal: NodeRef) -> List[Position]:
    """
    Positions along the shortest path from start to goal.

    start and goal may be nodes, handles or exact positions. Returns [start]
    when both resolve to the same position, and an empty list when the goal
    cannot be reached or either endpoint names no node.
    """
    source, target = _vertex(store, start), _vertex(store, goal)
    if source is None or target is None:
        logger.info(f"No path: unknown endpoint {start!r} or {goal!r}")
        return []

    G = build_graph(store)
    try:
        return nx.dijkstra_path(G, source, target, weight='weight')
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        logger.info(f"No path between {source} and {target}")
        return []


def shortest_path_handles(store: GraphStore, start: NodeRef, goal: NodeRef) -> List[int]:
    """
    Handles along the shortest path from start to goal, or [] if there is none.

    Each position maps back to the node find_at picks there, except the two
    ends, which keep the nodes the caller asked for.
    """
    points = shortest_path(store, start, goal)
    if not points:
        return []
    handles = [store.find_at(p).handle for p in points]
    handles[0] = store.get(start).handle
    handles[-1] = store.get(goal).handle
    return handles


def path_length(points: Sequence[Position]) -> float:
    """Total length of a polyline."""
    return sum(euclidean(p, q) for p, q in zip(points, points[1:]))

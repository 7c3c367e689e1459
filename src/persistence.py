"""
JSON persistence for the map graph.

Structure:
- db/graph.json: destinations, roads and edges, all as plain coordinates.

Handles are never written. On load every edge endpoint binds to the node
sitting exactly at that position, so coincident nodes come back sharing
their edges the same way the path engine already treats them.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from src.graph_store import GraphStore, NodeCategory, Position

logger = logging.getLogger(__name__)

DOCUMENT_KEYS = {
    'destinations': NodeCategory.DESTINATION,
    'roads': NodeCategory.ROAD,
}


class PersistenceAdapter:
    """
    Saves and restores a GraphStore as a single JSON document.

    Format:
    {
      "destinations": [[x, y], ...],
      "roads":        [[x, y], ...],
      "edges":        [[[fromX, fromY], [toX, toY]], ...]
    }

    A missing or corrupt document never fails the session: the store is
    simply left empty.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    # --- Document conversion ---

    @staticmethod
    def to_document(store: GraphStore) -> Dict[str, Any]:
        return {
            'destinations': [list(n.position) for n in store.destinations()],
            'roads': [list(n.position) for n in store.roads()],
            'edges': [[list(p), list(q)] for p, q in store.edge_segments()],
        }

    @staticmethod
    def parse_document(document: Any) -> Tuple[Dict[NodeCategory, List[Position]], List[Tuple[Position, Position]]]:
        """
        Validate a parsed JSON document.

        Missing keys count as empty lists. Raises ValueError or TypeError
        if anything present has the wrong shape.
        """
        if not isinstance(document, dict):
            raise TypeError("Graph document must be a JSON object")

        nodes = {
            category: [_point(p) for p in document.get(key) or []]
            for key, category in DOCUMENT_KEYS.items()
        }
        segments = []
        for segment in document.get('edges') or []:
            if not _is_pair(segment):
                raise ValueError(f"Expected [[x, y], [x, y]], got {segment!r}")
            segments.append((_point(segment[0]), _point(segment[1])))
        return nodes, segments

    @classmethod
    def from_document(cls, store: GraphStore, document: Any) -> int:
        """
        Populate a store from a parsed document.

        Edge endpoints are rebound to nodes by exact position (destinations
        first). Returns the number of edges dropped because an endpoint
        matched no node. The store is left untouched if the document is malformed.
        """
        nodes, segments = cls.parse_document(document)

        for category, positions in nodes.items():
            for position in positions:
                store.add_node(position, category)

        dropped = 0
        for p, q in segments:
            first, second = store.find_at(p), store.find_at(q)
            if first is None or second is None:
                logger.warning(f"Dropping edge {p} -> {q}: endpoint matches no node")
                dropped += 1
                continue
            store.add_edge(first, second)
        return dropped

    # --- File I/O ---

    def load(self, store: GraphStore) -> bool:
        """
        Replace the contents of store with the saved graph.

        Returns True if a document was applied. Absent files, malformed JSON
        and malformed entries leave the store as it was.
        """
        if not self.path.exists():
            logger.info(f"No saved graph at {self.path}, starting empty")
            return False

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
            self.parse_document(document)
        except (json.JSONDecodeError, IOError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load graph from {self.path}: {e}")
            return False

        store.clear()
        self.from_document(store, document)
        logger.info(
            f"Loaded {len(store.destinations())} destination(s), {len(store.roads())} road node(s) "
            f"and {len(store.edges())} edge(s) from {self.path}"
        )
        return True

    def save(self, store: GraphStore) -> None:
        """Write the graph document, creating parent directories as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self.to_document(store), f, indent=2)
        logger.info(f"Saved graph with {len(store)} node(s) to {self.path}")


def _is_pair(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) == 2


def _point(value: Any) -> Position:
    if not _is_pair(value):
        raise ValueError(f"Expected [x, y], got {value!r}")
    return float(value[0]), float(value[1])

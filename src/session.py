"""
Session wiring for Path Finder.

Builds the editor core from resolved settings: a GraphStore sized by the
configured hit radius, filled from the saved state file, and an
EditorStateMachine that saves back to the same file when the session ends.
"""

import logging

from src.config import Settings
from src.edit.controller import EditorStateMachine
from src.graph_store import GraphStore
from src.persistence import PersistenceAdapter

logger = logging.getLogger(__name__)


def create_editor(settings: Settings) -> EditorStateMachine:
    """
    Load the saved graph and return an editor bound to it.

    A missing or corrupt state file yields an empty graph.
    """
    store = GraphStore(hit_radius=settings.hit_radius)
    persistence = PersistenceAdapter(str(settings.state_file))
    persistence.load(store)
    logger.info(f"Editor ready with {len(store)} node(s), saving to {settings.state_file}")
    return EditorStateMachine(
        store,
        persistence=persistence,
        canvas_size=(settings.map_width, settings.map_height),
    )

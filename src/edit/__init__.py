"""
Map editing system for Path Finder.

This package provides the interactive editor on top of the map:
- EditorStateMachine: Mode state, hit detection and command dispatch
- MapOverlay: SVG rendering of editor snapshots
- edit_handlers: Event handlers for app.py integration

Usage:
    from src.edit import EditorStateMachine, MapOverlay
    from src.edit.handlers import setup_edit_handlers
"""

from src.edit.controller import EditorSnapshot, EditorStateMachine
from src.edit.handlers import setup_edit_handlers
from src.edit.overlay import MapOverlay
from src.edit.states import (
    AddEdge,
    AddNode,
    FindPath,
    Idle,
    InteractionState,
    RemoveEdge,
    RemoveNode,
)

__all__ = [
    'EditorStateMachine',
    'EditorSnapshot',
    'MapOverlay',
    'setup_edit_handlers',
    'InteractionState',
    'Idle',
    'AddNode',
    'RemoveNode',
    'AddEdge',
    'RemoveEdge',
    'FindPath',
]

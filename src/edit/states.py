"""
Interaction states of the map editor.

Each mode is its own frozen dataclass carrying only the fields that are valid
in that mode, so a half-selected edge endpoint cannot leak into path finding
and the category chooser only exists while idle.
"""

from dataclasses import dataclass
from typing import Optional, Union

from src.graph_store import NodeCategory


@dataclass(frozen=True)
class Idle:
    chooser_open: bool = False


@dataclass(frozen=True)
class AddNode:
    category: NodeCategory


@dataclass(frozen=True)
class RemoveNode:
    pass


@dataclass(frozen=True)
class AddEdge:
    pending_first: Optional[int] = None


@dataclass(frozen=True)
class RemoveEdge:
    pending_first: Optional[int] = None


@dataclass(frozen=True)
class FindPath:
    pending_first: Optional[int] = None


InteractionState = Union[Idle, AddNode, RemoveNode, AddEdge, RemoveEdge, FindPath]

# Modes whose clicks pick two existing nodes one after the other
TWO_STEP_MODES = (AddEdge, RemoveEdge, FindPath)

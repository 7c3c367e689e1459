"""
Map Overlay - SVG layer drawn over the map image.

NiceGUI's interactive_image renders SVG content in image pixel coordinates,
which are also the editor's world coordinates, so snapshot geometry is
written out without any transform.
"""

from typing import Iterable, List

from src.edit.controller import EditorSnapshot
from src.graph_store import HIT_RADIUS, Node, NodeCategory, Position

NODE_COLORS = {
    NodeCategory.DESTINATION: '#e53935',
    NodeCategory.ROAD: '#1e88e5',
}
EDGE_COLOR = '#424242'
PATH_COLOR = '#ffd700'
HOVER_COLOR = '#ffffff'
PENDING_COLOR = '#00e676'


class MapOverlay:
    """
    Renders editor snapshots as SVG and pushes them to an image element.

    The element only needs a writable `content` attribute, so tests can
    render without a running NiceGUI client.
    """

    def __init__(self, radius: float = HIT_RADIUS):
        self.radius = radius
        self._image = None

    def attach(self, image) -> None:
        self._image = image

    def update(self, snapshot: EditorSnapshot) -> None:
        if self._image is not None:
            self._image.content = self.render(snapshot)

    def render(self, snapshot: EditorSnapshot) -> str:
        parts: List[str] = []
        for p, q in snapshot.edges:
            parts.append(self._line(p, q, EDGE_COLOR, 2))
        if len(snapshot.path) > 1:
            # Gold polyline with a glow, like the consensus path highlight
            parts.append(
                f'<polyline points="{_points(snapshot.path)}" fill="none" '
                f'stroke="{PATH_COLOR}" stroke-width="4" stroke-linejoin="round" '
                f'style="filter: drop-shadow(0 0 4px {PATH_COLOR})" />'
            )
        for node in snapshot.nodes:
            parts.append(self._circle(node, NODE_COLORS[node.category]))
        if snapshot.pending is not None:
            parts.append(self._ring(snapshot.pending, PENDING_COLOR))
        if snapshot.hovered is not None:
            parts.append(self._ring(snapshot.hovered, HOVER_COLOR))
        return ''.join(parts)

    def _circle(self, node: Node, color: str) -> str:
        x, y = node.position
        return f'<circle cx="{x:g}" cy="{y:g}" r="{self.radius:g}" fill="{color}" />'

    def _ring(self, node: Node, color: str) -> str:
        x, y = node.position
        return (
            f'<circle cx="{x:g}" cy="{y:g}" r="{self.radius * 1.6:g}" fill="none" '
            f'stroke="{color}" stroke-width="2" />'
        )

    @staticmethod
    def _line(p: Position, q: Position, color: str, width: float) -> str:
        return (
            f'<line x1="{p[0]:g}" y1="{p[1]:g}" x2="{q[0]:g}" y2="{q[1]:g}" '
            f'stroke="{color}" stroke-width="{width:g}" />'
        )


def _points(path: Iterable[Position]) -> str:
    return ' '.join(f'{x:g},{y:g}' for x, y in path)

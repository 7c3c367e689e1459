"""
Edit Handlers - Event handlers for the map editor in app.py

This module turns NiceGUI mouse and keyboard events into editor commands
so the main application file only deals with layout.
"""

from typing import Any, Callable, Dict, Optional, Tuple

from src.edit.controller import EditorSnapshot, EditorStateMachine
from src.edit.overlay import MapOverlay


def normalize_mouse_payload(event: Any) -> Optional[Tuple[str, float, float]]:
    """
    Extract (type, x, y) in image coordinates from a mouse event.

    Accepts NiceGUI MouseEventArguments or a plain dict with the same keys.
    Returns None if the payload has no usable position.
    """
    if isinstance(event, dict):
        kind = event.get('type')
        x, y = event.get('image_x'), event.get('image_y')
    else:
        kind = getattr(event, 'type', None)
        x, y = getattr(event, 'image_x', None), getattr(event, 'image_y', None)

    if kind is None or x is None or y is None:
        return None
    try:
        return kind, float(x), float(y)
    except (TypeError, ValueError):
        return None


def key_symbol(event: Any) -> Optional[str]:
    """Key name of a keydown event, or None for key releases and auto-repeat."""
    action = getattr(event, 'action', None)
    if action is not None and (not action.keydown or getattr(action, 'repeat', False)):
        return None
    key = getattr(event, 'key', None)
    if key is None:
        return None
    return getattr(key, 'name', None) or str(key)


def setup_edit_handlers(
    controller: EditorStateMachine,
    overlay: MapOverlay,
    refresh_ui: Callable[[EditorSnapshot], None],
    on_session_end: Callable[[], None],
):
    """
    Set up all map editor event handlers.

    Args:
        controller: EditorStateMachine instance
        overlay: MapOverlay attached to the map image
        refresh_ui: Function receiving each new snapshot (status, chooser)
        on_session_end: Function called once the session has ended (Escape)

    Returns:
        Dict with handler functions for binding to UI events
    """

    def on_editor_change(editor: EditorStateMachine):
        """Called whenever the editor state changes - redraw."""
        snapshot = editor.snapshot()
        overlay.update(snapshot)
        refresh_ui(snapshot)

    controller.set_on_state_change(on_editor_change)

    def handle_mouse(event):
        """Hover on mouse move, command on click."""
        payload = normalize_mouse_payload(event)
        if payload is None:
            return
        kind, x, y = payload
        if kind == 'mousemove':
            controller.hover_updated((x, y))
        elif kind == 'click':
            controller.pointer_clicked((x, y))

    def handle_keyboard(event):
        symbol = key_symbol(event)
        if symbol is None or controller.session_ended:
            return
        controller.key_pressed(symbol)
        if controller.session_ended:
            on_session_end()

    def run_command(command: Callable[[], Any]) -> Callable[[], None]:
        """Wrap a controller command for a toolbar button."""
        def handler(*_):
            if not controller.session_ended:
                command()
        return handler

    def sync():
        on_editor_change(controller)

    handlers: Dict[str, Callable] = {
        'handle_mouse': handle_mouse,
        'handle_keyboard': handle_keyboard,
        'run_command': run_command,
        'sync': sync,
    }
    return handlers

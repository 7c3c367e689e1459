"""
Main NiceGUI application for Path Finder.

Shows the reference map with ui.interactive_image, forwards mouse and
keyboard events to the EditorStateMachine and draws each snapshot as an
SVG overlay. The graph is saved on Escape and when the server shuts down.
"""

from nicegui import ui, app
import logging
import sys

from dotenv import load_dotenv
load_dotenv()

from src.paths import ensure_db_dir
from src.config import get_settings
from src.edit import MapOverlay, setup_edit_handlers
from src.edit.constants import (
    KEY_ADD_EDGE,
    KEY_ADD_NODE_MENU,
    KEY_END_SESSION,
    KEY_FIND_PATH,
    KEY_REMOVE_EDGE,
    KEY_REMOVE_NODE,
)
from src.graph_store import NodeCategory
from src.session import create_editor

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
logger = logging.getLogger(__name__)

# Ensure required directories exist on startup
ensure_db_dir()

settings = get_settings()
editor = create_editor(settings)


def persist_on_shutdown():
    """Window close: save the graph unless Escape already did."""
    logger.info("Shutting down, saving graph")
    editor.session_ending()


app.on_shutdown(persist_on_shutdown)


@ui.page('/')
def main_page():
    ui.dark_mode().enable()
    ui.query('body').style('margin: 0; padding: 0;')

    if not settings.map_image.exists():
        with ui.column().classes('fixed inset-0 flex items-center justify-center bg-slate-900'):
            ui.icon('map', size='xl').classes('text-negative mb-4')
            ui.label('Map image not found').classes('text-2xl font-bold text-white')
            ui.label(str(settings.map_image)).classes('text-gray-400')
        return

    overlay = MapOverlay(radius=settings.hit_radius)
    state = {}

    def refresh_ui(snapshot):
        state['status'].text = snapshot.status
        if snapshot.path_length:
            state['status'].text += f' ({snapshot.path_length:.1f} px)'
        state['chooser'].set_visibility(snapshot.chooser_open)

    def end_session():
        ui.notify('Graph saved', type='positive', position='bottom', timeout=1000)
        app.shutdown()

    def save_and_quit():
        if editor.session_ended:
            return
        editor.session_ending()
        end_session()

    edit_handlers = setup_edit_handlers(
        controller=editor,
        overlay=overlay,
        refresh_ui=refresh_ui,
        on_session_end=end_session,
    )
    run_command = edit_handlers['run_command']

    ui.keyboard(on_key=edit_handlers['handle_keyboard'])

    # --- Layout Construction ---

    with ui.row().classes('items-center gap-2 p-2'):
        ui.button('Add node', on_click=run_command(editor.open_add_node_menu)).props('dense').tooltip(KEY_ADD_NODE_MENU)
        ui.button('Remove node', on_click=run_command(editor.toggle_remove_node)).props('dense').tooltip(KEY_REMOVE_NODE)
        ui.button('Add edge', on_click=run_command(editor.toggle_add_edge)).props('dense').tooltip(KEY_ADD_EDGE)
        ui.button('Remove edge', on_click=run_command(editor.toggle_remove_edge)).props('dense').tooltip(KEY_REMOVE_EDGE)
        ui.button('Find path', on_click=run_command(editor.toggle_find_path)).props('dense color=accent').tooltip(KEY_FIND_PATH)
        ui.button('Save & quit', on_click=save_and_quit).props('dense color=grey').tooltip(KEY_END_SESSION)

        state['chooser'] = ui.row().classes('items-center gap-1')
        with state['chooser']:
            ui.button('Destination', on_click=run_command(lambda: editor.choose_category(NodeCategory.DESTINATION))).props('dense color=red')
            ui.button('Road', on_click=run_command(lambda: editor.choose_category(NodeCategory.ROAD))).props('dense color=blue')

        state['status'] = ui.label('').classes('text-sm text-gray-300 ml-4')

    width, height = settings.display_size
    image = ui.interactive_image(
        str(settings.map_image),
        on_mouse=edit_handlers['handle_mouse'],
        events=['click', 'mousemove'],
        cross=False,
    ).style(f'width: {width}px; height: {height}px;')
    overlay.attach(image)

    edit_handlers['sync']()


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title=settings.title,
        port=settings.port,
        reload=not getattr(sys, 'frozen', False),
    )

from types import SimpleNamespace

import pytest

from src.edit import EditorStateMachine, MapOverlay, setup_edit_handlers
from src.edit.handlers import key_symbol, normalize_mouse_payload
from src.edit.states import AddEdge, FindPath, Idle
from src.graph_store import GraphStore, NodeCategory


class DummyImage:
    def __init__(self):
        self.content = ''


def mouse(kind, x, y):
    return SimpleNamespace(type=kind, image_x=x, image_y=y)


def key(name, keydown=True, repeat=False):
    return SimpleNamespace(key=SimpleNamespace(name=name),
                           action=SimpleNamespace(keydown=keydown, repeat=repeat))


@pytest.fixture
def wired():
    store = GraphStore()
    a = store.add_node((100, 100), NodeCategory.DESTINATION)
    b = store.add_node((200, 100), NodeCategory.ROAD)
    editor = EditorStateMachine(store, canvas_size=(1000, 1000))
    image = DummyImage()
    overlay = MapOverlay()
    overlay.attach(image)
    snapshots = []
    ended = []
    handlers = setup_edit_handlers(
        controller=editor,
        overlay=overlay,
        refresh_ui=snapshots.append,
        on_session_end=lambda: ended.append(True),
    )
    return SimpleNamespace(store=store, a=a, b=b, editor=editor, image=image,
                           snapshots=snapshots, ended=ended, handlers=handlers)


def test_normalize_mouse_payload_handles_event_and_dict():
    assert normalize_mouse_payload(mouse('click', 3, 4)) == ('click', 3.0, 4.0)
    assert normalize_mouse_payload({'type': 'mousemove', 'image_x': 1, 'image_y': 2}) == ('mousemove', 1.0, 2.0)
    assert normalize_mouse_payload({'type': 'click'}) is None
    assert normalize_mouse_payload(mouse('click', 'a', 4)) is None


def test_key_symbol_ignores_release_and_repeat():
    assert key_symbol(key('e')) == 'e'
    assert key_symbol(key('e', keydown=False)) is None
    assert key_symbol(key('e', repeat=True)) is None


def test_mouse_and_keys_drive_editor(wired):
    handle_keyboard = wired.handlers['handle_keyboard']
    handle_mouse = wired.handlers['handle_mouse']

    handle_keyboard(key('e'))
    assert wired.editor.state == AddEdge()

    handle_mouse(mouse('mousemove', 101, 100))
    handle_mouse(mouse('click', 101, 100))
    handle_mouse(mouse('mousemove', 200, 99))
    handle_mouse(mouse('click', 200, 99))

    assert len(wired.store.edges()) == 1
    assert wired.editor.state == Idle()
    assert '<line' in wired.image.content
    assert wired.snapshots[-1].status == wired.editor.status


def test_escape_ends_session_once(wired):
    handle_keyboard = wired.handlers['handle_keyboard']
    handle_keyboard(key('Escape'))
    handle_keyboard(key('Escape'))
    assert wired.ended == [True]
    assert wired.editor.session_ended


def test_run_command_wraps_toolbar_buttons(wired):
    toggle = wired.handlers['run_command'](wired.editor.toggle_find_path)
    toggle()
    assert wired.editor.state == FindPath()

    wired.editor.session_ending()
    toggle()
    assert wired.editor.state == Idle()


def test_sync_renders_current_snapshot(wired):
    wired.handlers['sync']()
    assert wired.image.content.count('<circle') == 2
    assert wired.snapshots[-1].nodes == [wired.a, wired.b]

import pyperclip
import pytest

from clipfix.app_logic.actions import Action
from clipfix.app_logic.state import ApplicationState
from clipfix.app_logic.state_machine import StateMachine
from clipfix.input.keys import KeyEvent
from clipfix.utils import clipboard as clipboard_module
from clipfix.utils.clipboard import (
    ClipboardError,
    ClipboardReadMiss,
    ClipboardUnavailable,
    ClipboardWriteFailure,
    PyperclipClipboard,
    open_clipboard,
)


def _raise(*_args):
    raise pyperclip.PyperclipException("no copy/paste mechanism")


@pytest.fixture
def system_clipboard(monkeypatch):
    """Replaces pyperclip's platform functions with an in-memory buffer."""
    store = {"text": ""}

    def copy(text):
        store["text"] = text

    monkeypatch.setattr(clipboard_module.pyperclip, "copy", copy)
    monkeypatch.setattr(clipboard_module.pyperclip, "paste", lambda: store["text"])
    return store


def test_error_taxonomy_messages():
    assert isinstance(ClipboardUnavailable(), ClipboardError)
    assert str(ClipboardUnavailable()).startswith("Clipboard unavailable:")
    assert str(ClipboardWriteFailure("denied")) == "Could not copy to clipboard: denied"
    assert isinstance(ClipboardReadMiss(), ClipboardError)


def test_round_trip(system_clipboard):
    port = PyperclipClipboard()

    port.set_text("hello")

    assert system_clipboard["text"] == "hello"
    assert port.get_text() == "hello"


def test_empty_clipboard_reads_as_none(system_clipboard):
    assert PyperclipClipboard().get_text() is None


def test_read_failure_is_a_read_miss(monkeypatch):
    monkeypatch.setattr(clipboard_module.pyperclip, "paste", _raise)

    with pytest.raises(ClipboardReadMiss):
        PyperclipClipboard().get_text()


def test_write_failure_is_reported(monkeypatch):
    monkeypatch.setattr(clipboard_module.pyperclip, "copy", _raise)

    with pytest.raises(ClipboardWriteFailure, match="no copy/paste mechanism"):
        PyperclipClipboard().set_text("x")


def test_open_clipboard_returns_port_when_available(system_clipboard):
    assert isinstance(open_clipboard(), PyperclipClipboard)


def test_open_clipboard_returns_none_without_mechanism(monkeypatch, caplog):
    monkeypatch.setattr(clipboard_module.pyperclip, "paste", _raise)

    assert open_clipboard() is None
    assert "No clipboard mechanism" in caplog.text


def _non_text_paste():
    return b"caf\xe9  bar".decode()


def test_non_text_content_is_a_read_miss(monkeypatch):
    monkeypatch.setattr(clipboard_module.pyperclip, "paste", _non_text_paste)

    with pytest.raises(ClipboardReadMiss, match="not text"):
        PyperclipClipboard().get_text()


def test_paste_of_non_text_content_leaves_buffer_unchanged(monkeypatch):
    monkeypatch.setattr(clipboard_module.pyperclip, "paste", _non_text_paste)
    state = ApplicationState(text="keep")
    machine = StateMachine(PyperclipClipboard(), state=state)

    machine.handle_key(KeyEvent("F2"))

    assert state.text == "keep"
    assert state.last_action is Action.PASTE_FROM_CLIPBOARD
    assert state.last_error is None


def test_open_clipboard_accepts_non_text_content(monkeypatch):
    monkeypatch.setattr(clipboard_module.pyperclip, "paste", _non_text_paste)

    assert isinstance(open_clipboard(), PyperclipClipboard)


def test_unencodable_text_is_a_write_failure(monkeypatch):
    def copy(text):
        text.encode("utf-8")

    monkeypatch.setattr(clipboard_module.pyperclip, "copy", copy)

    with pytest.raises(ClipboardWriteFailure):
        PyperclipClipboard().set_text("bad \udcff surrogate")

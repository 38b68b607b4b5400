import curses
from unittest.mock import MagicMock

import pytest

from clipfix.input.keys import KeyEvent, Modifier
from clipfix.input.terminal_events import CursesEventSource, prepare_terminal


def _source(*inputs):
    window = MagicMock()
    window.get_wch.side_effect = list(inputs)
    return CursesEventSource(window), window


TRANSLATIONS = [
    (curses.KEY_F0 + 2, KeyEvent("F2"), "f2"),
    (curses.KEY_F0 + 12, KeyEvent("F12"), "f12"),
    (curses.KEY_F0 + 14, KeyEvent("F2", Modifier.SHIFT), "shift_f2"),
    (curses.KEY_F0 + 27, KeyEvent("F3", Modifier.CONTROL), "ctrl_f3"),
    (curses.KEY_ENTER, KeyEvent("Enter"), "key_enter"),
    (curses.KEY_UP, KeyEvent("Up"), "up"),
    (curses.KEY_BTAB, KeyEvent("Tab", Modifier.SHIFT), "back_tab"),
    ("\n", KeyEvent("Enter"), "newline"),
    ("\r", KeyEvent("Enter"), "carriage_return"),
    ("\t", KeyEvent("Tab"), "tab"),
    ("\x03", KeyEvent("c", Modifier.CONTROL), "ctrl_c"),
    ("\x01", KeyEvent("a", Modifier.CONTROL), "ctrl_a"),
    ("\x7f", KeyEvent("Backspace"), "backspace"),
    ("x", KeyEvent("x"), "letter"),
    ("X", KeyEvent("X"), "capital"),
    ("é", KeyEvent("é"), "unicode"),
    (" ", KeyEvent(" "), "space"),
]


@pytest.mark.parametrize("raw,expected", [t[:2] for t in TRANSLATIONS], ids=[t[2] for t in TRANSLATIONS])
def test_translation(raw, expected):
    source, _ = _source(raw)
    assert source.next_event() == expected


@pytest.mark.parametrize("raw", [curses.KEY_RESIZE, curses.KEY_MOUSE, "\x1c"])
def test_non_key_input_is_ignored(raw):
    source, _ = _source(raw)
    assert source.next_event() is None


def test_escape_alone():
    source, window = _source("\x1b", curses.error())

    assert source.next_event() == KeyEvent("Esc")
    window.nodelay.assert_any_call(True)
    window.nodelay.assert_called_with(False)


def test_escape_prefix_is_alt():
    source, _ = _source("\x1b", "x")
    assert source.next_event() == KeyEvent("x", Modifier.ALT)


def test_escape_prefix_with_capital_is_alt_shift():
    source, _ = _source("\x1b", "X")
    assert source.next_event() == KeyEvent("x", Modifier.ALT | Modifier.SHIFT)


def test_escape_then_special_key_is_plain_escape():
    source, _ = _source("\x1b", curses.KEY_F0 + 2)
    assert source.next_event() == KeyEvent("Esc")


def test_prepare_terminal(monkeypatch):
    calls = []
    monkeypatch.setattr(curses, "raw", lambda: calls.append("raw"))
    monkeypatch.setattr(curses, "set_escdelay", lambda ms: calls.append(("escdelay", ms)), raising=False)
    monkeypatch.setattr(curses, "curs_set", MagicMock(side_effect=curses.error))
    window = MagicMock()

    prepare_terminal(window)

    window.keypad.assert_called_once_with(True)
    assert calls[0] == "raw"
    assert ("escdelay", 25) in calls

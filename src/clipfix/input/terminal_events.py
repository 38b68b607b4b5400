# src/clipfix/input/terminal_events.py

"""
Blocking key reader for a curses window.

CursesEventSource turns the raw values returned by window.get_wch() into
KeyEvents. Terminal resize and mouse reports, and any other key curses
cannot name, are returned as None so the loop can ignore them.
"""

import curses
import logging

from clipfix.input import keys
from clipfix.input.keys import KeyEvent, Modifier

logger = logging.getLogger(__name__)

ESCAPE_DELAY_MS = 25

# xterm-style terminfo numbers shifted function keys past F12:
# F13-F24 are Shift+F1-F12, F25-F36 Ctrl+F1-F12, and so on.
_FUNCTION_KEY_GROUPS = (
    Modifier.NONE,
    Modifier.SHIFT,
    Modifier.CONTROL,
    Modifier.CONTROL | Modifier.SHIFT,
    Modifier.ALT,
)

_CURSES_KEYS = {
    curses.KEY_ENTER: KeyEvent(keys.ENTER),
    curses.KEY_BACKSPACE: KeyEvent(keys.BACKSPACE),
    curses.KEY_DC: KeyEvent(keys.DELETE),
    curses.KEY_IC: KeyEvent(keys.INSERT),
    curses.KEY_UP: KeyEvent(keys.UP),
    curses.KEY_DOWN: KeyEvent(keys.DOWN),
    curses.KEY_LEFT: KeyEvent(keys.LEFT),
    curses.KEY_RIGHT: KeyEvent(keys.RIGHT),
    curses.KEY_HOME: KeyEvent(keys.HOME),
    curses.KEY_END: KeyEvent(keys.END),
    curses.KEY_PPAGE: KeyEvent(keys.PAGE_UP),
    curses.KEY_NPAGE: KeyEvent(keys.PAGE_DOWN),
    curses.KEY_BTAB: KeyEvent(keys.TAB, Modifier.SHIFT),
}

_CHARACTER_KEYS = {
    "\n": KeyEvent(keys.ENTER),
    "\r": KeyEvent(keys.ENTER),
    "\t": KeyEvent(keys.TAB),
    "\x7f": KeyEvent(keys.BACKSPACE),
    "\x08": KeyEvent(keys.BACKSPACE),
    "\x00": KeyEvent(keys.SPACE, Modifier.CONTROL),
}


def prepare_terminal(window) -> None:
    """
    Puts the curses window into the mode the event source expects.

    Raw mode delivers Ctrl+C as a key press instead of SIGINT, and keypad
    mode lets curses decode function and arrow keys.
    """
    curses.raw()
    window.keypad(True)
    if hasattr(curses, "set_escdelay"):
        curses.set_escdelay(ESCAPE_DELAY_MS)
    try:
        curses.curs_set(0)
    except curses.error:
        # Some terminals cannot hide the cursor.
        pass


def _function_key_event(number: int) -> KeyEvent | None:
    group, index = divmod(number - 1, 12)
    if group >= len(_FUNCTION_KEY_GROUPS):
        return None
    return KeyEvent(keys.function_key(index + 1), _FUNCTION_KEY_GROUPS[group])


def _character_event(char: str) -> KeyEvent | None:
    if char in _CHARACTER_KEYS:
        return _CHARACTER_KEYS[char]

    code = ord(char)
    if 1 <= code <= 26:
        return KeyEvent(chr(code + 96), Modifier.CONTROL)
    if code < 32 or code == 127:
        return None
    return KeyEvent(char)


class CursesEventSource:
    """Reads key presses from a curses window, one blocking call at a time."""

    def __init__(self, window):
        self._window = window

    def next_event(self) -> KeyEvent | None:
        key = self._window.get_wch()

        if isinstance(key, int):
            return self._special_key_event(key)
        if key == "\x1b":
            return self._escape_event()
        return _character_event(key)

    def _special_key_event(self, key: int) -> KeyEvent | None:
        if key in _CURSES_KEYS:
            return _CURSES_KEYS[key]
        number = key - curses.KEY_F0
        if 1 <= number <= 63:
            return _function_key_event(number)
        logger.debug(f"Ignoring non-key input {key}.")
        return None

    def _escape_event(self) -> KeyEvent | None:
        """Esc alone, or Alt+<char> when another character follows at once."""
        self._window.nodelay(True)
        try:
            follower = self._window.get_wch()
        except curses.error:
            return KeyEvent(keys.ESC)
        finally:
            self._window.nodelay(False)

        if not isinstance(follower, str):
            return KeyEvent(keys.ESC)

        event = _character_event(follower)
        if event is None:
            return KeyEvent(keys.ESC)

        modifiers = event.modifiers | Modifier.ALT
        code = event.code
        if len(code) == 1 and code.isalpha() and code.isupper():
            code = code.lower()
            modifiers |= Modifier.SHIFT
        return KeyEvent(code, modifiers)

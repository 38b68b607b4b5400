# src/clipfix/ui/screen.py

"""
Draws the application state onto a curses window.

The screen is a bordered "Clipboard Viewer" frame with a help line listing
the active key bindings, the text buffer, and three status lines for the
last key, last action and last error. The formatting helpers are plain
functions so they can be tested without a terminal.
"""

import curses
import logging
import re
from typing import List, Mapping

from clipfix.app_logic.actions import Action
from clipfix.app_logic.state import LastError, Snapshot
from clipfix.input.keys import KeyEvent, format_key

logger = logging.getLogger(__name__)

TITLE = "Clipboard Viewer"
DEFAULT_TIMESTAMP_FORMAT = "%H:%M:%S"
NOTHING = "-"

# C0 controls except tab, and DEL
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")

# Short verbs for the help line
_HELP_VERBS = {
    Action.PASTE_FROM_CLIPBOARD: "paste",
    Action.COPY_TO_CLIPBOARD: "copy",
    Action.REMOVE_EXTRA_SPACES: "remove extra spaces",
    Action.CLEAR_TEXT: "clear",
    Action.QUICK_FIX: "quick fix",
    Action.EXIT: "exit",
}


def help_line(keymap: Mapping[KeyEvent, Action]) -> str:
    """Builds "Press F2 to paste, ..." from the active bindings, in action order."""
    by_action = {}
    for event, action in keymap.items():
        by_action.setdefault(action, []).append(format_key(event))

    parts = []
    for action, verb in _HELP_VERBS.items():
        labels = by_action.get(action)
        if labels:
            parts.append(f"{'/'.join(labels)} to {verb}")
    if not parts:
        return ""
    return "Press " + ", ".join(parts) + "."


def _caret(match: re.Match) -> str:
    code = ord(match.group())
    return "^?" if code == 0x7f else "^" + chr(code + 64)


def describe_key(event: KeyEvent | None) -> str:
    return format_key(event) if event is not None else NOTHING


def describe_action(action: Action | None) -> str:
    return action.description if action is not None else NOTHING


def describe_error(error: LastError | None, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    if error is None:
        return NOTHING
    return f"[{error.timestamp.strftime(timestamp_format)}] {error.message}"


def printable(text: str) -> str:
    """Replaces control characters with caret notation (NUL -> ^@, DEL -> ^?)."""
    return _CONTROL_CHARS.sub(_caret, text)


def wrap_text(text: str, width: int) -> List[str]:
    """
    Splits the buffer into display rows of at most `width` characters.

    Newlines start a new row; whitespace is kept as-is. Tabs are expanded so
    that row widths match what is drawn. Other control characters are shown
    in caret notation.
    """
    if width <= 0:
        return []

    rows = []
    for line in text.expandtabs(4).splitlines() or [""]:
        line = printable(line)
        if not line:
            rows.append("")
            continue
        for start in range(0, len(line), width):
            rows.append(line[start:start + width])
    return rows


class CursesRenderer:
    """Renders snapshots to a curses window."""

    def __init__(self, window, keymap: Mapping[KeyEvent, Action],
                 timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT):
        self._window = window
        self._help = help_line(keymap)
        if not isinstance(timestamp_format, str) or not timestamp_format:
            logger.warning(f"Invalid timestamp format {timestamp_format!r}, using {DEFAULT_TIMESTAMP_FORMAT!r}.")
            timestamp_format = DEFAULT_TIMESTAMP_FORMAT
        self._timestamp_format = timestamp_format
        self._width = 0

    def _put(self, y: int, x: int, text: str, attr: int = curses.A_NORMAL):
        # Writing into the last cell or past the edge raises; a partly drawn
        # line on a tiny terminal is acceptable.
        try:
            self._window.addnstr(y, x, printable(text), max(self._width - x - 1, 0), attr)
        except curses.error:
            pass

    def render(self, snapshot: Snapshot) -> None:
        height, self._width = self._window.getmaxyx()
        self._window.erase()
        try:
            self._window.box()
        except curses.error:
            pass
        self._put(0, 2, f" {TITLE} ", curses.A_BOLD)

        status = [
            ("Last key", describe_key(snapshot.last_key)),
            ("Last action", describe_action(snapshot.last_action)),
            ("Last error", describe_error(snapshot.last_error, self._timestamp_format)),
        ]
        status_top = height - 1 - len(status)

        inner = max(self._width - 4, 1)
        row = 1
        for help_row in wrap_text(self._help, inner):
            if row >= status_top:
                break
            self._put(row, 2, help_row, curses.A_DIM)
            row += 1

        # Text panel between the help and the status lines
        if row < status_top:
            self._put(row, 2, "Text:", curses.A_BOLD)
            row += 1
        for text_row in wrap_text(snapshot.text, inner):
            if row >= status_top:
                break
            self._put(row, 2, text_row)
            row += 1

        for offset, (label, value) in enumerate(status):
            attr = curses.A_NORMAL
            if label == "Last error" and snapshot.last_error is not None:
                attr = curses.A_BOLD
            self._put(status_top + offset, 2, f"{label}: {value}", attr)

        self._window.refresh()

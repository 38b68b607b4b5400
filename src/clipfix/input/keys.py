# src/clipfix/input/keys.py

"""
Terminal-independent key model.

A KeyEvent is a (code, modifiers) pair. Codes are plain strings: named keys
use the names in NAMED_KEYS, function keys are "F1".."F24", and printable
characters are the character itself. When a modifier is held, letters are
stored lower-case so that "Ctrl+C" and "Ctrl+c" are the same key.

format_key() and parse_key() translate between events and the labels shown
in the UI and written in the config file.
"""

import enum
import re
from dataclasses import dataclass

ENTER = "Enter"
TAB = "Tab"
BACKSPACE = "Backspace"
ESC = "Esc"
DELETE = "Delete"
INSERT = "Insert"
UP = "Up"
DOWN = "Down"
LEFT = "Left"
RIGHT = "Right"
HOME = "Home"
END = "End"
PAGE_UP = "PageUp"
PAGE_DOWN = "PageDown"
SPACE = " "

NAMED_KEYS = (
    ENTER, TAB, BACKSPACE, ESC, DELETE, INSERT,
    UP, DOWN, LEFT, RIGHT, HOME, END, PAGE_UP, PAGE_DOWN,
)

MAX_FUNCTION_KEY = 24

_FUNCTION_KEY = re.compile(r"^[Ff]([1-9][0-9]?)$")

_MODIFIER_NAMES = {
    "ctrl": "CONTROL",
    "control": "CONTROL",
    "alt": "ALT",
    "meta": "ALT",
    "shift": "SHIFT",
}


class Modifier(enum.Flag):
    """Modifier keys held during a key press."""
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


# Order in which modifiers appear in labels
_LABEL_ORDER = ((Modifier.CONTROL, "Ctrl"), (Modifier.ALT, "Alt"), (Modifier.SHIFT, "Shift"))


@dataclass(frozen=True)
class KeyEvent:
    """A single key press."""
    code: str
    modifiers: Modifier = Modifier.NONE


def function_key(number: int) -> str:
    """Returns the code of function key F<number>."""
    if not 1 <= number <= MAX_FUNCTION_KEY:
        raise ValueError(f"No such function key: F{number}")
    return f"F{number}"


def format_key(event: KeyEvent) -> str:
    """
    Builds a stable, human-readable label for a key event.

    Modifiers come first in the fixed order Ctrl, Alt, Shift, joined with '+'.

    Examples:
        KeyEvent("F2") -> "F2"
        KeyEvent("c", Modifier.CONTROL) -> "Ctrl+C"
        KeyEvent(" ") -> "Space"

    Args:
        event: The key event to describe.

    Returns:
        The label.
    """
    parts = [name for flag, name in _LABEL_ORDER if flag in event.modifiers]

    code = event.code
    if code == SPACE:
        code = "Space"
    elif len(code) == 1 and parts:
        code = code.upper()
    parts.append(code)
    return "+".join(parts)


def _parse_code(key: str, modifiers: Modifier) -> str:
    lowered = key.lower()
    if lowered == "space":
        return SPACE

    for name in NAMED_KEYS:
        if lowered == name.lower():
            return name

    match = _FUNCTION_KEY.match(key)
    if match:
        return function_key(int(match.group(1)))

    if len(key) != 1:
        raise ValueError(f"Unknown key name: '{key}'")
    if modifiers and key.isalpha():
        return lowered
    return key


def parse_key(label: str) -> KeyEvent:
    """
    Parses a label such as "Ctrl+C" or "F2" back into a KeyEvent.

    Modifier names are case-insensitive; "Control" and "Meta" are accepted as
    aliases of "Ctrl" and "Alt".

    Raises:
        ValueError: If the label is empty or names an unknown key or modifier.
    """
    if not label:
        raise ValueError("Empty key label")

    # A literal '+' key is written as "+" or "<mods>++".
    if label == "+":
        prefix, key = "", "+"
    elif label.endswith("++"):
        prefix, key = label[:-2], "+"
    else:
        prefix, _, key = label.rpartition("+")
    if not key:
        raise ValueError(f"Missing key in label '{label}'")

    modifiers = Modifier.NONE
    if prefix:
        for part in prefix.split("+"):
            name = _MODIFIER_NAMES.get(part.strip().lower())
            if name is None:
                raise ValueError(f"Unknown modifier '{part}' in label '{label}'")
            modifiers |= Modifier[name]

    return KeyEvent(_parse_code(key, modifiers), modifiers)

# src/clipfix/app_logic/actions.py

"""
The action taxonomy and the key-to-action resolver.

Resolution is a pure dictionary lookup on the exact (code, modifiers) pair of
a key event, so a binding for F2 does not fire for Shift+F2. Keymaps are
built from {action name: key label} mappings, which lets the bindings be
overridden from the config file.
"""

import logging
from enum import Enum
from typing import Dict, Mapping

from clipfix.input.keys import KeyEvent, parse_key

logger = logging.getLogger(__name__)


class Action(Enum):
    """Discrete user intents, valued by their on-screen description."""
    PASTE_FROM_CLIPBOARD = "Paste from clipboard"
    REMOVE_EXTRA_SPACES = "Remove extra spaces"
    COPY_TO_CLIPBOARD = "Copy to clipboard"
    CLEAR_TEXT = "Clear text"
    QUICK_FIX = "Quick fix (paste, remove extra spaces, copy)"
    EXIT = "Exit"
    NO_OP = "No action"

    @property
    def description(self) -> str:
        return self.value


Keymap = Dict[KeyEvent, Action]

DEFAULT_BINDINGS = {
    Action.PASTE_FROM_CLIPBOARD.name: "F2",
    Action.COPY_TO_CLIPBOARD.name: "F3",
    Action.REMOVE_EXTRA_SPACES.name: "Enter",
    Action.CLEAR_TEXT.name: "F4",
    Action.QUICK_FIX.name: "F5",
    Action.EXIT.name: "Ctrl+C",
}


def build_keymap(bindings: Mapping[str, str]) -> Keymap:
    """
    Builds a keymap from an {action name: key label} mapping.

    Invalid entries are logged and skipped. If two actions share a key, the
    one listed later wins.

    Args:
        bindings: Action names (e.g. "CLEAR_TEXT") mapped to key labels
                  (e.g. "F4").

    Returns:
        A dictionary from KeyEvent to Action.
    """
    keymap: Keymap = {}
    for action_name, label in bindings.items():
        try:
            action = Action[action_name]
        except KeyError:
            logger.warning(f"Ignoring binding for unknown action '{action_name}'.")
            continue
        if action is Action.NO_OP:
            logger.warning(f"Ignoring binding for {action.name}: it cannot be bound.")
            continue

        try:
            event = parse_key(label)
        except (ValueError, AttributeError, TypeError) as e:
            logger.warning(f"Ignoring binding {action_name}={label!r}: {e}")
            continue

        previous = keymap.get(event)
        if previous is not None and previous is not action:
            logger.warning(f"Key '{label}' was bound to {previous.name}, rebinding it to {action.name}.")
        keymap[event] = action
    return keymap


def merge_bindings(overrides: Mapping[str, str] | None) -> Dict[str, str]:
    """
    Overlays user bindings on the defaults.

    An override whose label cannot be parsed is dropped so the default for
    that action stays in force. A default whose key is taken by an override
    of another action is dropped, and overrides come last in the result so
    they win in build_keymap().
    """
    user = {}
    taken = set()
    for action_name, label in (overrides or {}).items():
        try:
            taken.add(parse_key(label))
        except (ValueError, AttributeError, TypeError) as e:
            logger.warning(f"Keeping default key for {action_name}, invalid label {label!r}: {e}")
            continue
        user[action_name] = label

    merged = {}
    for action_name, label in DEFAULT_BINDINGS.items():
        if action_name in user:
            continue
        if parse_key(label) in taken:
            logger.info(f"Default key {label} of {action_name} is taken by a user binding.")
            continue
        merged[action_name] = label
    merged.update(user)
    return merged


DEFAULT_KEYMAP = build_keymap(DEFAULT_BINDINGS)


def resolve_action(event: KeyEvent, keymap: Mapping[KeyEvent, Action] = DEFAULT_KEYMAP) -> Action:
    """Maps a key event to its Action; unmapped keys resolve to NO_OP."""
    return keymap.get(event, Action.NO_OP)

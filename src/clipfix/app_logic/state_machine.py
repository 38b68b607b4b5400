# src/clipfix/app_logic/state_machine.py

"""
Defines and manages the core application state machine.

This module is the central orchestrator of ClipFix. Each cycle it reads one
key event, resolves it into an Action, runs that action's effect against the
text buffer and the clipboard, records the outcome in the application state,
and hands a snapshot to the renderer. The machine is either RUNNING or
EXITED; EXITED is final.

Clipboard failures never escape a cycle: they are logged and stored as the
"last error" shown on screen. The last error is kept until a later failure
replaces it; successful actions do not clear it.
"""

import logging
from datetime import datetime
from enum import Enum, auto
from typing import Callable, Dict, Mapping, Protocol

from clipfix.app_logic.actions import DEFAULT_KEYMAP, Action, resolve_action
from clipfix.app_logic.state import ApplicationState, LastError, Snapshot
from clipfix.input.keys import KeyEvent, format_key
from clipfix.processing.text_transform import normalize_whitespace
from clipfix.utils.clipboard import ClipboardError, ClipboardPort, ClipboardUnavailable

# Configure logging for this module
logger = logging.getLogger(__name__)


class AppStatus(Enum):
    """Enumeration for the machine's possible states."""
    RUNNING = auto()
    EXITED = auto()


class EventSource(Protocol):
    def next_event(self) -> KeyEvent | None:
        """Blocks until the next input event. None means a non-key event."""


class Renderer(Protocol):
    def render(self, snapshot: Snapshot) -> None:
        ...


class StateMachine:
    """
    Owns the application state and executes actions against it.

    The clipboard handle is injected once; None means the clipboard could not
    be acquired and stays unavailable for the whole session.
    """

    def __init__(
        self,
        clipboard: ClipboardPort | None,
        keymap: Mapping[KeyEvent, Action] = DEFAULT_KEYMAP,
        clock: Callable[[], datetime] = datetime.now,
        state: ApplicationState | None = None,
    ):
        self._clipboard = clipboard
        self._keymap = keymap
        self._clock = clock
        self._state = state if state is not None else ApplicationState()
        self._status = AppStatus.EXITED if self._state.exit else AppStatus.RUNNING

        self._effects: Dict[Action, Callable[[], None]] = {
            Action.PASTE_FROM_CLIPBOARD: self._paste_from_clipboard,
            Action.REMOVE_EXTRA_SPACES: self._remove_extra_spaces,
            Action.COPY_TO_CLIPBOARD: self._copy_to_clipboard,
            Action.CLEAR_TEXT: self._clear_text,
            Action.QUICK_FIX: self._quick_fix,
            Action.EXIT: self._request_exit,
        }

        if clipboard is None:
            logger.warning("State machine started without a clipboard.")
        logger.info("State machine initialized and ready.")

    @property
    def state(self) -> ApplicationState:
        return self._state

    @property
    def status(self) -> AppStatus:
        return self._status

    def snapshot(self) -> Snapshot:
        return self._state.snapshot()

    def _set_status(self, new_status: AppStatus):
        """Sets and logs the machine status."""
        if self._status != new_status:
            logger.info(f"State transition: {self._status.name} -> {new_status.name}")
            self._status = new_status

    # --- Cycle ---

    def handle_key(self, event: KeyEvent) -> Action:
        """
        Processes one key press: records it, resolves it and dispatches it.

        Args:
            event: The key that was pressed.

        Returns:
            The resolved action. NO_OP once the machine has exited.
        """
        if self._status is AppStatus.EXITED:
            logger.debug(f"Ignoring key {format_key(event)} after exit.")
            return Action.NO_OP

        self._state.last_key = event
        action = resolve_action(event, self._keymap)
        if action is Action.NO_OP:
            logger.debug(f"Key {format_key(event)} is not bound.")
            return action

        self.dispatch(action)
        return action

    def dispatch(self, action: Action):
        """
        Records the action as the last action, then executes its effect.

        A ClipboardError raised by the effect is stored as the last error.
        Mutations already applied by the effect are kept.
        """
        if action is Action.NO_OP or self._status is AppStatus.EXITED:
            return

        self._state.last_action = action
        logger.info(f"Dispatching action: {action.name}")
        try:
            self._effects[action]()
        except ClipboardError as e:
            self._record_error(e)

    def run(self, events: EventSource, renderer: Renderer):
        """
        Runs the main loop until an EXIT action is dispatched.

        The initial state is rendered first. Afterwards every key event is
        handled and the new state rendered; non-key events only trigger a
        redraw. Nothing is rendered after exit.
        """
        renderer.render(self.snapshot())
        while self._status is AppStatus.RUNNING:
            event = events.next_event()
            if event is None:
                renderer.render(self.snapshot())
                continue

            self.handle_key(event)
            if self._status is AppStatus.EXITED:
                break
            renderer.render(self.snapshot())
        logger.info("Main loop finished.")

    # --- Effects ---

    def _record_error(self, error: ClipboardError):
        message = str(error)
        logger.error(message)
        self._state.last_error = LastError(timestamp=self._clock(), message=message)

    def _paste_from_clipboard(self):
        # Any read failure is a silent miss: the buffer is left unchanged.
        if self._clipboard is None:
            logger.debug("Paste skipped: no clipboard.")
            return
        try:
            text = self._clipboard.get_text()
        except ClipboardError as e:
            logger.debug(f"Paste skipped: {e}")
            return
        if text is None:
            logger.debug("Paste skipped: clipboard holds no text.")
            return
        self._state.text = text

    def _remove_extra_spaces(self):
        self._state.text = normalize_whitespace(self._state.text)

    def _copy_to_clipboard(self):
        if self._clipboard is None:
            raise ClipboardUnavailable()
        self._clipboard.set_text(self._state.text)

    def _clear_text(self):
        self._state.text = ""

    def _quick_fix(self):
        self._paste_from_clipboard()
        self._remove_extra_spaces()
        self._copy_to_clipboard()

    def _request_exit(self):
        self._state.exit = True
        self._set_status(AppStatus.EXITED)

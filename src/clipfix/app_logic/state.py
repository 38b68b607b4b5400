# src/clipfix/app_logic/state.py

"""
The application state owned by the state machine, and the read-only snapshot
handed to the renderer each cycle.
"""

from dataclasses import dataclass
from datetime import datetime

from clipfix.app_logic.actions import Action
from clipfix.input.keys import KeyEvent


@dataclass(frozen=True)
class LastError:
    """The most recent reportable failure."""
    timestamp: datetime
    message: str


@dataclass(frozen=True)
class Snapshot:
    """An immutable view of the state for rendering."""
    text: str = ""
    last_key: KeyEvent | None = None
    last_action: Action | None = None
    last_error: LastError | None = None


@dataclass
class ApplicationState:
    """
    The single mutable record of the session.

    Only the state machine writes to it, and only while executing an action.
    """
    text: str = ""
    last_key: KeyEvent | None = None
    last_action: Action | None = None
    last_error: LastError | None = None
    exit: bool = False

    def snapshot(self) -> Snapshot:
        return Snapshot(
            text=self.text,
            last_key=self.last_key,
            last_action=self.last_action,
            last_error=self.last_error,
        )

from datetime import datetime

import pytest

from clipfix.input.keys import KeyEvent
from clipfix.utils.clipboard import ClipboardPort, ClipboardReadMiss, ClipboardWriteFailure

FIXED_TIME = datetime(2024, 5, 17, 9, 30, 15)


class FakeClipboard(ClipboardPort):
    """In-memory clipboard with switchable failures."""

    def __init__(self, text: str | None = None):
        self.text = text
        self.fail_reads = False
        self.fail_writes = False
        self.writes = []

    def get_text(self):
        if self.fail_reads:
            raise ClipboardReadMiss("read rejected")
        return self.text or None

    def set_text(self, text):
        if self.fail_writes:
            raise ClipboardWriteFailure("write rejected")
        self.writes.append(text)
        self.text = text


class ScriptedEvents:
    """Event source replaying a fixed list of events."""

    def __init__(self, events):
        self._events = list(events)
        self.reads = 0

    def next_event(self):
        self.reads += 1
        if not self._events:
            raise AssertionError("event source exhausted before exit")
        return self._events.pop(0)


class RecordingRenderer:
    def __init__(self):
        self.snapshots = []

    def render(self, snapshot):
        self.snapshots.append(snapshot)


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def clock():
    return lambda: FIXED_TIME


@pytest.fixture
def key():
    """Shorthand: key("F2") -> KeyEvent("F2")."""
    def _make(code, modifiers=None):
        if modifiers is None:
            return KeyEvent(code)
        return KeyEvent(code, modifiers)
    return _make

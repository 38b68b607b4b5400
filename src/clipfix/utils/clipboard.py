# src/clipfix/utils/clipboard.py

"""
The clipboard capability used by the state machine, built on 'pyperclip'.

This module defines the ClipboardPort interface, the error taxonomy for
clipboard operations, and a pyperclip-backed implementation. The handle is
acquired once at startup with open_clipboard(); when no clipboard mechanism
is available (e.g., headless servers, or xclip/xsel missing on Linux) the
handle is simply absent for the whole session.
"""

import logging
from abc import ABC, abstractmethod

import pyperclip

# Configure a logger for this module
logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """Base class for every clipboard failure."""


class ClipboardUnavailable(ClipboardError):
    """No clipboard handle could be acquired for this session."""

    def __init__(self, detail: str = "no clipboard mechanism was found at startup"):
        super().__init__(f"Clipboard unavailable: {detail}")


class ClipboardWriteFailure(ClipboardError):
    """The platform rejected a write to the clipboard."""

    def __init__(self, detail: str):
        super().__init__(f"Could not copy to clipboard: {detail}")


class ClipboardReadMiss(ClipboardError):
    """The clipboard holds no plain text. Never reported to the user."""

    def __init__(self, detail: str = "no text available"):
        super().__init__(f"Nothing to paste: {detail}")


class ClipboardPort(ABC):
    """
    Read/write access to plain text on the OS clipboard.

    Implementations may be a real OS binding or a test double returning
    canned results and failures.
    """

    @abstractmethod
    def get_text(self) -> str | None:
        """
        Reads the current clipboard text.

        Returns:
            The clipboard text, or None when no plain text is available.

        Raises:
            ClipboardError: If the platform read fails.
        """

    @abstractmethod
    def set_text(self, text: str) -> None:
        """
        Writes text to the clipboard.

        Raises:
            ClipboardWriteFailure: If the platform rejects the write.
        """


class PyperclipClipboard(ClipboardPort):
    """A ClipboardPort backed by pyperclip's copy/paste functions."""

    def get_text(self) -> str | None:
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            raise ClipboardReadMiss(str(e)) from e
        except UnicodeDecodeError as e:
            # The clipboard holds bytes that are not text.
            raise ClipboardReadMiss(f"clipboard content is not text ({e.reason})") from e

        # pyperclip reports an empty or non-text clipboard as "".
        if not isinstance(text, str) or not text:
            return None
        return text

    def set_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except (pyperclip.PyperclipException, UnicodeEncodeError) as e:
            raise ClipboardWriteFailure(str(e)) from e
        logger.debug(f"Copied {len(text)} characters to the system clipboard.")


def open_clipboard() -> ClipboardPort | None:
    """
    Acquires the clipboard handle for this session.

    Probes the platform clipboard once with a read. There is no retry: if the
    probe fails, the session runs without a clipboard.

    Returns:
        A ClipboardPort, or None when no clipboard mechanism is available.
    """
    try:
        pyperclip.paste()
    except pyperclip.PyperclipException as e:
        logger.warning(f"No clipboard mechanism available, clipboard actions are disabled: {e}")
        return None
    except UnicodeDecodeError:
        # A mechanism exists, it just holds non-text content right now.
        logger.info("Clipboard holds non-text content at startup.")

    logger.info("System clipboard acquired.")
    return PyperclipClipboard()

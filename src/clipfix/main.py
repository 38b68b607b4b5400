#!/usr/bin/env python3
# src/clipfix/main.py

"""
Main entry point for the ClipFix application.

This script loads the configuration, sets up logging, acquires the system
clipboard, and runs the state machine inside a curses session. curses.wrapper
restores the terminal even when the loop exits with an exception.
"""

import curses
import logging
import sys

from clipfix.app_logic.actions import build_keymap, merge_bindings
from clipfix.app_logic.state_machine import StateMachine
from clipfix.input.terminal_events import CursesEventSource, prepare_terminal
from clipfix.ui.screen import DEFAULT_TIMESTAMP_FORMAT, CursesRenderer
from clipfix.utils.clipboard import open_clipboard
from clipfix.utils.config import ConfigManager, get_config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def setup_logging(config: ConfigManager):
    """
    Configures logging for the application.

    curses owns the terminal while the app runs, so records go to a log file
    rather than stdout.
    """
    level_name = str(config.get("log_level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    unknown_level = not isinstance(level, int)
    if unknown_level:
        level = logging.INFO

    log_path = config.log_path
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Cannot create log directory {log_path.parent}: {e}", file=sys.stderr)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        filename=str(log_path),
        encoding='utf-8',
    )
    if unknown_level:
        logger.warning(f"Unknown log level '{level_name}', using INFO.")
    logger.info("ClipFix application starting...")


def main():
    """Main execution function for ClipFix."""
    config = get_config()
    setup_logging(config)

    # The clipboard is acquired once; if it is missing the session runs without it.
    clipboard = open_clipboard()
    keymap = build_keymap(merge_bindings(config.key_bindings))
    timestamp_format = config.get("timestamp_format") or DEFAULT_TIMESTAMP_FORMAT

    def run(window):
        prepare_terminal(window)
        state_machine = StateMachine(clipboard, keymap)
        state_machine.run(
            CursesEventSource(window),
            CursesRenderer(window, keymap, timestamp_format),
        )

    try:
        curses.wrapper(run)
    except Exception as e:
        logger.exception("An unhandled exception occurred in the main loop.")
        print(f"clipfix: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        logger.info("ClipFix application has shut down.")


if __name__ == '__main__':
    main()

# src/clipfix/__init__.py

"""
ClipFix: a terminal tool to view, tidy and round-trip text through the clipboard.

This package contains the key model, the action resolver, the state machine
that runs the session, the clipboard capability, and the curses front end.
"""

__version__ = "0.1.0"

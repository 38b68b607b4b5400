# src/clipfix/processing/text_transform.py

"""
Pure text transforms applied to the editing buffer.

Currently a single transform is provided: collapsing whitespace runs. It is
used both by the "remove extra spaces" action and as the middle step of the
quick-fix action.
"""

import re

# Any maximal run of whitespace (spaces, tabs, newlines, carriage returns...)
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """
    Collapses every run of whitespace characters into a single ASCII space.

    Leading and trailing runs are collapsed as well, not stripped, so
    "  a  b " becomes " a b ". The function is total and idempotent.

    Args:
        text: The string to normalize.

    Returns:
        The normalized string.
    """
    return _WHITESPACE_RUN.sub(" ", text)

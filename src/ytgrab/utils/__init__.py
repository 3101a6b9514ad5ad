"""Shared utilities — constants, typing helpers, and cross-cutting concerns.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from __future__ import annotations

import re

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE_RUN = re.compile(r"\s+")

DEFAULT_FILENAME: str = "video"


def sanitize_filename(title: str) -> str:
    """Reduce *title* to a header-safe attachment filename stem.

    Punctuation and non-ASCII characters are dropped and whitespace runs
    collapse to a single underscore, e.g. ``"Live: Foo & Bar!"`` becomes
    ``"Live_Foo_Bar"``.
    """
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", title).strip()
    cleaned = _WHITESPACE_RUN.sub("_", cleaned)
    return cleaned or DEFAULT_FILENAME


def truncate(text: str, limit: int = 100) -> str:
    """Shorten *text* for log output, marking the cut with ``...``."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."

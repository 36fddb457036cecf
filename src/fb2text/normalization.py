"""Text-run normalization applied to every character-data event."""

from __future__ import annotations

import re

_LINE_BREAK_RE = re.compile(r"[\r\n]")
_SPACE_RUN_RE = re.compile(r" {2,}")
_BLANK_CHARS = "\r\n "


def is_blank_run(text: str) -> bool:
    """Return True when *text* holds only newlines, carriage returns and spaces."""

    return not text.strip(_BLANK_CHARS)


def normalize_text_run(text: str) -> str:
    """Turn line breaks into spaces and squeeze space runs.

    Blank runs between tags carry no content and normalize to ``""``.
    Boundary spaces are kept so adjacent runs do not glue words together.
    """

    if is_blank_run(text):
        return ""
    return _SPACE_RUN_RE.sub(" ", _LINE_BREAK_RE.sub(" ", text))

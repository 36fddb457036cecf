"""Domain errors raised while opening and parsing FictionBook sources."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, eq=False)
class BookParseError(Exception):
    """Base error carrying a message and, when known, the source path."""

    message: str
    path: Path | None = None

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message} (path={self.path})"


class InputUnavailableError(BookParseError):
    """The source cannot be opened or read, or holds no FB2 document."""


class MalformedInputError(BookParseError):
    """The element stack no longer matches the document structure."""

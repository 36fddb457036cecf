"""Result structures produced by a single book parse."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Author:
    """Author name parts as found under ``title-info/author``."""

    first_name: str = ""
    last_name: str = ""
    middle_name: str = ""

    @property
    def full_name(self) -> str:
        parts = (self.first_name, self.middle_name, self.last_name)
        return " ".join(part.strip() for part in parts if part.strip())

    def to_dict(self) -> dict[str, str]:
        return {
            "first_name": self.first_name,
            "middle_name": self.middle_name,
            "last_name": self.last_name,
        }


@dataclass(slots=True)
class BookInfo:
    """Short book description read from the ``title-info`` region.

    Scalar fields keep the last value seen in the document. Authors are
    kept in document order.
    """

    authors: list[Author] = field(default_factory=list)
    title: str = ""
    sequence: str = ""
    language: str = ""
    genre: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "authors": [author.to_dict() for author in self.authors],
            "sequence": self.sequence,
            "language": self.language,
            "genre": self.genre,
        }


@dataclass(slots=True)
class ParseResult:
    """Book metadata plus the annotated output lines in document order."""

    book_info: BookInfo = field(default_factory=BookInfo)
    lines: list[str] = field(default_factory=list)

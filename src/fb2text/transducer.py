"""Single-pass fold from FB2 structural events to metadata and annotated lines.

Output lines use a small markup vocabulary for the renderer:

``{{section}}``
    starts a new section; always a line of its own.
``{{title}}``
    prefixes a title line. Consecutive title lines form one title.
``{{epi}}`` / ``{{epiauth}}``
    prefix an epigraph line and the epigraph attribution line.
``{{emon}}`` / ``{{emoff}}``
    open and close an emphasized span anywhere inside a line. Both
    ``<emphasis>`` and ``<strong>`` map to this pair.

An empty string is a blank line. Any other line is paragraph text.
"""

from __future__ import annotations

import logging
from typing import Iterable

from fb2text.config import ParseOptions
from fb2text.context import BODY, ContextStack
from fb2text.errors import MalformedInputError
from fb2text.models import Author, BookInfo, ParseResult
from fb2text.normalization import normalize_text_run
from fb2text.tokenizer import EndTag, Event, StartTag, Text

logger = logging.getLogger(__name__)

SECTION_MARKER = "{{section}}"
TITLE_MARKER = "{{title}}"
EPIGRAPH_MARKER = "{{epi}}"
EPIGRAPH_AUTHOR_MARKER = "{{epiauth}}"
EMPHASIS_ON = "{{emon}}"
EMPHASIS_OFF = "{{emoff}}"

PARAGRAPH = "p"
EMPTY_LINE = "empty-line"
SECTION = "section"
TITLE = "title"
EPIGRAPH = "epigraph"
TEXT_AUTHOR = "text-author"
SEQUENCE = "sequence"
AUTHOR = "author"
GENRE = "genre"
BOOK_TITLE = "book-title"
LANG = "lang"

EMPHASIS_TAGS = frozenset({"emphasis", "strong"})
_AUTHOR_NAME_FIELDS = {
    "first-name": "first_name",
    "middle-name": "middle_name",
    "last-name": "last_name",
}


class BookTransducer:
    """Stateful consumer of tokenizer events for exactly one document."""

    def __init__(self, options: ParseOptions | None = None) -> None:
        self._options = options or ParseOptions()
        self._stack = ContextStack()
        self._info = BookInfo()
        self._lines: list[str] = []
        self._current = ""
        self._pending_author: Author | None = None

    @property
    def book_info(self) -> BookInfo:
        return self._info

    @property
    def lines(self) -> list[str]:
        """Lines emitted so far, including after an aborted parse."""

        return list(self._lines)

    @property
    def stack(self) -> ContextStack:
        return self._stack

    def run(self, events: Iterable[Event]) -> ParseResult:
        """Consume *events* until the book is read or the stream ends."""

        for event in events:
            if self.feed(event):
                return self.result()

        if self._stack.depth:
            raise MalformedInputError(f"Unterminated element <{self._stack.top}> at end of input")
        return self.result()

    def feed(self, event: Event) -> bool:
        """Apply one event; return True once parsing should stop."""

        if isinstance(event, StartTag):
            return self._start(event)
        if isinstance(event, EndTag):
            return self._end(event.name)
        if isinstance(event, Text):
            self._current += normalize_text_run(event.data)
            return False
        raise TypeError(f"Unsupported event: {event!r}")

    def result(self) -> ParseResult:
        if not self._options.parse_body:
            return ParseResult(book_info=self._info, lines=[])
        return ParseResult(book_info=self._info, lines=list(self._lines))

    @property
    def _markers_enabled(self) -> bool:
        return not self._options.skip_system_lines

    def _start(self, event: StartTag) -> bool:
        name = event.name

        if name == BODY and not self._options.parse_body:
            logger.debug("Reached <body>, stopping metadata-only read")
            return True

        if name == EMPTY_LINE and self._markers_enabled:
            self._lines.append("")
            self._current = ""
        elif name == SECTION and self._markers_enabled:
            self._lines.append(SECTION_MARKER)
            self._current = ""
        elif name in EMPHASIS_TAGS:
            if self._markers_enabled:
                self._current += EMPHASIS_ON
        elif name == SEQUENCE:
            if "name" in event.attrs:
                self._info.sequence = event.attrs["name"]
        else:
            if name == AUTHOR and self._stack.is_in_book_info():
                self._pending_author = Author()
            self._current = self._line_seed(name)

        self._stack.push(name)
        return False

    def _line_seed(self, name: str) -> str:
        if name == TEXT_AUTHOR and self._stack.is_inside(EPIGRAPH):
            return EPIGRAPH_AUTHOR_MARKER
        if name == PARAGRAPH:
            if self._stack.is_inside(EPIGRAPH):
                return EPIGRAPH_MARKER
            if self._stack.is_inside(TITLE):
                return TITLE_MARKER
        return ""

    def _end(self, name: str) -> bool:
        self._stack.pop(name)

        if self._stack.is_in_book_info():
            self._store_metadata(name)
        elif name == BODY and self._stack.is_document_root():
            logger.debug("Main <body> closed after %d lines", len(self._lines))
            return True
        elif self._stack.is_in_book_content():
            if name in EMPHASIS_TAGS:
                if self._markers_enabled:
                    self._current += EMPHASIS_OFF
            else:
                if self._current:
                    self._lines.append(self._current)
                self._current = ""
        else:
            self._current = ""
        return False

    def _store_metadata(self, name: str) -> None:
        value = self._current
        if name == GENRE:
            self._info.genre = value
        elif name == BOOK_TITLE:
            self._info.title = value
        elif name == LANG:
            self._info.language = value
        elif name == AUTHOR:
            if self._pending_author is not None:
                self._info.authors.append(self._pending_author)
                self._pending_author = None
        elif name in _AUTHOR_NAME_FIELDS and self._stack.is_inside(AUTHOR):
            if self._pending_author is not None:
                setattr(self._pending_author, _AUTHOR_NAME_FIELDS[name], value)

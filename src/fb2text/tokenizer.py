"""Lazy structural event stream over an lxml feed parser."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import BinaryIO, Iterator, Union

from lxml import etree

from fb2text.charset import EncodingDetector, detect_encoding
from fb2text.errors import InputUnavailableError, MalformedInputError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(slots=True)
class StartTag:
    name: str
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class EndTag:
    name: str


@dataclass(slots=True)
class Text:
    data: str


Event = Union[StartTag, EndTag, Text]


def local_name(tag: str) -> str:
    """Strip an lxml ``{namespace}`` prefix from an element or attribute name."""

    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return tag


class _EventCollector:
    """lxml parser target buffering events until the reader drains them."""

    def __init__(self) -> None:
        self._events: list[Event] = []
        self._text: list[str] = []

    def _flush_text(self) -> None:
        if self._text:
            self._events.append(Text("".join(self._text)))
            self._text.clear()

    def start(self, tag, attrib) -> None:
        self._flush_text()
        attrs = {local_name(key): value for key, value in attrib.items()}
        self._events.append(StartTag(local_name(tag), attrs))

    def end(self, tag) -> None:
        self._flush_text()
        self._events.append(EndTag(local_name(tag)))

    def data(self, data) -> None:
        self._text.append(data)

    def close(self) -> None:
        self._flush_text()

    def drain(self) -> list[Event]:
        events, self._events = self._events, []
        return events


def tokenize(
    stream: BinaryIO,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    encoding_detector: EncodingDetector = detect_encoding,
) -> Iterator[Event]:
    """Yield start-tag, end-tag and text events read from *stream*.

    The stream is consumed in chunks, so a caller that stops iterating early
    leaves the rest of the document unread. Adjacent character data arrives
    as one ``Text`` event. Syntax errors surface as ``MalformedInputError``
    once every event parsed before the error has been yielded.
    """

    head = stream.read(chunk_size)
    if not head:
        raise InputUnavailableError("Document is empty")

    encoding = encoding_detector(head)
    if encoding:
        logger.debug("Parsing undeclared document as %s", encoding)

    collector = _EventCollector()
    try:
        parser = etree.XMLParser(
            target=collector,
            encoding=encoding,
            resolve_entities=False,
            no_network=True,
            load_dtd=False,
            huge_tree=False,
        )
    except LookupError as exc:
        raise InputUnavailableError(f"Unsupported document encoding: {encoding}") from exc

    chunk = head
    while chunk:
        try:
            parser.feed(chunk)
        except etree.XMLSyntaxError as exc:
            yield from collector.drain()
            raise MalformedInputError(f"Invalid FB2 markup: {exc}") from exc
        yield from collector.drain()
        chunk = stream.read(chunk_size)

    try:
        parser.close()
    except etree.XMLSyntaxError as exc:
        yield from collector.drain()
        raise MalformedInputError(f"Invalid FB2 markup: {exc}") from exc
    yield from collector.drain()

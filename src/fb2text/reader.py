"""Entry points turning an FB2 file path into a parse result."""

from __future__ import annotations

from contextlib import closing
import logging
from pathlib import Path

from fb2text.archive import READ_ERRORS, open_book_stream
from fb2text.charset import EncodingDetector, detect_encoding
from fb2text.config import ParseOptions
from fb2text.errors import InputUnavailableError, MalformedInputError
from fb2text.models import BookInfo, ParseResult
from fb2text.tokenizer import tokenize
from fb2text.transducer import BookTransducer

logger = logging.getLogger(__name__)


def parse_book(
    path: str | Path,
    options: ParseOptions | None = None,
    *,
    encoding_detector: EncodingDetector = detect_encoding,
) -> ParseResult:
    """Parse the FB2 document at *path* (raw, zipped or gzipped).

    Without ``parse_body`` the read stops at the first ``<body>`` tag, which
    is enough for the book description and avoids reading the text. A
    source that cannot be read yields an empty result; broken markup
    raises ``MalformedInputError``.
    """

    try:
        return load_book(path, options, encoding_detector=encoding_detector)
    except InputUnavailableError as exc:
        logger.warning("Book source unavailable: %s", exc)
        return ParseResult()


def load_book(
    path: str | Path,
    options: ParseOptions | None = None,
    *,
    encoding_detector: EncodingDetector = detect_encoding,
) -> ParseResult:
    """Like ``parse_book`` but raise ``InputUnavailableError`` for unreadable sources."""

    source = Path(path)
    settings = options or ParseOptions()

    try:
        return _parse_source(source, settings, encoding_detector)
    except (InputUnavailableError, MalformedInputError) as exc:
        if exc.path is None:
            exc.path = source
        raise


def read_book_info(path: str | Path, *, encoding_detector: EncodingDetector = detect_encoding) -> BookInfo:
    """Read only the book description, skipping the text body."""

    return parse_book(path, ParseOptions(), encoding_detector=encoding_detector).book_info


def _parse_source(source: Path, settings: ParseOptions, encoding_detector: EncodingDetector) -> ParseResult:
    transducer = BookTransducer(settings)
    try:
        with open_book_stream(source) as stream:
            with closing(tokenize(stream, encoding_detector=encoding_detector)) as events:
                return transducer.run(events)
    except READ_ERRORS as exc:
        raise InputUnavailableError(f"Failed to read source file: {exc}", source) from exc

"""Encoding resolution for FB2 payloads that do not declare their charset."""

from __future__ import annotations

import codecs
from functools import lru_cache
import logging
import re
from typing import Callable

from charset_normalizer import from_bytes
from lxml import etree

logger = logging.getLogger(__name__)

EncodingDetector = Callable[[bytes], str | None]

_DECLARATION_RE = re.compile(rb"^\s*<\?xml[^>]*?\bencoding\s*=\s*[\"']([A-Za-z0-9._:-]+)[\"']")
_BOMS = (codecs.BOM_UTF8, codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE, codecs.BOM_UTF32_LE, codecs.BOM_UTF32_BE)
_FALLBACK_ENCODING = "cp1251"


def declared_encoding(head: bytes) -> str | None:
    """Return the ``encoding`` pseudo-attribute of the XML declaration, if any."""

    match = _DECLARATION_RE.match(head)
    if match is None:
        return None
    return match.group(1).decode("ascii")


def _is_utf8_prefix(sample: bytes) -> bool:
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(sample, final=False)
    except UnicodeDecodeError:
        return False
    return True


@lru_cache(maxsize=64)
def supports_encoding(name: str) -> bool:
    """Return True when libxml2 can decode documents in *name*."""

    try:
        etree.XMLParser(encoding=name)
    except LookupError:
        return False
    return True


def detect_encoding(sample: bytes) -> str | None:
    """Pick an encoding override for a document starting with *sample*.

    ``None`` means lxml can decide by itself: a byte order mark, an explicit
    declaration or valid UTF-8. Anything else is guessed, Cyrillic single-byte
    encodings being the usual case for undeclared FB2 files. Guesses libxml2
    cannot decode are skipped in favour of the next candidate.
    """

    if sample.startswith(_BOMS) or declared_encoding(sample) is not None:
        return None
    if _is_utf8_prefix(sample):
        return None

    for match in from_bytes(sample):
        if not match.encoding:
            continue
        # Python codec names use underscores, libxml2 expects dashes
        name = codecs.lookup(match.encoding).name
        if supports_encoding(name):
            logger.debug("Guessed undeclared document encoding: %s", name)
            return name
        logger.debug("Skipping encoding guess unknown to libxml2: %s", name)

    logger.debug("Encoding guess inconclusive, falling back to %s", _FALLBACK_ENCODING)
    return _FALLBACK_ENCODING

"""Container sniffing and stream opening for raw, zipped and gzipped FB2."""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
import gzip
import logging
from pathlib import Path
from typing import BinaryIO, Iterator
from zipfile import BadZipFile, ZipFile
import zlib

from fb2text.errors import InputUnavailableError

logger = logging.getLogger(__name__)

_ZIP_MAGIC = b"PK\x03\x04"
_GZIP_MAGIC = b"\x1f\x8b"
_SNIFF_BYTES = 512

RAW = "raw"
ZIP = "zip"
GZIP = "gzip"

# Errors that can surface while a container is read, not only while it is opened.
READ_ERRORS: tuple[type[BaseException], ...] = (OSError, BadZipFile, EOFError, zlib.error)


def sniff_container(path: Path) -> str:
    """Classify *path* by its leading bytes, ignoring the file extension."""

    try:
        with path.open("rb") as handle:
            head = handle.read(_SNIFF_BYTES)
    except OSError as exc:
        raise InputUnavailableError(f"Failed to read source file: {exc}", path) from exc

    if head.startswith(_ZIP_MAGIC):
        return ZIP
    if head.startswith(_GZIP_MAGIC):
        return GZIP
    return RAW


def _fb2_entry_name(archive: ZipFile) -> str | None:
    for name in archive.namelist():
        if not name.endswith("/") and name.lower().endswith(".fb2"):
            return name
    return None


@contextmanager
def open_book_stream(path: str | Path) -> Iterator[BinaryIO]:
    """Yield a binary stream over the FB2 document stored at *path*.

    Zip archives contribute their first ``.fb2`` entry; other entries are
    ignored. Every handle opened here is closed when the block exits.
    """

    source = Path(path)
    container = sniff_container(source)
    logger.debug("Opening %s as %s container", source, container)

    with ExitStack() as stack:
        try:
            if container == ZIP:
                archive = stack.enter_context(ZipFile(source, "r"))
                entry = _fb2_entry_name(archive)
                if entry is None:
                    raise InputUnavailableError("Zip archive has no .fb2 entry", source)
                stream = stack.enter_context(archive.open(entry, "r"))
            elif container == GZIP:
                stream = stack.enter_context(gzip.open(source, "rb"))
            else:
                stream = stack.enter_context(source.open("rb"))
        except READ_ERRORS as exc:
            raise InputUnavailableError(f"Failed to open source file: {exc}", source) from exc

        yield stream

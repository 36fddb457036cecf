"""FictionBook metadata and annotated text extraction."""

from .config import ParseOptions
from .errors import BookParseError, InputUnavailableError, MalformedInputError
from .models import Author, BookInfo, ParseResult
from .reader import load_book, parse_book, read_book_info

__all__ = [
    "Author",
    "BookInfo",
    "BookParseError",
    "InputUnavailableError",
    "MalformedInputError",
    "ParseOptions",
    "ParseResult",
    "load_book",
    "parse_book",
    "read_book_info",
]

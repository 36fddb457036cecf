"""Open-element stack with the ancestry checks used by the transducer."""

from __future__ import annotations

from fb2text.errors import MalformedInputError

FICTION_BOOK = "FictionBook"
DESCRIPTION = "description"
TITLE_INFO = "title-info"
BODY = "body"

# Wrappers that do not end an ancestry search.
PASS_THROUGH_TAGS = frozenset({"p", "emphasis", "text-author", "strong"})

_BOOK_INFO_PREFIX = (FICTION_BOOK, DESCRIPTION, TITLE_INFO)
_BOOK_CONTENT_PREFIX = (FICTION_BOOK, BODY)


class ContextStack:
    """Names of the currently open elements, document root first."""

    def __init__(self, names: list[str] | None = None) -> None:
        self._names: list[str] = list(names or [])

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"ContextStack({self._names!r})"

    @property
    def depth(self) -> int:
        return len(self._names)

    @property
    def top(self) -> str | None:
        return self._names[-1] if self._names else None

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self._names)

    def push(self, name: str) -> None:
        self._names.append(name)

    def pop(self, name: str) -> str:
        """Close *name*, which must be the innermost open element."""

        if not self._names:
            raise MalformedInputError(f"Closing tag </{name}> without an open element")
        top = self._names[-1]
        if top != name:
            raise MalformedInputError(f"Closing tag </{name}> does not match open element <{top}>")
        return self._names.pop()

    def is_inside(self, section_name: str) -> bool:
        """Return True when *section_name* is the nearest non-wrapper ancestor.

        The walk skips paragraph, emphasis, strong and text-author wrappers and
        gives up at the first other element that is not *section_name*.
        """

        for name in reversed(self._names):
            if name == section_name:
                return True
            if name not in PASS_THROUGH_TAGS:
                return False
        return False

    def is_in_book_info(self) -> bool:
        return tuple(self._names[:3]) == _BOOK_INFO_PREFIX

    def is_in_book_content(self) -> bool:
        return tuple(self._names[:2]) == _BOOK_CONTENT_PREFIX

    def is_document_root(self) -> bool:
        return self._names == [FICTION_BOOK]

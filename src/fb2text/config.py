"""Parse options controlling how far and how verbosely a book is read."""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from typing import Mapping


PARSE_BODY = "parse-body"
SKIP_SYSTEM_LINES = "skip-system-lines"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_bool(*, name: str, raw_value: str, default: bool) -> bool:
    value = raw_value.strip().lower()
    if not value:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of: 1, true, yes, on, 0, false, no, off")


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Toggles consulted by the transducer.

    ``parse_body`` keeps reading past the description and emits body lines.
    ``skip_system_lines`` drops blank-line, section and emphasis markers.
    """

    parse_body: bool = False
    skip_system_lines: bool = False

    @classmethod
    def from_flags(cls, *flags: str) -> "ParseOptions":
        """Compose options from named toggles; order does not matter."""

        options = cls()
        for flag in flags:
            if flag == PARSE_BODY:
                options = options.with_body()
            elif flag == SKIP_SYSTEM_LINES:
                options = options.skipping_system_lines()
            else:
                raise ValueError(f"Unknown parse option: {flag!r}")
        return options

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ParseOptions":
        source: Mapping[str, str] = os.environ if environ is None else environ

        parse_body = _parse_bool(
            name="FB2TEXT_PARSE_BODY",
            raw_value=source.get("FB2TEXT_PARSE_BODY", ""),
            default=False,
        )
        skip_system_lines = _parse_bool(
            name="FB2TEXT_SKIP_SYSTEM_LINES",
            raw_value=source.get("FB2TEXT_SKIP_SYSTEM_LINES", ""),
            default=False,
        )
        return cls(parse_body=parse_body, skip_system_lines=skip_system_lines)

    def with_body(self) -> "ParseOptions":
        return replace(self, parse_body=True)

    def skipping_system_lines(self) -> "ParseOptions":
        return replace(self, skip_system_lines=True)

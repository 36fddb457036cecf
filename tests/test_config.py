from __future__ import annotations

import pytest

from fb2text.config import PARSE_BODY, SKIP_SYSTEM_LINES, ParseOptions


def test_defaults_read_metadata_only_with_markers() -> None:
    options = ParseOptions()

    assert options.parse_body is False
    assert options.skip_system_lines is False


def test_flags_compose_in_any_order() -> None:
    forward = ParseOptions.from_flags(PARSE_BODY, SKIP_SYSTEM_LINES)
    backward = ParseOptions.from_flags(SKIP_SYSTEM_LINES, PARSE_BODY)

    assert forward == backward == ParseOptions(parse_body=True, skip_system_lines=True)
    assert ParseOptions.from_flags(PARSE_BODY) == ParseOptions(parse_body=True)


def test_unknown_flag_is_rejected() -> None:
    with pytest.raises(ValueError, match="justify"):
        ParseOptions.from_flags("justify")


def test_fluent_helpers_return_new_values() -> None:
    base = ParseOptions()
    updated = base.with_body().skipping_system_lines()

    assert base == ParseOptions()
    assert updated.parse_body and updated.skip_system_lines


def test_settings_load_from_env() -> None:
    options = ParseOptions.from_env({"FB2TEXT_PARSE_BODY": "yes", "FB2TEXT_SKIP_SYSTEM_LINES": "0"})

    assert options == ParseOptions(parse_body=True, skip_system_lines=False)
    assert ParseOptions.from_env({}) == ParseOptions()
    assert ParseOptions.from_env({"FB2TEXT_PARSE_BODY": "  "}) == ParseOptions()


def test_settings_reject_invalid_env_values() -> None:
    with pytest.raises(ValueError, match="FB2TEXT_SKIP_SYSTEM_LINES"):
        ParseOptions.from_env({"FB2TEXT_SKIP_SYSTEM_LINES": "sometimes"})

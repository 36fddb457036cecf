"""CLI command printing book descriptions for a file or a folder of books."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from fb2text.errors import BookParseError
from fb2text.reader import load_book

_SUPPORTED_SUFFIXES = {".fb2", ".fbz", ".zip", ".gz"}


def _is_supported(path: Path) -> bool:
    return path.suffix.lower() in _SUPPORTED_SUFFIXES


def _collect_inputs(target: Path) -> list[Path]:
    if target.is_file():
        return [target]
    if target.is_dir():
        return sorted(path for path in target.rglob("*") if path.is_file() and _is_supported(path))
    return []


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print FB2 book descriptions as JSON")
    parser.add_argument("--path", required=True, help="Source file or directory")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for diagnostics on stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=args.log_level.upper(),
    )

    source_path = Path(args.path)

    results: list[dict[str, object]] = []
    errors: list[dict[str, str]] = []

    for file_path in _collect_inputs(source_path):
        try:
            info = load_book(file_path).book_info
        except BookParseError as exc:
            errors.append({"source_path": str(file_path), "error": str(exc)})
            continue

        results.append(
            {
                "source_path": str(file_path),
                **info.to_dict(),
                "author_names": [author.full_name for author in info.authors],
            }
        )

    payload = {
        "path": str(source_path),
        "processed": len(results),
        "results": results,
        "errors": errors,
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0 if not errors else 1


if __name__ == "__main__":
    raise SystemExit(main())

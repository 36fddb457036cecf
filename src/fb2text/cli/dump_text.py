"""CLI command dumping the annotated text lines of one book."""

from __future__ import annotations

import argparse
import json
import logging

from dotenv import load_dotenv

load_dotenv()

from fb2text.config import ParseOptions
from fb2text.errors import MalformedInputError
from fb2text.reader import parse_book


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dump FB2 text as annotated lines for a terminal renderer")
    parser.add_argument("--path", required=True, help="FB2 file, zipped or gzipped FB2")
    parser.add_argument(
        "--skip-system-lines",
        action="store_true",
        help="Drop blank-line, section and emphasis markers",
    )
    parser.add_argument("--plain", action="store_true", help="Print one output line per line instead of JSON")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for diagnostics on stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=args.log_level.upper(),
    )

    try:
        options = ParseOptions.from_env().with_body()
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        return 2
    if args.skip_system_lines:
        options = options.skipping_system_lines()

    try:
        parsed = parse_book(args.path, options)
    except MalformedInputError as exc:
        print(json.dumps({"source_path": args.path, "error": str(exc)}, ensure_ascii=False, indent=2))
        return 1

    if args.plain:
        for line in parsed.lines:
            print(line)
        return 0

    payload = {
        "source_path": args.path,
        "book_info": parsed.book_info.to_dict(),
        "line_count": len(parsed.lines),
        "lines": parsed.lines,
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

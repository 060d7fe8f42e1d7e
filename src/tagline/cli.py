"""Command-line entry point for tagline.

Usage:
    tagline --input feed.xml [--output out.xml] [--indent 4] [--verbose]

Options:
    -i, --input    Path to an XML file to format (required)
    -o, --output   Where to write the result (default: <input>_formatted.<ext>)
    --indent       Spaces per nesting level (default: 2)
    -v, --verbose  Log debug output to stderr
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from tagline import format_file
from tagline.config import FormatConfig
from tagline.errors import TaglineError
from tagline.profiling import profiled_format
from tagline.utils.logger import configure_cli_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagline",
        description="Re-indent an XML document with one tag per line",
    )
    parser.add_argument("-i", "--input", required=True, help="Path to an xml file to format")
    parser.add_argument("-o", "--output", help="Path to where the output should be stored")
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        metavar="N",
        help="Spaces per nesting level (default: 2)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.indent < 0:
        parser.error("--indent must not be negative")

    configure_cli_logging(args.verbose)

    config = FormatConfig(indent=" " * args.indent)
    try:
        with profiled_format() as metrics:
            output = format_file(args.input, args.output, config=config)
    except TaglineError as exc:
        print(f"tagline: error: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {output}")
    print(f"Time: {metrics.total_duration_ms / 1000:.3f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())

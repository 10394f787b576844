"""
cli.py - The command behind ``linehound``.

Usage:
    linehound 'timeout' logs/app.log
    linehound 'timeout' logs/ -i -j 8
    linehound 'TODO' src/ -a file
    linehound 'panic' logs/ -a boolean && echo found

Matches go to stdout; diagnostics and skipped entries go to stderr.
Exit status follows grep: 0 match, 1 no match, 2 error.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .errors import SearchError
from .formatters import describe_errors, render_lines, to_json
from .models import DEFAULT_CHUNK_SIZE, DEFAULT_WORKERS, FindAction, SearchRequest
from .search import Search

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130


def _err(msg: str) -> None:
    """Print *msg* to stderr."""
    print(msg, file=sys.stderr)


def _clamp_workers(requested: int) -> int:
    """Never more workers than cores."""
    return max(0, min(requested, os.cpu_count() or 1))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linehound",
        description="linehound: line-oriented substring search, optionally parallel",
        epilog="Examples:\n"
        "  linehound 'world' notes.txt            # Case-sensitive search\n"
        "  linehound 'world' notes.txt -i         # Case-insensitive\n"
        "  linehound 'error' logs/ -j 8           # 8 matcher threads per file\n"
        "  linehound 'error' logs/ -a file        # Names of matching files\n"
        "  linehound 'error' logs/ -a boolean     # Exit status only\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("pattern", help="Exact substring to look for")
    parser.add_argument("path", help="File or directory to search")
    parser.add_argument("-i", "--ignore-case", action="store_true", help="Case-insensitive match")
    parser.add_argument(
        "-a",
        "--action",
        default=FindAction.PRINT_LINE.value,
        help="print (matching lines), file (matching file names) or boolean (exit status only)",
    )
    parser.add_argument(
        "-c",
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Lines per batch handed to a worker (default {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument(
        "-j",
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help="Matcher threads per file, capped at the CPU count; 0 or 1 is sequential",
    )
    parser.add_argument("--json", action="store_true", help="JSON output")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log to stderr (-vv for debug)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """linehound CLI entry point. Returns the exit status."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        request = SearchRequest(
            path=args.path,
            pattern=args.pattern,
            case_insensitive=args.ignore_case,
            action=args.action,
            chunk_size=args.chunk_size,
            workers=_clamp_workers(args.workers),
        )
    except SearchError as exc:
        _err(f"linehound: {exc}")
        return EXIT_ERROR

    try:
        result = Search(request).search()
    except KeyboardInterrupt:
        _err("\nlinehound: interrupted by user")
        return EXIT_INTERRUPTED
    except SearchError as exc:
        _err(f"linehound: {exc}")
        return EXIT_ERROR

    if args.json:
        print(json.dumps(to_json(result), indent=2))
    else:
        for line in render_lines(result, request.action):
            print(line)

    for message in describe_errors(result):
        _err(f"linehound: {message}")

    if not result.complete:
        return EXIT_ERROR
    return EXIT_MATCH if result.matched else EXIT_NO_MATCH


if __name__ == "__main__":
    sys.exit(main())

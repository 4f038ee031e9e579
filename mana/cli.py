#!/usr/bin/env python3
"""
Mana: canonical S-expression text

Command-line interface for reading and reprinting mana data.

Usage:
    mana fmt [file ...]        Print every datum in canonical form
    mana check [file ...]      Verify that files read without error

With no files, standard input is read.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from mana import ManaError, __version__, read_all, write_all
from mana.log import configure_logging
from mana.reader import DEFAULT_MAX_DEPTH


# ============================================================================
# Formatting helpers
# ============================================================================

class C:
    """ANSI colors."""
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    RESET = "\033[0m"

    @staticmethod
    def off():
        C.BOLD = C.DIM = C.RED = C.GREEN = C.RESET = ""


def ok(text: str) -> str:
    return f"  {C.GREEN}✓{C.RESET} {text}"


def fail(text: str) -> str:
    return f"  {C.RED}✗{C.RESET} {text}"


def _inputs(files: list[str]) -> list[tuple[str, str]]:
    if not files:
        return [("<stdin>", sys.stdin.read())]
    return [(name, Path(name).read_text(encoding="utf-8")) for name in files]


# ============================================================================
# Commands
# ============================================================================

def cmd_fmt(args) -> int:
    """Reprint every datum in canonical form."""
    chunks = []
    for name, source in _inputs(args.files):
        try:
            data = read_all(source, max_depth=args.max_depth)
        except ManaError as e:
            print(fail(f"{name}: {e.kind}: {e}"), file=sys.stderr)
            return 1
        if data:
            chunks.append(write_all(data))

    text = "\n".join(chunks) + ("\n" if chunks else "")
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0


def cmd_check(args) -> int:
    """Report whether each input reads cleanly."""
    status = 0
    for name, source in _inputs(args.files):
        try:
            data = read_all(source, max_depth=args.max_depth)
        except ManaError as e:
            print(fail(f"{name}: {e.kind}: {e}"))
            status = 1
            continue
        print(ok(f"{name} {C.DIM}({len(data)} datum{'s' if len(data) != 1 else ''}){C.RESET}"))
    return status


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mana",
        description="Read and canonically reprint mana S-expressions",
    )
    parser.add_argument("--version", action="version", version=f"mana {__version__}")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug events to stderr")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help="Maximum nesting depth (default: unlimited)")

    sub = parser.add_subparsers(dest="command")

    # fmt
    p = sub.add_parser("fmt", help="Print data in canonical form")
    p.add_argument("files", nargs="*", help="Input files (default: stdin)")
    p.add_argument("-o", "--output", help="Output file path")

    # check
    p = sub.add_parser("check", help="Verify that inputs read cleanly")
    p.add_argument("files", nargs="*", help="Input files (default: stdin)")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else None)

    if args.no_color or not sys.stdout.isatty():
        C.off()

    commands = {
        "fmt": cmd_fmt,
        "check": cmd_check,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args)
    except FileNotFoundError as e:
        print(fail(f"File not found: {e.filename}"), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

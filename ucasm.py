#!/usr/bin/env python3
"""
ucasm — uCPU two-pass assembler CLI

Usage:
    python ucasm.py <source> <listing> <hexdump> [--verbose] [--log-file PATH]

Paths starting with "-" go after "--". Each diagnostic is logged at INFO
(shown with --verbose).

Writes the listing of the last pass run to <listing>. The hex dump
(16 rows x 16 words) is written to <hexdump> only when the source has no
syntax errors.

Exit status:
    0    hex dump written (warnings and undefined labels are reported on stderr)
    1    syntax errors, no hex dump
    2    a file could not be read or written
    -1   wrong arguments (usage printed on stdout)

Examples:
    python ucasm.py fib.uca fib.lst fib.hex
    python ucasm.py fib.uca fib.lst fib.hex -v --log-file logs/ucasm.log
    python ucasm.py -- -odd-name.uca out.lst out.hex
"""

import argparse
import logging
import os
import sys

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from ucpu_asm import __version__, assemble
from ucpu_asm.log_setup import setup_logging

EXIT_OK = 0
EXIT_SYNTAX = 1
EXIT_IO = 2
EXIT_USAGE = -1

log = logging.getLogger("ucpu_asm")


class _UsageParser(argparse.ArgumentParser):
    """Argument errors print the usage line on stdout and exit with EXIT_USAGE."""

    def error(self, message):
        self.print_usage(sys.stdout)
        self.exit(EXIT_USAGE)


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog="ucasm",
        usage="%(prog)s [-h] [-v] [--log-file PATH] [--version] [--] source listing hexdump",
        description="Two-pass assembler for the uCPU",
    )
    parser.add_argument("source", help="Assembly source file")
    parser.add_argument("listing", help="Listing output file")
    parser.add_argument("hexdump", help="Hex dump output file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log assembly progress to stderr")
    parser.add_argument("--log-file", default=None, metavar="PATH",
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"ucasm {__version__}")
    return parser


def assemble_file(source_path: str, listing_path: str, hex_path: str) -> int:
    """Assemble one file and write its outputs. Returns the exit status."""
    try:
        with open(source_path, "r", encoding="utf-8", errors="replace") as f:
            source = f.read()
    except OSError as e:
        print(f"Error: cannot read {source_path}: {e}", file=sys.stderr)
        return EXIT_IO

    result = assemble(source, source_name=source_path)
    diags = result.diagnostics

    try:
        with open(listing_path, "w", encoding="utf-8") as f:
            f.write(result.listing)
        log.debug("Wrote listing: %s", listing_path)
        for diag in diags.records:
            log.info("%s", diag)

        if not result.ok:
            print(diags.summary(), file=sys.stderr)
            return EXIT_SYNTAX

        if diags.has_findings:
            print(diags.summary(), file=sys.stderr)

        result.image.write(hex_path)
        log.debug("Wrote hex dump: %s", hex_path)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO

    return EXIT_OK


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )
    log.debug("Input:   %s", args.source)
    log.debug("Listing: %s", args.listing)
    log.debug("Hexdump: %s", args.hexdump)

    return assemble_file(args.source, args.listing, args.hexdump)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Command-line interface for dupscan.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .comparator import get_warning_summary
from .config import DEFAULT_BUFFER_SCHEDULE, OUTPUT_FORMATS, ScanConfig, parse_buffer_schedule
from .errors import ConfigError, InvalidArguments, ScanError
from .formatter import compute_stats, format_json_report, format_report
from .grouper import find_duplicate_groups
from .index import SizeIndex, dump_index
from .scanner import scan_directory

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises InvalidArguments instead of exiting."""

    def error(self, message):
        raise InvalidArguments(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="dupscan",
        description="Find byte-for-byte identical files under a directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Root directory to scan for duplicates",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )
    parser.add_argument(
        "--buffer-schedule",
        type=str,
        default=None,
        help="Comma-separated read sizes for comparison passes "
             f"(default: {','.join(str(size) for size in DEFAULT_BUFFER_SCHEDULE)})",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable progress bars",
    )
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Raises:
        InvalidArguments: on a missing or extra positional argument or a bad option
    """
    return build_parser().parse_args(argv)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(message)s')
    elif quiet:
        logging.basicConfig(level=logging.ERROR, format='%(message)s')
    else:
        logging.basicConfig(level=logging.INFO, format='%(message)s')


def _write_paths_as_bytes(stream) -> None:
    """
    Let a text stream write undecodable filename bytes back unchanged.

    Names that are not valid in the filesystem encoding come back from
    os.scandir as surrogate escapes; strict encoding would fail on them.
    """
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="surrogateescape")


def _print_warning_summary() -> None:
    warning_summary = get_warning_summary()
    if sum(warning_summary.values()) > 0:
        print("\nComparison warnings summary:", file=sys.stderr)
        for warning_type, count in warning_summary.items():
            if count > 0:
                warning_name = warning_type.replace('_', ' ').title()
                print(f"  - {warning_name}: {count} files", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    try:
        args = parse_arguments(argv)
    except InvalidArguments as e:
        parser = build_parser()
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        sys.exit(1)

    # Validate conflicting flags
    if args.verbose and args.quiet:
        print("Error: Cannot use both --verbose and --quiet flags", file=sys.stderr)
        sys.exit(1)

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        config = ScanConfig(
            buffer_schedule=(parse_buffer_schedule(args.buffer_schedule)
                             if args.buffer_schedule is not None else DEFAULT_BUFFER_SCHEDULE),
            show_progress=not (args.quiet or args.no_progress),
            output_format=args.output,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    exit_code = 0
    try:
        index = scan_directory(args.path, show_progress=config.show_progress).index
    except ScanError as e:
        # The empty report is still printed
        print(f"Error: {e}", file=sys.stderr)
        index = SizeIndex()
        exit_code = 1

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(dump_index(index))

    groups = find_duplicate_groups(index, config=config, show_progress=config.show_progress)
    stats = compute_stats(index)

    if config.output_format == "json":
        print(format_json_report(groups, stats))
    else:
        _write_paths_as_bytes(sys.stdout)
        print(format_report(groups, stats), end="")

    if not args.quiet and config.output_format != "json":
        _print_warning_summary()

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()

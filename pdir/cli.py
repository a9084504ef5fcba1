"""Command-line front door for pdir.

Parses options, merges them over the persisted defaults, and runs one
traversal session over the FILE arguments.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from collections.abc import Sequence

from .about import COPYRIGHT_YEAR, PROGRAM_AUTHOR, PROGRAM_NAME, PROGRAM_VERSION
from .config import load_listing_defaults
from .debug import configure_debug_logging, debug_requested
from .errors import AllocationError, CommandLineError
from .listing import list_paths
from .listing.types import (
    TIME_ATIME,
    TIME_CTIME,
    TIME_MTIME,
    VISIBILITY_ALL,
    VISIBILITY_ALMOST_ALL,
    ListingOptions,
)

TIME_WORDS = {
    "atime": TIME_ATIME,
    "access": TIME_ATIME,
    "use": TIME_ATIME,
    "ctime": TIME_CTIME,
    "status": TIME_CTIME,
    "mtime": TIME_MTIME,
    "modification": TIME_MTIME,
}


class _ArgumentParser(argparse.ArgumentParser):
    """argparse parser that reports misuse as ``CommandLineError``."""

    def error(self, message: str):
        raise CommandLineError(message)


def _time_word(value: str) -> str:
    """argparse type for ``--time`` words."""
    try:
        return TIME_WORDS[value]
    except KeyError as exc:
        choices = ", ".join(sorted(TIME_WORDS))
        raise argparse.ArgumentTypeError(f"invalid argument {value!r} (choose from {choices})") from exc


def version_text() -> str:
    return (
        f"{PROGRAM_NAME} {PROGRAM_VERSION}\n"
        f"Copyright (C) {COPYRIGHT_YEAR} {PROGRAM_AUTHOR}\n"
        "This is free software: you are free to change and redistribute it.\n"
        "There is NO WARRANTY, to the extent permitted by law."
    )


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROGRAM_NAME,
        usage="%(prog)s [OPTION]... [FILE]...",
        description=(
            "List information about the FILEs (the current directory by default). "
            "Directories come first, then files, each sorted by name."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Files or directories to list.")
    parser.add_argument(
        "-a",
        "--all",
        dest="visibility",
        action="store_const",
        const=VISIBILITY_ALL,
        help="Do not ignore entries starting with '.'.",
    )
    parser.add_argument(
        "-A",
        "--almost-all",
        dest="visibility",
        action="store_const",
        const=VISIBILITY_ALMOST_ALL,
        help="Do not list implied '.' and '..'.",
    )
    parser.add_argument(
        "-l",
        dest="long_format",
        action="store_const",
        const=True,
        help="Use a long listing format.",
    )
    parser.add_argument(
        "-c",
        dest="time_source",
        action="store_const",
        const=TIME_CTIME,
        help="With -l: show time of last status change.",
    )
    parser.add_argument(
        "-u",
        dest="time_source",
        action="store_const",
        const=TIME_ATIME,
        help="With -l: show time of last access.",
    )
    parser.add_argument(
        "--time",
        dest="time_source",
        type=_time_word,
        metavar="WORD",
        help="With -l: show time as WORD instead of modification time (atime, ctime, mtime).",
    )
    parser.add_argument("--help", action="help", help="Display this help and exit.")
    parser.add_argument(
        "--version",
        action="version",
        version=version_text(),
        help="Output version information and exit.",
    )
    return parser


def resolve_options(args: argparse.Namespace, defaults: ListingOptions) -> ListingOptions:
    """Overlay options given on the command line onto ``defaults``."""
    overrides = {
        key: value
        for key, value in (
            ("visibility", args.visibility),
            ("long_format", args.long_format),
            ("time_source", args.time_source),
        )
        if value is not None
    }
    return dataclasses.replace(defaults, **overrides)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, list every FILE, and exit with the run's status.

    ``argv`` is primarily for tests; when omitted ``sys.argv[1:]`` is used.
    Exits 0 on success and with the first failure status otherwise.
    """
    configure_debug_logging(debug_requested())
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except CommandLineError as exc:
        parser.print_usage(sys.stderr)
        sys.stderr.write(f"{PROGRAM_NAME}: {exc}\n")
        sys.stderr.write(f"Try '{PROGRAM_NAME} --help' for more information.\n")
        raise SystemExit(exc.exit_status) from None

    options = resolve_options(args, load_listing_defaults())
    try:
        status = list_paths(args.files, options)
    except AllocationError as exc:
        sys.stdout.flush()
        sys.stderr.write(f"{PROGRAM_NAME}: {exc}\n")
        raise SystemExit(exc.exit_status) from None

    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()

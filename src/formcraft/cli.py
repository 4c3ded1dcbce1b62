"""
Command-line entry point.

Usage:
    formcraft [--data-dir DIR] [--verbose] list
    formcraft [--data-dir DIR] demo
    formcraft [--data-dir DIR] reset --yes
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from formcraft import __version__
from formcraft.config import StoreConfig
from formcraft.demo import create_demo_library
from formcraft.stores.session import StoreSession

logger = logging.getLogger(__name__)


def _cmd_list(session: StoreSession, args: argparse.Namespace) -> int:
    libraries = session.libraries.libraries_by_recency()
    current_id = session.libraries.current_library_id
    print(f"Libraries ({len(libraries)}):")
    for library in libraries:
        marker = "*" if library.id == current_id else " "
        print(
            f" {marker} {library.name}  [{len(library.sections)} sections, "
            f"{library.question_count} questions]  {library.id}"
        )
    for label, items in (("Headers", session.headers_footers.headers),
                         ("Footers", session.headers_footers.footers)):
        print(f"{label} ({len(items)}):")
        for item in items:
            print(f"   {item.name}  {item.id}")
    return 0


def _cmd_demo(session: StoreSession, args: argparse.Namespace) -> int:
    library = create_demo_library(session.libraries)
    if library is None:
        print("Failed to create demo library", file=sys.stderr)
        return 1
    print(f"Created {library.name!r} with {library.question_count} questions ({library.id})")
    return 0


def _cmd_reset(session: StoreSession, args: argparse.Namespace) -> int:
    if not args.yes:
        print("Refusing to reset without --yes", file=sys.stderr)
        return 2
    session.reset()
    print(f"Cleared stores in {session.config.data_dir}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formcraft",
        description="Inspect and maintain FormCraft question libraries",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the store slots (default: platform app data)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List libraries, headers and footers")
    list_parser.set_defaults(handler=_cmd_list)

    demo_parser = subparsers.add_parser("demo", help="Create the all-question-types demo library")
    demo_parser.set_defaults(handler=_cmd_demo)

    reset_parser = subparsers.add_parser("reset", help="Delete every library, header and footer")
    reset_parser.add_argument("--yes", action="store_true", help="Confirm the reset")
    reset_parser.set_defaults(handler=_cmd_reset)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    with StoreSession(StoreConfig.default(args.data_dir)) as session:
        for slot, error in session.load_errors.items():
            logger.warning(f"{slot}: {error}")
        return args.handler(session, args)


if __name__ == "__main__":
    raise SystemExit(main())

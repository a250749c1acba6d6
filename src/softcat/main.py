#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from softcat.app import (
    add_source,
    import_from_source,
    list_catalog,
    list_sources,
    refresh_catalog,
    show_software,
)
from softcat.config import configure_logging
from softcat.domain.model import SourceKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from softcat.domain.catalog import SoftwareView


def _parse_kind(value: str) -> SourceKind:
    for kind in SourceKind:
        if kind.value.lower() == value.strip().lower():
            return kind
    choices = ", ".join(kind.value for kind in SourceKind)
    raise argparse.ArgumentTypeError(f"unknown source kind {value!r} (choose from {choices})")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="softcat", description="Catalog of software enriched from external providers"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    commands = parser.add_subparsers(dest="command", required=True)

    source = commands.add_parser("source", help="Manage data sources")
    source_commands = source.add_subparsers(dest="source_command", required=True)
    add = source_commands.add_parser("add", help="Register a data source")
    add.add_argument("slug", help="Unique source name, e.g. wikidata")
    add.add_argument("--kind", type=_parse_kind, required=True, help="Provider kind")
    add.add_argument("--url", required=True, help="Provider base URL")
    add.add_argument(
        "--priority",
        type=int,
        required=True,
        help="Precedence; lower values win when sources disagree",
    )
    add.add_argument("--description", help="Free-form description")
    source_commands.add_parser("list", help="List data sources by precedence")

    refresh = commands.add_parser("refresh", help="Re-fetch stale external records")
    refresh.add_argument(
        "--staleness-minutes",
        type=int,
        help="Only re-fetch records older than this many minutes (default: all records)",
    )

    import_ = commands.add_parser("import", help="Register software fetched from a source")
    import_.add_argument("source", help="Source slug")
    import_.add_argument("external_ids", nargs="+", help="Identifiers at the source")

    show = commands.add_parser("show", help="Show one software with its fused external data")
    show.add_argument("software_id", type=UUID, help="Software UUID")

    list_ = commands.add_parser("list", help="List the catalog")
    list_.add_argument("--all", action="store_true", help="Include dereferenced software")

    return parser.parse_args(list(argv))


def _print_view(view: SoftwareView) -> None:
    print(f"{view.name} ({view.id})")
    external = view.external_data
    description = (external.description if external else None) or view.description
    if description:
        print(f"  description: {description}")
    if view.license:
        print(f"  license: {view.license}")
    if view.logo_url:
        print(f"  logo: {view.logo_url}")
    if view.software_type is not None:
        print(f"  type: {view.software_type.kind}")
    if view.dereferencing is not None:
        print(f"  dereferenced: {view.dereferencing.reason}")
    if external is not None:
        for name, value in (
            ("website", external.website_url),
            ("repository", external.source_url),
            ("version", external.software_version),
        ):
            if value:
                print(f"  {name}: {value}")
        if external.developers:
            print(f"  developers: {', '.join(dev.name for dev in external.developers)}")
    if view.application_categories:
        print(f"  categories: {', '.join(view.application_categories)}")
    for similar in view.similar_software:
        marker = "*" if similar.registered else "-"
        label = similar.software_name or similar.label or similar.external_id
        print(f"  {marker} similar: {label} [{similar.source_slug}:{similar.external_id}]")


def _run(args: argparse.Namespace) -> int:
    match args.command:
        case "source" if args.source_command == "add":
            created = add_source(
                args.slug,
                kind=args.kind,
                url=args.url,
                priority=args.priority,
                description=args.description,
            )
            print(f"Source {args.slug} {'registered' if created else 'already registered'}")
        case "source":
            for source in list_sources():
                print(f"{source.priority:>4}  {source.slug:<16} {source.kind:<9} {source.url}")
        case "refresh":
            result = refresh_catalog(staleness_minutes=args.staleness_minutes)
            print(
                f"{result.candidates} due, {result.refreshed} refreshed, "
                f"{result.not_found} not found, {result.failed} failed"
            )
            return 1 if result.failed else 0
        case "import":
            for software_id in import_from_source(args.source, args.external_ids):
                print(software_id)
        case "show":
            view = show_software(args.software_id)
            if view is None:
                print(f"Error: no software {args.software_id}", file=sys.stderr)
                return 1
            _print_view(view)
        case "list":
            for view in list_catalog(include_dereferenced=args.all):
                print(f"{view.id}  {view.name}")
        case _:
            raise ValueError(f"Unknown command {args.command!r}")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        status = _run(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if status:
        sys.exit(status)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load `.env`, trap Ctrl+C, then run the CLI."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

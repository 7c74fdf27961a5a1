"""
IDX Screener Command Line Interface.

Usage:
    idx-screener --help
    idx-screener info
    idx-screener --snapshot data/snapshot.json validate
    idx-screener screen --preset strong-buy --sort score --limit 20
    idx-screener screen --sector Energy --action BUY --action HOLD --asc --sort pbv
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from . import __version__


def _settings(args):
    from .settings import load_settings

    settings = load_settings(args.config)
    if getattr(args, "snapshot", None):
        settings = replace(settings, snapshot_path=args.snapshot)
    return settings


def _configure_logging(settings, verbose: bool) -> None:
    from .observability import configure_logging

    configure_logging(
        "DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )


def cmd_info(args) -> None:
    """Show package information."""
    from .common import SortField
    from .engines import preset_catalog

    settings = _settings(args)

    print(f"IDX Screener v{__version__}")
    print(f"\nEnvironment: {settings.environment}")
    print(f"Snapshot Path: {settings.snapshot_file}")
    print(f"Snapshot Exists: {settings.snapshot_file.exists()}")
    print(f"\nPresets ({len(preset_catalog())}):")
    for preset in preset_catalog():
        print(f"  - {preset['id']}: {preset['label']} ({preset['description']})")
    print(f"\nSort Fields: {', '.join(field.value for field in SortField)}")


def cmd_validate(args) -> None:
    """Check that the snapshot loads."""
    from .engines import SnapshotFetchError
    from .snapshot import open_store

    settings = _settings(args)
    _configure_logging(settings, args.verbose)

    print(f"Snapshot Path: {settings.snapshot_file}")
    try:
        snapshot = open_store(settings.snapshot_file).fetch_latest_snapshot()
    except SnapshotFetchError as exc:
        print(f"[X] {exc.user_message}")
        sys.exit(1)

    if snapshot.is_empty:
        print("[WARN] Snapshot has no dated records")
        sys.exit(1)

    vocab = snapshot.vocabulary
    print(f"[OK] Date: {snapshot.date}")
    print(f"  Records: {len(snapshot)}")
    print(f"  Sectors: {len(vocab.sectors)}")
    print(f"  Sub-sectors: {len(vocab.sub_sectors)}")
    print(f"  Tags: {len(vocab.tags)}")


def cmd_screen(args) -> None:
    """Filter, sort and print the latest snapshot."""
    from .common import SortDirection
    from .display import build_table_frame
    from .engines import FilterState, ScreenerError, ScreenerSession, SortState
    from .snapshot import open_store

    settings = _settings(args)
    _configure_logging(settings, args.verbose)

    try:
        session = ScreenerSession.from_settings(open_store(settings.snapshot_file), settings)
        session.refresh()
        if session.error:
            print(f"[X] {session.error}")
            sys.exit(1)
        filters = FilterState(
            search=args.search or "",
            sectors=args.sector or (),
            sub_sectors=args.sub_sector or (),
            tags=args.tag or (),
            actions=args.action or (),
            score_range=(args.score_min, args.score_max),
            preset=args.preset,
        )
        direction = SortDirection.ASC if args.asc else SortDirection.DESC
        session.set_sort(SortState(field=args.sort, direction=direction))
        view = session.apply_filters(filters)
    except ScreenerError as exc:
        print(f"[X] {exc.user_message}")
        sys.exit(2)

    total = len(session.snapshot) if session.snapshot else 0
    print(f"Snapshot {session.snapshot.date if session.snapshot else '-'}: {len(view)} of {total} stocks")
    if session.is_empty_snapshot:
        print("NO DATA")
        return
    if view.is_empty:
        print("NO MATCHING STOCKS - relax filters")
        return

    rows = view.records[: args.limit] if args.limit else view.records
    sort = session.sort
    frame = build_table_frame(rows, sort_field=sort.field, direction=sort.direction)
    print(frame.to_string(index=False))
    if args.limit and len(view) > args.limit:
        print(f"... {len(view) - args.limit} more")


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="idx-screener",
        description="IDX Screener - equity screening over daily snapshots",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="YAML settings file")
    parser.add_argument("--snapshot", default=None, help="Snapshot file (overrides settings)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    info_parser = subparsers.add_parser("info", help="Show package information")
    info_parser.set_defaults(func=cmd_info)

    validate_parser = subparsers.add_parser("validate", help="Validate the snapshot file")
    validate_parser.set_defaults(func=cmd_validate)

    screen_parser = subparsers.add_parser("screen", help="Screen the latest snapshot")
    screen_parser.add_argument("--search", default="", help="Substring of code or name")
    screen_parser.add_argument("--sector", action="append", help="Sector (repeatable)")
    screen_parser.add_argument("--sub-sector", action="append", help="Sub-sector (repeatable)")
    screen_parser.add_argument("--tag", action="append", help="Tag (repeatable)")
    screen_parser.add_argument("--action", action="append", help="BUY, HOLD or AVOID (repeatable)")
    screen_parser.add_argument("--preset", default=None, help="Preset id, e.g. strong-buy")
    screen_parser.add_argument("--score-min", type=float, default=0.0, help="Minimum score")
    screen_parser.add_argument("--score-max", type=float, default=100.0, help="Maximum score")
    screen_parser.add_argument("--sort", default=None, help="Sort field, e.g. score or pbv")
    screen_parser.add_argument("--asc", action="store_true", help="Sort ascending")
    screen_parser.add_argument("--limit", type=int, default=50, help="Rows to print (0 = all)")
    screen_parser.set_defaults(func=cmd_screen)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Saga standings CLI

Computes standings and the live court board from a league snapshot, either
a JSON file on disk or the configured league store.

Usage:
    python saga_cli.py standings --snapshot data/snapshot.json
    python saga_cli.py board --url https://example.com/exec
    python saga_cli.py report --snapshot data/snapshot.json --output reports/standings.xlsx
    python saga_cli.py validate --snapshot data/snapshot.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from saga import (
    LeagueStore,
    StoreError,
    build_report,
    build_view,
    export_report_json,
    export_report_xlsx,
    load_snapshot,
    parse_snapshot,
    validate_league,
)
from saga.config import get_config
from saga.logging_config import setup_logging

logger = logging.getLogger('saga.cli')


def fetch_snapshot(args: argparse.Namespace):
    """Load the raw snapshot from --snapshot, --url, or the configured store."""
    if args.snapshot:
        logger.info(f'Loading snapshot from {args.snapshot}')
        return load_snapshot(args.snapshot)

    config = get_config()
    url = args.url or config.store_url
    if not url:
        raise StoreError('No snapshot file given and no store_url configured')
    logger.info(f'Restoring snapshot from {url}')
    store = LeagueStore(url, read_only=True, timeout=config.request_timeout)
    return store.restore()


def print_standings(view) -> None:
    print(f"{view.saga_name} - Day {view.day}")
    print("=" * 60)
    for row in view.standings:
        s = row.standing
        marker = '' if s.eligible_for_trophies else '  (below 60%)'
        print(
            f"  {row.rank:>2}. {row.name:<20} PPG {s.ppg:.2f}  "
            f"{s.wins}-{s.losses}  {s.points} pts{marker}"
        )
    if view.summary:
        print(f"\nValid matches: {view.summary.total_matches}, "
              f"minimum required: {view.summary.min_required}")


def print_board(view) -> None:
    status = "complete" if view.is_day_complete else "in progress"
    print(f"{view.saga_name} - Day {view.day} ({status})")
    print("ON COURT")
    for m in view.active_matches:
        team1 = ' & '.join(view.player_names.get(p, p) for p in m.team1)
        team2 = ' & '.join(view.player_names.get(p, p) for p in m.team2)
        print(f"  Court {m.court}: {team1} {m.score_a}-{m.score_b} {team2} [{m.status}]")
    print("UP NEXT")
    for m in view.upcoming_matches:
        team1 = ' & '.join(view.player_names.get(p, p) for p in m.team1)
        team2 = ' & '.join(view.player_names.get(p, p) for p in m.team2)
        print(f"  Court {m.court}: {team1} vs {team2}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Saga league standings and court board")
    parser.add_argument(
        "command",
        choices=["standings", "board", "report", "validate"],
        help="What to compute",
    )
    parser.add_argument(
        "--snapshot", "-s",
        default=None,
        help="Path to a snapshot JSON file (otherwise the store is queried)",
    )
    parser.add_argument(
        "--url", "-u",
        default=None,
        help="League store URL (overrides store_url in config)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Report output path (.xlsx or .json)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON instead of text",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_to_file=False)

    try:
        raw = fetch_snapshot(args)
    except (FileNotFoundError, json.JSONDecodeError, StoreError) as e:
        print(f"Could not load league data: {e}")
        return 1

    if raw is None:
        print("League store returned no data")
        return 1

    snapshot = parse_snapshot(raw)

    if args.command == "validate":
        errors, warnings = validate_league(snapshot.league)
        for message in errors:
            print(f"ERROR: {message}")
        for message in warnings:
            print(f"WARNING: {message}")
        if not errors and not warnings:
            print("League data looks clean")
        return 1 if errors else 0

    view = build_view(snapshot, default_name=get_config().saga_name)

    if args.command == "standings":
        if args.json:
            print(json.dumps([row.to_dict() for row in view.standings], indent=2))
        else:
            print_standings(view)
    elif args.command == "board":
        if args.json:
            board = {
                'active': [m.to_dict() for m in view.active_matches],
                'queued': [m.to_dict() for m in view.upcoming_matches],
                'isDayComplete': view.is_day_complete,
            }
            print(json.dumps(board, indent=2))
        else:
            print_board(view)
    else:
        report = build_report(view)
        output = Path(args.output) if args.output else Path(get_config().report_dir) / "standings.xlsx"
        if output.suffix == ".json":
            export_report_json(report, output)
        else:
            export_report_xlsx(report, output)
        print(f"Report saved to {output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Turn a raw store snapshot into the display model for the viewer."""

import logging
import re
from typing import Any, Optional

from .classifier import classify, select_current_day
from .models import SagaView, StandingRow
from .schemas import Player, Snapshot, parse_snapshot
from .standings import compute_standings, league_summary

logger = logging.getLogger('saga.view')

DEFAULT_SAGA_NAME = 'PBZ Saga'


def format_player_name(player_id: str, names: Optional[dict[str, str]] = None) -> str:
    """
    Display name for a player id.

    Uses the directory when it has the id, otherwise title-cases the id.

    Examples:
        'p_john_doe' -> 'John Doe'
        'MARIA' -> 'Maria'
    """
    if names and names.get(player_id):
        return names[player_id]
    cleaned = re.sub(r'^p_', '', player_id, flags=re.IGNORECASE).replace('_', ' ').lower()
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), cleaned)


def build_name_directory(players: tuple[Player, ...]) -> dict[str, str]:
    """Map player id -> name for players that have one."""
    return {p.id: p.name for p in players if p.name}


def build_view(
    snapshot: Snapshot | dict[str, Any],
    default_name: str = DEFAULT_SAGA_NAME,
) -> SagaView:
    """
    Build the viewer display model.

    Args:
        snapshot: Store payload (league, or wrapper with ``activeLeague``)
        default_name: Saga name when the snapshot carries none

    Returns:
        SagaView with named standings, the match board and day status
    """
    snapshot = parse_snapshot(snapshot)
    league = snapshot.league
    names = build_name_directory(snapshot.players)

    standings = compute_standings(league)
    summary = league_summary(league, standings)

    day, day_complete = select_current_day(league)
    board = classify(day)
    attendees = list(day.attendees) if day else []
    present = set(attendees)

    rows = [
        StandingRow(
            rank=rank,
            name=format_player_name(s.player_id, names),
            standing=s,
            is_present=s.player_id in present,
        )
        for rank, s in enumerate(standings, 1)
    ]

    view = SagaView(
        saga_name=league.name or snapshot.saga_name or default_name,
        day=league.current_day or snapshot.day or 1,
        standings=rows,
        active_matches=board.active,
        upcoming_matches=board.queued,
        player_names=names,
        attendees=attendees,
        is_day_complete=day_complete,
        summary=summary,
        lore=snapshot.lore,
    )
    logger.info(
        f'{view.saga_name} day {view.day}: {len(rows)} players, '
        f'{len(board.active)} on court, {len(board.queued)} queued'
    )
    return view

"""Live / queued classification of the current day's matches.

Broadcast rule: as soon as any unfinished match has a non-zero score or is
explicitly marked live, only those matches are shown as on court and
everything at 0-0 waits in the queue. While the whole day is still at 0-0,
the next pending match on each featured court is shown as a preview.
"""

import logging
from typing import Any, Optional

from .constants import (
    BOARD_LIVE,
    BOARD_PENDING,
    DAY_COMPLETED,
    DEFAULT_ORDER_INDEX,
    FINISHED_STATUSES,
    PREVIEW_COURTS,
    STATUS_LIVE,
)
from .models import ClassifiedMatch, MatchBoard
from .schemas import Day, League, Match, parse_league

logger = logging.getLogger('saga.classifier')


def is_finished(match: Match) -> bool:
    """True if the match is done and no longer belongs on the board."""
    return match.is_completed or match.status in FINISHED_STATUSES


def is_day_complete(day: Day) -> bool:
    """A day is complete when it has matches and all of them are completed."""
    return bool(day.matches) and all(m.is_completed for m in day.matches)


def select_current_day(league: League | dict[str, Any]) -> tuple[Optional[Day], bool]:
    """
    Pick the day the broadcast should follow.

    Returns:
        (day, day_complete). The first day not marked completed; if every day
        is completed, the last day with day_complete=True. (None, False) for a
        league with no days.
    """
    league = parse_league(league)
    if not league.days:
        return None, False

    for day in league.days:
        if day.status != DAY_COMPLETED:
            return day, is_day_complete(day)

    return league.days[-1], True


def to_board_entry(match: Match) -> ClassifiedMatch:
    """Normalize an unfinished match for display; missing scores show as 0."""
    score_a = match.score_a or 0
    score_b = match.score_b or 0
    is_live = score_a > 0 or score_b > 0 or match.status == STATUS_LIVE
    return ClassifiedMatch(
        id=match.id,
        court=match.court,
        team1=match.team_a,
        team2=match.team_b,
        score_a=score_a,
        score_b=score_b,
        status=BOARD_LIVE if is_live else BOARD_PENDING,
        round=match.round,
        order_index=match.order_index,
    )


def _queue_key(entry: ClassifiedMatch) -> tuple[int, int, int]:
    order_index = entry.order_index if entry.order_index is not None else DEFAULT_ORDER_INDEX
    return order_index, entry.round or 0, entry.court


def classify(day: Optional[Day | dict[str, Any]]) -> MatchBoard:
    """
    Split a day's unfinished matches into active and queued.

    Args:
        day: The current day (see ``select_current_day``), or None

    Returns:
        MatchBoard with ``active`` sorted by court and ``queued`` in play order
    """
    if day is None:
        return MatchBoard()
    if not isinstance(day, Day):
        day = Day.model_validate(day)

    entries = [to_board_entry(m) for m in day.matches if not is_finished(m)]
    live = [e for e in entries if e.status == BOARD_LIVE]
    pending = sorted((e for e in entries if e.status == BOARD_PENDING), key=_queue_key)

    if live:
        active, queued = live, pending
    else:
        # Preview: first pending match per featured court stands in as active
        active, queued = [], []
        previewed = set()
        for entry in pending:
            if entry.court in PREVIEW_COURTS and entry.court not in previewed:
                previewed.add(entry.court)
                active.append(entry)
            else:
                queued.append(entry)

    active.sort(key=lambda e: e.court)
    logger.debug(
        f'Day {day.id or "?"}: {len(active)} active, {len(queued)} queued '
        f'({"live" if live else "preview"} mode)'
    )
    return MatchBoard(active=active, queued=queued)

"""Match validation and the DBZ points law.

A match counts for a player only if:
    - it is flagged completed AND its status is "completed"
    - it is not a forfeit
    - nobody is on its no-show list
    - both scores resolved to non-negative integers
    - the player is on exactly one of the two teams

Points:
    Winner: 3, +1 if the opponent scored 0 (bagel) -> 4
    Loser:  1, +1 if the loser scored 10+ (close loss) -> 2
            0 if the loser scored 0 (bageled), overriding the close loss

Every consumer (standings, summary, report) goes through ``points_for`` so
the predicate is evaluated in exactly one place.
"""

from typing import Any, Optional

from .constants import (
    BAGEL_BONUS,
    BAGELED_POINTS,
    CLOSE_LOSS_BONUS,
    CLOSE_LOSS_THRESHOLD,
    LOSS_POINTS,
    STATUS_COMPLETED,
    WIN_POINTS,
)
from .models import MatchResult
from .schemas import Match


def _as_match(match: Any) -> Match:
    """Accept raw match dicts in either naming as well as parsed matches."""
    if isinstance(match, Match):
        return match
    if not isinstance(match, dict):
        return Match()
    return Match.model_validate(match)


def is_countable(match: Match | dict) -> bool:
    """Match-level half of the predicate (everything except team membership)."""
    match = _as_match(match)
    if match.is_completed is not True:
        return False
    if match.status != STATUS_COMPLETED:
        return False
    if match.is_forfeit:
        return False
    if match.no_show_player_ids:
        return False
    return match.score_a is not None and match.score_b is not None


def score_match(player_score: int, opponent_score: int) -> tuple[int, bool, bool, bool]:
    """
    Apply the DBZ points law to one side of a result.

    Tied scores have no winner; both sides are scored as losers.

    Returns:
        (points, is_win, is_bagel_win, is_close_loss)
    """
    is_win = player_score > opponent_score
    is_bagel = opponent_score == 0
    is_close_loss = not is_win and player_score >= CLOSE_LOSS_THRESHOLD

    if is_win:
        points = WIN_POINTS
        if is_bagel:
            points += BAGEL_BONUS
    elif player_score == 0:
        points = BAGELED_POINTS
    else:
        points = LOSS_POINTS
        if is_close_loss:
            points += CLOSE_LOSS_BONUS

    return points, is_win, is_win and is_bagel, is_close_loss


def points_for(player_id: str, match: Match | dict) -> Optional[MatchResult]:
    """
    Score a single player in a single match.

    Args:
        player_id: Player to score
        match: Canonical match (see ``schemas.Match``) or a raw match dict

    Returns:
        MatchResult, or None if the match does not count for this player
    """
    match = _as_match(match)
    if not is_countable(match):
        return None

    in_a = player_id in match.team_a
    in_b = player_id in match.team_b
    if in_a == in_b:
        # Not in the match, or listed on both sides
        return None

    if in_a:
        player_score, opponent_score = match.score_a, match.score_b
    else:
        player_score, opponent_score = match.score_b, match.score_a

    points, is_win, is_bagel, is_close_loss = score_match(player_score, opponent_score)
    return MatchResult(
        player_id=player_id,
        points_earned=points,
        is_win=is_win,
        is_bagel=is_bagel,
        is_close_loss=is_close_loss,
    )


def results_for_match(match: Match | dict) -> list[MatchResult]:
    """Score every participant of a match; empty if it does not count."""
    match = _as_match(match)
    results = []
    for player_id in match.participants:
        result = points_for(player_id, match)
        if result is not None:
            results.append(result)
    return results

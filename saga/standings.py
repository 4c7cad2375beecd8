"""League standings: fold every counted match into per-player totals, then rank.

Standings are always rebuilt from the full match log. Nothing is cached
between calls, so a corrected score anywhere in the season is reflected the
next time this runs.
"""

import logging
import math
from functools import cmp_to_key
from typing import Any, Optional

from .constants import CLOSE_LOSS_THRESHOLD, ELIGIBILITY_RATIO, PPG_EPSILON
from .models import LeagueStanding, StandingsSummary
from .schemas import League, parse_league
from .scoring import is_countable, points_for

logger = logging.getLogger('saga.standings')


def calculate_ppg(points: int, games_played: int) -> float:
    """Points per game; 0 when nothing has been played."""
    return points / games_played if games_played > 0 else 0.0


def minimum_games_required(max_played: int) -> int:
    """Games needed for trophy eligibility (60% of the league leader's count)."""
    return math.ceil(max_played * ELIGIBILITY_RATIO)


def compare_standings(a: LeagueStanding, b: LeagueStanding) -> int:
    """
    Ordering for the standings table (best first).

    PPG (within PPG_EPSILON counts as equal), then total points, then wins,
    then games played, all descending.
    """
    if abs(a.ppg - b.ppg) > PPG_EPSILON:
        return -1 if a.ppg > b.ppg else 1
    if a.points != b.points:
        return -1 if a.points > b.points else 1
    if a.wins != b.wins:
        return -1 if a.wins > b.wins else 1
    if a.games_played != b.games_played:
        return -1 if a.games_played > b.games_played else 1
    return 0


def rank_standings(standings: list[LeagueStanding]) -> list[LeagueStanding]:
    """Sort standings best-first. Exact ties keep their input order."""
    return sorted(standings, key=cmp_to_key(compare_standings))


def compute_standings(league: League | dict[str, Any]) -> list[LeagueStanding]:
    """
    Compute ranked standings for a league.

    Args:
        league: League, or a raw league dict in either field convention

    Returns:
        List of LeagueStanding, best first. Every roster player appears,
        plus any substitute who took part in a match.
    """
    league = parse_league(league)
    table: dict[str, LeagueStanding] = {}

    def stats_for(player_id: str) -> LeagueStanding:
        if player_id not in table:
            table[player_id] = LeagueStanding(player_id=player_id)
        return table[player_id]

    for player in league.players:
        stats_for(player.id)

    counted = 0
    for day in league.days:
        played_today = set()
        for match in day.matches:
            for player_id in match.participants:
                stats = stats_for(player_id)
                if player_id in match.no_show_player_ids:
                    stats.no_shows += 1

                result = points_for(player_id, match)
                if result is None:
                    continue

                stats.games_played += 1
                stats.points += result.points_earned
                if result.is_win:
                    stats.wins += 1
                    stats.streak += 1
                    opponent_score = (
                        match.score_b if player_id in match.team_a else match.score_a
                    )
                    if opponent_score >= CLOSE_LOSS_THRESHOLD:
                        stats.clutch_wins += 1
                else:
                    stats.losses += 1
                    stats.streak = 0
                if result.is_bagel:
                    stats.bonus_points += 1
                played_today.add(player_id)
                counted += 1

        for player_id in played_today:
            stats = table[player_id]
            stats.ppg_history.append(calculate_ppg(stats.points, stats.games_played))

    standings = list(table.values())
    max_played = max((s.games_played for s in standings), default=0)
    min_required = minimum_games_required(max_played)

    for stats in standings:
        stats.ppg = calculate_ppg(stats.points, stats.games_played)
        stats.eligible_for_trophies = stats.games_played > 0 and stats.games_played >= min_required

    logger.debug(
        f'Computed standings for {len(standings)} players from {counted} player-results '
        f'(max played {max_played}, min required {min_required})'
    )
    return rank_standings(standings)


def league_summary(
    league: League | dict[str, Any],
    standings: Optional[list[LeagueStanding]] = None,
) -> StandingsSummary:
    """
    League-wide totals for a standings table.

    Args:
        league: League or raw league dict
        standings: Precomputed standings for the same league (computed if omitted)

    Returns:
        StandingsSummary
    """
    league = parse_league(league)
    if standings is None:
        standings = compute_standings(league)

    total_matches = sum(
        1 for day in league.days for match in day.matches if is_countable(match)
    )
    max_played = max((s.games_played for s in standings), default=0)

    return StandingsSummary(
        total_matches=total_matches,
        max_played=max_played,
        min_required=minimum_games_required(max_played),
        total_players=len(standings),
    )

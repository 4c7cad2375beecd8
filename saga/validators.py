"""Data-quality checks for league snapshots.

These only report. Standings never depend on them: a match that fails a
check here is handled by the scoring predicate on its own.
"""

from typing import Any

from .constants import STATUS_COMPLETED, STATUS_WALKOVER
from .schemas import Day, League, Match, parse_league
from .scoring import is_countable


def validate_match(match: Match) -> list[str]:
    """
    Check a single match for inconsistent data.

    Checks:
    - Both teams have players
    - No player listed on both teams
    - No-show ids are participants
    - Completed matches have resolvable, non-tied scores

    Args:
        match: Match to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not match.team_a or not match.team_b:
        errors.append(f'Match {match.id} is missing a team')

    overlap = set(match.team_a) & set(match.team_b)
    if overlap:
        errors.append(f'Match {match.id} has players on both teams: {", ".join(sorted(overlap))}')

    strangers = set(match.no_show_player_ids) - set(match.participants)
    if strangers:
        errors.append(
            f'Match {match.id} lists no-shows who are not in the match: {", ".join(sorted(strangers))}'
        )

    if match.is_completed:
        if match.score_a is None or match.score_b is None:
            errors.append(f'Match {match.id} is completed but its score cannot be read')
        elif match.score_a == match.score_b:
            errors.append(
                f'Match {match.id} is completed with a tied score {match.score_a}-{match.score_b}'
            )

    return errors


def validate_day(day: Day) -> list[str]:
    """
    Check a day for duplicate match ids and invalid matches.

    Args:
        day: Day to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    seen = set()
    duplicates = set()
    for match in day.matches:
        if match.id in seen:
            duplicates.add(match.id)
        seen.add(match.id)
        errors.extend(validate_match(match))

    if duplicates:
        errors.append(f'Day {day.id or "?"} has duplicate match ids: {", ".join(sorted(duplicates))}')

    return errors


def validate_league(league: League | dict[str, Any]) -> tuple[list[str], list[str]]:
    """
    Validate a whole league.

    Args:
        league: League or raw league dict

    Returns:
        Tuple of (errors, warnings)
        - errors: Inconsistent match data
        - warnings: Things to review (completed status mismatches, substitutes)
    """
    league = parse_league(league)
    errors: list[str] = []
    warnings: list[str] = []

    roster = {p.id for p in league.players}
    substitutes = set()

    for day in league.days:
        errors.extend(validate_day(day))
        for match in day.matches:
            if match.is_completed != (match.status == STATUS_COMPLETED) and match.status != STATUS_WALKOVER:
                warnings.append(
                    f'Match {match.id} has isCompleted={match.is_completed} but status "{match.status}"'
                )
            if roster:
                substitutes.update(p for p in match.participants if p not in roster)

    if substitutes:
        warnings.append(f'Players not on the roster: {", ".join(sorted(substitutes))}')

    countable = sum(1 for day in league.days for m in day.matches if is_countable(m))
    if league.days and countable == 0:
        warnings.append('No matches count toward standings yet')

    return errors, warnings

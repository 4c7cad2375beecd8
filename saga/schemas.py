"""Pydantic schemas for league snapshots and configuration.

League data arrives from the store in two historical naming conventions
(``teamA``/``teamB``/``courtId`` and ``team1``/``team2``/``court``) and with
scores either as numbers or as a legacy ``"11-9"`` string. The ``before``
validators below fold all of that into one canonical, frozen shape so the
engine never has to branch on field names.
"""

import logging
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import DAY_GENERATED, STATUS_SCHEDULED

logger = logging.getLogger('saga.schemas')

SCORE_STRING_RE = re.compile(r'^\s*(\d+)\s*-\s*(\d+)\s*$')
INT_STRING_RE = re.compile(r'^\s*(\d+)\s*$')


def _first_present(data: dict, *keys: str) -> Any:
    """Return the first value under ``keys`` that is not None."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def coerce_score(value: Any) -> int | None:
    """
    Coerce a raw score to a non-negative int.

    Examples:
        11 -> 11
        "9" -> 9
        11.0 -> 11
        -1, 10.5, "abc", True, None -> None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        if value.is_integer() and value >= 0:
            return int(value)
        return None
    if isinstance(value, str):
        match = INT_STRING_RE.match(value)
        if match:
            return int(match.group(1))
    return None


def parse_score_string(score: Any) -> tuple[int, int] | None:
    """
    Parse a legacy score string into (score_a, score_b).

    Examples:
        "11-9" -> (11, 9)
        " 3 - 11 " -> (3, 11)
        "11:9", "11-", None -> None
    """
    if not isinstance(score, str):
        return None
    match = SCORE_STRING_RE.match(score)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def _coerce_int(value: Any, default: int | None = None) -> int | None:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        match = re.match(r'^\s*(-?\d+)\s*$', value)
        if match:
            return int(match.group(1))
    return default


def _coerce_str(value: Any, default: str = '') -> str:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (str, int, float)):
        return str(value)
    return default


def _coerce_ids(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    ids = []
    for item in value:
        if isinstance(item, str) and item:
            ids.append(item)
        elif isinstance(item, int) and not isinstance(item, bool):
            ids.append(str(item))
    return tuple(ids)


def _entries(value: Any, model: type[BaseModel], what: str) -> list:
    """Keep the dict (or already-built ``model``) entries of a raw list."""
    if not isinstance(value, (list, tuple)):
        return []
    kept = [item for item in value if isinstance(item, (dict, model))]
    if len(kept) != len(value):
        logger.debug(f'Dropped {len(value) - len(kept)} malformed {what} entries')
    return kept


class Player(BaseModel):
    """Roster entry. ``name`` is display-only."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str | None = None

    @model_validator(mode='before')
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {'id': data}
        if isinstance(data, dict):
            name = data.get('name')
            return {
                'id': _coerce_str(data.get('id')),
                'name': name if isinstance(name, str) and name else None,
            }
        return data


class Match(BaseModel):
    """A single contest in canonical form."""

    model_config = ConfigDict(frozen=True)

    id: str = ''
    team_a: tuple[str, ...] = ()
    team_b: tuple[str, ...] = ()
    score_a: int | None = None
    score_b: int | None = None
    score: str | None = None  # legacy "11-9" field, kept for display
    is_completed: bool = False
    status: str = STATUS_SCHEDULED
    is_forfeit: bool = False
    no_show_player_ids: tuple[str, ...] = ()
    court: int = 0
    round: int | None = None
    order_index: int | None = None
    type: str | None = None

    @model_validator(mode='before')
    @classmethod
    def _normalize_legacy_fields(cls, data: Any) -> Any:
        """Fold both historical field conventions into canonical names."""
        if not isinstance(data, dict):
            return data

        score_a = coerce_score(_first_present(data, 'score_a', 'scoreA'))
        score_b = coerce_score(_first_present(data, 'score_b', 'scoreB'))
        legacy_score = data.get('score')
        if score_a is None or score_b is None:
            parsed = parse_score_string(legacy_score)
            if parsed:
                score_a, score_b = parsed

        # courtId wins unless it is falsy (0 / missing), then court
        court = _coerce_int(data.get('courtId')) or _coerce_int(data.get('court')) or 0

        status = data.get('status')
        match_type = data.get('type')

        return {
            'id': _coerce_str(data.get('id')),
            'team_a': _coerce_ids(_first_present(data, 'team_a', 'teamA', 'team1')),
            'team_b': _coerce_ids(_first_present(data, 'team_b', 'teamB', 'team2')),
            'score_a': score_a,
            'score_b': score_b,
            'score': legacy_score if isinstance(legacy_score, str) else None,
            'is_completed': _first_present(data, 'is_completed', 'isCompleted') is True,
            'status': status if isinstance(status, str) and status else STATUS_SCHEDULED,
            'is_forfeit': bool(_first_present(data, 'is_forfeit', 'isForfeit')),
            'no_show_player_ids': _coerce_ids(
                _first_present(data, 'no_show_player_ids', 'noShowPlayerIds')
            ),
            'court': court,
            'round': _coerce_int(data.get('round')),
            'order_index': _coerce_int(_first_present(data, 'order_index', 'orderIndex')),
            'type': match_type if isinstance(match_type, str) else None,
        }

    @property
    def participants(self) -> tuple[str, ...]:
        """Unique player ids across both teams, in first-seen order."""
        return tuple(dict.fromkeys(self.team_a + self.team_b))


class Day(BaseModel):
    """One league day (a session of rounds)."""

    model_config = ConfigDict(frozen=True)

    id: str = ''
    week: int | None = None
    day: int | None = None
    status: str = DAY_GENERATED
    matches: tuple[Match, ...] = ()
    attendees: tuple[str, ...] = ()

    @model_validator(mode='before')
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        day_id = _coerce_str(data.get('id'))
        prefix = f'{day_id}_' if day_id else ''
        matches = []
        for index, raw in enumerate(_entries(data.get('matches'), Match, 'match')):
            if isinstance(raw, Match):
                matches.append(raw)
                continue
            if not _coerce_str(raw.get('id')):
                raw = {**raw, 'id': f'{prefix}match_{index + 1}'}
            matches.append(raw)

        status = data.get('status')
        return {
            'id': day_id,
            'week': _coerce_int(data.get('week')),
            'day': _coerce_int(data.get('day')),
            'status': status if isinstance(status, str) and status else DAY_GENERATED,
            'matches': matches,
            'attendees': tuple(dict.fromkeys(_coerce_ids(data.get('attendees')))),
        }


class League(BaseModel):
    """A league: roster plus ordered days."""

    model_config = ConfigDict(frozen=True)

    id: str = ''
    name: str = ''
    current_day: int | None = None
    players: tuple[Player, ...] = ()
    days: tuple[Day, ...] = ()

    @model_validator(mode='before')
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        players = []
        raw_players = data.get('players')
        if isinstance(raw_players, (list, tuple)):
            for raw in raw_players:
                if isinstance(raw, Player):
                    players.append(raw)
                elif isinstance(raw, str) and raw:
                    players.append({'id': raw})
                elif isinstance(raw, dict) and _coerce_str(raw.get('id')):
                    players.append(raw)

        return {
            'id': _coerce_str(data.get('id')),
            'name': _coerce_str(data.get('name')),
            'current_day': _coerce_int(_first_present(data, 'current_day', 'currentDay')),
            'players': players,
            'days': _entries(data.get('days'), Day, 'day'),
        }


class Snapshot(BaseModel):
    """
    What the league store hands back.

    Either a league object directly, or a wrapper holding it under
    ``activeLeague`` together with a top-level player directory.
    """

    model_config = ConfigDict(frozen=True)

    saga_name: str | None = None
    day: int | None = None
    players: tuple[Player, ...] = ()
    league: League = Field(default_factory=League)
    lore: dict = Field(default_factory=dict)

    @model_validator(mode='before')
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if 'league' in data and isinstance(data['league'], League):
            return data

        if isinstance(data.get('activeLeague'), dict):
            league = League.model_validate(data['activeLeague'])
            top_level = League.model_validate({'players': data.get('players')}).players
            players = top_level or league.players
        else:
            league = League.model_validate(data)
            players = league.players

        lore = data.get('lore')
        saga_name = _first_present(data, 'sagaName', 'name')
        return {
            'saga_name': saga_name if isinstance(saga_name, str) else None,
            'day': _coerce_int(_first_present(data, 'day', 'currentDay')),
            'players': players,
            'league': league,
            'lore': lore if isinstance(lore, dict) else {},
        }


def parse_league(data: Any) -> League:
    """
    Normalize a raw league dict into a ``League``.

    Accepts an already-parsed ``League`` unchanged. Anything that is not a
    dict is treated as an empty league.
    """
    if isinstance(data, League):
        return data
    if not isinstance(data, dict):
        logger.debug(f'Treating {type(data).__name__} as an empty league')
        return League()
    return League.model_validate(data)


def parse_snapshot(data: Any) -> Snapshot:
    """Normalize a raw store payload into a ``Snapshot``."""
    if isinstance(data, Snapshot):
        return data
    if not isinstance(data, dict):
        logger.debug(f'Treating {type(data).__name__} as an empty snapshot')
        return Snapshot()
    return Snapshot.model_validate(data)


class SagaConfig(BaseModel):
    """Application settings from data/saga_config.json."""

    model_config = ConfigDict(extra='forbid')

    saga_name: str = Field(default='PBZ Saga', min_length=1)
    store_url: str | None = None
    read_only: bool = True
    request_timeout: float = Field(default=10.0, gt=0, le=120)
    poll_interval_seconds: int = Field(default=5, ge=1, le=3600)
    report_dir: str = 'reports'

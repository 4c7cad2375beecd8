"""Data models produced by the Saga engine."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class MatchResult:
    """One player's outcome in one counted match."""
    player_id: str
    points_earned: int
    is_win: bool
    is_bagel: bool  # bagel *win* only
    is_close_loss: bool


@dataclass
class LeagueStanding:
    """Container for a player's aggregated season stats."""
    player_id: str
    points: int = 0
    wins: int = 0
    losses: int = 0
    games_played: int = 0
    ppg: float = 0.0
    bonus_points: int = 0  # bagel wins
    eligible_for_trophies: bool = False
    no_shows: int = 0
    clutch_wins: int = 0  # wins against a 10+ opponent score
    streak: int = 0  # current consecutive wins
    ppg_history: List[float] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'playerId': self.player_id,
            'points': self.points,
            'wins': self.wins,
            'losses': self.losses,
            'gamesPlayed': self.games_played,
            'ppg': self.ppg,
            'bonusPoints': self.bonus_points,
            'eligibleForTrophies': self.eligible_for_trophies,
            'noShows': self.no_shows,
            'clutchWins': self.clutch_wins,
            'streak': self.streak,
            'ppgHistory': list(self.ppg_history),
        }


@dataclass(frozen=True)
class StandingsSummary:
    """League-wide numbers that go with a standings table."""
    total_matches: int  # matches that count, walkovers and no-shows excluded
    max_played: int
    min_required: int
    total_players: int

    def to_dict(self) -> dict:
        return {
            'totalMatches': self.total_matches,
            'maxPlayed': self.max_played,
            'minRequired': self.min_required,
            'totalPlayers': self.total_players,
        }


@dataclass(frozen=True)
class ClassifiedMatch:
    """An unfinished match as shown on the broadcast board."""
    id: str
    court: int
    team1: tuple
    team2: tuple
    score_a: int
    score_b: int
    status: str  # 'live' or 'pending'
    round: Optional[int] = None
    order_index: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'court': self.court,
            'team1': list(self.team1),
            'team2': list(self.team2),
            'scoreA': self.score_a,
            'scoreB': self.score_b,
            'status': self.status,
            'round': self.round,
        }


@dataclass(frozen=True)
class MatchBoard:
    """Classifier output: what is on court now and what is waiting."""
    active: List[ClassifiedMatch] = field(default_factory=list)
    queued: List[ClassifiedMatch] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'active': [m.to_dict() for m in self.active],
            'queued': [m.to_dict() for m in self.queued],
        }


@dataclass
class StandingRow:
    """A standing joined with the player's display name."""
    rank: int
    name: str
    standing: LeagueStanding
    is_present: bool = False

    def to_dict(self) -> dict:
        row = self.standing.to_dict()
        row.update({
            'rank': self.rank,
            'name': self.name,
            'played': self.standing.games_played,
            'isEligible': self.standing.eligible_for_trophies,
            'isPresent': self.is_present,
        })
        return row


@dataclass
class SagaView:
    """Display model handed to the presentation layer."""
    saga_name: str
    day: int
    standings: List[StandingRow] = field(default_factory=list)
    active_matches: List[ClassifiedMatch] = field(default_factory=list)
    upcoming_matches: List[ClassifiedMatch] = field(default_factory=list)
    player_names: dict = field(default_factory=dict)
    attendees: List[str] = field(default_factory=list)
    is_day_complete: bool = False
    summary: Optional[StandingsSummary] = None
    lore: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'sagaName': self.saga_name,
            'day': self.day,
            'standings': [row.to_dict() for row in self.standings],
            'activeMatches': [m.to_dict() for m in self.active_matches],
            'upcomingMatches': [m.to_dict() for m in self.upcoming_matches],
            'playerNames': dict(self.player_names),
            'attendees': list(self.attendees),
            'isDayComplete': self.is_day_complete,
            'leagueStats': self.summary.to_dict() if self.summary else None,
            'lore': dict(self.lore),
        }

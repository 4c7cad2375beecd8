from .models import (
    ClassifiedMatch,
    LeagueStanding,
    MatchBoard,
    MatchResult,
    SagaView,
    StandingRow,
    StandingsSummary,
)
from .schemas import Day, League, Match, Player, Snapshot, parse_league, parse_snapshot
from .scoring import is_countable, points_for, results_for_match
from .standings import compute_standings, league_summary
from .classifier import classify, is_day_complete, select_current_day
from .view import build_view, format_player_name
from .validators import validate_league
from .report import build_report, export_report_json, export_report_xlsx
from .store import LeagueStore, ReadOnlyStoreError, StoreError, load_snapshot

__all__ = [
    # Schemas
    'Player',
    'Match',
    'Day',
    'League',
    'Snapshot',
    'parse_league',
    'parse_snapshot',
    # Models
    'MatchResult',
    'LeagueStanding',
    'StandingsSummary',
    'ClassifiedMatch',
    'MatchBoard',
    'StandingRow',
    'SagaView',
    # Engine
    'points_for',
    'is_countable',
    'results_for_match',
    'compute_standings',
    'league_summary',
    'classify',
    'select_current_day',
    'is_day_complete',
    # Display
    'build_view',
    'format_player_name',
    # Checks
    'validate_league',
    # Report
    'build_report',
    'export_report_json',
    'export_report_xlsx',
    # Store
    'LeagueStore',
    'StoreError',
    'ReadOnlyStoreError',
    'load_snapshot',
]

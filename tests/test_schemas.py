"""Unit tests for snapshot ingestion."""

import pytest

from saga.schemas import (
    League,
    Match,
    coerce_score,
    parse_league,
    parse_score_string,
    parse_snapshot,
)


class TestScoreParsing:
    """Tests for score coercion."""

    @pytest.mark.parametrize('raw, expected', [
        (11, 11), (0, 0), ('9', 9), (11.0, 11),
        (-1, None), (10.5, None), ('abc', None), (True, None), (None, None),
    ])
    def test_coerce_score(self, raw, expected):
        assert coerce_score(raw) == expected

    @pytest.mark.parametrize('raw, expected', [
        ('11-9', (11, 9)), (' 3 - 11 ', (3, 11)),
        ('11:9', None), ('11-', None), (None, None), (119, None),
    ])
    def test_parse_score_string(self, raw, expected):
        assert parse_score_string(raw) == expected

    def test_numeric_scores_win_over_string(self):
        match = Match.model_validate({'scoreA': 5, 'scoreB': 7, 'score': '11-0'})
        assert (match.score_a, match.score_b) == (5, 7)

    def test_string_fills_missing_score(self):
        match = Match.model_validate({'scoreA': 5, 'score': '11-0'})
        assert (match.score_a, match.score_b) == (11, 0)


class TestMatchNormalization:
    """Tests for the two field conventions."""

    def test_team_a_preferred_over_team1(self):
        match = Match.model_validate({'teamA': ['a'], 'team1': ['z'], 'team2': ['b']})
        assert match.team_a == ('a',)
        assert match.team_b == ('b',)

    def test_court_id_then_court(self):
        assert Match.model_validate({'courtId': 2, 'court': 5}).court == 2
        assert Match.model_validate({'courtId': 0, 'court': 5}).court == 5
        assert Match.model_validate({'court': 'x'}).court == 0

    def test_defaults(self):
        match = Match.model_validate({})
        assert match.status == 'scheduled'
        assert not match.is_completed
        assert not match.is_forfeit
        assert match.no_show_player_ids == ()
        assert match.score_a is None

    def test_participants_unique(self):
        match = Match.model_validate({'teamA': ['a', 'b'], 'teamB': ['b', 'c']})
        assert match.participants == ('a', 'b', 'c')

    def test_frozen(self):
        match = Match.model_validate({'scoreA': 1})
        with pytest.raises(Exception):
            match.score_a = 5


class TestLeagueNormalization:
    """Tests for league-level ingestion."""

    def test_missing_match_ids_generated(self):
        league = parse_league({'days': [{'id': 'd1', 'matches': [{}, {'id': 'keep'}, {}]}]})
        assert [m.id for m in league.days[0].matches] == ['d1_match_1', 'keep', 'd1_match_3']

    def test_malformed_entries_dropped(self):
        league = parse_league({
            'players': ['p1', {'id': 'p2', 'name': 'Two'}, {'name': 'no id'}, 42, None],
            'days': [{'matches': ['junk', None, {'id': 'm1'}]}, 'junk'],
        })
        assert [p.id for p in league.players] == ['p1', 'p2']
        assert len(league.days) == 1
        assert [m.id for m in league.days[0].matches] == ['m1']

    def test_not_a_dict(self):
        assert parse_league(None) == League()
        assert parse_league([1, 2]) == League()

    def test_odd_types_do_not_raise(self):
        league = parse_league({
            'name': 7,
            'currentDay': '3',
            'days': [{'week': 'one', 'status': None, 'attendees': 'p1', 'matches': [
                {'isCompleted': 'yes', 'noShowPlayerIds': 'p1', 'round': 'x', 'teamA': 'p1'},
            ]}],
        })
        assert league.name == '7'
        assert league.current_day == 3
        match = league.days[0].matches[0]
        assert match.is_completed is False
        assert match.no_show_player_ids == ()
        assert match.team_a == ()


class TestSnapshot:
    """Tests for store payload shapes."""

    def test_wrapped_league(self):
        snapshot = parse_snapshot({
            'sagaName': 'Wrapper',
            'players': [{'id': 'p1', 'name': 'One'}],
            'activeLeague': {'name': 'Inner', 'players': [{'id': 'p2'}], 'days': []},
        })
        assert snapshot.saga_name == 'Wrapper'
        assert snapshot.league.name == 'Inner'
        assert [p.id for p in snapshot.players] == ['p1']

    def test_wrapper_without_players_uses_league_roster(self):
        snapshot = parse_snapshot({'activeLeague': {'players': [{'id': 'p2', 'name': 'Two'}]}})
        assert [p.id for p in snapshot.players] == ['p2']

    def test_bare_league(self):
        snapshot = parse_snapshot({'name': 'Bare', 'players': ['p1'], 'days': []})
        assert snapshot.league.name == 'Bare'
        assert [p.id for p in snapshot.players] == ['p1']

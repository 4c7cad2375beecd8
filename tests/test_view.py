"""Unit tests for the viewer display model."""

import pytest

from saga.view import build_view, format_player_name


@pytest.fixture
def snapshot():
    """Wrapped store payload: one finished day, one day in progress."""
    return {
        'sagaName': 'Fallback Name',
        'players': [
            {'id': 'p_goku', 'name': 'Goku'},
            {'id': 'p_vegeta', 'name': 'Vegeta'},
            {'id': 'p_gohan'},
            {'id': 'p_piccolo', 'name': 'Piccolo'},
        ],
        'activeLeague': {
            'name': 'Saiyan Saga',
            'currentDay': 2,
            'days': [
                {
                    'id': 'd1',
                    'status': 'completed',
                    'matches': [
                        {'id': 'm1', 'teamA': ['p_goku'], 'teamB': ['p_vegeta'],
                         'scoreA': 11, 'scoreB': 10, 'isCompleted': True, 'status': 'completed'},
                        {'id': 'm2', 'teamA': ['p_gohan'], 'teamB': ['p_piccolo'],
                         'scoreA': 0, 'scoreB': 11, 'isCompleted': True, 'status': 'completed'},
                    ],
                },
                {
                    'id': 'd2',
                    'status': 'generated',
                    'attendees': ['p_goku', 'p_gohan'],
                    'matches': [
                        {'id': 'm3', 'courtId': 1, 'team1': ['p_goku'], 'team2': ['p_gohan'],
                         'scoreA': 4, 'scoreB': 2, 'isCompleted': False, 'status': 'live'},
                        {'id': 'm4', 'courtId': 2, 'team1': ['p_vegeta'], 'team2': ['p_piccolo'],
                         'isCompleted': False, 'status': 'scheduled', 'orderIndex': 2},
                    ],
                },
            ],
        },
    }


class TestFormatPlayerName:
    def test_directory_wins(self):
        assert format_player_name('p_goku', {'p_goku': 'Son Goku'}) == 'Son Goku'

    def test_fallback_title_case(self):
        assert format_player_name('p_john_doe') == 'John Doe'
        assert format_player_name('P_MARIA') == 'Maria'
        assert format_player_name('solo') == 'Solo'


class TestBuildView:
    def test_header_fields(self, snapshot):
        view = build_view(snapshot)
        assert view.saga_name == 'Saiyan Saga'
        assert view.day == 2
        assert not view.is_day_complete

    def test_named_standings(self, snapshot):
        view = build_view(snapshot)
        names = [row.name for row in view.standings]
        assert names[0] == 'Piccolo'  # 4 PPG from the bagel
        assert 'Gohan' in names  # no directory name, derived from id
        assert [row.rank for row in view.standings] == [1, 2, 3, 4]

    def test_presence_from_attendees(self, snapshot):
        view = build_view(snapshot)
        present = {row.standing.player_id for row in view.standings if row.is_present}
        assert present == {'p_goku', 'p_gohan'}

    def test_board(self, snapshot):
        view = build_view(snapshot)
        assert [m.id for m in view.active_matches] == ['m3']
        assert [m.id for m in view.upcoming_matches] == ['m4']

    def test_summary(self, snapshot):
        view = build_view(snapshot)
        assert view.summary.total_matches == 2
        assert view.summary.min_required == 1

    def test_to_dict(self, snapshot):
        data = build_view(snapshot).to_dict()
        assert data['sagaName'] == 'Saiyan Saga'
        assert data['playerNames']['p_vegeta'] == 'Vegeta'
        assert 'p_gohan' not in data['playerNames']
        assert data['standings'][0]['isEligible'] is True
        assert data['leagueStats']['totalMatches'] == 2
        assert data['activeMatches'][0]['status'] == 'live'

    def test_empty_snapshot(self):
        view = build_view({}, default_name='Empty Saga')
        assert view.saga_name == 'Empty Saga'
        assert view.day == 1
        assert view.standings == []
        assert view.active_matches == []

"""Tests for the league store client (HTTP mocked)."""

import json
from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from saga.store import (
    LeagueStore,
    ReadOnlyStoreError,
    StoreError,
    load_snapshot,
    unwrap_payload,
)

URL = 'https://store.example.com/exec'


def mock_response(text='', status=200):
    response = Mock()
    response.text = text
    response.status_code = status
    response.json.side_effect = lambda: json.loads(text)
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status} Error')
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


class TestUnwrap:
    def test_envelope(self):
        assert unwrap_payload({'success': True, 'data': {'days': []}}) == {'days': []}

    def test_direct(self):
        assert unwrap_payload({'days': []}) == {'days': []}

    def test_failed_envelope_left_alone(self):
        payload = {'success': False, 'error': 'nope'}
        assert unwrap_payload(payload) == payload


class TestRestore:
    def test_restore_wrapped(self, session):
        session.get.return_value = mock_response(json.dumps({'success': True, 'data': {'name': 'S'}}))
        store = LeagueStore(URL, session=session)
        assert store.restore() == {'name': 'S'}

        _, kwargs = session.get.call_args
        assert kwargs['params']['action'] == 'restore'
        assert 'ts' in kwargs['params']
        assert kwargs['timeout'] == 10.0

    def test_restore_empty_body(self, session):
        session.get.return_value = mock_response('')
        assert LeagueStore(URL, session=session).restore() is None

    def test_restore_http_error(self, session):
        session.get.return_value = mock_response('oops', status=500)
        with pytest.raises(StoreError):
            LeagueStore(URL, session=session).restore()

    def test_restore_network_error(self, session):
        session.get.side_effect = requests.ConnectionError('down')
        with pytest.raises(StoreError, match='down'):
            LeagueStore(URL, session=session).restore()

    def test_restore_invalid_json(self, session):
        session.get.return_value = mock_response('<html>')
        with pytest.raises(StoreError, match='Invalid JSON'):
            LeagueStore(URL, session=session).restore()


class TestBackup:
    def test_read_only_blocks_writes(self, session):
        store = LeagueStore(URL, read_only=True, session=session)
        with pytest.raises(ReadOnlyStoreError):
            store.backup({'days': []})
        session.post.assert_not_called()

    def test_backup_posts_json(self, session):
        session.post.return_value = mock_response('')
        LeagueStore(URL, read_only=False, session=session).backup({'days': []})
        session.post.assert_called_once_with(URL, json={'days': []}, timeout=10.0)

    def test_backup_failure(self, session):
        session.post.side_effect = requests.Timeout('slow')
        with pytest.raises(StoreError):
            LeagueStore(URL, read_only=False, session=session).backup({})


class TestFromConfig:
    @patch('saga.config.get_config')
    def test_from_config(self, mock_get_config):
        mock_get_config.return_value = Mock(store_url=URL, read_only=False, request_timeout=3.0)
        store = LeagueStore.from_config()
        assert store.url == URL
        assert not store.read_only
        assert store.timeout == 3.0

    @patch('saga.config.get_config')
    def test_from_config_without_url(self, mock_get_config):
        mock_get_config.return_value = Mock(store_url=None)
        with pytest.raises(StoreError):
            LeagueStore.from_config()


class TestLoadSnapshot:
    def test_load_wrapped_file(self, tmp_path):
        path = tmp_path / 'snapshot.json'
        path.write_text(json.dumps({'success': True, 'data': {'name': 'Disk'}}))
        assert load_snapshot(path) == {'name': 'Disk'}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / 'nope.json')

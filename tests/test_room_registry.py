"""
Tests for the room registry HTTP client.
Uses a mocked requests session; no network access.
"""

from unittest.mock import Mock

import pytest
import requests

from services.room_registry import RoomRegistryClient
from utils.errors import RegistryUnavailable

ROOM = '77777777-7777-4777-8777-777777777777'


def response(status_code=200, body=None, invalid_json=False):
    resp = Mock(status_code=status_code)
    if invalid_json:
        resp.json.side_effect = ValueError('No JSON object could be decoded')
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return RoomRegistryClient(base_url='http://registry.test/', timeout=2.5, session=session)


class TestRoomExists:
    """Room lookups."""

    def test_existing_room(self, client, session):
        session.get.return_value = response(body={'id': ROOM, 'name': 'A.1.01'})

        assert client.room_exists(ROOM) is True
        session.get.assert_called_once_with(
            f'http://registry.test/api/v3/assets/rooms/{ROOM}', timeout=2.5
        )

    def test_null_deleted_at(self, client, session):
        session.get.return_value = response(body={'id': ROOM, 'deleted_at': None})
        assert client.room_exists(ROOM) is True

    def test_deleted_room(self, client, session):
        session.get.return_value = response(
            body={'id': ROOM, 'deleted_at': '2025-12-01T10:00:00Z'}
        )
        assert client.room_exists(ROOM) is False

    def test_missing_room(self, client, session):
        session.get.return_value = response(status_code=404)
        assert client.room_exists(ROOM) is False

    def test_server_error_means_not_valid(self, client, session):
        session.get.return_value = response(status_code=500)
        assert client.room_exists(ROOM) is False

    def test_invalid_json(self, client, session):
        session.get.return_value = response(invalid_json=True)
        assert client.room_exists(ROOM) is False

    def test_non_object_body(self, client, session):
        session.get.return_value = response(body=['not', 'a', 'room'])
        assert client.room_exists(ROOM) is False

    def test_connection_error(self, client, session):
        session.get.side_effect = requests.ConnectionError('connection refused')

        with pytest.raises(RegistryUnavailable) as exc_info:
            client.room_exists(ROOM)
        assert exc_info.value.codes == ['dependency_unreachable']

    def test_timeout(self, client, session):
        session.get.side_effect = requests.Timeout('read timed out')

        with pytest.raises(RegistryUnavailable):
            client.room_exists(ROOM)


class TestReadiness:
    """Readiness probe."""

    def test_ready(self, client, session):
        session.get.return_value = response(body={'ready': True})

        assert client.probe_ready() == {'ready': True, 'error': None}
        session.get.assert_called_with(
            'http://registry.test/api/v3/assets/health/ready', timeout=2.5
        )

    def test_reports_not_ready(self, client, session):
        session.get.return_value = response(body={'ready': False})
        assert client.probe_ready()['ready'] is False

    def test_bad_status(self, client, session):
        session.get.return_value = response(status_code=503)
        assert client.probe_ready() == {'ready': False, 'error': 'status 503'}

    def test_timeout(self, client, session):
        session.get.side_effect = requests.Timeout('read timed out')
        assert client.probe_ready() == {'ready': False, 'error': 'timeout'}

    def test_connection_error_never_raises(self, client, session):
        session.get.side_effect = requests.ConnectionError('connection refused')

        result = client.probe_ready()

        assert result['ready'] is False
        assert 'connection refused' in result['error']


class TestConfiguration:
    """Client setup."""

    def test_init_app_reads_config(self, app):
        client = RoomRegistryClient()
        app.config['ROOM_REGISTRY_BASE_URL'] = 'http://assets.internal:8080/'
        app.config['ROOM_REGISTRY_RETRIES'] = 2

        client.init_app(app)

        assert client.base_url == 'http://assets.internal:8080'
        assert client.timeout == app.config['ROOM_REGISTRY_TIMEOUT']
        assert app.extensions['room_registry'] is client

    def test_retries_only_for_get(self):
        client = RoomRegistryClient(base_url='http://registry.test', retries=3)

        retry = client.session.get_adapter('http://registry.test').max_retries

        assert retry.total == 3
        assert retry.allowed_methods == frozenset(['GET'])

"""
Pytest configuration and fixtures.
Ensures tests use an isolated database and never call the real room registry.
"""

import os
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

# Set test environment BEFORE importing app
os.environ['FLASK_ENV'] = 'test'

FIXED_NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def app(tmp_path):
    """Create test application with an isolated database file."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['DATABASE_PATH'] = str(tmp_path / 'reservations_test.db')

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def registry(app):
    """Room registry stand-in: every room exists and the registry is ready."""
    from services.room_registry import RoomRegistryClient

    registry = Mock(spec=RoomRegistryClient)
    registry.room_exists.return_value = True
    registry.probe_ready.return_value = {'ready': True, 'error': None}
    app.extensions['room_registry'] = registry
    return registry


@pytest.fixture
def store(app):
    """Reservation store on the test database."""
    from database import get_db
    from models.reservation_store import ReservationStore

    return ReservationStore(get_db())


@pytest.fixture
def service(store, registry):
    """Reservation service with a fixed clock."""
    from services.reservation_service import ReservationService

    return ReservationService(store, registry, clock=lambda: FIXED_NOW)


@pytest.fixture
def runner(app, registry):
    """CLI runner for the flask commands."""
    return app.test_cli_runner()

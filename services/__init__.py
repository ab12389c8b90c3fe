"""
Reservation services package.

Services are built once per application context on top of the context's
database connection and the app's room registry client.
"""

from flask import current_app, g

from database import get_db
from models.reservation_store import ReservationStore
from services.health_service import HealthChecker
from services.reservation_service import ReservationService
from services.room_registry import RoomRegistryClient


def get_room_registry() -> RoomRegistryClient:
    """Room registry client configured on the current app."""
    return current_app.extensions['room_registry']


def get_reservation_service() -> ReservationService:
    """
    Get the reservation service bound to the current application context.

    Returns:
        ReservationService
    """
    if 'reservation_service' not in g:
        g.reservation_service = ReservationService(
            ReservationStore(get_db()),
            get_room_registry()
        )
    return g.reservation_service


def get_health_checker() -> HealthChecker:
    """
    Get the health checker bound to the current application context.

    Returns:
        HealthChecker
    """
    if 'health_checker' not in g:
        g.health_checker = HealthChecker(
            get_room_registry(),
            ReservationStore(get_db()),
            authors=current_app.config.get('API_AUTHORS'),
            api_version=current_app.config.get('API_VERSION')
        )
    return g.health_checker


__all__ = [
    'HealthChecker',
    'ReservationService',
    'RoomRegistryClient',
    'get_room_registry',
    'get_reservation_service',
    'get_health_checker',
]

"""
Room availability checking.
Decides whether a room is free of conflicting active reservations
for a half-open date range.
"""

import logging
from datetime import date

from models.reservation import overlaps
from utils.errors import OperationCancelled, StoreError
from utils.validators import parse_optional_uuid, parse_uuid

logger = logging.getLogger(__name__)


# =============================================================================
# AVAILABILITY
# =============================================================================

def check_room_availability(
    store,
    room_id,
    start_date: date,
    end_date: date,
    exclude_reservation_id=None
) -> dict:
    """
    Check a room for conflicting active reservations on [start_date, end_date).

    start_date <= end_date is not enforced here.

    Args:
        store: ReservationStore to read from
        room_id: Room to check (a room with no reservations is free)
        start_date: Inclusive start
        end_date: Exclusive end
        exclude_reservation_id: Reservation ID to ignore (for updates)

    Returns:
        dict: {
            'free': bool,
            'conflicts': [reservation dicts],
            'error': str or None  (set when the store could not be read)
        }

    Raises:
        OperationCancelled: If the store scan was interrupted
    """
    room_id = parse_uuid(room_id, 'room_id')
    exclude = parse_optional_uuid(exclude_reservation_id, 'id')

    try:
        candidates = store.scan(
            include_deleted=False,
            room_id=room_id,
            overlapping=(start_date, end_date)
        )
    except OperationCancelled:
        raise
    except StoreError as e:
        # Unknown availability is treated as not free
        logger.error(f"Availability check failed for room {room_id}: {e}")
        return {
            'free': False,
            'conflicts': [],
            'error': str(e)
        }

    conflicts = [
        r for r in candidates
        if r.is_active
        and r.room_id == room_id
        and overlaps(r.from_date, r.to_date, start_date, end_date)
        and r.id != exclude
    ]

    if conflicts:
        logger.info(
            f"Room {room_id} not free for {start_date}..{end_date}: "
            f"{len(conflicts)} conflicting reservation(s)"
        )

    return {
        'free': len(conflicts) == 0,
        'conflicts': [r.to_dict() for r in conflicts],
        'error': None
    }


def is_room_free(store, room_id, start_date: date, end_date: date,
                 exclude_reservation_id=None) -> bool:
    """
    Check if a room can be booked for [start_date, end_date).

    Returns:
        bool: True if no active reservation of the room overlaps the range
    """
    result = check_room_availability(
        store, room_id, start_date, end_date, exclude_reservation_id
    )
    return result['free']

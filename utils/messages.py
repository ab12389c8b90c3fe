"""
Centralized user-facing messages.
All error and status text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'reservation_created': 'Reservation created',
    'reservation_replaced': 'Reservation replaced',
    'reservation_deleted': 'Reservation deleted',
    'reservation_deleted_permanently': 'Reservation permanently deleted',

    # Validation messages
    'room_id_required': 'room_id must not be empty.',
    'invalid_room_id': 'Invalid room_id.',
    'invalid_reservation_id': 'Invalid reservation id.',
    'invalid_date': 'Invalid {field} date (YYYY-MM-DD).',
    'invalid_date_range': 'from must not be after to.',
    'room_not_found': 'room_id refers to a non-existing room.',
    'room_not_free': 'room is already reserved for the given date range.',
    'room_availability_unknown': 'room availability could not be verified.',

    # Lookup messages
    'reservation_not_found': 'Reservation not found.',
    'reservation_already_deleted': 'Reservation is already deleted.',

    # Dependency messages
    'room_registry_unreachable': 'Room registry is not reachable.',
    'room_registry_more_info': 'Check the room registry service.',
    'store_unreachable': 'Reservation database is not reachable.',
    'store_more_info': 'Check DATABASE_PATH or database availability.',
    'store_failure': 'Reservation store {action} failed: {error}',
    'operation_cancelled': 'Operation was cancelled.',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get a message by key with optional formatting.

    Args:
        key: Message key
        **kwargs: Format arguments

    Returns:
        Formatted message or the key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message

"""
Input validation helper functions.
Parses raw identifiers and dates coming from outside the service.
"""

import uuid
from datetime import date, datetime

from utils.errors import BAD_REQUEST, ErrorDetail, ValidationFailed
from utils.messages import get_message


NIL_ID = uuid.UUID(int=0)


def is_nil_id(value) -> bool:
    """
    Check for the nil/empty identifier.

    Args:
        value: UUID, string, or None

    Returns:
        True if the value is None, blank, or the all-zero UUID
    """
    if value is None:
        return True
    if isinstance(value, uuid.UUID):
        return value == NIL_ID
    text = str(value).strip()
    if not text:
        return True
    try:
        return uuid.UUID(text) == NIL_ID
    except ValueError:
        return False


def is_valid_id(value) -> bool:
    """Check that a value is a UUID or a string holding one."""
    if isinstance(value, uuid.UUID):
        return True
    try:
        uuid.UUID(str(value).strip())
        return True
    except (ValueError, TypeError):
        return False


def validate_date_range(start_date: date, end_date: date) -> bool:
    """
    Validate that start date is not after end date.

    Args:
        start_date: Inclusive start
        end_date: Exclusive end

    Returns:
        True if valid date range (equal dates are allowed)
    """
    return start_date <= end_date


def validate_date_format(date_str: str) -> bool:
    """
    Validate date is in YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    if not date_str:
        return False

    try:
        datetime.strptime(date_str, '%Y-%m-%d')
        return True
    except (ValueError, TypeError):
        return False


def parse_uuid(value, field: str = 'room_id') -> uuid.UUID:
    """
    Parse an identifier string.

    Raises:
        ValidationFailed: bad_request if the value is not a UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, AttributeError, TypeError):
        key = 'invalid_room_id' if field == 'room_id' else 'invalid_reservation_id'
        raise ValidationFailed([ErrorDetail(BAD_REQUEST, get_message(key))])


def parse_date(value, field: str) -> date:
    """
    Parse a YYYY-MM-DD date string.

    Raises:
        ValidationFailed: bad_request if the value is not a calendar date
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not validate_date_format(value):
        raise ValidationFailed([
            ErrorDetail(BAD_REQUEST, get_message('invalid_date', field=field))
        ])
    return datetime.strptime(value, '%Y-%m-%d').date()


def parse_optional_date(value, field: str):
    """Parse a date filter; blank values mean 'no filter'."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date(value.strip() if isinstance(value, str) else value, field)


def parse_optional_uuid(value, field: str = 'room_id'):
    """Parse an identifier filter; blank values mean 'no filter'."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_uuid(value, field)

"""
Reservation error types.

Every failure carries one or more ErrorDetail entries whose `code` is one of
the error kinds below, so callers can tell validation rejections, missing
records, conflicts and dependency failures apart.
"""

from dataclasses import dataclass
from typing import List, Optional


BAD_REQUEST = 'bad_request'
ROOM_NOT_FOUND = 'room_not_found'
ROOM_NOT_FREE = 'room_not_free'
RESERVATION_NOT_FOUND = 'reservation_not_found'
RESERVATION_ALREADY_DELETED = 'reservation_already_deleted'
DEPENDENCY_UNREACHABLE = 'dependency_unreachable'
STORE_FAILURE = 'store_failure'
OPERATION_CANCELLED = 'operation_cancelled'


@dataclass(frozen=True)
class ErrorDetail:
    """A single structured error entry."""

    code: str
    message: str
    more_info: Optional[str] = None

    def to_dict(self) -> dict:
        data = {'code': self.code, 'message': self.message}
        if self.more_info:
            data['more_info'] = self.more_info
        return data


class ReservationError(Exception):
    """Base class for reservation failures."""

    code = BAD_REQUEST

    def __init__(self, message: str = None, errors: List[ErrorDetail] = None):
        if errors is None:
            errors = [ErrorDetail(self.code, message or self.__class__.__name__)]
        self.errors = list(errors)
        super().__init__(message or '; '.join(e.message for e in self.errors))

    @property
    def codes(self) -> List[str]:
        return [e.code for e in self.errors]


class ValidationFailed(ReservationError):
    """Create/upsert was rejected; `errors` lists every violated check."""

    def __init__(self, errors: List[ErrorDetail]):
        super().__init__(errors=errors)


class ReservationNotFound(ReservationError):
    code = RESERVATION_NOT_FOUND


class ReservationAlreadyDeleted(ReservationError):
    code = RESERVATION_ALREADY_DELETED


class RoomNotFree(ReservationError):
    """Raised by the store when the overlap guard rejects a write."""

    code = ROOM_NOT_FREE


class RegistryUnavailable(ReservationError):
    """The room registry could not be reached (connection error or timeout)."""

    code = DEPENDENCY_UNREACHABLE


class StoreError(ReservationError):
    """A store read or write failed."""

    code = STORE_FAILURE


class OperationCancelled(ReservationError):
    """A blocking store operation was interrupted by the caller."""

    code = OPERATION_CANCELLED

"""
Reservation entity.

A reservation books one room for the half-open date range [from, to).
It is active while `deleted_at` is unset; soft-deleted records stay in the
store and keep their id.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from utils.datetime_helpers import format_timestamp, parse_timestamp


def overlaps(a_from: date, a_to: date, b_from: date, b_to: date) -> bool:
    """
    Half-open interval overlap test.

    Ranges that only touch (a_to == b_from) do not overlap.
    """
    return a_from < b_to and b_from < a_to


@dataclass
class Reservation:
    """A room booking."""

    id: uuid.UUID
    room_id: uuid.UUID
    from_date: date
    to_date: date
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None

    def overlaps(self, from_date: date, to_date: date) -> bool:
        return overlaps(self.from_date, self.to_date, from_date, to_date)

    def copy(self, **changes) -> 'Reservation':
        return replace(self, **changes)

    @classmethod
    def from_row(cls, row) -> 'Reservation':
        """
        Build a reservation from a database row.

        Args:
            row: sqlite3.Row or dict with id, room_id, from, to, deleted_at

        Returns:
            Reservation
        """
        return cls(
            id=uuid.UUID(row['id']),
            room_id=uuid.UUID(row['room_id']),
            from_date=date.fromisoformat(row['from']),
            to_date=date.fromisoformat(row['to']),
            deleted_at=parse_timestamp(row['deleted_at']),
        )

    def to_row(self) -> tuple:
        """Column values in (id, room_id, from, to, deleted_at) order."""
        return (
            str(self.id),
            str(self.room_id),
            self.from_date.isoformat(),
            self.to_date.isoformat(),
            format_timestamp(self.deleted_at) if self.deleted_at else None,
        )

    def to_dict(self) -> dict:
        """Serialize for output; deleted_at is omitted when unset."""
        data = {
            'id': str(self.id),
            'room_id': str(self.room_id),
            'from': self.from_date.isoformat(),
            'to': self.to_date.isoformat(),
        }
        if self.deleted_at is not None:
            data['deleted_at'] = format_timestamp(self.deleted_at)
        return data

"""
Reservation store.
Keyed SQLite storage for reservation records: scan, lookup, insert,
update, remove, and a connectivity probe.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from typing import List, Optional, Tuple

from database.schema import ROOM_NOT_FREE_ABORT
from models.reservation import Reservation
from utils.errors import OperationCancelled, RoomNotFree, StoreError
from utils.messages import get_message

logger = logging.getLogger(__name__)


COLUMNS = 'id, room_id, "from", "to", deleted_at'


def translate_error(exc: sqlite3.Error, action: str) -> Exception:
    """
    Map a sqlite3 error to the reservation error it represents.

    Args:
        exc: The sqlite3 error raised by the driver
        action: Short description of what was attempted (for the log)

    Returns:
        RoomNotFree, OperationCancelled, or StoreError
    """
    message = str(exc)
    if isinstance(exc, sqlite3.IntegrityError) and ROOM_NOT_FREE_ABORT in message:
        return RoomNotFree(get_message('room_not_free'))
    if isinstance(exc, sqlite3.OperationalError) and 'interrupted' in message:
        return OperationCancelled(get_message('operation_cancelled'))
    logger.error(f"Store failure during {action}: {exc}", exc_info=True)
    return StoreError(get_message('store_failure', action=action, error=message))


class ReservationStore:
    """
    Reservation persistence over a sqlite3 connection.

    The connection must be in autocommit mode (isolation_level=None);
    mutations open their own BEGIN IMMEDIATE transaction unless the caller
    already holds one via `transaction()`.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    @contextmanager
    def transaction(self):
        """
        Run a block of store calls in one write transaction.

        Nested use joins the outer transaction.
        """
        if self.conn.in_transaction:
            yield self
            return

        try:
            self.conn.execute('BEGIN IMMEDIATE')
        except sqlite3.Error as e:
            raise translate_error(e, 'begin transaction') from e

        try:
            yield self
        except BaseException:
            if self.conn.in_transaction:
                self.conn.execute('ROLLBACK')
            raise
        else:
            try:
                self.conn.execute('COMMIT')
            except sqlite3.Error as e:
                if self.conn.in_transaction:
                    self.conn.execute('ROLLBACK')
                raise translate_error(e, 'commit') from e

    def cancel(self) -> None:
        """Abort the statement currently running on this connection."""
        self.conn.interrupt()

    # =========================================================================
    # READ
    # =========================================================================

    def scan(
        self,
        include_deleted: bool = False,
        room_id=None,
        overlapping: Optional[Tuple[date, date]] = None
    ) -> List[Reservation]:
        """
        Scan reservations.

        Args:
            include_deleted: Include soft-deleted records
            room_id: Restrict to one room
            overlapping: (from, to) range; keep records overlapping [from, to)

        Returns:
            list: Reservation objects in store order
        """
        query = f'SELECT {COLUMNS} FROM reservations WHERE 1=1'
        params = []

        if not include_deleted:
            query += ' AND deleted_at IS NULL'

        if room_id is not None:
            query += ' AND room_id = ?'
            params.append(str(room_id))

        if overlapping is not None:
            start, end = overlapping
            query += ' AND "from" < ? AND "to" > ?'
            params.extend([end.isoformat(), start.isoformat()])

        try:
            rows = self.conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise translate_error(e, 'scan') from e

        return [Reservation.from_row(row) for row in rows]

    def get(self, reservation_id) -> Optional[Reservation]:
        """
        Get a reservation by id, including soft-deleted records.

        Returns:
            Reservation or None if not found
        """
        try:
            row = self.conn.execute(
                f'SELECT {COLUMNS} FROM reservations WHERE id = ?',
                (str(reservation_id),)
            ).fetchone()
        except sqlite3.Error as e:
            raise translate_error(e, 'get') from e

        return Reservation.from_row(row) if row else None

    def ping(self) -> bool:
        """
        Trivial round trip used by readiness checks.

        Raises:
            StoreError: If the database cannot answer
        """
        try:
            row = self.conn.execute('SELECT 1').fetchone()
        except sqlite3.Error as e:
            raise translate_error(e, 'ping') from e
        return row is not None and row[0] == 1

    # =========================================================================
    # WRITE
    # =========================================================================

    def insert(self, reservation: Reservation) -> Reservation:
        """
        Insert a new reservation.

        Raises:
            RoomNotFree: If the overlap guard rejects the row
            StoreError: On any other database failure
        """
        with self.transaction():
            try:
                self.conn.execute(
                    f'INSERT INTO reservations ({COLUMNS}) VALUES (?, ?, ?, ?, ?)',
                    reservation.to_row()
                )
            except sqlite3.Error as e:
                raise translate_error(e, 'insert') from e

        logger.debug(f"Inserted reservation {reservation.id}")
        return reservation

    def update(self, reservation: Reservation) -> bool:
        """
        Overwrite room, dates, and deleted_at of an existing reservation.

        Returns:
            bool: True if a row was updated
        """
        record_id, room_id, start, end, deleted_at = reservation.to_row()
        with self.transaction():
            try:
                cursor = self.conn.execute('''
                    UPDATE reservations
                    SET room_id = ?, "from" = ?, "to" = ?, deleted_at = ?
                    WHERE id = ?
                ''', (room_id, start, end, deleted_at, record_id))
            except sqlite3.Error as e:
                raise translate_error(e, 'update') from e

        logger.debug(f"Updated reservation {reservation.id} ({cursor.rowcount} rows)")
        return cursor.rowcount > 0

    def remove(self, reservation_id) -> bool:
        """
        Permanently delete a reservation.

        Returns:
            bool: True if a row was removed
        """
        with self.transaction():
            try:
                cursor = self.conn.execute(
                    'DELETE FROM reservations WHERE id = ?',
                    (str(reservation_id),)
                )
            except sqlite3.Error as e:
                raise translate_error(e, 'remove') from e

        logger.debug(f"Removed reservation {reservation_id} ({cursor.rowcount} rows)")
        return cursor.rowcount > 0

"""
Tests for the SQLite reservation store.
"""

import sqlite3
import uuid
from datetime import date, datetime, timezone
from unittest.mock import Mock

import pytest

from models.reservation import Reservation
from models.reservation_store import ReservationStore, translate_error
from utils.errors import OperationCancelled, RoomNotFree, StoreError

ROOM = uuid.UUID('33333333-3333-4333-8333-333333333333')
OTHER_ROOM = uuid.UUID('44444444-4444-4444-8444-444444444444')
DELETED_AT = datetime(2026, 1, 2, 8, 30, tzinfo=timezone.utc)


def make(room_id=ROOM, start='2026-01-10', end='2026-01-15', deleted_at=None):
    return Reservation(
        id=uuid.uuid4(),
        room_id=room_id,
        from_date=date.fromisoformat(start),
        to_date=date.fromisoformat(end),
        deleted_at=deleted_at,
    )


class TestScan:

    def test_scan_active_only_by_default(self, store):
        active = store.insert(make())
        deleted = store.insert(make(start='2026-02-01', end='2026-02-03', deleted_at=DELETED_AT))

        assert [r.id for r in store.scan()] == [active.id]
        assert {r.id for r in store.scan(include_deleted=True)} == {active.id, deleted.id}

    def test_scan_by_room(self, store):
        store.insert(make())
        other = store.insert(make(room_id=OTHER_ROOM))

        assert [r.id for r in store.scan(room_id=OTHER_ROOM)] == [other.id]

    def test_scan_overlapping_range(self, store):
        inside = store.insert(make(start='2026-01-10', end='2026-01-15'))
        store.insert(make(start='2026-01-15', end='2026-01-20'))

        result = store.scan(room_id=ROOM, overlapping=(date(2026, 1, 12), date(2026, 1, 15)))

        assert [r.id for r in result] == [inside.id]


class TestReadWrite:

    def test_get_round_trip(self, store):
        reservation = store.insert(make(deleted_at=DELETED_AT))

        loaded = store.get(reservation.id)

        assert loaded == reservation
        assert loaded.deleted_at == DELETED_AT

    def test_get_missing(self, store):
        assert store.get(uuid.uuid4()) is None

    def test_update(self, store):
        reservation = store.insert(make())

        assert store.update(reservation.copy(room_id=OTHER_ROOM, to_date=date(2026, 1, 20))) is True

        loaded = store.get(reservation.id)
        assert loaded.room_id == OTHER_ROOM
        assert loaded.to_date == date(2026, 1, 20)

    def test_update_missing(self, store):
        assert store.update(make()) is False

    def test_remove(self, store):
        reservation = store.insert(make())

        assert store.remove(reservation.id) is True
        assert store.remove(reservation.id) is False
        assert store.scan(include_deleted=True) == []

    def test_ping(self, store):
        assert store.ping() is True


class TestOverlapGuard:
    """The storage-level guard rejects overlapping active rows."""

    def test_insert_overlap_rejected(self, store):
        store.insert(make(start='2026-01-10', end='2026-01-15'))

        with pytest.raises(RoomNotFree):
            store.insert(make(start='2026-01-14', end='2026-01-20'))

        assert len(store.scan()) == 1

    def test_touching_allowed(self, store):
        store.insert(make(start='2026-01-10', end='2026-01-15'))
        store.insert(make(start='2026-01-15', end='2026-01-20'))

        assert len(store.scan()) == 2

    def test_soft_deleted_rows_ignored(self, store):
        store.insert(make(deleted_at=DELETED_AT))
        store.insert(make())

        assert len(store.scan(include_deleted=True)) == 2

    def test_restore_into_conflict_rejected(self, store):
        deleted = store.insert(make(deleted_at=DELETED_AT))
        store.insert(make())

        with pytest.raises(RoomNotFree):
            store.update(deleted.copy(deleted_at=None))

        assert store.get(deleted.id).is_deleted


class TestTransactions:

    def test_rollback_on_error(self, store):
        reservation = make()

        with pytest.raises(RuntimeError):
            with store.transaction():
                store.insert(reservation)
                raise RuntimeError('abort')

        assert store.get(reservation.id) is None

    def test_nested_calls_join_outer_transaction(self, store):
        first, second = make(), make(room_id=OTHER_ROOM)

        with store.transaction():
            store.insert(first)
            store.insert(second)
            assert store.conn.in_transaction

        assert not store.conn.in_transaction
        assert len(store.scan()) == 2


class TestErrorTranslation:

    def test_interrupted_is_cancellation(self):
        error = translate_error(sqlite3.OperationalError('interrupted'), 'scan')
        assert isinstance(error, OperationCancelled)

    def test_other_errors_are_store_errors(self):
        error = translate_error(sqlite3.OperationalError('disk I/O error'), 'insert')
        assert isinstance(error, StoreError)
        assert error.codes == ['store_failure']
        assert str(error) == 'Reservation store insert failed: disk I/O error'

    def test_scan_failure_raises_store_error(self):
        conn = Mock()
        conn.execute.side_effect = sqlite3.OperationalError('no such table: reservations')

        with pytest.raises(StoreError):
            ReservationStore(conn).scan()

    def test_cancel_interrupts_connection(self):
        conn = Mock()
        ReservationStore(conn).cancel()
        conn.interrupt.assert_called_once_with()

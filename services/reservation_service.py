"""
Business logic for reservation lifecycle operations.

Create, replace-or-create, delete (soft or permanent), get and list.
Every mutation is gated by the same checks, run in full so the caller
sees every violation at once:

1. room_id is not the nil/empty identifier
2. from is not after to
3. the room registry knows the room and it is not deleted
4. the room is free for [from, to)
"""

import logging
import uuid
from datetime import date
from typing import Callable, List, Optional, Tuple

from models.reservation import Reservation
from models.reservation_availability import check_room_availability
from models.reservation_store import ReservationStore
from services.room_registry import RoomRegistryClient
from utils.datetime_helpers import get_now
from utils.errors import (
    BAD_REQUEST,
    DEPENDENCY_UNREACHABLE,
    ROOM_NOT_FOUND,
    ROOM_NOT_FREE,
    ErrorDetail,
    RegistryUnavailable,
    ReservationAlreadyDeleted,
    ReservationNotFound,
    RoomNotFree,
    ValidationFailed,
)
from utils.messages import get_message
from utils.validators import (
    is_nil_id,
    is_valid_id,
    parse_optional_uuid,
    parse_uuid,
    validate_date_range,
)

logger = logging.getLogger(__name__)


class ReservationService:
    """Reservation lifecycle manager."""

    def __init__(
        self,
        store: ReservationStore,
        room_registry: RoomRegistryClient,
        clock: Callable = get_now
    ):
        self.store = store
        self.room_registry = room_registry
        self.clock = clock

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate_booking(
        self,
        room_id,
        from_date: date,
        to_date: date,
        exclude_reservation_id=None
    ) -> List[ErrorDetail]:
        """
        Run every admission check and collect the failures.

        Args:
            room_id: Room to book
            from_date: Inclusive start
            to_date: Exclusive end
            exclude_reservation_id: Reservation ignored by the conflict scan

        Returns:
            list: ErrorDetail entries, empty when the booking is admissible
        """
        errors = []

        room = None
        if is_nil_id(room_id):
            errors.append(ErrorDetail(BAD_REQUEST, get_message('room_id_required')))
        elif not is_valid_id(room_id):
            errors.append(ErrorDetail(BAD_REQUEST, get_message('invalid_room_id')))
        else:
            room = parse_uuid(room_id, 'room_id')

        range_valid = validate_date_range(from_date, to_date)
        if not range_valid:
            errors.append(ErrorDetail(BAD_REQUEST, get_message('invalid_date_range')))

        if room is not None:
            room_id = room
            try:
                if not self.room_registry.room_exists(room_id):
                    errors.append(ErrorDetail(ROOM_NOT_FOUND, get_message('room_not_found')))
            except RegistryUnavailable:
                errors.append(ErrorDetail(
                    DEPENDENCY_UNREACHABLE,
                    get_message('room_registry_unreachable'),
                    get_message('room_registry_more_info')
                ))

            availability = check_room_availability(
                self.store, room_id, from_date, to_date, exclude_reservation_id
            )
            if not availability['free']:
                key = 'room_availability_unknown' if availability['error'] else 'room_not_free'
                errors.append(ErrorDetail(ROOM_NOT_FREE, get_message(key)))

        if errors:
            logger.warning(
                f"Rejected booking of room {room_id} for {from_date}..{to_date}: "
                f"{[e.code for e in errors]}"
            )
        return errors

    # =========================================================================
    # READ
    # =========================================================================

    def get_reservation(self, reservation_id) -> Optional[Reservation]:
        """
        Get a reservation by id, soft-deleted or not.

        Raises:
            ValidationFailed: bad_request if the id is not a UUID
        """
        return self.store.get(parse_uuid(reservation_id, 'id'))

    def list_reservations(
        self,
        include_deleted: bool = False,
        room_id=None,
        before: Optional[date] = None,
        after: Optional[date] = None
    ) -> List[Reservation]:
        """
        List reservations with optional filters (AND-combined).

        Args:
            include_deleted: Include soft-deleted reservations
            room_id: Exact room match
            before: Keep reservations starting on or before this date
            after: Keep reservations ending on or after this date

        Returns:
            list: Reservations, order not guaranteed
        """
        reservations = self.store.scan(include_deleted=include_deleted)

        room_id = parse_optional_uuid(room_id, 'room_id')
        if room_id is not None:
            reservations = [r for r in reservations if r.room_id == room_id]

        if before is not None:
            reservations = [r for r in reservations if r.from_date <= before]

        if after is not None:
            reservations = [r for r in reservations if r.to_date >= after]

        return reservations

    # =========================================================================
    # CREATE / UPSERT
    # =========================================================================

    def create_reservation(self, room_id, from_date: date, to_date: date) -> Reservation:
        """
        Create a reservation with a new id.

        Returns:
            Reservation: The stored record

        Raises:
            ValidationFailed: With every failed check; nothing is stored
            StoreError: If the write itself fails
        """
        errors = self.validate_booking(room_id, from_date, to_date)
        if errors:
            raise ValidationFailed(errors)

        reservation = Reservation(
            id=uuid.uuid4(),
            room_id=parse_uuid(room_id, 'room_id'),
            from_date=from_date,
            to_date=to_date,
        )

        try:
            self.store.insert(reservation)
        except RoomNotFree:
            # Lost the race against a concurrent writer
            raise ValidationFailed([ErrorDetail(ROOM_NOT_FREE, get_message('room_not_free'))])

        logger.info(
            f"Created reservation {reservation.id} for room {reservation.room_id} "
            f"({from_date}..{to_date})"
        )
        return reservation

    def upsert_reservation(
        self,
        reservation_id,
        room_id,
        from_date: date,
        to_date: date
    ) -> Tuple[bool, Reservation]:
        """
        Replace the reservation with this id, or create it if absent.

        Replacing a soft-deleted reservation restores it.

        Returns:
            tuple: (created, reservation)

        Raises:
            ValidationFailed: With every failed check; nothing is stored
            StoreError: If the write itself fails
        """
        errors = []
        record_id = None
        if is_nil_id(reservation_id) or not is_valid_id(reservation_id):
            errors.append(ErrorDetail(BAD_REQUEST, get_message('invalid_reservation_id')))
        else:
            record_id = parse_uuid(reservation_id, 'id')
        errors += self.validate_booking(
            room_id, from_date, to_date, exclude_reservation_id=record_id
        )
        if errors:
            raise ValidationFailed(errors)

        reservation = Reservation(
            id=record_id,
            room_id=parse_uuid(room_id, 'room_id'),
            from_date=from_date,
            to_date=to_date,
            deleted_at=None,
        )

        try:
            with self.store.transaction():
                existing = self.store.get(reservation.id)
                if existing is not None:
                    self.store.update(reservation)
                    created = False
                else:
                    self.store.insert(reservation)
                    created = True
        except RoomNotFree:
            raise ValidationFailed([ErrorDetail(ROOM_NOT_FREE, get_message('room_not_free'))])

        if created:
            logger.info(f"Created reservation {reservation.id} via upsert for room {reservation.room_id}")
        else:
            restored = ' (restored)' if existing.is_deleted else ''
            logger.info(f"Replaced reservation {reservation.id}{restored}")
        return created, reservation

    # =========================================================================
    # DELETE
    # =========================================================================

    def delete_reservation(self, reservation_id, permanent: bool = False) -> Reservation:
        """
        Delete a reservation.

        Args:
            reservation_id: Reservation to delete
            permanent: Remove the row instead of setting deleted_at

        Returns:
            Reservation: The record as it was before the call

        Raises:
            ReservationNotFound: No record with this id, deleted or not
            ReservationAlreadyDeleted: Soft delete of a soft-deleted record
            StoreError: If the write itself fails
        """
        record_id = parse_uuid(reservation_id, 'id')
        with self.store.transaction():
            existing = self.store.get(record_id)
            if existing is None:
                raise ReservationNotFound(get_message('reservation_not_found'))

            if permanent:
                self.store.remove(existing.id)
                logger.info(f"Permanently deleted reservation {existing.id}")
                return existing

            if existing.is_deleted:
                raise ReservationAlreadyDeleted(get_message('reservation_already_deleted'))

            self.store.update(existing.copy(deleted_at=self.clock()))

        logger.info(f"Soft-deleted reservation {existing.id}")
        return existing

# backend/forest_reservation/services/reservation_service.py
"""
Reservation Service for the forest reservation service.

Handles all reservation business logic:
- Creating reservations (availability and capacity checks, counter increment)
- Deleting reservations with the compensating counter decrement
- Admin listing/search and the public name + phone lookup
"""

from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.constants import RESERVATION_ID_MAX_ATTEMPTS
from ..core.enums import TimeSlot
from ..core.exceptions import (
    CapacityExceededException,
    ReservationNotFoundException,
    ServiceException,
    SlotClosedException,
    SlotNotFoundException,
    ValidationException,
)
from ..core.messages import MSG_LOOKUP_FIELDS_REQUIRED, MSG_RESERVATION_ID_EXHAUSTED
from ..core.reservation_id import generate_reservation_id
from ..core.timezone_utils import get_business_today
from ..domain.records import ReservationRecord, SlotState
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.interfaces import IReservationRepository
from ..schemas.reservation import ReservationCreate
from . import slot_mutators
from .availability_service import AvailabilityService
from .base import BaseService


class ReservationService(BaseService):
    """
    Service layer for reservation operations.

    Shares its session with the AvailabilityService it is given, so the
    counter update and the reservation row commit together.
    """

    def __init__(
        self,
        db: Optional[Session],
        reservation_repository: IReservationRepository,
        availability_service: AvailabilityService,
        settings: Settings,
        today_provider: Optional[Callable[[], date]] = None,
    ):
        super().__init__(db)
        self.reservation_repository = reservation_repository
        self.availability_service = availability_service
        self.settings = settings
        self.today_provider = today_provider or (
            lambda: get_business_today(settings.business_timezone)
        )

    def _new_reservation_id(self) -> str:
        issued_on = self.today_provider()
        for _ in range(RESERVATION_ID_MAX_ATTEMPTS):
            candidate = generate_reservation_id(issued_on)
            if not self.reservation_repository.exists(candidate):
                return candidate
        self.logger.error(
            "Could not find a free reservation id",
            extra={"issued_on": issued_on.isoformat(), "attempts": RESERVATION_ID_MAX_ATTEMPTS},
        )
        raise ServiceException(MSG_RESERVATION_ID_EXHAUSTED, code="RESERVATION_ID_EXHAUSTED")

    def _check_bookable(self, slot: SlotState, participants: int) -> None:
        """
        Booking policy: the slot must be effectively available and, when
        capacity enforcement is on, have room for every participant.
        """
        if not self.availability_service.effective_available(slot):
            prometheus_metrics.record_reservation_rejected("slot_closed")
            raise SlotClosedException(slot.date, slot.time_slot)

        if self.settings.enforce_capacity and slot.reserved + participants > slot.capacity:
            prometheus_metrics.record_reservation_rejected("capacity_exceeded")
            raise CapacityExceededException(
                slot.date, slot.time_slot, requested=participants, remaining=slot.remaining
            )

    @BaseService.measure_operation("create_reservation")
    def create_reservation(self, data: ReservationCreate) -> ReservationRecord:
        """
        Book a slot for a group.

        Args:
            data: Validated reservation payload

        Returns:
            The stored reservation with its generated id

        Raises:
            SlotNotFoundException: no slot exists for (date, time_slot)
            SlotClosedException: the slot is not available
            CapacityExceededException: not enough room left
        """
        slot_date = data.slot_date
        time_slot = TimeSlot(data.time_slot)
        availability = self.availability_service

        with availability.locked_slot(slot_date, time_slot):
            current = availability.availability_repository.get_slot_for_update(slot_date, time_slot)
            if current is None:
                prometheus_metrics.record_reservation_rejected("slot_not_found")
                raise SlotNotFoundException(slot_date, time_slot)

            self._check_bookable(current, data.participants)

            # Row first: the memory backend has no rollback for the counter
            record = self.reservation_repository.create(
                ReservationRecord(
                    reservation_id=self._new_reservation_id(),
                    date=slot_date,
                    time_slot=time_slot,
                    name=data.name,
                    inst_name=data.inst_name,
                    phone=data.phone,
                    participants=data.participants,
                    desired_activity=data.desired_activity.value,
                    parent_participation=data.parent_participation.value,
                    email=data.email,
                    notes=data.notes,
                    created_at=datetime.now(timezone.utc),
                )
            )
            updated = availability.apply_mutator(
                slot_date, time_slot, slot_mutators.book(data.participants)
            )

        prometheus_metrics.record_reservation_created(time_slot.value)
        self.log_operation(
            "create_reservation",
            reservation_id=record.reservation_id,
            slot_date=slot_date.isoformat(),
            time_slot=time_slot.value,
            participants=record.participants,
            reserved_after=updated.reserved,
        )
        return record

    @BaseService.measure_operation("delete_reservation")
    def delete_reservation(self, reservation_id: str) -> ReservationRecord:
        """
        Delete a reservation and give its seats back to the slot.

        A slot that no longer exists is logged and skipped; the reservation
        is still deleted.

        Raises:
            ReservationNotFoundException: if the id does not exist
        """
        existing = self.reservation_repository.get(reservation_id)
        if existing is None:
            raise ReservationNotFoundException(reservation_id)

        availability = self.availability_service
        with availability.locked_slot(existing.date, existing.time_slot):
            removed = self.reservation_repository.delete(reservation_id)
            if removed is None:
                # Deleted by a concurrent request between lookup and lock
                raise ReservationNotFoundException(reservation_id)

            slot = availability.availability_repository.adjust_reserved(
                removed.date, removed.time_slot, -removed.participants
            )
            if slot is None:
                self.logger.warning(
                    "Slot missing while releasing reservation",
                    extra={
                        "reservation_id": reservation_id,
                        "slot_date": removed.date.isoformat(),
                        "time_slot": removed.time_slot.value,
                    },
                )

        prometheus_metrics.record_reservation_deleted(removed.time_slot.value)
        self.log_operation(
            "delete_reservation",
            reservation_id=reservation_id,
            participants=removed.participants,
            reserved_after=slot.reserved if slot is not None else None,
        )
        return removed

    def get_reservation(self, reservation_id: str) -> ReservationRecord:
        record = self.reservation_repository.get(reservation_id)
        if record is None:
            raise ReservationNotFoundException(reservation_id)
        return record

    @BaseService.measure_operation("list_reservations")
    def list_reservations(self, query: Optional[str] = None) -> List[ReservationRecord]:
        """All reservations newest first, optionally filtered by a substring."""
        return self.reservation_repository.list_all(query=query)

    def list_reservations_by_date(self, reservation_date: date) -> List[ReservationRecord]:
        return self.reservation_repository.list_by_date(reservation_date)

    @BaseService.measure_operation("lookup_reservations")
    def lookup_reservations(self, name: Optional[str], phone: Optional[str]) -> List[ReservationRecord]:
        """
        Public lookup by organization name and phone (both required, exact match).

        Raises:
            ValidationException: if either field is blank
        """
        name = (name or "").strip()
        phone = (phone or "").strip()
        if not name or not phone:
            raise ValidationException(MSG_LOOKUP_FIELDS_REQUIRED, code="LOOKUP_FIELDS_REQUIRED")
        return self.reservation_repository.find_by_name_and_phone(name, phone)

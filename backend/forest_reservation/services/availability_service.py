# backend/forest_reservation/services/availability_service.py
"""
Availability Service for the forest reservation service.

Owns the capacity engine:
- read models (slot, day, month) with the effective-availability rule
- the read-modify-write contract for slot updates
- atomic reserved-count adjustments
- admin edits and the full reset

Every mutation of a slot happens while holding that slot's KeyedLock and
inside one transaction, so two requests touching the same (date, time_slot)
are applied one after the other and neither update is lost.
"""

from contextlib import contextmanager
from datetime import date
import logging
from typing import Callable, Iterator, List, Optional

from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.enums import TimeSlot
from ..core.exceptions import (
    DuplicateRecordError,
    DuplicateSlotException,
    ServiceException,
    SlotNotFoundException,
)
from ..core.slot_lock import KeyedLock, slot_key
from ..core.timezone_utils import get_business_today, month_bounds, validate_year_month
from ..domain.records import CalendarDay, DayAvailability, SlotState, SlotView
from ..repositories.interfaces import IAvailabilityRepository, IReservationRepository
from . import slot_mutators
from .base import BaseService
from .seeding_service import SeedingService, SeedResult
from .slot_mutators import SlotMutator

logger = logging.getLogger(__name__)


class AvailabilityService(BaseService):
    """
    Service layer for availability slots.

    Attributes:
        availability_repository: Slot persistence port
        reservation_repository: Used by reset to clear reservations
        slot_locks: Process-wide per-slot lock table shared by all requests
    """

    def __init__(
        self,
        db: Optional[Session],
        availability_repository: IAvailabilityRepository,
        reservation_repository: IReservationRepository,
        settings: Settings,
        slot_locks: KeyedLock,
        seeding_service: Optional[SeedingService] = None,
        today_provider: Optional[Callable[[], date]] = None,
    ):
        super().__init__(db)
        self.availability_repository = availability_repository
        self.reservation_repository = reservation_repository
        self.settings = settings
        self.slot_locks = slot_locks
        self.seeding_service = seeding_service
        self.today_provider = today_provider or (
            lambda: get_business_today(settings.business_timezone)
        )

    # ------------------------------------------------------------------
    # Effective availability
    # ------------------------------------------------------------------

    def effective_available(self, slot: SlotState) -> bool:
        """
        Whether a slot is open for booking as seen by clients.

        A stored override wins; without one the slot is open when it has
        headroom and is not on the closed weekday. Past dates are closed when
        ``close_past_dates`` is enabled.
        """
        if self.settings.close_past_dates and slot.date < self.today_provider():
            return False
        if slot.available is not None:
            return bool(slot.available)
        return slot.date.weekday() != self.settings.closed_weekday and slot.capacity > slot.reserved

    def slot_view(self, slot: Optional[SlotState]) -> SlotView:
        if slot is None:
            return SlotView.closed()
        return SlotView(
            available=self.effective_available(slot),
            capacity=slot.capacity,
            reserved=slot.reserved,
        )

    def _compose_day(
        self, day: date, morning: Optional[SlotState], afternoon: Optional[SlotState]
    ) -> DayAvailability:
        return DayAvailability(
            date=day,
            morning=self.slot_view(morning),
            afternoon=self.slot_view(afternoon),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_slot(self, slot_date: date, time_slot: TimeSlot) -> Optional[SlotState]:
        """Exact lookup; None when no seed or admin update created the slot."""
        return self.availability_repository.get_slot(slot_date, TimeSlot(time_slot))

    @BaseService.measure_operation("get_day")
    def get_day(self, day: date) -> DayAvailability:
        """Both slots of a day; absent slots are reported closed with zero counters."""
        slots = {s.time_slot: s for s in self.availability_repository.list_between(day, day)}
        return self._compose_day(day, slots.get(TimeSlot.MORNING), slots.get(TimeSlot.AFTERNOON))

    @BaseService.measure_operation("get_month")
    def get_month(self, year: int, month: int) -> List[DayAvailability]:
        """
        One entry per date of the month that has at least one slot, ordered by date.

        Dates without any slot (closed weekday, outside the seeded window)
        are omitted rather than synthesized.
        """
        validate_year_month(year, month)
        first, last = month_bounds(year, month)
        by_date: dict[date, dict[TimeSlot, SlotState]] = {}
        for slot in self.availability_repository.list_between(first, last):
            by_date.setdefault(slot.date, {})[slot.time_slot] = slot

        return [
            self._compose_day(day, slots.get(TimeSlot.MORNING), slots.get(TimeSlot.AFTERNOON))
            for day, slots in sorted(by_date.items())
        ]

    def get_calendar(self, year: int, month: int) -> List[CalendarDay]:
        """Compact form of get_month() for the booking calendar."""
        return [CalendarDay.from_day(day) for day in self.get_month(year, month)]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @contextmanager
    def locked_slot(self, slot_date: date, time_slot: TimeSlot) -> Iterator[None]:
        """
        Exclusive scope for one slot: per-key lock plus a transaction.

        The lock is released only after the transaction committed or rolled
        back, so the next holder always reads committed state.
        """
        with self.slot_locks.hold(slot_key(slot_date, TimeSlot(time_slot))):
            with self.transaction():
                yield

    def apply_mutator(
        self, slot_date: date, time_slot: TimeSlot, mutator: SlotMutator
    ) -> SlotState:
        """
        Read, mutate and persist one slot. Caller must be inside locked_slot().

        Raises:
            SlotNotFoundException: if the slot does not exist
        """
        current = self.availability_repository.get_slot_for_update(slot_date, TimeSlot(time_slot))
        if current is None:
            raise SlotNotFoundException(slot_date, TimeSlot(time_slot))

        updated = mutator(current)
        if updated.key != current.key:
            raise ServiceException("Slot mutators must not change the slot key", code="BAD_MUTATOR")
        if updated.reserved < 0 or updated.capacity < 0:
            raise ServiceException(
                "Slot counters must not be negative",
                code="BAD_MUTATOR",
                details={"reserved": updated.reserved, "capacity": updated.capacity},
            )

        saved = self.availability_repository.save_slot(updated)
        if saved is None:
            raise SlotNotFoundException(slot_date, TimeSlot(time_slot))
        return saved

    @BaseService.measure_operation("create_slot")
    def create_slot(
        self,
        slot_date: date,
        time_slot: TimeSlot,
        capacity: int,
        reserved: int = 0,
        available: Optional[bool] = True,
    ) -> SlotState:
        """
        Insert a new slot.

        Raises:
            DuplicateSlotException: if (date, time_slot) already exists
        """
        time_slot = TimeSlot(time_slot)
        with self.locked_slot(slot_date, time_slot):
            return self._create_locked(
                SlotState(
                    date=slot_date,
                    time_slot=time_slot,
                    capacity=capacity,
                    reserved=reserved,
                    available=available,
                )
            )

    def _create_locked(self, state: SlotState) -> SlotState:
        if self.availability_repository.get_slot(state.date, state.time_slot) is not None:
            raise DuplicateSlotException(state.date, state.time_slot)
        try:
            return self.availability_repository.create_slot(state)
        except DuplicateRecordError:
            raise DuplicateSlotException(state.date, state.time_slot)

    @BaseService.measure_operation("update_slot")
    def update_slot(
        self, slot_date: date, time_slot: TimeSlot, mutator: SlotMutator
    ) -> SlotState:
        """
        Atomically apply ``mutator(current) -> new`` to one slot.

        Raises:
            SlotNotFoundException: if the slot does not exist
        """
        with self.locked_slot(slot_date, time_slot):
            return self.apply_mutator(slot_date, time_slot, mutator)

    @BaseService.measure_operation("adjust_reserved")
    def adjust_reserved(
        self, slot_date: date, time_slot: TimeSlot, delta: int
    ) -> Optional[SlotState]:
        """
        Add ``delta`` to the reserved count (floored at zero).

        Returns:
            The updated slot, or None if it does not exist
        """
        with self.locked_slot(slot_date, time_slot):
            return self.availability_repository.adjust_reserved(
                slot_date, TimeSlot(time_slot), delta
            )

    @BaseService.measure_operation("admin_update_slot")
    def admin_update_slot(
        self, slot_date: date, time_slot: TimeSlot, capacity: int, available: bool
    ) -> DayAvailability:
        """
        Administrator edit: create the slot when absent, otherwise apply admin_edit.

        Returns:
            The refreshed day view
        """
        time_slot = TimeSlot(time_slot)
        with self.locked_slot(slot_date, time_slot):
            current = self.availability_repository.get_slot_for_update(slot_date, time_slot)
            if current is None:
                saved = self._create_locked(
                    SlotState(
                        date=slot_date,
                        time_slot=time_slot,
                        capacity=capacity,
                        reserved=0,
                        available=available,
                    )
                )
                created = True
            else:
                saved = self.apply_mutator(
                    slot_date, time_slot, slot_mutators.admin_edit(capacity, available)
                )
                created = False

        self.log_operation(
            "admin_update_slot",
            slot_date=slot_date.isoformat(),
            time_slot=time_slot.value,
            capacity=saved.capacity,
            available=saved.available,
            slot_created=created,
        )
        return self.get_day(slot_date)

    @BaseService.measure_operation("reset_all")
    def reset_all(self) -> SeedResult:
        """
        Delete every reservation and slot, then reseed the rolling window.

        Reservations are bulk-deleted without per-reservation compensation
        because every slot they counted against is dropped right after.
        Runs with the whole lock table held so no booking interleaves.
        """
        if self.seeding_service is None:
            raise ServiceException("Reset requires a seeding service", code="RESET_UNAVAILABLE")

        removed: dict[str, int] = {}

        def _clear() -> None:
            removed["reservations"] = self.reservation_repository.delete_all()
            removed["slots"] = self.availability_repository.delete_all()

        with self.slot_locks.hold_all():
            result = self.seeding_service.seed(prepare=_clear)

        self.logger.warning(
            "All reservations and availability were reset",
            extra={
                "reservations_removed": removed.get("reservations", 0),
                "slots_removed": removed.get("slots", 0),
                "slots_seeded": result.created,
            },
        )
        return result

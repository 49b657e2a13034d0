# backend/forest_reservation/repositories/availability_repository.py
"""
SQLAlchemy adapter for availability slots.

Counter changes go through a single UPDATE with a CASE expression so two
sessions adding to the same slot can never lose an increment, even across
processes. Full-row saves rely on the caller holding the slot lock and, on
PostgreSQL, on the SELECT ... FOR UPDATE taken by get_slot_for_update.
"""

from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import and_, case, update

from ..core.enums import TimeSlot
from ..domain.records import SlotKey, SlotState
from ..models.availability import AvailabilitySlot
from .base_repository import BaseRepository
from .interfaces import IAvailabilityRepository


def _to_state(row: AvailabilitySlot) -> SlotState:
    return SlotState(
        date=row.date,
        time_slot=TimeSlot(row.time_slot),
        capacity=row.capacity,
        reserved=row.reserved,
        available=row.available,
    )


class AvailabilityRepository(BaseRepository[AvailabilitySlot], IAvailabilityRepository):
    """Availability slots stored in the ``availability`` table."""

    def __init__(self, db):
        super().__init__(db, AvailabilitySlot)

    def _key_filter(self, slot_date: date, time_slot: TimeSlot):
        return and_(
            AvailabilitySlot.date == slot_date,
            AvailabilitySlot.time_slot == TimeSlot(time_slot).value,
        )

    def _get_row(
        self, slot_date: date, time_slot: TimeSlot, for_update: bool = False
    ) -> Optional[AvailabilitySlot]:
        # populate_existing: counter UPDATEs bypass the identity map
        query = (
            self.db.query(AvailabilitySlot)
            .filter(self._key_filter(slot_date, time_slot))
            .populate_existing()
        )
        if for_update and self.supports_row_locks:
            query = query.with_for_update()
        return query.one_or_none()

    def get_slot(self, slot_date: date, time_slot: TimeSlot) -> Optional[SlotState]:
        row = self._read("get_slot", lambda: self._get_row(slot_date, time_slot))
        return _to_state(row) if row is not None else None

    def get_slot_for_update(self, slot_date: date, time_slot: TimeSlot) -> Optional[SlotState]:
        # No retry: the row lock belongs to the current transaction
        row = self._write(
            "get_slot_for_update", lambda: self._get_row(slot_date, time_slot, for_update=True)
        )
        return _to_state(row) if row is not None else None

    def create_slot(self, state: SlotState) -> SlotState:
        row = AvailabilitySlot(
            date=state.date,
            time_slot=TimeSlot(state.time_slot).value,
            capacity=state.capacity,
            reserved=state.reserved,
            available=state.available,
        )
        self._write("create_slot", lambda: self.db.add(row))
        return _to_state(row)

    def save_slot(self, state: SlotState) -> Optional[SlotState]:
        def _save() -> Optional[AvailabilitySlot]:
            row = self._get_row(state.date, state.time_slot)
            if row is None:
                return None
            row.capacity = state.capacity
            row.reserved = state.reserved
            row.available = state.available
            return row

        row = self._write("save_slot", _save)
        return _to_state(row) if row is not None else None

    def adjust_reserved(
        self, slot_date: date, time_slot: TimeSlot, delta: int
    ) -> Optional[SlotState]:
        new_reserved = AvailabilitySlot.reserved + delta
        stmt = (
            update(AvailabilitySlot)
            .where(self._key_filter(slot_date, time_slot))
            .values(reserved=case((new_reserved < 0, 0), else_=new_reserved))
            .execution_options(synchronize_session=False)
        )
        result = self._write("adjust_reserved", lambda: self.db.execute(stmt))
        if result.rowcount == 0:
            return None

        row = self._get_row(slot_date, time_slot)
        return _to_state(row) if row is not None else None

    def list_between(self, start: date, end: date) -> List[SlotState]:
        rows = self._read(
            "list_between",
            lambda: self.db.query(AvailabilitySlot)
            .filter(AvailabilitySlot.date >= start, AvailabilitySlot.date <= end)
            .order_by(AvailabilitySlot.date, AvailabilitySlot.time_slot.desc())
            .populate_existing()
            .all(),
        )
        return [_to_state(row) for row in rows]

    def existing_keys(self, start: date, end: date) -> set[SlotKey]:
        rows = self._read(
            "existing_keys",
            lambda: self.db.query(AvailabilitySlot.date, AvailabilitySlot.time_slot)
            .filter(AvailabilitySlot.date >= start, AvailabilitySlot.date <= end)
            .all(),
        )
        return {(row_date, TimeSlot(row_slot)) for row_date, row_slot in rows}

    def bulk_create(self, states: Iterable[SlotState]) -> int:
        mappings = [
            {
                "date": state.date,
                "time_slot": TimeSlot(state.time_slot).value,
                "capacity": state.capacity,
                "reserved": state.reserved,
                "available": state.available,
            }
            for state in states
        ]
        if not mappings:
            return 0
        self._write(
            "bulk_create", lambda: self.db.bulk_insert_mappings(AvailabilitySlot, mappings)
        )
        self.logger.debug("Bulk created %d availability slots", len(mappings))
        return len(mappings)

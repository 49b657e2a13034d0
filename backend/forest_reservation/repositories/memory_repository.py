# backend/forest_reservation/repositories/memory_repository.py
"""
In-memory adapters.

``InMemoryStore`` owns the data for the lifetime of the process and is
created explicitly by the application factory (or a test). The two
repository classes are thin views over it so services can be wired the same
way for either backend. Every public call takes the store's internal lock,
which makes each single call atomic; read-modify-write sequences are still
serialized by the caller's slot lock.
"""

from dataclasses import replace
from datetime import date, datetime, timezone
import logging
import threading
from typing import Dict, Iterable, List, Optional

from ..core.enums import TimeSlot
from ..core.exceptions import DuplicateRecordError
from ..domain.records import ReservationRecord, SlotKey, SlotState
from .interfaces import IAvailabilityRepository, IReservationRepository

logger = logging.getLogger(__name__)

_SLOT_ORDER = {TimeSlot.MORNING: 0, TimeSlot.AFTERNOON: 1}


def _key(slot_date: date, time_slot: TimeSlot) -> SlotKey:
    return (slot_date, TimeSlot(time_slot))


class InMemoryStore:
    """Process-local storage shared by the in-memory repositories."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.slots: Dict[SlotKey, SlotState] = {}
        self.reservations: Dict[str, ReservationRecord] = {}
        # Insertion counter keeps newest-first stable when timestamps tie
        self._sequence = 0
        self.reservation_order: Dict[str, int] = {}

    def next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    def clear(self) -> None:
        with self.lock:
            self.slots.clear()
            self.reservations.clear()
            self.reservation_order.clear()


class InMemoryAvailabilityRepository(IAvailabilityRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def get_slot(self, slot_date: date, time_slot: TimeSlot) -> Optional[SlotState]:
        with self.store.lock:
            return self.store.slots.get(_key(slot_date, time_slot))

    def get_slot_for_update(self, slot_date: date, time_slot: TimeSlot) -> Optional[SlotState]:
        return self.get_slot(slot_date, time_slot)

    def create_slot(self, state: SlotState) -> SlotState:
        key = _key(state.date, state.time_slot)
        with self.store.lock:
            if key in self.store.slots:
                raise DuplicateRecordError(f"Slot {key} already exists")
            stored = replace(state, time_slot=key[1])
            self.store.slots[key] = stored
            return stored

    def save_slot(self, state: SlotState) -> Optional[SlotState]:
        key = _key(state.date, state.time_slot)
        with self.store.lock:
            if key not in self.store.slots:
                return None
            stored = replace(state, time_slot=key[1])
            self.store.slots[key] = stored
            return stored

    def adjust_reserved(
        self, slot_date: date, time_slot: TimeSlot, delta: int
    ) -> Optional[SlotState]:
        key = _key(slot_date, time_slot)
        with self.store.lock:
            current = self.store.slots.get(key)
            if current is None:
                return None
            updated = current.with_reserved(max(0, current.reserved + delta))
            self.store.slots[key] = updated
            return updated

    def list_between(self, start: date, end: date) -> List[SlotState]:
        with self.store.lock:
            found = [state for (day, _), state in self.store.slots.items() if start <= day <= end]
        return sorted(found, key=lambda s: (s.date, _SLOT_ORDER[s.time_slot]))

    def existing_keys(self, start: date, end: date) -> set[SlotKey]:
        with self.store.lock:
            return {key for key in self.store.slots if start <= key[0] <= end}

    def bulk_create(self, states: Iterable[SlotState]) -> int:
        created = 0
        with self.store.lock:
            for state in states:
                key = _key(state.date, state.time_slot)
                if key in self.store.slots:
                    raise DuplicateRecordError(f"Slot {key} already exists")
                self.store.slots[key] = replace(state, time_slot=key[1])
                created += 1
        return created

    def delete_all(self) -> int:
        with self.store.lock:
            removed = len(self.store.slots)
            self.store.slots.clear()
        return removed

    def count(self) -> int:
        with self.store.lock:
            return len(self.store.slots)


class InMemoryReservationRepository(IReservationRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _newest_first(self, records: Iterable[ReservationRecord]) -> List[ReservationRecord]:
        order = self.store.reservation_order
        return sorted(
            records,
            key=lambda r: (r.created_at, order.get(r.reservation_id, 0)),
            reverse=True,
        )

    def get(self, reservation_id: str) -> Optional[ReservationRecord]:
        with self.store.lock:
            return self.store.reservations.get(reservation_id)

    def exists(self, reservation_id: str) -> bool:
        with self.store.lock:
            return reservation_id in self.store.reservations

    def create(self, record: ReservationRecord) -> ReservationRecord:
        with self.store.lock:
            if record.reservation_id in self.store.reservations:
                raise DuplicateRecordError(f"Reservation {record.reservation_id} already exists")
            stored = replace(
                record,
                time_slot=TimeSlot(record.time_slot),
                created_at=record.created_at or datetime.now(timezone.utc),
            )
            self.store.reservations[stored.reservation_id] = stored
            self.store.reservation_order[stored.reservation_id] = self.store.next_sequence()
            return stored

    def delete(self, reservation_id: str) -> Optional[ReservationRecord]:
        with self.store.lock:
            self.store.reservation_order.pop(reservation_id, None)
            return self.store.reservations.pop(reservation_id, None)

    def list_all(self, query: Optional[str] = None) -> List[ReservationRecord]:
        needle = (query or "").strip().lower()
        with self.store.lock:
            records = list(self.store.reservations.values())
            if needle:
                records = [
                    r
                    for r in records
                    if needle in r.reservation_id.lower()
                    or needle in r.name.lower()
                    or needle in r.inst_name.lower()
                    or needle in r.phone
                ]
            return self._newest_first(records)

    def list_by_date(self, reservation_date: date) -> List[ReservationRecord]:
        order = self.store.reservation_order
        with self.store.lock:
            records = [r for r in self.store.reservations.values() if r.date == reservation_date]
            return sorted(
                records,
                key=lambda r: (
                    _SLOT_ORDER[r.time_slot],
                    r.created_at,
                    order.get(r.reservation_id, 0),
                ),
            )

    def find_by_name_and_phone(self, name: str, phone: str) -> List[ReservationRecord]:
        with self.store.lock:
            return self._newest_first(
                r for r in self.store.reservations.values() if r.name == name and r.phone == phone
            )

    def delete_all(self) -> int:
        with self.store.lock:
            removed = len(self.store.reservations)
            self.store.reservations.clear()
            self.store.reservation_order.clear()
        if removed:
            logger.info("Cleared %d in-memory reservations", removed)
        return removed

    def count(self) -> int:
        with self.store.lock:
            return len(self.store.reservations)

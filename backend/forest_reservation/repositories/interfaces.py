# backend/forest_reservation/repositories/interfaces.py
"""
Persistence ports for availability slots and reservations.

Two adapters implement them: SQLAlchemy repositories (per-request session)
and an in-memory store (process lifetime). Services only talk to these
interfaces, and both adapters are exercised by the same contract tests.

Mutual exclusion is the caller's job: AvailabilityService holds the
per-slot KeyedLock around every read-modify-write. Adapters only promise
that each single call is atomic on its own.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional

from ..core.enums import TimeSlot
from ..domain.records import ReservationRecord, SlotKey, SlotState


class IAvailabilityRepository(ABC):
    """Data access for availability slots keyed by (date, time_slot)."""

    @abstractmethod
    def get_slot(self, slot_date: date, time_slot: TimeSlot) -> Optional[SlotState]:
        """
        Exact lookup.

        Returns:
            The slot if present, None otherwise (absence is not an error)
        """

    @abstractmethod
    def get_slot_for_update(self, slot_date: date, time_slot: TimeSlot) -> Optional[SlotState]:
        """Like get_slot, but takes a row lock until the transaction ends where supported."""

    @abstractmethod
    def create_slot(self, state: SlotState) -> SlotState:
        """
        Insert a new slot.

        Raises:
            DuplicateRecordError: if (date, time_slot) already exists
        """

    @abstractmethod
    def save_slot(self, state: SlotState) -> Optional[SlotState]:
        """
        Replace an existing slot in full.

        Returns:
            The stored slot, or None if it does not exist
        """

    @abstractmethod
    def adjust_reserved(
        self, slot_date: date, time_slot: TimeSlot, delta: int
    ) -> Optional[SlotState]:
        """
        Atomically add ``delta`` to reserved, flooring the result at zero.

        Returns:
            The updated slot, or None if it does not exist
        """

    @abstractmethod
    def list_between(self, start: date, end: date) -> List[SlotState]:
        """All slots with start <= date <= end ordered by (date, time_slot)."""

    @abstractmethod
    def existing_keys(self, start: date, end: date) -> set[SlotKey]:
        """Keys of the slots between start and end (inclusive)."""

    @abstractmethod
    def bulk_create(self, states: Iterable[SlotState]) -> int:
        """Insert many slots known to be absent; returns how many were written."""

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every slot; returns how many were removed."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored slots."""


class IReservationRepository(ABC):
    """Data access for reservations keyed by reservation_id."""

    @abstractmethod
    def get(self, reservation_id: str) -> Optional[ReservationRecord]:
        """Reservation by id, or None."""

    @abstractmethod
    def exists(self, reservation_id: str) -> bool:
        """Whether the id is already taken."""

    @abstractmethod
    def create(self, record: ReservationRecord) -> ReservationRecord:
        """
        Insert a reservation.

        Raises:
            DuplicateRecordError: if reservation_id is already taken
        """

    @abstractmethod
    def delete(self, reservation_id: str) -> Optional[ReservationRecord]:
        """Remove a reservation; returns what was removed, or None if absent."""

    @abstractmethod
    def list_all(self, query: Optional[str] = None) -> List[ReservationRecord]:
        """
        All reservations, newest first.

        Args:
            query: Optional case-insensitive substring matched against
                reservation id, organization name, contact name and phone
        """

    @abstractmethod
    def list_by_date(self, reservation_date: date) -> List[ReservationRecord]:
        """Reservations for one day ordered by time slot then creation."""

    @abstractmethod
    def find_by_name_and_phone(self, name: str, phone: str) -> List[ReservationRecord]:
        """Exact match on organization name and phone, newest first."""

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every reservation; returns how many were removed."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored reservations."""

"""
Storage-neutral records shared by the persistence adapters and the services.

Both the SQL and the in-memory adapters hand these immutable values out, so
service code never depends on which store is configured.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import TimeSlot

SlotKey = Tuple[date, TimeSlot]


@dataclass(frozen=True)
class SlotState:
    date: date
    time_slot: TimeSlot
    capacity: int
    reserved: int = 0
    available: Optional[bool] = True

    @property
    def key(self) -> SlotKey:
        return (self.date, self.time_slot)

    @property
    def remaining(self) -> int:
        return self.capacity - self.reserved

    def with_reserved(self, reserved: int) -> "SlotState":
        return replace(self, reserved=reserved)


@dataclass(frozen=True)
class SlotView:
    """What a client sees for one slot after the effective-availability rule."""

    available: bool
    capacity: int
    reserved: int

    @classmethod
    def closed(cls) -> "SlotView":
        return cls(available=False, capacity=0, reserved=0)


@dataclass(frozen=True)
class DayAvailability:
    date: date
    morning: SlotView
    afternoon: SlotView

    def slot(self, time_slot: TimeSlot) -> SlotView:
        return self.morning if time_slot == TimeSlot.MORNING else self.afternoon


@dataclass(frozen=True)
class ReservationRecord:
    reservation_id: str
    date: date
    time_slot: TimeSlot
    name: str
    inst_name: str
    phone: str
    participants: int
    desired_activity: str
    parent_participation: str
    email: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def slot_key(self) -> SlotKey:
        return (self.date, self.time_slot)


@dataclass(frozen=True)
class CalendarDay:
    """Month-calendar cell: which halves of a day can no longer be booked."""

    date: date
    morning_reserved: bool
    afternoon_reserved: bool

    @classmethod
    def from_day(cls, day: DayAvailability) -> "CalendarDay":
        return cls(
            date=day.date,
            morning_reserved=not day.morning.available,
            afternoon_reserved=not day.afternoon.available,
        )

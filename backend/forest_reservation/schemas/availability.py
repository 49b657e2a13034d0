# backend/forest_reservation/schemas/availability.py
"""Availability request/response schemas."""

import datetime as dt
from typing import List

from pydantic import Field, StrictBool, StrictInt

from ..core.enums import TimeSlot
from ..domain.records import CalendarDay, DayAvailability, SlotView
from ..services.seeding_service import SeedResult
from ._strict_base import CamelModel, IsoDate, StrictRequestModel


class SlotViewResponse(CamelModel):
    available: bool
    capacity: int
    reserved: int

    @classmethod
    def from_view(cls, view: SlotView) -> "SlotViewResponse":
        return cls(available=view.available, capacity=view.capacity, reserved=view.reserved)


class DayStatus(CamelModel):
    morning: SlotViewResponse
    afternoon: SlotViewResponse


class DayAvailabilityResponse(CamelModel):
    """Both slots of one day."""

    slot_date: dt.date = Field(alias="date")
    status: DayStatus

    @classmethod
    def from_day(cls, day: DayAvailability) -> "DayAvailabilityResponse":
        return cls(
            slot_date=day.date,
            status=DayStatus(
                morning=SlotViewResponse.from_view(day.morning),
                afternoon=SlotViewResponse.from_view(day.afternoon),
            ),
        )


class CalendarDayResponse(CamelModel):
    slot_date: dt.date = Field(alias="date")
    morning_reserved: bool
    afternoon_reserved: bool

    @classmethod
    def from_calendar_day(cls, day: CalendarDay) -> "CalendarDayResponse":
        return cls(
            slot_date=day.date,
            morning_reserved=day.morning_reserved,
            afternoon_reserved=day.afternoon_reserved,
        )


class AvailabilityUpdateRequest(StrictRequestModel):
    """Admin edit of one slot; every field is required."""

    slot_date: IsoDate = Field(alias="date")
    time_slot: TimeSlot
    capacity: StrictInt = Field(ge=0)
    available: StrictBool


class ResetResponse(CamelModel):
    seeded_slots: int
    window_start: dt.date
    window_end: dt.date

    @classmethod
    def from_result(cls, result: SeedResult) -> "ResetResponse":
        return cls(
            seeded_slots=result.created,
            window_start=result.window_start,
            window_end=result.window_end,
        )


def month_response(days: List[DayAvailability]) -> List[DayAvailabilityResponse]:
    return [DayAvailabilityResponse.from_day(day) for day in days]

# backend/forest_reservation/schemas/reservation.py
"""Reservation request/response schemas."""

import datetime as dt
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ..core.constants import (
    MAX_NAME_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_PARTICIPANTS,
    MAX_PHONE_LENGTH,
    MIN_PARTICIPANTS,
)
from ..core.enums import DesiredActivity, ParentParticipation, TimeSlot
from ..domain.records import ReservationRecord
from ._strict_base import CamelModel, IsoDate


class ReservationCreate(CamelModel):
    """
    Public booking form payload.

    ``name`` is the organization (kindergarten, school...), ``inst_name`` the
    teacher or director responsible for the group.
    """

    slot_date: IsoDate = Field(alias="date")
    time_slot: TimeSlot
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    inst_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    phone: str = Field(min_length=1, max_length=MAX_PHONE_LENGTH)
    participants: int = Field(ge=MIN_PARTICIPANTS, le=MAX_PARTICIPANTS)
    desired_activity: DesiredActivity
    parent_participation: ParentParticipation
    email: Optional[EmailStr] = None
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("notes")
    @classmethod
    def _blank_notes_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class ReservationResponse(CamelModel):
    reservation_id: str
    slot_date: dt.date = Field(alias="date")
    time_slot: TimeSlot
    name: str
    inst_name: str
    phone: str
    participants: int
    desired_activity: str
    parent_participation: str
    email: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    @classmethod
    def from_record(cls, record: ReservationRecord) -> "ReservationResponse":
        return cls(
            reservation_id=record.reservation_id,
            slot_date=record.date,
            time_slot=record.time_slot,
            name=record.name,
            inst_name=record.inst_name,
            phone=record.phone,
            participants=record.participants,
            desired_activity=record.desired_activity,
            parent_participation=record.parent_participation,
            email=record.email,
            notes=record.notes,
            created_at=record.created_at,
        )

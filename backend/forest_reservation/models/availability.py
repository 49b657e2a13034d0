# backend/forest_reservation/models/availability.py
"""Availability slot model."""

import datetime as dt
from typing import Optional

from sqlalchemy import (
    TIMESTAMP,
    Boolean,
    CheckConstraint,
    Date,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


class AvailabilitySlot(Base):
    """
    Capacity counters for one half-day program slot.

    ``available`` is an administrator override: NULL means "derive it from
    capacity and the closed weekday", TRUE/FALSE wins over the derivation.
    """

    __tablename__ = "availability"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    time_slot: Mapped[str] = mapped_column(String(16), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    reserved: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    available: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    updated_at: Mapped[dt.datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("date", "time_slot", name="uq_availability_date_time_slot"),
        CheckConstraint("reserved >= 0", name="ck_availability_reserved_non_negative"),
        CheckConstraint("capacity >= 0", name="ck_availability_capacity_non_negative"),
        CheckConstraint(
            "time_slot IN ('morning', 'afternoon')", name="ck_availability_time_slot"
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<AvailabilitySlot({self.date} {self.time_slot} "
            f"reserved={self.reserved}/{self.capacity} available={self.available})>"
        )

# backend/forest_reservation/models/reservation.py
"""Reservation model."""

import datetime as dt
from typing import Optional

from sqlalchemy import TIMESTAMP, CheckConstraint, Date, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


class Reservation(Base):
    """A group booking for one (date, time_slot)."""

    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reservation_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time_slot: Mapped[str] = mapped_column(String(16), nullable=False)

    # Organization and contact person
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    inst_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    participants: Mapped[int] = mapped_column(Integer, nullable=False)
    desired_activity: Mapped[str] = mapped_column(String(16), nullable=False)
    parent_participation: Mapped[str] = mapped_column(String(8), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_reservations_date_time_slot", "date", "time_slot"),
        CheckConstraint("participants > 0", name="ck_reservations_participants_positive"),
    )

    def __repr__(self) -> str:
        return f"<Reservation({self.reservation_id} {self.date} {self.time_slot} x{self.participants})>"

# backend/forest_reservation/repositories/reservation_repository.py
"""SQLAlchemy adapter for reservations."""

from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import func, or_

from ..core.enums import TimeSlot
from ..domain.records import ReservationRecord
from ..models.reservation import Reservation
from .base_repository import BaseRepository
from .interfaces import IReservationRepository


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_record(row: Reservation) -> ReservationRecord:
    return ReservationRecord(
        reservation_id=row.reservation_id,
        date=row.date,
        time_slot=TimeSlot(row.time_slot),
        name=row.name,
        inst_name=row.inst_name,
        phone=row.phone,
        participants=row.participants,
        desired_activity=row.desired_activity,
        parent_participation=row.parent_participation,
        email=row.email,
        notes=row.notes,
        created_at=_as_utc(row.created_at),
    )


class ReservationRepository(BaseRepository[Reservation], IReservationRepository):
    """Reservations stored in the ``reservations`` table."""

    def __init__(self, db):
        super().__init__(db, Reservation)

    def _newest_first(self, query):
        return query.order_by(Reservation.created_at.desc(), Reservation.id.desc())

    def _get_row(self, reservation_id: str) -> Optional[Reservation]:
        return (
            self.db.query(Reservation)
            .filter(Reservation.reservation_id == reservation_id)
            .one_or_none()
        )

    def get(self, reservation_id: str) -> Optional[ReservationRecord]:
        row = self._read("get", lambda: self._get_row(reservation_id))
        return _to_record(row) if row is not None else None

    def exists(self, reservation_id: str) -> bool:
        return self._read(
            "exists",
            lambda: self.db.query(Reservation.id)
            .filter(Reservation.reservation_id == reservation_id)
            .first()
            is not None,
        )

    def create(self, record: ReservationRecord) -> ReservationRecord:
        row = Reservation(
            reservation_id=record.reservation_id,
            date=record.date,
            time_slot=TimeSlot(record.time_slot).value,
            name=record.name,
            inst_name=record.inst_name,
            phone=record.phone,
            participants=record.participants,
            desired_activity=record.desired_activity,
            parent_participation=record.parent_participation,
            email=record.email,
            notes=record.notes,
            created_at=record.created_at or datetime.now(timezone.utc),
        )
        self._write("create", lambda: self.db.add(row))
        return _to_record(row)

    def delete(self, reservation_id: str) -> Optional[ReservationRecord]:
        def _delete() -> Optional[ReservationRecord]:
            row = self._get_row(reservation_id)
            if row is None:
                return None
            record = _to_record(row)
            self.db.delete(row)
            return record

        return self._write("delete", _delete)

    def list_all(self, query: Optional[str] = None) -> List[ReservationRecord]:
        def _list() -> List[Reservation]:
            q = self.db.query(Reservation)
            needle = (query or "").strip().lower()
            if needle:
                escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
                pattern = f"%{escaped}%"
                q = q.filter(
                    or_(
                        func.lower(Reservation.reservation_id).like(pattern, escape="\\"),
                        func.lower(Reservation.name).like(pattern, escape="\\"),
                        func.lower(Reservation.inst_name).like(pattern, escape="\\"),
                        Reservation.phone.like(pattern, escape="\\"),
                    )
                )
            return self._newest_first(q).all()

        return [_to_record(row) for row in self._read("list_all", _list)]

    def list_by_date(self, reservation_date: date) -> List[ReservationRecord]:
        rows = self._read(
            "list_by_date",
            lambda: self.db.query(Reservation)
            .filter(Reservation.date == reservation_date)
            .order_by(Reservation.time_slot.desc(), Reservation.created_at, Reservation.id)
            .all(),
        )
        return [_to_record(row) for row in rows]

    def find_by_name_and_phone(self, name: str, phone: str) -> List[ReservationRecord]:
        rows = self._read(
            "find_by_name_and_phone",
            lambda: self._newest_first(
                self.db.query(Reservation).filter(
                    Reservation.name == name, Reservation.phone == phone
                )
            ).all(),
        )
        return [_to_record(row) for row in rows]

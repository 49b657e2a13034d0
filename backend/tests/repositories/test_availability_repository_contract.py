"""
Availability repository contract.

Every test runs against the in-memory and the SQL adapter (see the
``backend_session`` fixture) so both behave identically.
"""

from datetime import date

import pytest

from forest_reservation.core.enums import TimeSlot
from forest_reservation.core.exceptions import DuplicateRecordError
from forest_reservation.domain.records import SlotState

DAY = date(2024, 6, 10)


def _state(day: date = DAY, time_slot: TimeSlot = TimeSlot.MORNING, **kwargs) -> SlotState:
    values = {"capacity": 30, "reserved": 0, "available": True}
    values.update(kwargs)
    return SlotState(date=day, time_slot=time_slot, **values)


def _commit(backend_session) -> None:
    _, session = backend_session
    if session is not None:
        session.commit()


class TestAvailabilityRepositoryContract:
    def test_create_then_get(self, availability_repository, backend_session) -> None:
        availability_repository.create_slot(_state(capacity=25, available=None))
        _commit(backend_session)

        slot = availability_repository.get_slot(DAY, TimeSlot.MORNING)
        assert slot == SlotState(
            date=DAY, time_slot=TimeSlot.MORNING, capacity=25, reserved=0, available=None
        )

    def test_absent_slot_is_none(self, availability_repository) -> None:
        assert availability_repository.get_slot(DAY, TimeSlot.AFTERNOON) is None
        assert availability_repository.get_slot_for_update(DAY, TimeSlot.AFTERNOON) is None

    def test_duplicate_create(self, availability_repository, backend_session) -> None:
        availability_repository.create_slot(_state())
        _commit(backend_session)
        with pytest.raises(DuplicateRecordError):
            availability_repository.create_slot(_state())

    def test_save_slot_overwrites(self, availability_repository, backend_session) -> None:
        availability_repository.create_slot(_state())
        saved = availability_repository.save_slot(_state(capacity=10, reserved=4, available=False))
        _commit(backend_session)

        assert saved.reserved == 4
        assert availability_repository.get_slot(DAY, TimeSlot.MORNING) == saved

    def test_save_missing_slot_returns_none(self, availability_repository) -> None:
        assert availability_repository.save_slot(_state()) is None

    def test_adjust_reserved(self, availability_repository, backend_session) -> None:
        availability_repository.create_slot(_state(reserved=5))
        assert availability_repository.adjust_reserved(DAY, TimeSlot.MORNING, 3).reserved == 8
        assert availability_repository.adjust_reserved(DAY, TimeSlot.MORNING, -20).reserved == 0
        _commit(backend_session)
        assert availability_repository.get_slot(DAY, TimeSlot.MORNING).reserved == 0

    def test_adjust_missing_slot(self, availability_repository) -> None:
        assert availability_repository.adjust_reserved(DAY, TimeSlot.MORNING, 1) is None

    def test_list_between_orders_by_date_then_morning_first(
        self, availability_repository, backend_session
    ) -> None:
        availability_repository.create_slot(_state(date(2024, 6, 11), TimeSlot.AFTERNOON))
        availability_repository.create_slot(_state(date(2024, 6, 11), TimeSlot.MORNING))
        availability_repository.create_slot(_state(date(2024, 6, 10), TimeSlot.AFTERNOON))
        availability_repository.create_slot(_state(date(2024, 7, 1), TimeSlot.MORNING))
        _commit(backend_session)

        keys = [s.key for s in availability_repository.list_between(date(2024, 6, 1), date(2024, 6, 30))]
        assert keys == [
            (date(2024, 6, 10), TimeSlot.AFTERNOON),
            (date(2024, 6, 11), TimeSlot.MORNING),
            (date(2024, 6, 11), TimeSlot.AFTERNOON),
        ]

    def test_bulk_create_existing_keys_and_count(
        self, availability_repository, backend_session
    ) -> None:
        states = [_state(date(2024, 6, d), slot) for d in (10, 11) for slot in TimeSlot]
        assert availability_repository.bulk_create(states) == 4
        assert availability_repository.bulk_create([]) == 0
        _commit(backend_session)

        assert availability_repository.count() == 4
        assert availability_repository.existing_keys(date(2024, 6, 11), date(2024, 6, 11)) == {
            (date(2024, 6, 11), TimeSlot.MORNING),
            (date(2024, 6, 11), TimeSlot.AFTERNOON),
        }

    def test_delete_all(self, availability_repository, backend_session) -> None:
        availability_repository.bulk_create([_state(time_slot=slot) for slot in TimeSlot])
        _commit(backend_session)

        assert availability_repository.delete_all() == 2
        _commit(backend_session)
        assert availability_repository.count() == 0
        assert availability_repository.get_slot(DAY, TimeSlot.MORNING) is None

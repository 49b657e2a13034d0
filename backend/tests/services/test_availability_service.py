"""AvailabilityService against both storage backends."""

from dataclasses import replace
from datetime import date

import pytest

from forest_reservation.core.enums import SeedState, TimeSlot
from forest_reservation.core.exceptions import (
    DuplicateSlotException,
    ServiceException,
    SlotNotFoundException,
    ValidationException,
)
from forest_reservation.domain.records import SlotState, SlotView
from forest_reservation.schemas.reservation import ReservationCreate
from forest_reservation.services import slot_mutators
from tests.conftest import make_settings

DAY = date(2024, 6, 10)  # Monday
SUNDAY = date(2024, 6, 9)


class TestSlotLifecycle:
    def test_create_then_get(self, availability_service) -> None:
        availability_service.create_slot(DAY, TimeSlot.MORNING, 30)
        slot = availability_service.get_slot(DAY, TimeSlot.MORNING)
        assert slot == SlotState(date=DAY, time_slot=TimeSlot.MORNING, capacity=30, reserved=0)

    def test_get_missing_slot_is_none(self, availability_service) -> None:
        assert availability_service.get_slot(DAY, TimeSlot.MORNING) is None

    def test_duplicate_slot(self, availability_service, make_slot) -> None:
        make_slot()
        with pytest.raises(DuplicateSlotException) as exc_info:
            availability_service.create_slot(DAY, TimeSlot.MORNING, 10)
        assert exc_info.value.status_code == 409

    def test_update_slot_applies_mutator(self, availability_service, make_slot) -> None:
        make_slot(reserved=2)
        updated = availability_service.update_slot(DAY, TimeSlot.MORNING, slot_mutators.book(4))
        assert updated.reserved == 6
        assert availability_service.get_slot(DAY, TimeSlot.MORNING).reserved == 6

    def test_update_missing_slot(self, availability_service) -> None:
        with pytest.raises(SlotNotFoundException):
            availability_service.update_slot(DAY, TimeSlot.MORNING, slot_mutators.book(1))

    def test_mutator_may_not_change_key(self, availability_service, make_slot) -> None:
        make_slot()
        with pytest.raises(ServiceException):
            availability_service.update_slot(
                DAY, TimeSlot.MORNING, lambda s: replace(s, time_slot=TimeSlot.AFTERNOON)
            )
        assert availability_service.get_slot(DAY, TimeSlot.AFTERNOON) is None

    def test_adjust_reserved_floors_at_zero(self, availability_service, make_slot) -> None:
        make_slot(reserved=3)
        assert availability_service.adjust_reserved(DAY, TimeSlot.MORNING, -10).reserved == 0
        assert availability_service.adjust_reserved(DAY, TimeSlot.AFTERNOON, 1) is None


class TestReadModels:
    def test_day_without_slots_is_synthesized_closed(self, availability_service) -> None:
        day = availability_service.get_day(DAY)
        assert day.morning == SlotView.closed()
        assert day.afternoon == SlotView.closed()

    def test_day_with_one_slot(self, availability_service, make_slot) -> None:
        make_slot(time_slot=TimeSlot.AFTERNOON, capacity=20, reserved=5)
        day = availability_service.get_day(DAY)
        assert day.morning == SlotView.closed()
        assert day.afternoon == SlotView(available=True, capacity=20, reserved=5)

    def test_null_override_is_derived(self, availability_service, make_slot) -> None:
        make_slot(available=None, capacity=10, reserved=10)
        make_slot(time_slot=TimeSlot.AFTERNOON, available=None, capacity=10, reserved=9)
        make_slot(slot_date=SUNDAY, available=None, capacity=10, reserved=0)

        day = availability_service.get_day(DAY)
        assert day.morning.available is False
        assert day.afternoon.available is True
        assert availability_service.get_day(SUNDAY).morning.available is False

    def test_stored_flag_wins(self, availability_service, make_slot) -> None:
        make_slot(slot_date=SUNDAY, available=True)
        assert availability_service.get_day(SUNDAY).morning.available is True

    def test_close_past_dates(self, availability_service, make_slot) -> None:
        make_slot(slot_date=date(2024, 6, 1))
        assert availability_service.get_day(date(2024, 6, 1)).morning.available is True

        availability_service.settings = make_settings(close_past_dates=True)
        assert availability_service.get_day(date(2024, 6, 1)).morning.available is False

    def test_month_lists_only_dates_with_slots(self, availability_service, make_slot) -> None:
        make_slot(slot_date=date(2024, 6, 12), time_slot=TimeSlot.AFTERNOON)
        make_slot(slot_date=date(2024, 6, 10))
        make_slot(slot_date=date(2024, 7, 1))

        days = availability_service.get_month(2024, 6)
        assert [d.date for d in days] == [date(2024, 6, 10), date(2024, 6, 12)]
        assert days[1].morning == SlotView.closed()
        assert days[1].afternoon.available is True

    def test_month_validation(self, availability_service) -> None:
        with pytest.raises(ValidationException):
            availability_service.get_month(2024, 13)

    def test_calendar(self, availability_service, make_slot) -> None:
        make_slot(available=False)
        make_slot(time_slot=TimeSlot.AFTERNOON)
        cells = availability_service.get_calendar(2024, 6)
        assert len(cells) == 1
        assert cells[0].morning_reserved is True
        assert cells[0].afternoon_reserved is False


class TestAdminUpdate:
    def test_creates_missing_slot(self, availability_service) -> None:
        day = availability_service.admin_update_slot(DAY, TimeSlot.MORNING, 15, True)
        assert day.morning == SlotView(available=True, capacity=15, reserved=0)

    def test_edits_existing_slot(self, availability_service, make_slot) -> None:
        make_slot(reserved=5)
        day = availability_service.admin_update_slot(DAY, TimeSlot.MORNING, 4, True)
        assert day.morning == SlotView(available=False, capacity=4, reserved=5)


class TestReset:
    def test_reset_then_month_returns_reseeded_set(
        self,
        availability_service,
        reservation_service,
        reservation_repository,
        seeding_service,
        reservation_payload,
    ) -> None:
        seeding_service.seed()
        reservation_service.create_reservation(ReservationCreate.model_validate(reservation_payload))
        assert reservation_repository.count() == 1
        availability_service.admin_update_slot(DAY, TimeSlot.MORNING, 3, False)
        before = availability_service.get_month(2024, 6)

        result = availability_service.reset_all()

        assert reservation_repository.count() == 0
        assert result.window_start == date(2024, 6, 3)
        after = availability_service.get_month(2024, 6)
        assert [d.date for d in after] == [d.date for d in before]
        assert after[[d.date for d in after].index(DAY)].morning == SlotView(
            available=True, capacity=99999, reserved=0
        )
        assert seeding_service.status.state is SeedState.SEEDED

    def test_reset_requires_seeding_service(self, availability_service) -> None:
        availability_service.seeding_service = None
        with pytest.raises(ServiceException):
            availability_service.reset_all()

"""Pure slot mutators."""

from datetime import date

import pytest

from forest_reservation.core.enums import TimeSlot
from forest_reservation.domain.records import SlotState
from forest_reservation.services import slot_mutators


def _slot(capacity: int = 30, reserved: int = 0, available=True) -> SlotState:
    return SlotState(
        date=date(2024, 6, 10),
        time_slot=TimeSlot.MORNING,
        capacity=capacity,
        reserved=reserved,
        available=available,
    )


class TestBook:
    def test_adds_participants(self) -> None:
        assert slot_mutators.book(5)(_slot(reserved=2)).reserved == 7

    def test_does_not_mutate_input(self) -> None:
        current = _slot(reserved=2)
        slot_mutators.book(5)(current)
        assert current.reserved == 2

    @pytest.mark.parametrize("participants", [0, -3])
    def test_rejects_non_positive(self, participants: int) -> None:
        with pytest.raises(ValueError):
            slot_mutators.book(participants)

    def test_book_then_release_restores_reserved(self) -> None:
        start = _slot(reserved=4)
        after = slot_mutators.release(6)(slot_mutators.book(6)(start))
        assert after == start


class TestRelease:
    def test_subtracts_participants(self) -> None:
        assert slot_mutators.release(3)(_slot(reserved=10)).reserved == 7

    def test_never_goes_below_zero(self) -> None:
        assert slot_mutators.release(50)(_slot(reserved=10)).reserved == 0

    def test_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            slot_mutators.release(-1)


class TestAdminEdit:
    def test_sets_capacity_and_flag(self) -> None:
        updated = slot_mutators.admin_edit(40, False)(_slot(capacity=30, reserved=5))
        assert updated.capacity == 40
        assert updated.available is False
        assert updated.reserved == 5

    def test_stays_open_when_reservations_fit(self) -> None:
        updated = slot_mutators.admin_edit(5, True)(_slot(reserved=5))
        assert updated.available is True

    def test_closes_when_capacity_below_reserved(self) -> None:
        updated = slot_mutators.admin_edit(4, True)(_slot(reserved=5))
        assert updated.available is False
        assert updated.reserved == 5

    def test_reopens_null_override(self) -> None:
        assert slot_mutators.admin_edit(30, True)(_slot(available=None)).available is True

    def test_rejects_negative_capacity(self) -> None:
        with pytest.raises(ValueError):
            slot_mutators.admin_edit(-1, True)

"""
Pure slot mutators.

Each factory returns a ``mutator(current) -> new`` function for
AvailabilityService.update_slot. Mutators never touch storage and never
mutate their input; the caller persists whatever they return.
"""

from dataclasses import replace
from typing import Callable

from ..domain.records import SlotState

SlotMutator = Callable[[SlotState], SlotState]


def book(participants: int) -> SlotMutator:
    """Add ``participants`` to the reserved count."""
    if participants <= 0:
        raise ValueError("participants must be positive")

    def _apply(current: SlotState) -> SlotState:
        return replace(current, reserved=current.reserved + participants)

    return _apply


def release(participants: int) -> SlotMutator:
    """Remove ``participants`` from the reserved count, never going below zero."""
    if participants < 0:
        raise ValueError("participants must not be negative")

    def _apply(current: SlotState) -> SlotState:
        return replace(current, reserved=max(0, current.reserved - participants))

    return _apply


def admin_edit(capacity: int, available: bool) -> SlotMutator:
    """
    Overwrite capacity and the availability override.

    A slot can only stay open when its existing reservations still fit the
    new capacity; shrinking below ``reserved`` closes it instead of touching
    existing reservations.
    """
    if capacity < 0:
        raise ValueError("capacity must not be negative")

    def _apply(current: SlotState) -> SlotState:
        return replace(
            current,
            capacity=capacity,
            available=bool(available and current.reserved <= capacity),
        )

    return _apply

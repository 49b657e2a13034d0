"""
Database models for the forest reservation service.

- AvailabilitySlot: one row per (date, time_slot) with capacity counters
- Reservation: a group booking against a slot
"""

from .availability import AvailabilitySlot
from .reservation import Reservation

__all__ = [
    "AvailabilitySlot",
    "Reservation",
]

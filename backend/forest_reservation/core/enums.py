# backend/forest_reservation/core/enums.py
"""
Core enums for the forest reservation service.

Values are the exact strings exchanged with the booking UI and stored in the
database, so they must not be renamed.
"""

from enum import Enum


class TimeSlot(str, Enum):
    """The two bookable halves of a program day."""

    MORNING = "morning"
    AFTERNOON = "afternoon"

    def __str__(self) -> str:
        return self.value


class DesiredActivity(str, Enum):
    """Which part of the program the group wants to join."""

    ALL = "all"
    EXPERIENCE = "experience"


class ParentParticipation(str, Enum):
    YES = "yes"
    NO = "no"


class SeedState(str, Enum):
    """
    Lifecycle of the rolling availability window.

    unseeded -> seeding -> seeded; a reset goes back through seeding, and a
    failed seed falls back to unseeded.
    """

    UNSEEDED = "unseeded"
    SEEDING = "seeding"
    SEEDED = "seeded"


class StorageBackend(str, Enum):
    SQL = "sql"
    MEMORY = "memory"

# backend/forest_reservation/repositories/__init__.py
"""
Repository layer for the forest reservation service.

Key Components:
- IAvailabilityRepository / IReservationRepository: persistence ports
- AvailabilityRepository / ReservationRepository: SQLAlchemy adapters
- InMemoryStore and its repositories: process-local adapters
- RepositoryFactory: picks the adapter for the configured backend

Usage:
    factory = RepositoryFactory(StorageBackend.SQL)
    availability = factory.create_availability_repository(db)
    slot = availability.get_slot(day, TimeSlot.MORNING)
"""

from .availability_repository import AvailabilityRepository
from .base_repository import BaseRepository
from .factory import RepositoryFactory
from .interfaces import IAvailabilityRepository, IReservationRepository
from .memory_repository import (
    InMemoryAvailabilityRepository,
    InMemoryReservationRepository,
    InMemoryStore,
)
from .reservation_repository import ReservationRepository

__all__ = [
    "AvailabilityRepository",
    "BaseRepository",
    "IAvailabilityRepository",
    "IReservationRepository",
    "InMemoryAvailabilityRepository",
    "InMemoryReservationRepository",
    "InMemoryStore",
    "RepositoryFactory",
    "ReservationRepository",
]

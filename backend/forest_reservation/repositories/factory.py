# backend/forest_reservation/repositories/factory.py
"""
Repository Factory for the forest reservation service.

Picks the persistence adapter configured for the application. SQL
repositories are bound to the request's session; in-memory repositories
are views over the single InMemoryStore created by the app factory.
"""

from typing import Optional

from sqlalchemy.orm import Session

from ..core.enums import StorageBackend
from .interfaces import IAvailabilityRepository, IReservationRepository
from .memory_repository import (
    InMemoryAvailabilityRepository,
    InMemoryReservationRepository,
    InMemoryStore,
)


class RepositoryFactory:
    """
    Creates repository instances for one storage backend.

    Attributes:
        backend: Which adapter family to create
        memory_store: Backing store for the in-memory adapters
    """

    def __init__(self, backend: StorageBackend, memory_store: Optional[InMemoryStore] = None):
        self.backend = StorageBackend(backend)
        if self.backend == StorageBackend.MEMORY and memory_store is None:
            memory_store = InMemoryStore()
        self.memory_store = memory_store

    def create_availability_repository(
        self, db: Optional[Session] = None
    ) -> IAvailabilityRepository:
        """Create repository for availability slots."""
        if self.backend == StorageBackend.MEMORY:
            return InMemoryAvailabilityRepository(self.memory_store)
        from .availability_repository import AvailabilityRepository

        return AvailabilityRepository(self._require_session(db))

    def create_reservation_repository(
        self, db: Optional[Session] = None
    ) -> IReservationRepository:
        """Create repository for reservations."""
        if self.backend == StorageBackend.MEMORY:
            return InMemoryReservationRepository(self.memory_store)
        from .reservation_repository import ReservationRepository

        return ReservationRepository(self._require_session(db))

    @staticmethod
    def _require_session(db: Optional[Session]) -> Session:
        if db is None:
            raise ValueError("SQL repositories need a database session")
        return db

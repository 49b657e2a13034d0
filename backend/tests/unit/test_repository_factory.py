"""RepositoryFactory wiring."""

from unittest.mock import MagicMock

import pytest

from forest_reservation.core.enums import StorageBackend
from forest_reservation.repositories import (
    AvailabilityRepository,
    InMemoryAvailabilityRepository,
    InMemoryReservationRepository,
    RepositoryFactory,
    ReservationRepository,
)


class TestRepositoryFactory:
    def test_memory_backend_shares_one_store(self) -> None:
        factory = RepositoryFactory(StorageBackend.MEMORY)
        availability = factory.create_availability_repository()
        reservations = factory.create_reservation_repository()

        assert isinstance(availability, InMemoryAvailabilityRepository)
        assert isinstance(reservations, InMemoryReservationRepository)
        assert availability.store is reservations.store is factory.memory_store

    def test_sql_backend_binds_session(self) -> None:
        factory = RepositoryFactory("sql")
        session = MagicMock()

        assert isinstance(factory.create_availability_repository(session), AvailabilityRepository)
        assert factory.create_reservation_repository(session).db is session
        assert isinstance(factory.create_reservation_repository(session), ReservationRepository)

    def test_sql_backend_requires_session(self) -> None:
        with pytest.raises(ValueError):
            RepositoryFactory(StorageBackend.SQL).create_availability_repository()

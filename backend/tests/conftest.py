# backend/tests/conftest.py
"""
Pytest configuration for the forest reservation backend.

Tests never touch a real database: SQL fixtures use an in-memory SQLite
engine (StaticPool) or a throwaway file under tmp_path, and the API client
is built through create_app() with explicit settings and a fixed "today".
"""

from datetime import date
import os
from pathlib import Path
import sys

# Set test mode BEFORE any app imports
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CI", "1")

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from typing import Callable, Iterator

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.orm import Session

from forest_reservation.core.config import Settings
from forest_reservation.core.enums import StorageBackend, TimeSlot
from forest_reservation.core.slot_lock import KeyedLock
from forest_reservation.database import Base, build_engine, build_session_factory
from forest_reservation.domain.records import SlotState
from forest_reservation.main import create_app
from forest_reservation.repositories.factory import RepositoryFactory
from forest_reservation.repositories.memory_repository import InMemoryStore
from forest_reservation.services.availability_service import AvailabilityService
from forest_reservation.services.reservation_service import ReservationService
from forest_reservation.services.seeding_service import SeedingService, SeedStatus

# Monday. 2024-06-10 (the booking scenario date) is a Monday one week later.
FIXED_TODAY = date(2024, 6, 3)
ADMIN_PASSWORD = "test-admin-password"


def fixed_today() -> date:
    return FIXED_TODAY


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "test",
        "database_url": "sqlite://",
        "storage_backend": "sql",
        "admin_password": ADMIN_PASSWORD,
        "secret_key": "test-secret-key",
        "seed_horizon_days": 60,
        "seed_on_startup": True,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


# ============================================================================
# Storage fixtures
# ============================================================================


@pytest.fixture
def sql_engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(sql_engine) -> Iterator[Session]:
    session = build_session_factory(sql_engine)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def file_session_factory(tmp_path):
    """Session factory over a file database so each thread gets its own connection."""
    engine = build_engine(f"sqlite:///{tmp_path / 'forest.db'}")
    Base.metadata.create_all(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture(params=[StorageBackend.MEMORY, StorageBackend.SQL], ids=["memory", "sql"])
def backend_session(request, memory_store):
    """(factory, session) for every storage backend; session is None for memory."""
    if request.param == StorageBackend.MEMORY:
        yield RepositoryFactory(StorageBackend.MEMORY, memory_store), None
        return

    session = request.getfixturevalue("db")
    yield RepositoryFactory(StorageBackend.SQL), session


@pytest.fixture
def availability_repository(backend_session):
    factory, session = backend_session
    return factory.create_availability_repository(session)


@pytest.fixture
def reservation_repository(backend_session):
    factory, session = backend_session
    return factory.create_reservation_repository(session)


# ============================================================================
# Service fixtures
# ============================================================================


@pytest.fixture
def slot_locks() -> KeyedLock:
    return KeyedLock("test")


@pytest.fixture
def seed_status() -> SeedStatus:
    return SeedStatus()


@pytest.fixture
def seeding_service(backend_session, availability_repository, test_settings, seed_status):
    _, session = backend_session
    return SeedingService(
        session,
        availability_repository,
        test_settings,
        seed_status,
        today_provider=fixed_today,
    )


@pytest.fixture
def availability_service(
    backend_session,
    availability_repository,
    reservation_repository,
    test_settings,
    slot_locks,
    seeding_service,
) -> AvailabilityService:
    _, session = backend_session
    return AvailabilityService(
        session,
        availability_repository,
        reservation_repository,
        test_settings,
        slot_locks,
        seeding_service=seeding_service,
        today_provider=fixed_today,
    )


@pytest.fixture
def reservation_service(
    backend_session, reservation_repository, availability_service, test_settings
) -> ReservationService:
    _, session = backend_session
    return ReservationService(
        session,
        reservation_repository,
        availability_service,
        test_settings,
        today_provider=fixed_today,
    )


@pytest.fixture
def make_slot(availability_service) -> Callable[..., SlotState]:
    def _make(
        slot_date: date = date(2024, 6, 10),
        time_slot: TimeSlot = TimeSlot.MORNING,
        capacity: int = 30,
        reserved: int = 0,
        available=True,
    ) -> SlotState:
        return availability_service.create_slot(
            slot_date, time_slot, capacity, reserved=reserved, available=available
        )

    return _make


# ============================================================================
# API fixtures
# ============================================================================


@pytest.fixture(params=["sql", "memory"])
def client(request) -> Iterator[TestClient]:
    """Seeded application for both storage backends."""
    app = create_app(make_settings(storage_backend=request.param), today_provider=fixed_today)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {ADMIN_PASSWORD}"}


@pytest.fixture
def reservation_payload() -> dict:
    return {
        "date": "2024-06-10",
        "timeSlot": "morning",
        "name": "Happy Kindergarten",
        "instName": "Kim Teacher",
        "phone": "010-1234-5678",
        "participants": 5,
        "desiredActivity": "all",
        "parentParticipation": "no",
        "notes": "",
    }

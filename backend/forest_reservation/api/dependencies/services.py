# backend/forest_reservation/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Services are built per request from the shared pieces the app factory put
on ``app.state`` (settings, repository factory, slot locks, seed status) and
the request's database session.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ...core.config import Settings
from ...services.admin_auth_service import AdminAuthService
from ...services.availability_service import AvailabilityService
from ...services.reservation_service import ReservationService
from ...services.seeding_service import SeedingService
from .database import get_db


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_seeding_service(
    request: Request, db: Optional[Session] = Depends(get_db)
) -> SeedingService:
    state = request.app.state
    return SeedingService(
        db,
        state.repository_factory.create_availability_repository(db),
        state.settings,
        state.seed_status,
        today_provider=state.today_provider,
    )


def get_availability_service(
    request: Request,
    db: Optional[Session] = Depends(get_db),
    seeding_service: SeedingService = Depends(get_seeding_service),
) -> AvailabilityService:
    """
    Get availability service instance with all dependencies.

    Returns:
        AvailabilityService bound to this request's session
    """
    state = request.app.state
    factory = state.repository_factory
    return AvailabilityService(
        db,
        seeding_service.availability_repository,
        factory.create_reservation_repository(db),
        state.settings,
        state.slot_locks,
        seeding_service=seeding_service,
        today_provider=state.today_provider,
    )


def get_reservation_service(
    request: Request,
    db: Optional[Session] = Depends(get_db),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> ReservationService:
    return ReservationService(
        db,
        availability_service.reservation_repository,
        availability_service,
        request.app.state.settings,
        today_provider=request.app.state.today_provider,
    )


def get_admin_auth_service(settings: Settings = Depends(get_settings_dep)) -> AdminAuthService:
    return AdminAuthService(settings)

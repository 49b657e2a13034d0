# backend/forest_reservation/routes/health.py
"""
Health check endpoint.

Reports liveness plus the state of the availability seeding pass, so a
deploy can wait until the calendar is populated.
"""

import logging

from fastapi import APIRouter, Request, Response

from ..core.constants import API_VERSION
from ..core.enums import SeedState
from ..schemas.health import HealthResponse, SeedStatusResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns:
        "healthy" once seeding completed, "degraded" before that
    """
    state = request.app.state
    seed = state.seed_status.snapshot()
    status = "healthy" if seed["state"] == SeedState.SEEDED.value else "degraded"

    response.headers["Cache-Control"] = "no-store"
    return HealthResponse(
        status=status,
        version=API_VERSION,
        environment=state.settings.environment,
        storage_backend=state.settings.storage_backend,
        seed=SeedStatusResponse(**seed),
    )

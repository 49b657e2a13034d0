# backend/forest_reservation/routes/availability.py
"""
Availability routes for the forest reservation service.

Router Endpoints:
    GET /{year_month} - Month view (YYYY-MM), one entry per seeded date
    GET /date/{day} - Both slots of one day (YYYY-MM-DD)
    PATCH /update - Admin edit of one slot (creates it when absent)
    DELETE /reset - Admin: delete everything and reseed the window
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends

from ..api.dependencies import get_availability_service, require_admin
from ..core.messages import (
    MSG_AVAILABILITY_LOADED,
    MSG_AVAILABILITY_RESET,
    MSG_AVAILABILITY_UPDATED,
)
from ..core.timezone_utils import parse_iso_date, parse_year_month
from ..schemas.availability import (
    AvailabilityUpdateRequest,
    DayAvailabilityResponse,
    ResetResponse,
    month_response,
)
from ..schemas.base_responses import ApiResponse
from ..services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/availability", tags=["availability"])


@router.get("/date/{day}", response_model=ApiResponse[DayAvailabilityResponse])
async def get_day_availability(
    day: str,
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> ApiResponse[DayAvailabilityResponse]:
    """Both slots of a date; a slot that was never created is reported closed."""
    target = parse_iso_date(day)
    result = await asyncio.to_thread(availability_service.get_day, target)
    return ApiResponse(
        data=DayAvailabilityResponse.from_day(result),
        message=MSG_AVAILABILITY_LOADED,
    )


@router.patch(
    "/update",
    response_model=ApiResponse[DayAvailabilityResponse],
    dependencies=[Depends(require_admin)],
)
async def update_availability(
    payload: AvailabilityUpdateRequest,
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> ApiResponse[DayAvailabilityResponse]:
    """
    Set capacity and the availability flag of one slot.

    ``available`` is stored as ``available and reserved <= capacity``.
    """
    result = await asyncio.to_thread(
        availability_service.admin_update_slot,
        payload.slot_date,
        payload.time_slot,
        payload.capacity,
        payload.available,
    )
    return ApiResponse(
        data=DayAvailabilityResponse.from_day(result),
        message=MSG_AVAILABILITY_UPDATED,
    )


@router.delete(
    "/reset",
    response_model=ApiResponse[ResetResponse],
    dependencies=[Depends(require_admin)],
)
async def reset_availability(
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> ApiResponse[ResetResponse]:
    result = await asyncio.to_thread(availability_service.reset_all)
    return ApiResponse(data=ResetResponse.from_result(result), message=MSG_AVAILABILITY_RESET)


@router.get("/{year_month}", response_model=ApiResponse[List[DayAvailabilityResponse]])
async def get_month_availability(
    year_month: str,
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> ApiResponse[List[DayAvailabilityResponse]]:
    year, month = parse_year_month(year_month)
    days = await asyncio.to_thread(availability_service.get_month, year, month)
    return ApiResponse(data=month_response(days), message=MSG_AVAILABILITY_LOADED)

# backend/forest_reservation/routes/calendar.py
"""Compact month calendar used by the booking page."""

import asyncio
from typing import List

from fastapi import APIRouter, Depends

from ..api.dependencies import get_availability_service
from ..schemas.availability import CalendarDayResponse
from ..schemas.base_responses import ApiResponse
from ..services.availability_service import AvailabilityService

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("/{year}/{month}", response_model=ApiResponse[List[CalendarDayResponse]])
async def get_calendar(
    year: int,
    month: int,
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> ApiResponse[List[CalendarDayResponse]]:
    """
    Which halves of each seeded day are no longer bookable.

    An out-of-range month is rejected with 400.
    """
    days = await asyncio.to_thread(availability_service.get_calendar, year, month)
    return ApiResponse(data=[CalendarDayResponse.from_calendar_day(day) for day in days])

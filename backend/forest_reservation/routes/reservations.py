# backend/forest_reservation/routes/reservations.py
"""
Reservation routes for the forest reservation service.

Router Endpoints:
    POST / - Create a reservation (public booking form)
    GET /search - Public lookup by organization name and phone
    GET /all - Admin list, newest first, optional ?q= filter
    GET /date/{day} - Admin list for one date
    GET /{reservation_id} - Admin detail
    DELETE /{reservation_id} - Admin delete (seats are given back to the slot)
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..api.dependencies import get_reservation_service, require_admin
from ..core.constants import MAX_SEARCH_QUERY_LENGTH
from ..core.messages import (
    MSG_RESERVATION_CREATED,
    MSG_RESERVATION_DELETED,
    MSG_RESERVATIONS_LOADED,
)
from ..core.timezone_utils import parse_iso_date
from ..schemas.base_responses import ApiResponse
from ..schemas.reservation import ReservationCreate, ReservationResponse
from ..services.reservation_service import ReservationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reservations", tags=["reservations"])


def _as_responses(records) -> List[ReservationResponse]:
    return [ReservationResponse.from_record(record) for record in records]


@router.post(
    "",
    response_model=ApiResponse[ReservationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_reservation(
    payload: ReservationCreate,
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ApiResponse[ReservationResponse]:
    """
    Book a morning or afternoon slot.

    Fails with 404 when the slot does not exist and 400 when it is closed
    or lacks room for every participant.
    """
    record = await asyncio.to_thread(reservation_service.create_reservation, payload)
    return ApiResponse(
        data=ReservationResponse.from_record(record),
        message=MSG_RESERVATION_CREATED,
    )


# Fixed paths first so they are not captured by /{reservation_id}


@router.get("/search", response_model=ApiResponse[List[ReservationResponse]])
async def search_reservations(
    name: Optional[str] = Query(None, max_length=MAX_SEARCH_QUERY_LENGTH),
    phone: Optional[str] = Query(None, max_length=MAX_SEARCH_QUERY_LENGTH),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ApiResponse[List[ReservationResponse]]:
    records = await asyncio.to_thread(reservation_service.lookup_reservations, name, phone)
    return ApiResponse(data=_as_responses(records), message=MSG_RESERVATIONS_LOADED)


@router.get(
    "/all",
    response_model=ApiResponse[List[ReservationResponse]],
    dependencies=[Depends(require_admin)],
)
async def list_reservations(
    q: Optional[str] = Query(None, max_length=MAX_SEARCH_QUERY_LENGTH),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ApiResponse[List[ReservationResponse]]:
    records = await asyncio.to_thread(reservation_service.list_reservations, q)
    return ApiResponse(data=_as_responses(records), message=MSG_RESERVATIONS_LOADED)


@router.get(
    "/date/{day}",
    response_model=ApiResponse[List[ReservationResponse]],
    dependencies=[Depends(require_admin)],
)
async def list_reservations_by_date(
    day: str,
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ApiResponse[List[ReservationResponse]]:
    target = parse_iso_date(day)
    records = await asyncio.to_thread(reservation_service.list_reservations_by_date, target)
    return ApiResponse(data=_as_responses(records), message=MSG_RESERVATIONS_LOADED)


@router.get(
    "/{reservation_id}",
    response_model=ApiResponse[ReservationResponse],
    dependencies=[Depends(require_admin)],
)
async def get_reservation(
    reservation_id: str,
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ApiResponse[ReservationResponse]:
    record = await asyncio.to_thread(reservation_service.get_reservation, reservation_id)
    return ApiResponse(data=ReservationResponse.from_record(record))


@router.delete(
    "/{reservation_id}",
    response_model=ApiResponse[ReservationResponse],
    dependencies=[Depends(require_admin)],
)
async def delete_reservation(
    reservation_id: str,
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ApiResponse[ReservationResponse]:
    removed = await asyncio.to_thread(reservation_service.delete_reservation, reservation_id)
    return ApiResponse(
        data=ReservationResponse.from_record(removed),
        message=MSG_RESERVATION_DELETED,
    )

# backend/forest_reservation/schemas/__init__.py
"""
Pydantic schemas for the forest reservation API.

JSON field names are camelCase (``timeSlot``, ``instName``); Python
attributes stay snake_case.
"""

from .admin import AdminLoginRequest, AdminSessionResponse
from .availability import (
    AvailabilityUpdateRequest,
    CalendarDayResponse,
    DayAvailabilityResponse,
    DayStatus,
    ResetResponse,
    SlotViewResponse,
)
from .base_responses import ApiResponse, error_envelope
from .health import HealthResponse, SeedStatusResponse
from .reservation import ReservationCreate, ReservationResponse

__all__ = [
    "AdminLoginRequest",
    "AdminSessionResponse",
    "ApiResponse",
    "AvailabilityUpdateRequest",
    "CalendarDayResponse",
    "DayAvailabilityResponse",
    "DayStatus",
    "HealthResponse",
    "ReservationCreate",
    "ReservationResponse",
    "ResetResponse",
    "SeedStatusResponse",
    "SlotViewResponse",
    "error_envelope",
]

# backend/forest_reservation/core/exceptions.py
"""
Domain-specific exceptions for the forest reservation service.

These exceptions carry the user-facing message, a stable machine code and
the HTTP status they map to, so the API layer can render them without
knowing about individual business rules.
"""

from datetime import date
from typing import Any, Dict, Optional

from fastapi import status

from . import messages


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class UnauthorizedException(DomainException):
    """Raised when the admin credential is missing or wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: Optional[str] = None, code: str = "ADMIN_AUTH_REQUIRED") -> None:
        super().__init__(message=message or messages.MSG_ADMIN_AUTH_REQUIRED, code=code)


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# Specific business exceptions


def _slot_details(slot_date: date, time_slot: str) -> Dict[str, Any]:
    return {"date": slot_date.isoformat(), "time_slot": str(time_slot)}


class SlotNotFoundException(NotFoundException):
    """Raised when an availability slot does not exist for (date, time_slot)."""

    def __init__(self, slot_date: date, time_slot: str):
        super().__init__(
            message=messages.MSG_SLOT_NOT_FOUND,
            code="SLOT_NOT_FOUND",
            details=_slot_details(slot_date, time_slot),
        )


class DuplicateSlotException(ConflictException):
    """Raised when creating a slot whose (date, time_slot) already exists."""

    def __init__(self, slot_date: date, time_slot: str):
        super().__init__(
            message=messages.MSG_SLOT_ALREADY_EXISTS,
            code="SLOT_ALREADY_EXISTS",
            details=_slot_details(slot_date, time_slot),
        )


class SlotClosedException(ValidationException):
    """Raised when booking a slot whose effective availability is false."""

    def __init__(self, slot_date: date, time_slot: str, message: Optional[str] = None):
        super().__init__(
            message=message or messages.MSG_SLOT_CLOSED,
            code="SLOT_CLOSED",
            details=_slot_details(slot_date, time_slot),
        )


class CapacityExceededException(ValidationException):
    """Raised when participants exceed the remaining capacity of a slot."""

    def __init__(self, slot_date: date, time_slot: str, requested: int, remaining: int):
        details = _slot_details(slot_date, time_slot)
        details.update({"requested": requested, "remaining": max(remaining, 0)})
        super().__init__(
            message=messages.MSG_CAPACITY_EXCEEDED,
            code="CAPACITY_EXCEEDED",
            details=details,
        )


class ReservationNotFoundException(NotFoundException):
    """Raised when a reservation id does not exist."""

    def __init__(self, reservation_id: str):
        super().__init__(
            message=messages.MSG_RESERVATION_NOT_FOUND,
            code="RESERVATION_NOT_FOUND",
            details={"reservation_id": reservation_id},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """


class DuplicateRecordError(RepositoryException):
    """A unique key (slot key or reservation id) is already taken."""


def is_db_pool_exhaustion(exc: Exception) -> bool:
    """
    Check if an exception indicates DB connection pool exhaustion.

    This is a common failure mode under high load when all database
    connections are in use and new requests time out waiting.
    """
    error_str = str(exc).lower()
    return "queuepool" in error_str or (
        "timeout" in error_str and ("connection" in error_str or "pool" in error_str)
    )

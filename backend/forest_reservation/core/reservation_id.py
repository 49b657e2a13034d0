"""Reservation id generation helper utilities."""

from datetime import date
import re
import secrets

from .constants import (
    RESERVATION_ID_MAX_SUFFIX,
    RESERVATION_ID_MIN_SUFFIX,
    RESERVATION_ID_PATTERN,
    RESERVATION_ID_PREFIX,
)

_RESERVATION_ID_RE = re.compile(RESERVATION_ID_PATTERN)


def generate_reservation_id(issued_on: date) -> str:
    """Generate a human-readable id such as AR-240610-4821 (issue date + random suffix)."""
    span = RESERVATION_ID_MAX_SUFFIX - RESERVATION_ID_MIN_SUFFIX + 1
    suffix = RESERVATION_ID_MIN_SUFFIX + secrets.randbelow(span)
    return f"{RESERVATION_ID_PREFIX}-{issued_on:%y%m%d}-{suffix}"


def is_valid_reservation_id(value: str) -> bool:
    return isinstance(value, str) and _RESERVATION_ID_RE.fullmatch(value) is not None


"""
Calendar helpers for the forest reservation service.

"Today" always means today in the business timezone (Asia/Seoul by
default), never the server's local date.
"""

import calendar
from datetime import date, datetime, timedelta
import re
from typing import Iterator, Tuple

import pytz

from .constants import ISO_DATE_PATTERN, YEAR_MONTH_PATTERN
from .exceptions import ValidationException
from .messages import MSG_INVALID_DATE, MSG_INVALID_YEAR_MONTH

_YEAR_MONTH_RE = re.compile(YEAR_MONTH_PATTERN)
_ISO_DATE_RE = re.compile(ISO_DATE_PATTERN)


def get_business_timezone(tz_name: str) -> pytz.BaseTzInfo:
    return pytz.timezone(tz_name)


def get_business_now(tz_name: str) -> datetime:
    """Current aware datetime in the business timezone."""
    return datetime.now(pytz.utc).astimezone(get_business_timezone(tz_name))


def get_business_today(tz_name: str) -> date:
    """
    Get 'today' in the business timezone.

    Args:
        tz_name: IANA timezone name, e.g. "Asia/Seoul"

    Returns:
        Today's date in that timezone
    """
    return get_business_now(tz_name).date()


def parse_iso_date(value: str) -> date:
    """
    Parse a strict YYYY-MM-DD string.

    Raises:
        ValidationException: if the format is wrong or the date does not exist
    """
    if not isinstance(value, str) or not _ISO_DATE_RE.fullmatch(value):
        raise ValidationException(MSG_INVALID_DATE, code="INVALID_DATE", details={"value": value})
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationException(
            MSG_INVALID_DATE, code="INVALID_DATE", details={"value": value}
        ) from None


def parse_year_month(value: str) -> Tuple[int, int]:
    """
    Parse a strict YYYY-MM string into (year, month).

    "2024-13" matches the shape but is rejected because month must be 1..12.
    """
    if not isinstance(value, str) or not _YEAR_MONTH_RE.fullmatch(value):
        raise ValidationException(
            MSG_INVALID_YEAR_MONTH, code="INVALID_YEAR_MONTH", details={"value": value}
        )
    year, month = int(value[:4]), int(value[5:7])
    return validate_year_month(year, month)


def validate_year_month(year: int, month: int) -> Tuple[int, int]:
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise ValidationException(
            MSG_INVALID_YEAR_MONTH,
            code="INVALID_YEAR_MONTH",
            details={"year": year, "month": month},
        )
    return year, month


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar day of the month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_days(start: date, count: int) -> Iterator[date]:
    for offset in range(count):
        yield start + timedelta(days=offset)

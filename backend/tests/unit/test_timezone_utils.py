"""Calendar parsing helpers."""

from datetime import date, datetime
from unittest.mock import patch

import pytest
import pytz

from forest_reservation.core.exceptions import ValidationException
from forest_reservation.core.messages import MSG_INVALID_DATE, MSG_INVALID_YEAR_MONTH
from forest_reservation.core.timezone_utils import (
    get_business_today,
    iter_days,
    month_bounds,
    parse_iso_date,
    parse_year_month,
)


class TestParseYearMonth:
    def test_valid(self) -> None:
        assert parse_year_month("2024-06") == (2024, 6)

    @pytest.mark.parametrize("value", ["2024-13", "2024-00", "2024-6", "24-06", "2024-06\n", "abcd-ef"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValidationException) as exc_info:
            parse_year_month(value)
        assert exc_info.value.message == MSG_INVALID_YEAR_MONTH
        assert exc_info.value.status_code == 400


class TestParseIsoDate:
    def test_valid(self) -> None:
        assert parse_iso_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2023-02-29", "2024-6-1", "2024-06-10\n", "today"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValidationException) as exc_info:
            parse_iso_date(value)
        assert exc_info.value.message == MSG_INVALID_DATE


class TestCalendarHelpers:
    def test_month_bounds_leap_year(self) -> None:
        assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_iter_days(self) -> None:
        assert list(iter_days(date(2024, 12, 30), 3)) == [
            date(2024, 12, 30),
            date(2024, 12, 31),
            date(2025, 1, 1),
        ]

    def test_business_today_uses_business_timezone(self) -> None:
        # 2024-06-09 20:00 UTC is already 2024-06-10 in Seoul
        fixed = pytz.utc.localize(datetime(2024, 6, 9, 20, 0))
        with patch("forest_reservation.core.timezone_utils.datetime") as mock_datetime:
            mock_datetime.now.return_value = fixed
            assert get_business_today("Asia/Seoul") == date(2024, 6, 10)
            assert get_business_today("UTC") == date(2024, 6, 9)

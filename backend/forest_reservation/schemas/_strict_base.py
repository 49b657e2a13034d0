"""Schema baselines: camelCase on the wire, snake_case in Python."""

import datetime as dt
import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from ..core.constants import ISO_DATE_PATTERN
from ..core.messages import MSG_INVALID_DATE

_ISO_DATE_RE = re.compile(ISO_DATE_PATTERN)


def _require_iso_date(value: Any) -> Any:
    # Reject "2024-6-1", timestamps and numbers before pydantic's lenient parsing
    if isinstance(value, str) and _ISO_DATE_RE.fullmatch(value):
        return value
    if isinstance(value, dt.date) and not isinstance(value, dt.datetime):
        return value
    raise ValueError(MSG_INVALID_DATE)


IsoDate = Annotated[dt.date, BeforeValidator(_require_iso_date)]


class CamelModel(BaseModel):
    """Base for every DTO exchanged with the booking UI."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class StrictRequestModel(CamelModel):
    """Request DTO base that always forbids unexpected fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

"""Admin session schemas."""

from pydantic import Field

from ._strict_base import CamelModel, StrictRequestModel


class AdminLoginRequest(StrictRequestModel):
    password: str = Field(min_length=1)


class AdminSessionResponse(CamelModel):
    authenticated: bool

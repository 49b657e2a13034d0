"""Health check response schemas."""

from typing import Optional

from ._strict_base import CamelModel


class SeedStatusResponse(CamelModel):
    state: str
    last_seeded_at: Optional[str] = None
    last_created: Optional[int] = None
    window_start: Optional[str] = None
    window_end: Optional[str] = None
    last_error: Optional[str] = None


class HealthResponse(CamelModel):
    status: str
    version: str
    environment: str
    storage_backend: str
    seed: SeedStatusResponse

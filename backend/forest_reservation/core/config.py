# backend/forest_reservation/core/config.py
import logging
import os
from pathlib import Path
from typing import List, Literal

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_ADMIN_COOKIE_MAX_AGE,
    DEFAULT_ADMIN_COOKIE_NAME,
    DEFAULT_BUSINESS_TIMEZONE,
    DEFAULT_CLOSED_WEEKDAY,
    DEFAULT_SEED_HORIZON_DAYS,
    DEFAULT_SLOT_CAPACITY,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

_BACKEND_ROOT = Path(__file__).resolve().parents[2]

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = _BACKEND_ROOT / ".env"
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="development | test | production")
    log_level: str = Field(default="INFO")

    # Storage
    database_url: str = Field(
        default="sqlite:///./forest_reservation.db",
        description="SQLAlchemy URL for the reservation store",
    )
    storage_backend: Literal["sql", "memory"] = Field(
        default="sql",
        description="Which persistence adapter backs the availability and reservation stores",
    )
    sql_echo: bool = Field(default=False)

    # Admin credential
    admin_password: SecretStr = Field(default=SecretStr("1005"))
    secret_key: SecretStr = Field(default=SecretStr("forest-reservation-dev-secret-change-me"))
    admin_cookie_name: str = Field(default=DEFAULT_ADMIN_COOKIE_NAME)
    admin_cookie_max_age: int = Field(default=DEFAULT_ADMIN_COOKIE_MAX_AGE, gt=0)
    admin_cookie_secure: bool = Field(default=False)

    # Calendar / seeding
    business_timezone: str = Field(default=DEFAULT_BUSINESS_TIMEZONE)
    seed_horizon_days: int = Field(default=DEFAULT_SEED_HORIZON_DAYS, ge=1)
    closed_weekday: int = Field(
        default=DEFAULT_CLOSED_WEEKDAY,
        ge=0,
        le=6,
        description="date.weekday() value of the day that is never bookable (6 = Sunday)",
    )
    default_slot_capacity: int = Field(default=DEFAULT_SLOT_CAPACITY, ge=0)
    seed_on_startup: bool = Field(default=True)

    # Booking policy
    close_past_dates: bool = Field(
        default=False,
        description="Report dates before today (business timezone) as unavailable",
    )
    enforce_capacity: bool = Field(
        default=True,
        description="Reject bookings whose participants exceed remaining capacity",
    )

    # HTTP
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5000,http://127.0.0.1:3000",
        description="Comma separated CORS origins",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Build settings from the environment (and backend/.env when present)."""
    return Settings()


settings = get_settings()

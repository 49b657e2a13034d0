# backend/forest_reservation/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from .auth import require_admin
from .database import get_db
from .services import (
    get_admin_auth_service,
    get_availability_service,
    get_reservation_service,
    get_seeding_service,
    get_settings_dep,
)

__all__ = [
    # Auth
    "require_admin",
    # Database
    "get_db",
    # Services
    "get_admin_auth_service",
    "get_availability_service",
    "get_reservation_service",
    "get_seeding_service",
    "get_settings_dep",
]

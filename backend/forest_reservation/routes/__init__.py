# backend/forest_reservation/routes/__init__.py
from . import (
    admin as admin,
    availability as availability,
    calendar as calendar,
    health as health,
    prometheus as prometheus,
    reservations as reservations,
)

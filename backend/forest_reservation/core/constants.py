"""Application-wide constants for the forest reservation service."""

from __future__ import annotations

BRAND_NAME = "Forest Reservation"
API_VERSION = "1.0.0"

# Seeding defaults
DEFAULT_SEED_HORIZON_DAYS = 365
DEFAULT_CLOSED_WEEKDAY = 6  # date.weekday(): Monday=0 ... Sunday=6
DEFAULT_SLOT_CAPACITY = 99999  # sentinel meaning "no practical cap"
DEFAULT_BUSINESS_TIMEZONE = "Asia/Seoul"

# Reservation constraints
MIN_PARTICIPANTS = 1
MAX_PARTICIPANTS = 30
MAX_NAME_LENGTH = 100
MAX_PHONE_LENGTH = 20
MAX_NOTES_LENGTH = 1000

# Reservation ids look like AR-240610-1234
RESERVATION_ID_PREFIX = "AR"
RESERVATION_ID_MIN_SUFFIX = 1000
RESERVATION_ID_MAX_SUFFIX = 9999
RESERVATION_ID_MAX_ATTEMPTS = 20
RESERVATION_ID_PATTERN = r"^AR-\d{6}-\d{4}$"

# Input formats
YEAR_MONTH_PATTERN = r"^\d{4}-\d{2}$"
ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

# Admin session
DEFAULT_ADMIN_COOKIE_NAME = "adminAuth"
DEFAULT_ADMIN_COOKIE_MAX_AGE = 60 * 60 * 24  # seconds
ADMIN_TOKEN_SUBJECT = "admin"
ADMIN_TOKEN_ALGORITHM = "HS256"

# Query limits
MAX_SEARCH_QUERY_LENGTH = 100

# Slow-operation threshold for service logging
SLOW_OPERATION_SECONDS = 1.0

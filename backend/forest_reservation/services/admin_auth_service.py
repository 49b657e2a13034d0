# backend/forest_reservation/services/admin_auth_service.py
"""
Admin credential checks.

There is a single shared admin password. A successful login is remembered
with a signed, expiring JWT stored in an httpOnly cookie; API clients may
instead send the password as a bearer token.
"""

from datetime import datetime, timedelta, timezone
import hmac
import logging
from typing import Optional

import jwt
from jwt import PyJWTError

from ..core.config import Settings
from ..core.constants import ADMIN_TOKEN_ALGORITHM, ADMIN_TOKEN_SUBJECT
from ..core.exceptions import UnauthorizedException
from ..core.messages import MSG_ADMIN_PASSWORD_INVALID

logger = logging.getLogger(__name__)


class AdminAuthService:
    """Verifies the admin password and issues/validates session tokens."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.logger = logging.getLogger(self.__class__.__name__)

    def verify_password(self, password: Optional[str]) -> bool:
        """Constant-time comparison against the configured admin password."""
        if not password:
            return False
        expected = self.settings.admin_password.get_secret_value()
        return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))

    def create_session_token(self, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": ADMIN_TOKEN_SUBJECT,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.settings.admin_cookie_max_age),
        }
        return jwt.encode(
            payload,
            self.settings.secret_key.get_secret_value(),
            algorithm=ADMIN_TOKEN_ALGORITHM,
        )

    def verify_session_token(self, token: Optional[str]) -> bool:
        if not token:
            return False
        try:
            payload = jwt.decode(
                token,
                self.settings.secret_key.get_secret_value(),
                algorithms=[ADMIN_TOKEN_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except PyJWTError as exc:
            self.logger.debug(f"Rejected admin session token: {type(exc).__name__}")
            return False
        return payload.get("sub") == ADMIN_TOKEN_SUBJECT

    def login(self, password: Optional[str]) -> str:
        """
        Exchange the admin password for a session token.

        Raises:
            UnauthorizedException: if the password is wrong
        """
        if not self.verify_password(password):
            self.logger.warning("Admin login failed")
            raise UnauthorizedException(MSG_ADMIN_PASSWORD_INVALID, code="ADMIN_PASSWORD_INVALID")
        self.logger.info("Admin login succeeded")
        return self.create_session_token()

    def is_authorized(
        self, cookie_token: Optional[str], authorization: Optional[str] = None
    ) -> bool:
        """True for a valid session cookie or an ``Authorization: Bearer <password>`` header."""
        if self.verify_session_token(cookie_token):
            return True
        if authorization:
            scheme, _, credential = authorization.partition(" ")
            if scheme.lower() == "bearer" and self.verify_password(credential.strip()):
                return True
        return False

"""Admin password and session-token checks."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from forest_reservation.core.exceptions import UnauthorizedException
from forest_reservation.services.admin_auth_service import AdminAuthService
from tests.conftest import ADMIN_PASSWORD, make_settings


@pytest.fixture
def auth_service() -> AdminAuthService:
    return AdminAuthService(make_settings(admin_cookie_max_age=60))


class TestAdminAuthService:
    def test_verify_password(self, auth_service: AdminAuthService) -> None:
        assert auth_service.verify_password(ADMIN_PASSWORD)
        assert not auth_service.verify_password("wrong")
        assert not auth_service.verify_password("")
        assert not auth_service.verify_password(None)

    def test_login_issues_verifiable_token(self, auth_service: AdminAuthService) -> None:
        token = auth_service.login(ADMIN_PASSWORD)
        assert auth_service.verify_session_token(token)
        assert auth_service.is_authorized(token)

    def test_login_with_wrong_password(self, auth_service: AdminAuthService) -> None:
        with pytest.raises(UnauthorizedException) as exc_info:
            auth_service.login("wrong")
        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "ADMIN_PASSWORD_INVALID"

    def test_expired_token_is_rejected(self, auth_service: AdminAuthService) -> None:
        token = auth_service.create_session_token(now=datetime.now(timezone.utc) - timedelta(hours=1))
        assert not auth_service.verify_session_token(token)

    def test_token_signed_with_other_key_is_rejected(self, auth_service: AdminAuthService) -> None:
        forged = jwt.encode(
            {"sub": "admin", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "another-key",
            algorithm="HS256",
        )
        assert not auth_service.verify_session_token(forged)

    def test_token_with_other_subject_is_rejected(self, auth_service: AdminAuthService) -> None:
        token = jwt.encode(
            {"sub": "visitor", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "test-secret-key",
            algorithm="HS256",
        )
        assert not auth_service.verify_session_token(token)

    def test_bearer_password(self, auth_service: AdminAuthService) -> None:
        assert auth_service.is_authorized(None, f"Bearer {ADMIN_PASSWORD}")
        assert auth_service.is_authorized(None, f"bearer {ADMIN_PASSWORD}")
        assert not auth_service.is_authorized(None, "Bearer wrong")
        assert not auth_service.is_authorized(None, f"Basic {ADMIN_PASSWORD}")
        assert not auth_service.is_authorized("garbage", None)

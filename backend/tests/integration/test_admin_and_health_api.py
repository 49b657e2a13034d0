"""Admin session, health and metrics endpoints."""

import pytest

from forest_reservation.core import messages
from tests.conftest import ADMIN_PASSWORD


@pytest.mark.integration
class TestAdminSession:
    def test_login_sets_cookie_that_unlocks_admin_routes(self, client) -> None:
        assert client.get("/api/reservations/all").status_code == 401

        response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
        assert response.status_code == 200
        assert response.json()["message"] == messages.MSG_ADMIN_LOGIN_SUCCESS
        set_cookie = response.headers["set-cookie"]
        assert "adminAuth=" in set_cookie
        assert "httponly" in set_cookie.lower()

        assert client.get("/api/admin/me").json()["data"] == {"authenticated": True}
        assert client.get("/api/reservations/all").status_code == 200

    def test_wrong_password(self, client) -> None:
        response = client.post("/api/admin/login", json={"password": "nope"})
        assert response.status_code == 401
        assert response.json()["message"] == messages.MSG_ADMIN_PASSWORD_INVALID

    def test_logout_clears_session(self, client) -> None:
        client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
        response = client.post("/api/admin/logout")
        assert response.status_code == 200
        assert client.get("/api/admin/me").json()["data"] == {"authenticated": False}
        assert client.get("/api/reservations/all").status_code == 401

    def test_forged_cookie(self, client) -> None:
        response = client.get("/api/reservations/all", headers={"Cookie": "adminAuth=not-a-token"})
        assert response.status_code == 401


@pytest.mark.integration
class TestOperationalEndpoints:
    def test_health_reports_seed_state(self, client) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["seed"]["state"] == "seeded"
        assert body["seed"]["windowStart"] == "2024-06-03"
        assert body["storageBackend"] in {"sql", "memory"}

    def test_metrics(self, client, reservation_payload) -> None:
        client.post("/api/reservations", json=reservation_payload)
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "forest_reservation_http_request" in response.text
        assert "forest_reservation_reservations_created" in response.text

    def test_unknown_route_uses_envelope(self, client) -> None:
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "data": None,
            "message": messages.MSG_NOT_FOUND,
        }

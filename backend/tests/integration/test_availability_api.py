"""Availability and calendar endpoints."""

import pytest

from forest_reservation.core import messages


@pytest.mark.integration
class TestAvailabilityRoutes:
    def test_month_view(self, client) -> None:
        response = client.get("/api/availability/2024-06")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        dates = [day["date"] for day in body["data"]]
        # Seeded from 2024-06-03; Sundays are never seeded
        assert dates[0] == "2024-06-03"
        assert "2024-06-09" not in dates
        assert dates == sorted(dates)
        first = body["data"][0]["status"]["morning"]
        assert first == {"available": True, "capacity": 99999, "reserved": 0}

    @pytest.mark.parametrize("year_month", ["2024-13", "2024-00", "2024-6", "june"])
    def test_month_view_rejects_bad_input(self, client, year_month: str) -> None:
        response = client.get(f"/api/availability/{year_month}")
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "data": None,
            "message": messages.MSG_INVALID_YEAR_MONTH,
        }

    def test_day_view(self, client) -> None:
        body = client.get("/api/availability/date/2024-06-10").json()
        assert body["data"]["date"] == "2024-06-10"
        assert body["data"]["status"]["afternoon"]["available"] is True

    def test_unseeded_day_is_closed(self, client) -> None:
        body = client.get("/api/availability/date/2024-06-09").json()
        closed = {"available": False, "capacity": 0, "reserved": 0}
        assert body["data"]["status"] == {"morning": closed, "afternoon": closed}

    @pytest.mark.parametrize("day", ["2024-02-30", "2024-6-10", "tomorrow"])
    def test_day_view_rejects_bad_date(self, client, day: str) -> None:
        response = client.get(f"/api/availability/date/{day}")
        assert response.status_code == 400
        assert response.json()["message"] == messages.MSG_INVALID_DATE

    def test_calendar(self, client) -> None:
        body = client.get("/api/calendar/2024/6").json()
        assert body["success"] is True
        assert body["data"][0] == {
            "date": "2024-06-03",
            "morningReserved": False,
            "afternoonReserved": False,
        }

    def test_calendar_rejects_bad_month(self, client) -> None:
        assert client.get("/api/calendar/2024/13").status_code == 400
        response = client.get("/api/calendar/2024/jun")
        assert response.status_code == 400
        assert response.json()["message"] == messages.MSG_INVALID_YEAR_MONTH


@pytest.mark.integration
class TestAdminAvailabilityRoutes:
    def test_update_requires_admin(self, client) -> None:
        response = client.patch(
            "/api/availability/update",
            json={"date": "2024-06-10", "timeSlot": "morning", "capacity": 10, "available": False},
        )
        assert response.status_code == 401
        assert response.json()["message"] == messages.MSG_ADMIN_AUTH_REQUIRED

    def test_update(self, client, admin_headers) -> None:
        response = client.patch(
            "/api/availability/update",
            json={"date": "2024-06-10", "timeSlot": "morning", "capacity": 10, "available": False},
            headers=admin_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == messages.MSG_AVAILABILITY_UPDATED
        assert body["data"]["status"]["morning"] == {
            "available": False,
            "capacity": 10,
            "reserved": 0,
        }

    def test_update_creates_missing_slot(self, client, admin_headers) -> None:
        response = client.patch(
            "/api/availability/update",
            json={"date": "2024-06-09", "timeSlot": "afternoon", "capacity": 8, "available": True},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"]["afternoon"]["capacity"] == 8

    def test_update_missing_field(self, client, admin_headers) -> None:
        response = client.patch(
            "/api/availability/update",
            json={"date": "2024-06-10", "timeSlot": "morning", "capacity": 10},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == messages.MSG_REQUIRED_FIELDS_MISSING

    def test_update_bad_time_slot(self, client, admin_headers) -> None:
        response = client.patch(
            "/api/availability/update",
            json={"date": "2024-06-10", "timeSlot": "evening", "capacity": 10, "available": True},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == messages.MSG_INVALID_TIME_SLOT

    def test_reset(self, client, admin_headers, reservation_payload) -> None:
        client.post("/api/reservations", json=reservation_payload)
        client.patch(
            "/api/availability/update",
            json={"date": "2024-06-10", "timeSlot": "morning", "capacity": 10, "available": False},
            headers=admin_headers,
        )

        response = client.delete("/api/availability/reset", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == messages.MSG_AVAILABILITY_RESET
        assert body["data"]["windowStart"] == "2024-06-03"
        morning = client.get("/api/availability/date/2024-06-10").json()["data"]["status"]["morning"]
        assert morning == {"available": True, "capacity": 99999, "reserved": 0}
        assert client.get("/api/reservations/all", headers=admin_headers).json()["data"] == []

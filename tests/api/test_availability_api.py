"""
Tests for the Availability (patterns and slots) API endpoints.
"""
from fastapi.testclient import TestClient

from tests.constants import UNKNOWN_ID
from tests.api.helpers import create_service, create_pattern

from pprint import pp as pprint

WEEK_QUERY = {"startDate": "2024-01-01T00:00:00", "endDate": "2024-01-07T23:59:59"}


class TestPatternsAPI:

    def test_create_pattern_generates_slots(self, client: TestClient):
        service = create_service(client)
        pattern = create_pattern(client, service["id"])

        assert pattern["slotType"] == "Hour"
        assert pattern["daysOfWeek"] == "1,2,3,4,5"

        response = client.get(f"/services/{service['id']}/availability/slots", params=WEEK_QUERY)
        assert response.status_code == 200
        slots = response.json()
        assert len(slots) == 40
        assert set(slots[0].keys()) == {"id", "startDateTime", "endDateTime", "slotType", "isAvailable"}
        assert slots[0]["startDateTime"] == "2024-01-01T09:00:00"
        assert slots[0]["endDateTime"] == "2024-01-01T10:00:00"
        pprint(slots[0])

    def test_list_patterns(self, client: TestClient):
        service = create_service(client)
        create_pattern(client, service["id"])

        response = client.get(f"/services/{service['id']}/availability/patterns")
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_update_pattern(self, client: TestClient):
        service = create_service(client)
        pattern = create_pattern(client, service["id"])

        payload = {**pattern, "slotDuration": 120}
        payload.pop("id")
        response = client.put(f"/services/{service['id']}/availability/patterns/{pattern['id']}", json=payload)
        assert response.status_code == 200
        assert response.json()["slotDuration"] == 120

        slots = client.get(f"/services/{service['id']}/availability/slots", params=WEEK_QUERY).json()
        assert len(slots) == 20

    def test_delete_pattern(self, client: TestClient):
        service = create_service(client)
        pattern = create_pattern(client, service["id"])

        response = client.delete(f"/services/{service['id']}/availability/patterns/{pattern['id']}")
        assert response.status_code == 204

        slots = client.get(f"/services/{service['id']}/availability/slots", params=WEEK_QUERY).json()
        assert slots == []

        response = client.delete(f"/services/{service['id']}/availability/patterns/{pattern['id']}")
        assert response.status_code == 404

    def test_invalid_patterns_rejected(self, client: TestClient):
        service = create_service(client)
        url = f"/services/{service['id']}/availability/patterns"
        base = {"slotType": "Hour", "slotDuration": 60, "startDate": "2024-01-01"}

        assert client.post(url, json={**base, "slotDuration": 0}).status_code == 422
        assert client.post(url, json={**base, "slotType": ""}).status_code == 422
        assert client.post(url, json={**base, "startTime": "17:00:00", "endTime": "09:00:00"}).status_code == 422
        assert client.post(url, json={**base, "endDate": "2023-12-31"}).status_code == 422

    def test_unknown_slot_type_creates_no_slots(self, client: TestClient):
        service = create_service(client)
        create_pattern(client, service["id"], slotType="Fortnight")

        slots = client.get(f"/services/{service['id']}/availability/slots", params=WEEK_QUERY).json()
        assert slots == []

    def test_pattern_for_unknown_service(self, client: TestClient):
        response = client.post(f"/services/{UNKNOWN_ID}/availability/patterns", json={
            "slotType": "Hour", "slotDuration": 60, "startDate": "2024-01-01"
        })
        assert response.status_code == 404


class TestSlotsAPI:

    def test_slots_require_window(self, client: TestClient):
        service = create_service(client)
        response = client.get(f"/services/{service['id']}/availability/slots")
        assert response.status_code == 422

    def test_reversed_window(self, client: TestClient):
        service = create_service(client)
        response = client.get(
            f"/services/{service['id']}/availability/slots",
            params={"startDate": "2024-01-07T00:00:00", "endDate": "2024-01-01T00:00:00"}
        )
        assert response.status_code == 400

    def test_week_slots(self, client: TestClient):
        service = create_service(client)
        create_pattern(client, service["id"], slotType="Week", endDate="2024-01-31")

        slots = client.get(
            f"/services/{service['id']}/availability/slots",
            params={"startDate": "2023-12-01T00:00:00", "endDate": "2024-02-01T00:00:00"}
        ).json()
        assert [s["startDateTime"][:10] for s in slots] == [
            "2023-12-31", "2024-01-07", "2024-01-14", "2024-01-21", "2024-01-28"
        ]
        assert slots[0]["endDateTime"] == "2024-01-06T23:59:59"

    def test_offset_window(self, client: TestClient):
        """09:00-12:00 at +03:00 is 06:00-09:00 UTC."""
        service = create_service(client)
        create_pattern(client, service["id"], startTime="06:00:00")

        response = client.get(
            f"/services/{service['id']}/availability/slots",
            params={"startDate": "2024-01-01T09:00:00+03:00", "endDate": "2024-01-01T12:00:00+03:00"}
        )
        assert response.status_code == 200
        assert [s["startDateTime"] for s in response.json()] == [
            "2024-01-01T06:00:00", "2024-01-01T07:00:00", "2024-01-01T08:00:00", "2024-01-01T09:00:00"
        ]

    def test_mixed_offset_window(self, client: TestClient):
        service = create_service(client)
        response = client.get(
            f"/services/{service['id']}/availability/slots",
            params={"startDate": "2024-01-01T00:00:00", "endDate": "2024-01-01T12:00:00Z"}
        )
        assert response.status_code == 200

"""
Small request helpers shared by the API tests.
"""
from fastapi.testclient import TestClient

WORKWEEK_PATTERN = {
    "slotType": "Hour",
    "slotDuration": 60,
    "startTime": "09:00:00",
    "endTime": "17:00:00",
    "daysOfWeek": "1,2,3,4,5",
    "startDate": "2024-01-01",
    "endDate": "2024-01-05",
}


def create_service(client: TestClient, **overrides) -> dict:
    payload = {"title": "Haircut", "providerName": "Dana Cole", "duration": 60, "businessName": "Cole Studio"}
    payload.update(overrides)
    response = client.post("/services/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_pattern(client: TestClient, service_id: str, **overrides) -> dict:
    payload = dict(WORKWEEK_PATTERN)
    payload.update(overrides)
    response = client.post(f"/services/{service_id}/availability/patterns", json=payload)
    assert response.status_code == 201, response.text
    return response.json()

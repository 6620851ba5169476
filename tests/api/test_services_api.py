"""
Tests for the Services API endpoints.
"""
from fastapi.testclient import TestClient

from tests.constants import UNKNOWN_ID
from tests.api.helpers import create_service

from pprint import pp as pprint


def test_health_check(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestServicesAPI:
    """Test class for the /services endpoints."""

    def test_create_and_get_service(self, client: TestClient):
        created = create_service(client)

        assert created["providerName"] == "Dana Cole"
        assert created["durationUnit"] == "minutes"
        assert created["sharableToken"] is None

        response = client.get(f"/services/{created['id']}")
        assert response.status_code == 200
        assert response.json()["title"] == "Haircut"
        pprint(response.json())

    def test_list_services(self, client: TestClient):
        create_service(client, title="Haircut")
        create_service(client, title="Beard trim")

        response = client.get("/services/")
        assert response.status_code == 200
        assert sorted(s["title"] for s in response.json()) == ["Beard trim", "Haircut"]

    def test_create_service_validation(self, client: TestClient):
        response = client.post("/services/", json={"title": "", "providerName": "Dana Cole"})
        assert response.status_code == 422

    def test_update_service(self, client: TestClient):
        created = create_service(client)

        response = client.put(f"/services/{created['id']}", json={"description": "Now with hot towel."})
        assert response.status_code == 200
        assert response.json()["description"] == "Now with hot towel."
        assert response.json()["title"] == "Haircut"

        response = client.put(f"/services/{created['id']}", json={})
        assert response.status_code == 400

    def test_delete_service(self, client: TestClient):
        created = create_service(client)

        response = client.delete(f"/services/{created['id']}")
        assert response.status_code == 204

        response = client.get(f"/services/{created['id']}")
        assert response.status_code == 404

    def test_unknown_service_is_404(self, client: TestClient):
        response = client.get(f"/services/{UNKNOWN_ID}")
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]


class TestSharableLinkAPI:

    def test_generate_link(self, client: TestClient):
        created = create_service(client)

        first = client.post(f"/services/{created['id']}/sharable-link")
        second = client.post(f"/services/{created['id']}/sharable-link")

        assert first.status_code == 200
        assert first.json()["token"] == second.json()["token"]
        assert first.json()["publicUrl"].endswith(f"/service/{created['id']}/{first.json()['token']}")

        service = client.get(f"/services/{created['id']}").json()
        assert service["sharableToken"] == first.json()["token"]

    def test_regenerate_link(self, client: TestClient):
        created = create_service(client)
        old_token = client.post(f"/services/{created['id']}/sharable-link").json()["token"]

        response = client.post(f"/services/{created['id']}/regenerate-link")
        assert response.status_code == 200
        new_token = response.json()["token"]
        assert new_token != old_token

        assert client.get(f"/public/service/{old_token}").status_code == 404
        assert client.get(f"/public/service/{new_token}").status_code == 200

"""Integration tests for the HTTP surface."""

import uuid
from typing import Any

import pytest
from fastapi.testclient import TestClient

from backend.app.api.auth import get_token_verifier
from tests.conftest import Seed


def _created(response: Any) -> dict[str, Any]:
    assert response.status_code == 201, response.text
    return response.json()  # type: ignore[no-any-return]


@pytest.fixture
def route(client: TestClient) -> dict[str, Any]:
    return _created(client.post("/routes", json={"name": "Costa Verde", "start_date": "2024-06-01"}))


class TestAuth:
    def test_missing_token(self, client: TestClient) -> None:
        response = client.get("/routes", headers={"Authorization": ""})

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing or invalid authorization header"

    def test_bad_token(self, client: TestClient) -> None:
        response = client.get("/routes", headers={"Authorization": "Bearer nonsense"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid bearer token"

    def test_verifier_can_be_overridden(self, client: TestClient) -> None:
        class RejectAll:
            def verify(self, token: str) -> None:
                return None

        client.app.dependency_overrides[get_token_verifier] = RejectAll  # type: ignore[attr-defined]
        try:
            assert client.get("/routes").status_code == 401
        finally:
            client.app.dependency_overrides.clear()  # type: ignore[attr-defined]

    def test_health_is_public(self, client: TestClient) -> None:
        response = client.get("/health", headers={"Authorization": ""})

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestHealthAndMetrics:
    def test_healthz_checks_database(self, client: TestClient) -> None:
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "components": {"db": "ok"}}

    def test_healthz_degraded(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "backend.app.api.routes.health.check_db", lambda database: (False, "error: timeout")
        )

        response = client.get("/healthz")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    def test_metrics_after_mutation(self, client: TestClient, route: dict[str, Any]) -> None:
        client.post(f"/routes/{route['id']}/segments", json={"distance": 12})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "itinerary_operations_total" in response.text
        assert 'operation="create_segment"' in response.text

    def test_domain_errors_counted_by_outcome(
        self, client: TestClient, route: dict[str, Any]
    ) -> None:
        segment = _created(client.post(f"/routes/{route['id']}/segments", json={}))
        client.post(f"/segments/{segment['id']}/move", json={"direction": "up"})

        response = client.get("/metrics")

        assert (
            'itinerary_operations_total{component="api",operation="move_segment",'
            'outcome="invalid"}'
        ) in response.text


class TestEntities:
    def test_crud(self, client: TestClient) -> None:
        location = _created(client.post("/entities/location", json={"name": "Trindade"}))

        fetched = client.get(f"/entities/location/{location['id']}")
        assert fetched.json()["name"] == "Trindade"

        replaced = client.put(
            f"/entities/location/{location['id']}", json={"name": "Trindade", "note": "beach"}
        )
        assert replaced.json()["note"] == "beach"

        assert client.delete(f"/entities/location/{location['id']}").status_code == 204
        assert client.get(f"/entities/location/{location['id']}").status_code == 404

    def test_vehicle_owner_validation_is_422(self, client: TestClient) -> None:
        response = client.post(
            "/entities/vehicle", json={"type": "Boat", "vehicle_owner": "third-party"}
        )

        assert response.status_code == 422

    def test_unknown_reference_is_404(self, client: TestClient) -> None:
        response = client.post(
            "/entities/hotel", json={"name": "Nowhere", "location_id": str(uuid.uuid4())}
        )

        assert response.status_code == 404


class TestRouteFlow:
    def test_segments_dates_and_move(self, client: TestClient, route: dict[str, Any]) -> None:
        route_id = route["id"]
        first = _created(client.post(f"/routes/{route_id}/segments", json={"distance": 30}))
        _created(client.post(f"/routes/{route_id}/segments", json={"distance": 20}))

        detail = client.get(f"/routes/{route_id}").json()
        assert detail["end_date"] == "2024-06-02"
        assert detail["duration"] == 2
        assert [s["segment_date"] for s in detail["segments"]] == ["2024-06-01", "2024-06-02"]

        moved = client.post(f"/segments/{first['id']}/move", json={"direction": "down"})
        assert moved.status_code == 200
        assert moved.json()[1]["id"] == first["id"]

        edge = client.post(f"/segments/{first['id']}/move", json={"direction": "down"})
        assert edge.status_code == 400
        assert edge.json() == {"detail": "Segment is already last"}

    def test_logistics_serialize_date_key(
        self, client: TestClient, route: dict[str, Any], seed: Seed
    ) -> None:
        response = client.post(
            f"/routes/{route['id']}/logistics",
            json={
                "logistics_type": "support-vehicle",
                "entity_id": str(seed.jeep),
                "quantity": 4,
                "cost": 300,
                "date": "2024-06-01",
            },
        )

        body = _created(response)
        assert body["quantity"] == 1
        assert body["date"] == "2024-06-01"
        assert body["vehicle_type"] == "Jeep"
        assert body["entity_name"] == "Jeep - Company"

    def test_participant_and_room(
        self, client: TestClient, route: dict[str, Any], seed: Seed
    ) -> None:
        route_id = route["id"]
        segment = _created(client.post(f"/routes/{route_id}/segments", json={}))
        participant = _created(
            client.post(
                f"/routes/{route_id}/participants",
                json={"role": "client", "client_id": str(seed.alice), "segment_ids": []},
            )
        )
        assert participant["segment_ids"] == []

        assigned = client.put(
            f"/participants/{participant['id']}/segments", json={"segment_ids": [segment["id"]]}
        )
        assert assigned.json()["segment_ids"] == [segment["id"]]

        booking = _created(
            client.post(
                f"/segments/{segment['id']}/accommodations",
                json={"hotel_id": str(seed.hotel), "group_type": "client"},
            )
        )
        rejected = client.post(
            f"/accommodations/{booking['id']}/rooms",
            json={"room_type": "double", "is_couple": True, "participant_ids": [participant["id"]]},
        )
        assert rejected.status_code == 400

    def test_transfer_rules(self, client: TestClient, route: dict[str, Any], seed: Seed) -> None:
        payload = {
            "transfer_date": "2024-05-31",
            "from_location_id": str(seed.rio),
            "to_location_id": str(seed.rio),
            "vehicles": [{"vehicle_id": str(seed.jeep), "cost": 200}],
        }
        assert client.post(f"/routes/{route['id']}/transfers", json=payload).status_code == 400

        payload["to_location_id"] = str(seed.paraty)
        transfer = _created(client.post(f"/routes/{route['id']}/transfers", json=payload))
        assert transfer["total_cost"] == 200
        assert transfer["vehicles"][0]["is_own_vehicle"] is True

    def test_accounts_primary(self, client: TestClient, seed: Seed) -> None:
        body = {
            "entity_type": "hotel",
            "entity_id": str(seed.hotel),
            "account_type": "cash",
            "account_holder_name": "Front desk",
            "is_primary": True,
        }
        first = _created(client.post("/accounts", json=body))
        second = _created(client.post("/accounts", json=body))

        listed = client.get("/accounts", params={"entity_type": "hotel"}).json()
        assert [(a["id"], a["is_primary"]) for a in listed] == [
            (second["id"], True),
            (first["id"], False),
        ]

    def test_duplicate_and_delete(self, client: TestClient, route: dict[str, Any]) -> None:
        copy = _created(client.post(f"/routes/{route['id']}/duplicate"))
        assert copy["name"] == "Costa Verde (Copy)"

        assert client.delete(f"/routes/{route['id']}").status_code == 204
        assert client.get(f"/routes/{route['id']}").status_code == 404

    def test_unknown_route_is_404(self, client: TestClient) -> None:
        response = client.get(f"/routes/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"detail": "Route not found"}

"""
Tests for the user places endpoints.
"""

from fastapi.testclient import TestClient

from app.services.places_store import TransportError


def place_ids(data):
    return [place["id"] for place in data["places"]]


def test_get_user_places_after_startup(client: TestClient):
    response = client.get("/api/v1/user-places")

    assert response.status_code == 200
    data = response.json()
    assert data == {
        "places": [],
        "is_loading": False,
        "is_syncing": False,
        "load_error": None,
        "sync_error": None,
    }


def test_reload_user_places(client: TestClient, fake_store, nuuksio, porvoo):
    fake_store.stored = (porvoo, nuuksio)

    response = client.post("/api/v1/user-places/reload")

    assert response.status_code == 200
    assert place_ids(response.json()) == [porvoo.id, nuuksio.id]


def test_reload_failure_reports_load_error(client: TestClient, fake_store):
    fake_store.read_error = TransportError("Places store returned status 500")

    response = client.post("/api/v1/user-places/reload")

    data = response.json()
    assert data["places"] == []
    assert data["load_error"] == {"message": "Places store returned status 500", "phase": "load"}
    assert data["sync_error"] is None


def test_select_place(client: TestClient, fake_store, suomenlinna, nuuksio):
    """Test that selected places are put at the front and stored."""
    client.post("/api/v1/user-places", json={"place_id": nuuksio.id})
    response = client.post("/api/v1/user-places", json={"place_id": suomenlinna.id})

    assert response.status_code == 200
    assert place_ids(response.json()) == [suomenlinna.id, nuuksio.id]
    assert [place.id for place in fake_store.stored] == [suomenlinna.id, nuuksio.id]


def test_select_place_twice(client: TestClient, fake_store, porvoo):
    client.post("/api/v1/user-places", json={"place_id": porvoo.id})
    response = client.post("/api/v1/user-places", json={"place_id": porvoo.id})

    assert place_ids(response.json()) == [porvoo.id]
    assert len(fake_store.writes) == 1


def test_select_unknown_place(client: TestClient):
    response = client.post("/api/v1/user-places", json={"place_id": "missing"})

    assert response.status_code == 404
    assert "missing" in response.json()["detail"]


def test_select_place_invalid_body(client: TestClient):
    response = client.post("/api/v1/user-places", json={})

    assert response.status_code == 422


def test_select_place_failed_save_and_dismiss(client: TestClient, fake_store, nuuksio, porvoo):
    client.post("/api/v1/user-places", json={"place_id": nuuksio.id})
    fake_store.write_error = TransportError("")

    response = client.post("/api/v1/user-places", json={"place_id": porvoo.id})

    data = response.json()
    assert place_ids(data) == [nuuksio.id]
    assert data["sync_error"] == {"message": "Failed to update places.", "phase": "sync"}

    response = client.delete("/api/v1/user-places/error")

    data = response.json()
    assert data["sync_error"] is None
    assert place_ids(data) == [nuuksio.id]


def test_removal_confirm_flow(client: TestClient, fake_store, suomenlinna, nuuksio):
    client.post("/api/v1/user-places", json={"place_id": nuuksio.id})
    client.post("/api/v1/user-places", json={"place_id": suomenlinna.id})

    response = client.post(f"/api/v1/user-places/{nuuksio.id}/removal")

    assert response.status_code == 200
    data = response.json()
    assert data["state"] == "pending"
    assert data["target"]["id"] == nuuksio.id
    assert client.get("/api/v1/user-places/removal").json()["state"] == "pending"

    response = client.post("/api/v1/user-places/removal/confirm")

    assert place_ids(response.json()) == [suomenlinna.id]
    assert [place.id for place in fake_store.stored] == [suomenlinna.id]
    assert client.get("/api/v1/user-places/removal").json() == {"state": "idle", "target": None}


def test_removal_cancel_flow(client: TestClient, fake_store, nuuksio):
    client.post("/api/v1/user-places", json={"place_id": nuuksio.id})
    client.post(f"/api/v1/user-places/{nuuksio.id}/removal")

    response = client.post("/api/v1/user-places/removal/cancel")

    assert response.json() == {"state": "idle", "target": None}
    assert place_ids(client.get("/api/v1/user-places").json()) == [nuuksio.id]
    assert len(fake_store.writes) == 1


def test_confirm_without_pending_removal(client: TestClient, fake_store, nuuksio):
    client.post("/api/v1/user-places", json={"place_id": nuuksio.id})

    response = client.post("/api/v1/user-places/removal/confirm")

    assert response.status_code == 200
    assert place_ids(response.json()) == [nuuksio.id]
    assert len(fake_store.writes) == 1


def test_request_removal_of_unknown_place(client: TestClient):
    response = client.post("/api/v1/user-places/missing/removal")

    assert response.status_code == 404
    assert client.get("/api/v1/user-places/removal").json()["state"] == "idle"


def test_removal_failed_save_rolls_back(client: TestClient, fake_store, nuuksio, porvoo):
    client.post("/api/v1/user-places", json={"place_id": nuuksio.id})
    client.post("/api/v1/user-places", json={"place_id": porvoo.id})
    fake_store.write_error = TransportError("")
    client.post(f"/api/v1/user-places/{nuuksio.id}/removal")

    response = client.post("/api/v1/user-places/removal/confirm")

    data = response.json()
    assert place_ids(data) == [porvoo.id, nuuksio.id]
    assert data["sync_error"] == {"message": "Failed to delete place.", "phase": "sync"}

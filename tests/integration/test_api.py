from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fibseq.app.main import create_app
from fibseq.core.config.settings import AppSettings
from fibseq.core.sequence.registry import ActorRegistry

CF_HEADERS = {
    "cf-ipcity": "Amsterdam",
    "cf-ipcountry": "NL",
    "cf-region": "North Holland",
    "cf-timezone": "Europe/Amsterdam",
    "cf-iplatitude": "52.37",
    "cf-iplongitude": "4.89",
    "cf-postal-code": "1012",
    "cf-ray": "8a1b2c3d4e5f6789-AMS",
}


@pytest.fixture
def client(tmp_path: Path) -> TestClient:
    app = create_app(AppSettings(store_backend="json", state_dir=tmp_path, fsync=False))
    with TestClient(app) as c:
        yield c


def test_index_is_plain_text(client: TestClient) -> None:
    r = client.get("/")

    assert r.status_code == 200
    assert r.text == "Sequence actor service is running"


def test_health(client: TestClient) -> None:
    r = client.get("/api/health")

    assert r.status_code == 200
    assert r.json() == {"status": "ok", "environment": "local", "store_backend": "json"}


def test_message_advances_default_sequence(client: TestClient) -> None:
    first = client.get("/message", headers=CF_HEADERS).json()
    second = client.get("/message").json()
    third = client.get("/message").json()

    assert first["previous"] is None
    assert first["current"]["counter"] == 2
    assert first["current"]["location"] == {
        "city": "Amsterdam",
        "country": "NL",
        "region": "North Holland",
        "timezone": "Europe/Amsterdam",
        "latitude": "52.37",
        "longitude": "4.89",
        "postalCode": "1012",
        "colo": "AMS",
    }

    assert second["current"]["counter"] == 3
    assert second["previous"] == first["current"]
    assert set(second["current"]["location"].values()) == {"Unknown"}

    assert third["current"]["counter"] == 5
    assert third["previous"]["counter"] == 3
    assert third["current"]["timestamp"] >= second["current"]["timestamp"]


def test_named_sequences_are_independent(client: TestClient) -> None:
    client.post("/api/sequences/left/advance", json={"side": "left"})
    client.post("/api/sequences/left/advance", json={"side": "left"})
    r = client.post("/api/sequences/right/advance", json={"side": "right"})

    assert r.status_code == 200
    assert r.json()["current"] == {
        "counter": 2,
        "location": {"side": "right"},
        "timestamp": r.json()["current"]["timestamp"],
    }

    left = client.get("/api/sequences/left").json()
    assert left["current"]["counter"] == 3
    assert left["previous"]["counter"] == 2


def test_advance_without_body_uses_request_location(client: TestClient) -> None:
    r = client.post("/api/sequences/geo/advance", headers={"cf-ipcountry": "DE"})

    location = r.json()["current"]["location"]
    assert location["country"] == "DE"
    assert location["city"] == "Unknown"


def test_snapshot_of_fresh_sequence_is_empty(client: TestClient) -> None:
    r = client.get("/api/sequences/nothing-yet")

    assert r.status_code == 200
    assert r.json() == {"current": None, "previous": None}


def test_delete_resets_sequence(client: TestClient) -> None:
    client.post("/api/sequences/tmp/advance", json={})
    client.post("/api/sequences/tmp/advance", json={})

    r = client.delete("/api/sequences/tmp")
    assert r.status_code == 204

    again = client.post("/api/sequences/tmp/advance", json={}).json()
    assert again["current"]["counter"] == 2
    assert again["previous"] is None


def test_invalid_name_is_422(client: TestClient) -> None:
    r = client.post("/api/sequences/bad.name/advance", json={})

    assert r.status_code == 422
    assert r.json()["error"]["code"] == "InvalidSequenceName"


def test_storage_failure_is_503_and_keeps_state(client: TestClient, flaky_backend) -> None:
    client.app.state.registry = ActorRegistry(backend=flaky_backend)
    client.get("/message")
    committed = client.get("/message").json()

    flaky_backend.open("foo").fail_writes = True
    r = client.get("/message")

    assert r.status_code == 503
    assert r.json()["error"]["code"] == "StorageWriteFailure"

    flaky_backend.open("foo").fail_writes = False
    state = client.get("/api/sequences/foo").json()
    assert state["current"] == committed["current"]
    assert state["previous"] == committed["previous"]


@pytest.mark.parametrize("payload", [[1, "two", {"three": 3}], "just text", 42])
def test_any_json_context_is_stored_verbatim(client: TestClient, payload) -> None:
    r = client.post("/api/sequences/opaque/advance", json=payload)

    assert r.status_code == 200
    assert r.json()["current"]["location"] == payload


def test_other_paths_answer_with_banner(client: TestClient) -> None:
    r = client.get("/some/other/path")

    assert r.status_code == 200
    assert r.text == "Sequence actor service is running"
    # Banner paths never advance anything
    assert client.get("/api/sequences/foo").json() == {"current": None, "previous": None}


def test_snapshot_route_does_not_register_names(client: TestClient) -> None:
    for name in ("a1", "a2", "a3"):
        assert client.get(f"/api/sequences/{name}").status_code == 200

    assert client.app.state.registry.names() == []

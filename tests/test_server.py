from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from BackEnd.api.server import create_app
from BackEnd.repos.session_repo import SessionRepo

from conftest import closed, local_ms


@pytest.fixture
def client():
    with TestClient(create_app(repo=SessionRepo(":memory:"))) as client:
        yield client


def _payload():
    return [
        closed(local_ms(2024, 1, 2, 9), local_ms(2024, 1, 2, 9, 30)).to_json(),
        closed(local_ms(2024, 1, 1, 9), local_ms(2024, 1, 1, 10)).to_json(),
    ]


def test_get_sessions_empty(client) -> None:
    response = client.get("/sessions")
    assert response.status_code == 200
    assert response.json() == []


def test_post_replaces_collection(client) -> None:
    payload = _payload()

    response = client.post("/sessions", json=payload)
    assert response.status_code == 200
    assert response.json() == {"success": True, "count": 2}

    stored = client.get("/sessions").json()
    assert stored == [payload[1], payload[0]]
    assert set(stored[0]) == {"startTime", "endTime", "duration", "mode", "date"}


def test_post_does_not_merge(client) -> None:
    payload = _payload()
    client.post("/sessions", json=payload)
    client.post("/sessions", json=payload[:1])

    assert client.get("/sessions").json() == payload[:1]


def test_post_empty_list_clears(client) -> None:
    client.post("/sessions", json=_payload())
    assert client.post("/sessions", json=[]).json() == {"success": True, "count": 0}
    assert client.get("/sessions").json() == []


def test_malformed_body_is_rejected(client) -> None:
    client.post("/sessions", json=_payload())

    response = client.post("/sessions", content=b"not json", headers={"content-type": "application/json"})
    assert response.status_code == 500
    assert "error" in response.json()

    response = client.post("/sessions", json={"sessions": []})
    assert response.status_code == 500
    assert "error" in response.json()

    response = client.post("/sessions", json=[{"startTime": "soon", "duration": 1}])
    assert response.status_code == 500

    assert len(client.get("/sessions").json()) == 2


def test_startup_and_upload_are_logged(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="BackEnd.api.server"):
        with TestClient(create_app(repo=SessionRepo(":memory:"))) as client:
            client.post("/sessions", json=_payload())

    assert "Sessions API ready with 0 sessions" in caplog.text
    assert "Replaced stored sessions with 2 uploaded" in caplog.text

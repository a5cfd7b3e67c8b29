from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from messenger_directory.config import Config
from messenger_directory.main import create_app


@pytest.fixture()
def client(config: Config):
    app = create_app(config)
    with TestClient(app) as test_client:
        yield test_client


def _register(client: TestClient, username: str, password: str = "hunter2", **profile: str) -> str:
    payload = {
        "username": username,
        "password": password,
        "first_name": profile.get("first_name", username.title()),
        "last_name": profile.get("last_name", "Tester"),
        "phone": profile.get("phone", "+1 555 0100"),
    }
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["token"]


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_health(client: TestClient) -> None:
    response = client.get("/auth/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_duplicate_username(client: TestClient) -> None:
    _register(client, "alice")

    response = client.post(
        "/auth/register",
        json={"username": "alice", "password": "x", "first_name": "A", "last_name": "B", "phone": "1"},
    )
    assert response.status_code == 400


def test_login(client: TestClient) -> None:
    _register(client, "alice", password="wonderland")

    ok = client.post("/auth/login", json={"username": "alice", "password": "wonderland"})
    assert ok.status_code == 200
    assert ok.json()["token"]

    wrong = client.post("/auth/login", json={"username": "alice", "password": "nope"})
    unknown = client.post("/auth/login", json={"username": "nobody", "password": "wonderland"})
    assert wrong.status_code == unknown.status_code == 400
    assert wrong.json() == unknown.json()

    # lone surrogate escape, valid JSON that no stored digest can match
    unencodable = client.post(
        "/auth/login",
        content='{"username": "alice", "password": "\\ud800"}',
        headers={"Content-Type": "application/json"},
    )
    assert unencodable.status_code == 400
    assert unencodable.json() == wrong.json()


def test_list_users_requires_token(client: TestClient) -> None:
    token = _register(client, "alice", last_name="Zeta")
    _register(client, "bob", last_name="Alpha")

    assert client.get("/users").status_code == 401
    assert client.get("/users", headers=_auth("garbage")).status_code == 401

    response = client.get("/users", headers=_auth(token))
    assert response.status_code == 200
    assert [u["username"] for u in response.json()["users"]] == ["bob", "alice"]


def test_user_detail_only_for_same_user(client: TestClient) -> None:
    token = _register(client, "alice")
    _register(client, "bob")

    assert client.get("/users/bob", headers=_auth(token)).status_code == 403

    response = client.get("/users/alice", headers=_auth(token))
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["username"] == "alice"
    assert "password" not in user
    assert user["last_login_at"] is not None
    assert user["last_login_at"].endswith("Z")


def test_message_listings(client: TestClient, store_message) -> None:
    alice = _register(client, "alice", first_name="Alice")
    bob = _register(client, "bob", first_name="Bob")

    assert client.get("/users/alice/from", headers=_auth(alice)).status_code == 404

    message_id = store_message("alice", "bob", "hello bob", datetime(2024, 1, 1, tzinfo=timezone.utc))

    sent = client.get("/users/alice/from", headers=_auth(alice))
    assert sent.status_code == 200
    [message] = sent.json()["messages"]
    assert message["id"] == message_id
    assert message["body"] == "hello bob"
    assert message["sent_at"] == "2024-01-01T00:00:00Z"
    assert message["counterpart"]["username"] == "bob"
    assert message["counterpart"]["first_name"] == "Bob"

    received = client.get("/users/bob/to", headers=_auth(bob))
    assert received.status_code == 200
    [message] = received.json()["messages"]
    assert message["id"] == message_id
    assert message["counterpart"]["username"] == "alice"

    assert client.get("/users/bob/to", headers=_auth(alice)).status_code == 403

# tests/helpers.py

from __future__ import annotations

from fastapi.testclient import TestClient


def register_user(client: TestClient, username: str = "alice@example.com", password: str = "s3cret") -> dict:
    """Register through the API and return the public identity."""
    response = client.post("/api/auth/register", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["user"]


def create_task(client: TestClient, user_id: str, title: str = "Buy milk", **fields) -> dict:
    response = client.post("/api/tasks", json={"title": title, "userId": user_id, **fields})
    assert response.status_code == 200, response.text
    return response.json()

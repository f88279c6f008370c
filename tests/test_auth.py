# tests/test_auth.py

from __future__ import annotations

import logging

import pytest

from taskflow.core import errors

from .helpers import register_user


def test_register_returns_public_identity(client) -> None:
    response = client.post("/api/auth/register", json={"username": "alice@example.com", "password": "s3cret"})

    assert response.status_code == 200
    user = response.json()["user"]
    assert set(user) == {"id", "username"}
    assert user["username"] == "alice@example.com"
    assert user["id"]


def test_register_same_username_twice_conflicts(client) -> None:
    register_user(client)

    response = client.post("/api/auth/register", json={"username": "alice@example.com", "password": "other"})

    assert response.status_code == 409
    assert response.json()["error"]["type"] == "conflict"
    assert response.json()["error"]["message"] == "User already exists"


@pytest.mark.parametrize(
    "payload",
    [
        {"password": "s3cret"},
        {"username": "bob"},
        {"username": "", "password": "s3cret"},
        {"username": 12, "password": ["not", "a", "string"]},
    ],
)
def test_register_rejects_invalid_payload(client, payload) -> None:
    response = client.post("/api/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "validation_error"


def test_register_accepts_optional_profile_fields(auth_handler, storage) -> None:
    user = auth_handler.register(
        {
            "username": "carol",
            "password": "pw",
            "phone": "+15550100",
            "profileCompleted": True,
            "profilePictureUrl": "https://example.com/carol.png",
        }
    )

    stored = storage.get_user_by_username("carol")
    assert stored.id == user.id
    assert stored.phone == "+15550100"
    assert stored.profile_completed is True
    assert stored.profile_picture_url == "https://example.com/carol.png"


def test_password_is_stored_hashed(auth_handler, storage) -> None:
    auth_handler.register({"username": "dave", "password": "plain-text"})

    stored = storage.get_user_by_username("dave")
    assert stored.password_hash != "plain-text"
    assert "plain-text" not in stored.password_hash


def test_login_with_correct_credentials(client) -> None:
    registered = register_user(client, "erin", "pw1")

    response = client.post("/api/auth/login", json={"username": "erin", "password": "pw1"})

    assert response.status_code == 200
    assert response.json() == {"user": registered}
    assert "password" not in response.text


def test_login_with_wrong_password_is_unauthorized(client) -> None:
    register_user(client, "frank", "right")

    response = client.post("/api/auth/login", json={"username": "frank", "password": "wrong"})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid credentials"


def test_login_unknown_user_is_unauthorized(client) -> None:
    response = client.post("/api/auth/login", json={"username": "nobody", "password": "pw"})

    assert response.status_code == 401


@pytest.mark.parametrize("payload", [{}, {"username": "grace"}, {"password": "pw"}, {"username": "", "password": ""}])
def test_login_missing_fields_is_bad_request(client, payload) -> None:
    response = client.post("/api/auth/login", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Username and password are required"


def test_handler_raises_typed_errors(auth_handler) -> None:
    auth_handler.register({"username": "heidi", "password": "pw"})

    with pytest.raises(errors.Conflict):
        auth_handler.register({"username": "heidi", "password": "pw"})
    with pytest.raises(errors.InvalidCredentials):
        auth_handler.login("heidi", "nope")
    with pytest.raises(errors.BadRequest):
        auth_handler.login("heidi", None)
    with pytest.raises(errors.ValidationError):
        auth_handler.register({"username": "ivan"})

    assert auth_handler.login("heidi", "pw").username == "heidi"


class BrokenStorage:
    def get_user_by_username(self, username):
        raise RuntimeError("database went away")


def test_storage_failure_maps_to_internal_error() -> None:
    from taskflow.services import AuthHandler

    handler = AuthHandler(BrokenStorage())

    with pytest.raises(errors.InternalError, match="Login failed"):
        handler.login("judy", "pw")
    with pytest.raises(errors.InternalError, match="Registration failed"):
        handler.register({"username": "judy", "password": "pw"})


@pytest.mark.parametrize("username", ["   ", "\t\n"])
def test_register_rejects_blank_username(client, username) -> None:
    response = client.post("/api/auth/register", json={"username": username, "password": "pw"})

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "validation_error"


def test_register_and_login_strip_surrounding_whitespace(client) -> None:
    registered = register_user(client, "  kim  ", "pw")
    assert registered["username"] == "kim"

    response = client.post("/api/auth/login", json={"username": " kim ", "password": "pw"})

    assert response.status_code == 200
    assert response.json()["user"] == registered


def test_duplicate_registration_is_not_logged_as_an_error(client, caplog) -> None:
    register_user(client, "leo", "pw")

    with caplog.at_level(logging.DEBUG):
        response = client.post("/api/auth/register", json={"username": "leo", "password": "pw"})

    assert response.status_code == 409
    assert [r for r in caplog.records if r.levelno >= logging.ERROR] == []

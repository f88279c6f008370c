# tests/test_storage.py

from __future__ import annotations

import logging

import pytest

from taskflow.core.storage import DuplicateUsernameError, SqlAlchemyStorage


def test_user_round_trip(storage: SqlAlchemyStorage) -> None:
    created = storage.create_user({"username": "alice", "password_hash": "hash"})

    found = storage.get_user_by_username("alice")

    assert found is not None
    assert found.id == created.id
    assert found.profile_completed is False
    assert storage.get_user_by_username("bob") is None


def test_duplicate_username_is_rejected_by_the_store(storage: SqlAlchemyStorage) -> None:
    storage.create_user({"username": "alice", "password_hash": "hash"})

    with pytest.raises(DuplicateUsernameError):
        storage.create_user({"username": "alice", "password_hash": "other"})


def test_duplicate_username_rollback_is_not_an_error_log(storage: SqlAlchemyStorage, caplog) -> None:
    storage.create_user({"username": "alice", "password_hash": "hash"})

    with caplog.at_level(logging.DEBUG, logger="taskflow"):
        with pytest.raises(DuplicateUsernameError):
            storage.create_user({"username": "alice", "password_hash": "other"})

    assert [r for r in caplog.records if r.levelno >= logging.ERROR] == []
    assert storage.get_user_by_username("alice").password_hash == "hash"


def test_task_crud(storage: SqlAlchemyStorage) -> None:
    task = storage.create_task({"title": "Buy milk", "user_id": "u1"})
    assert task.completed is False

    assert storage.get_task(task.id).title == "Buy milk"

    updated = storage.update_task(task.id, {"completed": True})
    assert updated.completed is True
    assert storage.get_tasks("u1")[0].completed is True

    assert storage.delete_task(task.id) is True
    assert storage.delete_task(task.id) is False
    assert storage.get_task(task.id) is None


def test_update_and_delete_respect_owner_filter(storage: SqlAlchemyStorage) -> None:
    task = storage.create_task({"title": "Mine", "user_id": "u1"})

    assert storage.update_task(task.id, {"title": "Stolen"}, user_id="u2") is None
    assert storage.delete_task(task.id, user_id="u2") is False
    assert storage.get_task(task.id).title == "Mine"

    assert storage.update_task(task.id, {"title": "Still mine"}, user_id="u1").title == "Still mine"


def test_update_missing_task_returns_none(storage: SqlAlchemyStorage) -> None:
    assert storage.update_task("missing", {"completed": True}) is None


def test_ping(storage: SqlAlchemyStorage) -> None:
    assert storage.ping() is True

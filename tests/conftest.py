# tests/conftest.py

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskflow.client import ClientStateController, MemoryStorage, TaskflowAPI
from taskflow.core.config import Settings
from taskflow.core.database import Database
from taskflow.core.storage import SqlAlchemyStorage
from taskflow.main import create_app
from taskflow.services import AuthHandler, TaskHandler


@pytest.fixture()
def settings() -> Settings:
    """Settings pointing at a private in-memory SQLite database."""
    s = Settings()
    s.database_url = "sqlite://"
    s.db_connect_retries = 1
    s.db_connect_retry_delay = 0
    s.debug = False
    return s


@pytest.fixture()
def database(settings: Settings) -> Iterator[Database]:
    db = Database(settings.database_url)
    db.init(max_retries=1, delay=0)
    yield db
    db.dispose()


@pytest.fixture()
def storage(database: Database) -> SqlAlchemyStorage:
    return SqlAlchemyStorage(database)


@pytest.fixture()
def auth_handler(storage: SqlAlchemyStorage) -> AuthHandler:
    return AuthHandler(storage)


@pytest.fixture()
def task_handler(storage: SqlAlchemyStorage) -> TaskHandler:
    return TaskHandler(storage)


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    # The context manager runs startup/shutdown, which creates the tables.
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def api(client: TestClient) -> TaskflowAPI:
    """TaskflowAPI talking to the in-process app through the TestClient."""
    return TaskflowAPI(base_url="", client=client)


@pytest.fixture()
def controller(api: TaskflowAPI) -> ClientStateController:
    return ClientStateController(api, MemoryStorage())


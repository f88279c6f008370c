"""
FastAPI dependencies wiring handlers to the app's storage adapter.
"""
from fastapi import Depends, Request

from .storage import StorageAdapter
from ..services import AuthHandler, TaskHandler


def get_storage(request: Request) -> StorageAdapter:
    return request.app.state.storage


def get_auth_handler(storage: StorageAdapter = Depends(get_storage)) -> AuthHandler:
    return AuthHandler(storage)


def get_task_handler(storage: StorageAdapter = Depends(get_storage)) -> TaskHandler:
    return TaskHandler(storage)

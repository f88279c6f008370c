"""
TaskFlow client: HTTP API wrapper and session state controller.
"""
from .api import ApiError, TaskflowAPI
from .cache import QueryCache, tasks_key
from .controller import ClientStateController, Notification, SessionState
from .storage import LocalStorage, MemoryStorage

__all__ = [
    "ApiError",
    "TaskflowAPI",
    "QueryCache",
    "tasks_key",
    "ClientStateController",
    "Notification",
    "SessionState",
    "LocalStorage",
    "MemoryStorage",
]

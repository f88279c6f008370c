"""
Client-side state for a TaskFlow session.

The controller owns the signed-in identity (persisted in local storage), the
in-memory task list of that user and a query cache of server reads. Every
mutation reconciles the local list from the server's answer and invalidates
the user's cached task query.
"""
import enum
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

from .api import ApiError, TaskflowAPI
from .cache import QueryCache, tasks_key
from .storage import LocalStorage

logger = logging.getLogger(__name__)

USER_STORAGE_KEY = "user"


class SessionState(str, enum.Enum):
    LOGGED_OUT = "logged_out"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class Notification:
    """A transient message for the user"""
    title: str
    description: str
    variant: str = "default"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


class ClientStateController:
    """Signed-in identity, task list and cache for one client"""

    def __init__(self, api: TaskflowAPI, storage: LocalStorage, max_notifications: int = 20):
        self.api = api
        self.storage = storage
        self.cache = QueryCache()
        self.tasks: List[Dict[str, Any]] = []
        self.notifications: Deque[Notification] = deque(maxlen=max_notifications)
        self.last_error: Optional[ApiError] = None

        self.user: Optional[Dict[str, Any]] = storage.get_item(USER_STORAGE_KEY)
        self.state = SessionState.LOADING if self.user else SessionState.LOGGED_OUT

    # ---- notifications ----

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        self.notifications.append(Notification(title, description, variant))

    def pop_notifications(self) -> List[Notification]:
        out = list(self.notifications)
        self.notifications.clear()
        return out

    def _fail(self, title: str, description: str, error: ApiError) -> None:
        logger.warning(f"{title}: {error}")
        self.last_error = error
        self.notify(title, description, "destructive")

    # ---- identity ----

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None

    def _set_user(self, user: Optional[Dict[str, Any]]) -> None:
        self.user = user
        if user:
            self.storage.set_item(USER_STORAGE_KEY, user)
        else:
            self.storage.remove_item(USER_STORAGE_KEY)

    def _require_user(self) -> Dict[str, Any]:
        if self.user is None:
            raise RuntimeError("Not signed in")
        return self.user

    def login(self, username: str, password: str) -> bool:
        try:
            user = self.api.login(username, password)
        except ApiError as e:
            self._fail("Login failed", "Invalid email or password. Please try again.", e)
            return False

        self._set_user(user)
        self.notify("Welcome back!", "You've successfully signed in.")
        self.load_tasks()
        return True

    def register(self, username: str, password: str, **profile) -> bool:
        try:
            user = self.api.register(username, password, **profile)
        except ApiError as e:
            if e.status_code == 409:
                description = "User already exists. Please sign in instead."
            else:
                description = "Failed to create account. Please try again."
            self._fail("Registration failed", description, e)
            return False

        self._set_user(user)
        self.notify("Account created!", "Welcome to TaskFlow. Let's get organized!")
        self.load_tasks()
        return True

    def logout(self) -> None:
        self._set_user(None)
        self.cache.clear()
        self.tasks = []
        self.last_error = None
        self.state = SessionState.LOGGED_OUT
        self.notify("Signed out", "You've been successfully signed out.")

    # ---- tasks ----

    def load_tasks(self) -> bool:
        """
        Fetch the signed-in user's tasks, through the cache.

        A failure leaves the controller in ``ERROR``; nothing retries until
        ``refresh`` or another ``load_tasks`` call.
        """
        user = self._require_user()
        self.state = SessionState.LOADING
        try:
            fetched = self.cache.fetch(tasks_key(user["id"]), lambda: self.api.list_tasks(user["id"]))
        except ApiError as e:
            self.state = SessionState.ERROR
            self._fail("Error", "Failed to fetch tasks.", e)
            return False

        self.tasks = list(fetched)
        self.last_error = None
        self.state = SessionState.READY
        return True

    def refresh(self) -> bool:
        """Drop the cached task query and load again"""
        self.cache.invalidate(tasks_key(self._require_user()["id"]))
        return self.load_tasks()

    def _invalidate_tasks(self) -> None:
        self.cache.invalidate(tasks_key(self._require_user()["id"]))

    def find_task(self, task_id: str) -> Optional[Dict[str, Any]]:
        return next((t for t in self.tasks if t["id"] == task_id), None)

    @property
    def active_tasks(self) -> List[Dict[str, Any]]:
        return [t for t in self.tasks if not t.get("completed")]

    @property
    def completed_tasks(self) -> List[Dict[str, Any]]:
        return [t for t in self.tasks if t.get("completed")]

    def create_task(self, title: str, description: str = None, due_date=None) -> Optional[Dict[str, Any]]:
        user = self._require_user()
        payload = {
            "title": title,
            "description": description or None,
            "dueDate": due_date.isoformat() if isinstance(due_date, datetime) else (due_date or None),
            "completed": False,
            "userId": user["id"],
        }
        try:
            task = self.api.create_task(payload)
        except ApiError as e:
            self._fail("Error", "Failed to create task. Please try again.", e)
            return None

        self.tasks = [task] + self.tasks
        self._invalidate_tasks()
        self.notify("Task created", "Your task has been added successfully.")
        return task

    def update_task(self, task_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        user = self._require_user()
        try:
            task = self.api.update_task(task_id, updates, user_id=user["id"])
        except ApiError as e:
            self._fail("Error", "Failed to update task. Please try again.", e)
            return None

        self.tasks = [task if t["id"] == task["id"] else t for t in self.tasks]
        self._invalidate_tasks()
        return task

    def toggle_task(self, task_id: str) -> Optional[Dict[str, Any]]:
        task = self.find_task(task_id)
        if task is None:
            return None
        return self.update_task(task_id, {"completed": not task.get("completed")})

    def delete_task(self, task_id: str) -> bool:
        user = self._require_user()
        try:
            self.api.delete_task(task_id, user_id=user["id"])
        except ApiError as e:
            self._fail("Error", "Failed to delete task. Please try again.", e)
            return False

        self.tasks = [t for t in self.tasks if t["id"] != task_id]
        self._invalidate_tasks()
        self.notify("Task deleted", "Your task has been removed.")
        return True

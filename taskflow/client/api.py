"""
HTTP client for the TaskFlow API.
"""
import logging
from typing import Any, Dict, List, Optional
import httpx

from ..core.config import get_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request to the TaskFlow API failed"""

    def __init__(self, status_code: Optional[int], message: str, error_type: str = "http_error"):
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        super().__init__(f"{status_code}: {message}" if status_code else message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        message = response.reason_phrase or "Request failed"
        error_type = "http_error"
        try:
            body = response.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            message = str(error.get("message", message))
            error_type = error.get("type", error_type)
        elif error:
            message = str(error)
        return cls(response.status_code, message, error_type)


class TaskflowAPI:
    """Thin wrapper over the TaskFlow REST endpoints"""

    def __init__(self, base_url: str = None, client: httpx.Client = None, timeout: int = None):
        settings = get_settings()
        self.base_url = (base_url if base_url is not None else settings.api_url).rstrip("/")
        self.client = client or httpx.Client(timeout=timeout or settings.request_timeout)

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout calling {method} {path}")
            raise ApiError(None, "Request timed out", "timeout") from e
        except httpx.HTTPError as e:
            logger.warning(f"Connection error calling {method} {path}: {e}")
            raise ApiError(None, "Could not reach the server", "network_error") from e

        if response.status_code >= 400:
            error = ApiError.from_response(response)
            logger.debug(f"{method} {path} failed: {error}")
            raise error

        return response.json()

    def login(self, username: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/login", json={"username": username, "password": password})
        return data["user"]

    def register(self, username: str, password: str, **profile) -> Dict[str, Any]:
        payload = {"username": username, "password": password}
        payload.update({key: value for key, value in profile.items() if value is not None})
        data = self._request("POST", "/api/auth/register", json=payload)
        return data["user"]

    def list_tasks(self, user_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/tasks", params={"userId": user_id})

    def create_task(self, task: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/tasks", json=task)

    def update_task(self, task_id: str, updates: Dict[str, Any], user_id: str = None) -> Dict[str, Any]:
        params = {"userId": user_id} if user_id else None
        return self._request("PATCH", f"/api/tasks/{task_id}", json=updates, params=params)

    def delete_task(self, task_id: str, user_id: str = None) -> bool:
        params = {"userId": user_id} if user_id else None
        data = self._request("DELETE", f"/api/tasks/{task_id}", params=params)
        return bool(data.get("success"))

    def health_check(self) -> bool:
        try:
            return self._request("GET", "/health").get("status") == "healthy"
        except ApiError as e:
            logger.error(f"Health check failed: {e}")
            return False

import logging
from typing import Any, Callable, Dict, Hashable, Tuple

logger = logging.getLogger(__name__)


def tasks_key(user_id: str) -> Tuple[str, str]:
    """Cache key of a user's task list"""
    return ("/api/tasks", user_id)


class QueryCache:
    """
    Query results keyed by a hashable key.

    Entries are only ever dropped explicitly: ``invalidate`` after a mutation,
    ``clear`` on logout.
    """

    def __init__(self):
        self._entries: Dict[Hashable, Any] = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = value

    def fetch(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        """Return the cached value for ``key``, calling ``loader`` on a miss"""
        if key not in self._entries:
            logger.debug(f"Cache miss for {key}")
            self._entries[key] = loader()
        return self._entries[key]

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

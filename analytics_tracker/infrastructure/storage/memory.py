# ==============================================================================
# In-Memory Session Store
# ==============================================================================
"""
Process-local SessionStore.

Used as the fallback when real persistence is unavailable and as the
store for tests. Entries expire lazily on read.
"""

from collections.abc import Callable

from analytics_tracker.base.session_store import SessionStore
from analytics_tracker.core.session_manager import current_time_ms


class InMemorySessionStore(SessionStore):
    """Dict-backed SessionStore with per-entry expiry."""

    def __init__(self, clock: Callable[[], int] = current_time_ms):
        """
        Initialize the store.

        Args:
            clock: Callable returning the current time in ms since epoch,
                used to expire entries.
        """
        self._clock = clock
        self._entries: dict[str, tuple[str, int]] = {}

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() > expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._entries[key] = (value, self._clock() + ttl_seconds * 1000)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._entries)

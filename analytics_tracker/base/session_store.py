# ==============================================================================
# Session Store Abstract Base Class
# ==============================================================================
"""
Abstract interface for persisting the visit session between page loads.

The session manager only needs a tiny key-value contract: read a string,
write a string with a time-to-live. Keeping the contract this small lets
the same session logic run over browser-style cookies, a Valkey instance
shared by several workers, or a plain dict in tests.

Implementations: in-memory, cookie jar, Valkey/Redis.
"""

from abc import ABC, abstractmethod


class SessionStore(ABC):
    """
    Key-value persistence for session entries with per-entry expiration.

    Values are stored as strings. Each entry expires on its own after
    ``ttl_seconds`` so abandoned sessions do not accumulate.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """
        Read an entry.

        Args:
            key: Entry name

        Returns:
            Stored value, or None if missing or expired
        """
        ...

    @abstractmethod
    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """
        Write an entry that expires after ``ttl_seconds``.

        Args:
            key: Entry name
            value: Value to store
            ttl_seconds: Time-to-live for the entry
        """
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove an entry.

        Args:
            key: Entry name

        Returns:
            True if the entry existed, False otherwise
        """
        ...

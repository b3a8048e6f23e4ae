# ==============================================================================
# Valkey Session Store
# ==============================================================================
"""
Valkey/Redis implementation of the SessionStore interface.

For hosts that track on behalf of a visitor from more than one worker
process: session entries live in Valkey under a common prefix, each with a
native TTL so Valkey evicts abandoned sessions by itself.

Key format: {prefix}{entry name}, e.g. "tracker:analytics_session_id".
"""

import logging

import redis
from redis.backoff import ExponentialBackoff
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from redis.retry import Retry

from analytics_tracker.base.session_store import SessionStore
from analytics_tracker.utils.config import get_settings

logger = logging.getLogger(__name__)

# Few retries: the session manager falls back to memory on failure
VALKEY_RETRIES = 3


def get_valkey_client(url: str | None = None, socket_timeout: int = 5) -> redis.Redis:
    """
    Get a Valkey/Redis client connection.

    Configured with:
    - Short socket timeouts so a missing Valkey fails fast
    - A few automatic retries with exponential backoff for transient failures
    - Health check interval to keep connections alive

    Args:
        url: Valkey/Redis connection URL. If None, uses settings.
        socket_timeout: Socket timeout in seconds (default: 5)

    Returns:
        redis.Redis client instance
    """
    if url is None:
        url = get_settings().valkey.url

    retry = Retry(ExponentialBackoff(cap=4, base=1), retries=VALKEY_RETRIES)

    return redis.from_url(
        url,
        decode_responses=True,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout,
        retry=retry,
        retry_on_error=[RedisTimeoutError, RedisConnectionError],
        health_check_interval=30,
    )


class ValkeySessionStore(SessionStore):
    """
    Valkey/Redis implementation of SessionStore.

    Each entry is a plain string key written with SETEX.
    """

    def __init__(self, client: redis.Redis | None = None, key_prefix: str | None = None):
        """
        Initialize the session store.

        Args:
            client: Redis client instance. If None, creates a new connection.
            key_prefix: Prefix for all entry keys. If None, uses settings.
        """
        self._client = client or get_valkey_client()
        if key_prefix is None:
            key_prefix = get_settings().storage.key_prefix
        self._prefix = key_prefix

    @property
    def client(self) -> redis.Redis:
        """Get the underlying Redis client."""
        return self._client

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        return self._client.get(self._key(key))

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._client.setex(self._key(key), ttl_seconds, value)

    def delete(self, key: str) -> bool:
        return self._client.delete(self._key(key)) > 0

    def ttl(self, key: str) -> int:
        """Remaining TTL of an entry in seconds (-2 if missing, -1 if no TTL)."""
        return self._client.ttl(self._key(key))

    def ping(self) -> bool:
        """
        Check if Valkey is reachable.

        Returns:
            True if ping succeeds, False otherwise
        """
        try:
            return self._client.ping()
        except redis.RedisError:
            return False

    def close(self) -> None:
        """Close the connection."""
        self._client.close()


def check_valkey_connection() -> bool:
    """
    Check if Valkey is reachable.

    Returns:
        True if Valkey responds to ping, False otherwise
    """
    try:
        client = get_valkey_client(socket_timeout=2)
        client.ping()
        client.close()
        return True
    except redis.RedisError:
        return False

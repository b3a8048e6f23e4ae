# ==============================================================================
# Session Store Infrastructure
# ==============================================================================
"""
SessionStore implementations for the ports-and-adapters architecture.

Available implementations:
- InMemorySessionStore: process-local dict, used for tests and as fallback
- CookieSessionStore: cookie jar, optionally persisted to an LWP cookie file
- ValkeySessionStore: Valkey/Redis keys with native TTL
"""

from analytics_tracker.infrastructure.storage.cookie import CookieSessionStore
from analytics_tracker.infrastructure.storage.memory import InMemorySessionStore
from analytics_tracker.infrastructure.storage.valkey import (
    ValkeySessionStore,
    check_valkey_connection,
    get_valkey_client,
)

__all__ = [
    "CookieSessionStore",
    "InMemorySessionStore",
    "ValkeySessionStore",
    "check_valkey_connection",
    "get_valkey_client",
]

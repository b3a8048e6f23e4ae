# ==============================================================================
# Tracker Factory
# ==============================================================================
"""
Wiring of the tracking client from settings.

The session store is selected by the STORAGE_IMPL environment variable; the
rest of the configuration comes from TRACKER_* and DEVICE_* variables.

The module-level tracker returned by get_tracker() is an optional convenience
for an application's entry point. Library code should build its own with
create_tracker() and pass it around.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from analytics_tracker.base import BaseTransport, SessionStore
from analytics_tracker.core import AutoTracker, EventEmitter, PageContext, SessionManager
from analytics_tracker.utils.config import Settings, get_settings
from analytics_tracker.utils.device import detect_device_context

logger = logging.getLogger(__name__)


def get_session_store(settings: Settings | None = None) -> SessionStore:
    """
    Get the session store based on STORAGE_IMPL setting.

    - "cookie" (default): cookie jar, persisted to STORAGE_COOKIE_FILE if set
    - "valkey": Valkey/Redis keys with native TTL
    - "memory": process-local only

    Returns:
        SessionStore: The store instance

    Raises:
        ValueError: If an unknown store is specified
    """
    settings = settings or get_settings()
    impl = settings.storage.impl

    match impl:
        case "cookie":
            from analytics_tracker.infrastructure.storage import CookieSessionStore

            return CookieSessionStore(cookie_file=settings.storage.cookie_file)
        case "valkey":
            from analytics_tracker.infrastructure.storage import (
                ValkeySessionStore,
                get_valkey_client,
            )

            return ValkeySessionStore(
                client=get_valkey_client(settings.valkey.url),
                key_prefix=settings.storage.key_prefix,
            )
        case "memory":
            from analytics_tracker.infrastructure.storage import InMemorySessionStore

            return InMemorySessionStore()
        case _:
            raise ValueError(f"Unknown STORAGE_IMPL: {impl}. Valid options: cookie, valkey, memory")


def get_transport(settings: Settings | None = None) -> BaseTransport:
    """Get the HTTP transport configured from TRACKER_* settings."""
    from analytics_tracker.infrastructure.transport import HttpTransport

    settings = settings or get_settings()
    return HttpTransport(
        url=settings.tracker.track_url,
        api_key=settings.tracker.api_key,
        timeout=settings.tracker.request_timeout_seconds,
        max_workers=settings.tracker.max_workers,
    )


@dataclass
class Tracker:
    """A wired tracking client: session manager, emitter and optional auto tracker."""

    session_manager: SessionManager
    emitter: EventEmitter
    auto: AutoTracker | None = None

    def close(self) -> None:
        """Stop auto tracking (sending the unload event) and flush deliveries."""
        if self.auto is not None:
            self.auto.stop()
        self.emitter.close()


def create_tracker(
    settings: Settings | None = None,
    page: Callable[[], PageContext] | None = None,
    store: SessionStore | None = None,
    transport: BaseTransport | None = None,
) -> Tracker:
    """
    Build a tracker from settings.

    Args:
        settings: Settings to use (defaults to get_settings())
        page: Callable returning the current page. Auto tracking is only
            started when TRACKER_AUTO_TRACK is on and a page is given.
        store: Session store override (defaults to get_session_store())
        transport: Transport override (defaults to get_transport())

    Returns:
        Tracker with auto tracking already started when enabled
    """
    settings = settings or get_settings()

    session_manager = SessionManager(
        store if store is not None else get_session_store(settings),
        timeout_minutes=settings.tracker.session_timeout_minutes,
        sliding_expiration=settings.tracker.sliding_expiration,
    )
    emitter = EventEmitter(
        session_manager,
        transport if transport is not None else get_transport(settings),
        user_id=settings.tracker.user_id,
        context=detect_device_context(settings.device),
    )

    auto = None
    if settings.tracker.auto_track and page is not None:
        auto = AutoTracker(emitter, page, scroll_throttle_ms=settings.tracker.scroll_throttle_ms)
        auto.start()

    return Tracker(session_manager=session_manager, emitter=emitter, auto=auto)


# ==============================================================================
# Module-level convenience functions
# ==============================================================================

_default_tracker: Tracker | None = None


def get_tracker() -> Tracker:
    """Get or create the default Tracker instance."""
    global _default_tracker
    if _default_tracker is None:
        _default_tracker = create_tracker()
        logger.debug("Created default tracker")
    return _default_tracker


def reset_tracker() -> None:
    """Close and discard the default Tracker instance."""
    global _default_tracker
    if _default_tracker is not None:
        _default_tracker.close()
        _default_tracker = None

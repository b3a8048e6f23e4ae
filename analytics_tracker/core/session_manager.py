# ==============================================================================
# Session Manager - Visit Session Lifecycle
# ==============================================================================
"""
Visit session lifecycle for the tracking client.

Decides whether an event belongs to the current visit or starts a new one:
- Absent  -> Valid: no persisted session, create one
- Valid   -> Valid: reuse the session untouched (or extend it when sliding)
- Expired -> Valid: replace the session wholesale with a new id and expiry

The session is persisted as two store entries (id and absolute expiry), each
with its own TTL matching the expiry, so a new manager over the same store
(a page reload, a restarted worker) continues the visit.

Store failures never reach the caller: the manager logs once and keeps going
with an in-memory store for the rest of its lifetime.
"""

import logging
import math
import random
import string
import time
from collections.abc import Callable

from analytics_tracker.base.session_store import SessionStore
from analytics_tracker.core.models import Session, SessionState

logger = logging.getLogger(__name__)


SESSION_ID_KEY = "analytics_session_id"
SESSION_EXPIRES_KEY = "analytics_session_expires"

DEFAULT_TIMEOUT_MINUTES = 30

_ID_ALPHABET = string.ascii_lowercase + string.digits


def current_time_ms() -> int:
    """Wall clock as Unix timestamp in milliseconds."""
    return int(time.time() * 1000)


def generate_session_id(now: int | None = None) -> str:
    """
    Generate a session id of the form ``session-<ms>-<9 base36 chars>``.

    Uniqueness is best effort (time plus random suffix). The id is a
    correlation key, not a security token.
    """
    if now is None:
        now = current_time_ms()
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"session-{now}-{suffix}"


class SessionManager:
    """
    Owns the visit session id, its expiry and the renewal policy.

    Args:
        store: Persistence for the two session entries.
        timeout_minutes: Length of the session window.
        sliding_expiration: When True, every call on a valid session pushes
            the expiry to ``now + timeout``. When False (default) the window
            is fixed from session creation.
        clock: Callable returning the current time in ms since epoch.
        id_factory: Callable taking ``now`` and returning a new session id.
    """

    def __init__(
        self,
        store: SessionStore,
        timeout_minutes: int = DEFAULT_TIMEOUT_MINUTES,
        sliding_expiration: bool = False,
        clock: Callable[[], int] = current_time_ms,
        id_factory: Callable[[int], str] = generate_session_id,
    ) -> None:
        self._store = store
        self.timeout_ms = timeout_minutes * 60 * 1000
        self.sliding_expiration = sliding_expiration
        self._clock = clock
        self._id_factory = id_factory
        self._session: Session | None = None
        self._loaded = False
        self._fallback = False

    @property
    def store(self) -> SessionStore:
        """The store currently in use (the in-memory fallback after a failure)."""
        return self._store

    @property
    def using_fallback(self) -> bool:
        """True once persistence failed and the manager went memory-only."""
        return self._fallback

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def current_session_id(self, now: int | None = None) -> str:
        """Return the session id valid at ``now``, renewing it if needed."""
        return self.current_session(now).session_id

    def current_session(self, now: int | None = None) -> Session:
        """
        Return the session valid at ``now``, renewing it if needed.

        Args:
            now: Observation time in ms since epoch (defaults to the clock)

        Returns:
            The valid Session. Never raises.
        """
        if now is None:
            now = self._clock()

        session = self._load()

        match self._classify(session, now):
            case SessionState.ABSENT:
                logger.debug("No session found, starting a new one")
                session = self._start_session(now)
            case SessionState.EXPIRED:
                logger.debug("Session %s expired, starting a new one", session.session_id)
                session = self._start_session(now)
            case SessionState.VALID if self.sliding_expiration:
                session = Session(session_id=session.session_id, expires_at=now + self.timeout_ms)
                self._persist(session, now)

        self._session = session
        return session

    def state(self, now: int | None = None) -> SessionState:
        """Classify the session at ``now`` without renewing it."""
        if now is None:
            now = self._clock()
        return self._classify(self._load(), now)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _classify(session: Session | None, now: int) -> SessionState:
        if session is None:
            return SessionState.ABSENT
        return session.state_at(now)

    def _start_session(self, now: int) -> Session:
        session = Session(session_id=self._id_factory(now), expires_at=now + self.timeout_ms)
        self._persist(session, now)
        return session

    def _load(self) -> Session | None:
        """Read the persisted session once; later calls use the cached copy."""
        if self._loaded:
            return self._session
        self._loaded = True

        try:
            session_id = self._store.get(SESSION_ID_KEY)
            expires_raw = self._store.get(SESSION_EXPIRES_KEY)
        except Exception as e:
            self._fall_back(e)
            return None

        self._session = self._parse(session_id, expires_raw)
        return self._session

    @staticmethod
    def _parse(session_id: str | None, expires_raw: str | None) -> Session | None:
        """Build a Session from raw entries; incomplete or corrupt entries count as absent."""
        if not session_id or not expires_raw:
            return None
        try:
            expires_at = int(expires_raw)
        except ValueError:
            logger.debug("Ignoring unparseable session expiry %r", expires_raw)
            return None
        if expires_at <= 0:
            return None
        return Session(session_id=session_id, expires_at=expires_at)

    def _persist(self, session: Session, now: int) -> None:
        # Round up so the entries never vanish before the session ends
        ttl_seconds = max(math.ceil(session.remaining_ms(now) / 1000), 1)
        try:
            self._store.set(SESSION_ID_KEY, session.session_id, ttl_seconds)
            self._store.set(SESSION_EXPIRES_KEY, str(session.expires_at), ttl_seconds)
        except Exception as e:
            self._fall_back(e)
            self._store.set(SESSION_ID_KEY, session.session_id, ttl_seconds)
            self._store.set(SESSION_EXPIRES_KEY, str(session.expires_at), ttl_seconds)

    def _fall_back(self, error: Exception) -> None:
        """Switch to an in-memory store for the rest of this manager's lifetime."""
        from analytics_tracker.infrastructure.storage.memory import InMemorySessionStore

        logger.warning(
            "Session storage unavailable (%s), keeping the session in memory only", error
        )
        self._store = InMemorySessionStore(clock=self._clock)
        self._fallback = True

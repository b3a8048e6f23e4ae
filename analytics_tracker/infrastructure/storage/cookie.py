# ==============================================================================
# Cookie Jar Session Store
# ==============================================================================
"""
Cookie-based implementation of the SessionStore interface.

Mirrors how a browser keeps the visit session: each entry is a cookie whose
own expiry matches the session expiry, so stale entries are dropped by the
jar rather than accumulating.

The jar is either a requests cookie jar (process lifetime, can be shared
with a requests.Session) or an LWP cookie file so the session survives a
process restart.
"""

import logging
import math
from collections.abc import Callable
from http.cookiejar import CookieJar, LoadError, LWPCookieJar
from pathlib import Path
from urllib.parse import quote, unquote

from requests.cookies import RequestsCookieJar, create_cookie

from analytics_tracker.base.session_store import SessionStore
from analytics_tracker.core.session_manager import current_time_ms

logger = logging.getLogger(__name__)


class CookieSessionStore(SessionStore):
    """
    SessionStore backed by an http.cookiejar jar.

    Values are URL-encoded the way browsers expect cookie values to be.
    """

    def __init__(
        self,
        jar: CookieJar | None = None,
        cookie_file: str | Path | None = None,
        domain: str = "",
        path: str = "/",
        clock: Callable[[], int] = current_time_ms,
    ):
        """
        Initialize the cookie store.

        Args:
            jar: Cookie jar to use. Ignored when cookie_file is given.
            cookie_file: Optional LWP cookie file; loaded now and saved on
                every write.
            domain: Cookie domain for the entries.
            path: Cookie path for the entries (default: "/").
            clock: Callable returning the current time in ms since epoch.
        """
        self._file: Path | None = Path(cookie_file) if cookie_file else None
        if self._file is not None:
            jar = LWPCookieJar(str(self._file))
            if self._file.exists():
                try:
                    jar.load(ignore_discard=True)
                except (LoadError, OSError) as e:
                    logger.warning(
                        "Ignoring unreadable cookie file %s (%s), starting empty", self._file, e
                    )
                    jar = LWPCookieJar(str(self._file))
        self._jar = jar if jar is not None else RequestsCookieJar()
        self._domain = domain
        self._path = path
        self._clock = clock

    @property
    def jar(self) -> CookieJar:
        """Get the underlying cookie jar."""
        return self._jar

    def _find(self, key: str):
        for cookie in self._jar:
            if cookie.name == key and cookie.domain == self._domain and cookie.path == self._path:
                return cookie
        return None

    def get(self, key: str) -> str | None:
        cookie = self._find(key)
        if cookie is None:
            return None
        if cookie.expires is not None and self._clock() > cookie.expires * 1000:
            self.delete(key)
            return None
        return unquote(cookie.value) if cookie.value is not None else None

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        # Cookie expiry has whole-second resolution; round up, never down
        expires = math.ceil((self._clock() + ttl_seconds * 1000) / 1000)
        cookie = create_cookie(
            key,
            quote(value, safe=""),
            domain=self._domain,
            path=self._path,
            expires=expires,
        )
        self._jar.set_cookie(cookie)
        self._save()

    def delete(self, key: str) -> bool:
        try:
            self._jar.clear(self._domain, self._path, key)
        except KeyError:
            return False
        self._save()
        return True

    def _save(self) -> None:
        if self._file is None:
            return
        self._file.parent.mkdir(parents=True, exist_ok=True)
        self._jar.save(ignore_discard=True)
        logger.debug("Saved session cookies to %s", self._file)

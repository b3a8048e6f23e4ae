# ==============================================================================
# HTTP Event Transport
# ==============================================================================
"""
HTTP implementation of the BaseTransport interface.

Events are POSTed as JSON to the collector's tracking endpoint from a
background thread pool, so ``send()`` returns immediately. With the default
single worker, events leave in the order they were submitted; the collector
may still process them out of order.

Delivery is best effort: any failed send, including a payload that cannot be
encoded as JSON, is logged at WARNING and resolves the future to False.
There is no retry.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional

import requests

from analytics_tracker.base.transport import BaseTransport

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"
DEFAULT_TIMEOUT = 5.0  # seconds


class HttpTransport(BaseTransport):
    """
    Fire-and-forget JSON POST transport.

    Args:
        url: Absolute URL of the tracking endpoint.
        api_key: Optional project API key, sent as the X-API-Key header.
        timeout: Per-request timeout in seconds.
        max_workers: Delivery threads. Keep at 1 to preserve call order.
        session: requests.Session to use. If None, creates one.
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = 1,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="tracker-send"
        )

    @property
    def session(self) -> requests.Session:
        """Get the underlying requests session."""
        return self._session

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers[API_KEY_HEADER] = self.api_key
        return headers

    def _post(self, payload: dict[str, Any]) -> bool:
        """
        Deliver one payload.

        Returns:
            True if the collector answered with a 2xx status
        """
        try:
            response = self._session.post(
                self.url, json=payload, headers=self._headers(), timeout=self.timeout
            )
        except (requests.exceptions.RequestException, TypeError, ValueError) as e:
            # Network failures and payloads that cannot be encoded as JSON
            logger.warning("Analytics tracking error: %s", e)
            return False

        if not 200 <= response.status_code < 300:
            logger.warning(
                "Analytics tracking failed: %s %s", response.status_code, response.reason
            )
            return False
        return True

    def send(self, payload: dict[str, Any]) -> "Future[bool]":
        return self._executor.submit(self._post, payload)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self._session.close()


def check_collector_connection(health_url: str, timeout: float = 3.0) -> bool:
    """
    Check if the collector is reachable.

    Args:
        health_url: Absolute URL of the collector's /health endpoint
        timeout: Request timeout in seconds

    Returns:
        True if the health check answered with a 2xx status, False otherwise
    """
    try:
        response = requests.get(health_url, timeout=timeout)
        return 200 <= response.status_code < 300
    except requests.exceptions.RequestException:
        return False

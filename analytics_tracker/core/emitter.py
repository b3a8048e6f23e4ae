# ==============================================================================
# Event Emitter
# ==============================================================================
"""
Assembles tracked events and hands them to a transport.

Every event carries the current session id from the SessionManager, the
externally set user id (or null), the caller's event fields and the device
context. Delivery is fire-and-forget: each ``track*`` call returns the
transport's future without waiting on it.

Caller input is not validated; absent fields end up omitted or null in the
payload.
"""

import logging
from concurrent.futures import Future
from typing import Any

from pydantic import ValidationError

from analytics_tracker.base.transport import BaseTransport
from analytics_tracker.core.models import (
    DeviceContext,
    Element,
    EventType,
    PageContext,
    TrackedEvent,
)
from analytics_tracker.core.session_manager import SessionManager

logger = logging.getLogger(__name__)


def _not_delivered() -> "Future[bool]":
    future: Future[bool] = Future()
    future.set_result(False)
    return future


def element_name(element: Element) -> str:
    """Name a clicked element: text, then aria-label, then class, then a placeholder."""
    text = (element.text_content or "").strip()
    return text or element.get_attribute("aria-label") or element.class_name or "Unknown Element"


def form_name(form: Element) -> str:
    """Name a submitted form: name attribute, then id, then a placeholder."""
    return form.get_attribute("name") or form.element_id or "Unknown Form"


class EventEmitter:
    """
    Builds event payloads and submits them to a transport.

    Args:
        session_manager: Source of the session id for every event.
        transport: Delivery channel for the payloads.
        user_id: Initial user identifier (None until set).
        context: Device context attached to every event.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        transport: BaseTransport,
        user_id: str | None = None,
        context: DeviceContext | None = None,
    ) -> None:
        self.session_manager = session_manager
        self.transport = transport
        self.user_id = user_id
        self.context = context or DeviceContext()

    def set_user_id(self, user_id: str | None) -> None:
        """Attach a user identifier to all following events."""
        self.user_id = user_id

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    def build_event(self, fields: dict[str, Any], now: int | None = None) -> TrackedEvent:
        """
        Combine session, user, device context and event fields.

        Args:
            fields: Event-specific fields (event_type, event_name, page_url, ...)
            now: Observation time in ms since epoch (defaults to the clock)

        Returns:
            TrackedEvent ready to serialize
        """
        data = dict(fields)
        if data.get("properties") is None:
            data["properties"] = {}
        if isinstance(data.get("event_type"), EventType):
            data["event_type"] = data["event_type"].value

        # Event fields may override session/user; device context always wins
        return TrackedEvent(
            **{
                "session_id": self.session_manager.current_session_id(now),
                "user_id": self.user_id,
                **data,
                "context": self.context,
            }
        )

    def track(self, fields: dict[str, Any], now: int | None = None) -> "Future[bool]":
        """
        Track one event.

        Args:
            fields: Event-specific fields
            now: Observation time in ms since epoch (defaults to the clock)

        Returns:
            Future resolving to whether the collector accepted the event.
            Waiting on it is optional.
        """
        try:
            payload = self.build_event(fields, now).to_payload()
        except (TypeError, ValueError, ValidationError) as e:
            # Unusable event fields (not a mapping, non-string keys, ...)
            logger.warning("Analytics tracking error: %s", e)
            return _not_delivered()

        try:
            return self.transport.send(payload)
        except RuntimeError as e:
            # Transport already closed
            logger.warning("Analytics tracking error: %s", e)
            return _not_delivered()

    # ------------------------------------------------------------------
    # Convenience events
    # ------------------------------------------------------------------

    def track_page_view(
        self, page: PageContext, properties: dict[str, Any] | None = None
    ) -> "Future[bool]":
        """Track a page view of ``page``."""
        return self.track(
            {
                "event_type": EventType.PAGE_VIEW,
                "event_name": "Page View",
                "page_url": page.url,
                "page_title": page.title,
                "referrer": page.referrer or None,
                "properties": properties or {},
            }
        )

    def track_click(
        self, element: Element, page: PageContext, properties: dict[str, Any] | None = None
    ) -> "Future[bool]":
        """Track a click on ``element``."""
        return self.track(
            {
                "event_type": EventType.CLICK,
                "event_name": f"Click: {element_name(element)}",
                "page_url": page.url,
                "properties": {
                    "element_tag": element.tag_name,
                    "element_class": element.class_name,
                    "element_id": element.element_id,
                    **(properties or {}),
                },
            }
        )

    def track_form_submit(
        self, form: Element, page: PageContext, properties: dict[str, Any] | None = None
    ) -> "Future[bool]":
        """Track submission of ``form``."""
        name = form_name(form)
        return self.track(
            {
                "event_type": EventType.FORM_SUBMIT,
                "event_name": f"Form Submit: {name}",
                "page_url": page.url,
                "properties": {
                    "form_name": name,
                    "form_id": form.element_id,
                    **(properties or {}),
                },
            }
        )

    def track_custom_event(
        self,
        event_name: str,
        event_type: str = EventType.CUSTOM.value,
        page: PageContext | None = None,
        properties: dict[str, Any] | None = None,
    ) -> "Future[bool]":
        """Track an application-defined event."""
        return self.track(
            {
                "event_type": event_type,
                "event_name": event_name,
                "page_url": page.url if page is not None else None,
                "properties": properties or {},
            }
        )

    def track_scroll(
        self, page: PageContext, properties: dict[str, Any] | None = None
    ) -> "Future[bool]":
        """Track the current scroll depth of ``page``."""
        return self.track(
            {
                "event_type": EventType.SCROLL,
                "event_name": "Page Scroll",
                "page_url": page.url,
                "properties": {
                    "scroll_percent": page.scroll_percent,
                    "scroll_position": page.scroll_y,
                    **(properties or {}),
                },
            }
        )

    def close(self) -> None:
        """Flush pending deliveries and release the transport."""
        self.transport.close()

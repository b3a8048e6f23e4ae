# ==============================================================================
# Tracking Domain Models
# ==============================================================================
"""
Pydantic models for visit sessions and tracked events.

These models are used for:
- Holding the current visit session and its expiry
- Building the JSON envelope posted to the collector
- Describing the host page and UI elements for automatic tracking

This module is part of the core domain layer and has no external dependencies
beyond Pydantic.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class SessionState(str, Enum):
    """Observable states of the visit session at a given instant."""

    ABSENT = "absent"
    VALID = "valid"
    EXPIRED = "expired"


class EventType(str, Enum):
    """Event types emitted by the tracking client."""

    PAGE_VIEW = "page_view"
    CLICK = "click"
    FORM_SUBMIT = "form_submit"
    SCROLL = "scroll"
    NAVIGATION = "navigation"
    CUSTOM = "custom"


class Session(BaseModel):
    """
    A client-tracked visit window.

    Attributes:
        session_id: Opaque identifier shared by every event of the visit
        expires_at: Unix timestamp in milliseconds after which the session ends
    """

    session_id: str = Field(..., description="Session identifier")
    expires_at: int = Field(..., description="Expiry as Unix timestamp in milliseconds")

    @property
    def expires_time(self) -> datetime:
        """Convert expiry to a UTC datetime."""
        return datetime.fromtimestamp(self.expires_at / 1000.0, tz=timezone.utc)

    def state_at(self, now: int) -> SessionState:
        """Classify the session at ``now`` (ms since epoch)."""
        if now > self.expires_at:
            return SessionState.EXPIRED
        return SessionState.VALID

    def remaining_ms(self, now: int) -> int:
        """Milliseconds left before expiry (0 once expired)."""
        return max(self.expires_at - now, 0)


class DeviceContext(BaseModel):
    """Device and client details attached to every event."""

    user_agent: str | None = None
    screen_width: int | None = None
    screen_height: int | None = None
    language: str | None = None
    platform: str | None = None


class Element(BaseModel):
    """
    A UI element the user interacted with.

    Attributes:
        tag_name: Upper-case tag name (e.g. "BUTTON", "A", "FORM")
        text_content: Visible text of the element
        attributes: Remaining attributes (name, role, aria-label, ...)
        class_name: Space-separated CSS classes
        element_id: Element id attribute
    """

    tag_name: str = ""
    text_content: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)
    class_name: str = ""
    element_id: str = ""

    def get_attribute(self, name: str) -> str | None:
        """Attribute value by name, or None when the element lacks it."""
        return self.attributes.get(name)


class PageContext(BaseModel):
    """The page the host application is currently showing."""

    url: str = ""
    title: str = ""
    referrer: str | None = None
    scroll_y: float = 0.0
    scroll_height: float = 0.0
    viewport_height: float = 0.0

    @property
    def scroll_percent(self) -> int:
        """Scroll depth as a rounded percentage (0 when nothing can scroll)."""
        scrollable = self.scroll_height - self.viewport_height
        if scrollable <= 0:
            return 0
        return round(self.scroll_y / scrollable * 100)


class TrackedEvent(BaseModel):
    """
    The envelope sent to the collector for one tracked occurrence.

    ``ip_address`` is always empty; the collector fills it from the request.
    Caller-supplied fields are not validated: whatever the caller passes is
    forwarded as is, and extra fields are passed through unchanged.
    """

    model_config = {"extra": "allow"}

    session_id: str = Field(..., description="Current visit session")
    user_id: Any = Field(None, description="Externally set user identifier")
    ip_address: Any = Field("", description="Left for the collector to detect")
    event_type: Any = Field(None, description="Event type (page_view, click, ...)")
    event_name: Any = Field(None, description="Human readable event name")
    page_url: Any = None
    page_title: Any = None
    referrer: Any = None
    properties: Any = Field(default_factory=dict)
    context: DeviceContext = Field(default_factory=DeviceContext)

    def to_payload(self) -> dict[str, Any]:
        """Serialize the event into the collector's JSON body."""
        payload: dict[str, Any] = {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "ip_address": self.ip_address,
            "event_type": self.event_type,
            "event_name": self.event_name,
        }
        for field in ("page_url", "page_title", "referrer"):
            value = getattr(self, field)
            if value is not None:
                payload[field] = value
        payload["properties"] = (
            dict(self.properties) if isinstance(self.properties, dict) else self.properties
        )
        payload.update(self.model_extra or {})
        payload.update(self.context.model_dump())
        return payload

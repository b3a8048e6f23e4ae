# ==============================================================================
# Core Domain Layer
# ==============================================================================
"""
Session lifecycle and event assembly, independent of storage and transport.
"""

from analytics_tracker.core.auto_tracking import AutoTracker
from analytics_tracker.core.emitter import EventEmitter
from analytics_tracker.core.models import (
    DeviceContext,
    Element,
    EventType,
    PageContext,
    Session,
    SessionState,
    TrackedEvent,
)
from analytics_tracker.core.session_manager import SessionManager, generate_session_id

__all__ = [
    "AutoTracker",
    "DeviceContext",
    "Element",
    "EventEmitter",
    "EventType",
    "PageContext",
    "Session",
    "SessionManager",
    "SessionState",
    "TrackedEvent",
    "generate_session_id",
]

# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Abstract base classes defining the ports of the tracking client.

The session manager depends on a SessionStore; the event emitter depends on
a BaseTransport. Concrete adapters live in analytics_tracker.infrastructure.
"""

from analytics_tracker.base.session_store import SessionStore
from analytics_tracker.base.transport import BaseTransport

__all__ = [
    "BaseTransport",
    "SessionStore",
]

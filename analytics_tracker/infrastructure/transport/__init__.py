# ==============================================================================
# Transport Infrastructure
# ==============================================================================
"""
Event transports for the ports-and-adapters architecture.

Available implementations:
- HttpTransport: JSON POST to the collector via requests
"""

from analytics_tracker.infrastructure.transport.http import (
    HttpTransport,
    check_collector_connection,
)

__all__ = [
    "HttpTransport",
    "check_collector_connection",
]

"""
Analytics tracking client.

Keeps a visit session across page loads and posts tracked events to the
analytics collector.
"""

from analytics_tracker.factory import Tracker, create_tracker, get_tracker, reset_tracker

__all__ = [
    "Tracker",
    "create_tracker",
    "get_tracker",
    "reset_tracker",
]

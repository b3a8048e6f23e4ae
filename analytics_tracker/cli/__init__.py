# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for the tracking client.

Commands are organized into separate modules for maintainability:
- shared.py: Common utilities, colors and helpers
- config.py: Configuration display
- session.py: Persisted session inspection and reset
- track.py: Sending events
- status.py: Collector and store connectivity
"""

from analytics_tracker.cli.shared import (
    C,
    Colors,
    I,
    Icons,
    parse_properties,
    report_delivery,
    setup_logging,
)

__all__ = [
    "C",
    "Colors",
    "I",
    "Icons",
    "parse_properties",
    "report_delivery",
    "setup_logging",
]

# ==============================================================================
# Shared Utilities for CLI Commands
# ==============================================================================
"""
Shared utilities, constants, and helper functions used across CLI command modules.

This module provides:
- ANSI color codes and status icons
- Logging setup for CLI runs
- Parsing of key=value event properties
- Waiting on delivery futures
"""

import logging
from concurrent.futures import Future

import typer

from analytics_tracker.utils.config import get_settings

# Seconds to wait for a CLI-sent event before giving up on it
SEND_WAIT_SECONDS = 30


# ==============================================================================
# ANSI Colors and Icons
# ==============================================================================


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    WHITE = "\033[37m"

    # Bright colors
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_CYAN = "\033[96m"


class Icons:
    """Status icons using Unicode symbols."""

    CHECK = "✓"
    CROSS = "✗"
    WARN = "!"
    ARROW = "→"


# Module-level aliases for convenience
C, I = Colors, Icons


# ==============================================================================
# Helpers
# ==============================================================================


def setup_logging() -> None:
    """Configure console logging at the configured LOG_LEVEL."""
    settings = get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Suppress noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_properties(values: list[str] | None) -> dict[str, str]:
    """
    Parse ``key=value`` pairs into a properties dict.

    Raises:
        typer.BadParameter: If a value has no '=' or an empty key
    """
    properties: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Invalid property '{item}'. Use key=value")
        properties[key.strip()] = value
    return properties


def report_delivery(future: "Future[bool]", label: str) -> bool:
    """Wait for a sent event and print whether the collector accepted it."""
    delivered = future.result(timeout=SEND_WAIT_SECONDS)
    if delivered:
        print(f"{C.BRIGHT_GREEN}{I.CHECK} {label} delivered{C.RESET}")
    else:
        print(f"{C.BRIGHT_RED}{I.CROSS} {label} not delivered (see log){C.RESET}")
    return delivered

# ==============================================================================
# Version Utilities
# ==============================================================================
"""
Utilities for retrieving package versions.
"""

from importlib.metadata import version, PackageNotFoundError


def get_tracker_version() -> str:
    """
    Get the analytics-tracker package version.

    Returns:
        Version string (e.g., "0.1.0")
    """
    try:
        return version("analytics-tracker")
    except PackageNotFoundError:
        return "0.1.0"

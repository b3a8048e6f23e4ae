# ==============================================================================
# Tracking Client Utilities
# ==============================================================================
"""
Shared utilities for the tracking client.

This module exports configuration and device detection helpers.
"""

from analytics_tracker.utils.config import (
    DeviceSettings,
    Settings,
    StorageSettings,
    TrackerSettings,
    ValkeySettings,
    get_settings,
)
from analytics_tracker.utils.device import detect_device_context

__all__ = [
    # Config
    "DeviceSettings",
    "Settings",
    "StorageSettings",
    "TrackerSettings",
    "ValkeySettings",
    "get_settings",
    # Device
    "detect_device_context",
]

# ==============================================================================
# Device Context Detection
# ==============================================================================
"""
Build the device context attached to every event.

A tracking client outside a browser has no navigator or screen to read, so
the context is derived from the interpreter and host instead, with each field
overridable through DEVICE_* settings.
"""

import locale
import platform

from requests.utils import default_user_agent

from analytics_tracker.core.models import DeviceContext
from analytics_tracker.utils.config import DeviceSettings
from analytics_tracker.utils.versions import get_tracker_version


def _default_language() -> str | None:
    """Locale language as a BCP 47 style tag (en_US -> en-US)."""
    language = locale.getlocale()[0]
    if not language or language == "C":
        return None
    return language.replace("_", "-")


def _default_user_agent() -> str:
    return f"analytics-tracker/{get_tracker_version()} {default_user_agent()}"


def detect_device_context(overrides: DeviceSettings | None = None) -> DeviceContext:
    """
    Detect the device context, applying configured overrides.

    Args:
        overrides: DEVICE_* settings; unset fields fall back to detection

    Returns:
        DeviceContext for the running host
    """
    overrides = overrides or DeviceSettings()
    return DeviceContext(
        user_agent=overrides.user_agent or _default_user_agent(),
        screen_width=overrides.screen_width,
        screen_height=overrides.screen_height,
        language=overrides.language or _default_language(),
        platform=overrides.platform or platform.system() or None,
    )

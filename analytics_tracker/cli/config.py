# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the tracker CLI.
"""

import json
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from analytics_tracker.utils.config import get_settings


def _config_dict() -> dict:
    settings = get_settings()
    return {
        "tracker": {
            "base_url": settings.tracker.base_url,
            "endpoint": settings.tracker.endpoint,
            "track_url": settings.tracker.track_url,
            "api_key": settings.tracker.api_key,
            "user_id": settings.tracker.user_id,
            "auto_track": settings.tracker.auto_track,
            "session_timeout_minutes": settings.tracker.session_timeout_minutes,
            "sliding_expiration": settings.tracker.sliding_expiration,
            "request_timeout_seconds": settings.tracker.request_timeout_seconds,
            "max_workers": settings.tracker.max_workers,
            "scroll_throttle_ms": settings.tracker.scroll_throttle_ms,
        },
        "storage": {
            "impl": settings.storage.impl,
            "cookie_file": str(settings.storage.cookie_file) if settings.storage.cookie_file else None,
            "key_prefix": settings.storage.key_prefix,
        },
        "valkey": {
            "host": settings.valkey.host,
            "port": settings.valkey.port,
            "db": settings.valkey.db,
            "ssl_enabled": settings.valkey.ssl,
        },
        "device": settings.device.model_dump(),
        "log_level": settings.log_level,
    }


# ==============================================================================
# Commands
# ==============================================================================


def config_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display current configuration (includes the API key in JSON mode)."""
    config = _config_dict()

    if json_output:
        print(json.dumps(config, indent=2))
        return

    console = Console()
    table = Table(title="Tracker Configuration", show_header=True, header_style="bold")
    table.add_column("Setting")
    table.add_column("Value")

    for section, values in config.items():
        if not isinstance(values, dict):
            table.add_row(section, str(values))
            continue
        for key, value in values.items():
            if key == "api_key" and value:
                value = "********"
            table.add_row(f"{section}.{key}", "-" if value is None else str(value))

    console.print(table)

# ==============================================================================
# Status Command
# ==============================================================================
"""
Connectivity check for the collector and the session store.
"""

import typer

from analytics_tracker.cli.shared import C, I
from analytics_tracker.infrastructure.transport import check_collector_connection
from analytics_tracker.utils.config import get_settings


def show_status() -> None:
    """Check that the collector and the session store are reachable."""
    settings = get_settings()
    healthy = True

    print()
    if check_collector_connection(settings.tracker.health_url):
        print(f"  {C.BRIGHT_GREEN}{I.CHECK} Collector reachable{C.RESET} ({settings.tracker.base_url})")
    else:
        print(f"  {C.BRIGHT_RED}{I.CROSS} Collector unreachable{C.RESET} ({settings.tracker.base_url})")
        healthy = False

    if settings.storage.impl == "valkey":
        from analytics_tracker.infrastructure.storage import check_valkey_connection

        if check_valkey_connection():
            print(f"  {C.BRIGHT_GREEN}{I.CHECK} Valkey reachable{C.RESET}")
        else:
            print(
                f"  {C.BRIGHT_YELLOW}{I.WARN} Valkey unreachable{C.RESET} "
                f"(sessions fall back to memory)"
            )
    else:
        print(f"  {C.DIM}Session store: {settings.storage.impl}{C.RESET}")
    print()

    if not healthy:
        raise typer.Exit(1)

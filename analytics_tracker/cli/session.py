# ==============================================================================
# Session Commands
# ==============================================================================
"""
Inspect and reset the persisted visit session.

`session show` never renews the session: it reports what the next tracked
event would find in the configured store.
"""

import json
from typing import Annotated

import typer

from analytics_tracker.cli.shared import C, I
from analytics_tracker.core import SessionManager, SessionState
from analytics_tracker.core.session_manager import (
    SESSION_EXPIRES_KEY,
    SESSION_ID_KEY,
    current_time_ms,
)
from analytics_tracker.factory import get_session_store
from analytics_tracker.utils.config import get_settings


# ==============================================================================
# Commands
# ==============================================================================


def session_show(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show the persisted session and its state."""
    settings = get_settings()
    store = get_session_store(settings)
    manager = SessionManager(store, timeout_minutes=settings.tracker.session_timeout_minutes)

    now = current_time_ms()
    state = manager.state(now)
    session_id = store.get(SESSION_ID_KEY) if not manager.using_fallback else None
    expires_raw = store.get(SESSION_EXPIRES_KEY) if not manager.using_fallback else None

    if json_output:
        print(
            json.dumps(
                {
                    "store": settings.storage.impl,
                    "state": state.value,
                    "session_id": session_id,
                    "expires_at": int(expires_raw) if expires_raw and expires_raw.isdigit() else None,
                    "storage_available": not manager.using_fallback,
                },
                indent=2,
            )
        )
        return

    print()
    print(f"  {C.BOLD}Session store:{C.RESET} {settings.storage.impl}")
    if manager.using_fallback:
        print(f"  {C.BRIGHT_RED}{I.CROSS} Session store unavailable{C.RESET}")
        raise typer.Exit(1)

    match state:
        case SessionState.ABSENT:
            print(f"  {C.DIM}No session (next event starts a new one){C.RESET}")
        case SessionState.EXPIRED:
            print(f"  {C.BRIGHT_YELLOW}{I.WARN} Session {session_id} expired{C.RESET}")
        case SessionState.VALID:
            session = manager.current_session(now)
            minutes_left = session.remaining_ms(now) / 60000
            print(f"  {C.BRIGHT_GREEN}{I.CHECK} Session {session.session_id}{C.RESET}")
            print(
                f"  {I.ARROW} expires {session.expires_time:%Y-%m-%d %H:%M:%S} UTC "
                f"({minutes_left:.1f} min left)"
            )
    print()


def session_reset(
    confirm: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompt")] = False,
) -> None:
    """Delete the persisted session so the next event starts a new one."""
    if not confirm:
        typer.confirm("Delete the persisted session?", abort=True)

    store = get_session_store()
    removed = store.delete(SESSION_ID_KEY)
    store.delete(SESSION_EXPIRES_KEY)

    if removed:
        print(f"{C.BRIGHT_GREEN}{I.CHECK} Session deleted{C.RESET}")
    else:
        print(f"{C.DIM}No session to delete{C.RESET}")

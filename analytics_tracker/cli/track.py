# ==============================================================================
# Track Commands
# ==============================================================================
"""
Send events to the collector from the command line.

Uses the configured store, so consecutive invocations within the session
window share one session id when the store persists (cookie file, Valkey).
The command waits for delivery and exits non-zero if it failed.
"""

from typing import Annotated, Optional

import typer

from analytics_tracker.cli.shared import C, parse_properties, report_delivery
from analytics_tracker.core import EventType, PageContext
from analytics_tracker.factory import create_tracker


# ==============================================================================
# Commands
# ==============================================================================


def track_page_view(
    url: Annotated[str, typer.Argument(help="Page URL")],
    title: Annotated[str, typer.Option("--title", "-t", help="Page title")] = "",
    referrer: Annotated[
        Optional[str], typer.Option("--referrer", "-r", help="Referrer URL")
    ] = None,
    prop: Annotated[
        Optional[list[str]], typer.Option("--prop", "-p", help="Property as key=value")
    ] = None,
) -> None:
    """Send a page view event."""
    properties = parse_properties(prop)
    tracker = create_tracker()
    try:
        page = PageContext(url=url, title=title, referrer=referrer)
        future = tracker.emitter.track_page_view(page, properties)
        session_id = tracker.session_manager.current_session_id()
        print(f"{C.DIM}session {session_id}{C.RESET}")
        delivered = report_delivery(future, "Page view")
    finally:
        tracker.close()

    if not delivered:
        raise typer.Exit(1)


def track_event(
    name: Annotated[str, typer.Argument(help="Event name")],
    event_type: Annotated[
        str, typer.Option("--type", "-T", help="Event type")
    ] = EventType.CUSTOM.value,
    url: Annotated[Optional[str], typer.Option("--url", "-u", help="Page URL")] = None,
    prop: Annotated[
        Optional[list[str]], typer.Option("--prop", "-p", help="Property as key=value")
    ] = None,
) -> None:
    """Send a custom event."""
    properties = parse_properties(prop)
    tracker = create_tracker()
    try:
        page = PageContext(url=url) if url else None
        future = tracker.emitter.track_custom_event(name, event_type, page=page, properties=properties)
        session_id = tracker.session_manager.current_session_id()
        print(f"{C.DIM}session {session_id}{C.RESET}")
        delivered = report_delivery(future, f"Event '{name}'")
    finally:
        tracker.close()

    if not delivered:
        raise typer.Exit(1)

# ==============================================================================
# Tracker CLI
# ==============================================================================
"""
Command-line interface for the analytics tracking client.

Usage:
    tracker --help
    tracker status
    tracker config show
    tracker session show
    tracker session reset -y
    tracker track page-view https://example.com/pricing --title Pricing
    tracker track event "Signup" --type conversion --prop plan=pro
"""

import os

import typer

from analytics_tracker.cli.shared import setup_logging

if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

app = typer.Typer(
    name="tracker",
    help="Analytics tracking client CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def _configure() -> None:
    setup_logging()


config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

from analytics_tracker.cli.config import config_show

config_app.command("show")(config_show)

session_app = typer.Typer(
    help="Visit session operations",
    no_args_is_help=True,
)
app.add_typer(session_app, name="session")

from analytics_tracker.cli.session import session_reset, session_show

session_app.command("show")(session_show)
session_app.command("reset")(session_reset)

track_app = typer.Typer(
    help="Send events to the collector",
    no_args_is_help=True,
)
app.add_typer(track_app, name="track")

from analytics_tracker.cli.track import track_event, track_page_view

track_app.command("page-view")(track_page_view)
track_app.command("event")(track_event)

from analytics_tracker.cli.status import show_status

app.command("status")(show_status)


# ==============================================================================
# Entry Point
# ==============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()

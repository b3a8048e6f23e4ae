# ==============================================================================
# Tests for CLI Commands
# ==============================================================================
"""
Unit tests for the config, session, track and status CLI commands.

Tests cover:
- key=value property parsing
- `config show` (JSON and table, API key masking)
- `session show` and `session reset` against an in-memory store
- `track page-view` and `track event` delivery reporting
- `status` connectivity output

Stores and trackers are patched where the command modules import them, so
no collector or Valkey is needed. CLI output is captured via
typer.testing.CliRunner.
"""

import json
from unittest.mock import patch

import pytest
import typer
from typer.testing import CliRunner

from analytics_tracker.cli.config import config_show
from analytics_tracker.cli.session import session_reset, session_show
from analytics_tracker.cli.shared import parse_properties
from analytics_tracker.cli.status import show_status
from analytics_tracker.cli.track import track_event, track_page_view
from analytics_tracker.core import SessionManager
from analytics_tracker.core.session_manager import SESSION_EXPIRES_KEY, SESSION_ID_KEY
from analytics_tracker.factory import create_tracker
from analytics_tracker.infrastructure.storage import InMemorySessionStore
from analytics_tracker.utils.config import Settings, get_settings
from tests.conftest import RecordingTransport

runner = CliRunner()


def _make_app():
    """Create a minimal Typer app with the commands under test."""
    app = typer.Typer()
    app.command("config")(config_show)
    app.command("show")(session_show)
    app.command("reset")(session_reset)
    app.command("page-view")(track_page_view)
    app.command("event")(track_event)
    app.command("status")(show_status)
    return app


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Rebuild cached settings from the patched environment for each test."""
    monkeypatch.setenv("STORAGE_IMPL", "memory")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ==============================================================================
# parse_properties
# ==============================================================================


class TestParseProperties:
    """Tests for the key=value parser."""

    def test_pairs(self):
        assert parse_properties(["plan=pro", "seats=3"]) == {"plan": "pro", "seats": "3"}

    def test_value_may_contain_equals(self):
        assert parse_properties(["q=a=b"]) == {"q": "a=b"}

    def test_none(self):
        assert parse_properties(None) == {}

    @pytest.mark.parametrize("value", ["plan", "=pro"])
    def test_invalid(self, value):
        with pytest.raises(typer.BadParameter, match="Use key=value"):
            parse_properties([value])


# ==============================================================================
# config show
# ==============================================================================


class TestConfigShow:
    """Tests for `config show`."""

    def test_json(self, monkeypatch):
        monkeypatch.setenv("TRACKER_API_KEY", "pk_test")
        result = runner.invoke(_make_app(), ["config", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["tracker"]["api_key"] == "pk_test"
        assert data["storage"]["impl"] == "memory"
        assert data["tracker"]["track_url"] == "http://localhost:8080/api/v1/track"

    def test_table_masks_api_key(self, monkeypatch):
        monkeypatch.setenv("TRACKER_API_KEY", "pk_test")
        result = runner.invoke(_make_app(), ["config"])

        assert result.exit_code == 0
        assert "Tracker Configuration" in result.output
        assert "pk_test" not in result.output


# ==============================================================================
# session show / reset
# ==============================================================================

_STORE_PATH = "analytics_tracker.cli.session.get_session_store"


class TestSession:
    """Tests for `session show` and `session reset`."""

    def test_show_absent(self):
        with patch(_STORE_PATH, return_value=InMemorySessionStore()):
            result = runner.invoke(_make_app(), ["show", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["state"] == "absent"
        assert data["session_id"] is None
        assert data["storage_available"] is True

    def test_show_valid(self):
        store = InMemorySessionStore()
        session_id = SessionManager(store).current_session_id()

        with patch(_STORE_PATH, return_value=store):
            result = runner.invoke(_make_app(), ["show", "--json"])

        data = json.loads(result.output)
        assert data["state"] == "valid"
        assert data["session_id"] == session_id
        assert data["expires_at"] == int(store.get(SESSION_EXPIRES_KEY))

    def test_show_valid_text(self):
        store = InMemorySessionStore()
        session_id = SessionManager(store).current_session_id()

        with patch(_STORE_PATH, return_value=store):
            result = runner.invoke(_make_app(), ["show"])

        assert result.exit_code == 0
        assert session_id in result.output
        assert "min left" in result.output

    def test_reset_deletes_session(self):
        store = InMemorySessionStore()
        SessionManager(store).current_session_id()

        with patch(_STORE_PATH, return_value=store):
            result = runner.invoke(_make_app(), ["reset", "--yes"])

        assert result.exit_code == 0
        assert "Session deleted" in result.output
        assert store.get(SESSION_ID_KEY) is None
        assert store.get(SESSION_EXPIRES_KEY) is None

    def test_reset_nothing_to_delete(self):
        with patch(_STORE_PATH, return_value=InMemorySessionStore()):
            result = runner.invoke(_make_app(), ["reset", "--yes"])

        assert "No session to delete" in result.output

    def test_reset_aborts_without_confirmation(self):
        store = InMemorySessionStore()
        SessionManager(store).current_session_id()

        with patch(_STORE_PATH, return_value=store):
            result = runner.invoke(_make_app(), ["reset"], input="n\n")

        assert result.exit_code != 0
        assert store.get(SESSION_ID_KEY) is not None


# ==============================================================================
# track page-view / event
# ==============================================================================

_TRACKER_PATH = "analytics_tracker.cli.track.create_tracker"


def _tracker_factory(transport):
    return lambda: create_tracker(Settings(), store=InMemorySessionStore(), transport=transport)


class TestTrack:
    """Tests for the track commands."""

    def test_page_view(self):
        transport = RecordingTransport()
        with patch(_TRACKER_PATH, _tracker_factory(transport)):
            result = runner.invoke(
                _make_app(),
                ["page-view", "https://shop.example.com/", "--title", "Home", "-p", "ab=b"],
            )

        assert result.exit_code == 0
        assert "Page view delivered" in result.output
        payload = transport.payloads[0]
        assert payload["event_type"] == "page_view"
        assert payload["page_url"] == "https://shop.example.com/"
        assert payload["page_title"] == "Home"
        assert payload["properties"] == {"ab": "b"}
        assert payload["session_id"] in result.output
        assert transport.closed

    def test_event(self):
        transport = RecordingTransport()
        with patch(_TRACKER_PATH, _tracker_factory(transport)):
            result = runner.invoke(
                _make_app(), ["event", "Signup", "--type", "conversion", "--prop", "plan=pro"]
            )

        assert result.exit_code == 0
        payload = transport.payloads[0]
        assert payload["event_name"] == "Signup"
        assert payload["event_type"] == "conversion"
        assert payload["properties"] == {"plan": "pro"}
        assert "page_url" not in payload

    def test_not_delivered_exits_nonzero(self):
        transport = RecordingTransport(result=False)
        with patch(_TRACKER_PATH, _tracker_factory(transport)):
            result = runner.invoke(_make_app(), ["event", "Signup"])

        assert result.exit_code == 1
        assert "not delivered" in result.output

    def test_invalid_property(self):
        result = runner.invoke(_make_app(), ["event", "Signup", "--prop", "oops"])
        assert result.exit_code != 0


# ==============================================================================
# status
# ==============================================================================

_COLLECTOR_PATH = "analytics_tracker.cli.status.check_collector_connection"


class TestStatus:
    """Tests for `status`."""

    def test_collector_reachable(self):
        with patch(_COLLECTOR_PATH, return_value=True):
            result = runner.invoke(_make_app(), ["status"])

        assert result.exit_code == 0
        assert "Collector reachable" in result.output
        assert "Session store: memory" in result.output

    def test_collector_unreachable(self):
        with patch(_COLLECTOR_PATH, return_value=False):
            result = runner.invoke(_make_app(), ["status"])

        assert result.exit_code == 1
        assert "Collector unreachable" in result.output

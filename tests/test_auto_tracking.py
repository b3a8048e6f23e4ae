# ==============================================================================
# Tests for AutoTracker
# ==============================================================================
"""
Unit tests for automatic page view, click, form, scroll and unload capture.
"""

import pytest

from analytics_tracker.core import AutoTracker, Element, EventEmitter, SessionManager
from analytics_tracker.core.auto_tracking import is_clickable


@pytest.fixture()
def auto(memory_store, clock, transport, page):
    emitter = EventEmitter(SessionManager(memory_store, clock=clock), transport)
    return AutoTracker(emitter, lambda: page, clock=clock)


def _types(transport):
    return [p["event_type"] for p in transport.payloads]


class TestIsClickable:
    """Tests for the clickable element filter."""

    @pytest.mark.parametrize(
        "element,expected",
        [
            (Element(tag_name="BUTTON"), True),
            (Element(tag_name="a"), True),
            (Element(tag_name="DIV", attributes={"role": "button"}), True),
            (Element(tag_name="DIV"), False),
            (Element(tag_name="SPAN", attributes={"role": "link"}), False),
        ],
    )
    def test_filter(self, element, expected):
        assert is_clickable(element) is expected


class TestAutoTracker:
    """Tests for the AutoTracker handlers."""

    def test_start_tracks_page_view(self, auto, transport, page):
        auto.start()
        assert _types(transport) == ["page_view"]
        assert transport.payloads[0]["page_url"] == page.url

    def test_click_on_button_tracked(self, auto, transport):
        assert auto.handle_click(Element(tag_name="BUTTON", text_content="Subscribe")) is not None
        assert transport.payloads[0]["event_name"] == "Click: Subscribe"

    def test_click_on_plain_element_ignored(self, auto, transport):
        assert auto.handle_click(Element(tag_name="P", text_content="Hello")) is None
        assert transport.payloads == []

    def test_every_submit_tracked(self, auto, transport):
        form = Element(tag_name="FORM", attributes={"name": "newsletter"})
        auto.handle_submit(form)
        auto.handle_submit(form)
        assert _types(transport) == ["form_submit", "form_submit"]

    def test_scroll_throttled(self, auto, transport, clock):
        assert auto.handle_scroll() is not None
        clock.advance(200)
        assert auto.handle_scroll() is None
        clock.advance(799)
        assert auto.handle_scroll() is None
        clock.advance(1)
        assert auto.handle_scroll() is not None

        assert _types(transport) == ["scroll", "scroll"]

    def test_custom_throttle(self, memory_store, clock, transport, page):
        emitter = EventEmitter(SessionManager(memory_store, clock=clock), transport)
        auto = AutoTracker(emitter, lambda: page, scroll_throttle_ms=5000, clock=clock)

        auto.handle_scroll()
        clock.advance(4999)
        auto.handle_scroll()
        clock.advance(1)
        auto.handle_scroll()

        assert _types(transport) == ["scroll", "scroll"]

    def test_stop_tracks_unload(self, auto, transport):
        auto.start()
        auto.stop()

        unload = transport.payloads[-1]
        assert unload["event_type"] == "navigation"
        assert unload["event_name"] == "Page Unload"

    def test_stop_without_start(self, auto, transport):
        assert auto.stop() is None
        assert transport.payloads == []

    def test_page_read_at_event_time(self, memory_store, clock, transport, page):
        pages = iter([page, page.model_copy(update={"url": "https://shop.example.com/cart"})])
        emitter = EventEmitter(SessionManager(memory_store, clock=clock), transport)
        auto = AutoTracker(emitter, lambda: next(pages), clock=clock)

        auto.start()
        auto.handle_click(Element(tag_name="A", text_content="Cart"))

        assert [p["page_url"] for p in transport.payloads] == [
            page.url,
            "https://shop.example.com/cart",
        ]

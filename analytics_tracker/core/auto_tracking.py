# ==============================================================================
# Automatic Event Capture
# ==============================================================================
"""
Automatic tracking of page view, click, form submit, scroll and unload.

There is no DOM to listen on, so the host application forwards its own UI
events to the handlers here and the AutoTracker decides what to emit:
- start():          initial page view
- handle_click():   only buttons, links and role="button" elements
- handle_submit():  every form submission
- handle_scroll():  at most one scroll event per throttle window
- stop():           "Page Unload" navigation event
"""

import logging
from collections.abc import Callable
from concurrent.futures import Future

from analytics_tracker.core.emitter import EventEmitter
from analytics_tracker.core.models import Element, EventType, PageContext
from analytics_tracker.core.session_manager import current_time_ms

logger = logging.getLogger(__name__)

CLICKABLE_TAGS = frozenset({"BUTTON", "A"})
DEFAULT_SCROLL_THROTTLE_MS = 1000


def is_clickable(element: Element) -> bool:
    """Buttons, links and elements with role="button"."""
    return element.tag_name.upper() in CLICKABLE_TAGS or element.get_attribute("role") == "button"


class AutoTracker:
    """
    Emits standard events in response to host UI events.

    Args:
        emitter: Emitter the events go through.
        page: Callable returning the page currently shown.
        scroll_throttle_ms: Minimum gap between scroll events.
        clock: Callable returning the current time in ms since epoch.
    """

    def __init__(
        self,
        emitter: EventEmitter,
        page: Callable[[], PageContext],
        scroll_throttle_ms: int = DEFAULT_SCROLL_THROTTLE_MS,
        clock: Callable[[], int] = current_time_ms,
    ) -> None:
        self.emitter = emitter
        self._page = page
        self.scroll_throttle_ms = scroll_throttle_ms
        self._clock = clock
        self._last_scroll: int | None = None
        self.started = False

    def start(self) -> "Future[bool]":
        """Begin auto tracking with a page view of the current page."""
        self.started = True
        return self.emitter.track_page_view(self._page())

    def handle_click(self, element: Element) -> "Future[bool] | None":
        """Track the click if ``element`` is interactive."""
        if not is_clickable(element):
            return None
        return self.emitter.track_click(element, self._page())

    def handle_submit(self, form: Element) -> "Future[bool]":
        return self.emitter.track_form_submit(form, self._page())

    def handle_scroll(self) -> "Future[bool] | None":
        """Track the scroll unless one was tracked within the throttle window."""
        now = self._clock()
        if self._last_scroll is not None and now - self._last_scroll < self.scroll_throttle_ms:
            return None
        self._last_scroll = now
        return self.emitter.track_scroll(self._page())

    def stop(self) -> "Future[bool] | None":
        """Track the page unload. Does nothing if never started."""
        if not self.started:
            return None
        self.started = False
        logger.debug("Auto tracking stopped")
        return self.emitter.track_custom_event(
            "Page Unload", EventType.NAVIGATION.value, page=self._page()
        )

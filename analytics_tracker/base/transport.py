# ==============================================================================
# Event Transport Abstract Base Class
# ==============================================================================
"""
Abstract interface for delivering tracked events to the collector.

Delivery is fire-and-forget: ``send()`` hands the payload off and returns a
future immediately. Callers that care about completion can wait on the
future; the tracker itself never does.
"""

from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Any


class BaseTransport(ABC):
    """Base class for event transports."""

    @abstractmethod
    def send(self, payload: dict[str, Any]) -> "Future[bool]":
        """
        Submit one event payload for delivery.

        Args:
            payload: JSON-serializable event envelope

        Returns:
            Future resolving to True if the collector accepted the event,
            False otherwise. The future never raises.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """
        Release transport resources.

        Pending sends are allowed to finish before returning.
        """
        ...

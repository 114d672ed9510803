"""Delivery of finished participant lists to subscribers (WebSocket clients, tests)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

PARTICIPANTS_UPDATED = "PARTICIPANTS_UPDATED"

Subscriber = Callable[[dict[str, Any]], None]


def participants_message(participants: list[str]) -> dict[str, Any]:
    """Build the ``PARTICIPANTS_UPDATED`` push payload."""
    return {"type": PARTICIPANTS_UPDATED, "participants": list(participants)}


class Notifier:
    """Fan-out of ``PARTICIPANTS_UPDATED`` messages.

    A subscriber that raises is logged and skipped; the rest still receive
    the message.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self.last_participants: list[str] | None = None
        self.published = 0

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register *subscriber*; returns a function that unregisters it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, participants: list[str]) -> None:
        message = participants_message(participants)
        self.last_participants = message["participants"]
        self.published += 1
        logger.info(
            "Publishing %d participants to %d subscribers",
            len(participants),
            len(self._subscribers),
        )
        for subscriber in list(self._subscribers):
            try:
                subscriber(message)
            except Exception:
                logger.exception("Subscriber failed to receive participants update")

"""Change monitor: re-extract participants whenever the Meet page mutates."""

from __future__ import annotations

import logging
from enum import Enum

from src.config import settings
from src.dom.tree import HostDocument, Subscription
from src.extraction.session import run_extraction
from src.monitoring.notifier import Notifier
from src.monitoring.scheduler import Scheduler
from src.pipeline_config import ExtractionConfig

logger = logging.getLogger(__name__)


class MonitorState(str, Enum):
    """Lifecycle of a :class:`ChangeMonitor`."""

    IDLE = "idle"
    OBSERVING = "observing"


class ChangeMonitor:
    """Debounced, non-overlapping re-extraction driven by mutation notifications.

    While observing, the first notification sets the in-flight guard and
    schedules one extraction after ``debounce_seconds``; notifications that
    arrive while the guard is set are dropped.  When the scheduled session
    finishes its result is published and the guard is cleared.

    ``stop()`` only prevents future triggers: a session already scheduled
    still runs and its result is still published.
    """

    def __init__(
        self,
        document: HostDocument,
        notifier: Notifier,
        scheduler: Scheduler,
        debounce_seconds: float | None = None,
        config: ExtractionConfig | None = None,
    ) -> None:
        self.document = document
        self.notifier = notifier
        self.scheduler = scheduler
        self.debounce_seconds = (
            settings.debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self.config = config
        self._subscription: Subscription | None = None
        self._in_flight = False
        self.sessions_run = 0

    @property
    def state(self) -> MonitorState:
        if self._subscription is not None:
            return MonitorState.OBSERVING
        return MonitorState.IDLE

    @property
    def is_observing(self) -> bool:
        return self.state is MonitorState.OBSERVING

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def start(self) -> None:
        """Subscribe to the page and schedule an initial extraction.

        Starting an observing monitor replaces its subscription.
        """
        if self._subscription is not None:
            logger.info("Monitor already observing, restarting")
            self.stop()

        self._subscription = self.document.subscribe(self._on_mutation)
        logger.info("Monitoring started")
        self._trigger()

    def stop(self) -> None:
        """Cancel the subscription.  Idempotent."""
        if self._subscription is None:
            return
        self._subscription.cancel()
        self._subscription = None
        logger.info("Monitoring stopped")

    def _on_mutation(self) -> None:
        if self._subscription is None:
            return
        self._trigger()

    def _trigger(self) -> None:
        if self._in_flight:
            logger.debug("Extraction already pending, mutation coalesced")
            return
        self._in_flight = True
        self.scheduler.call_later(self.debounce_seconds, self._run_session)

    def _run_session(self) -> None:
        try:
            participants = run_extraction(self.document, self.config)
            self.sessions_run += 1
            self.notifier.publish(participants)
        finally:
            self._in_flight = False

"""Service object owned by the API: host document, monitor, notifier, auto-start."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from fastapi.requests import HTTPConnection

from src.config import Settings, settings
from src.dom.soup_tree import SoupDocument
from src.extraction.session import run_extraction
from src.monitoring.monitor import ChangeMonitor
from src.monitoring.notifier import Notifier
from src.monitoring.scheduler import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)


class NoHostPageError(RuntimeError):
    """Raised when a request needs the Meet page but no snapshot has been pushed."""

    def __init__(self) -> None:
        super().__init__("No meeting page is attached")


class RosterService:
    """Everything one attached Meet tab needs: its document, monitor, and subscribers."""

    def __init__(self, scheduler: Scheduler | None = None, config: Settings | None = None) -> None:
        self.settings = config or settings
        self.scheduler = scheduler or AsyncioScheduler()
        self.document = SoupDocument()
        self.notifier = Notifier()
        self.monitor = ChangeMonitor(
            self.document,
            self.notifier,
            self.scheduler,
            debounce_seconds=self.settings.debounce_seconds,
        )
        self._autostart_pending = False

    @property
    def attached(self) -> bool:
        return self.document.loaded

    def is_meet_page(self, url: str) -> bool:
        return urlparse(url).hostname == self.settings.meet_host

    def get_participants(self) -> list[str]:
        """One-shot extraction; bypasses the monitor and its in-flight guard."""
        if not self.attached:
            raise NoHostPageError()
        return run_extraction(self.document)

    def start_monitoring(self) -> None:
        if not self.attached:
            raise NoHostPageError()
        self.monitor.start()

    def stop_monitoring(self) -> None:
        self.monitor.stop()

    def load_snapshot(self, url: str, html: str) -> None:
        """Replace the host document and schedule auto-start on a newly opened Meet page."""
        page_opened = not self.document.loaded or url != self.document.url
        self.document.load(html, url)

        if page_opened and self.is_meet_page(url) and not self.monitor.is_observing:
            self._schedule_autostart()

    def _schedule_autostart(self) -> None:
        if self._autostart_pending:
            return
        self._autostart_pending = True
        logger.info(
            "Meet page attached, monitoring starts in %d ms", self.settings.autostart_settle_ms
        )
        self.scheduler.call_later(self.settings.autostart_settle_seconds, self._autostart)

    def _autostart(self) -> None:
        self._autostart_pending = False
        if self.attached and not self.monitor.is_observing:
            self.monitor.start()


def get_roster(connection: HTTPConnection) -> RosterService:
    """FastAPI dependency: the service stored on ``app.state``."""
    return connection.app.state.roster  # type: ignore[no-any-return]

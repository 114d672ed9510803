"""One full extraction pass over the host page: locate -> harvest -> probe."""

from __future__ import annotations

import logging
from collections.abc import Callable

from src.dom.tree import HostDocument
from src.extraction.harvester import harvest
from src.extraction.locator import (
    attempt_strategy,
    build_strategies,
    check_panel_state,
    probe_attribute_scan,
    probe_video_tiles,
)
from src.extraction.models import ExtractionReport, PassResult
from src.extraction.participants import ParticipantSet
from src.pipeline_config import ExtractionConfig, LocatorStrategyName, ProbeName

logger = logging.getLogger(__name__)

ProbeFn = Callable[[HostDocument, ParticipantSet], int]

PROBES: dict[ProbeName, ProbeFn] = {
    ProbeName.VIDEO_TILES: probe_video_tiles,
    ProbeName.ATTRIBUTE_SCAN: probe_attribute_scan,
}

TROUBLESHOOTING: tuple[str, ...] = (
    "Make sure you're in an active Google Meet session",
    'Click the "People" icon to open the people panel',
    "Make sure there are other participants in the meeting",
    'Check if there\'s a "Contributors" or "In call" section visible',
    "Try refreshing the Meet page and rejoining",
)


def suggest_troubleshooting() -> None:
    """Log what the user can do when no participants were found."""
    logger.warning("No participants found. Troubleshooting suggestions:")
    for i, tip in enumerate(TROUBLESHOOTING, 1):
        logger.warning("  %d. %s", i, tip)


class ExtractionSession:
    """A single, stateless extraction over *document*.

    Locator strategies are walked in order.  The first root found is
    harvested; if it yields no names the next strategy's root is tried, so a
    stale list container cannot hide a working heading section or panel.  The
    video-tile and attribute-scan probes always run afterwards and only ever
    add names.
    """

    def __init__(self, document: HostDocument, config: ExtractionConfig | None = None) -> None:
        self.document = document
        self.config = config or ExtractionConfig()

    def run(self) -> ExtractionReport:
        """Run the pass and return the report.  Never raises."""
        participants = ParticipantSet()
        report = ExtractionReport()

        if self.document.body is None:
            logger.warning("No host page loaded, nothing to extract")
            return report

        logger.info("Starting participant extraction")
        report.root_strategy = self._harvest_located_roots(participants, report)

        for probe in self.config.probes:
            added = 0
            try:
                added = PROBES[probe](self.document, participants)
            except Exception:
                logger.exception("Probe %s failed", probe.value)
            report.passes.append(PassResult(name=probe.value, added=added))

        report.participants = participants.to_list()
        if not report.participants:
            suggest_troubleshooting()
        logger.info("Found %d participants: %s", len(report.participants), report.participants)
        return report

    def _harvest_located_roots(
        self,
        participants: ParticipantSet,
        report: ExtractionReport,
    ) -> str | None:
        for strategy in build_strategies(self.config.locator_order):
            try:
                located = attempt_strategy(strategy, self.document)
                if located is None:
                    report.passes.append(PassResult(name=strategy.name.value, root_found=False))
                    if strategy.name is LocatorStrategyName.STRUCTURAL_MATCH:
                        logger.info("Participants list not found, trying alternative methods")
                        check_panel_state(self.document)
                    continue
                added = harvest(located.node, participants, located.plan)
            except Exception:
                logger.exception("Locator strategy %s failed", strategy.name.value)
                continue

            report.passes.append(PassResult(name=strategy.name.value, added=added))
            if added:
                return strategy.name.value
            logger.info("Root from %s yielded no names, escalating", strategy.name.value)

        return None


def run_extraction(document: HostDocument, config: ExtractionConfig | None = None) -> list[str]:
    """Extract the current participant names from *document*, first-seen order."""
    return ExtractionSession(document, config).run().participants

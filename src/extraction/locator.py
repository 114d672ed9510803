"""Root location: find the element of the Meet page that holds the participant list.

Strategies run in a fixed order and the first one that returns a root wins.
Each is a small class with the same ``attempt(document)`` contract so it can
be tested on its own against a fixture page.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from src.dom.tree import HostDocument, TreeNode
from src.extraction.classifier import is_ui_text
from src.extraction.harvester import (
    LIST_PLAN,
    PANEL_PLAN,
    SECTION_PLAN,
    HarvestPlan,
    accept_candidate,
    harvest_selectors,
)
from src.extraction.models import RawCandidate
from src.extraction.participants import ParticipantSet
from src.pipeline_config import DEFAULT_LOCATOR_ORDER, LocatorStrategyName

logger = logging.getLogger(__name__)

HEADING_TEXTS: frozenset[str] = frozenset(
    {
        "Contributors",
        "contributors",
        "CONTRIBUTORS",
        "Participants",
        "participants",
        "PARTICIPANTS",
        "People",
        "people",
        "PEOPLE",
    }
)

# Text that only appears in the panel's search/invite header, never in the list
PANEL_HEADER_PHRASES: tuple[str, ...] = ("Add people", "Search for people")

PANEL_INDICATORS: tuple[str, ...] = (
    "Add people",
    "Search for people",
    "Contributors",
    "Participants",
    "In call",
)

MAX_LIST_CHILDREN = 50

PEOPLE_PANEL_SELECTORS: tuple[str, ...] = (
    '[data-panel-id="2"]',
    '[role="complementary"]',
    '[data-tab-id="2"]',
    '[aria-label*="people"]',
    '[aria-label*="participant"]',
)


@dataclass
class LocatedRoot:
    """A root element plus the strategy that found it and how to harvest it."""

    node: TreeNode
    strategy: LocatorStrategyName
    plan: HarvestPlan


def first_match(root: TreeNode, selectors: Sequence[str]) -> TreeNode | None:
    """Return the first element matching any of *selectors*, tried in order."""
    for selector in selectors:
        node = root.select_one(selector)
        if node is not None:
            logger.debug("Matched %s", selector)
            return node
    return None


def looks_like_participant_list(node: TreeNode) -> bool:
    """Heuristic: a modest number of children and no UI chrome in its text."""
    child_count = len(node.children)
    if not 0 < child_count < MAX_LIST_CHILDREN:
        return False
    text = node.text
    if is_ui_text(text):
        return False
    return not any(phrase in text for phrase in PANEL_HEADER_PHRASES)


class StructuralMatch:
    """An element explicitly marked up as the participants list."""

    name = LocatorStrategyName.STRUCTURAL_MATCH
    plan = LIST_PLAN
    selectors: tuple[str, ...] = (
        '[role="list"][aria-label="Participants"]',
        '[aria-label="Participants"]',
        '[role="list"][aria-label*="participant"]',
        '[role="list"][aria-label*="Participant"]',
        ".AE8xFb.OrqRRb.GvcuGe.goTdfd",
        '[jsname="jrQDbd"]',
    )

    def attempt(self, document: HostDocument) -> TreeNode | None:
        body = document.body
        if body is None:
            return None
        return first_match(body, self.selectors)


class HeadingHeuristic:
    """A "Contributors"/"Participants"/"People" heading and the list next to it."""

    name = LocatorStrategyName.HEADING_HEURISTIC
    plan = SECTION_PLAN

    def attempt(self, document: HostDocument) -> TreeNode | None:
        body = document.body
        if body is None:
            return None

        log_people_panel(body)

        for element in body.descendants():
            text = element.text.strip()
            if text not in HEADING_TEXTS:
                continue
            logger.info("Found heading %r", text)
            return self._container_for(element)

        logger.info("No Contributors/Participants heading found")
        return None

    @staticmethod
    def _container_for(heading: TreeNode) -> TreeNode:
        parent = heading.parent
        grandparent = parent.parent if parent is not None else None
        nearby = (
            parent,
            grandparent,
            heading.next_sibling,
            parent.next_sibling if parent is not None else None,
            grandparent.next_sibling if grandparent is not None else None,
        )
        for candidate in nearby:
            if candidate is not None and looks_like_participant_list(candidate):
                return candidate

        logger.info("No list-like container near heading, using its parent")
        return parent or heading


class GenericPanel:
    """Broad panel/tab attribute patterns; last resort for a root."""

    name = LocatorStrategyName.GENERIC_PANEL
    plan = PANEL_PLAN
    selectors: tuple[str, ...] = (
        '[data-panel-id="2"]',
        '[aria-label*="participant"]',
        '[role="complementary"]',
        '[data-tab-id="2"]',
    )

    def attempt(self, document: HostDocument) -> TreeNode | None:
        body = document.body
        if body is None:
            return None
        return first_match(body, self.selectors)


LocatorStrategy = StructuralMatch | HeadingHeuristic | GenericPanel

_STRATEGIES: dict[LocatorStrategyName, type[LocatorStrategy]] = {
    LocatorStrategyName.STRUCTURAL_MATCH: StructuralMatch,
    LocatorStrategyName.HEADING_HEURISTIC: HeadingHeuristic,
    LocatorStrategyName.GENERIC_PANEL: GenericPanel,
}


def build_strategies(
    order: Sequence[LocatorStrategyName] = DEFAULT_LOCATOR_ORDER,
) -> list[LocatorStrategy]:
    """Instantiate the locator chain in *order*."""
    return [_STRATEGIES[name]() for name in order]


def attempt_strategy(strategy: LocatorStrategy, document: HostDocument) -> LocatedRoot | None:
    """Run one strategy, turning its root into a :class:`LocatedRoot`."""
    node = strategy.attempt(document)
    if node is None:
        return None
    logger.info("Located participants root with %s", strategy.name.value)
    return LocatedRoot(node=node, strategy=strategy.name, plan=strategy.plan)


def locate(
    document: HostDocument,
    strategies: Sequence[LocatorStrategy] | None = None,
) -> LocatedRoot | None:
    """Return the root found by the first strategy that finds one, or None."""
    if strategies is None:
        strategies = build_strategies()

    for strategy in strategies:
        located = attempt_strategy(strategy, document)
        if located is not None:
            return located
        if strategy.name is LocatorStrategyName.STRUCTURAL_MATCH:
            logger.info("Participants list not found, trying alternative methods")
            check_panel_state(document)

    return None


def check_panel_state(document: HostDocument) -> list[str]:
    """Log which People-panel indicators appear on the page and return them.

    When none appear the panel is most likely closed, which is the usual reason
    nothing is found.
    """
    body = document.body
    page_text = body.text.lower() if body is not None else ""
    found = [ind for ind in PANEL_INDICATORS if ind.lower() in page_text]
    logger.info("Panel indicators on page: %s", found)
    if not found:
        logger.warning(
            "People panel may not be open. Click the People icon in Google Meet."
        )
    return found


def log_people_panel(body: TreeNode) -> None:
    """Debug aid: log the short text elements of the first people panel found."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    panel = first_match(body, PEOPLE_PANEL_SELECTORS)
    if panel is None:
        return
    logger.debug("People panel preview: %r", panel.text[:200])
    for element in panel.select("h1, h2, h3, h4, h5, h6, span, div"):
        text = element.text.strip()
        if 2 < len(text) < 50:
            logger.debug("  panel text: %r", text)


# ---------------------------------------------------------------------------
# Document-wide probes
# ---------------------------------------------------------------------------

VIDEO_TILE_SELECTORS: tuple[str, ...] = (
    "[data-participant-id] [data-self-name]",
    "[data-participant-id]",
    ".participant-name",
    '[aria-label*="video"]',
    "[data-fps-request-screencast-cap]",
)

ATTRIBUTE_SCAN_SELECTORS: tuple[str, ...] = (
    "[data-participant-id]",
    "[data-self-name]",
    '[role="listitem"]',
    '[aria-label*="participant"]',
    '[aria-label*="video"]',
    ".participant",
    ".name",
)


def probe_video_tiles(document: HostDocument, participants: ParticipantSet) -> int:
    """Add names from video tiles anywhere on the page; return how many were new."""
    body = document.body
    if body is None:
        return 0
    before = len(participants)
    harvest_selectors(body, VIDEO_TILE_SELECTORS, participants)
    return len(participants) - before


def probe_attribute_scan(document: HostDocument, participants: ParticipantSet) -> int:
    """Add names from participant-shaped elements, reading only their own text.

    Descendant text is ignored so a tile wrapping a name badge does not
    contribute the badge text twice.
    """
    body = document.body
    if body is None:
        return 0
    before = len(participants)
    for selector in ATTRIBUTE_SCAN_SELECTORS:
        for node in body.select(selector):
            try:
                text = node.direct_text
            except Exception:
                logger.debug("Unreadable node skipped: %r", node, exc_info=True)
                continue
            accept_candidate(RawCandidate(node, text, selector), participants)
    return len(participants) - before

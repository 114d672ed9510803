"""Candidate harvesting: pull participant names out of a located root."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.dom.tree import TreeNode
from src.extraction.classifier import MAX_NAME_LENGTH, clean, extract_name, failed_rule
from src.extraction.models import RawCandidate
from src.extraction.participants import ParticipantSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HarvestPlan:
    """How to harvest one kind of root.

    ``item_selectors`` are tried in order and every match goes through
    ``extract_name``.  If none of them yields a name, every descendant with at
    most ``leaf_child_limit`` element children is classified by its text.
    Text nodes are walked either always or only when nothing else worked.
    """

    name: str
    item_selectors: tuple[str, ...]
    leaf_child_limit: int = 2
    always_walk_text: bool = False


LIST_PLAN = HarvestPlan(
    name="participants_list",
    item_selectors=(
        '[role="listitem"]',
        "li",
        "div[data-participant-id]",
        "div[data-self-name]",
        ".participant-item",
        "div:not(:has(div))",
        "span:not(:has(span))",
    ),
    leaf_child_limit=2,
)

SECTION_PLAN = HarvestPlan(
    name="contributors_section",
    item_selectors=(
        '[role="listitem"]',
        "[data-participant-id]",
        "div[data-self-name]",
        "span[data-self-name]",
        "div:not(:has(*))",
        "span:not(:has(*))",
    ),
    leaf_child_limit=2,
    always_walk_text=True,
)

PANEL_PLAN = HarvestPlan(
    name="generic_panel",
    item_selectors=(
        '[role="listitem"]',
        "[data-participant-id]",
        "[data-self-name]",
        ".participant-name",
        ".name",
    ),
    # Panels hold more wrapper markup than lists; accept slightly larger leaves
    leaf_child_limit=3,
)


def accept_candidate(candidate: RawCandidate, participants: ParticipantSet) -> bool:
    """Validate-then-clean a raw candidate and add it; return True if it was new."""
    text = candidate.text.strip()
    if not text:
        return False

    rule = failed_rule(text)
    if rule is not None:
        logger.debug("Rejected %r from %s (rule: %s)", text, candidate.source, rule)
        return False

    return participants.add(clean(text))


def harvest_selectors(
    root: TreeNode,
    selectors: tuple[str, ...],
    participants: ParticipantSet,
) -> int:
    """Run ``extract_name`` over every match of *selectors*; return names accepted.

    A name that is already in the set still counts as accepted: it proves the
    selector hit a participant row.
    """
    accepted = 0
    for selector in selectors:
        matches = root.select(selector)
        logger.debug("Selector %s matched %d elements", selector, len(matches))
        for node in matches:
            name = extract_name(node)
            if name is None:
                continue
            if participants.add(name) or name in participants:
                accepted += 1
    return accepted


def harvest_leaf_elements(root: TreeNode, participants: ParticipantSet, child_limit: int) -> int:
    """Classify the text of every descendant that looks like a label, not a container."""
    accepted = 0
    for node in root.descendants():
        try:
            if len(node.children) > child_limit:
                continue
            text = node.text.strip()
        except Exception:
            logger.debug("Unreadable node skipped: %r", node, exc_info=True)
            continue
        if not 2 < len(text) < MAX_NAME_LENGTH:
            continue
        if accept_candidate(RawCandidate(node, text, "leaf_elements"), participants):
            accepted += 1
    return accepted


def harvest_text_nodes(root: TreeNode, participants: ParticipantSet) -> int:
    """Classify every text node under *root*, ignoring element structure.

    Recovers names whose element also wraps badges or icons, so the element's
    full text never validates on its own.
    """
    accepted = 0
    for fragment in root.text_fragments():
        if accept_candidate(RawCandidate(None, fragment, "text_nodes"), participants):
            accepted += 1
    return accepted


def harvest(root: TreeNode, participants: ParticipantSet, plan: HarvestPlan = LIST_PLAN) -> int:
    """Harvest names from *root* into *participants* following *plan*.

    Returns the number of names newly added to the set.
    """
    before = len(participants)

    found = harvest_selectors(root, plan.item_selectors, participants)
    if not found:
        logger.info("No names from %s selectors, scanning leaf elements", plan.name)
        found = harvest_leaf_elements(root, participants, plan.leaf_child_limit)

    if plan.always_walk_text or not found:
        harvest_text_nodes(root, participants)

    added = len(participants) - before
    logger.info("Harvested %d new names with %s plan", added, plan.name)
    return added

"""Extraction pipeline configuration: strategy enums and ExtractionConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class LocatorStrategyName(str, Enum):
    """Root-locating strategies, in the order the locator tries them."""

    STRUCTURAL_MATCH = "structural_match"
    HEADING_HEURISTIC = "heading_heuristic"
    GENERIC_PANEL = "generic_panel"


class ProbeName(str, Enum):
    """Document-wide passes that run regardless of the located root."""

    VIDEO_TILES = "video_tiles"
    ATTRIBUTE_SCAN = "attribute_scan"


DEFAULT_LOCATOR_ORDER: tuple[LocatorStrategyName, ...] = (
    LocatorStrategyName.STRUCTURAL_MATCH,
    LocatorStrategyName.HEADING_HEURISTIC,
    LocatorStrategyName.GENERIC_PANEL,
)

DEFAULT_PROBES: tuple[ProbeName, ...] = (
    ProbeName.VIDEO_TILES,
    ProbeName.ATTRIBUTE_SCAN,
)


@dataclass(frozen=True)
class ExtractionConfig:
    """Immutable configuration for one extraction pass.

    Defaults mirror the behaviour the Meet page needs today: all three
    locator strategies in structural, heading, panel order, and both
    document-wide probes.
    """

    locator_order: tuple[LocatorStrategyName, ...] = DEFAULT_LOCATOR_ORDER
    probes: tuple[ProbeName, ...] = field(default=DEFAULT_PROBES)

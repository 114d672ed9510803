"""Data models for participant extraction results."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.dom.tree import TreeNode


@dataclass
class RawCandidate:
    """A piece of text read from the page, before classification."""

    node: TreeNode | None
    text: str
    source: str  # selector or pass that produced it, for debug logs


@dataclass
class PassResult:
    """Outcome of one harvesting pass or probe."""

    name: str  # "structural_match", "video_tiles", ...
    added: int = 0
    root_found: bool = True


@dataclass
class ExtractionReport:
    """Everything one extraction session produced."""

    participants: list[str] = field(default_factory=list)
    root_strategy: str | None = None  # strategy whose root supplied names, if any
    passes: list[PassResult] = field(default_factory=list)

    @property
    def found_any(self) -> bool:
        return bool(self.participants)

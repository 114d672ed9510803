"""Ordered, add-only set of participant names (the deduplicator)."""

from __future__ import annotations

from collections.abc import Iterator

from src.extraction.classifier import clean, is_valid_name


class ParticipantSet:
    """Names in first-seen order, deduplicated by exact string equality.

    Equality is case-sensitive: "Ann O'Neil" and "ann o'neil" are two
    entries.  Every name is cleaned and re-validated
    on the way in, so the set never holds an empty string or a non-name.
    """

    def __init__(self) -> None:
        self._names: dict[str, None] = {}

    def add(self, text: str | None) -> bool:
        """Add *text* if it is a new valid name; return True if it was added."""
        if not text:
            return False
        name = clean(text)
        if not name or name in self._names or not is_valid_name(name):
            return False
        self._names[name] = None
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def to_list(self) -> list[str]:
        return list(self._names)

"""Read-only view of the host page that the extraction pipeline depends on.

The Meet page is owned by Google, not by us: its markup is undocumented and
changes without notice.  Everything in ``src.extraction`` talks to it only
through these two protocols, so a snapshot parsed with BeautifulSoup, a live
browser bridge, or a hand-built fixture can stand in for the real page.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class TreeNode(Protocol):
    """A single element of the host page.

    Patterns are CSS selectors.  ``text`` mirrors the DOM's ``textContent``
    (all descendant text, concatenated as-is); ``rendered_text`` is a
    whitespace-joined rendering used when ``text`` is empty.
    """

    @property
    def tag_name(self) -> str: ...

    @property
    def text(self) -> str: ...

    @property
    def rendered_text(self) -> str: ...

    @property
    def direct_text(self) -> str: ...

    @property
    def children(self) -> list[TreeNode]: ...

    @property
    def parent(self) -> TreeNode | None: ...

    @property
    def next_sibling(self) -> TreeNode | None: ...

    def attribute(self, name: str) -> str | None: ...

    def select(self, pattern: str) -> list[TreeNode]: ...

    def select_one(self, pattern: str) -> TreeNode | None: ...

    def descendants(self) -> list[TreeNode]: ...

    def text_fragments(self) -> list[str]: ...


class Subscription(Protocol):
    """Handle returned by :meth:`HostDocument.subscribe`."""

    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


MutationCallback = Callable[[], None]


class HostDocument(Protocol):
    """The whole host page plus its subtree-mutation notifications."""

    @property
    def url(self) -> str: ...

    @property
    def body(self) -> TreeNode | None: ...

    def subscribe(self, callback: MutationCallback) -> Subscription: ...

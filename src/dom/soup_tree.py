"""BeautifulSoup-backed host document built from HTML snapshots of the Meet page."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction

from src.dom.tree import MutationCallback, TreeNode

logger = logging.getLogger(__name__)

# NavigableString subclasses that are markup, not rendered text
_NON_TEXT_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)


class SoupNode:
    """:class:`TreeNode` over a ``bs4.Tag``.

    Equality is identity of the wrapped tag; bs4's own ``Tag.__eq__``
    compares markup, which would merge two identical participant rows.
    """

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupNode) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"<SoupNode {self._tag.name} {self.text[:40]!r}>"

    @property
    def tag_name(self) -> str:
        return self._tag.name or ""

    @property
    def text(self) -> str:
        return self._tag.get_text()

    @property
    def rendered_text(self) -> str:
        return self._tag.get_text(" ", strip=True)

    @property
    def direct_text(self) -> str:
        parts = [
            str(child)
            for child in self._tag.children
            if isinstance(child, NavigableString) and not isinstance(child, _NON_TEXT_STRINGS)
        ]
        return "".join(parts).strip()

    @property
    def children(self) -> list[TreeNode]:
        return [SoupNode(child) for child in self._tag.find_all(True, recursive=False)]

    @property
    def parent(self) -> TreeNode | None:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return SoupNode(parent)

    @property
    def next_sibling(self) -> TreeNode | None:
        sibling = self._tag.find_next_sibling(True)
        return SoupNode(sibling) if isinstance(sibling, Tag) else None

    def attribute(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        # Multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def select(self, pattern: str) -> list[TreeNode]:
        return [SoupNode(tag) for tag in self._tag.select(pattern)]

    def select_one(self, pattern: str) -> TreeNode | None:
        tag = self._tag.select_one(pattern)
        return SoupNode(tag) if tag is not None else None

    def descendants(self) -> list[TreeNode]:
        return [SoupNode(tag) for tag in self._tag.find_all(True)]

    def text_fragments(self) -> list[str]:
        return [
            str(s)
            for s in self._tag.find_all(string=True)
            if not isinstance(s, _NON_TEXT_STRINGS)
        ]


class SoupSubscription:
    """Registration of one mutation callback on a :class:`SoupDocument`."""

    def __init__(self, document: SoupDocument, callback: MutationCallback) -> None:
        self._document = document
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._document._remove(self)


class SoupDocument:
    """:class:`HostDocument` holding the latest HTML snapshot of the page.

    Every :meth:`load` replaces the parsed tree and counts as one subtree
    mutation: all active subscriptions are called once, in registration order.
    """

    def __init__(self, html: str | None = None, url: str = "", parser: str = "html.parser") -> None:
        self._parser = parser
        self._url = url
        self._soup: BeautifulSoup | None = None
        self._subscriptions: list[SoupSubscription] = []
        if html is not None:
            self._soup = BeautifulSoup(html, parser)

    @property
    def url(self) -> str:
        return self._url

    @property
    def loaded(self) -> bool:
        return self._soup is not None

    @property
    def body(self) -> TreeNode | None:
        if self._soup is None:
            return None
        # Fragments parsed with html.parser have no <body>; query from the root
        root = self._soup.body or self._soup
        return SoupNode(root)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: MutationCallback) -> SoupSubscription:
        subscription = SoupSubscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def load(self, html: str, url: str | None = None) -> None:
        """Replace the document with a new snapshot and notify subscribers."""
        self._soup = BeautifulSoup(html, self._parser)
        if url is not None:
            self._url = url
        self.notify()

    def notify(self) -> None:
        """Deliver one mutation notification to every active subscription."""
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                subscription.callback()
            except Exception:
                logger.exception("Mutation callback failed")

    def _remove(self, subscription: SoupSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

"""Tests for the BeautifulSoup host document and its mutation subscriptions."""

from __future__ import annotations

from src.dom.soup_tree import SoupDocument

PAGE = """
<html><body>
<div id="tile" class="tile big">Kim Park<span>Presenting</span><!-- badge --></div>
<div id="next"><p>One</p><p>Two</p></div>
</body></html>
"""


class TestSoupNode:
    def test_body_and_children(self) -> None:
        body = SoupDocument(PAGE).body
        assert body is not None
        assert body.tag_name == "body"
        assert [c.attribute("id") for c in body.children] == ["tile", "next"]

    def test_text_variants(self) -> None:
        body = SoupDocument(PAGE).body
        assert body is not None
        tile = body.select_one("#tile")
        assert tile is not None
        assert tile.text == "Kim ParkPresenting"
        assert tile.rendered_text == "Kim Park Presenting"
        assert tile.direct_text == "Kim Park"

    def test_multi_valued_attribute_joined(self) -> None:
        body = SoupDocument(PAGE).body
        assert body is not None
        tile = body.select_one("#tile")
        assert tile is not None
        assert tile.attribute("class") == "tile big"
        assert tile.attribute("data-missing") is None

    def test_navigation(self) -> None:
        body = SoupDocument(PAGE).body
        assert body is not None
        tile = body.select_one("#tile")
        assert tile is not None
        nxt = tile.next_sibling
        assert nxt is not None and nxt.attribute("id") == "next"
        assert nxt.next_sibling is None
        assert tile.parent == body
        assert body.parent is not None  # <html>
        assert body.parent.parent is None  # the document itself is not a node

    def test_descendants_and_fragments(self) -> None:
        body = SoupDocument(PAGE).body
        assert body is not None
        nxt = body.select_one("#next")
        assert nxt is not None
        assert [d.text for d in nxt.descendants()] == ["One", "Two"]
        assert [f for f in body.text_fragments() if f.strip()] == [
            "Kim Park",
            "Presenting",
            "One",
            "Two",
        ]

    def test_identity_equality(self) -> None:
        doc = SoupDocument("<div><p>Same</p><p>Same</p></div>")
        body = doc.body
        assert body is not None
        first, second = body.select("p")
        assert first != second
        assert first == body.select("p")[0]
        assert len({first, second, body.select("p")[0]}) == 2

    def test_leaf_selectors(self) -> None:
        doc = SoupDocument("<div><div>Outer<div>Inner</div></div><span>Leaf</span></div>")
        body = doc.body
        assert body is not None
        assert [n.text for n in body.select("div:not(:has(div))")] == ["Inner"]


class TestSoupDocument:
    def test_unloaded_document_has_no_body(self) -> None:
        doc = SoupDocument()
        assert not doc.loaded
        assert doc.body is None

    def test_load_replaces_and_notifies(self) -> None:
        doc = SoupDocument("<p>Old</p>", url="https://meet.google.com/a")
        calls: list[int] = []
        doc.subscribe(lambda: calls.append(1))

        doc.load("<p>New</p>")

        assert calls == [1]
        assert doc.body is not None and doc.body.text == "New"
        assert doc.url == "https://meet.google.com/a"

    def test_cancelled_subscription_not_called(self) -> None:
        doc = SoupDocument("<p>x</p>")
        calls: list[int] = []
        sub = doc.subscribe(lambda: calls.append(1))
        assert doc.subscriber_count == 1

        sub.cancel()
        sub.cancel()
        doc.notify()

        assert calls == []
        assert not sub.active
        assert doc.subscriber_count == 0

    def test_failing_callback_does_not_block_others(self) -> None:
        doc = SoupDocument("<p>x</p>")
        calls: list[str] = []

        def broken() -> None:
            raise RuntimeError("boom")

        doc.subscribe(broken)
        doc.subscribe(lambda: calls.append("ok"))
        doc.notify()

        assert calls == ["ok"]

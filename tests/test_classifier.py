"""Tests for name classification, cleaning, and per-node name extraction."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from src.dom.soup_tree import SoupDocument
from src.extraction.classifier import (
    NAME_RULES,
    UI_VOCABULARY,
    clean,
    extract_name,
    failed_rule,
    is_ui_text,
    is_valid_name,
)
from src.extraction.participants import ParticipantSet


def _node(html: str):
    body = SoupDocument(html).body
    assert body is not None
    node = body.children[0]
    return node


# ---------------------------------------------------------------------------
# is_valid_name
# ---------------------------------------------------------------------------


class TestIsValidName:
    @pytest.mark.parametrize(
        "text",
        [
            "Alice Johnson",
            "Bob Smith (You)",
            "Dana Lee (Host)",
            "Mary-Jane O'Brien",
            "J. R. Tolkien",
            "Sam",
            "Ada Lovelace (Guest)",
        ],
    )
    def test_accepts_names(self, text: str) -> None:
        assert is_valid_name(text)

    @pytest.mark.parametrize("entry", UI_VOCABULARY)
    def test_rejects_any_ui_vocabulary_entry(self, entry: str) -> None:
        """Name-shaped text around a UI word is still rejected."""
        assert failed_rule(f"Anna {entry} Lee") == "ui_vocabulary"
        assert failed_rule(f"Anna {entry.upper()} Lee") == "ui_vocabulary"

    @pytest.mark.parametrize("code", ["erw-zqba-yqt", "abc-defg-hij"])
    def test_rejects_meeting_codes(self, code: str) -> None:
        assert failed_rule(code) == "meeting_code"

    def test_meeting_code_shape_must_be_exact(self) -> None:
        assert failed_rule("ab-defg-hij") != "meeting_code"

    def test_single_word_rule(self) -> None:
        assert not is_valid_name("sam")
        assert is_valid_name("Sam")
        assert not is_valid_name("SAM")
        assert failed_rule("SAM") == "single_word"

    def test_single_word_needs_three_letters(self) -> None:
        assert failed_rule("Al") == "single_word"

    def test_multi_word_skips_single_word_rule(self) -> None:
        assert is_valid_name("al green")

    @pytest.mark.parametrize("text", ["", None, "A"])
    def test_rejects_too_short(self, text: str | None) -> None:
        assert not is_valid_name(text)
        assert failed_rule(text) == "length"

    def test_rejects_too_long(self) -> None:
        assert failed_rule("Abc " * 26) == "length"

    @pytest.mark.parametrize("text", ["R2 Detoo", "Alice_Johnson", "Bob (Admin)", "Zoë Kravitz"])
    def test_rejects_characters_outside_class(self, text: str) -> None:
        assert failed_rule(text) == "character_class"

    def test_wrong_case_suffix_passes_character_class(self) -> None:
        assert is_valid_name("Dana Lee (host)")

    def test_diagnostic_phrases_rejected(self) -> None:
        rule = {r.name: r for r in NAME_RULES}["diagnostic_phrase"]
        assert not rule.check("Gemini isn't taking notes")
        assert not rule.check("Waiting to join")
        assert not rule.check("Meet - erw-zqba-yqt")
        assert rule.check("Alice Johnson")

    def test_rule_table_is_enumerable(self) -> None:
        assert [r.name for r in NAME_RULES] == [
            "length",
            "character_class",
            "ui_vocabulary",
            "meeting_code",
            "diagnostic_phrase",
            "single_word",
        ]


class TestIsUiText:
    def test_case_insensitive_substring(self) -> None:
        assert is_ui_text("Turn On Captions")
        assert is_ui_text("UNMUTE")

    def test_plain_name(self) -> None:
        assert not is_ui_text("Alice Johnson")


# ---------------------------------------------------------------------------
# clean
# ---------------------------------------------------------------------------


class TestClean:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Dana Lee (Host)", "Dana Lee"),
            ("Bob Smith (You)", "Bob Smith"),
            ("Eve Adams (Guest)", "Eve Adams"),
            ("Ada Lovelace (Presenter)", "Ada Lovelace"),
            ("  Alice Johnson  ", "Alice Johnson"),
            ("3 Alice Johnson", "Alice Johnson"),
            ("1. Carol Davis", "Carol Davis"),
            ("Dana Lee (host)", "Dana Lee (host)"),
        ],
    )
    def test_clean(self, raw: str, expected: str) -> None:
        assert clean(raw) == expected

    def test_strips_only_one_suffix(self) -> None:
        assert clean("Bob (Host) (You)") == "Bob (Host)"

    @pytest.mark.parametrize(
        "text",
        ["Alice Johnson", "Bob Smith (You)", "Dana Lee (Host)", "Dana Lee (host)", "Sam", "J. R. Tolkien"],
    )
    def test_idempotent_for_accepted_names(self, text: str) -> None:
        assert is_valid_name(text)
        assert clean(clean(text)) == clean(text)


# ---------------------------------------------------------------------------
# extract_name
# ---------------------------------------------------------------------------


class TestExtractName:
    def test_self_name_attribute_wins(self) -> None:
        node = _node('<div data-self-name="Eve Adams"><span>Eve A.</span><span>Host</span></div>')
        assert extract_name(node) == "Eve Adams"

    def test_full_text(self) -> None:
        assert extract_name(_node("<div>  Bob Smith (You) </div>")) == "Bob Smith"

    def test_video_aria_label(self) -> None:
        node = _node("<div aria-label=\"John Doe's Video feed\"></div>")
        assert extract_name(node) is None  # label must say lowercase "video"
        node = _node("<div aria-label=\"John Doe's video\"></div>")
        assert extract_name(node) == "John Doe"

    def test_aria_label_without_video_ignored(self) -> None:
        assert extract_name(_node('<div aria-label="Ivy Chen"></div>')) is None

    def test_ui_text_rejected(self) -> None:
        assert extract_name(_node("<div>Turn off microphone</div>")) is None

    def test_no_letters_rejected(self) -> None:
        assert extract_name(_node("<div>1234</div>")) is None
        assert extract_name(_node("<div>-- .</div>")) is None

    def test_too_long_rejected(self) -> None:
        assert extract_name(_node(f"<div>{'Abc ' * 15}</div>")) is None

    def test_loose_guard_lets_lowercase_through(self) -> None:
        """The per-node guard is looser than is_valid_name; the set re-validates."""
        assert extract_name(_node("<div>sam</div>")) == "sam"
        participants = ParticipantSet()
        assert not participants.add("sam")
        assert len(participants) == 0

    def test_unreadable_node_returns_none(self) -> None:
        node = MagicMock()
        node.attribute.side_effect = RuntimeError("detached")
        assert extract_name(node) is None


# ---------------------------------------------------------------------------
# ParticipantSet
# ---------------------------------------------------------------------------


class TestParticipantSet:
    def test_deduplicates_after_cleaning(self) -> None:
        participants = ParticipantSet()
        assert participants.add("Alice Johnson")
        assert not participants.add("Alice Johnson (Host)")
        assert participants.to_list() == ["Alice Johnson"]

    def test_first_seen_order(self) -> None:
        participants = ParticipantSet()
        for name in ["Carol Davis", "Alice Johnson", "Bob Smith", "Alice Johnson"]:
            participants.add(name)
        assert list(participants) == ["Carol Davis", "Alice Johnson", "Bob Smith"]

    def test_never_holds_invalid_names(self) -> None:
        participants = ParticipantSet()
        for text in ["", None, "  ", "erw-zqba-yqt", "mute", "SAM", "(You)"]:
            assert not participants.add(text)
        assert len(participants) == 0

    def test_near_duplicates_stay_distinct(self) -> None:
        participants = ParticipantSet()
        participants.add("Ann O'Neil")
        participants.add("Ann O’Neil")  # curly apostrophe fails the character class
        participants.add("ann o'neil")
        assert participants.to_list() == ["Ann O'Neil", "ann o'neil"]

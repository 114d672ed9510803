"""Name classification: decide whether free text from the Meet UI is a person's name."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from src.dom.tree import TreeNode

logger = logging.getLogger(__name__)

ANNOTATION_SUFFIXES: tuple[str, ...] = ("(You)", "(Host)", "(Guest)", "(Presenter)")

# Interface chrome that shows up next to names in the People panel and tiles.
# Matched as case-insensitive substrings, so short entries ("ok", "end", "pin")
# also reject real names that contain them.
UI_VOCABULARY: tuple[str, ...] = (
    "join", "leave", "mute", "unmute", "camera", "mic", "microphone",
    "chat", "share", "screen", "record", "end", "call", "meeting",
    "participants", "people", "more", "options", "settings", "help",
    "turn on", "turn off", "enable", "disable", "cancel", "ok", "done",
    "video", "audio", "present", "stop", "start", "pause", "resume",
    "pin", "devices", "reframe", "background", "effects", "raising",
    "hand", "jump", "bottom", "back", "close", "search", "waiting",
    "pair", "contributors", "reducing", "noise", "mood", "info", "apps",
    "alarm", "gemini", "notes", "taking", "meet", "captions", "live",
    "transcription", "breakout", "rooms", "polls", "whiteboard", "jamboard",
)  # fmt: skip

DIAGNOSTIC_PHRASES: tuple[str, ...] = ("isn't taking notes", "Waiting to", "Meet -")

_NAME_CHARS_RE = re.compile(
    r"^[a-zA-Z\s\-'.]+(\s\((?i:you|host|guest|presenter)\))?$"
)
_MEETING_CODE_RE = re.compile(r"^[a-z]{3}-[a-z]{4}-[a-z]{3}$")
_SINGLE_WORD_RE = re.compile(r"^[A-Z][a-z]+$")
_SUFFIX_RE = re.compile(r"\s*(?:" + "|".join(re.escape(s) for s in ANNOTATION_SUFFIXES) + r")$")
# "3 Alice", "12. Bob": one list index, with or without its period
_LIST_INDEX_RE = re.compile(r"^\d+\.?\s*")
_VIDEO_LABEL_RE = re.compile(r"'s video.*$", re.IGNORECASE)
_HAS_LETTER_RE = re.compile(r"[a-zA-Z]")

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MAX_EXTRACTED_LENGTH = 50


def is_ui_text(text: str) -> bool:
    """Return True if *text* contains any UI vocabulary entry (case-insensitive)."""
    lower = text.lower()
    return any(entry in lower for entry in UI_VOCABULARY)


def _has_valid_length(text: str) -> bool:
    return MIN_NAME_LENGTH <= len(text) <= MAX_NAME_LENGTH


def _has_name_characters(text: str) -> bool:
    return _NAME_CHARS_RE.match(text) is not None


def _is_not_ui_text(text: str) -> bool:
    return not is_ui_text(text)


def _is_not_meeting_code(text: str) -> bool:
    return _MEETING_CODE_RE.match(text) is None


def _has_no_diagnostic_phrase(text: str) -> bool:
    return not any(phrase in text for phrase in DIAGNOSTIC_PHRASES)


def _passes_single_word_rule(text: str) -> bool:
    # Multi-word strings are exempt
    stripped = text.strip()
    if len(stripped.split()) != 1:
        return True
    return len(stripped) >= 3 and _SINGLE_WORD_RE.match(stripped) is not None


@dataclass(frozen=True)
class NameRule:
    """A named acceptance rule; ``check`` returns True when the text passes."""

    name: str
    check: Callable[[str], bool]


NAME_RULES: tuple[NameRule, ...] = (
    NameRule("length", _has_valid_length),
    NameRule("character_class", _has_name_characters),
    NameRule("ui_vocabulary", _is_not_ui_text),
    NameRule("meeting_code", _is_not_meeting_code),
    NameRule("diagnostic_phrase", _has_no_diagnostic_phrase),
    NameRule("single_word", _passes_single_word_rule),
)


def failed_rule(text: str | None) -> str | None:
    """Return the name of the first rule *text* fails, or None if it is a valid name."""
    if not text:
        return "length"
    for rule in NAME_RULES:
        if not rule.check(text):
            return rule.name
    return None


def is_valid_name(text: str | None) -> bool:
    """Return True if *text* looks like a participant's display name."""
    return failed_rule(text) is None


def clean(text: str) -> str:
    """Strip one annotation suffix and one leading list index, then trim.

    Idempotent on anything that passes :func:`is_valid_name`; a string stacking
    two suffixes or two indices loses only the outer one per call.
    """
    text = text.strip()
    text = _SUFFIX_RE.sub("", text)
    text = _LIST_INDEX_RE.sub("", text)
    return text.strip()


def _passes_loose_guard(name: str) -> bool:
    if not MIN_NAME_LENGTH <= len(name) <= MAX_EXTRACTED_LENGTH:
        return False
    if not _HAS_LETTER_RE.search(name):
        return False
    return not is_ui_text(name)


def _raw_name(node: TreeNode) -> str:
    self_name = node.attribute("data-self-name")
    if self_name:
        return self_name

    text = node.text.strip()
    if text:
        return text

    rendered = node.rendered_text.strip()
    if rendered:
        return rendered

    # Tiles label their <video> wrapper "Jane Doe's video"
    label = node.attribute("aria-label")
    if label and "video" in label:
        return _VIDEO_LABEL_RE.sub("", label).strip()

    return ""


def extract_name(node: TreeNode) -> str | None:
    """Read the most reliable name source of *node* and return it cleaned.

    Sources, first non-empty wins: the ``data-self-name`` attribute, the full
    text, the rendered text, then a ``"<name>'s video"`` aria-label.  Returns
    None when nothing name-like is found or the node cannot be read.
    """
    try:
        raw = _raw_name(node)
    except Exception:
        logger.debug("Unreadable node skipped: %r", node, exc_info=True)
        return None

    if not raw:
        return None

    name = clean(raw)
    if not _passes_loose_guard(name):
        return None
    return name

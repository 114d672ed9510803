"""HTTP client wrapper for the Meet Roster FastAPI backend."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)

API_URL = os.getenv("API_URL", "http://localhost:8000")

NO_PARTICIPANTS_HINT = "No participants found. Make sure the People panel is open in Meet."


class ChannelUnavailableError(RuntimeError):
    """The service (or the Meet page behind it) could not answer the request.

    Distinct from an empty participant list, which is a successful answer.
    """


def _send_message(message_type: str, base_url: str, timeout: float) -> dict[str, Any]:
    try:
        r = httpx.post(f"{base_url}/api/messages", json={"type": message_type}, timeout=timeout)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPStatusError as e:
        detail = e.response.text
        logger.error("%s failed: %s %s", message_type, e.response.status_code, detail)
        raise ChannelUnavailableError(f"{message_type} failed: {detail}") from e
    except httpx.HTTPError as e:
        logger.error("%s failed: %s", message_type, e)
        raise ChannelUnavailableError(f"{message_type} failed: {e}") from e


def check_health(base_url: str = API_URL) -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{base_url}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def get_participants(base_url: str = API_URL, timeout: float = 10.0) -> list[str]:
    """Ask for a fresh one-shot extraction of the current participants."""
    data = _send_message("GET_PARTICIPANTS", base_url, timeout)
    participants = data.get("participants")
    if participants is None:
        raise ChannelUnavailableError("No participants in response")
    return list(participants)


def start_monitoring(base_url: str = API_URL, timeout: float = 10.0) -> bool:
    """Start the change monitor; returns the service's success flag."""
    return bool(_send_message("START_MONITORING", base_url, timeout).get("success"))


def stop_monitoring(base_url: str = API_URL, timeout: float = 10.0) -> bool:
    """Stop the change monitor; returns the service's success flag."""
    return bool(_send_message("STOP_MONITORING", base_url, timeout).get("success"))


def send_snapshot(url: str, html: str, base_url: str = API_URL, timeout: float = 30.0) -> dict:  # type: ignore[type-arg]
    """Push an HTML snapshot of the Meet page to the service."""
    try:
        r = httpx.post(
            f"{base_url}/api/document",
            json={"url": url, "html": html},
            timeout=timeout,
        )
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        logger.error("Snapshot upload failed: %s", e)
        raise ChannelUnavailableError(f"Snapshot upload failed: {e}") from e


def summarize_participants(participants: list[str]) -> str:
    """One-line status for a finished extraction, as shown next to the list."""
    if not participants:
        return NO_PARTICIPANTS_HINT
    noun = "participant" if len(participants) == 1 else "participants"
    return f"Found {len(participants)} {noun}"

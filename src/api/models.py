"""Pydantic request/response schemas for the Meet Roster API."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from src.monitoring.monitor import MonitorState


class MessageType(str, Enum):
    """Requests accepted on the control channel."""

    GET_PARTICIPANTS = "GET_PARTICIPANTS"
    START_MONITORING = "START_MONITORING"
    STOP_MONITORING = "STOP_MONITORING"


class MessageRequest(BaseModel):
    """Request body for the /api/messages endpoint."""

    type: MessageType


class ParticipantsResponse(BaseModel):
    """Names from a one-shot extraction, first-seen order."""

    participants: list[str]


class SuccessResponse(BaseModel):
    """Acknowledgement of a monitoring start/stop."""

    success: bool = True


class MonitoringStatus(BaseModel):
    """Current monitor lifecycle and the last published participants."""

    state: MonitorState
    in_flight: bool
    sessions_run: int
    attached: bool
    url: str | None = None
    participants: list[str] | None = None


class SnapshotRequest(BaseModel):
    """An HTML rendering of the host page pushed by the page relay."""

    url: str
    html: str


class SnapshotResponse(BaseModel):
    """Response body for the /api/document endpoint."""

    success: bool = True
    url: str
    monitoring: MonitorState

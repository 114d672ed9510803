"""Participant endpoints: the message contract, REST aliases, and the push stream."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect

from src.api.models import (
    MessageRequest,
    MessageType,
    MonitoringStatus,
    ParticipantsResponse,
    SuccessResponse,
)
from src.api.state import NoHostPageError, RosterService, get_roster

logger = logging.getLogger(__name__)

router = APIRouter()

Roster = Annotated[RosterService, Depends(get_roster)]


def _fetch_participants(roster: RosterService) -> ParticipantsResponse:
    try:
        participants = roster.get_participants()
    except NoHostPageError as exc:
        # No page is a 503, never an empty participant list
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return ParticipantsResponse(participants=participants)


def _start(roster: RosterService) -> SuccessResponse:
    try:
        roster.start_monitoring()
    except NoHostPageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return SuccessResponse()


def _stop(roster: RosterService) -> SuccessResponse:
    roster.stop_monitoring()
    return SuccessResponse()


@router.post("/api/messages", response_model=ParticipantsResponse | SuccessResponse)
async def handle_message(
    message: MessageRequest, roster: Roster
) -> ParticipantsResponse | SuccessResponse:
    """Dispatch a control-channel message.

    ``GET_PARTICIPANTS`` runs a fresh one-shot extraction; ``START_MONITORING``
    and ``STOP_MONITORING`` move the monitor between idle and observing.
    """
    if message.type is MessageType.GET_PARTICIPANTS:
        return _fetch_participants(roster)
    if message.type is MessageType.START_MONITORING:
        return _start(roster)
    return _stop(roster)


@router.get("/api/participants", response_model=ParticipantsResponse)
async def get_participants(roster: Roster) -> ParticipantsResponse:
    """One-shot extraction of the current participants."""
    return _fetch_participants(roster)


@router.post("/api/monitoring/start", response_model=SuccessResponse)
async def start_monitoring(roster: Roster) -> SuccessResponse:
    return _start(roster)


@router.post("/api/monitoring/stop", response_model=SuccessResponse)
async def stop_monitoring(roster: Roster) -> SuccessResponse:
    return _stop(roster)


@router.get("/api/monitoring", response_model=MonitoringStatus)
async def monitoring_status(roster: Roster) -> MonitoringStatus:
    """Monitor lifecycle plus the most recently published participants."""
    monitor = roster.monitor
    return MonitoringStatus(
        state=monitor.state,
        in_flight=monitor.in_flight,
        sessions_run=monitor.sessions_run,
        attached=roster.attached,
        url=roster.document.url or None,
        participants=roster.notifier.last_participants,
    )


@router.websocket("/api/participants/stream")
async def participants_stream(websocket: WebSocket, roster: Roster) -> None:
    """Push ``PARTICIPANTS_UPDATED`` after every monitor-triggered extraction."""
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    # Sessions may publish from another thread
    def enqueue(message: dict[str, Any]) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, message)

    async def forward() -> None:
        while True:
            await websocket.send_json(await queue.get())

    # Subscribe before accepting so nothing published after connect is missed
    unsubscribe = roster.notifier.subscribe(enqueue)
    await websocket.accept()
    sender = asyncio.create_task(forward())
    try:
        while True:
            # Nothing is expected from the client; this only detects disconnects
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Participants stream client disconnected")
    finally:
        unsubscribe()
        sender.cancel()

"""Snapshot intake: the page relay pushes the Meet DOM here on every change."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from src.api.models import SnapshotRequest, SnapshotResponse
from src.api.state import RosterService, get_roster

router = APIRouter()


@router.post("/api/document", response_model=SnapshotResponse)
async def push_snapshot(
    snapshot: SnapshotRequest,
    roster: Annotated[RosterService, Depends(get_roster)],
) -> SnapshotResponse:
    """Load or replace the host page and notify the monitor of the mutation.

    The first snapshot of a ``meet.google.com`` page schedules monitoring to
    start once the page has had time to settle.
    """
    limit = roster.settings.max_snapshot_bytes
    if len(snapshot.html.encode("utf-8")) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Snapshot too large. Maximum size is {limit // (1024 * 1024)} MB.",
        )

    roster.load_snapshot(snapshot.url, snapshot.html)
    return SnapshotResponse(url=snapshot.url, monitoring=roster.monitor.state)

"""Shared fixtures: a manual clock for the monitor, documents, and the API client."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.api.state import RosterService, get_roster
from src.dom.soup_tree import SoupDocument
from tests.pages import MEET_URL
from tests.scheduling import ManualScheduler


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_document() -> Callable[..., SoupDocument]:
    def _make(html: str, url: str = MEET_URL) -> SoupDocument:
        return SoupDocument(html, url=url)

    return _make


@pytest.fixture
def roster(scheduler: ManualScheduler) -> RosterService:
    return RosterService(scheduler=scheduler)


@pytest.fixture
def client(roster: RosterService) -> Iterator[TestClient]:
    app.dependency_overrides[get_roster] = lambda: roster
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

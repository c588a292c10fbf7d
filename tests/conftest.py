"""Shared fixtures: in-memory store, app wired to it, HTTP and sync clients."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from songdeck.api.app import create_app
from songdeck.api.state import AppState, get_state
from songdeck.client.api import SongsApiClient
from songdeck.client.orchestrator import SyncOrchestrator
from songdeck.core.song_service import SongService
from songdeck.core.song_store import SongStore
from songdeck.core.statistics import StatisticsService
from songdeck.core.validation import validate_song_payload


def make_fields(
    title: str = "A",
    artist: str = "X",
    album: str = "M",
    genre: str = "Rock",
):
    return validate_song_payload(
        {"title": title, "artist": artist, "album": album, "genre": genre}
    )


@pytest.fixture
def store() -> SongStore:
    return SongStore(None)


@pytest.fixture
def service(store: SongStore) -> SongService:
    return SongService(store)


@pytest.fixture
def statistics_service(store: SongStore) -> StatisticsService:
    return StatisticsService(store)


@pytest.fixture
def broken_path(tmp_path: Path) -> Path:
    """A store path whose parent is a regular file, so every write fails."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    return blocker / "songs.json"


@pytest.fixture
def app_state() -> AppState:
    return AppState(songs_path=None)


@pytest.fixture
def app(app_state: AppState) -> FastAPI:
    app = create_app()
    app.dependency_overrides[get_state] = lambda: app_state
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def api(app: FastAPI) -> SongsApiClient:
    api = SongsApiClient("http://test", transport=ASGITransport(app=app))
    yield api
    await api.aclose()


@pytest.fixture
async def orchestrator(api: SongsApiClient) -> SyncOrchestrator:
    orch = SyncOrchestrator(api)
    yield orch
    await orch.wait_idle()

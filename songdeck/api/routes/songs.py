"""Song CRUD and genre filter endpoints."""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from songdeck.api.state import AppState, get_state
from songdeck.core.song_service import ServiceResponse

router = APIRouter()


def _respond(result: ServiceResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get("")
def list_songs(state: AppState = Depends(get_state)):
    """All songs, newest first."""
    return _respond(state.song_service.list_songs())


@router.post("")
def create_song(
    payload: Any = Body(None),
    state: AppState = Depends(get_state),
):
    """Create a song from {title, artist, album, genre}."""
    return _respond(state.song_service.create_song(payload))


# Declared before /{song_id} so "filter" is never taken for an id
@router.get("/filter")
def filter_songs(
    genre: Optional[str] = None,
    state: AppState = Depends(get_state),
):
    """Songs whose genre contains ?genre= (case-insensitive), ordered by title."""
    return _respond(state.song_service.filter_songs(genre))


@router.get("/{song_id}")
def get_song(song_id: str, state: AppState = Depends(get_state)):
    return _respond(state.song_service.get_song(song_id))


@router.put("/{song_id}")
def update_song(
    song_id: str,
    payload: Any = Body(None),
    state: AppState = Depends(get_state),
):
    """Replace all four fields of a song."""
    return _respond(state.song_service.update_song(song_id, payload))


@router.delete("/{song_id}")
def delete_song(song_id: str, state: AppState = Depends(get_state)):
    """Delete a song; responds with the removed record."""
    return _respond(state.song_service.delete_song(song_id))

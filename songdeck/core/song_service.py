"""Song CRUD: validation + store, answered as uniform response envelopes."""
import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from songdeck.core.errors import (
    InvalidSongIdError,
    MissingParameterError,
    SongdeckError,
    SongNotFoundError,
    StorageError,
)
from songdeck.core.song_store import SongStore
from songdeck.core.validation import is_valid_song_id, validate_song_payload
from songdeck.models.song import Song

logger = logging.getLogger(__name__)


@dataclass
class ServiceResponse:
    """HTTP-equivalent status plus the JSON body sent to the client."""
    status_code: int
    body: dict

    @property
    def success(self) -> bool:
        return bool(self.body.get("success"))

    @property
    def data(self) -> Any:
        return self.body.get("data")

    @property
    def error_code(self) -> Optional[str]:
        return (self.body.get("error") or {}).get("code")


def ok(data: Any, message: str, status_code: int = 200, count: Optional[int] = None) -> ServiceResponse:
    body = {"success": True, "data": data, "message": message}
    if count is not None:
        body["count"] = count
    return ServiceResponse(status_code, body)


def fail(error: SongdeckError) -> ServiceResponse:
    return ServiceResponse(error.status_code, {"success": False, "error": error.to_dict()})


def internal_error(message: str) -> ServiceResponse:
    return ServiceResponse(
        500, {"success": False, "error": {"message": message, "code": "INTERNAL_ERROR"}}
    )


def guarded(failure_message: str):
    """Run an operation; domain errors become envelopes, storage errors become INTERNAL_ERROR."""

    def decorator(fn: Callable[..., ServiceResponse]) -> Callable[..., ServiceResponse]:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs) -> ServiceResponse:
            try:
                return fn(*args, **kwargs)
            except StorageError:
                logger.exception("%s: storage failure", failure_message)
                return internal_error(failure_message)
            except SongdeckError as e:
                return fail(e)

        return wrapper

    return decorator


def _songs_data(songs: List[Song]) -> List[dict]:
    return [s.to_dict() for s in songs]


def _require_id(song_id: Any) -> str:
    if not is_valid_song_id(song_id):
        raise InvalidSongIdError()
    return song_id.lower()


class SongService:
    """Create / read / update / delete / filter over a SongStore."""

    def __init__(self, store: SongStore) -> None:
        self._store = store

    @guarded("Failed to create song")
    def create_song(self, payload: Any) -> ServiceResponse:
        fields = validate_song_payload(payload)
        song = self._store.insert(fields)
        logger.info("Created song %s (%s)", song.song_id, song.display_name)
        return ok(song.to_dict(), "Song created successfully", status_code=201)

    @guarded("Failed to retrieve songs")
    def list_songs(self) -> ServiceResponse:
        songs = self._store.find_all()
        message = "Songs retrieved successfully" if songs else "No songs found"
        return ok(_songs_data(songs), message, count=len(songs))

    @guarded("Failed to retrieve song")
    def get_song(self, song_id: Any) -> ServiceResponse:
        song = self._store.find_by_id(_require_id(song_id))
        if song is None:
            raise SongNotFoundError()
        return ok(song.to_dict(), "Song retrieved successfully")

    @guarded("Failed to update song")
    def update_song(self, song_id: Any, payload: Any) -> ServiceResponse:
        song_id = _require_id(song_id)
        fields = validate_song_payload(payload)
        song = self._store.replace(song_id, fields)
        if song is None:
            raise SongNotFoundError()
        logger.info("Updated song %s", song_id)
        return ok(song.to_dict(), "Song updated successfully")

    @guarded("Failed to delete song")
    def delete_song(self, song_id: Any) -> ServiceResponse:
        song = self._store.remove(_require_id(song_id))
        if song is None:
            raise SongNotFoundError()
        logger.info("Deleted song %s", song.song_id)
        return ok(song.to_dict(), "Song deleted successfully")

    @guarded("Failed to filter songs")
    def filter_songs(self, genre: Optional[str]) -> ServiceResponse:
        if genre is None or not genre.strip():
            raise MissingParameterError("Genre query parameter is required")
        genre = genre.strip()
        songs = self._store.find_by_genre(genre)
        message = (
            f"Songs filtered by genre: {genre}" if songs else f"No songs found for genre: {genre}"
        )
        return ok(_songs_data(songs), message, count=len(songs))

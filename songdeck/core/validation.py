"""Field rules for song payloads, applied before anything reaches the store.

``validate_song_payload`` is pure: it takes whatever the client sent (already
JSON-decoded) and returns the trimmed four-field payload, or raises
``SongValidationError`` listing every violation at once. Create and update
use the same rules; there are no partial updates.
"""
import re
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from songdeck.config import (
    ALBUM_MAX_LENGTH,
    ARTIST_MAX_LENGTH,
    GENRE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from songdeck.core.errors import SongValidationError

SONG_FIELDS = ("title", "artist", "album", "genre")

_SONG_ID_REGEX = re.compile(r"^[0-9a-fA-F]{24}$")

# Labels used in messages, e.g. "Artist name cannot be empty"
_FIELD_LABELS = {
    "title": "Song title",
    "artist": "Artist name",
    "album": "Album name",
    "genre": "Genre",
}


class SongFields(BaseModel):
    """Normalized song payload (all fields trimmed, bounded, non-empty)."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    artist: str = Field(min_length=1, max_length=ARTIST_MAX_LENGTH)
    album: str = Field(min_length=1, max_length=ALBUM_MAX_LENGTH)
    genre: str = Field(min_length=1, max_length=GENRE_MAX_LENGTH)


def _message_for(field_name: str, error: dict) -> str:
    label = _FIELD_LABELS.get(field_name, field_name)
    kind = error.get("type", "")
    if kind == "missing":
        return f"{label} is required"
    if kind == "string_too_short":
        return f"{label} cannot be empty"
    if kind == "string_too_long":
        limit = (error.get("ctx") or {}).get("max_length")
        return f"{label} cannot exceed {limit} characters"
    if kind == "string_type":
        return f"{label} must be a string"
    return f"{label} is invalid"


def _details_from(exc: ValidationError) -> List[Dict[str, str]]:
    details = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        field_name = str(loc[0]) if loc else "body"
        details.append({"field": field_name, "message": _message_for(field_name, error)})
    # Keep the declared field order so messages read predictably
    details.sort(key=lambda d: SONG_FIELDS.index(d["field"]) if d["field"] in SONG_FIELDS else len(SONG_FIELDS))
    return details


def validate_song_payload(payload: Any) -> SongFields:
    """Return the trimmed payload or raise SongValidationError with all violations."""
    if not isinstance(payload, dict):
        raise SongValidationError(
            [{"field": "body", "message": "Request body must be a JSON object"}]
        )
    # None counts as absent, not as a wrong type
    candidate = {k: v for k, v in payload.items() if v is not None}
    try:
        return SongFields.model_validate(candidate)
    except ValidationError as exc:
        raise SongValidationError(_details_from(exc)) from None


def is_valid_song_id(song_id: Any) -> bool:
    """True for a 24-character hexadecimal identifier."""
    return isinstance(song_id, str) and bool(_SONG_ID_REGEX.match(song_id))

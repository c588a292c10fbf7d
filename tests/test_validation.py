"""
Tests for songdeck.core.validation.

These tests verify:
- Trimming and normalization of valid payloads
- Every violation is reported, not just the first
- Length bounds apply to the trimmed value
- Identifier syntax checks
"""

from __future__ import annotations

import pytest

from songdeck.core.errors import SongValidationError
from songdeck.core.validation import SongFields, is_valid_song_id, validate_song_payload

VALID = {"title": "Paranoid", "artist": "Black Sabbath", "album": "Paranoid", "genre": "Metal"}


class TestValidSongPayload:
    def test_returns_trimmed_fields(self) -> None:
        fields = validate_song_payload(
            {"title": "  So What ", "artist": "\tMiles Davis", "album": "Kind of Blue  ", "genre": " Jazz"}
        )
        assert isinstance(fields, SongFields)
        assert fields.title == "So What"
        assert fields.artist == "Miles Davis"
        assert fields.album == "Kind of Blue"
        assert fields.genre == "Jazz"

    def test_extra_keys_are_dropped(self) -> None:
        fields = validate_song_payload({**VALID, "rating": 5, "id": "abc"})
        assert fields.model_dump() == VALID

    def test_values_at_the_bound_are_accepted(self) -> None:
        fields = validate_song_payload(
            {"title": "t" * 200, "artist": "a" * 100, "album": "b" * 200, "genre": "g" * 50}
        )
        assert len(fields.genre) == 50

    def test_bound_is_checked_after_trimming(self) -> None:
        fields = validate_song_payload({**VALID, "genre": "  " + "g" * 50 + "  "})
        assert fields.genre == "g" * 50


class TestInvalidSongPayload:
    def test_empty_payload_lists_all_four_fields(self) -> None:
        with pytest.raises(SongValidationError) as exc_info:
            validate_song_payload({})
        err = exc_info.value
        assert err.code == "VALIDATION_ERROR"
        assert err.status_code == 400
        assert err.fields == ["title", "artist", "album", "genre"]
        assert err.details[0]["message"] == "Song title is required"

    def test_whitespace_only_is_empty(self) -> None:
        with pytest.raises(SongValidationError) as exc_info:
            validate_song_payload({**VALID, "artist": "   "})
        assert exc_info.value.details == [
            {"field": "artist", "message": "Artist name cannot be empty"}
        ]

    def test_none_counts_as_missing(self) -> None:
        with pytest.raises(SongValidationError) as exc_info:
            validate_song_payload({**VALID, "album": None})
        assert exc_info.value.details == [{"field": "album", "message": "Album name is required"}]

    def test_too_long_fields(self) -> None:
        with pytest.raises(SongValidationError) as exc_info:
            validate_song_payload({**VALID, "title": "t" * 201, "genre": "g" * 51})
        assert exc_info.value.details == [
            {"field": "title", "message": "Song title cannot exceed 200 characters"},
            {"field": "genre", "message": "Genre cannot exceed 50 characters"},
        ]

    def test_artist_bound_is_100(self) -> None:
        with pytest.raises(SongValidationError) as exc_info:
            validate_song_payload({**VALID, "artist": "a" * 101})
        assert exc_info.value.fields == ["artist"]

    def test_non_string_value(self) -> None:
        with pytest.raises(SongValidationError) as exc_info:
            validate_song_payload({**VALID, "genre": 42})
        assert exc_info.value.details == [{"field": "genre", "message": "Genre must be a string"}]

    @pytest.mark.parametrize("payload", [None, [], "title", 7])
    def test_non_object_body(self, payload) -> None:
        with pytest.raises(SongValidationError) as exc_info:
            validate_song_payload(payload)
        assert exc_info.value.fields == ["body"]

    def test_mixed_violations_all_reported(self) -> None:
        with pytest.raises(SongValidationError) as exc_info:
            validate_song_payload({"title": "", "artist": "a" * 150, "genre": "Pop"})
        assert exc_info.value.fields == ["title", "artist", "album"]


class TestSongId:
    @pytest.mark.parametrize(
        "value",
        ["65a1b2c3d4e5f60718293a4b", "65A1B2C3D4E5F60718293A4B", "0" * 24],
    )
    def test_valid(self, value: str) -> None:
        assert is_valid_song_id(value)

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "65a1b2c3d4e5f60718293a4", "65a1b2c3d4e5f60718293a4bc", "zza1b2c3d4e5f60718293a4b", None, 12],
    )
    def test_invalid(self, value) -> None:
        assert not is_valid_song_id(value)

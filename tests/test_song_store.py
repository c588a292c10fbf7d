"""
Tests for songdeck.core.song_store.

These tests verify:
- Id assignment and timestamps on insert
- Ordering of find_all / find_by_genre
- replace keeps created_at and moves updated_at forward
- remove is a hard delete
- JSON persistence round trip and StorageError on an unwritable medium
"""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from songdeck.core.errors import StorageError
from songdeck.core.song_store import SongStore, load_songs, new_song_id, utc_now
from tests.conftest import make_fields

_HEX24 = re.compile(r"^[0-9a-f]{24}$")


class TestIds:
    def test_format(self) -> None:
        assert _HEX24.match(new_song_id())

    def test_unique(self) -> None:
        ids = {new_song_id() for _ in range(2000)}
        assert len(ids) == 2000

    def test_timestamp_prefix_is_current_time(self) -> None:
        import time

        seconds = int(new_song_id()[:8], 16)
        assert abs(seconds - time.time()) < 5

    def test_utc_now_format(self) -> None:
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", utc_now())


class TestInsertAndFind:
    def test_insert_assigns_id_and_equal_timestamps(self, store: SongStore) -> None:
        song = store.insert(make_fields())
        assert _HEX24.match(song.song_id)
        assert song.created_at == song.updated_at
        assert store.find_by_id(song.song_id) == song

    def test_find_by_id_missing(self, store: SongStore) -> None:
        assert store.find_by_id(new_song_id()) is None

    def test_find_all_empty(self, store: SongStore) -> None:
        assert store.find_all() == []

    def test_find_all_newest_first(self, store: SongStore) -> None:
        first = store.insert(make_fields(title="first"))
        second = store.insert(make_fields(title="second"))
        third = store.insert(make_fields(title="third"))
        assert [s.song_id for s in store.find_all()] == [
            third.song_id,
            second.song_id,
            first.song_id,
        ]
        assert len(store) == 3


class TestReplaceAndRemove:
    def test_replace_updates_fields(self, store: SongStore) -> None:
        song = store.insert(make_fields())
        updated = store.replace(song.song_id, make_fields(title="B", genre="Jazz"))
        assert updated is not None
        assert updated.song_id == song.song_id
        assert updated.title == "B"
        assert updated.genre == "Jazz"
        assert updated.created_at == song.created_at
        assert updated.updated_at >= song.updated_at
        assert store.find_by_id(song.song_id) == updated

    def test_replace_missing(self, store: SongStore) -> None:
        assert store.replace(new_song_id(), make_fields()) is None

    def test_remove(self, store: SongStore) -> None:
        song = store.insert(make_fields())
        other = store.insert(make_fields(title="other"))
        assert store.remove(song.song_id) == song
        assert store.find_by_id(song.song_id) is None
        assert [s.song_id for s in store.find_all()] == [other.song_id]

    def test_remove_missing(self, store: SongStore) -> None:
        assert store.remove(new_song_id()) is None


class TestSearches:
    @pytest.fixture
    def catalog(self, store: SongStore) -> SongStore:
        store.insert(make_fields(title="Zombie", artist="The Cranberries", album="No Need to Argue", genre="Alternative Rock"))
        store.insert(make_fields(title="angie", artist="The Rolling Stones", album="Goats Head Soup", genre="Rock"))
        store.insert(make_fields(title="Blue in Green", artist="Miles Davis", album="Kind of Blue", genre="Jazz"))
        store.insert(make_fields(title="Bohemian Rhapsody", artist="Queen", album="A Night at the Opera", genre="rock"))
        return store

    def test_genre_substring_case_insensitive_ordered_by_title(self, catalog: SongStore) -> None:
        titles = [s.title for s in catalog.find_by_genre("ROCK")]
        assert titles == ["angie", "Bohemian Rhapsody", "Zombie"]

    def test_genre_no_match(self, catalog: SongStore) -> None:
        assert catalog.find_by_genre("Polka") == []


class TestPersistence:
    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "data" / "songs.json"
        store = SongStore(path)
        song = store.insert(make_fields())
        data = json.loads(path.read_text())
        assert data["songs"][0]["song_id"] == song.song_id

        reopened = SongStore(path)
        assert reopened.find_all() == [song]

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_songs(tmp_path / "nope.json") == []

    @pytest.mark.parametrize(
        "content",
        ["{not json", "[]", '{"songs": null}', '{"songs": {"a": 1}}', '"songs"'],
    )
    def test_corrupt_file_is_empty(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "songs.json"
        path.write_text(content)
        assert SongStore(path).find_all() == []

    def test_malformed_entries_are_skipped(self, tmp_path: Path) -> None:
        path = tmp_path / "songs.json"
        path.write_text(json.dumps({"songs": [{"song_id": "x"}]}))
        assert load_songs(path) == []

    def test_entries_failing_field_rules_are_skipped(self, tmp_path: Path) -> None:
        good = {
            "song_id": new_song_id(),
            "title": "Kept",
            "artist": "X",
            "album": "M",
            "genre": "Rock",
            "created_at": utc_now(),
            "updated_at": utc_now(),
        }
        path = tmp_path / "songs.json"
        path.write_text(
            json.dumps(
                {
                    "songs": [
                        {**good, "song_id": new_song_id(), "genre": 5},
                        {**good, "song_id": new_song_id(), "title": "   "},
                        {**good, "song_id": "not-hex"},
                        ["not", "a", "record"],
                        good,
                    ]
                }
            )
        )
        store = SongStore(path)
        assert [s.title for s in store.find_all()] == ["Kept"]
        assert [s.title for s in store.find_by_genre("rock")] == ["Kept"]

    def test_write_failure_raises_and_keeps_state(self, broken_path: Path) -> None:
        store = SongStore(broken_path)
        with pytest.raises(StorageError):
            store.insert(make_fields())
        assert store.find_all() == []
        assert store.ping() is False

    def test_ping_memory_store(self, store: SongStore) -> None:
        assert store.ping() is True

"""Aggregate statistics, recomputed from the full song set on every request."""
import logging
from collections import Counter
from typing import Dict, Iterable

from songdeck.core.errors import StorageError
from songdeck.core.song_service import ServiceResponse, internal_error, ok
from songdeck.core.song_store import SongStore
from songdeck.models.song import Song, Statistics

logger = logging.getLogger(__name__)


def _by_count(counter: Counter) -> Dict[str, int]:
    """Largest group first, ties by key, so output is independent of scan order."""
    return dict(sorted(counter.items(), key=lambda kv: (-kv[1], kv[0])))


def compute_statistics(songs: Iterable[Song]) -> Statistics:
    """Single pass over songs.

    Keys are the stored (already trimmed) values with no case folding, so
    "Rock" and "rock" are separate genres, and an artist's albums are the
    distinct (artist, album) pairs exactly as stored.
    """
    by_genre: Counter = Counter()
    by_artist: Counter = Counter()
    by_album: Counter = Counter()
    artist_albums = set()
    total = 0
    for s in songs:
        total += 1
        by_genre[s.genre] += 1
        by_artist[s.artist] += 1
        by_album[s.album] += 1
        artist_albums.add((s.artist, s.album))

    albums_by_artist: Counter = Counter(artist for artist, _ in artist_albums)
    return Statistics(
        total_songs=total,
        total_artists=len(by_artist),
        total_albums=len(by_album),
        total_genres=len(by_genre),
        songs_by_genre=_by_count(by_genre),
        songs_by_artist=_by_count(by_artist),
        albums_by_artist=_by_count(albums_by_artist),
        songs_by_album=_by_count(by_album),
    )


class StatisticsService:
    def __init__(self, store: SongStore) -> None:
        self._store = store

    def get_statistics(self) -> ServiceResponse:
        try:
            stats = compute_statistics(self._store.find_all())
        except StorageError:
            logger.exception("Failed to retrieve statistics: storage failure")
            return internal_error("Failed to retrieve statistics")
        return ok(stats.to_dict(), "Statistics retrieved successfully")

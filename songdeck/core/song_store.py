"""Persist and load songs (JSON document), with ObjectId-style identifiers."""
import json
import logging
import os
import threading
from datetime import datetime, timezone
from itertools import count
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from songdeck.core.errors import StorageError
from songdeck.core.validation import SONG_FIELDS, SongFields, is_valid_song_id
from songdeck.models.song import Song

logger = logging.getLogger(__name__)

# 5 random bytes per process + 3-byte rolling counter, as in a BSON ObjectId
_PROCESS_UNIQUE = os.urandom(5).hex()
_COUNTER = count(int.from_bytes(os.urandom(3), "big"))
_COUNTER_LOCK = threading.Lock()


def new_song_id() -> str:
    """Return a fresh 24-char lowercase hex id: 4-byte seconds + 5 random + 3 counter."""
    with _COUNTER_LOCK:
        n = next(_COUNTER) & 0xFFFFFF
    seconds = int(datetime.now(timezone.utc).timestamp()) & 0xFFFFFFFF
    return f"{seconds:08x}{_PROCESS_UNIQUE}{n:06x}"


def utc_now() -> str:
    """ISO-8601 UTC with fixed millisecond precision (lexical order == time order)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _song_to_record(s: Song) -> dict:
    return {
        "song_id": s.song_id,
        "title": s.title,
        "artist": s.artist,
        "album": s.album,
        "genre": s.genre,
        "created_at": s.created_at,
        "updated_at": s.updated_at,
    }


def _record_to_song(item: dict) -> Song:
    if not is_valid_song_id(item["song_id"]):
        raise ValueError(f"bad id {item['song_id']!r}")
    fields = SongFields.model_validate({name: item[name] for name in SONG_FIELDS})
    return Song(
        song_id=item["song_id"].lower(),
        title=fields.title,
        artist=fields.artist,
        album=fields.album,
        genre=fields.genre,
        created_at=item["created_at"],
        updated_at=item["updated_at"],
    )


def load_songs(path: Path) -> List[Song]:
    """Load all songs from disk. Missing file = empty catalog."""
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        logger.warning("Song store %s is not valid JSON (%s); starting empty", path, e)
        return []
    except OSError as e:
        raise StorageError(f"Cannot read song store {path}: {e}") from e
    items = data.get("songs") if isinstance(data, dict) else None
    if not isinstance(items, list):
        logger.warning("Song store %s has no songs list; starting empty", path)
        return []
    out = []
    for item in items:
        try:
            out.append(_record_to_song(item))
        except (KeyError, TypeError, ValueError):
            # ValidationError is a ValueError
            logger.warning("Skipping malformed song entry in %s", path)
            continue
    return out


def save_songs(path: Path, songs: Iterable[Song]) -> None:
    """Write all songs to disk atomically (temp file + rename)."""
    data = {"songs": [_song_to_record(s) for s in songs]}
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(data, indent=2))
        os.replace(tmp, path)
    except OSError as e:
        raise StorageError(f"Cannot write song store {path}: {e}") from e


def _contains(needle: str) -> Callable[[str], bool]:
    folded = needle.casefold()
    return lambda value: folded in value.casefold()


class SongStore:
    """Canonical song collection.

    Each call is one atomic read or write under a lock; there are no
    multi-call transactions. With ``path=None`` nothing touches disk.
    Writes go to disk first and only then to memory, so a StorageError
    leaves the collection as it was.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._songs: List[Song] = load_songs(path) if path is not None else []
        logger.info(
            "Song store ready (%s, %d songs)",
            path if path is not None else "memory",
            len(self._songs),
        )

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def _commit(self, songs: List[Song]) -> None:
        if self._path is not None:
            save_songs(self._path, songs)
        self._songs = songs

    def _index_of(self, song_id: str) -> int:
        for i, s in enumerate(self._songs):
            if s.song_id == song_id:
                return i
        return -1

    def insert(self, fields: SongFields) -> Song:
        """Store a new song with a fresh id; created_at == updated_at."""
        with self._lock:
            song_id = new_song_id()
            while self._index_of(song_id) >= 0:
                song_id = new_song_id()
            now = utc_now()
            song = Song(
                song_id=song_id,
                title=fields.title,
                artist=fields.artist,
                album=fields.album,
                genre=fields.genre,
                created_at=now,
                updated_at=now,
            )
            self._commit(self._songs + [song])
        logger.debug("Inserted song %s", song.song_id)
        return song

    def find_all(self) -> List[Song]:
        """All songs, most recently created first."""
        with self._lock:
            songs = list(self._songs)
        # Stable sort: equal timestamps keep reverse insertion order
        songs.reverse()
        songs.sort(key=lambda s: s.created_at, reverse=True)
        return songs

    def find_by_id(self, song_id: str) -> Optional[Song]:
        with self._lock:
            i = self._index_of(song_id)
            return self._songs[i] if i >= 0 else None

    def replace(self, song_id: str, fields: SongFields) -> Optional[Song]:
        """Overwrite the text fields and refresh updated_at. None if absent."""
        with self._lock:
            i = self._index_of(song_id)
            if i < 0:
                return None
            old = self._songs[i]
            updated = Song(
                song_id=old.song_id,
                title=fields.title,
                artist=fields.artist,
                album=fields.album,
                genre=fields.genre,
                created_at=old.created_at,
                updated_at=max(utc_now(), old.updated_at),
            )
            songs = list(self._songs)
            songs[i] = updated
            self._commit(songs)
        logger.debug("Replaced song %s", song_id)
        return updated

    def remove(self, song_id: str) -> Optional[Song]:
        """Hard delete; returns the removed song or None."""
        with self._lock:
            i = self._index_of(song_id)
            if i < 0:
                return None
            songs = list(self._songs)
            removed = songs.pop(i)
            self._commit(songs)
        logger.debug("Removed song %s", song_id)
        return removed

    def find_by_genre(self, genre: str) -> List[Song]:
        """Case-insensitive substring match on genre, ordered by title."""
        match = _contains(genre)
        songs = [s for s in self.find_all() if match(s.genre)]
        songs.sort(key=lambda s: s.title.casefold())
        return songs

    def ping(self) -> bool:
        """True if the medium is reachable (directory exists or can be created)."""
        if self._path is None:
            return True
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Song store ping failed: %s", e)
            return False
        return self._path.parent.is_dir()

    def __len__(self) -> int:
        with self._lock:
            return len(self._songs)

"""Client-side mirror of songs, statistics and the active filter.

The mirror is changed only through its transition methods; each one bumps
``version`` and notifies subscribers. Request bookkeeping is kept per
concern so a slow create never clears the loading flag of a fetch.
SUCCESS and FAILURE are resting states: a concern keeps its last outcome
(with ``loading`` off) until its next request begins.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from songdeck.models.song import Song, Statistics

logger = logging.getLogger(__name__)


class Concern(str, Enum):
    FETCH_SONGS = "fetch_songs"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    STATISTICS = "statistics"


RECORD_CONCERNS = (Concern.FETCH_SONGS, Concern.CREATE, Concern.UPDATE, Concern.DELETE)


class RequestStatus(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class RequestState:
    status: RequestStatus = RequestStatus.IDLE
    loading: bool = False
    error: Optional[str] = None
    generation: int = 0


Listener = Callable[["ClientMirror"], None]


@dataclass
class ClientMirror:
    songs: List[Song] = field(default_factory=list)
    statistics: Optional[Statistics] = None
    genre_filter: Optional[str] = None
    selected_song: Optional[Song] = None
    requests: Dict[Concern, RequestState] = field(
        default_factory=lambda: {c: RequestState() for c in Concern}
    )
    version: int = 0
    _listeners: List[Listener] = field(default_factory=list, repr=False)

    # --- read helpers -----------------------------------------------------

    def request(self, concern: Concern) -> RequestState:
        return self.requests[concern]

    @property
    def records_loading(self) -> bool:
        return any(self.requests[c].loading for c in RECORD_CONCERNS)

    @property
    def records_error(self) -> Optional[str]:
        for c in RECORD_CONCERNS:
            if self.requests[c].error:
                return self.requests[c].error
        return None

    @property
    def statistics_loading(self) -> bool:
        return self.requests[Concern.STATISTICS].loading

    @property
    def statistics_error(self) -> Optional[str]:
        return self.requests[Concern.STATISTICS].error

    def find_song(self, song_id: str) -> Optional[Song]:
        for s in self.songs:
            if s.song_id == song_id:
                return s
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener after every transition; returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # --- transitions ------------------------------------------------------

    def _changed(self) -> None:
        self.version += 1
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Mirror listener failed")

    def begin(self, concern: Concern) -> int:
        """Enter Requesting. Returns the new generation for this concern.

        Records share one error slot: starting any record request clears
        the errors of all record concerns.
        """
        state = self.requests[concern]
        state.generation += 1
        state.status = RequestStatus.REQUESTING
        state.loading = True
        cleared = RECORD_CONCERNS if concern in RECORD_CONCERNS else (concern,)
        for c in cleared:
            self.requests[c].error = None
        self._changed()
        return state.generation

    def _succeed(self, concern: Concern) -> None:
        state = self.requests[concern]
        state.status = RequestStatus.SUCCESS
        state.loading = False

    def fail(self, concern: Concern, message: str) -> None:
        """Requesting -> Failure. Data is left as it was."""
        state = self.requests[concern]
        state.status = RequestStatus.FAILURE
        state.loading = False
        state.error = message
        self._changed()

    def songs_loaded(self, songs: List[Song]) -> None:
        self.songs = list(songs)
        self._succeed(Concern.FETCH_SONGS)
        self._changed()

    def song_added(self, song: Song) -> None:
        self.songs = [song] + self.songs
        self._succeed(Concern.CREATE)
        self._changed()

    def song_replaced(self, song: Song) -> None:
        self.songs = [song if s.song_id == song.song_id else s for s in self.songs]
        if self.selected_song is not None and self.selected_song.song_id == song.song_id:
            self.selected_song = song
        self._succeed(Concern.UPDATE)
        self._changed()

    def song_removed(self, song_id: str) -> None:
        self.songs = [s for s in self.songs if s.song_id != song_id]
        if self.selected_song is not None and self.selected_song.song_id == song_id:
            self.selected_song = None
        self._succeed(Concern.DELETE)
        self._changed()

    def statistics_loaded(self, statistics: Statistics) -> None:
        self.statistics = statistics
        self._succeed(Concern.STATISTICS)
        self._changed()

    def set_genre_filter(self, genre: Optional[str]) -> None:
        self.genre_filter = genre
        self._changed()

    def select_song(self, song: Optional[Song]) -> None:
        self.selected_song = song
        self._changed()

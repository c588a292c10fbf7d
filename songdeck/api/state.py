"""Shared application state (injected into routes)."""
from pathlib import Path
from typing import Optional

from songdeck.config import SONGS_PATH
from songdeck.core.song_service import SongService
from songdeck.core.song_store import SongStore
from songdeck.core.statistics import StatisticsService


class AppState:
    def __init__(self, songs_path: Optional[Path] = SONGS_PATH) -> None:
        self._songs_path = songs_path
        self._store: Optional[SongStore] = None
        self._song_service: Optional[SongService] = None
        self._statistics_service: Optional[StatisticsService] = None

    def open_store(self) -> SongStore:
        """Load the store on first use (lazy so importing the app never touches disk)."""
        if self._store is None:
            self._store = SongStore(self._songs_path)
            self._song_service = SongService(self._store)
            self._statistics_service = StatisticsService(self._store)
        return self._store

    @property
    def store(self) -> SongStore:
        return self.open_store()

    @property
    def song_service(self) -> SongService:
        self.open_store()
        return self._song_service

    @property
    def statistics_service(self) -> StatisticsService:
        self.open_store()
        return self._statistics_service


_state = AppState()


def get_state() -> AppState:
    return _state

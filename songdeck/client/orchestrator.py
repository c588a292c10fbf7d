"""Maps user intents to API calls and keeps the ClientMirror in step.

Every intent starts one request for its concern and returns the asyncio
Task at once. Per concern only the newest request counts: when a result
arrives for an older generation it is dropped (the HTTP call itself is
not cancelled). Each successful mutation is followed by a statistics
re-fetch. Failures set the concern's error; there are no retries.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set, TypeVar

from songdeck.client.api import ApiError, SongsApiClient
from songdeck.client.mirror import ClientMirror, Concern
from songdeck.models.song import Song

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FAILURE_MESSAGES = {
    Concern.FETCH_SONGS: "Failed to fetch songs",
    Concern.CREATE: "Failed to create song",
    Concern.UPDATE: "Failed to update song",
    Concern.DELETE: "Failed to delete song",
    Concern.STATISTICS: "Failed to fetch statistics",
}


def _failure_message(concern: Concern, exc: Exception) -> str:
    if isinstance(exc, ApiError) and exc.message:
        return exc.message
    return str(exc) or _FAILURE_MESSAGES[concern]


class SyncOrchestrator:
    def __init__(self, api: SongsApiClient, mirror: Optional[ClientMirror] = None) -> None:
        self._api = api
        self.mirror = mirror if mirror is not None else ClientMirror()
        self._tasks: Set[asyncio.Task] = set()

    # --- plumbing ---------------------------------------------------------

    def _is_current(self, concern: Concern, generation: int) -> bool:
        return self.mirror.request(concern).generation == generation

    def _dispatch(
        self,
        concern: Concern,
        call: Callable[[], Awaitable[T]],
        on_success: Callable[[T], None],
        then_refresh_statistics: bool = False,
    ) -> asyncio.Task:
        generation = self.mirror.begin(concern)
        task = asyncio.create_task(
            self._run(concern, generation, call, on_success, then_refresh_statistics),
            name=f"songdeck-{concern.value}-{generation}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(
        self,
        concern: Concern,
        generation: int,
        call: Callable[[], Awaitable[T]],
        on_success: Callable[[T], None],
        then_refresh_statistics: bool,
    ) -> None:
        try:
            result = await call()
        except Exception as e:
            if not self._is_current(concern, generation):
                logger.debug("Dropping stale %s failure (generation %d)", concern.value, generation)
                return
            message = _failure_message(concern, e)
            logger.warning("%s failed: %s", concern.value, message)
            self.mirror.fail(concern, message)
            return
        if not self._is_current(concern, generation):
            logger.debug("Dropping stale %s result (generation %d)", concern.value, generation)
            return
        on_success(result)
        if then_refresh_statistics:
            self.fetch_statistics()

    async def wait_idle(self) -> None:
        """Wait until no request (including follow-up statistics refreshes) is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        await self.wait_idle()
        await self._api.aclose()

    # --- queries ----------------------------------------------------------

    def fetch_songs(self) -> asyncio.Task:
        """Reload the song list, honouring the active genre filter."""
        genre = self.mirror.genre_filter
        if genre:
            return self._dispatch(
                Concern.FETCH_SONGS,
                lambda: self._api.filter_songs_by_genre(genre),
                self.mirror.songs_loaded,
            )
        return self._dispatch(Concern.FETCH_SONGS, self._api.fetch_songs, self.mirror.songs_loaded)

    def fetch_statistics(self) -> asyncio.Task:
        return self._dispatch(
            Concern.STATISTICS, self._api.fetch_statistics, self.mirror.statistics_loaded
        )

    def set_genre_filter(self, genre: Optional[str]) -> asyncio.Task:
        """Select a genre (filtered query) or pass None/"" to go back to all songs."""
        genre = genre.strip() if genre else None
        self.mirror.set_genre_filter(genre or None)
        return self.fetch_songs()

    def clear_filter(self) -> asyncio.Task:
        return self.set_genre_filter(None)

    def load_initial(self) -> None:
        self.fetch_songs()
        self.fetch_statistics()

    # --- mutations --------------------------------------------------------

    def create_song(self, fields: dict) -> asyncio.Task:
        return self._dispatch(
            Concern.CREATE,
            lambda: self._api.create_song(fields),
            self.mirror.song_added,
            then_refresh_statistics=True,
        )

    def update_song(self, song_id: str, fields: dict) -> asyncio.Task:
        return self._dispatch(
            Concern.UPDATE,
            lambda: self._api.update_song(song_id, fields),
            self.mirror.song_replaced,
            then_refresh_statistics=True,
        )

    def delete_song(self, song_id: str) -> asyncio.Task:
        return self._dispatch(
            Concern.DELETE,
            lambda: self._api.delete_song(song_id),
            self.mirror.song_removed,
            then_refresh_statistics=True,
        )

    def select_song(self, song: Optional[Song]) -> None:
        self.mirror.select_song(song)

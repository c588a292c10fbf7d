"""Async HTTP client for the Songdeck REST API (httpx)."""
import logging
from typing import Any, List, Optional

import httpx

from songdeck.config import API_URL
from songdeck.models.song import Song, Statistics

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Failed API call. code is the server error code, or NETWORK_ERROR / BAD_RESPONSE."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details


class SongsApiClient:
    """Thin wrapper returning models, raising ApiError on any failure.

    ``transport`` lets tests route requests straight into an ASGI app.
    """

    def __init__(
        self,
        base_url: str = API_URL,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "SongsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(str(e) or type(e).__name__, code="NETWORK_ERROR") from e
        try:
            body = response.json()
        except ValueError:
            raise ApiError(
                f"Unexpected response from server (HTTP {response.status_code})",
                code="BAD_RESPONSE",
                status_code=response.status_code,
            ) from None
        if not response.is_success or not body.get("success", False):
            error = body.get("error") or {}
            raise ApiError(
                error.get("message") or f"Request failed (HTTP {response.status_code})",
                code=error.get("code") or "INTERNAL_ERROR",
                status_code=response.status_code,
                details=error.get("details"),
            )
        return body

    async def fetch_songs(self) -> List[Song]:
        body = await self._request("GET", "/songs")
        return [Song.from_dict(d) for d in body.get("data") or []]

    async def filter_songs_by_genre(self, genre: str) -> List[Song]:
        body = await self._request("GET", "/songs/filter", params={"genre": genre})
        return [Song.from_dict(d) for d in body.get("data") or []]

    async def create_song(self, fields: dict) -> Song:
        body = await self._request("POST", "/songs", json=fields)
        return Song.from_dict(body["data"])

    async def update_song(self, song_id: str, fields: dict) -> Song:
        body = await self._request("PUT", f"/songs/{song_id}", json=fields)
        return Song.from_dict(body["data"])

    async def delete_song(self, song_id: str) -> str:
        await self._request("DELETE", f"/songs/{song_id}")
        return song_id

    async def fetch_statistics(self) -> Statistics:
        body = await self._request("GET", "/statistics")
        return Statistics.from_dict(body.get("data"))

# WARNING: API key loading from .env is for LOCAL DEVELOPMENT ONLY.
# Never commit your .env file or distribute your API keys.

"""TMDB metadata provider client.

Implements the MetadataProvider interface for The Movie Database (TMDB) API:
IMDb IDs are resolved through ``/find`` and season listings come from
``/tv/{id}/season/{n}``. Results are cached in-process.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from fillerinfo.errors import MetadataUnavailable
from fillerinfo.metadata.base import MetadataProvider
from fillerinfo.metadata.cache import MISSING, MemoryCache, MetadataCache
from fillerinfo.metadata.models import SeasonDetails, SeasonEpisode, SeriesHandle
from fillerinfo.metadata.settings import Settings

logger = logging.getLogger(__name__)

API_BASE = "https://api.themoviedb.org/3"
HTTP_NOT_FOUND = 404

# Decode and shape errors from a 2xx body that is not the JSON TMDB documents.
_MALFORMED = (
    ValueError,
    KeyError,
    TypeError,
    AttributeError,
    IndexError,
    ValidationError,
)


class TMDBClient(MetadataProvider):
    """Client for The Movie Database (TMDB) API.

    Loads the API key from the environment via Settings unless one is passed
    in. Series and season lookups are memoized in the supplied caches.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        series_cache: MetadataCache[SeriesHandle] | None = None,
        season_cache: MetadataCache[SeasonDetails | None] | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize TMDBClient and load API keys from settings."""
        self.settings = settings or Settings()
        self.api_key = self.settings.TMDB_API_KEY
        self.read_access_token = self.settings.TMDB_READ_ACCESS_TOKEN
        self.series_cache = series_cache if series_cache is not None else MemoryCache()
        self.season_cache = season_cache if season_cache is not None else MemoryCache()
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        if self.read_access_token:
            return {"Authorization": f"Bearer {self.read_access_token}"}
        return {}

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        query = {**(params or {}), "api_key": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.get(
                    f"{API_BASE}{path}", params=query, headers=self._headers()
                )
        except httpx.HTTPError as exc:
            raise MetadataUnavailable(f"TMDB request {path} failed: {exc}") from exc

    async def find_series(self, identifier: str) -> SeriesHandle | None:
        """Resolve an IMDb ID to a TMDB TV series.

        Args:
            identifier: IMDb ID, e.g. ``tt0409591``.

        Returns:
            SeriesHandle for the first TV result, or None if TMDB has none.

        Raises:
            MetadataUnavailable: On transport errors, non-2xx responses or a
                body that is not a TMDB find result.
        """
        cache_key = f"imdb_{identifier}"
        cached = self.series_cache.get(cache_key)
        if cached is not MISSING:
            return cached

        resp = await self._get(f"/find/{identifier}", {"external_source": "imdb_id"})
        if resp.is_error:
            raise MetadataUnavailable(
                f"TMDB find for {identifier} returned HTTP {resp.status_code}"
            )
        try:
            results = resp.json().get("tv_results") or []
            if not results:
                logger.info(f"TMDB has no TV series for {identifier}")
                return None
            show = results[0]
            handle = SeriesHandle(
                name=show["name"],
                original_name=show.get("original_name"),
                provider="tmdb",
                provider_id=str(show["id"]),
            )
        except _MALFORMED as exc:
            raise MetadataUnavailable(
                f"TMDB find for {identifier} returned a malformed body: {exc!r}"
            ) from exc
        self.series_cache.set(cache_key, handle)
        return handle

    async def season_details(
        self, series_id: str, season_number: int
    ) -> SeasonDetails | None:
        """Fetch one season of a TMDB TV series.

        Returns:
            SeasonDetails, or None when TMDB reports the season as missing.

        Raises:
            MetadataUnavailable: On transport errors, other non-2xx responses
                or a body that is not a season listing.
        """
        cache_key = f"season_{series_id}_{season_number}"
        cached = self.season_cache.get(cache_key)
        if cached is not MISSING:
            return cached

        resp = await self._get(f"/tv/{series_id}/season/{season_number}")
        if resp.status_code == HTTP_NOT_FOUND:
            self.season_cache.set(cache_key, None)
            return None
        if resp.is_error:
            raise MetadataUnavailable(
                f"TMDB season {season_number} of {series_id} "
                f"returned HTTP {resp.status_code}"
            )
        try:
            data = resp.json()
            season = SeasonDetails(
                season_number=data.get("season_number", season_number),
                episodes=[
                    SeasonEpisode(
                        episode_number=ep["episode_number"],
                        name=ep.get("name"),
                        absolute_episode_number=ep.get("absolute_episode_number"),
                    )
                    for ep in data.get("episodes") or []
                ],
            )
        except _MALFORMED as exc:
            raise MetadataUnavailable(
                f"TMDB season {season_number} of {series_id} "
                f"returned a malformed body: {exc!r}"
            ) from exc
        self.season_cache.set(cache_key, season)
        return season

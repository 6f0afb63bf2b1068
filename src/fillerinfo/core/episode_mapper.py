"""Absolute episode numbering across identifier schemes.

Filler lists number episodes continuously across a whole series, while most
catalogs address an episode as (season, episode). Two identifier schemes reach
this module:

- ``kitsu:<id>`` identifiers already carry the absolute episode number.
- Everything else (IMDb ``tt`` IDs) is per-season and needs the episode counts
  of every earlier season from the metadata provider.

The scheme is decided once in :func:`episode_ref` and carried as a
``DirectEpisode`` or ``SeasonedEpisode`` from then on.
"""

import logging
from dataclasses import dataclass

from pydantic import BaseModel, Field

from fillerinfo.errors import MetadataUnavailable
from fillerinfo.metadata.base import MetadataProvider

logger = logging.getLogger(__name__)

DIRECT_PREFIX = "kitsu:"


class EpisodeQuery(BaseModel):
    """An episode addressed by external identifier, season and episode."""

    identifier: str
    season: int = Field(ge=1)
    episode: int = Field(ge=1)

    @classmethod
    def from_stream_id(cls, stream_id: str) -> "EpisodeQuery":
        """Parse a stream ID such as ``tt0409591:1:5`` or ``kitsu:9253:50``.

        Kitsu stream IDs carry only an episode number, so their season
        defaults to 1.

        Raises:
            ValueError: If the ID does not contain season/episode parts.
        """
        parts = stream_id.split(":")
        if len(parts) < 3:
            raise ValueError(f"Malformed stream id: {stream_id!r}")
        if stream_id.startswith(DIRECT_PREFIX):
            return cls(identifier=":".join(parts[:2]), season=1, episode=int(parts[2]))
        return cls(identifier=parts[0], season=int(parts[1]), episode=int(parts[2]))


@dataclass(frozen=True)
class DirectEpisode:
    """Episode whose number is already absolute."""

    identifier: str
    episode: int


@dataclass(frozen=True)
class SeasonedEpisode:
    """Episode numbered within a season."""

    identifier: str
    season: int
    episode: int


EpisodeRef = DirectEpisode | SeasonedEpisode


def episode_ref(query: EpisodeQuery) -> EpisodeRef:
    """Classify *query* by identifier scheme."""
    if query.identifier.startswith(DIRECT_PREFIX):
        return DirectEpisode(identifier=query.identifier, episode=query.episode)
    return SeasonedEpisode(
        identifier=query.identifier, season=query.season, episode=query.episode
    )


class EpisodeMapper:
    """Converts season/episode pairs into absolute episode numbers."""

    def __init__(self, provider: MetadataProvider) -> None:
        self.provider = provider

    async def absolute_episode(self, query: EpisodeQuery) -> int | None:
        """Return the series-wide episode ordinal for *query*.

        For per-season identifiers the episode counts of seasons ``1`` to
        ``season - 1`` are summed in ascending order; a season whose metadata
        is unavailable contributes nothing. Season numbers are not checked
        against the real number of seasons.

        Returns:
            The absolute episode, or None when the series cannot be found.
        """
        match episode_ref(query):
            case DirectEpisode(episode=episode):
                return episode
            case SeasonedEpisode() as ref:
                return await self._sum_seasons(ref)

    async def _sum_seasons(self, ref: SeasonedEpisode) -> int | None:
        try:
            series = await self.provider.find_series(ref.identifier)
        except MetadataUnavailable as exc:
            logger.warning(f"Could not look up {ref.identifier}: {exc}")
            return None
        if series is None:
            logger.info(f"Could not find series data for {ref.identifier}")
            return None

        absolute = 0
        for season_number in range(1, ref.season):
            absolute += await self._season_length(series.provider_id, season_number)
        absolute += ref.episode

        logger.info(
            f"{ref.identifier} S{ref.season}E{ref.episode} = Absolute Episode {absolute}"
        )
        return absolute

    async def _season_length(self, series_id: str, season_number: int) -> int:
        try:
            season = await self.provider.season_details(series_id, season_number)
        except MetadataUnavailable as exc:
            logger.warning(f"Season {season_number} of {series_id} unavailable: {exc}")
            return 0
        return season.episode_count if season else 0

    async def provider_absolute_number(self, query: EpisodeQuery) -> int | None:
        """Return the absolute number the provider publishes for an episode.

        Some catalogs annotate anime episodes with their absolute number. This
        returns that annotation when present and None otherwise; it never
        falls back to summing seasons.
        """
        ref = episode_ref(query)
        if isinstance(ref, DirectEpisode):
            return ref.episode
        try:
            series = await self.provider.find_series(ref.identifier)
            if series is None:
                return None
            season = await self.provider.season_details(series.provider_id, ref.season)
        except MetadataUnavailable as exc:
            logger.warning(f"Could not read episode data for {ref.identifier}: {exc}")
            return None
        if season is None:
            return None
        for ep in season.episodes:
            if ep.episode_number == ref.episode:
                return ep.absolute_episode_number
        return None

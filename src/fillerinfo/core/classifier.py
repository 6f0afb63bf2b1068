"""Filler status classification.

Entry point for the whole pipeline: (identifier, season, episode) in, one of
``filler``/``mixed``/``canon`` out, or None when there is no data.

Flow:
1. Ask the metadata provider for the series display name.
2. Resolve the filler database key (identity cache first, fuzzy match on a
   miss, persisting any new match).
3. Turn season/episode into an absolute episode number.
4. Check the number against the record's filler and mixed sets.
"""

import logging
from enum import Enum
from typing import Callable

from pydantic import ValidationError

from fillerinfo.core.episode_mapper import EpisodeMapper, EpisodeQuery
from fillerinfo.core.filler_db import FillerDatabase
from fillerinfo.core.id_cache import IdentityCache
from fillerinfo.core.matcher import DEFAULT_THRESHOLD, MatchResult, find_best_match
from fillerinfo.errors import FillerInfoError, MetadataUnavailable, NoMatch, NotFound
from fillerinfo.metadata.base import MetadataProvider

logger = logging.getLogger(__name__)

Matcher = Callable[[str, FillerDatabase, float], MatchResult | None]


class FillerStatus(str, Enum):
    """Classification of a single episode."""

    FILLER = "filler"
    MIXED = "mixed"
    CANON = "canon"


_DESCRIPTIONS: dict[FillerStatus | None, tuple[str, str]] = {
    FillerStatus.FILLER: ("FILLER EPISODE", "Not canon - Safe to skip"),
    FillerStatus.MIXED: ("MIXED CONTENT", "Partial canon content"),
    FillerStatus.CANON: ("CANON EPISODE", "Main storyline"),
    None: ("NO DATA AVAILABLE", "Filler info not found for this anime"),
}


def describe(status: FillerStatus | None) -> tuple[str, str]:
    """Return the (headline, detail) text shown to users for *status*."""
    return _DESCRIPTIONS[status]


class FillerClassifier:
    """Classifies episodes using an injected provider, cache and database.

    Args:
        provider: Metadata provider for display names and season counts.
        identity_cache: Persisted identifier -> database key cache.
        database: Default filler database used when ``classify`` is not given
            one explicitly.
        matcher: Best-match function; replaceable so tests can count calls.
        threshold: Minimum fuzzy score passed to *matcher*.
    """

    def __init__(
        self,
        provider: MetadataProvider,
        identity_cache: IdentityCache,
        database: FillerDatabase | None = None,
        *,
        matcher: Matcher = find_best_match,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self.provider = provider
        self.identity_cache = identity_cache
        self.database: FillerDatabase = database if database is not None else {}
        self.matcher = matcher
        self.threshold = threshold
        self.mapper = EpisodeMapper(provider)

    async def classify(
        self,
        identifier: str,
        season: int,
        episode: int,
        database: FillerDatabase | None = None,
    ) -> FillerStatus | None:
        """Classify one episode.

        Never raises: any failure is logged and reported as None.

        Args:
            identifier: External series identifier (IMDb or ``kitsu:`` ID).
            season: 1-based season number.
            episode: 1-based episode number within the season.
            database: Filler database to use instead of ``self.database``.

        Returns:
            The FillerStatus, or None when no data is available.
        """
        db = database if database is not None else self.database
        try:
            query = EpisodeQuery(identifier=identifier, season=season, episode=episode)
            return await self._classify(query, db)
        except ValidationError as exc:
            logger.warning(f"Invalid episode query for {identifier}: {exc}")
        except FillerInfoError as exc:
            logger.info(f"No filler status for {identifier}: {exc}")
        except Exception:
            logger.exception(f"Error getting filler status for {identifier}")
        return None

    async def _classify(
        self, query: EpisodeQuery, db: FillerDatabase
    ) -> FillerStatus | None:
        series = await self.provider.find_series(query.identifier)
        if series is None:
            raise NotFound(query.identifier)
        logger.info(f"Anime: {series.name}")

        key = await self.resolve_key(query.identifier, series.name, db)

        absolute = await self.mapper.absolute_episode(query)
        if absolute is None:
            raise MetadataUnavailable(
                f"Could not calculate absolute episode for S{query.season}E{query.episode}"
            )

        record = db[key]
        if absolute in record.filler:
            return FillerStatus.FILLER
        if absolute in record.mixed:
            return FillerStatus.MIXED
        return FillerStatus.CANON

    async def resolve_key(self, identifier: str, name: str, db: FillerDatabase) -> str:
        """Return the filler database key for a series.

        Uses the identity cache when it has an entry; otherwise runs the
        matcher and caches a successful match. Cached entries are permanent,
        so a key that vanished from *db* after a re-scrape is reported as
        NoMatch rather than re-resolved.

        Raises:
            NoMatch: If no database entry reaches the threshold, or the cached
                key is no longer in *db*.
        """
        cached = await self.identity_cache.lookup(identifier)
        if cached is not None:
            logger.info(f"Cache hit for {identifier}: {cached}")
            if cached not in db:
                raise NoMatch(name)
            return cached

        match = self.matcher(name, db, self.threshold)
        if match is None:
            raise NoMatch(name)

        logger.info(f'Matched "{name}" to "{match.name}" (score: {match.score:.2f})')
        await self.identity_cache.record(identifier, match.key)
        return match.key

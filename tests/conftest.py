"""Shared fixtures: an in-memory metadata provider and a small filler database."""

from pathlib import Path

import pytest

from fillerinfo.core.filler_db import FillerDatabase, parse_filler_database
from fillerinfo.errors import MetadataUnavailable
from fillerinfo.metadata.base import MetadataProvider
from fillerinfo.metadata.models import SeasonDetails, SeasonEpisode, SeriesHandle


class FakeProvider(MetadataProvider):
    """Metadata provider backed by dicts, recording every call.

    ``seasons`` maps ``(series_id, season_number)`` to an episode count, or to
    an exception instance that ``season_details`` raises.
    """

    def __init__(
        self,
        series: dict[str, SeriesHandle] | None = None,
        seasons: dict[tuple[str, int], int | Exception] | None = None,
    ) -> None:
        self.series = series or {}
        self.seasons = seasons or {}
        self.find_calls: list[str] = []
        self.season_calls: list[tuple[str, int]] = []

    async def find_series(self, identifier: str) -> SeriesHandle | None:
        self.find_calls.append(identifier)
        return self.series.get(identifier)

    async def season_details(
        self, series_id: str, season_number: int
    ) -> SeasonDetails | None:
        self.season_calls.append((series_id, season_number))
        entry = self.seasons.get((series_id, season_number))
        if isinstance(entry, Exception):
            raise entry
        if entry is None:
            return None
        return SeasonDetails(
            season_number=season_number,
            episodes=[SeasonEpisode(episode_number=n) for n in range(1, entry + 1)],
        )


def handle(name: str, provider_id: str) -> SeriesHandle:
    """Build a TMDB-style SeriesHandle."""
    return SeriesHandle(name=name, provider="tmdb", provider_id=provider_id)


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider knowing Naruto (two seasons) and Naruto Shippuden."""
    return FakeProvider(
        series={
            "tt0409591": handle("Naruto", "46260"),
            "tt0988824": handle("Naruto Shipuden", "31910"),
        },
        seasons={
            ("46260", 1): 13,
            ("46260", 2): 24,
            ("31910", 1): 32,
        },
    )


@pytest.fixture
def broken_provider() -> FakeProvider:
    """Provider whose season lookups always fail."""
    return FakeProvider(
        series={"tt0409591": handle("Naruto", "46260")},
        seasons={
            ("46260", 1): MetadataUnavailable("boom"),
            ("46260", 2): 24,
        },
    )


@pytest.fixture
def filler_db() -> FillerDatabase:
    """Small filler database in a fixed insertion order."""
    return parse_filler_database(
        {
            "naruto": {
                "name": "Naruto",
                "filler": [26, 97, 101, 102, 136],
                "mixed": [27, 185, 189],
            },
            "naruto-shippuden": {
                "name": "Naruto Shippuden",
                "filler": [57, 58, 59],
                "mixed": [],
            },
            "bleach": {"name": "Bleach", "filler": [33, 50], "mixed": []},
        }
    )


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    """Location for a throwaway identity cache file."""
    return tmp_path / "id-cache.json"


@pytest.fixture
def make_provider() -> type[FakeProvider]:
    """Give tests access to the FakeProvider class for custom setups."""
    return FakeProvider

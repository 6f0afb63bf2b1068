"""End-to-end tests for FillerClassifier."""

import json
from pathlib import Path

import pytest

from fillerinfo.core.classifier import FillerClassifier, FillerStatus, describe
from fillerinfo.core.filler_db import FillerDatabase, parse_filler_database
from fillerinfo.core.id_cache import IdentityCache
from fillerinfo.core.matcher import find_best_match
from fillerinfo.metadata.models import SeriesHandle


class CountingMatcher:
    """Wraps find_best_match and counts how often it runs."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, name, database, threshold):
        self.calls += 1
        return find_best_match(name, database, threshold)


@pytest.fixture
def classifier(fake_provider, filler_db: FillerDatabase, cache_path: Path) -> FillerClassifier:
    return FillerClassifier(fake_provider, IdentityCache(cache_path), filler_db)


@pytest.mark.asyncio
async def test_first_episode_is_canon(classifier: FillerClassifier) -> None:
    assert await classifier.classify("tt0409591", 1, 1) is FillerStatus.CANON


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("season", "episode", "expected"),
    [
        (2, 13, FillerStatus.FILLER),  # absolute 26
        (2, 14, FillerStatus.MIXED),  # absolute 27
        (2, 15, FillerStatus.CANON),  # absolute 28
        (1, 13, FillerStatus.CANON),  # absolute 13
    ],
)
async def test_absolute_episode_membership(
    classifier: FillerClassifier, season: int, episode: int, expected: FillerStatus
) -> None:
    assert await classifier.classify("tt0409591", season, episode) is expected


@pytest.mark.asyncio
async def test_unknown_identifier_returns_none_and_writes_nothing(
    classifier: FillerClassifier, cache_path: Path
) -> None:
    assert await classifier.classify("tt9999999", 1, 1) is None
    assert not cache_path.exists()


@pytest.mark.asyncio
async def test_fuzzy_match_is_resolved_and_persisted(
    classifier: FillerClassifier, cache_path: Path
) -> None:
    # "Naruto Shipuden" is one letter short of the database name.
    assert await classifier.classify("tt0988824", 2, 25) is FillerStatus.FILLER
    assert json.loads(cache_path.read_text()) == {"tt0988824": "naruto-shippuden"}


@pytest.mark.asyncio
async def test_cache_hit_skips_matching(
    fake_provider, filler_db: FillerDatabase, cache_path: Path
) -> None:
    matcher = CountingMatcher()
    classifier = FillerClassifier(
        fake_provider, IdentityCache(cache_path), filler_db, matcher=matcher
    )
    first = await classifier.resolve_key("tt0409591", "Naruto", filler_db)
    second = await classifier.resolve_key("tt0409591", "Naruto", filler_db)
    assert first == second == "naruto"
    assert matcher.calls == 1


@pytest.mark.asyncio
async def test_classify_twice_matches_once(
    fake_provider, filler_db: FillerDatabase, cache_path: Path
) -> None:
    matcher = CountingMatcher()
    classifier = FillerClassifier(
        fake_provider, IdentityCache(cache_path), filler_db, matcher=matcher
    )
    assert await classifier.classify("tt0409591", 2, 13) is FillerStatus.FILLER
    assert await classifier.classify("tt0409591", 2, 13) is FillerStatus.FILLER
    assert matcher.calls == 1


@pytest.mark.asyncio
async def test_cache_does_not_change_result(
    fake_provider, filler_db: FillerDatabase, tmp_path: Path
) -> None:
    warm = FillerClassifier(fake_provider, IdentityCache(tmp_path / "warm.json"), filler_db)
    await warm.resolve_key("tt0988824", "Naruto Shipuden", filler_db)
    cached = await warm.resolve_key("tt0988824", "Naruto Shipuden", filler_db)

    cold = FillerClassifier(fake_provider, IdentityCache(tmp_path / "cold.json"), filler_db)
    uncached = await cold.resolve_key("tt0988824", "Naruto Shipuden", filler_db)
    assert cached == uncached == "naruto-shippuden"


@pytest.mark.asyncio
async def test_no_match_returns_none_and_writes_nothing(
    fake_provider, cache_path: Path
) -> None:
    database = parse_filler_database(
        {"bleach": {"name": "Bleach", "filler": [33], "mixed": []}}
    )
    classifier = FillerClassifier(fake_provider, IdentityCache(cache_path), database)
    assert await classifier.classify("tt0409591", 1, 1) is None
    assert not cache_path.exists()


@pytest.mark.asyncio
async def test_stale_cache_entry_returns_none(
    classifier: FillerClassifier, cache_path: Path
) -> None:
    cache_path.write_text(json.dumps({"tt0409591": "naruto-old"}))
    assert await classifier.classify("tt0409591", 1, 1) is None
    assert json.loads(cache_path.read_text()) == {"tt0409591": "naruto-old"}


@pytest.mark.asyncio
async def test_corrupt_cache_falls_back_to_matching(
    classifier: FillerClassifier, cache_path: Path
) -> None:
    cache_path.write_text("{corrupt")
    assert await classifier.classify("tt0409591", 2, 14) is FillerStatus.MIXED
    assert json.loads(cache_path.read_text()) == {"tt0409591": "naruto"}


@pytest.mark.asyncio
@pytest.mark.parametrize("cached", [None, "", 42])
async def test_unusable_cache_value_is_rematched(
    classifier: FillerClassifier, cache_path: Path, cached
) -> None:
    cache_path.write_text(json.dumps({"tt0409591": cached}))
    assert await classifier.classify("tt0409591", 1, 1) is FillerStatus.CANON
    assert json.loads(cache_path.read_text()) == {"tt0409591": "naruto"}


@pytest.mark.asyncio
async def test_explicit_database_overrides_default(
    fake_provider, filler_db: FillerDatabase, cache_path: Path
) -> None:
    classifier = FillerClassifier(fake_provider, IdentityCache(cache_path))
    assert await classifier.classify("tt0409591", 1, 1) is None
    assert await classifier.classify("tt0409591", 1, 1, filler_db) is FillerStatus.CANON


@pytest.mark.asyncio
async def test_direct_identifier_uses_episode_as_is(
    fake_provider, filler_db: FillerDatabase, cache_path: Path
) -> None:
    fake_provider.series["kitsu:11"] = SeriesHandle(
        name="Naruto", provider="kitsu", provider_id="11"
    )
    classifier = FillerClassifier(fake_provider, IdentityCache(cache_path), filler_db)
    assert await classifier.classify("kitsu:11", 1, 26) is FillerStatus.FILLER
    assert fake_provider.season_calls == []


@pytest.mark.asyncio
async def test_invalid_episode_number_returns_none(classifier: FillerClassifier) -> None:
    assert await classifier.classify("tt0409591", 0, 1) is None


@pytest.mark.asyncio
async def test_provider_crash_returns_none(
    make_provider, filler_db: FillerDatabase, cache_path: Path
) -> None:
    class Crashing(make_provider):
        async def find_series(self, identifier: str) -> SeriesHandle | None:
            raise RuntimeError("unexpected")

    classifier = FillerClassifier(Crashing(), IdentityCache(cache_path), filler_db)
    assert await classifier.classify("tt0409591", 1, 1) is None


def test_describe_every_outcome() -> None:
    assert describe(FillerStatus.FILLER)[0] == "FILLER EPISODE"
    assert describe(FillerStatus.MIXED)[0] == "MIXED CONTENT"
    assert describe(FillerStatus.CANON)[0] == "CANON EPISODE"
    assert describe(None)[0] == "NO DATA AVAILABLE"


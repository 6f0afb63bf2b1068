"""Filler database models and loader.

The filler database is a JSON object produced by an external scraper:

    {"naruto": {"name": "Naruto", "filler": [26, 97], "mixed": [27]}, ...}

Key order in the file is preserved and is significant: the best-match resolver
breaks fuzzy-score ties in favour of the entry that appears first.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class FillerRecord(BaseModel):
    """Filler information for a single series."""

    name: str
    filler: frozenset[int] = Field(default_factory=frozenset)
    mixed: frozenset[int] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)


# Ordered key -> record mapping. Plain dicts keep insertion order.
FillerDatabase = dict[str, FillerRecord]


def parse_filler_database(data: Mapping[str, Any]) -> FillerDatabase:
    """Build a FillerDatabase from decoded JSON, keeping key order.

    Entries that fail validation are skipped with a warning rather than
    failing the whole load.
    """
    database: FillerDatabase = {}
    for key, raw in data.items():
        try:
            database[key] = FillerRecord.model_validate(raw)
        except ValidationError as exc:
            logger.warning(f"Skipping invalid filler entry {key!r}: {exc}")
    return database


def load_filler_database(path: Path) -> FillerDatabase:
    """Load the filler database from *path*.

    Falls back to the built-in dataset when the file is missing or cannot be
    parsed, so the classifier can still answer for the most popular series
    before the first scrape has run.

    Args:
        path: Location of the filler database JSON file.

    Returns:
        The loaded (or fallback) FillerDatabase.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("filler database must be a JSON object")
    except (OSError, ValueError) as exc:
        logger.error(f"Could not load {path}: {exc}")
        logger.info("Using fallback data for popular anime...")
        return fallback_database()

    database = parse_filler_database(data)
    logger.info(f"Loaded filler data for {len(database)} anime")
    return database


def _span(start: int, end: int) -> list[int]:
    return list(range(start, end + 1))


def fallback_database() -> FillerDatabase:
    """Return the built-in filler data for a few popular series."""
    return parse_filler_database(
        {
            "naruto": {
                "name": "Naruto",
                "filler": [26, 97, *_span(101, 106), *_span(136, 220)],
                "mixed": [27, 185, 189],
            },
            "detective-conan": {
                "name": "Detective Conan",
                "filler": [
                    6, 14, 17, 19, 21, 24, 25, 26, 29, 30, 33, 36, 37, 41, 44, 45,
                    47, 51, 53, 55, 56, 59, 61, 62, 64, 65, 66, 67, 71, 73, 74, 79,
                    80, 83, 87, 88, 89, 90, 92, 93, 94, 95, 97, 106, 107, 108, 109,
                    110, 111, 119, 120, 123, 124, 125, 126, 127, 135, 140, 143, 148,
                    149, 150, 151, 152, 155, 158, 159, 160, 161, 165, 169, 175, 179,
                    180, 181, 182, 183, 184, 185, 186, 187, 196, 197, 198, 201, 202,
                    203, 204, 207, 208, 209, 210, 211, 214, 215, 216, 225, 232, 235,
                    236, 237, 245, 248, 251, 252, 255, 256, 257, 260, 261, 262, 264,
                    265, 273, 276, 281, 282, 283,
                ],
                "mixed": [],
            },
            "bleach": {
                "name": "Bleach",
                "filler": [
                    33, 50, *_span(64, 69), *_span(109, 128), *_span(147, 164),
                    *_span(167, 189), *_span(204, 215), *_span(217, 229),
                    *_span(265, 287), *_span(298, 315), 355,
                ],
                "mixed": [],
            },
        }
    )

"""Best-match resolver for filler database entries."""

import logging

from pydantic import BaseModel

from fillerinfo.core.filler_db import FillerDatabase
from fillerinfo.core.similarity import normalize, similarity

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.7  # Minimum similarity score for a fuzzy match


class MatchResult(BaseModel):
    """A filler database entry chosen for a title."""

    key: str
    score: float
    name: str


def find_best_match(
    name: str,
    database: FillerDatabase,
    threshold: float = DEFAULT_THRESHOLD,
) -> MatchResult | None:
    """Find the filler database entry that best matches *name*.

    An exact pass over normalized names runs first and returns the first hit
    with a score of exactly 1.0. Only when it finds nothing does the fuzzy
    pass score every record; a candidate replaces the running best only on a
    strict improvement, so among equal scores the earliest entry in database
    order wins.

    Args:
        name: Display name reported by the metadata provider.
        database: The filler database, iterated in insertion order.
        threshold: Minimum similarity a fuzzy candidate needs.

    Returns:
        The best MatchResult, or None if nothing reaches *threshold*.
    """
    wanted = normalize(name)
    for key, record in database.items():
        if normalize(record.name) == wanted:
            return MatchResult(key=key, score=1.0, name=record.name)

    best: MatchResult | None = None
    best_score = 0.0
    for key, record in database.items():
        score = similarity(name, record.name)
        if score > best_score and score >= threshold:
            best_score = score
            best = MatchResult(key=key, score=score, name=record.name)

    if best is None:
        logger.debug(f"No candidate for {name!r} reached {threshold:.2f}")
    return best

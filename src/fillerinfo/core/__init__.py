"""Core functionality for fillerinfo.

Exposes the classification entry point and the pieces it is built from:
title similarity, best-match resolution, the identity cache, and absolute
episode mapping.
"""

from fillerinfo.core.classifier import FillerClassifier, FillerStatus, describe
from fillerinfo.core.episode_mapper import EpisodeMapper, EpisodeQuery
from fillerinfo.core.filler_db import FillerRecord, load_filler_database
from fillerinfo.core.id_cache import IdentityCache
from fillerinfo.core.matcher import MatchResult, find_best_match

__all__ = [
    "EpisodeMapper",
    "EpisodeQuery",
    "FillerClassifier",
    "FillerRecord",
    "FillerStatus",
    "IdentityCache",
    "MatchResult",
    "describe",
    "find_best_match",
    "load_filler_database",
]

"""Series metadata: provider interface, models, caches and clients."""

from fillerinfo.metadata.base import MetadataProvider
from fillerinfo.metadata.cache import MemoryCache, NullCache
from fillerinfo.metadata.models import SeasonDetails, SeasonEpisode, SeriesHandle

__all__ = [
    "MetadataProvider",
    "MemoryCache",
    "NullCache",
    "SeasonDetails",
    "SeasonEpisode",
    "SeriesHandle",
]

"""Client implementations for metadata providers."""

from fillerinfo.metadata.clients.tmdb import TMDBClient

__all__ = ["TMDBClient"]

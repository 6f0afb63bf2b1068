"""Data models for series metadata.

Provider-agnostic shapes for the two things the episode reconciler needs from
a catalog: which series an external identifier points at, and how many
episodes each of its seasons has.
"""

from pydantic import BaseModel, Field


class SeriesHandle(BaseModel):
    """A series as found by its external identifier."""

    name: str
    """Display name used for filler database matching."""
    original_name: str | None = None
    """Name in the original language, if the provider reports one."""
    provider: str
    """The source of this metadata (e.g. 'tmdb')."""
    provider_id: str
    """The series ID in the provider's system, used for season lookups."""


class SeasonEpisode(BaseModel):
    """A single episode inside a season listing."""

    episode_number: int
    name: str | None = None
    absolute_episode_number: int | None = None


class SeasonDetails(BaseModel):
    """Episode listing for one season of a series."""

    season_number: int
    episodes: list[SeasonEpisode] = Field(default_factory=list)

    @property
    def episode_count(self) -> int:
        """Number of episodes in the season."""
        return len(self.episodes)

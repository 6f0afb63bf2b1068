"""Base abstraction for metadata providers.

The classifier and episode reconciler only talk to this interface, so a real
catalog API, a fixture or a test double can be swapped in freely.
"""

from abc import ABC, abstractmethod

from fillerinfo.metadata.models import SeasonDetails, SeriesHandle


class MetadataProvider(ABC):
    """Abstract base class for series metadata providers."""

    @abstractmethod
    async def find_series(self, identifier: str) -> SeriesHandle | None:
        """Find the series an external identifier refers to.

        Args:
            identifier: External ID such as an IMDb ``tt`` identifier.

        Returns:
            The SeriesHandle, or None if the provider knows no such series.

        Raises:
            MetadataUnavailable: If the provider could not be queried.
        """
        raise NotImplementedError

    @abstractmethod
    async def season_details(
        self, series_id: str, season_number: int
    ) -> SeasonDetails | None:
        """Fetch the episode listing for one season.

        Args:
            series_id: Provider-native series ID from SeriesHandle.provider_id.
            season_number: 1-based season number.

        Returns:
            SeasonDetails, or None if the season does not exist.

        Raises:
            MetadataUnavailable: If the provider could not be queried.
        """
        raise NotImplementedError

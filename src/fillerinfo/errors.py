"""Exception taxonomy for fillerinfo.

None of these reach the caller of :meth:`FillerClassifier.classify`; they are
raised and caught inside the pipeline so that each failure gets its own log
line before collapsing to "no data available".
"""


class FillerInfoError(Exception):
    """Base class for all fillerinfo errors."""


class NotFound(FillerInfoError):
    """Raised when an identifier has no known series at the metadata provider."""

    def __init__(self, identifier: str) -> None:
        """Initialize the error with the unresolved identifier."""
        super().__init__(f"No series found for {identifier}")
        self.identifier = identifier


class NoMatch(FillerInfoError):
    """Raised when a series has no filler database entry above the threshold."""

    def __init__(self, name: str) -> None:
        """Initialize the error with the unmatched display name."""
        super().__init__(f"No filler data found for {name!r}")
        self.name = name


class MetadataUnavailable(FillerInfoError):
    """Raised when the metadata provider cannot answer a request."""


class CacheUnavailable(FillerInfoError):
    """Raised when the persisted identity cache is missing or corrupt."""

# WARNING: This settings loader is for LOCAL DEVELOPMENT ONLY.
# Never commit your .env file or share your API keys.

"""Settings loader for metadata provider API keys.

Loads TMDB credentials from environment variables or a .env file.

Required .env keys:
- TMDB_API_KEY
- TMDB_READ_ACCESS_TOKEN (optional, sent as a bearer token when set)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class MissingAPIKeyError(Exception):
    """Raised when a required API key is missing from the environment or .env file."""

    def __init__(self, key: str) -> None:
        """Initialize the error with the missing key name."""
        super().__init__(
            f"Missing required API key: {key}\n"
            "Set it in the environment or in a .env file next to your working directory."
        )
        self.key = key


class Settings(BaseSettings):
    """Settings for metadata provider API keys."""

    TMDB_API_KEY: str = ""
    TMDB_READ_ACCESS_TOKEN: str | None = None

    model_config = SettingsConfigDict(extra="allow", env_file=".env")

    def require_keys(self) -> None:
        """Raise MissingAPIKeyError if any required key is missing."""
        required = ["TMDB_API_KEY"]
        for key in required:
            if not getattr(self, key, None):
                raise MissingAPIKeyError(key)

"""Seeder configuration"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings

from seeder.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Seeder settings"""

    # Document store
    MONGODB_URL: str = "mongodb://localhost:27017"  # Override in .env
    MONGODB_DB_NAME: str = "govariants"
    USERS_COLLECTION: str = "users"

    # Driver timeouts (milliseconds) so an unreachable store fails instead of hanging
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 10000
    MONGODB_CONNECT_TIMEOUT_MS: int = 10000
    MONGODB_SOCKET_TIMEOUT_MS: int = 30000

    # Generation
    # Leave unset for a different result on every run
    RANDOM_SEED: Optional[int] = None
    # "overwrite" replaces the whole ranking field, "merge" only touches selected variants
    RANKING_MODE: Literal["overwrite", "merge"] = "overwrite"
    CLAMP_RATINGS: bool = True
    DRY_RUN: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    # Sentry Error Tracking (optional - leave empty to disable)
    SENTRY_DSN: str = ""

    @property
    def merge_rankings(self) -> bool:
        return self.RANKING_MODE == "merge"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",  # Ignore extra environment variables not defined in Settings
    }


def validate_settings(config: Settings) -> None:
    """Validate connection settings before touching the store

    Raises:
        ConfigurationError: If the store URL or collection settings are unusable
    """
    if not config.MONGODB_URL.startswith(("mongodb://", "mongodb+srv://")):
        raise ConfigurationError(
            f"Invalid MONGODB_URL format. Must start with 'mongodb://' or 'mongodb+srv://'. "
            f"Got: {config.MONGODB_URL[:50]}..."
        )

    missing = [
        name
        for name in ("MONGODB_DB_NAME", "USERS_COLLECTION")
        if not getattr(config, name).strip()
    ]
    if missing:
        raise ConfigurationError(
            f"Missing required settings: {', '.join(missing)}. "
            f"Please set them in your .env file or environment."
        )


settings = Settings()

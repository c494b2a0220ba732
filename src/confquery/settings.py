"""Settings for confquery."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfQuerySettings(BaseSettings):
    """confquery configuration settings."""

    # Logging
    LOG_LEVEL: str = "INFO"

    # Validator
    QUERY_MAX_DEPTH: int = 32

    # Configuration store
    QUERY_CONFIG_COLLECTION: str = "queryConfigs"
    QUERY_CONFIG_CACHE_ENABLED: bool = True

    # MongoDB
    MONGODB_URI: Optional[str] = None
    MONGODB_DATABASE: str = "confquery"
    MONGODB_TIMEOUT_MS: int = 5000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = ConfQuerySettings()

"""
Application settings for flock-commons.

Environment-driven configuration shared by every service that embeds the
library. Values are read from the process environment and an optional
``.env`` file.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import CacheTTL, DEFAULT_SEARCH_LIMIT


class FlockSettings(BaseSettings):
    """Settings for services built on flock-commons."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Core Application Settings
    app_name: str = Field(default="flock")
    environment: str = Field(default="development")

    # Database Configuration
    database_url: Optional[str] = Field(default=None, description="PostgreSQL DSN")
    db_schema: str = Field(default="public")
    db_pool_min_size: int = Field(default=2)
    db_pool_max_size: int = Field(default=10)
    db_command_timeout: float = Field(default=30.0)

    # Cache Configuration
    cache_ttl_transactions: int = Field(default=CacheTTL.FINANCIAL_TRANSACTIONS)

    # Query Configuration
    transaction_search_limit: int = Field(default=DEFAULT_SEARCH_LIMIT)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_verbosity: str = Field(default="NORMAL")
    log_format: str = Field(default="simple")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


@lru_cache()
def get_settings() -> FlockSettings:
    """Get the process-wide settings instance."""
    return FlockSettings()

"""
Application configuration using pydantic-settings.
Manages crawl, stats lookup and server settings.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application settings
    APP_NAME: str = "Headline Aggregator"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Crawl settings
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    CONNECT_TIMEOUT_SECONDS: float = 10.0
    CRAWL_CONCURRENTLY: bool = False
    CRAWL_FAIL_FAST: bool = False
    SITES_FILE: Optional[str] = None

    # Pandemic statistics API
    STATS_API_URL: str = "https://coronavirus-19-api.herokuapp.com"

    @property
    def stats_country_url(self) -> str:
        """URL template for a single-country lookup."""
        return f"{self.STATS_API_URL.rstrip('/')}/countries/{{country}}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""
Client configuration loaded from environment variables.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

DEFAULT_API_HOST = "https://prd.winbooksapis.be/wow/v2/"


class Settings(BaseSettings):
    """Client settings from WINBOOKS_* environment variables."""

    # Winbooks on Web API
    api_host: str = DEFAULT_API_HOST
    timeout: float = 30.0

    # Raise instead of returning None when a fetch gets a non-200 status
    strict_status: bool = False

    # Optional pre-seeded credentials (persisted by the caller)
    email: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    folder: Optional[str] = None

    log_level: str = "INFO"

    class Config:
        env_prefix = "WINBOOKS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

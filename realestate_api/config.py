"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings

from realestate_api import __version__


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "Real Estate API"
    service_name: str = "real-estate-api"
    version: str = __version__
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server (PORT is set by the hosting platform)
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

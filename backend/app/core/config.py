"""
Application configuration using Pydantic BaseSettings.
Loads environment variables and provides typed configuration.
"""

from pydantic_settings import BaseSettings
from typing import List


PRODUCTION = "production"
TEST = "test"
DEVELOPMENT = "development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project metadata
    PROJECT_NAME: str = "HUMS API"
    VERSION: str = "0.1.0"
    API_V1_PREFIX: str = "/api/v1"

    # Runtime mode: "production", "test", anything else is treated as development
    ENVIRONMENT: str = DEVELOPMENT
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 100

    # External authentication / user-management service
    AUTH_SERVICE_URL: str = "http://localhost:3001/api/v1"
    AUTH_SERVICE_TIMEOUT: float = 30.0
    AUTH_SERVICE_MAX_RETRIES: int = 3

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

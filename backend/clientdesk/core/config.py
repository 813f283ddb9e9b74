"""
Application configuration using Pydantic BaseSettings.
Loads environment variables and provides typed configuration.
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project metadata
    PROJECT_NAME: str = "ClientDesk Admin API"
    VERSION: str = "0.1.0"
    API_V1_PREFIX: str = "/api/v1"

    # Upstream REST backend (system of record for clients and subscriptions)
    BACKEND_API_URL: str = "http://localhost:5000/api"
    BACKEND_TIMEOUT_SECONDS: int = 10
    BACKEND_MAX_RETRIES: int = 3
    BACKEND_RETRY_DELAY: float = 0.5

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60

    # Client listing
    DEFAULT_PAGE_SIZE: int = 12
    MAX_PAGE_SIZE: int = 100

    # Length of the subscription fabricated for records that have none
    SYNTHESIZED_SUBSCRIPTION_DAYS: int = 30

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

"""
Application Configuration
Centralized application settings
"""
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # MongoDB
    mongo_url: str = "mongodb://localhost:27017"
    db_name: str = "checkday"
    store_timeout_seconds: float = 5.0  # Upper bound for a single store call

    # JWT
    jwt_secret: str = "your-super-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expiration_days: int = 30

    # Confirmation tokens for destructive resets
    confirmation_ttl_minutes: int = 5

    # Encryption
    encryption_key: str = "default-encryption-key-change-in-production"

    # Calendar
    timezone: Optional[str] = None  # IANA name, server local time when empty

    # Recap / streak windows
    recap_default_days: int = 7
    recap_max_days: int = 30
    streak_window_days: int = Field(default=30, ge=1)

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    allowed_origins: str = "*"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()

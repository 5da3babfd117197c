"""Storefront Configuration"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .storage import DEFAULT_QUOTA_BYTES


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file="config/.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Store API
    store_api_url: str = "http://localhost:5000"
    request_timeout: float = 30.0

    # Local cart storage
    storage_dir: Optional[str] = None  # defaults to ~/.storefront
    cart_storage_key: str = "cart"
    storage_quota_bytes: int = DEFAULT_QUOTA_BYTES

    # Mock store backend (development)
    mock_store_host: str = "0.0.0.0"
    mock_store_port: int = 5000


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

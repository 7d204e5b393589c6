"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (DOCVAULT_*)."""

    model_config = SettingsConfigDict(
        env_prefix="DOCVAULT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Document API
    api_base_url: str = "http://localhost:8080/api"
    request_timeout_seconds: float = 30.0

    # Client-side storage (stands in for browser local storage)
    storage_path: str = ".docvault/storage.json"
    session_key: str = "documentVaultUser"

    # Mock login - NOT a security boundary
    admin_username: str = "admin"
    admin_password: SecretStr = SecretStr("admin123")
    admin_email: str = "admin@documentvault.com"
    login_delay_seconds: float = 1.0

    # UI
    notice_ttl_seconds: float = 3.0
    recent_window_days: int = 7

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

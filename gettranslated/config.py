"""
SDK configuration.

Loads settings from environment variables (prefixed ``GETTRANSLATED_``)
with sensible defaults, and holds the protocol constants shared with the
other GetTranslated SDKs.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# Protocol constants
# =============================================================================

# Sent as "version" with every request. The letter identifies the platform.
SDK_VERSION = "P1.0.0"

DEFAULT_SERVER_URL = "https://www.gettranslated.ai"

# Anonymous user ids: 12 random characters from this alphabet, then "@<app>"
ID_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ1234567890"
ID_LENGTH = 12


class Endpoints:
    """Endpoint paths relative to the server base URL."""
    
    INIT = "/client/init"
    LOGIN = "/client/login"
    TRANSLATE = "/client/string"
    SYNC = "/client/sync"


# =============================================================================
# Settings
# =============================================================================


class Settings(BaseSettings):
    """SDK settings loaded from environment."""
    
    model_config = SettingsConfigDict(
        env_prefix="GETTRANSLATED_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    # ==========================================================================
    # Server
    # ==========================================================================
    
    api_key: str = ""
    server_url: str = DEFAULT_SERVER_URL
    request_timeout: float = 30.0
    
    # ==========================================================================
    # Application
    # ==========================================================================
    
    # Bundle identifier equivalent; used in anonymous ids and init requests
    app_package: str = "python-app"
    
    # ==========================================================================
    # Local state
    # ==========================================================================
    
    log_level: str = "warn"
    storage_path: str = ""  # empty = in-memory store
    
    @property
    def base_url(self) -> str:
        return normalize_server_url(self.server_url) or DEFAULT_SERVER_URL


class InitOptions(BaseModel):
    """Options accepted by ``GetTranslated.initialize``."""
    
    server_url: str | None = None
    
    @classmethod
    def with_server_url(cls, server_url: str) -> InitOptions:
        return cls(server_url=server_url)


def normalize_server_url(value: str | None) -> str | None:
    """
    Trim a server URL and strip its trailing slash.
    
    Returns None for empty input so callers keep their current server.
    """
    if value is None:
        return None
    url = value.strip().rstrip("/")
    return url or None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

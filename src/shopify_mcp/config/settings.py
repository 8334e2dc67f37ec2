"""Shopify MCP configuration module."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_API_VERSION = "2024-07"


class Settings(BaseSettings):
    """Server settings loaded from the environment (and an optional .env file)."""

    # === Shopify ===
    shopify_access_token: str = Field(default="", alias="SHOPIFY_ACCESS_TOKEN")
    myshopify_domain: str = Field(default="", alias="MYSHOPIFY_DOMAIN")
    api_version: str = Field(default=DEFAULT_API_VERSION, alias="API_VERSION")
    default_location_id: str = Field(default="1", alias="SHOPIFY_DEFAULT_LOCATION_ID")

    # === Transport ===
    request_timeout_ms: int = Field(default=30000, gt=0, alias="REQUEST_TIMEOUT")

    # === System Config ===
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {"env_file": ".env", "extra": "ignore", "populate_by_name": True}

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def request_timeout(self) -> float:
        """Request timeout in seconds, as httpx expects it."""
        return self.request_timeout_ms / 1000

    @property
    def missing_credentials(self) -> list[str]:
        missing = []
        if not self.shopify_access_token:
            missing.append("SHOPIFY_ACCESS_TOKEN")
        if not self.myshopify_domain:
            missing.append("MYSHOPIFY_DOMAIN")
        return missing


# Singleton instance
_settings: Settings | None = None


def get_settings(**overrides: Any) -> Settings:
    """Get or create the global Settings singleton.

    Overrides (field names, e.g. from command-line flags) only apply on the
    call that creates the instance; ``None`` values are ignored so that an
    absent flag falls back to the environment.
    """
    global _settings
    if _settings is None:
        explicit = {k: v for k, v in overrides.items() if v is not None}
        _settings = Settings(**explicit)  # type: ignore[arg-type]
    return _settings


def reset_settings() -> None:
    """Drop the cached Settings (used by tests)."""
    global _settings
    _settings = None

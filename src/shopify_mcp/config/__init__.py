"""Shopify MCP config package."""

from shopify_mcp.config.settings import (
    DEFAULT_API_VERSION,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = ["DEFAULT_API_VERSION", "Settings", "get_settings", "reset_settings"]

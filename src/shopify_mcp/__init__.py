"""Shopify MCP — store data tools for AI agents over the Model Context Protocol."""

__version__ = "1.0.5"

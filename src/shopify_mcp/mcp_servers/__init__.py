"""MCP protocol adapters."""

from shopify_mcp.mcp_servers.shopify_server import create_server, serve

__all__ = ["create_server", "serve"]

"""Shopify MCP core package."""

from shopify_mcp.core.client import GraphQLRequester, ShopifyGraphQLClient
from shopify_mcp.core.envelope import MutationPayload, UserError
from shopify_mcp.core.errors import (
    BusinessError,
    ConfigurationError,
    InputValidationError,
    NotFoundError,
    ShopifyMCPError,
    ToolExecutionError,
    TransportError,
    UnknownToolError,
    raise_if_business_errors,
    wrap_execution_error,
)
from shopify_mcp.core.formatters import extract_token, qualify, unwrap_edges
from shopify_mcp.core.registry import ToolRegistry
from shopify_mcp.core.tool import ShopifyTool, ToolInput, pick

__all__ = [
    "GraphQLRequester",
    "ShopifyGraphQLClient",
    "MutationPayload",
    "UserError",
    "ShopifyMCPError",
    "InputValidationError",
    "BusinessError",
    "NotFoundError",
    "TransportError",
    "ConfigurationError",
    "UnknownToolError",
    "ToolExecutionError",
    "raise_if_business_errors",
    "wrap_execution_error",
    "qualify",
    "extract_token",
    "unwrap_edges",
    "ToolRegistry",
    "ShopifyTool",
    "ToolInput",
    "pick",
]

"""MCP surface: tools/list and tools/call through the low-level server handlers."""

import json

import pytest
from mcp import types

from shopify_mcp.mcp_servers.shopify_server import create_server
from shopify_mcp.tools import build_registry


async def call(app, name, arguments):
    handler = app.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    return (await handler(request)).root


class TestShopifyServer:

    @pytest.mark.asyncio
    async def test_list_tools(self, fake_client):
        app = create_server(build_registry(fake_client))
        handler = app.request_handlers[types.ListToolsRequest]
        result = (await handler(types.ListToolsRequest(method="tools/list"))).root

        names = [tool.name for tool in result.tools]
        assert len(names) == 21
        assert "adjust-inventory" in names
        schema = next(t for t in result.tools if t.name == "adjust-inventory").inputSchema
        assert set(schema["required"]) == {"inventoryItemId", "locationId", "availableDelta"}

    @pytest.mark.asyncio
    async def test_call_tool_returns_single_text_block(self, make_client):
        client = make_client({"locations": {"edges": [{"node": {"id": "gid://shopify/Location/1"}}]}})
        app = create_server(build_registry(client))

        result = await call(app, "get-locations", {"active": True})

        assert not result.isError
        assert len(result.content) == 1
        assert json.loads(result.content[0].text) == {"locations": [{"id": "gid://shopify/Location/1"}]}

    @pytest.mark.asyncio
    async def test_failure_becomes_error_result(self, make_client):
        client = make_client({"product": None})
        app = create_server(build_registry(client))

        result = await call(app, "get-product-by-id", {"productId": "123"})

        assert result.isError
        assert result.content[0].text == "Failed to fetch product details: Product not found"

    @pytest.mark.asyncio
    async def test_unknown_tool_is_error_result(self, fake_client):
        app = create_server(build_registry(fake_client))
        result = await call(app, "delete-everything", {})
        assert result.isError
        assert "Unknown tool: delete-everything" in result.content[0].text

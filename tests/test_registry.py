"""Registry lookup, validation and serialization."""

import json

import pytest

from shopify_mcp.core.errors import (
    BusinessError,
    ConfigurationError,
    InputValidationError,
    UnknownToolError,
)
from shopify_mcp.core.registry import ToolRegistry
from shopify_mcp.tools import build_registry
from shopify_mcp.tools.products import GetProducts

EXPECTED_TOOLS = [
    "get-products",
    "get-product-by-id",
    "create-product",
    "get-customers",
    "create-customer",
    "update-customer",
    "get-customer-orders",
    "get-orders",
    "get-order-by-id",
    "update-order",
    "create-order",
    "create-fulfillment",
    "create-collection",
    "create-metafield",
    "get-inventory-levels",
    "get-inventory-items",
    "get-locations",
    "adjust-inventory",
    "set-inventory-tracking",
    "connect-inventory-to-location",
    "disconnect-inventory-from-location",
]


class TestToolRegistry:

    def test_build_registry_registers_every_tool(self, fake_client):
        registry = build_registry(fake_client)
        assert [t.name for t in registry.tools()] == EXPECTED_TOOLS

    def test_every_tool_publishes_an_object_schema(self, fake_client):
        for tool in build_registry(fake_client).tools():
            schema = tool.input_schema
            assert schema["type"] == "object"
            assert tool.description

    def test_schema_uses_camel_case_names(self, fake_client):
        schema = build_registry(fake_client).get("create-order").input_schema
        assert "lineItems" in schema["properties"]
        assert "lineItems" in schema["required"]
        assert "line_items" not in schema["properties"]

    def test_duplicate_name_is_configuration_error(self, fake_client):
        registry = ToolRegistry([GetProducts(fake_client)])
        with pytest.raises(ConfigurationError):
            registry.register(GetProducts(fake_client))

    def test_tool_without_client_fails_at_registration(self):
        with pytest.raises(ConfigurationError):
            GetProducts(None)

    @pytest.mark.asyncio
    async def test_unknown_tool(self, fake_client):
        registry = build_registry(fake_client)
        with pytest.raises(UnknownToolError) as exc:
            await registry.invoke("delete-everything", {})
        assert not isinstance(exc.value, (InputValidationError, BusinessError))
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_validation_error_names_field(self, fake_client):
        registry = build_registry(fake_client)
        with pytest.raises(InputValidationError) as exc:
            await registry.invoke("create-customer", {"email": "not-an-email"})
        assert "email" in str(exc.value)
        assert exc.value.fields == ["email"]
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_invoke_returns_json_text(self, make_client):
        client = make_client({"products": {"edges": []}})
        registry = build_registry(client)
        text = await registry.invoke("get-products", {})
        assert json.loads(text) == {"products": []}

    @pytest.mark.asyncio
    async def test_unknown_argument_keys_are_ignored(self, make_client):
        client = make_client({"products": {"edges": []}})
        registry = build_registry(client)
        await registry.invoke("get-products", {"limit": 3, "colour": "red"})
        assert client.last_variables == {"first": 3}

"""ShopifyGraphQLClient against an in-process httpx transport."""

import json

import httpx
import pytest

from shopify_mcp.config.settings import Settings
from shopify_mcp.core.client import ShopifyGraphQLClient
from shopify_mcp.core.errors import ConfigurationError, TransportError


def make_client(handler):
    return ShopifyGraphQLClient(
        domain="demo.myshopify.com",
        access_token="shpat_test",
        transport=httpx.MockTransport(handler),
    )


class TestShopifyGraphQLClient:

    def test_missing_credentials_fail_fast(self):
        with pytest.raises(ConfigurationError):
            ShopifyGraphQLClient(domain="", access_token="x")
        with pytest.raises(ConfigurationError):
            ShopifyGraphQLClient(domain="demo.myshopify.com", access_token="")

    def test_endpoint_uses_api_version(self):
        client = ShopifyGraphQLClient("demo.myshopify.com", "t", api_version="2025-01")
        assert client.endpoint == "https://demo.myshopify.com/admin/api/2025-01/graphql.json"

    def test_from_settings(self):
        settings = Settings(
            shopify_access_token="t",
            myshopify_domain="demo.myshopify.com",
            request_timeout_ms=5000,
        )
        client = ShopifyGraphQLClient.from_settings(settings)
        assert client.endpoint == "https://demo.myshopify.com/admin/api/2024-07/graphql.json"

    @pytest.mark.asyncio
    async def test_posts_query_and_variables_once(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"shop": {"name": "Demo"}}})

        client = make_client(handler)
        data = await client.request("query { shop { name } }", {"a": 1})

        assert data == {"shop": {"name": "Demo"}}
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://demo.myshopify.com/admin/api/2024-07/graphql.json"
        assert request.headers["X-Shopify-Access-Token"] == "shpat_test"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"query": "query { shop { name } }", "variables": {"a": 1}}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_non_2xx_is_transport_error(self):
        client = make_client(lambda r: httpx.Response(401, text="Unauthorized"))
        with pytest.raises(TransportError) as exc:
            await client.request("query { shop { name } }")
        assert exc.value.status_code == 401

    @pytest.mark.asyncio
    async def test_graphql_errors_array_is_transport_error(self):
        body = {"errors": [{"message": "Field 'nope' doesn't exist on type 'Shop'"}]}
        client = make_client(lambda r: httpx.Response(200, json=body))
        with pytest.raises(TransportError) as exc:
            await client.request("query { shop { nope } }")
        assert "doesn't exist" in str(exc.value)

    @pytest.mark.asyncio
    async def test_malformed_body_is_transport_error(self):
        client = make_client(lambda r: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(TransportError):
            await client.request("query { shop { name } }")

    @pytest.mark.asyncio
    async def test_missing_data_is_transport_error(self):
        client = make_client(lambda r: httpx.Response(200, json={"extensions": {}}))
        with pytest.raises(TransportError):
            await client.request("query { shop { name } }")

    @pytest.mark.asyncio
    async def test_network_failure_is_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(TransportError):
            await client.request("query { shop { name } }")

    @pytest.mark.asyncio
    async def test_closed_client_is_configuration_error(self):
        client = make_client(lambda r: httpx.Response(200, json={"data": {}}))
        await client.aclose()
        with pytest.raises(ConfigurationError):
            await client.request("query { shop { name } }")

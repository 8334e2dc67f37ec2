"""
Shopify Admin GraphQL transport.

One ``ShopifyGraphQLClient`` is built at startup and handed to every tool.
It owns a single ``httpx.AsyncClient`` and is read-only after construction,
so concurrent tool calls can share it freely.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from shopify_mcp.config.settings import DEFAULT_API_VERSION
from shopify_mcp.core.errors import ConfigurationError, TransportError

if TYPE_CHECKING:
    from shopify_mcp.config.settings import Settings

logger = logging.getLogger("shopify_mcp.client")

ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


class GraphQLRequester(Protocol):
    """The only capability tools need from the transport."""

    async def request(
        self, document: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]: ...


def endpoint_for(domain: str, api_version: str = DEFAULT_API_VERSION) -> str:
    return f"https://{domain}/admin/api/{api_version}/graphql.json"


class ShopifyGraphQLClient:
    """Executes GraphQL documents against one store's Admin API."""

    def __init__(
        self,
        domain: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not domain:
            raise ConfigurationError("Shopify domain is required to build the GraphQL client")
        if not access_token:
            raise ConfigurationError("Shopify access token is required to build the GraphQL client")

        self.domain = domain
        self.api_version = api_version
        self.endpoint = endpoint_for(domain, api_version)
        self._http = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                ACCESS_TOKEN_HEADER: access_token,
                "Content-Type": "application/json",
            },
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> ShopifyGraphQLClient:
        return cls(
            domain=settings.myshopify_domain,
            access_token=settings.shopify_access_token,
            api_version=settings.api_version,
            timeout=settings.request_timeout,
        )

    @property
    def closed(self) -> bool:
        return self._http.is_closed

    async def request(
        self, document: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        POST ``{query, variables}`` once and return the response's ``data``.

        Raises:
            TransportError: network failure, non-2xx status, a body that is
                not JSON or has no ``data``, or a GraphQL ``errors`` array.
            ConfigurationError: the client has been closed.
        """
        if self.closed:
            raise ConfigurationError("GraphQL client is closed")

        try:
            resp = await self._http.post(
                self.endpoint,
                json={"query": document, "variables": variables or {}},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Shopify request failed: {e!r}")
            raise TransportError(f"Network error talking to {self.domain}: {e}") from e

        if not resp.is_success:
            logger.warning(f"Shopify responded {resp.status_code}")
            raise TransportError(
                f"Shopify API returned HTTP {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise TransportError(
                "Shopify API returned a malformed JSON body",
                status_code=resp.status_code,
            ) from e

        if not isinstance(body, dict):
            raise TransportError(
                "Shopify API returned an unexpected body", status_code=resp.status_code
            )

        errors = body.get("errors")
        if errors:
            if isinstance(errors, list):
                detail = "; ".join(
                    e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors
                )
            else:
                detail = str(errors)
            logger.debug(f"GraphQL errors: {detail}")
            raise TransportError(f"GraphQL error: {detail}", status_code=resp.status_code)

        data = body.get("data")
        if not isinstance(data, dict):
            raise TransportError(
                "Shopify API response has no data", status_code=resp.status_code
            )
        return data

    async def aclose(self) -> None:
        await self._http.aclose()

"""Shared fixtures: a recording GraphQL client and clean settings."""

from __future__ import annotations

from typing import Any

import pytest

from shopify_mcp.config.settings import reset_settings


class FakeShopifyClient:
    """Stands in for ShopifyGraphQLClient: records calls, replays one response."""

    def __init__(self, response: dict[str, Any] | None = None, error: Exception | None = None):
        self.response = response if response is not None else {}
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def request(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        self.calls.append((document, variables or {}))
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_document(self) -> str:
        return self.calls[-1][0]

    @property
    def last_variables(self) -> dict[str, Any]:
        return self.calls[-1][1]


@pytest.fixture
def fake_client():
    return FakeShopifyClient()


@pytest.fixture
def make_client():
    def _make(response: dict[str, Any] | None = None, error: Exception | None = None):
        return FakeShopifyClient(response=response, error=error)

    return _make


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Every test starts without cached settings or Shopify env vars."""
    for name in (
        "SHOPIFY_ACCESS_TOKEN",
        "MYSHOPIFY_DOMAIN",
        "API_VERSION",
        "REQUEST_TIMEOUT",
        "SHOPIFY_DEFAULT_LOCATION_ID",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)  # no stray .env
    reset_settings()
    yield
    reset_settings()

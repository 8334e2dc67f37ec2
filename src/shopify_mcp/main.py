"""
Shopify MCP — process entry point.

Usage:
    shopify-mcp --accessToken=<token> --domain=<store>.myshopify.com

Flags win over environment variables (``SHOPIFY_ACCESS_TOKEN``,
``MYSHOPIFY_DOMAIN``, ``API_VERSION``), which are also read from ``.env``.
stdout carries the MCP stream, so all logging goes to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from dotenv import find_dotenv, load_dotenv

from shopify_mcp.config.settings import Settings, get_settings
from shopify_mcp.core.client import ShopifyGraphQLClient
from shopify_mcp.mcp_servers.shopify_server import create_server, serve
from shopify_mcp.tools import build_registry

logger = logging.getLogger("shopify_mcp")

FLAG_HINTS = {
    "SHOPIFY_ACCESS_TOKEN": "--accessToken=your_token",
    "MYSHOPIFY_DOMAIN": "--domain=your-store.myshopify.com",
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="shopify-mcp",
        description="MCP server for the Shopify Admin GraphQL API",
    )
    parser.add_argument("--accessToken", dest="access_token", help="Shopify Admin API access token")
    parser.add_argument("--domain", help="Store domain, e.g. your-store.myshopify.com")
    parser.add_argument("--apiVersion", dest="api_version", help="Admin API version (default 2024-07)")
    return parser.parse_args(argv)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_settings(args: argparse.Namespace) -> Settings:
    load_dotenv(find_dotenv(usecwd=True))
    return get_settings(
        shopify_access_token=args.access_token,
        myshopify_domain=args.domain,
        api_version=args.api_version,
    )


def check_credentials(settings: Settings) -> None:
    """Exit with status 1 when the token or domain is missing."""
    missing = settings.missing_credentials
    if not missing:
        return
    for name in missing:
        print(f"Error: {name} is required.", file=sys.stderr)
        print("Please provide it via command line argument or .env file.", file=sys.stderr)
        print(f"  Command line: {FLAG_HINTS[name]}", file=sys.stderr)
    sys.exit(1)


async def main(settings: Settings) -> None:
    client = ShopifyGraphQLClient.from_settings(settings)
    try:
        registry = build_registry(client, settings)
        app = create_server(registry)
        logger.info(
            f"Shopify MCP server ready: {len(registry)} tools, "
            f"store {settings.myshopify_domain}, API {settings.api_version}"
        )
        await serve(app)
    finally:
        await client.aclose()


def run(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = load_settings(args)
    check_credentials(settings)
    configure_logging(settings.log_level)
    try:
        asyncio.run(main(settings))
    except KeyboardInterrupt:
        logger.info("Shopify MCP server stopped")


if __name__ == "__main__":
    run()

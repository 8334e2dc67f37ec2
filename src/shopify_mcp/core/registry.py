"""
Tool registry: looks tools up by name and runs them.

The MCP surface only ever talks to the registry; adding a tool means
registering one more ``ShopifyTool`` instance.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Iterable

from shopify_mcp.core.errors import ConfigurationError, UnknownToolError
from shopify_mcp.core.tool import ShopifyTool

logger = logging.getLogger("shopify_mcp.registry")


class ToolRegistry:

    def __init__(self, tools: Iterable[ShopifyTool] = ()) -> None:
        self._tools: dict[str, ShopifyTool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: ShopifyTool) -> None:
        if tool.name in self._tools:
            raise ConfigurationError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> ShopifyTool:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(f"Unknown tool: {name}") from None

    def tools(self) -> list[ShopifyTool]:
        return list(self._tools.values())

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def invoke(self, name: str, arguments: dict[str, Any] | None) -> str:
        """Validate, run and JSON-encode one tool call."""
        tool = self.get(name)
        params = tool.validate(arguments)

        logger.info(f"Invoking {name}")
        started = time.monotonic()
        try:
            result = await tool.run(params)
        except Exception:
            logger.error(f"{name} failed after {time.monotonic() - started:.2f}s")
            raise
        logger.debug(f"{name} finished in {time.monotonic() - started:.2f}s")
        return json.dumps(result)

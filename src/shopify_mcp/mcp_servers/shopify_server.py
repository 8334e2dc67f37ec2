"""
Shopify MCP Server — store data as MCP tools.

Tools come from a ``ToolRegistry``; this module only adapts the registry to
the MCP protocol. Failures are raised out of ``call_tool`` so the SDK
reports them as ``isError`` results carrying the message.
"""

from __future__ import annotations

from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from shopify_mcp.core.registry import ToolRegistry

SERVER_NAME = "shopify"


def create_server(registry: ToolRegistry) -> Server:
    app = Server(SERVER_NAME)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in registry.tools()
        ]

    # Arguments are validated by each tool's input model, not by the SDK.
    @app.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Route to the registered tool."""
        text = await registry.invoke(name, arguments)
        return [TextContent(type="text", text=text)]

    return app


async def serve(app: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())

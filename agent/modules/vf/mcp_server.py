"""VectorForge tools over the MCP stdio transport.

Serves the same registry as the FastAPI service. Logs go to stderr since
stdout carries the protocol stream.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Any

import structlog
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from modules.vf.client import VectorForgeClient
from modules.vf.envelope import envelope_text
from modules.vf.registry import ToolRegistry
from modules.vf.tools import VFTools
from shared.config import get_settings
from shared.schemas.tools import ToolDefinition, ToolResult

logger = structlog.get_logger()


def to_mcp_tool(definition: ToolDefinition) -> Tool:
    return Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=definition.input_schema(),
    )


def to_call_tool_result(envelope: ToolResult) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=envelope_text(envelope))],
        isError=not envelope.success,
    )


def create_server(registry: ToolRegistry) -> Server:
    server = Server("vectorforge")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [to_mcp_tool(d) for d in registry.definitions()]

    # Argument checking is done by the handlers so errors keep their messages.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        return to_call_tool_result(await registry.call(name, arguments))

    return server


def run() -> None:
    """Run the MCP server on stdin/stdout."""
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
    settings = get_settings()
    settings.require_vectorforge()
    server = create_server(ToolRegistry(VFTools(VectorForgeClient(settings))))
    logger.info("vf_mcp_server_starting", api_base_url=settings.vf_api_base_url)

    async def main():
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    asyncio.run(main())


if __name__ == "__main__":
    run()

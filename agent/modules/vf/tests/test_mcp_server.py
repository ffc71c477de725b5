"""Tests for the MCP stdio adapter."""

from __future__ import annotations

import json
from importlib.metadata import version

import pytest
from mcp.types import CallToolRequest, ListToolsRequest

from modules.vf.mcp_server import create_server, to_call_tool_result, to_mcp_tool
from modules.vf.manifest import MANIFEST
from shared.schemas.tools import ToolResult


def test_to_mcp_tool_schema():
    register = next(t for t in MANIFEST.tools if t.name == "vf.register")
    tool = to_mcp_tool(register)

    assert tool.name == "vf.register"
    assert tool.inputSchema["type"] == "object"
    assert set(tool.inputSchema["required"]) == {"object_id", "data_type", "hash_mode"}
    assert tool.inputSchema["properties"]["hash_mode"]["enum"] == [
        "content",
        "json",
        "embedding",
        "image",
        "custom",
    ]


def test_success_result():
    result = to_call_tool_result(ToolResult(tool_name="vf.keys.list", success=True, result={"keys": []}))
    assert result.isError is False
    assert len(result.content) == 1
    assert json.loads(result.content[0].text) == {"keys": []}


def test_error_result():
    result = to_call_tool_result(
        ToolResult(tool_name="vf.verify", success=False, error="Unknown mode for hash_mode: 'potato'")
    )
    assert result.isError is True
    assert json.loads(result.content[0].text) == {"error": "Unknown mode for hash_mode: 'potato'"}


def test_server_registers_handlers(registry):
    server = create_server(registry)
    assert ListToolsRequest in server.request_handlers
    assert CallToolRequest in server.request_handlers


@pytest.mark.asyncio
async def test_list_tools_handler(registry):
    server = create_server(registry)
    response = await server.request_handlers[ListToolsRequest](
        ListToolsRequest(method="tools/list")
    )
    names = {t.name for t in response.root.tools}
    assert names == {t.name for t in MANIFEST.tools}


def test_installed_mcp_is_1x():
    # create_server is written against the 1.x decorator API
    assert version("mcp").split(".")[0] == "1"

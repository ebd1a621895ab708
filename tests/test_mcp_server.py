"""Tests for the stdio MCP server's request handlers."""

import mcp.types as types
import pytest
from mcp.shared.exceptions import McpError

from tavilysearch.mcp_server import build_server


def _call_request(name, arguments):
    return types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )


@pytest.mark.asyncio
async def test_list_tools(dispatcher):
    server = build_server(dispatcher)
    handler = server.request_handlers[types.ListToolsRequest]

    response = await handler(types.ListToolsRequest(method="tools/list"))

    tools = response.root.tools
    assert [t.name for t in tools] == ["tavily_search", "tavily_get_search_context", "tavily_qna_search"]
    assert tools[1].inputSchema["properties"]["max_tokens"]["default"] == 2000


@pytest.mark.asyncio
async def test_call_tool_returns_text_content(dispatcher):
    server = build_server(dispatcher)
    handler = server.request_handlers[types.CallToolRequest]

    response = await handler(_call_request("tavily_qna_search", {"query": "rust ownership"}))

    result = response.root
    assert result.isError is False
    assert result.content[0].type == "text"
    assert result.content[0].text == "Rust uses ownership to manage memory."


@pytest.mark.asyncio
async def test_call_tool_error_result(dispatcher):
    server = build_server(dispatcher)
    handler = server.request_handlers[types.CallToolRequest]

    response = await handler(_call_request("tavily_search", {}))

    assert response.root.isError is True
    assert "Query parameter is required" in response.root.content[0].text


@pytest.mark.asyncio
async def test_unknown_tool_raises_method_not_found(dispatcher):
    server = build_server(dispatcher)
    handler = server.request_handlers[types.CallToolRequest]

    with pytest.raises(McpError) as exc_info:
        await handler(_call_request("tavily_crawl", {"query": "q"}))

    assert exc_info.value.error.code == types.METHOD_NOT_FOUND
    assert exc_info.value.error.message == "Unknown tool: tavily_crawl"


def test_server_advertises_tools_capability(dispatcher):
    server = build_server(dispatcher)
    options = server.create_initialization_options()
    assert options.server_name == "tavily-search-mcp"
    assert options.capabilities.tools is not None

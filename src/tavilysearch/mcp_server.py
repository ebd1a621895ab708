"""
Tavily Search MCP Server - stdio transport.
"""
import asyncio
import logging

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from .config import SERVER_NAME, SERVER_VERSION, configure_logging, get_settings
from .dispatcher import Dispatcher, build_dispatcher
from .errors import ConfigurationError, ProtocolError

logger = logging.getLogger(__name__)


def build_server(dispatcher: Dispatcher) -> Server:
    """Create the MCP server and route tools/list and tools/call to the dispatcher."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=t.name, description=t.description, inputSchema=t.inputSchema)
            for t in dispatcher.list_tools()
        ]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        # Registered directly so unknown tools surface as protocol errors
        # instead of being folded into an isError result.
        try:
            result = await dispatcher.dispatch(request.params.name, request.params.arguments)
        except ProtocolError as e:
            raise McpError(types.ErrorData(code=e.code, message=e.message)) from e

        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=c.text) for c in result.content],
                isError=result.isError,
            )
        )

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve(dispatcher: Dispatcher) -> None:
    server = build_server(dispatcher)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Tavily Search MCP server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await dispatcher.aclose()


def main() -> None:
    """Console entry point. A missing API key stops the process before serving."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error("%s", e.message)
        raise SystemExit(1) from e

    configure_logging(settings.log_level)
    asyncio.run(serve(build_dispatcher(settings)))


if __name__ == "__main__":
    main()

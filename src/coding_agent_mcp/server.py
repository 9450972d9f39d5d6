"""MCP stdio server exposing the tool catalog."""

import asyncio
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .backend import BackendForwarder
from .catalog import build_registry
from .core.config import Settings
from .core.logger import get_logger, setup_logging
from .core.tools import Dispatcher, ToolContext, ToolInvocationRequest, ToolResponseEnvelope

logger = get_logger(__name__)

SERVER_NAME = "coding-agent-mcp"


def to_call_tool_result(envelope: ToolResponseEnvelope) -> types.CallToolResult:
    """Translate an envelope into the MCP result type."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=block.text) for block in envelope.content],
        isError=envelope.is_error,
    )


def create_server(dispatcher: Dispatcher) -> Server:
    """Build the MCP server and wire ``tools/list`` and ``tools/call`` to the dispatcher.

    Input validation by the SDK is switched off; the dispatcher validates every call.
    """
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.parameters)
            for tool in dispatcher.registry.list_tools()
        ]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        envelope = await dispatcher.handle_request(ToolInvocationRequest(name=name, arguments=arguments))
        return to_call_tool_result(envelope)

    return server


async def run(settings: Settings) -> None:
    """Serve over stdio until the client disconnects."""
    async with BackendForwarder(settings) as backend:
        dispatcher = Dispatcher(registry=build_registry(), context=ToolContext(settings=settings, backend=backend))
        server = create_server(dispatcher)
        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"{SERVER_NAME} {__version__} running on stdio (backend: {settings.backend_url})")
            await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Console entry point."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Server stopped.")

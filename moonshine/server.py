"""
Moonshine MCP Server - knowledge store operations over stdio.

Exposes the tool registry to MCP clients. Successful calls return the
payload as JSON text; failed calls return an error result whose text is
the error message.

Usage:
    moonshine  # Start MCP server (stdio transport)
"""

import asyncio
import signal
from contextlib import suppress
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from moonshine import __version__
from moonshine.config import Config
from moonshine.services.engine import MoonshineEngine
from moonshine.tools.dispatcher import ToolDispatcher
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)

SERVER_NAME = "moonshine"


class ToolCallFailed(Exception):
    """Raised inside call_tool so the MCP server reports an error result."""


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Build an MCP server bound to a dispatcher."""
    mcp = Server(SERVER_NAME, version=__version__)

    @mcp.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema())
            for tool in dispatcher.list_tools()
        ]

    @mcp.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        result = await dispatcher.call(name, arguments)
        if not result.ok:
            raise ToolCallFailed(result.error.message)
        return [TextContent(type="text", text=result.to_text())]

    return mcp


async def run_stdio(config: Config) -> None:
    """Run the MCP server on stdin/stdout until the client disconnects."""
    async with MoonshineEngine(config) as engine:
        mcp = create_server(ToolDispatcher(engine))
        mode = "read-only" if engine.read_only else "read-write"
        logger.info(f"Moonshine MCP server starting ({mode}, db={config.storage.db_path})")

        serve = asyncio.create_task(_serve(mcp))
        loop = asyncio.get_running_loop()
        with suppress(NotImplementedError):
            loop.add_signal_handler(signal.SIGTERM, serve.cancel)

        with suppress(asyncio.CancelledError):
            await serve

        logger.info("Moonshine MCP server stopped")


async def _serve(mcp: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await mcp.run(
            read_stream,
            write_stream,
            mcp.create_initialization_options(),
        )

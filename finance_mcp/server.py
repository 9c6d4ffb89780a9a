"""MCP server over the shared tool registry, for the stdio and HTTP transports."""
from __future__ import annotations

import logging
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from mcp.types import TextContent

from finance_mcp.core.config import Settings
from finance_mcp.core.database import Database
from finance_mcp.tools.registry import TOOLS, ToolDefinition, call_tool

logger = logging.getLogger(__name__)

SERVER_NAME = "finance-mcp-server"
MCP_PATH = "/mcp"


class RegistryTool(Tool):
    """A registry tool published on FastMCP.

    Raw arguments go straight to ``call_tool``, so the argument models are the
    only validation layer and the advertised schema is theirs.
    """

    database: Any

    @classmethod
    def from_definition(cls, definition: ToolDefinition, database: Database) -> "RegistryTool":
        return cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema(),
            database=database,
        )

    async def run(self, arguments: dict[str, Any]) -> MCPToolResult:
        result = await call_tool(self.database, self.name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return MCPToolResult(content=[TextContent(type="text", text=result.text)])


def build_server(database: Database) -> FastMCP:
    """Register every tool from ``TOOLS`` on one FastMCP server."""
    mcp = FastMCP(SERVER_NAME)
    for definition in TOOLS:
        mcp.add_tool(RegistryTool.from_definition(definition, database))
    return mcp


async def serve_stdio(settings: Settings) -> None:
    """Open the store, speak MCP on stdin/stdout until the client disconnects."""
    database = Database(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        busy_timeout_ms=settings.SQLITE_BUSY_TIMEOUT_MS,
    )
    await database.connect()
    logger.info("Finance MCP Server running on stdio")
    try:
        await build_server(database).run_async(transport="stdio")
    finally:
        await database.dispose()


__all__ = ["MCP_PATH", "RegistryTool", "build_server", "serve_stdio"]

"""JSON routes exposing the tool surface over HTTP."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from finance_mcp.core.database import Database
from finance_mcp.tools.registry import TOOLS, call_tool
from finance_mcp.web.deps import get_database

router = APIRouter()


@router.get("")
async def list_tools() -> dict[str, Any]:
    """Return every tool with its description and JSON input schema."""
    return {"tools": [tool.describe() for tool in TOOLS]}


@router.post("/{name}")
async def invoke_tool(
    name: str,
    request: Request,
    arguments: Any = Body(default=None),
    database: Database = Depends(get_database),
) -> dict[str, Any]:
    """Run one tool with the JSON body as its arguments.

    Tool failures are reported in the payload (``isError``), not as HTTP errors.
    """
    result = await call_tool(database, name, arguments)
    payload = result.to_content()
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        payload["requestId"] = request_id
    return payload

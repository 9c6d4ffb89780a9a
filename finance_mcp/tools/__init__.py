"""Tool surface shared by the HTTP and stdio transports."""

from .registry import TOOLS, ToolResult, ToolDefinition, call_tool, get_tool

__all__ = ["TOOLS", "ToolResult", "ToolDefinition", "call_tool", "get_tool"]

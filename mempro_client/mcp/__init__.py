"""Thin MCP layer for the MEMPRO client.

This package provides a thin MCP server that:
1. Describes the four MEMPRO tools (health, add, query, search)
2. Maps each tool call to one HTTP request against the backend
3. Returns the backend JSON, or a flagged error result, to the MCP client

Architecture:
    MCP client (stdio) → mempro-client → MEMPRO backend (HTTP)

Configuration:
    - MEMPRO_URL: Backend URL (default: http://135.181.128.98:8821)
    - MEMPRO_DEFAULT_USER: user_id used when a call omits it
    - MEMPRO_TIMEOUT: Per-request timeout in seconds (default: 30)
"""

from mempro_client.mcp.client import BackendClient, BackendError, InvalidResponseError
from mempro_client.mcp.dispatcher import ToolResult, dispatch
from mempro_client.mcp.tools import (
    BackendRequest,
    ToolName,
    ToolSpec,
    UnknownToolError,
    get_tool,
    list_tools,
)

__all__ = [
    "BackendClient",
    "BackendError",
    "BackendRequest",
    "InvalidResponseError",
    "ToolName",
    "ToolResult",
    "ToolSpec",
    "UnknownToolError",
    "dispatch",
    "get_tool",
    "list_tools",
]

"""Tool dispatcher: executes one named tool call against the backend.

Every failure becomes a flagged ToolResult here, so the MCP layer never sees
an exception from a tool call. Task cancellation is the one exception that
still propagates, which lets the transport abort an in-flight request.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mcp import types

from mempro_client.config import Config
from mempro_client.log_config import get_logger
from mempro_client.mcp.client import BackendClient, BackendError
from mempro_client.mcp.tools import UnknownToolError, get_tool

log = get_logger("mcp.dispatcher")


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a tool call: pretty-printed JSON or an error message."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, value: Any) -> "ToolResult":
        return cls(text=json.dumps(value, indent=2, ensure_ascii=False))

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(text=f"Error: {message}", is_error=True)

    def to_call_tool_result(self) -> types.CallToolResult:
        """Wrap as the MCP response envelope (one text item)."""
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


async def dispatch(
    name: str,
    arguments: Mapping[str, Any] | None,
    client: BackendClient,
    config: Config,
) -> ToolResult:
    """Run a tool call and return its result. Never raises for call failures.

    Args:
        name: Tool name from the call request
        arguments: Call arguments (optional fields may be omitted)
        client: Backend client that issues the HTTP request
        config: Configuration supplying argument defaults

    Returns:
        ToolResult with the backend's JSON on success, or a message
        starting with "Error: " on any failure
    """
    log.info(f"Tool: {name} called")
    try:
        spec = get_tool(name)
        request = spec.build_request(arguments or {}, config)
        log.debug(f"Tool: {name} -> {request.method} {request.path} body={request.body}")
        result = await client.request(request)
    except UnknownToolError as e:
        log.warning(f"Tool: {e}")
        return ToolResult.failure(str(e))
    except BackendError as e:
        log.error(f"Tool: {name} failed: {e}")
        return ToolResult.failure(str(e))
    except Exception as e:
        log.exception(f"Tool: {name} failed unexpectedly: {e}")
        return ToolResult.failure(str(e) or type(e).__name__)

    log.info(f"Tool: {name} complete")
    return ToolResult.success(result)

"""MCP server for the MEMPRO client.

Exposes the tool catalog over stdio using the low-level MCP server, and
forwards each tool call to the MEMPRO backend through the dispatcher.

Claude config (~/.claude.json):
    {
      "mcpServers": {
        "mempro": {
          "command": "mempro-client",
          "env": {"MEMPRO_URL": "http://135.181.128.98:8821"}
        }
      }
    }
"""

import asyncio
import sys
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from mempro_client import __version__
from mempro_client.config import Config
from mempro_client.log_config import get_logger
from mempro_client.mcp.client import BackendClient
from mempro_client.mcp.dispatcher import dispatch
from mempro_client.mcp.tools import list_tools

log = get_logger("mcp.server")

SERVER_NAME = "mempro-client"


def create_server(config: Config, client: BackendClient) -> Server:
    """Build the MCP server with list/call handlers bound to config and client."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        log.debug("Tool list requested")
        return [
            types.Tool(
                name=spec.name.value,
                description=spec.description,
                inputSchema=spec.input_schema(config),
            )
            for spec in list_tools()
        ]

    # Schema validation stays with the backend; the dispatcher reports
    # every failure as a flagged result.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        result = await dispatch(name, arguments, client, config)
        return result.to_call_tool_result()

    return server


async def run_stdio(config: Config) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    client = BackendClient(config)
    server = create_server(config, client)
    try:
        async with stdio_server() as (read_stream, write_stream):
            log.bind(announce=True).info("MEMPRO MCP client running on stdio")
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await client.close()
        log.info("MCP server stopped")


# ═══════════════════════════════════════════════════════════════════════════════
# ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════════


def main():
    """Run the MCP server. Exits with status 1 on a fatal error."""
    log.info(f"Starting {SERVER_NAME} {__version__}")
    try:
        config = Config()
        asyncio.run(run_stdio(config))
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down")
    except Exception as e:
        log.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""MEMPRO client CLI with Rich output.

Provides commands for:
- Running the stdio MCP server
- Listing the tool catalog
- Checking backend health
- Calling a tool the same way an MCP client would

Usage:
    mempro serve                               # Run the MCP server on stdio
    mempro tools                               # Show available tools
    mempro health                              # Check backend health
    mempro call mempro_query --args '{"query": "deploy steps"}'
"""

import asyncio
import json
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mempro_client.config import Config, ConfigError
from mempro_client.mcp.client import BackendClient, BackendError
from mempro_client.mcp.dispatcher import ToolResult, dispatch
from mempro_client.mcp.tools import list_tools

app = typer.Typer(
    name="mempro",
    help="MEMPRO client - MCP bridge to the MEMPRO memory backend",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
console = Console()


def print_banner():
    """Print MEMPRO banner."""
    banner = Text()
    banner.append("MEMPRO", style="bold cyan")
    banner.append(" client", style="cyan")
    console.print(Panel(banner, border_style="cyan", box=box.ROUNDED))


def _load_config() -> Config:
    try:
        return Config()
    except ConfigError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)


def _print_result(result: ToolResult) -> None:
    if result.is_error:
        console.print(result.text, style="red", markup=False, highlight=False)
    else:
        console.print_json(result.text)


@app.command()
def serve():
    """Run the MCP server on stdio."""
    from mempro_client.mcp.server import main as server_main

    server_main()


@app.command()
def tools():
    """List the tools exposed over MCP."""
    config = _load_config()

    table = Table(box=box.ROUNDED)
    table.add_column("Tool", style="bold cyan")
    table.add_column("Required")
    table.add_column("Optional (default)", style="dim")
    table.add_column("Description")

    for spec in list_tools():
        required = ", ".join(f.name for f in spec.fields if f.required) or "-"
        optional = ", ".join(
            f"{f.name} ({f.resolve_default(config)})" for f in spec.fields if not f.required
        ) or "-"
        table.add_row(spec.name.value, required, optional, spec.description)

    console.print(table)


@app.command()
def health():
    """Check MEMPRO backend health."""
    print_banner()
    config = _load_config()
    console.print(f"[bold]Backend:[/bold] {config.backend_url}\n")

    async def _check():
        async with BackendClient(config) as client:
            return await client.health_check()

    try:
        result = asyncio.run(_check())
    except BackendError as e:
        console.print(f"[red]✗ Backend unavailable:[/red] {e}")
        raise typer.Exit(1)

    console.print("[green]✓ Backend reachable[/green]")
    console.print_json(json.dumps(result))


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name, e.g. mempro_query"),
    args: Optional[str] = typer.Option(
        None, "--args", "-a", help="Tool arguments as a JSON object"
    ),
):
    """Call a tool exactly as an MCP client would and print the result."""
    config = _load_config()

    arguments = {}
    if args:
        try:
            arguments = json.loads(args)
        except json.JSONDecodeError as e:
            console.print(f"[red]--args is not valid JSON:[/red] {e}")
            raise typer.Exit(2)
        if not isinstance(arguments, dict):
            console.print("[red]--args must be a JSON object[/red]")
            raise typer.Exit(2)

    async def _call():
        async with BackendClient(config) as client:
            return await dispatch(name, arguments, client, config)

    result = asyncio.run(_call())
    _print_result(result)
    if result.is_error:
        raise typer.Exit(1)


@app.command()
def version():
    """Show MEMPRO client version."""
    from mempro_client import __version__

    console.print(f"MEMPRO client [cyan]{__version__}[/cyan]")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()

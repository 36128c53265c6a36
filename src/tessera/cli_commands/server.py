"""CLI command for running the MCP server."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from tessera.cli_common import load_cli_context

DEFAULT_HTTP_PORT = 8377


@click.command("serve")
@click.option("--http", "use_http", is_flag=True, help="Serve streamable HTTP at /mcp instead of stdio")
@click.option("--host", default="127.0.0.1", help="HTTP bind address")
@click.option("--port", default=DEFAULT_HTTP_PORT, type=int, help="HTTP port")
@click.option("--config", "config_file", type=click.Path(path_type=Path), default=None, help="JSON config file")
def serve(use_http: bool, host: str, port: int, config_file: Path | None) -> None:
    """Run the MCP server (stdio by default)."""
    if not use_http:
        from tessera.mcp_server import _run

        asyncio.run(_run(config_file))
        return

    import uvicorn

    from tessera.mcp_server import create_http_app

    ctx = load_cli_context(config_file)
    app = create_http_app(ctx)
    click.echo(f"Tessera MCP: http://{host}:{port}/mcp", err=True)
    uvicorn.run(app, host=host, port=port, log_level="warning")


def register(cli: click.Group) -> None:
    """Register the serve command with the CLI."""
    cli.add_command(serve)

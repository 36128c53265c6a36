"""CLI for tessera.

Usage:
    tessera serve                                # MCP over stdio
    tessera serve --http --port 8377             # MCP over streamable HTTP at /mcp
    tessera fields list                          # Available field resources
    tessera fields show issue                    # Fields and access paths of an entity
    tessera fields show issue --dynamic          # ...including custom fields from the server
    tessera fields validate issue status.name    # Check field paths
"""

from __future__ import annotations

import click

from tessera import __version__
from tessera.cli_commands import fields as fields_commands
from tessera.cli_commands import server as server_commands


@click.group()
@click.version_option(version=__version__, prog_name="tessera")
def cli() -> None:
    """Tessera: Jira field catalog and MCP server."""


fields_commands.register(cli)
server_commands.register(cli)


if __name__ == "__main__":
    cli()

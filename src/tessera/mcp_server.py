"""MCP server for the tessera Jira field catalog.

Exposes the field catalogs as ``jira://<entity>/fields`` resources and the
Jira read operations as MCP tools.

Usage:
    tessera-mcp                          # Configure from JIRA_* environment variables
    tessera-mcp --config tessera.json    # Config file, overlaid by the environment
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import sys
import time
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import Resource, TextContent, Tool

from tessera.catalog import RESOURCE_MIME_TYPE
from tessera.config import ConfigurationError, load_config
from tessera.context import AppContext, build_context
from tessera.mcp_tools import agile, issues, meta, projects, users
from tessera.mcp_tools.common import _error

SERVER_NAME = "tessera"

_TOOL_MODULES = (issues, projects, users, agile, meta)

# ---------------------------------------------------------------------------
# Tool registry
# ---------------------------------------------------------------------------


def collect_tools() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Aggregate ``register()`` output from every tool module.

    Raises:
        RuntimeError: Two modules register the same tool name.
    """
    all_tools: list[Tool] = []
    all_handlers: dict[str, Callable[..., Any]] = {}
    for module in _TOOL_MODULES:
        tools, handlers = module.register()
        for name in handlers:
            if name in all_handlers:
                msg = f"Duplicate tool name: {name} ({module.__name__})"
                raise RuntimeError(msg)
        all_tools.extend(tools)
        all_handlers.update(handlers)
    return all_tools, all_handlers


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


def list_resource_entries(ctx: AppContext) -> list[Resource]:
    return [
        Resource(
            uri=summary["uri"],  # type: ignore[arg-type]
            name=summary["name"],
            description=summary["description"],
            mimeType=summary["mime_type"],
        )
        for summary in ctx.resolver.list_resources()
    ]


async def read_resource_text(ctx: AppContext, uri: str, *, force_refresh: bool = False) -> str:
    """Serialize the definition behind *uri* as JSON.

    Raises:
        InvalidResourceURIError: *uri* is not ``jira://<entity>/fields``.
        UnknownResourceError: No catalog for the entity.
    """
    definition = await ctx.resolver.read_resource(uri, force_refresh=force_refresh)
    return json.dumps(definition.to_dict(), indent=2)


# ---------------------------------------------------------------------------
# Tool dispatch
# ---------------------------------------------------------------------------


async def dispatch_tool(
    ctx: AppContext,
    handlers: dict[str, Callable[..., Any]],
    name: str,
    arguments: dict[str, Any] | None,
) -> list[TextContent]:
    handler = handlers.get(name)
    if handler is None:
        return _error(f"Unknown tool: {name}", "unknown_tool")

    args = arguments or {}
    t0 = time.monotonic()
    try:
        result: list[TextContent] = await handler(ctx, args)
    except Exception:
        ctx.logger.error("tool_error", extra={"tool": name, "args_data": args}, exc_info=True)
        raise
    duration_ms = round((time.monotonic() - t0) * 1000, 1)
    ctx.logger.info("tool_call", extra={"tool": name, "args_data": args, "duration_ms": duration_ms})
    return result


# ---------------------------------------------------------------------------
# Server setup
# ---------------------------------------------------------------------------


def create_server(ctx: AppContext) -> Server:
    """Build an MCP server bound to *ctx*."""
    server: Server = Server(SERVER_NAME)
    tools, handlers = collect_tools()

    @server.list_resources()  # type: ignore[untyped-decorator,no-untyped-call]
    async def list_resources() -> list[Resource]:
        return list_resource_entries(ctx)

    @server.read_resource()  # type: ignore[untyped-decorator,no-untyped-call]
    async def read_resource(uri: Any) -> list[ReadResourceContents]:
        text = await read_resource_text(ctx, str(uri))
        return [ReadResourceContents(content=text, mime_type=RESOURCE_MIME_TYPE)]

    @server.list_tools()  # type: ignore[untyped-decorator,no-untyped-call]
    async def list_tools() -> list[Tool]:
        return tools

    @server.call_tool()  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        return await dispatch_tool(ctx, handlers, name, arguments)

    return server


# ---------------------------------------------------------------------------
# HTTP transport factory
# ---------------------------------------------------------------------------


def create_mcp_app(ctx: AppContext) -> tuple[Any, Callable[[], Any]]:
    """Create an ASGI app + lifespan hook for MCP streamable-HTTP.

    Returns ``(asgi_app, lifespan_context_manager)``; the lifespan must be
    entered before the first request so the session manager's task group
    is running.
    """
    from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

    session_manager = StreamableHTTPSessionManager(
        app=create_server(ctx),
        json_response=False,
        stateless=True,
    )

    async def _handle_mcp(scope: Any, receive: Any, send: Any) -> None:
        try:
            await session_manager.handle_request(scope, receive, send)
        except RuntimeError:
            # Session manager not started (lifespan not entered).
            from starlette.responses import JSONResponse

            resp = JSONResponse({"error": "MCP session manager not initialized"}, status_code=503)
            await resp(scope, receive, send)

    return _handle_mcp, session_manager.run


def create_http_app(ctx: AppContext) -> Any:
    """Starlette app serving MCP at ``/mcp`` plus a ``/health`` check."""
    from starlette.applications import Starlette
    from starlette.requests import Request
    from starlette.responses import JSONResponse
    from starlette.routing import Mount, Route

    mcp_app, mcp_lifespan = create_mcp_app(ctx)

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "resources": ctx.resolver.list_resource_uris()})

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with mcp_lifespan():
            ctx.logger.info("http_server_start", extra={"tool": "server"})
            try:
                yield
            finally:
                await ctx.aclose()

    return Starlette(
        routes=[Route("/health", health), Mount("/mcp", app=mcp_app)],
        lifespan=lifespan,
    )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def load_context(config_file: Path | None) -> AppContext:
    """Load configuration and build the context, exiting on bad config."""
    try:
        config = load_config(config_file=config_file)
        return build_context(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


async def _run(config_file: Path | None) -> None:
    ctx = load_context(config_file)
    server = create_server(ctx)
    ctx.logger.info("mcp_server_start", extra={"tool": "server", "args_data": {"transport": "stdio"}})
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await ctx.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Tessera MCP server")
    parser.add_argument("--config", type=Path, default=None, help="JSON config file (environment overrides it)")
    args = parser.parse_args()

    asyncio.run(_run(args.config))


if __name__ == "__main__":
    main()

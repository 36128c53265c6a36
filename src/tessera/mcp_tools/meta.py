"""MCP tools for field discovery, path validation, and server info."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from mcp.types import TextContent, Tool

from tessera.client import UpstreamFetchError
from tessera.mcp_tools.common import _error, _text, _upstream_error, _validate_str
from tessera.types.api import FieldSearchEntry, FieldSearchResponse

if TYPE_CHECKING:
    from tessera.context import AppContext
    from tessera.types.core import RawFieldDescriptor


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for meta tools."""
    tools = [
        Tool(
            name="search_fields",
            description="Search the site's system and custom fields by name or id",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Case-insensitive substring of field name or id"},
                },
            },
        ),
        Tool(
            name="validate_field_paths",
            description="Check dot-notation field paths against an entity catalog and suggest corrections",
            inputSchema={
                "type": "object",
                "properties": {
                    "entity_type": {"type": "string", "description": "issue, project, user or agile"},
                    "paths": {"type": "array", "items": {"type": "string"}, "description": "Paths to check"},
                },
                "required": ["entity_type", "paths"],
            },
        ),
        Tool(
            name="get_server_info",
            description="Get Jira server version and deployment info",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="get_system_info",
            description="Get the full Jira system information (build, SCM revision, locale, health checks)",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "search_fields": _handle_search_fields,
        "validate_field_paths": _handle_validate_field_paths,
        "get_server_info": _handle_get_server_info,
        "get_system_info": _handle_get_system_info,
    }
    return tools, handlers


def _search_entry(raw: RawFieldDescriptor) -> FieldSearchEntry:
    schema = raw.get("schema")
    entry = FieldSearchEntry(
        id=str(raw.get("id", "")),
        name=str(raw.get("name", "")),
        custom=bool(raw.get("custom", False)),
        schema_type=schema.get("type") if isinstance(schema, dict) else None,
    )
    if "searchable" in raw:
        entry["searchable"] = bool(raw["searchable"])
    clause_names = raw.get("clauseNames")
    if isinstance(clause_names, list):
        entry["clause_names"] = [str(c) for c in clause_names]
    return entry


async def _handle_search_fields(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    query = arguments.get("query")
    query_err = _validate_str(query, "query")
    if query_err:
        return query_err
    try:
        raw_fields = await ctx.client.search_fields(query)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)

    entries = [_search_entry(f) for f in raw_fields if isinstance(f, dict)]
    response = FieldSearchResponse(fields=entries, total=len(entries))
    if query:
        response["query"] = query
    return _text(response)


async def _handle_validate_field_paths(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    entity_type = arguments.get("entity_type")
    entity_err = _validate_str(entity_type, "entity_type", required=True)
    if entity_err:
        return entity_err
    paths = arguments.get("paths")
    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        return _error("paths must be an array of strings")
    return _text(ctx.resolver.validate_field_paths(entity_type, paths))


async def _handle_get_server_info(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    try:
        info = await ctx.client.get_server_info()
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(info)


async def _handle_get_system_info(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    try:
        info = await ctx.client.get_system_info()
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(info)

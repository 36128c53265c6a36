"""MCP tools for listing and reading projects, their issues and versions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from mcp.types import TextContent, Tool

from tessera.client import UpstreamFetchError
from tessera.mcp_tools.common import (
    FIELDS_SCHEMA,
    PAGE_SCHEMA,
    _error,
    _search_response,
    _text,
    _upstream_error,
    _validate_page,
    _validate_str,
    _with_warning,
    select_fields,
)

if TYPE_CHECKING:
    from tessera.context import AppContext

# Version paths live under ``versions[]`` in the project catalog.
_VERSION_PREFIX = "versions[]."

_PROJECT_KEY_PROPERTY: dict[str, Any] = {"type": "string", "description": "Project key (e.g. PROJ)"}


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for project-domain tools."""
    tools = [
        Tool(
            name="get_all_projects",
            description="List all projects visible to the current user",
            inputSchema={
                "type": "object",
                "properties": {
                    "include_archived": {"type": "boolean", "default": False, "description": "Include archived projects"},
                    "fields": FIELDS_SCHEMA,
                },
            },
        ),
        Tool(
            name="get_project",
            description="Get project details by key. Field paths come from jira://project/fields.",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_key": _PROJECT_KEY_PROPERTY,
                    "fields": FIELDS_SCHEMA,
                },
                "required": ["project_key"],
            },
        ),
        Tool(
            name="get_project_issues",
            description="List the issues of a project. Supports pagination and issue field selection.",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_key": _PROJECT_KEY_PROPERTY,
                    **PAGE_SCHEMA,
                    "fields": FIELDS_SCHEMA,
                },
                "required": ["project_key"],
            },
        ),
        Tool(
            name="get_project_versions",
            description="List the versions (releases) of a project",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_key": _PROJECT_KEY_PROPERTY,
                    "fields": {**FIELDS_SCHEMA, "description": "Version-relative paths (e.g. ['name', 'released'])"},
                },
                "required": ["project_key"],
            },
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "get_all_projects": _handle_get_all_projects,
        "get_project": _handle_get_project,
        "get_project_issues": _handle_get_project_issues,
        "get_project_versions": _handle_get_project_versions,
    }
    return tools, handlers


async def _handle_get_all_projects(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    include_archived = arguments.get("include_archived", False)
    if not isinstance(include_archived, bool):
        return _error("include_archived must be a boolean")
    selection, fields_err = select_fields(ctx, "project", arguments.get("fields"))
    if fields_err:
        return fields_err

    try:
        projects = await ctx.client.get_all_projects(include_archived=include_archived)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(_with_warning([selection.project(p) for p in projects], selection.warning))


async def _handle_get_project(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    project_key = arguments.get("project_key")
    key_err = _validate_str(project_key, "project_key", required=True)
    if key_err:
        return key_err
    selection, fields_err = select_fields(ctx, "project", arguments.get("fields"))
    if fields_err:
        return fields_err

    try:
        project = await ctx.client.get_project(project_key)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(_with_warning(selection.project(project), selection.warning))


async def _handle_get_project_issues(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    project_key = arguments.get("project_key")
    key_err = _validate_str(project_key, "project_key", required=True)
    if key_err:
        return key_err
    start_at, max_results, page_err = _validate_page(arguments)
    if page_err:
        return page_err
    selection, fields_err = select_fields(ctx, "issue", arguments.get("fields"))
    if fields_err:
        return fields_err

    try:
        result = await ctx.client.get_project_issues(
            project_key, start_at=start_at, max_results=max_results, fields=selection.top_level
        )
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _search_response(result, selection, start_at, max_results)


async def _handle_get_project_versions(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    project_key = arguments.get("project_key")
    key_err = _validate_str(project_key, "project_key", required=True)
    if key_err:
        return key_err
    selection, fields_err = select_fields(ctx, "project", arguments.get("fields"), prefix=_VERSION_PREFIX)
    if fields_err:
        return fields_err

    try:
        versions = await ctx.client.get_project_versions(project_key)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(_with_warning([selection.project(v) for v in versions], selection.warning))

"""MCP tools for agile boards and sprints.

Board and sprint field paths are relative to the object (``name``,
``location.projectKey``) and are checked against the ``board.*`` and
``sprint.*`` entries of the agile catalog. Issue lists (board and sprint
issues) take issue paths from jira://issue/fields and page like
``search_issues``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from mcp.types import TextContent, Tool

from tessera.client import UpstreamFetchError
from tessera.mcp_tools.common import (
    FIELDS_SCHEMA,
    PAGE_SCHEMA,
    _search_response,
    _text,
    _upstream_error,
    _validate_id,
    _validate_page,
    _validate_str,
    _with_warning,
    select_fields,
)

if TYPE_CHECKING:
    from tessera.context import AppContext

_BOARD_PREFIX = "board."
_SPRINT_PREFIX = "sprint."

_BOARD_FIELDS_SCHEMA = {**FIELDS_SCHEMA, "description": "Board-relative paths (e.g. ['name', 'type'])"}
_SPRINT_FIELDS_SCHEMA = {**FIELDS_SCHEMA, "description": "Sprint-relative paths (e.g. ['name', 'state'])"}


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for agile-domain tools."""
    tools = [
        Tool(
            name="get_agile_boards",
            description="List scrum and kanban boards, optionally for one project",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_key": {"type": "string", "description": "Only boards of this project"},
                    "fields": _BOARD_FIELDS_SCHEMA,
                },
            },
        ),
        Tool(
            name="get_board_issues",
            description="List the issues on a board. Supports pagination and issue field selection.",
            inputSchema={
                "type": "object",
                "properties": {
                    "board_id": {"type": "integer", "minimum": 1, "description": "Board id"},
                    **PAGE_SCHEMA,
                    "fields": FIELDS_SCHEMA,
                },
                "required": ["board_id"],
            },
        ),
        Tool(
            name="get_sprints_from_board",
            description="List the sprints (future, active and closed) of a board",
            inputSchema={
                "type": "object",
                "properties": {
                    "board_id": {"type": "integer", "minimum": 1, "description": "Board id"},
                    "fields": _SPRINT_FIELDS_SCHEMA,
                },
                "required": ["board_id"],
            },
        ),
        Tool(
            name="get_sprint",
            description="Get sprint details by id",
            inputSchema={
                "type": "object",
                "properties": {
                    "sprint_id": {"type": "integer", "minimum": 1, "description": "Sprint id"},
                    "fields": _SPRINT_FIELDS_SCHEMA,
                },
                "required": ["sprint_id"],
            },
        ),
        Tool(
            name="get_sprint_issues",
            description="List the issues in a sprint. Supports pagination and issue field selection.",
            inputSchema={
                "type": "object",
                "properties": {
                    "sprint_id": {"type": "integer", "minimum": 1, "description": "Sprint id"},
                    **PAGE_SCHEMA,
                    "fields": FIELDS_SCHEMA,
                },
                "required": ["sprint_id"],
            },
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "get_agile_boards": _handle_get_agile_boards,
        "get_board_issues": _handle_get_board_issues,
        "get_sprints_from_board": _handle_get_sprints_from_board,
        "get_sprint": _handle_get_sprint,
        "get_sprint_issues": _handle_get_sprint_issues,
    }
    return tools, handlers


async def _handle_get_agile_boards(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    project_key = arguments.get("project_key")
    key_err = _validate_str(project_key, "project_key")
    if key_err:
        return key_err
    selection, fields_err = select_fields(ctx, "agile", arguments.get("fields"), prefix=_BOARD_PREFIX)
    if fields_err:
        return fields_err
    try:
        boards = await ctx.client.get_agile_boards(project_key)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(_with_warning([selection.project(b) for b in boards], selection.warning))


async def _handle_get_board_issues(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    board_id = arguments.get("board_id")
    id_err = _validate_id(board_id, "board_id")
    if id_err:
        return id_err
    start_at, max_results, page_err = _validate_page(arguments)
    if page_err:
        return page_err
    selection, fields_err = select_fields(ctx, "issue", arguments.get("fields"))
    if fields_err:
        return fields_err
    try:
        result = await ctx.client.get_board_issues(
            board_id, start_at=start_at, max_results=max_results, fields=selection.top_level
        )
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _search_response(result, selection, start_at, max_results)


async def _handle_get_sprints_from_board(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    board_id = arguments.get("board_id")
    id_err = _validate_id(board_id, "board_id")
    if id_err:
        return id_err
    selection, fields_err = select_fields(ctx, "agile", arguments.get("fields"), prefix=_SPRINT_PREFIX)
    if fields_err:
        return fields_err
    try:
        sprints = await ctx.client.get_board_sprints(board_id)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(_with_warning([selection.project(s) for s in sprints], selection.warning))


async def _handle_get_sprint(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    sprint_id = arguments.get("sprint_id")
    id_err = _validate_id(sprint_id, "sprint_id")
    if id_err:
        return id_err
    selection, fields_err = select_fields(ctx, "agile", arguments.get("fields"), prefix=_SPRINT_PREFIX)
    if fields_err:
        return fields_err
    try:
        sprint = await ctx.client.get_sprint(sprint_id)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(_with_warning(selection.project(sprint), selection.warning))


async def _handle_get_sprint_issues(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    sprint_id = arguments.get("sprint_id")
    id_err = _validate_id(sprint_id, "sprint_id")
    if id_err:
        return id_err
    start_at, max_results, page_err = _validate_page(arguments)
    if page_err:
        return page_err
    selection, fields_err = select_fields(ctx, "issue", arguments.get("fields"))
    if fields_err:
        return fields_err
    try:
        result = await ctx.client.get_sprint_issues(
            sprint_id, start_at=start_at, max_results=max_results, fields=selection.top_level
        )
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _search_response(result, selection, start_at, max_results)

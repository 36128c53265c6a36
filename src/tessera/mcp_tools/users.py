"""MCP tools for user profiles."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from mcp.types import TextContent, Tool

from tessera.client import UpstreamFetchError
from tessera.mcp_tools.common import FIELDS_SCHEMA, _text, _upstream_error, _validate_str, _with_warning, select_fields

if TYPE_CHECKING:
    from tessera.context import AppContext


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for user-domain tools."""
    tools = [
        Tool(
            name="get_current_user",
            description="Get the profile of the authenticated user (useful to verify credentials)",
            inputSchema={
                "type": "object",
                "properties": {"fields": FIELDS_SCHEMA},
            },
        ),
        Tool(
            name="get_user_profile",
            description="Look up a user by username or email address. Field paths come from jira://user/fields.",
            inputSchema={
                "type": "object",
                "properties": {
                    "username": {"type": "string", "description": "Username or email address"},
                    "fields": FIELDS_SCHEMA,
                },
                "required": ["username"],
            },
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "get_current_user": _handle_get_current_user,
        "get_user_profile": _handle_get_user_profile,
    }
    return tools, handlers


async def _handle_get_current_user(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    selection, fields_err = select_fields(ctx, "user", arguments.get("fields"))
    if fields_err:
        return fields_err
    try:
        user = await ctx.client.get_current_user()
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(_with_warning(selection.project(user), selection.warning))


async def _handle_get_user_profile(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    username = arguments.get("username")
    username_err = _validate_str(username, "username", required=True)
    if username_err:
        return username_err
    selection, fields_err = select_fields(ctx, "user", arguments.get("fields"))
    if fields_err:
        return fields_err
    try:
        user = await ctx.client.get_user(username)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(_with_warning(selection.project(user), selection.warning))

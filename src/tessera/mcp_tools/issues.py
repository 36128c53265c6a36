"""MCP tools for reading issues, searching with JQL, and listing transitions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from mcp.types import TextContent, Tool

from tessera.client import UpstreamFetchError
from tessera.mcp_tools.common import (
    FIELDS_SCHEMA,
    PAGE_SCHEMA,
    _project_issue,
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

_ISSUE_KEY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "issue_key": {"type": "string", "description": "Issue key (e.g. PROJ-123)"},
    },
    "required": ["issue_key"],
}


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for issue-domain tools."""
    tools = [
        Tool(
            name="get_issue",
            description=(
                "Get a Jira issue by key. Pass 'fields' (dot-notation paths from jira://issue/fields) "
                "to return only those values."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "issue_key": {"type": "string", "description": "Issue key (e.g. PROJ-123)"},
                    "fields": FIELDS_SCHEMA,
                },
                "required": ["issue_key"],
            },
        ),
        Tool(
            name="search_issues",
            description="Search issues with JQL. Supports pagination and field selection.",
            inputSchema={
                "type": "object",
                "properties": {
                    "jql": {"type": "string", "description": "JQL query"},
                    **PAGE_SCHEMA,
                    "fields": FIELDS_SCHEMA,
                },
                "required": ["jql"],
            },
        ),
        Tool(
            name="get_issue_transitions",
            description="List the workflow transitions currently available for an issue",
            inputSchema=_ISSUE_KEY_SCHEMA,
        ),
        Tool(
            name="get_issue_worklogs",
            description="List the work log entries recorded against an issue",
            inputSchema=_ISSUE_KEY_SCHEMA,
        ),
        Tool(
            name="download_attachments",
            description="List attachment metadata (filename, size, mime type, content URL) for an issue",
            inputSchema=_ISSUE_KEY_SCHEMA,
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "get_issue": _handle_get_issue,
        "search_issues": _handle_search_issues,
        "get_issue_transitions": _handle_get_issue_transitions,
        "get_issue_worklogs": _handle_get_issue_worklogs,
        "download_attachments": _handle_download_attachments,
    }
    return tools, handlers


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _handle_get_issue(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    issue_key = arguments.get("issue_key")
    issue_key_err = _validate_str(issue_key, "issue_key", required=True)
    if issue_key_err:
        return issue_key_err
    selection, fields_err = select_fields(ctx, "issue", arguments.get("fields"))
    if fields_err:
        return fields_err

    try:
        issue = await ctx.client.get_issue(issue_key, fields=selection.top_level)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(_with_warning(_project_issue(issue, selection), selection.warning))


async def _handle_search_issues(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    jql = arguments.get("jql")
    jql_err = _validate_str(jql, "jql", required=True)
    if jql_err:
        return jql_err
    start_at, max_results, page_err = _validate_page(arguments)
    if page_err:
        return page_err
    selection, fields_err = select_fields(ctx, "issue", arguments.get("fields"))
    if fields_err:
        return fields_err

    try:
        result = await ctx.client.search_issues(
            jql, start_at=start_at, max_results=max_results, fields=selection.top_level
        )
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _search_response(result, selection, start_at, max_results)


async def _handle_get_issue_transitions(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    issue_key = arguments.get("issue_key")
    issue_key_err = _validate_str(issue_key, "issue_key", required=True)
    if issue_key_err:
        return issue_key_err
    try:
        transitions = await ctx.client.get_issue_transitions(issue_key)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(transitions)


async def _handle_get_issue_worklogs(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    issue_key = arguments.get("issue_key")
    issue_key_err = _validate_str(issue_key, "issue_key", required=True)
    if issue_key_err:
        return issue_key_err
    try:
        worklogs = await ctx.client.get_issue_worklogs(issue_key)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text(worklogs)


async def _handle_download_attachments(ctx: AppContext, arguments: dict[str, Any]) -> list[TextContent]:
    """Attachment metadata only; file bodies stay on the Jira server."""
    issue_key = arguments.get("issue_key")
    issue_key_err = _validate_str(issue_key, "issue_key", required=True)
    if issue_key_err:
        return issue_key_err
    try:
        attachments = await ctx.client.get_issue_attachments(issue_key)
    except UpstreamFetchError as exc:
        return _upstream_error(exc)
    return _text({"issue_key": issue_key, "attachments": attachments})

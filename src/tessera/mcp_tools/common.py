"""Pure helpers and constants shared across MCP tool modules.

This module has NO dependency on ``mcp_server``, so it can be imported
freely without triggering circular-import issues.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mcp.types import TextContent

from tessera.client import NotFoundError, UpstreamFetchError
from tessera.projection import extract_top_level_fields, filter_fields
from tessera.types.api import ErrorResponse, InvalidFieldsError, SearchResponse, UpstreamError, WarningEnvelope
from tessera.types.core import BatchValidationResult

if TYPE_CHECKING:
    from tessera.context import AppContext

logger = logging.getLogger(__name__)

# Page size cap for search tools to keep MCP responses within token limits.
_MAX_PAGE_SIZE = 100
_DEFAULT_PAGE_SIZE = 50

FIELDS_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {"type": "string"},
    "description": (
        "Dot-notation field paths to return (e.g. ['status.name', 'assignee.displayName']). "
        "Read the matching jira://<entity>/fields resource for valid paths."
    ),
}


def _text(content: object) -> list[TextContent]:
    if isinstance(content, str):
        return [TextContent(type="text", text=content)]
    return [TextContent(type="text", text=json.dumps(content, indent=2, default=str))]


def _error(message: str, code: str = "validation_error") -> list[TextContent]:
    return _text(ErrorResponse(error=message, code=code))


def _upstream_error(exc: UpstreamFetchError) -> list[TextContent]:
    """Map a backend failure to the tool error envelope."""
    if isinstance(exc, NotFoundError):
        return _error(str(exc), "not_found")
    payload = UpstreamError(error=str(exc), code="upstream_error", retryable=exc.retryable)
    if exc.status_code is not None:
        payload["status_code"] = exc.status_code
    return _text(payload)


def _validate_str(value: Any, name: str, *, required: bool = False) -> list[TextContent] | None:
    """Return a validation error if *value* is not a (non-empty, when required) string."""
    if value is None:
        return _error(f"{name} is required and must be a string") if required else None
    if not isinstance(value, str):
        return _error(f"{name} must be a string")
    if required and not value.strip():
        return _error(f"{name} must not be empty")
    return None


def _validate_int_range(
    value: Any,
    name: str,
    min_val: int | None = None,
    max_val: int | None = None,
) -> list[TextContent] | None:
    """Return a validation error if *value* is not ``None`` and outside range.

    When *value* is ``None`` it is considered optional and passes.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        return _error(f"{name} must be an integer")
    if min_val is not None and value < min_val:
        return _error(f"{name} must be >= {min_val}")
    if max_val is not None and value > max_val:
        return _error(f"{name} must be <= {max_val}")
    return None


def _validate_id(value: Any, name: str) -> list[TextContent] | None:
    """Return a validation error unless *value* is a positive integer id."""
    if value is None:
        return _error(f"{name} is required and must be an integer")
    return _validate_int_range(value, name, min_val=1)


def _validate_page(arguments: dict[str, Any]) -> tuple[int, int, list[TextContent] | None]:
    """Read ``start_at`` / ``max_results``; an explicit null means the default."""
    start_at = arguments.get("start_at")
    if start_at is None:
        start_at = 0
    max_results = arguments.get("max_results")
    if max_results is None:
        max_results = _DEFAULT_PAGE_SIZE
    err = _validate_int_range(start_at, "start_at", min_val=0)
    if err is None:
        err = _validate_int_range(max_results, "max_results", min_val=1, max_val=_MAX_PAGE_SIZE)
    return start_at, max_results, err


# ---------------------------------------------------------------------------
# Field selection
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldSelection:
    """Validated field paths for one tool call.

    ``paths`` is None when the caller asked for no projection.
    """

    paths: list[str] | None = None
    warning: str | None = None

    @property
    def top_level(self) -> list[str] | None:
        return extract_top_level_fields(self.paths) if self.paths is not None else None

    def project(self, data: Any) -> Any:
        if self.paths is None:
            return data
        return filter_fields(data, self.paths)


def format_suggestions(suggestions: dict[str, list[str]] | None) -> str:
    if not suggestions:
        return ""
    lines = [f'Suggestions for "{path}": {", ".join(options)}' for path, options in suggestions.items()]
    return "\n".join(lines)


def format_field_warning(validation: BatchValidationResult) -> str:
    invalid = ", ".join(validation["invalid_paths"])
    message = f"WARNING: Some fields were invalid and filtered out.\nInvalid fields: {invalid}"
    hints = format_suggestions(validation.get("suggestions"))
    if hints:
        message += "\n" + hints
    return message


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix) :] if prefix and path.startswith(prefix) else path


def select_fields(
    ctx: AppContext,
    entity_type: str,
    requested: Any,
    *,
    prefix: str = "",
) -> tuple[FieldSelection, list[TextContent] | None]:
    """Validate the ``fields`` argument of a tool call.

    Paths are checked against *entity_type*'s catalog, qualified with
    *prefix* (``"board."`` for board-relative paths in the agile catalog).
    Invalid paths are dropped with a warning; if none survive, the error
    response lists them with suggestions.
    """
    if requested is None:
        return FieldSelection(), None
    if not isinstance(requested, list) or not all(isinstance(p, str) for p in requested):
        return FieldSelection(), _error("fields must be an array of strings")
    if not requested:
        return FieldSelection(), None

    validation = ctx.resolver.validate_field_paths(entity_type, [prefix + p for p in requested])
    valid = [_strip_prefix(p, prefix) for p in validation["valid_paths"]]
    invalid = [_strip_prefix(p, prefix) for p in validation["invalid_paths"]]
    suggestions = {
        _strip_prefix(path, prefix): [_strip_prefix(s, prefix) for s in options]
        for path, options in validation.get("suggestions", {}).items()
    }

    if validation["is_valid"]:
        return FieldSelection(paths=valid), None

    if not valid:
        logger.info(
            "All requested fields invalid",
            extra={"context": {"entity_type": entity_type, "invalid_paths": invalid}},
        )
        detail = validation.get("error") or "All provided fields are invalid."
        hints = format_suggestions(suggestions)
        payload = InvalidFieldsError(
            error=f"{detail}\n{hints}" if hints else detail,
            code="invalid_fields",
            invalid_paths=invalid,
        )
        if suggestions:
            payload["suggestions"] = suggestions
        return FieldSelection(), _text(payload)

    warning = format_field_warning(
        BatchValidationResult(is_valid=False, valid_paths=valid, invalid_paths=invalid, suggestions=suggestions)
    )
    logger.info("Dropped invalid fields", extra={"context": {"entity_type": entity_type, "invalid_paths": invalid}})
    return FieldSelection(paths=valid, warning=warning), None


def _with_warning(data: Any, warning: str | None) -> Any:
    if warning is None:
        return data
    return WarningEnvelope(warning=warning, data=data)


# ---------------------------------------------------------------------------
# Issue lists
# ---------------------------------------------------------------------------

# Keys kept on every issue alongside the projected ``fields`` block.
_ISSUE_IDENTITY_KEYS = ("id", "key", "self")

PAGE_SCHEMA: dict[str, Any] = {
    "start_at": {"type": "integer", "default": 0, "minimum": 0, "description": "Pagination offset"},
    "max_results": {
        "type": "integer",
        "default": _DEFAULT_PAGE_SIZE,
        "minimum": 1,
        "maximum": _MAX_PAGE_SIZE,
        "description": f"Page size (max {_MAX_PAGE_SIZE})",
    },
}


def _project_issue(issue: Any, selection: FieldSelection) -> Any:
    """Project an issue's ``fields`` block, keeping its identity keys."""
    if selection.paths is None or not isinstance(issue, dict):
        return issue
    out = {k: issue[k] for k in _ISSUE_IDENTITY_KEYS if k in issue}
    out["fields"] = selection.project(issue.get("fields", {}))
    return out


def _search_response(result: Any, selection: FieldSelection, start_at: int, max_results: int) -> list[TextContent]:
    """Shape one page of backend issues into a SearchResponse."""
    issues = result.get("issues", []) if isinstance(result, dict) else []
    if not isinstance(issues, list):
        issues = []
    total = result.get("total", len(issues)) if isinstance(result, dict) else len(issues)
    if not isinstance(total, int):
        total = len(issues)
    response = SearchResponse(
        issues=[_project_issue(i, selection) for i in issues],
        total=total,
        start_at=start_at,
        max_results=max_results,
        has_more=start_at + len(issues) < total,
    )
    return _text(_with_warning(response, selection.warning))

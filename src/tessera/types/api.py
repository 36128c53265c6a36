"""TypedDicts for MCP tool handler responses."""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict


class ErrorResponse(TypedDict):
    """Standard error envelope returned by MCP error paths."""

    error: str
    code: str


class InvalidFieldsError(TypedDict):
    """Error returned when every requested field path was rejected.

    Carries per-path suggestions so the caller can correct and retry.
    """

    error: str
    code: str
    invalid_paths: list[str]
    suggestions: NotRequired[dict[str, list[str]]]


class UpstreamError(TypedDict):
    error: str
    code: str
    status_code: NotRequired[int]
    retryable: bool


class WarningEnvelope(TypedDict):
    """Response wrapper used when some requested fields were dropped."""

    warning: str
    data: Any


class SearchResponse(TypedDict):
    issues: list[dict[str, Any]]
    total: int
    start_at: int
    max_results: int
    has_more: bool


class FieldSearchEntry(TypedDict):
    id: str
    name: str
    custom: bool
    schema_type: str | None
    searchable: NotRequired[bool]
    clause_names: NotRequired[list[str]]


class FieldSearchResponse(TypedDict):
    fields: list[FieldSearchEntry]
    total: int
    query: NotRequired[str]

"""Field path validation and suggestion helpers.

Pure functions -- no MCP, httpx, or Click dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from tessera.fields import ResourceDefinition
from tessera.types.core import BatchValidationResult, PathInfo

SIMILARITY_THRESHOLD = 0.6
MAX_SUGGESTIONS = 3

_CUSTOM_FIELD_PATTERN = re.compile(r"^customfield_\d+$")


def calculate_similarity(a: str, b: str) -> float:
    """Fraction of character positions at which *a* and *b* agree.

    Compares index by index over the shorter string and divides by the
    longer length. Two empty strings are identical (1.0).
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    matches = sum(1 for x, y in zip(a, b, strict=False) if x == y)
    return matches / longest


def find_similar_paths(target: str, candidates: Iterable[str]) -> list[str]:
    """Return up to MAX_SUGGESTIONS candidates scoring above the threshold, best first."""
    scored = [(calculate_similarity(target, c), c) for c in candidates]
    kept = [(score, c) for score, c in scored if score > SIMILARITY_THRESHOLD]
    kept.sort(key=lambda item: item[0], reverse=True)
    return [c for _, c in kept[:MAX_SUGGESTIONS]]


def is_custom_field_path(path: Any) -> bool:
    return isinstance(path, str) and _CUSTOM_FIELD_PATTERN.match(path) is not None


def validate_field_paths(
    definition: ResourceDefinition | None,
    entity_type: str,
    paths: list[str],
    *,
    supported_entity_types: Iterable[str] = (),
) -> BatchValidationResult:
    """Check a batch of dot-notation paths against one entity's path index.

    Custom-field ids (``customfield_<digits>``) are accepted without a catalog
    entry. Never raises: an unknown entity type (``definition is None``)
    produces ``is_valid=False`` and an ``error`` naming the supported types.
    """
    if definition is None:
        return BatchValidationResult(
            is_valid=False,
            valid_paths=[],
            invalid_paths=list(paths),
            error=f"Unknown entity type: {entity_type}. Supported types: {', '.join(supported_entity_types)}",
        )

    valid: list[str] = []
    invalid: list[str] = []
    path_info: dict[str, PathInfo] = {}
    suggestions: dict[str, list[str]] = {}

    for path in paths:
        hit = definition.lookup(path) if isinstance(path, str) else None
        if hit is not None:
            fd, ap = hit
            valid.append(path)
            path_info[path] = PathInfo(field_id=fd.id, type=ap.type, description=ap.description)
            continue
        if is_custom_field_path(path):
            valid.append(path)
            continue
        invalid.append(path)
        if isinstance(path, str):
            similar = find_similar_paths(path, definition.path_index)
            if similar:
                suggestions[path] = similar

    result = BatchValidationResult(is_valid=not invalid, valid_paths=valid, invalid_paths=invalid)
    if path_info:
        result["path_info"] = path_info
    if suggestions:
        result["suggestions"] = suggestions
    return result

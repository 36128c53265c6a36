# src/tessera/fusion.py
"""Fusion of static catalogs with dynamically discovered fields.

A dynamic field never replaces a static field with the same id; the static
definition wins and the conflict is logged. Fusion works on copies and
leaves the static definition untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from tessera.fields import EnhancedResourceDefinition, FieldDefinition, ResourceDefinition, freeze_mapping, is_valid_field_id

logger = logging.getLogger(__name__)


def _is_fusable(candidate: Any) -> bool:
    return (
        isinstance(candidate, FieldDefinition)
        and is_valid_field_id(candidate.id)
        and isinstance(candidate.name, str)
        and bool(candidate.name)
    )


def fuse_field_definitions(
    static: ResourceDefinition,
    dynamic_fields: Iterable[FieldDefinition],
    *,
    now: str | None = None,
) -> EnhancedResourceDefinition:
    """Merge *dynamic_fields* into a copy of *static*.

    - Fields without a usable id or name are skipped with a warning.
    - A field whose id already exists is rejected (static wins) and not counted.
    - Accepted fields add their access paths to the index. A path already
      owned by another field is logged and then re-pointed at the new field.
    - ``last_updated`` stays the catalog build time; *now* (default: the
      current UTC time) is recorded as ``last_dynamic_update``.
    """
    fields: dict[str, FieldDefinition] = dict(static.fields)
    path_index: dict[str, str] = dict(static.path_index)
    accepted = 0
    conflicts: list[str] = []

    for candidate in dynamic_fields:
        if not _is_fusable(candidate):
            logger.warning("Skipping invalid field during fusion", extra={"context": {"field": repr(candidate)}})
            continue
        if candidate.id in fields:
            conflicts.append(candidate.id)
            logger.warning(
                "Dynamic field '%s' conflicts with existing field; keeping the static definition",
                candidate.id,
                extra={"context": {"entity_type": static.entity_type, "field_id": candidate.id}},
            )
            continue

        fields[candidate.id] = candidate
        accepted += 1
        for ap in candidate.access_paths:
            existing = path_index.get(ap.path)
            if existing is not None and existing != candidate.id:
                logger.warning(
                    "Path conflict during fusion: '%s' moves from '%s' to '%s'",
                    ap.path,
                    existing,
                    candidate.id,
                    extra={"context": {"path": ap.path, "existing_field_id": existing, "new_field_id": candidate.id}},
                )
            path_index[ap.path] = candidate.id

    dynamic_update = now or datetime.now(UTC).isoformat()
    logger.debug(
        "Fused %s definition: %d static + %d dynamic fields (%d conflicts)",
        static.entity_type,
        len(static.fields),
        accepted,
        len(conflicts),
        extra={"context": {"total_fields": len(fields), "total_paths": len(path_index)}},
    )
    return EnhancedResourceDefinition(
        uri=static.uri,
        entity_type=static.entity_type,
        fields=freeze_mapping(fields),
        path_index=freeze_mapping(path_index),
        version=static.version,
        last_updated=static.last_updated,
        dynamic_fields=accepted,
        last_dynamic_update=dynamic_update,
    )

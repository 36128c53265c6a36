# src/tessera/catalog.py
"""Static field catalog -- parses built-in catalog data and builds path indexes.

Each entity type gets one immutable ResourceDefinition. The path index maps
every access path to the id of the field that owns it, giving O(1) lookups
for the validator and the resource endpoints.

Catalogs are built once at startup and never mutated afterwards.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from tessera.catalog_data import BUILT_IN_CATALOGS
from tessera.fields import AccessPath, FieldDefinition, ResourceDefinition, freeze_mapping
from tessera.types.core import ResourceSummary

logger = logging.getLogger(__name__)

URI_SCHEME = "jira"
RESOURCE_MIME_TYPE = "application/json"

# scheme://word/word -- e.g. jira://issue/fields
_URI_PATTERN = re.compile(r"^jira://(\w+)/(\w+)$", re.IGNORECASE)
_RESOURCE_KIND = "fields"


class InvalidResourceURIError(ValueError):
    """Raised when a resource URI does not have the ``jira://<entity>/<kind>`` shape."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"Invalid resource URI format: {uri!r} (expected {URI_SCHEME}://<entity>/fields)")


class UnknownResourceError(ValueError):
    """Raised when a well-formed resource URI names no known catalog."""

    def __init__(self, uri: str, supported: list[str]) -> None:
        self.uri = uri
        self.supported = supported
        super().__init__(f"Unknown resource: {uri}. Available: {', '.join(supported)}")


@dataclass(frozen=True)
class PathCollision:
    """An access path claimed by two fields of the same catalog."""

    entity_type: str
    path: str
    previous_field_id: str
    field_id: str


def resource_uri_for(entity_type: str) -> str:
    return f"{URI_SCHEME}://{entity_type}/{_RESOURCE_KIND}"


def parse_resource_uri(uri: Any) -> tuple[str, str]:
    """Split a resource URI into ``(entity_type, kind)``, both lower-cased.

    Raises:
        InvalidResourceURIError: If *uri* is not a string of the expected shape.
    """
    if not isinstance(uri, str):
        raise InvalidResourceURIError(str(uri))
    m = _URI_PATTERN.match(uri.strip())
    if m is None:
        raise InvalidResourceURIError(uri)
    return m.group(1).lower(), m.group(2).lower()


# ---------------------------------------------------------------------------
# Parsing (from dict)
# ---------------------------------------------------------------------------


def parse_field_definition(field_id: str, raw: dict[str, Any]) -> FieldDefinition:
    """Parse one catalog field dict into a static FieldDefinition.

    Raises:
        ValueError: If the dict is malformed.
    """
    if not isinstance(raw, dict):
        msg = f"Field '{field_id}': definition must be a dict, got {type(raw).__name__}"
        raise ValueError(msg)
    raw_paths = raw.get("access_paths")
    if not isinstance(raw_paths, list) or not raw_paths:
        msg = f"Field '{field_id}': 'access_paths' must be a non-empty list"
        raise ValueError(msg)
    for i, p in enumerate(raw_paths):
        if not isinstance(p, dict) or "path" not in p:
            msg = f"Field '{field_id}': access path at index {i} must be a dict with 'path'"
            raise ValueError(msg)

    access_paths = tuple(
        AccessPath(
            path=p["path"],
            description=p.get("description", ""),
            type=p.get("type", "string"),
            frequency=p.get("frequency", "medium"),
        )
        for p in raw_paths
    )
    return FieldDefinition(
        id=field_id,
        name=raw.get("name", field_id),
        description=raw.get("description", ""),
        type=raw.get("type", "string"),
        access_paths=access_paths,
        examples=tuple(raw.get("examples", [])),
        common_usage=tuple(tuple(group) for group in raw.get("common_usage", [])),
        source="static",
        confidence="high",
    )


def build_path_index(
    entity_type: str, fields: dict[str, FieldDefinition]
) -> tuple[dict[str, str], list[PathCollision]]:
    """Map every access path to its owning field id.

    A path claimed by two fields is a catalog defect: the later field wins,
    and the collision is logged and returned so tests can assert there are none.
    """
    index: dict[str, str] = {}
    collisions: list[PathCollision] = []
    for field_id, fd in fields.items():
        for ap in fd.access_paths:
            previous = index.get(ap.path)
            if previous is not None and previous != field_id:
                collisions.append(PathCollision(entity_type, ap.path, previous, field_id))
                logger.warning(
                    "Path collision in %s catalog: '%s' claimed by '%s' and '%s'",
                    entity_type,
                    ap.path,
                    previous,
                    field_id,
                )
            index[ap.path] = field_id
    return index, collisions


def build_resource_definition(
    raw: dict[str, Any], *, last_updated: str | None = None
) -> tuple[ResourceDefinition, list[PathCollision]]:
    """Build an immutable ResourceDefinition from a catalog dict."""
    entity_type = raw.get("entity_type")
    if not isinstance(entity_type, str) or not entity_type:
        msg = f"Catalog 'entity_type' must be a non-empty string, got {entity_type!r}"
        raise ValueError(msg)
    raw_fields = raw.get("fields")
    if not isinstance(raw_fields, dict):
        msg = f"Catalog '{entity_type}': 'fields' must be a dict, got {type(raw_fields).__name__}"
        raise ValueError(msg)

    fields = {fid: parse_field_definition(fid, fraw) for fid, fraw in raw_fields.items()}
    path_index, collisions = build_path_index(entity_type, fields)
    logger.debug("Built %s catalog: %d fields, %d paths", entity_type, len(fields), len(path_index))
    definition = ResourceDefinition(
        uri=resource_uri_for(entity_type),
        entity_type=entity_type,
        fields=freeze_mapping(fields),
        path_index=freeze_mapping(path_index),
        version=raw.get("version", "1.0.0"),
        last_updated=last_updated or datetime.now(UTC).isoformat(),
    )
    return definition, collisions


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class FieldCatalog:
    """Immutable set of static resource definitions, one per entity type."""

    def __init__(self, catalogs: dict[str, dict[str, Any]] | None = None) -> None:
        source = BUILT_IN_CATALOGS if catalogs is None else catalogs
        built_at = datetime.now(UTC).isoformat()
        definitions: dict[str, ResourceDefinition] = {}
        collisions: list[PathCollision] = []
        for raw in source.values():
            definition, found = build_resource_definition(raw, last_updated=built_at)
            definitions[definition.entity_type] = definition
            collisions.extend(found)
        self._definitions = freeze_mapping(definitions)
        self._collisions = tuple(collisions)

    @property
    def entity_types(self) -> list[str]:
        return list(self._definitions)

    @property
    def collisions(self) -> tuple[PathCollision, ...]:
        return self._collisions

    def list_resource_uris(self) -> list[str]:
        return [d.uri for d in self._definitions.values()]

    def list_resources(self) -> list[ResourceSummary]:
        summaries: list[ResourceSummary] = []
        for d in self._definitions.values():
            summaries.append(
                ResourceSummary(
                    uri=d.uri,
                    name=f"Jira {d.entity_type.capitalize()} Fields",
                    description=(
                        f"Field definitions for {d.entity_type} entities "
                        f"({d.total_fields} fields, {len(d.path_index)} access paths)"
                    ),
                    mime_type=RESOURCE_MIME_TYPE,
                )
            )
        return summaries

    def get_definition(self, entity_type: str) -> ResourceDefinition | None:
        """Return the definition for *entity_type* (case-insensitive) or None."""
        if not isinstance(entity_type, str):
            return None
        return self._definitions.get(entity_type.strip().lower())

    def definition_for_uri(self, uri: str) -> ResourceDefinition:
        """Resolve a resource URI to its static definition.

        Raises:
            InvalidResourceURIError: Malformed URI.
            UnknownResourceError: Well-formed URI naming no catalog.
        """
        entity_type, kind = parse_resource_uri(uri)
        definition = self._definitions.get(entity_type) if kind == _RESOURCE_KIND else None
        if definition is None:
            raise UnknownResourceError(uri, self.list_resource_uris())
        return definition

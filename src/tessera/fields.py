# src/tessera/fields.py
"""Field definition model -- access paths, field definitions, resource definitions.

Frozen dataclasses describing the addressable fields of each backend entity
type. Static catalogs (see catalog.py) and dynamically discovered custom
fields (see discovery.py) share this representation; fusion.py merges them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, cast

from tessera.types.core import (
    AccessPathDict,
    Confidence,
    EnhancedResourceDefinitionDict,
    FieldDefinitionDict,
    FieldSource,
    FieldType,
    Frequency,
    ISOTimestamp,
    RawFieldDescriptor,
    ResourceDefinitionDict,
)

_VALID_FIELD_TYPES: frozenset[str] = frozenset({"object", "string", "array"})
_VALID_FREQUENCIES: frozenset[str] = frozenset({"high", "medium", "low"})
_VALID_SOURCES: frozenset[str] = frozenset({"static", "dynamic"})


# ---------------------------------------------------------------------------
# Frozen dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccessPath:
    """A dot-notation route to a (possibly nested) value of a field."""

    path: str
    description: str
    type: str
    frequency: Frequency = "medium"

    def __post_init__(self) -> None:
        if not self.path or not self.path.strip():
            msg = "Access path must be a non-empty string"
            raise ValueError(msg)
        if self.frequency not in _VALID_FREQUENCIES:
            allowed = sorted(_VALID_FREQUENCIES)
            msg = f"Invalid frequency '{self.frequency}' for path '{self.path}': must be one of {allowed}"
            raise ValueError(msg)

    def to_dict(self) -> AccessPathDict:
        return AccessPathDict(path=self.path, description=self.description, type=self.type, frequency=self.frequency)


@dataclass(frozen=True)
class FieldDefinition:
    """A field of an entity type together with all of its access paths."""

    id: str
    name: str
    description: str
    type: FieldType
    access_paths: tuple[AccessPath, ...]
    examples: tuple[str, ...] = ()
    common_usage: tuple[tuple[str, ...], ...] = ()
    source: FieldSource = "static"
    confidence: Confidence = "high"

    def __post_init__(self) -> None:
        if self.type not in _VALID_FIELD_TYPES:
            allowed = sorted(_VALID_FIELD_TYPES)
            msg = f"Invalid field type '{self.type}' for field '{self.id}': must be one of {allowed}"
            raise ValueError(msg)
        if self.source not in _VALID_SOURCES:
            msg = f"Invalid source '{self.source}' for field '{self.id}'"
            raise ValueError(msg)

    def find_access_path(self, path: str) -> AccessPath | None:
        for ap in self.access_paths:
            if ap.path == path:
                return ap
        return None

    def to_dict(self) -> FieldDefinitionDict:
        return FieldDefinitionDict(
            id=self.id,
            name=self.name,
            description=self.description,
            type=self.type,
            access_paths=[ap.to_dict() for ap in self.access_paths],
            examples=list(self.examples),
            common_usage=[list(group) for group in self.common_usage],
            source=self.source,
            confidence=self.confidence,
        )


@dataclass(frozen=True)
class ResourceDefinition:
    """All fields of one entity type plus the flat path -> field-id index.

    ``fields`` and ``path_index`` are read-only mappings; fusion works on
    copies. ``total_fields`` is derived so it can never drift from ``fields``.
    """

    uri: str
    entity_type: str
    fields: MappingProxyType[str, FieldDefinition]
    path_index: MappingProxyType[str, str]
    version: str
    last_updated: str

    @property
    def total_fields(self) -> int:
        return len(self.fields)

    def lookup(self, path: str) -> tuple[FieldDefinition, AccessPath] | None:
        """Resolve *path* via the index. Returns None on a miss."""
        field_id = self.path_index.get(path)
        if field_id is None:
            return None
        fd = self.fields.get(field_id)
        if fd is None:
            return None
        ap = fd.find_access_path(path)
        if ap is None:
            return None
        return fd, ap

    def to_dict(self) -> ResourceDefinitionDict:
        return ResourceDefinitionDict(
            uri=self.uri,
            entity_type=self.entity_type,
            version=self.version,
            last_updated=ISOTimestamp(self.last_updated),
            total_fields=self.total_fields,
            fields={fid: fd.to_dict() for fid, fd in self.fields.items()},
            path_index=dict(self.path_index),
        )


@dataclass(frozen=True)
class EnhancedResourceDefinition(ResourceDefinition):
    """A static definition fused with dynamically discovered custom fields."""

    dynamic_fields: int = 0
    last_dynamic_update: str = field(default="")

    def to_dict(self) -> EnhancedResourceDefinitionDict:  # type: ignore[override]
        base = super().to_dict()
        return EnhancedResourceDefinitionDict(
            **base,
            dynamic_fields=self.dynamic_fields,
            last_dynamic_update=ISOTimestamp(self.last_dynamic_update),
        )


def freeze_mapping(data: dict[str, Any]) -> MappingProxyType[str, Any]:
    """Wrap a private copy of *data* in a read-only view."""
    return MappingProxyType(dict(data))


# ---------------------------------------------------------------------------
# Schema kinds
# ---------------------------------------------------------------------------


class SchemaKind(enum.Enum):
    """Closed set of value shapes a backend field schema can describe."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"


# Backend schema.type names that denote structured objects.
_OBJECT_SCHEMA_TYPES: frozenset[str] = frozenset(
    {"object", "project", "user", "issuetype", "priority", "resolution", "status", "option", "version", "component"}
)
_STRING_SCHEMA_TYPES: frozenset[str] = frozenset({"string", "date", "datetime"})


def parse_schema_kind(raw_type: Any) -> SchemaKind:
    """Map a backend ``schema.type`` string to a SchemaKind. Total over all inputs."""
    if not isinstance(raw_type, str) or not raw_type.strip():
        return SchemaKind.UNKNOWN
    name = raw_type.strip().lower()
    if name == "number":
        return SchemaKind.NUMBER
    if name == "boolean":
        return SchemaKind.BOOLEAN
    if name == "array":
        return SchemaKind.ARRAY
    if name in _OBJECT_SCHEMA_TYPES:
        return SchemaKind.OBJECT
    if name in _STRING_SCHEMA_TYPES:
        return SchemaKind.STRING
    return SchemaKind.UNKNOWN


_FIELD_TYPE_BY_KIND: dict[SchemaKind, FieldType] = {
    SchemaKind.STRING: "string",
    SchemaKind.NUMBER: "string",
    SchemaKind.BOOLEAN: "string",
    SchemaKind.ARRAY: "array",
    SchemaKind.OBJECT: "object",
    SchemaKind.UNKNOWN: "string",
}

_VALUE_TYPE_BY_KIND: dict[SchemaKind, str] = {
    SchemaKind.STRING: "string",
    SchemaKind.NUMBER: "number",
    SchemaKind.BOOLEAN: "boolean",
    SchemaKind.ARRAY: "array",
    SchemaKind.OBJECT: "object",
    SchemaKind.UNKNOWN: "string",
}


def field_type_for(kind: SchemaKind) -> FieldType:
    """Field classification (object/string/array) for a schema kind."""
    return _FIELD_TYPE_BY_KIND[kind]


def value_type_for(kind: SchemaKind) -> str:
    """JSON value type reported on an access path for a schema kind."""
    return _VALUE_TYPE_BY_KIND[kind]


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def is_valid_field_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def dynamic_field_from_descriptor(raw: RawFieldDescriptor) -> FieldDefinition | None:
    """Convert a backend field descriptor to a dynamic FieldDefinition.

    Returns None when the descriptor lacks a usable id or name; the caller
    decides how to report the drop.
    """
    field_id = raw.get("id")
    name = raw.get("name")
    if not is_valid_field_id(field_id) or not isinstance(name, str) or not name:
        return None
    field_id = cast(str, field_id)
    schema = raw.get("schema")
    kind = parse_schema_kind(schema.get("type") if isinstance(schema, dict) else None)
    return FieldDefinition(
        id=field_id,
        name=name,
        description=f"Dynamic custom field: {name}",
        type=field_type_for(kind),
        access_paths=(
            AccessPath(
                path=field_id,
                description=f"Access {name} value",
                type=value_type_for(kind),
                frequency="medium",
            ),
        ),
        examples=(field_id,),
        common_usage=((field_id,),),
        source="dynamic",
        confidence="high",
    )

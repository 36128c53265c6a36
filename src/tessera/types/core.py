"""Foundational TypedDicts for dataclass to_dict() returns."""

from __future__ import annotations

from typing import Literal, NewType, NotRequired, TypedDict

ISOTimestamp = NewType("ISOTimestamp", str)

FieldType = Literal["object", "string", "array"]
Frequency = Literal["high", "medium", "low"]
FieldSource = Literal["static", "dynamic"]
Confidence = Literal["high", "medium", "low"]


class AccessPathDict(TypedDict):
    path: str
    description: str
    type: str
    frequency: Frequency


class FieldDefinitionDict(TypedDict):
    id: str
    name: str
    description: str
    type: FieldType
    access_paths: list[AccessPathDict]
    examples: list[str]
    common_usage: list[list[str]]
    source: FieldSource
    confidence: Confidence


class ResourceDefinitionDict(TypedDict):
    uri: str
    entity_type: str
    version: str
    last_updated: ISOTimestamp
    total_fields: int
    fields: dict[str, FieldDefinitionDict]
    path_index: dict[str, str]


class EnhancedResourceDefinitionDict(ResourceDefinitionDict):
    dynamic_fields: int
    last_dynamic_update: ISOTimestamp


class RawFieldSchema(TypedDict, total=False):
    """``schema`` block of a backend field descriptor."""

    type: str
    items: str
    system: str
    custom: str
    customId: int


class RawFieldDescriptor(TypedDict, total=False):
    """One entry of the backend's enumerate-fields response."""

    id: str
    key: str
    name: str
    custom: bool
    orderable: bool
    navigable: bool
    searchable: bool
    clauseNames: list[str]
    schema: RawFieldSchema


class PathInfo(TypedDict):
    field_id: str
    type: str
    description: str


class BatchValidationResult(TypedDict):
    """Outcome of validating a batch of dot-notation field paths."""

    is_valid: bool
    valid_paths: list[str]
    invalid_paths: list[str]
    path_info: NotRequired[dict[str, PathInfo]]
    suggestions: NotRequired[dict[str, list[str]]]
    error: NotRequired[str]


class CacheStats(TypedDict):
    entries: int
    max_size: int
    ttl_seconds: float
    pending: int
    keys: list[str]


class ResourceSummary(TypedDict):
    uri: str
    name: str
    description: str
    mime_type: str

"""Tests for the field model and schema-kind mapping."""

from __future__ import annotations

import pytest

from tessera.fields import (
    AccessPath,
    FieldDefinition,
    SchemaKind,
    dynamic_field_from_descriptor,
    field_type_for,
    parse_schema_kind,
    value_type_for,
)


class TestParseSchemaKind:
    @pytest.mark.parametrize(
        ("raw", "kind"),
        [
            ("number", SchemaKind.NUMBER),
            ("boolean", SchemaKind.BOOLEAN),
            ("array", SchemaKind.ARRAY),
            ("user", SchemaKind.OBJECT),
            ("option", SchemaKind.OBJECT),
            ("datetime", SchemaKind.STRING),
            (" String ", SchemaKind.STRING),
            ("com.atlassian.weird", SchemaKind.UNKNOWN),
            ("", SchemaKind.UNKNOWN),
            (None, SchemaKind.UNKNOWN),
            (42, SchemaKind.UNKNOWN),
        ],
    )
    def test_mapping(self, raw: object, kind: SchemaKind) -> None:
        assert parse_schema_kind(raw) is kind

    def test_every_kind_has_types(self) -> None:
        for kind in SchemaKind:
            assert field_type_for(kind) in {"object", "string", "array"}
            assert value_type_for(kind)

    def test_number_is_string_field_with_number_value(self) -> None:
        assert field_type_for(SchemaKind.NUMBER) == "string"
        assert value_type_for(SchemaKind.NUMBER) == "number"


class TestDynamicFieldFromDescriptor:
    def test_conversion(self) -> None:
        fd = dynamic_field_from_descriptor(
            {"id": "customfield_10020", "name": "Sprint", "custom": True, "schema": {"type": "array"}}
        )
        assert fd is not None
        assert fd.type == "array"
        assert fd.description == "Dynamic custom field: Sprint"
        assert fd.source == "dynamic"
        assert fd.confidence == "high"
        assert fd.examples == ("customfield_10020",)
        assert fd.common_usage == (("customfield_10020",),)
        (ap,) = fd.access_paths
        assert ap.path == "customfield_10020"
        assert ap.type == "array"
        assert ap.frequency == "medium"

    def test_missing_schema(self) -> None:
        fd = dynamic_field_from_descriptor({"id": "customfield_1", "name": "Thing", "custom": True})
        assert fd is not None
        assert fd.type == "string"
        assert fd.access_paths[0].type == "string"

    @pytest.mark.parametrize(
        "raw",
        [
            {"name": "No id", "custom": True},
            {"id": "  ", "name": "Blank id", "custom": True},
            {"id": "customfield_1", "custom": True},
            {"id": "customfield_1", "name": "", "custom": True},
        ],
    )
    def test_unusable_descriptor(self, raw: dict[str, object]) -> None:
        assert dynamic_field_from_descriptor(raw) is None  # type: ignore[arg-type]


class TestModelValidation:
    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            AccessPath(path=" ", description="x", type="string")

    def test_bad_frequency_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid frequency"):
            AccessPath(path="a", description="x", type="string", frequency="often")  # type: ignore[arg-type]

    def test_bad_field_type_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid field type"):
            FieldDefinition(id="a", name="A", description="", type="number", access_paths=())  # type: ignore[arg-type]

    def test_bad_source_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid source"):
            FieldDefinition(
                id="a", name="A", description="", type="string", access_paths=(), source="cache"  # type: ignore[arg-type]
            )

    def test_find_access_path(self) -> None:
        ap = AccessPath(path="a.b", description="x", type="string")
        fd = FieldDefinition(id="a", name="A", description="", type="object", access_paths=(ap,))
        assert fd.find_access_path("a.b") is ap
        assert fd.find_access_path("a.c") is None
        assert fd.to_dict()["access_paths"] == [ap.to_dict()]

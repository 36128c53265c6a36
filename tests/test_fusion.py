"""Tests for fusing static catalogs with discovered fields."""

from __future__ import annotations

import logging

import pytest

from tessera.catalog import FieldCatalog
from tessera.fields import AccessPath, FieldDefinition, ResourceDefinition, dynamic_field_from_descriptor
from tessera.fusion import fuse_field_definitions


@pytest.fixture(scope="module")
def issue_definition() -> ResourceDefinition:
    definition = FieldCatalog().get_definition("issue")
    assert definition is not None
    return definition


def _dynamic(field_id: str, name: str = "Custom", schema_type: str = "string") -> FieldDefinition:
    fd = dynamic_field_from_descriptor({"id": field_id, "name": name, "custom": True, "schema": {"type": schema_type}})
    assert fd is not None
    return fd


class TestFusion:
    def test_adds_dynamic_fields(self, issue_definition: ResourceDefinition) -> None:
        fused = fuse_field_definitions(issue_definition, [_dynamic("customfield_1"), _dynamic("customfield_2")])
        assert fused.dynamic_fields == 2
        assert fused.total_fields == issue_definition.total_fields + 2
        assert fused.path_index["customfield_1"] == "customfield_1"
        assert fused.fields["customfield_2"].source == "dynamic"

    def test_total_fields_matches_fields(self, issue_definition: ResourceDefinition) -> None:
        fused = fuse_field_definitions(issue_definition, [_dynamic("customfield_1")])
        assert fused.total_fields == len(fused.fields)

    def test_static_wins_on_id_conflict(
        self, issue_definition: ResourceDefinition, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="tessera.fusion"):
            fused = fuse_field_definitions(issue_definition, [_dynamic("status", "Shadow status")])
        assert fused.fields["status"] is issue_definition.fields["status"]
        assert fused.dynamic_fields == 0
        assert fused.total_fields == issue_definition.total_fields
        assert "keeping the static definition" in caplog.text

    def test_static_definition_untouched(self, issue_definition: ResourceDefinition) -> None:
        before_fields = dict(issue_definition.fields)
        before_index = dict(issue_definition.path_index)
        fuse_field_definitions(issue_definition, [_dynamic("customfield_9")])
        assert dict(issue_definition.fields) == before_fields
        assert dict(issue_definition.path_index) == before_index
        assert "customfield_9" not in issue_definition.fields

    def test_skips_invalid_candidates(self, issue_definition: ResourceDefinition) -> None:
        blank_name = FieldDefinition(
            id="customfield_5",
            name="",
            description="",
            type="string",
            access_paths=(AccessPath(path="customfield_5", description="", type="string"),),
        )
        fused = fuse_field_definitions(issue_definition, [blank_name, "junk", _dynamic("customfield_6")])  # type: ignore[list-item]
        assert fused.dynamic_fields == 1
        assert "customfield_5" not in fused.fields

    def test_path_collision_repoints_to_new_field(
        self, issue_definition: ResourceDefinition, caplog: pytest.LogCaptureFixture
    ) -> None:
        squatter = FieldDefinition(
            id="customfield_7",
            name="Squatter",
            description="",
            type="string",
            access_paths=(AccessPath(path="summary", description="", type="string"),),
            source="dynamic",
        )
        with caplog.at_level(logging.WARNING, logger="tessera.fusion"):
            fused = fuse_field_definitions(issue_definition, [squatter])
        assert fused.path_index["summary"] == "customfield_7"
        assert fused.dynamic_fields == 1
        assert "Path conflict" in caplog.text

    def test_duplicate_dynamic_ids_counted_once(self, issue_definition: ResourceDefinition) -> None:
        fused = fuse_field_definitions(issue_definition, [_dynamic("customfield_1"), _dynamic("customfield_1", "Again")])
        assert fused.dynamic_fields == 1
        assert fused.fields["customfield_1"].name == "Custom"

    def test_timestamps(self, issue_definition: ResourceDefinition) -> None:
        fused = fuse_field_definitions(issue_definition, [], now="2026-01-01T00:00:00+00:00")
        assert fused.last_updated == issue_definition.last_updated
        assert fused.last_dynamic_update == "2026-01-01T00:00:00+00:00"
        assert fused.dynamic_fields == 0
        assert fused.version == issue_definition.version

    def test_catalog_build_time_survives_refusion(self, issue_definition: ResourceDefinition) -> None:
        first = fuse_field_definitions(issue_definition, [], now="2026-01-01T00:00:00+00:00")
        second = fuse_field_definitions(issue_definition, [_dynamic("customfield_1")], now="2026-02-01T00:00:00+00:00")
        assert first.last_updated == second.last_updated == issue_definition.last_updated
        assert second.last_dynamic_update == "2026-02-01T00:00:00+00:00"

    def test_to_dict_includes_dynamic_metadata(self, issue_definition: ResourceDefinition) -> None:
        data = fuse_field_definitions(issue_definition, [_dynamic("customfield_1", schema_type="array")]).to_dict()
        assert data["dynamic_fields"] == 1
        assert data["last_dynamic_update"]
        assert data["fields"]["customfield_1"]["type"] == "array"
        assert data["total_fields"] == len(data["fields"])

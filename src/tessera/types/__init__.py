# IMPORT CONSTRAINT: types/ modules must only import from typing, stdlib, and each other.
# NEVER import from fields.py, catalog.py, or any runtime module (circular imports).
"""Typed return-value contracts for tessera core and MCP layers."""

from __future__ import annotations

from tessera.types.core import (
    AccessPathDict,
    BatchValidationResult,
    EnhancedResourceDefinitionDict,
    FieldDefinitionDict,
    ISOTimestamp,
    PathInfo,
    RawFieldDescriptor,
    ResourceDefinitionDict,
    ResourceSummary,
)

__all__ = [
    "AccessPathDict",
    "BatchValidationResult",
    "EnhancedResourceDefinitionDict",
    "FieldDefinitionDict",
    "ISOTimestamp",
    "PathInfo",
    "RawFieldDescriptor",
    "ResourceDefinitionDict",
    "ResourceSummary",
]

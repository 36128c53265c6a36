# src/tessera/resolver.py
"""Field resolvers -- the seam between the catalog engine and the MCP surface.

``StaticFieldResolver`` serves the built-in catalogs. ``HybridFieldResolver``
wraps a static resolver and enriches resource reads with discovered custom
fields. ``build_resolver`` picks one from configuration and fails fast on bad
arguments.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

from tessera.catalog import FieldCatalog
from tessera.config import DEFAULT_CACHE_MAX_SIZE, DEFAULT_CACHE_TTL_SECONDS, ConfigurationError
from tessera.discovery import DynamicFieldCache, FieldClient
from tessera.fields import ResourceDefinition
from tessera.fusion import fuse_field_definitions
from tessera.types.core import BatchValidationResult, ResourceSummary
from tessera.validation import validate_field_paths

logger = logging.getLogger(__name__)


class FieldResolver(Protocol):
    @property
    def entity_types(self) -> list[str]: ...

    def list_resource_uris(self) -> list[str]: ...

    def list_resources(self) -> list[ResourceSummary]: ...

    def get_definition(self, entity_type: str) -> ResourceDefinition | None: ...

    async def read_resource(self, uri: str, *, force_refresh: bool = False) -> ResourceDefinition: ...

    def validate_field_paths(self, entity_type: str, paths: list[str]) -> BatchValidationResult: ...


class StaticFieldResolver:
    """Serves the immutable static catalogs."""

    def __init__(self, catalog: FieldCatalog | None = None) -> None:
        self._catalog = catalog if catalog is not None else FieldCatalog()

    @property
    def catalog(self) -> FieldCatalog:
        return self._catalog

    @property
    def entity_types(self) -> list[str]:
        return self._catalog.entity_types

    def list_resource_uris(self) -> list[str]:
        return self._catalog.list_resource_uris()

    def list_resources(self) -> list[ResourceSummary]:
        return self._catalog.list_resources()

    def get_definition(self, entity_type: str) -> ResourceDefinition | None:
        return self._catalog.get_definition(entity_type)

    async def read_resource(self, uri: str, *, force_refresh: bool = False) -> ResourceDefinition:
        """Resolve *uri* to its static definition.

        Raises:
            InvalidResourceURIError: Malformed URI.
            UnknownResourceError: No catalog for the URI.
        """
        return self._catalog.definition_for_uri(uri)

    def validate_field_paths(self, entity_type: str, paths: list[str]) -> BatchValidationResult:
        return validate_field_paths(
            self._catalog.get_definition(entity_type),
            entity_type,
            paths,
            supported_entity_types=self._catalog.entity_types,
        )


class HybridFieldResolver:
    """Static resolver plus dynamic custom-field discovery on resource reads.

    Validation stays static: custom fields are accepted by id pattern, so
    checking paths never waits on the backend.
    """

    def __init__(self, static: StaticFieldResolver, cache: DynamicFieldCache) -> None:
        self._static = static
        self._cache = cache

    @property
    def cache(self) -> DynamicFieldCache:
        return self._cache

    @property
    def entity_types(self) -> list[str]:
        return self._static.entity_types

    def list_resource_uris(self) -> list[str]:
        return self._static.list_resource_uris()

    def list_resources(self) -> list[ResourceSummary]:
        return self._static.list_resources()

    def get_definition(self, entity_type: str) -> ResourceDefinition | None:
        return self._static.get_definition(entity_type)

    async def read_resource(self, uri: str, *, force_refresh: bool = False) -> ResourceDefinition:
        # URI errors propagate; only the enhancement step degrades.
        definition = await self._static.read_resource(uri)
        try:
            dynamic = await self._cache.discover(definition.entity_type, force_refresh=force_refresh)
            return fuse_field_definitions(definition, dynamic)
        except Exception:
            logger.error(
                "Failed to enhance %s with dynamic fields, falling back to static definitions",
                uri,
                exc_info=True,
                extra={"context": {"uri": uri, "entity_type": definition.entity_type}},
            )
            return definition

    def validate_field_paths(self, entity_type: str, paths: list[str]) -> BatchValidationResult:
        return self._static.validate_field_paths(entity_type, paths)


def build_resolver(
    client: FieldClient | None = None,
    *,
    enable_dynamic: bool = False,
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
    cache_max_size: int = DEFAULT_CACHE_MAX_SIZE,
    catalog: FieldCatalog | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> FieldResolver:
    """Construct the resolver selected by *enable_dynamic*.

    Raises:
        ConfigurationError: Non-positive TTL or size, or dynamic mode
            without a client exposing ``list_fields()``.
    """
    if isinstance(cache_ttl_seconds, bool) or not isinstance(cache_ttl_seconds, (int, float)) or cache_ttl_seconds <= 0:
        msg = f"cache_ttl_seconds must be > 0, got {cache_ttl_seconds!r}"
        raise ConfigurationError(msg)
    if isinstance(cache_max_size, bool) or not isinstance(cache_max_size, int) or cache_max_size <= 0:
        msg = f"cache_max_size must be a positive integer, got {cache_max_size!r}"
        raise ConfigurationError(msg)

    static = StaticFieldResolver(catalog)
    if not enable_dynamic:
        logger.info("Using static field definitions")
        return static

    if client is None:
        msg = "Dynamic field discovery is enabled but no backend client was supplied"
        raise ConfigurationError(msg)
    cache = DynamicFieldCache(client, ttl_seconds=cache_ttl_seconds, max_size=cache_max_size, clock=clock)
    logger.info(
        "Using hybrid field definitions (ttl=%ss, max_size=%d)",
        cache_ttl_seconds,
        cache_max_size,
        extra={"context": {"ttl_seconds": cache_ttl_seconds, "max_size": cache_max_size}},
    )
    return HybridFieldResolver(static, cache)

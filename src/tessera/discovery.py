# src/tessera/discovery.py
"""Dynamic field discovery -- TTL/LRU cache over the backend field listing.

Custom fields are site-specific, so they are fetched from the backend at
runtime and cached per entity type. Concurrent requests for the same key
share one in-flight fetch (single-flight). A failed fetch degrades to "no
dynamic fields" and is never cached.

All cache mutation happens between await points on one event loop, so no
lock is needed.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from tessera.config import DEFAULT_CACHE_MAX_SIZE, DEFAULT_CACHE_TTL_SECONDS, ConfigurationError
from tessera.fields import FieldDefinition, dynamic_field_from_descriptor
from tessera.types.core import CacheStats, RawFieldDescriptor

logger = logging.getLogger(__name__)


class FieldClient(Protocol):
    """The one backend capability discovery needs: enumerate all fields."""

    async def list_fields(self) -> list[RawFieldDescriptor]: ...


@dataclass
class CacheEntry:
    data: tuple[FieldDefinition, ...]
    timestamp: float
    last_accessed: float


def cache_key_for(entity_type: str) -> str:
    return f"{entity_type.strip().lower()}-fields"


class DynamicFieldCache:
    """Per-entity-type cache of discovered custom fields.

    Entries expire ``ttl_seconds`` after they were fetched. When inserting a
    new key would exceed ``max_size``, the entry with the oldest
    ``last_accessed`` is evicted.
    """

    def __init__(
        self,
        client: FieldClient,
        *,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        max_size: int = DEFAULT_CACHE_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if client is None or not callable(getattr(client, "list_fields", None)):
            msg = "Dynamic field discovery requires a client with a callable list_fields()"
            raise ConfigurationError(msg)
        if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, (int, float)) or ttl_seconds <= 0:
            msg = f"Cache TTL must be a positive number of seconds, got {ttl_seconds!r}"
            raise ConfigurationError(msg)
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0:
            msg = f"Cache max size must be a positive integer, got {max_size!r}"
            raise ConfigurationError(msg)
        self._client = client
        self._ttl = float(ttl_seconds)
        self._max_size = max_size
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._pending: dict[str, asyncio.Task[list[FieldDefinition]]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    # -- Public API ---------------------------------------------------------

    async def discover(self, entity_type: Any, *, force_refresh: bool = False) -> list[FieldDefinition]:
        """Return the custom fields for *entity_type*, fetching on a miss.

        Never raises for bad input or backend failures; both yield ``[]``.
        ``force_refresh`` skips the cached entry but still joins a fetch
        that is already in flight.
        """
        if not isinstance(entity_type, str) or not entity_type.strip():
            logger.warning(
                "Invalid entity type for dynamic field discovery",
                extra={"context": {"entity_type": repr(entity_type)}},
            )
            return []

        key = cache_key_for(entity_type)
        if not force_refresh:
            entry = self._lookup(key)
            if entry is not None:
                return list(entry.data)

        pending = self._pending.get(key)
        if pending is not None:
            logger.debug("Joining in-flight field discovery", extra={"context": {"cache_key": key}})
            return list(await asyncio.shield(pending))

        task = asyncio.ensure_future(self._fetch(entity_type, key))
        self._pending[key] = task
        # Registered before any waiter so the handle is gone by the time
        # callers resume.
        task.add_done_callback(functools.partial(self._forget_pending, key))
        return list(await asyncio.shield(task))

    def clear(self) -> None:
        """Drop all cached entries. In-flight fetches are left to finish."""
        self._entries.clear()
        logger.debug("Dynamic field cache cleared")

    def stats(self) -> CacheStats:
        return CacheStats(
            entries=len(self._entries),
            max_size=self._max_size,
            ttl_seconds=self._ttl,
            pending=len(self._pending),
            keys=list(self._entries),
        )

    # -- Internals ----------------------------------------------------------

    def _forget_pending(self, key: str, task: asyncio.Task[list[FieldDefinition]]) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]

    def _lookup(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        now = self._clock()
        if now - entry.timestamp >= self._ttl:
            del self._entries[key]
            logger.debug("Cache entry expired", extra={"context": {"cache_key": key, "age": now - entry.timestamp}})
            return None
        entry.last_accessed = now
        self._entries.move_to_end(key)
        logger.debug("Cache hit for dynamic fields", extra={"context": {"cache_key": key, "count": len(entry.data)}})
        return entry

    def _store(self, key: str, data: list[FieldDefinition]) -> None:
        now = self._clock()
        if key not in self._entries:
            while len(self._entries) >= self._max_size:
                victim = min(self._entries, key=lambda k: self._entries[k].last_accessed)
                del self._entries[victim]
                logger.debug("Evicted least recently used cache entry", extra={"context": {"cache_key": victim}})
        self._entries[key] = CacheEntry(data=tuple(data), timestamp=now, last_accessed=now)
        self._entries.move_to_end(key)

    async def _fetch(self, entity_type: str, key: str) -> list[FieldDefinition]:
        logger.debug("Cache miss, fetching dynamic fields", extra={"context": {"cache_key": key}})
        try:
            raw_fields = await self._client.list_fields()
            if not isinstance(raw_fields, list):
                msg = f"list_fields() returned {type(raw_fields).__name__}, expected a list"
                raise TypeError(msg)
            fields = self._convert(raw_fields)
        except Exception as exc:
            logger.error(
                "Dynamic field discovery failed for %s",
                entity_type,
                exc_info=True,
                extra={"context": {"entity_type": entity_type, "cache_key": key, "error": str(exc)}},
            )
            return []

        self._store(key, fields)
        logger.info(
            "Discovered %d dynamic fields for %s",
            len(fields),
            entity_type,
            extra={"context": {"cache_key": key, "count": len(fields)}},
        )
        return fields

    @staticmethod
    def _convert(raw_fields: list[Any]) -> list[FieldDefinition]:
        fields: list[FieldDefinition] = []
        for raw in raw_fields:
            if not isinstance(raw, dict) or not raw.get("custom"):
                continue
            fd = dynamic_field_from_descriptor(raw)  # type: ignore[arg-type]
            if fd is None:
                logger.warning(
                    "Dropping malformed custom field descriptor",
                    extra={"context": {"id": repr(raw.get("id")), "name": repr(raw.get("name"))}},
                )
                continue
            fields.append(fd)
        return fields

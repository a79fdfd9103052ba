"""Insert-once schema registry keyed by schema name."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .schema_models import ObjectSchema, SchemaNode


@dataclass
class RegistryEntry:
    """Registered schema and the identity of the type that produced it."""

    key: str
    identity: str
    schema: SchemaNode | None = None

    @property
    def is_built(self) -> bool:
        return self.schema is not None


class SchemaRegistry:
    """Maps schema keys to built schemas in first-demand order.

    A key is reserved before its schema is expanded so that re-entrant demand
    resolves to a reference instead of a rebuild. A demand from a different
    type identity for the same key replaces the entry (last-wins).
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def holds(self, key: str, identity: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.identity == identity

    def identity_of(self, key: str) -> str | None:
        entry = self._entries.get(key)
        return entry.identity if entry else None

    def reserve(self, key: str, identity: str) -> str | None:
        """Claim a key for a type; return the identity it replaced, if any."""
        previous = self._entries.get(key)
        if previous is not None and previous.identity == identity:
            return None
        if previous is not None:
            replaced = previous.identity
            previous.identity = identity
            previous.schema = None
            return replaced
        self._entries[key] = RegistryEntry(key=key, identity=identity)
        return None

    def fill(self, key: str, identity: str, schema: SchemaNode) -> None:
        entry = self._entries.get(key)
        if entry is None or entry.identity != identity:
            # The key was taken over by another type while this one expanded.
            return
        entry.schema = schema

    def register(self, key: str, identity: str, schema: SchemaNode) -> None:
        """Insert a fully built schema unless the key already holds this identity."""
        if self.holds(key, identity):
            return
        self.reserve(key, identity)
        self.fill(key, identity, schema)

    def get(self, key: str) -> SchemaNode | None:
        entry = self._entries.get(key)
        return entry.schema if entry else None

    def items(self) -> Iterator[tuple[str, SchemaNode]]:
        for key, entry in self._entries.items():
            yield key, entry.schema if entry.schema is not None else ObjectSchema()

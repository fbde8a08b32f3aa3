"""Schema groups: one semantic domain's worth of message kinds."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from platform_messages.errors import DuplicateKindError
from platform_messages.schema import SchemaDefinition


class SchemaGroup:
    """A named, read-only mapping from message kind to schema definition.

    Built once from static definitions; nothing is added or replaced later.
    """

    def __init__(self, name: str, definitions: Iterable[SchemaDefinition]) -> None:
        if not name:
            raise ValueError("Schema group name must be a non-empty string")
        entries: dict[str, SchemaDefinition] = {}
        for definition in definitions:
            if definition.kind in entries:
                raise DuplicateKindError(group=name, kind=definition.kind)
            entries[definition.kind] = definition
        self._name = name
        self._entries = MappingProxyType(entries)

    @property
    def name(self) -> str:
        return self._name

    def entries(self) -> Mapping[str, SchemaDefinition]:
        return self._entries

    def kinds(self) -> frozenset[str]:
        return frozenset(self._entries)

    def __contains__(self, kind: object) -> bool:
        return kind in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SchemaGroup(name={self._name!r}, kinds={sorted(self._entries)!r})"

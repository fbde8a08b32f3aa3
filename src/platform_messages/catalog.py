"""Catalog composition.

Groups are folded into one flat mapping explicitly. A kind that is already
present is never overwritten: every duplicate is collected and reported in a
single `CollisionError` once all groups have been visited.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from platform_messages.errors import Collision, CollisionError, UnknownKind
from platform_messages.group import SchemaGroup
from platform_messages.schema import SchemaDefinition

logger = logging.getLogger(__name__)


class Catalog:
    """The merged, immutable mapping from message kind to schema definition."""

    def __init__(
        self,
        entries: Mapping[str, SchemaDefinition],
        owners: Mapping[str, str],
        group_names: Iterable[str],
    ) -> None:
        self._entries = MappingProxyType(dict(entries))
        self._owners = MappingProxyType(dict(owners))
        self._groups = tuple(group_names)

    def get(self, kind: str) -> SchemaDefinition | None:
        return self._entries.get(kind)

    def lookup(self, kind: str) -> SchemaDefinition:
        """Return the schema for `kind` or raise `UnknownKind`."""

        schema = self._entries.get(kind)
        if schema is None:
            raise UnknownKind(kind=kind)
        return schema

    def group_of(self, kind: str) -> str:
        try:
            return self._owners[kind]
        except KeyError:
            raise UnknownKind(kind=kind) from None

    def entries(self) -> Mapping[str, SchemaDefinition]:
        return self._entries

    def kinds(self) -> frozenset[str]:
        return frozenset(self._entries)

    def groups(self) -> tuple[str, ...]:
        return self._groups

    def __contains__(self, kind: object) -> bool:
        return kind in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Catalog(groups={list(self._groups)!r}, kinds={len(self._entries)})"


def compose_catalog(groups: Iterable[SchemaGroup]) -> Catalog:
    """Merge schema groups into a catalog.

    Raises:
        CollisionError: If any kind is defined by more than one group. The
            error lists every collision, in the order the groups were given.
        ValueError: If two groups share a name.
    """

    entries: dict[str, SchemaDefinition] = {}
    owners: dict[str, str] = {}
    names: list[str] = []
    collisions: list[Collision] = []

    for group in groups:
        if group.name in names:
            raise ValueError(f"Schema group {group.name!r} given more than once")
        names.append(group.name)
        for kind, schema in group.entries().items():
            if kind in entries:
                collisions.append(
                    Collision(kind=kind, first_group=owners[kind], second_group=group.name)
                )
                continue
            entries[kind] = schema
            owners[kind] = group.name
        logger.debug(
            "Composed schema group",
            extra={"group": group.name, "kinds": len(group)},
        )

    if collisions:
        raise CollisionError(collisions=tuple(collisions))

    return Catalog(entries, owners, names)

"""The command catalog: every command exchanged between engine and integrations."""

from __future__ import annotations

from collections.abc import Iterable

from platform_messages.catalog import Catalog, compose_catalog
from platform_messages.group import SchemaGroup
from platform_messages.schemas import (
    custom_events,
    delays,
    fetch_requests,
    integration_requests,
    logs,
    run_once,
    workflow_runs,
)

COMMAND_GROUPS: tuple[SchemaGroup, ...] = (
    integration_requests.COMMANDS,
    workflow_runs.COMMANDS,
    logs.COMMANDS,
    custom_events.COMMANDS,
    delays.COMMANDS,
    fetch_requests.COMMANDS,
    run_once.COMMANDS,
)

COMMAND_GROUP_NAMES: frozenset[str] = frozenset(group.name for group in COMMAND_GROUPS)


def build_command_catalog(group_names: Iterable[str] | None = None) -> Catalog:
    """Compose the command catalog.

    Args:
        group_names: Restrict the catalog to these groups. `None` or an empty
            collection composes all of them.

    Raises:
        ValueError: If a name does not match any command group.
        CollisionError: If two groups define the same kind.
    """

    wanted = set(group_names or ())
    unknown = wanted - COMMAND_GROUP_NAMES
    if unknown:
        raise ValueError(f"Unknown schema groups: {', '.join(sorted(unknown))}")
    selected = [g for g in COMMAND_GROUPS if not wanted or g.name in wanted]
    return compose_catalog(selected)

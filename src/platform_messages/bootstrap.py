"""Process start-up: compose the catalog, wire handlers, freeze the dispatcher."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from platform_messages.catalogs.commands import build_command_catalog
from platform_messages.config import MessagingSettings
from platform_messages.dispatcher import Dispatcher, Handler, HandlerRegistry

logger = logging.getLogger(__name__)


def create_dispatcher(
    settings: MessagingSettings,
    handlers: Mapping[str, Handler],
) -> Dispatcher:
    """Build the dispatcher for this process role.

    Every registration completes before the dispatcher is returned, so callers
    never observe a partially wired dispatcher. Catalog collisions and wiring
    errors propagate and should abort start-up.
    """

    catalog = build_command_catalog(settings.groups)
    registry = HandlerRegistry(catalog)
    for kind, handler in handlers.items():
        registry.register(kind, handler)
    dispatcher = registry.build(
        timeout=settings.handler_timeout_seconds,
        require_handlers=settings.require_handlers,
    )
    logger.info(
        "Dispatcher ready",
        extra={
            "groups": list(catalog.groups()),
            "kinds": len(catalog),
            "handled": len(dispatcher.handled_kinds()),
        },
    )
    return dispatcher

"""Command/event schema catalog for the workflow platform.

Provides:
- schema definitions with validation and wire encoding
- schema groups composed into a collision-free catalog
- a dispatcher that validates messages and routes them to handlers
"""

__version__ = "0.1.0"

from platform_messages.catalog import Catalog, compose_catalog
from platform_messages.dispatcher import Dispatcher, HandlerRegistry
from platform_messages.envelope import MessageEnvelope, build_envelope
from platform_messages.group import SchemaGroup
from platform_messages.schema import MessageModel, SchemaDefinition

__all__ = [
    "__version__",
    "Catalog",
    "Dispatcher",
    "HandlerRegistry",
    "MessageEnvelope",
    "MessageModel",
    "SchemaDefinition",
    "SchemaGroup",
    "build_envelope",
    "compose_catalog",
]

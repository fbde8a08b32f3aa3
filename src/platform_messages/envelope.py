"""Message envelope: a raw payload tagged with its kind."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue
from pydantic import ValidationError as PydanticValidationError

from platform_messages.catalog import Catalog
from platform_messages.errors import InvalidEnvelope, InvalidPayload, SchemaValidationError
from platform_messages.schema import field_issues


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class MessageEnvelope(BaseModel):
    """Immutable wrapper that carries a message across the boundary.

    `payload` and `properties` are kept in wire form; they are decoded against
    the catalog only when the message is dispatched.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    kind: str = Field(min_length=1)
    version: str = Field(default="1")
    payload: JsonValue = Field(default_factory=dict)
    properties: dict[str, str] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=_utc_now)

    def to_bytes(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes | str) -> MessageEnvelope:
        try:
            return cls.model_validate_json(raw)
        except PydanticValidationError as exc:
            raise InvalidEnvelope(error=SchemaValidationError(issues=field_issues(exc))) from exc


def build_envelope(
    catalog: Catalog,
    kind: str,
    payload: Any,
    properties: Any = None,
) -> MessageEnvelope:
    """Validate a message on the producer side and wrap it for transport.

    Raises:
        UnknownKind: If the catalog has no schema for `kind`.
        InvalidPayload: If the payload or properties violate the contract.
    """

    schema = catalog.lookup(kind)
    try:
        wire_payload = schema.encode(payload)
        wire_properties = schema.encode_properties(properties)
    except SchemaValidationError as exc:
        raise InvalidPayload(kind=kind, error=exc) from exc
    try:
        return MessageEnvelope(
            kind=kind,
            version=schema.version,
            payload=wire_payload,
            properties=wire_properties,
        )
    except PydanticValidationError as exc:
        # Kinds without a properties contract still need string header values.
        error = SchemaValidationError(issues=field_issues(exc), kind=kind)
        raise InvalidPayload(kind=kind, error=error) from exc

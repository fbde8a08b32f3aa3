"""Per-message schema contracts.

A `SchemaDefinition` binds one message kind to the structural contract of its
payload, optionally to a properties (header) contract, and, for
request/response kinds, to the contract of the value the handler returns.
Validation and encoding are pure functions of their input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticSerializationError, to_json

from platform_messages.errors import FieldIssue, ResponseContractMissing, SchemaValidationError


class MessageModel(BaseModel):
    """Base for payload models: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


def field_issues(exc: PydanticValidationError, prefix: str = "") -> tuple[FieldIssue, ...]:
    issues: list[FieldIssue] = []
    for err in exc.errors(include_url=False):
        parts = [prefix] if prefix else []
        parts.extend(str(p) for p in err["loc"])
        issues.append(
            FieldIssue(path=".".join(parts), message=err["msg"], expected=err["type"])
        )
    return tuple(issues)


def _validate(
    adapter: TypeAdapter[Any],
    raw: Any,
    *,
    kind: str,
    prefix: str = "",
    accept_bytes: bool = True,
) -> Any:
    # Only bytes are wire JSON; a str is a value like any other.
    try:
        if accept_bytes and isinstance(raw, (bytes, bytearray)):
            return adapter.validate_json(raw)
        return adapter.validate_python(raw)
    except PydanticValidationError as exc:
        raise SchemaValidationError(issues=field_issues(exc, prefix), kind=kind) from exc


def _encode(
    adapter: TypeAdapter[Any],
    value: Any,
    *,
    kind: str,
    prefix: str = "",
    exclude_none: bool = False,
) -> Any:
    # Validate first so only values the contract accepts are ever encoded.
    typed = _validate(adapter, value, kind=kind, prefix=prefix, accept_bytes=False)
    try:
        return adapter.dump_python(typed, mode="json", by_alias=True, exclude_none=exclude_none)
    except PydanticSerializationError as exc:
        raise SchemaValidationError(
            issues=(FieldIssue(path=prefix, message=str(exc), expected="serializable"),),
            kind=kind,
        ) from exc


def _serialize(
    adapter: TypeAdapter[Any],
    value: Any,
    *,
    kind: str,
    prefix: str = "",
    exclude_none: bool = False,
) -> bytes:
    typed = _validate(adapter, value, kind=kind, prefix=prefix, accept_bytes=False)
    try:
        return adapter.dump_json(typed, by_alias=True, exclude_none=exclude_none)
    except PydanticSerializationError as exc:
        raise SchemaValidationError(
            issues=(FieldIssue(path=prefix, message=str(exc), expected="serializable"),),
            kind=kind,
        ) from exc


@dataclass(frozen=True)
class SchemaDefinition:
    """The contract of one message kind.

    Args:
        kind: Message kind name, unique within a composed catalog.
        data: Type of the payload (usually a `MessageModel` subclass).
        properties: Type of the message properties, if the kind declares any.
        response: Type of the handler's return value for request/response kinds.
        version: Contract version carried by envelopes of this kind.
        description: Human readable summary, shown by the CLI.
    """

    kind: str
    data: Any
    properties: Any = None
    response: Any = None
    version: str = "1"
    description: str = ""

    _data_adapter: TypeAdapter[Any] = field(init=False, repr=False, compare=False)
    _properties_adapter: TypeAdapter[Any] | None = field(init=False, repr=False, compare=False)
    _response_adapter: TypeAdapter[Any] | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.kind:
            raise ValueError("Schema kind must be a non-empty string")
        object.__setattr__(self, "_data_adapter", TypeAdapter(self.data))
        object.__setattr__(
            self,
            "_properties_adapter",
            TypeAdapter(self.properties) if self.properties is not None else None,
        )
        object.__setattr__(
            self,
            "_response_adapter",
            TypeAdapter(self.response) if self.response is not None else None,
        )

    @property
    def is_request_response(self) -> bool:
        return self._response_adapter is not None

    @property
    def has_properties(self) -> bool:
        return self._properties_adapter is not None

    # Payload

    def validate(self, raw: Any) -> Any:
        """Decode `raw` (a structured value or JSON bytes) into the typed payload.

        A `str` is validated as a value, never parsed as JSON text.
        """

        return _validate(self._data_adapter, raw, kind=self.kind)

    def serialize(self, value: Any) -> bytes:
        return _serialize(self._data_adapter, value, kind=self.kind)

    def encode(self, value: Any) -> Any:
        """Return the JSON-compatible wire form of a payload."""

        return _encode(self._data_adapter, value, kind=self.kind)

    # Properties

    def validate_properties(self, raw: Any) -> Any:
        if self._properties_adapter is None:
            return raw
        if raw is None:
            raw = {}
        return _validate(self._properties_adapter, raw, kind=self.kind, prefix="properties")

    def encode_properties(self, value: Any) -> dict[str, Any]:
        if self._properties_adapter is None:
            return dict(value or {})
        return _encode(
            self._properties_adapter,
            value if value is not None else {},
            kind=self.kind,
            prefix="properties",
            exclude_none=True,
        )

    def serialize_properties(self, value: Any) -> bytes:
        if self._properties_adapter is None:
            return to_json(dict(value or {}))
        return _serialize(
            self._properties_adapter,
            value if value is not None else {},
            kind=self.kind,
            prefix="properties",
            exclude_none=True,
        )

    # Response

    def _require_response(self) -> TypeAdapter[Any]:
        if self._response_adapter is None:
            raise ResponseContractMissing(kind=self.kind)
        return self._response_adapter

    def validate_response(self, raw: Any) -> Any:
        return _validate(self._require_response(), raw, kind=self.kind, prefix="response")

    def serialize_response(self, value: Any) -> bytes:
        return _serialize(self._require_response(), value, kind=self.kind, prefix="response")

    def encode_response(self, value: Any) -> Any:
        return _encode(self._require_response(), value, kind=self.kind, prefix="response")

    def json_schema(self) -> dict[str, Any]:
        """JSON Schema of the contracts, keyed by `data`, `properties` and `response`."""

        out: dict[str, Any] = {
            "kind": self.kind,
            "version": self.version,
            "data": self._data_adapter.json_schema(by_alias=True),
        }
        if self._properties_adapter is not None:
            out["properties"] = self._properties_adapter.json_schema(by_alias=True)
        if self._response_adapter is not None:
            out["response"] = self._response_adapter.json_schema(by_alias=True)
        return out

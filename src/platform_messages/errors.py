"""Error taxonomy for the message catalog and dispatcher.

Construction-time errors (`DuplicateKindError`, `CollisionError`) are fatal:
a process that hits one must not serve dispatch calls. Everything deriving
from `DispatchError` is per-message and is surfaced to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass


class MessagingError(Exception):
    """Base class for every error raised by this package."""


@dataclass(frozen=True, slots=True)
class FieldIssue:
    """One structural problem found while validating a value.

    `path` is dotted and uses wire names (`fetch.url`, `items.0.name`).
    An empty path means the value itself has the wrong shape.
    """

    path: str
    message: str
    expected: str

    def __str__(self) -> str:
        return f"{self.path or '(root)'}: {self.message} [{self.expected}]"


class SchemaValidationError(MessagingError):
    """A value does not satisfy a schema contract."""

    def __init__(self, issues: tuple[FieldIssue, ...], kind: str | None = None) -> None:
        self.issues = tuple(issues)
        self.kind = kind
        prefix = f"{kind}: " if kind else ""
        super().__init__(prefix + "; ".join(str(issue) for issue in self.issues))

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(issue.path for issue in self.issues)


class DuplicateKindError(MessagingError):
    """A single schema group defines the same kind twice."""

    def __init__(self, group: str, kind: str) -> None:
        self.group = group
        self.kind = kind
        super().__init__(f"Schema group {group!r} defines {kind!r} more than once")


@dataclass(frozen=True, slots=True)
class Collision:
    kind: str
    first_group: str
    second_group: str

    def __str__(self) -> str:
        return f"{self.kind!r} defined by both {self.first_group!r} and {self.second_group!r}"


class CollisionError(MessagingError):
    """Two or more schema groups define the same kind.

    Every collision found during the merge is listed, not just the first.
    """

    def __init__(self, collisions: tuple[Collision, ...]) -> None:
        self.collisions = tuple(collisions)
        super().__init__(
            "Message kind collision: " + "; ".join(str(c) for c in self.collisions)
        )

    @property
    def kinds(self) -> tuple[str, ...]:
        return tuple(c.kind for c in self.collisions)


class ResponseContractMissing(MessagingError):
    """A response operation was used on a fire-and-forget kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"{kind!r} is fire-and-forget and has no response contract")


class InvalidEnvelope(MessagingError):
    """Raw bytes could not be decoded into a message envelope."""

    def __init__(self, error: SchemaValidationError) -> None:
        self.error = error
        super().__init__(f"Invalid message envelope: {error}")


class DuplicateHandlerError(MessagingError):
    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"A handler is already registered for {kind!r}")


class RegistryFrozenError(MessagingError):
    """Handlers can no longer be registered; the dispatcher was already built."""


class DispatchError(MessagingError):
    """Base class for per-message dispatch failures."""

    def __init__(self, kind: str, message: str | None = None) -> None:
        self.kind = kind
        super().__init__(message or f"Dispatch of {kind!r} failed")


class UnknownKind(DispatchError):
    """No schema is registered for the kind."""

    def __init__(self, kind: str) -> None:
        super().__init__(kind, f"Unknown message kind: {kind!r}")


class InvalidPayload(DispatchError):
    """The payload (or its properties) failed structural validation."""

    def __init__(self, kind: str, error: SchemaValidationError) -> None:
        self.error = error
        issues = "; ".join(str(issue) for issue in error.issues)
        super().__init__(kind, f"Invalid payload for {kind!r}: {issues}")

    @property
    def fields(self) -> tuple[str, ...]:
        return self.error.paths


class NoHandler(DispatchError):
    """The kind is in the catalog but nothing handles it in this process."""

    def __init__(self, kind: str) -> None:
        super().__init__(kind, f"No handler registered for {kind!r}")


class HandlerError(DispatchError):
    """The handler raised, timed out, or was cancelled from within."""

    def __init__(self, kind: str, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(
            kind, f"Handler for {kind!r} failed: {type(cause).__name__}: {cause}"
        )


class ResponseEncodingError(DispatchError):
    """The handler returned a value that violates the response contract."""

    def __init__(self, kind: str, error: SchemaValidationError) -> None:
        self.error = error
        issues = "; ".join(str(issue) for issue in error.issues)
        super().__init__(kind, f"Handler for {kind!r} returned an invalid response: {issues}")

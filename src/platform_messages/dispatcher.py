"""Validate incoming messages against the catalog and route them to handlers.

Handlers are registered on a `HandlerRegistry` during process start-up. The
registry is then frozen into a `Dispatcher`, whose catalog and handler mapping
never change again, so any number of dispatch calls can run concurrently
without locking.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from platform_messages.catalog import Catalog
from platform_messages.envelope import MessageEnvelope
from platform_messages.errors import (
    DuplicateHandlerError,
    FieldIssue,
    HandlerError,
    InvalidPayload,
    NoHandler,
    RegistryFrozenError,
    ResponseEncodingError,
    SchemaValidationError,
    UnknownKind,
)
from platform_messages.schema import SchemaDefinition

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]
H = TypeVar("H", bound=Handler)


class HandlerRegistry:
    """Collects handler registrations before a dispatcher is exposed to callers."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._handlers: dict[str, Handler] = {}
        self._built = False

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def register(self, kind: str, handler: Handler) -> None:
        """Register `handler` as the single handler for `kind`.

        Raises:
            RegistryFrozenError: If `build()` was already called.
            UnknownKind: If the catalog does not define `kind`.
            DuplicateHandlerError: If `kind` already has a handler.
        """

        if self._built:
            raise RegistryFrozenError(f"Cannot register {kind!r}: dispatcher already built")
        self._catalog.lookup(kind)
        if kind in self._handlers:
            raise DuplicateHandlerError(kind=kind)
        self._handlers[kind] = handler

    def handles(self, kind: str) -> Callable[[H], H]:
        """Decorator form of `register`."""

        def decorator(handler: H) -> H:
            self.register(kind, handler)
            return handler

        return decorator

    def build(
        self,
        *,
        timeout: float | None = None,
        require_handlers: bool = False,
    ) -> Dispatcher:
        """Freeze the registrations into a dispatcher.

        With `require_handlers`, every kind in the catalog must have a handler;
        the first unwired kind (alphabetically) is reported as `NoHandler`.
        """

        if require_handlers:
            missing = sorted(self._catalog.kinds() - frozenset(self._handlers))
            if missing:
                raise NoHandler(kind=missing[0])
        self._built = True
        return Dispatcher(self._catalog, self._handlers, timeout=timeout)


class Dispatcher:
    """Runs the validate -> route -> invoke -> encode pipeline for one message.

    Args:
        catalog: The composed catalog.
        handlers: Mapping of kind to handler; copied and frozen.
        timeout: Default limit in seconds for a handler invocation.
    """

    def __init__(
        self,
        catalog: Catalog,
        handlers: Mapping[str, Handler],
        *,
        timeout: float | None = None,
    ) -> None:
        unknown = sorted(set(handlers) - catalog.kinds())
        if unknown:
            raise UnknownKind(kind=unknown[0])
        self._catalog = catalog
        self._handlers: Mapping[str, Handler] = MappingProxyType(dict(handlers))
        self._timeout = timeout

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def kinds(self) -> frozenset[str]:
        return self._catalog.kinds()

    def handled_kinds(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def unhandled_kinds(self) -> frozenset[str]:
        return self._catalog.kinds() - frozenset(self._handlers)

    async def dispatch(
        self,
        kind: str,
        payload: Any,
        *,
        properties: Any = None,
        timeout: float | None = None,
    ) -> Any:
        """Validate `payload` and hand it to the handler registered for `kind`.

        Returns:
            The encoded response for request/response kinds, `None` for
            fire-and-forget kinds.

        Raises:
            UnknownKind, InvalidPayload, NoHandler, HandlerError,
            ResponseEncodingError
        """

        schema = self._catalog.get(kind)
        if schema is None:
            logger.info("Unknown message kind", extra={"kind": kind})
            raise UnknownKind(kind=kind)
        data = self._decode(schema, schema.validate, payload)

        handler = self._handlers.get(kind)
        if handler is None:
            logger.info("No handler for message", extra={"kind": kind})
            raise NoHandler(kind=kind)

        # Properties are routing metadata; they are checked once a handler is known.
        if schema.has_properties:
            props = self._decode(schema, schema.validate_properties, properties)
            args: tuple[Any, ...] = (data, props)
        else:
            args = (data,)
        result = await self._invoke(kind, handler, args, timeout)

        if not schema.is_request_response:
            if result is not None:
                logger.warning(
                    "Discarding result of fire-and-forget handler",
                    extra={"kind": kind, "result_type": type(result).__name__},
                )
            logger.debug("Dispatched message", extra={"kind": kind})
            return None

        try:
            response = schema.encode_response(result)
        except SchemaValidationError as exc:
            logger.error(
                "Handler returned a response that violates its contract",
                extra={"kind": kind, "fields": list(exc.paths)},
            )
            raise ResponseEncodingError(kind=kind, error=exc) from exc
        logger.debug("Dispatched message", extra={"kind": kind})
        return response

    async def dispatch_envelope(
        self,
        envelope: MessageEnvelope,
        *,
        timeout: float | None = None,
    ) -> Any:
        schema = self._catalog.lookup(envelope.kind)
        if envelope.version != schema.version:
            issue = FieldIssue(
                path="version",
                message=f"Unsupported version {envelope.version!r}, expected {schema.version!r}",
                expected="literal_error",
            )
            raise InvalidPayload(
                kind=envelope.kind,
                error=SchemaValidationError(issues=(issue,), kind=envelope.kind),
            )
        return await self.dispatch(
            envelope.kind,
            envelope.payload,
            properties=envelope.properties,
            timeout=timeout,
        )

    def _decode(
        self,
        schema: SchemaDefinition,
        validate: Callable[[Any], Any],
        raw: Any,
    ) -> Any:
        try:
            return validate(raw)
        except SchemaValidationError as exc:
            logger.info(
                "Rejected message payload",
                extra={"kind": schema.kind, "fields": list(exc.paths)},
            )
            raise InvalidPayload(kind=schema.kind, error=exc) from exc

    async def _invoke(
        self,
        kind: str,
        handler: Handler,
        args: tuple[Any, ...],
        timeout: float | None,
    ) -> Any:
        limit = timeout if timeout is not None else self._timeout
        try:
            async with asyncio.timeout(limit):
                if inspect.iscoroutinefunction(handler):
                    result = await handler(*args)
                else:
                    result = await asyncio.to_thread(handler, *args)
                if inspect.isawaitable(result):
                    result = await result
        except asyncio.CancelledError as exc:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            logger.warning("Handler was cancelled", extra={"kind": kind})
            raise HandlerError(kind=kind, cause=exc) from exc
        except TimeoutError as exc:
            logger.warning("Handler timed out", extra={"kind": kind, "timeout": limit})
            raise HandlerError(kind=kind, cause=exc) from exc
        except Exception as exc:
            logger.exception("Handler failed", extra={"kind": kind})
            raise HandlerError(kind=kind, cause=exc) from exc
        return result

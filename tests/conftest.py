"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Literal

import pytest
from pydantic import StrictInt, StrictStr

from platform_messages.catalog import Catalog, compose_catalog
from platform_messages.group import SchemaGroup
from platform_messages.logging import JsonFormatter
from platform_messages.schema import MessageModel, SchemaDefinition


class _DelayPayload(MessageModel):
    workflow_run_id: StrictStr
    duration_ms: StrictInt


class _LogPayload(MessageModel):
    level: Literal["trace", "debug", "info", "warn", "error"]
    text: StrictStr


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Keep `configure_logging` calls from leaking handlers between tests."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def delay_schema() -> SchemaDefinition:
    """ENQUEUE_DELAY as a request/response kind whose response is a number."""
    return SchemaDefinition(kind="ENQUEUE_DELAY", data=_DelayPayload, response=int)


@pytest.fixture
def log_schema() -> SchemaDefinition:
    """LOG_MESSAGE as a fire-and-forget kind."""
    return SchemaDefinition(kind="LOG_MESSAGE", data=_LogPayload)


@pytest.fixture
def catalog(delay_schema: SchemaDefinition, log_schema: SchemaDefinition) -> Catalog:
    """A small catalog made of two single-kind groups."""
    return compose_catalog(
        [
            SchemaGroup("delays", [delay_schema]),
            SchemaGroup("logs", [log_schema]),
        ]
    )


@pytest.fixture
def run_properties() -> dict[str, str]:
    """Headers accepted by the workflow-run properties contract."""
    return {
        "x-workflow-run-id": "run_123",
        "x-api-key": "api_key_test",
        "x-org-id": "org_1",
        "x-env": "development",
    }

"""Log lines emitted by running workflows."""

from __future__ import annotations

from typing import Literal

from pydantic import JsonValue, StrictStr

from platform_messages.group import SchemaGroup
from platform_messages.schema import MessageModel, SchemaDefinition
from platform_messages.schemas.common import WorkflowRunProperties

LogLevel = Literal["trace", "debug", "info", "warn", "error"]


class LogMessage(MessageModel):
    level: LogLevel
    text: StrictStr
    properties: dict[str, JsonValue] | None = None


COMMANDS = SchemaGroup(
    "logs",
    [
        SchemaDefinition(
            kind="LOG_MESSAGE",
            data=LogMessage,
            properties=WorkflowRunProperties,
            description="Record a log line against a run",
        ),
    ],
)

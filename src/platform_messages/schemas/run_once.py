"""Idempotent "run once" steps."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, JsonValue, StrictBool, StrictStr

from platform_messages.group import SchemaGroup
from platform_messages.schema import MessageModel, SchemaDefinition
from platform_messages.schemas.common import WorkflowRunProperties


class InitializeRunOnce(MessageModel):
    key: StrictStr = Field(min_length=1)
    type: Literal["LOCAL_ONLY", "REMOTE"]


class RunOnceState(MessageModel):
    idempotency_key: StrictStr = Field(min_length=1)
    has_run: StrictBool
    output: JsonValue = None


class CompleteRunOnce(MessageModel):
    key: StrictStr = Field(min_length=1)
    idempotency_key: StrictStr = Field(min_length=1)
    output: JsonValue = None


COMMANDS = SchemaGroup(
    "runOnce",
    [
        SchemaDefinition(
            kind="INITIALIZE_RUN_ONCE",
            data=InitializeRunOnce,
            properties=WorkflowRunProperties,
            response=RunOnceState,
            description="Look up or create the idempotency record of a step",
        ),
        SchemaDefinition(
            kind="COMPLETE_RUN_ONCE",
            data=CompleteRunOnce,
            properties=WorkflowRunProperties,
            description="Record the output of a run-once step",
        ),
    ],
)

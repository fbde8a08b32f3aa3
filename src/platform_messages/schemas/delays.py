"""Durable waits inside a workflow run."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, StrictInt, StrictStr

from platform_messages.group import SchemaGroup
from platform_messages.schema import MessageModel, SchemaDefinition
from platform_messages.schemas.common import WorkflowRunProperties


class EnqueueDelay(MessageModel):
    workflow_run_id: StrictStr = Field(min_length=1)
    duration_ms: StrictInt = Field(ge=0)
    step_key: StrictStr | None = None


class DelayScheduled(MessageModel):
    resolves_at: datetime


class ResolveDelay(MessageModel):
    workflow_run_id: StrictStr = Field(min_length=1)
    step_key: StrictStr = Field(min_length=1)


COMMANDS = SchemaGroup(
    "delays",
    [
        SchemaDefinition(
            kind="ENQUEUE_DELAY",
            data=EnqueueDelay,
            properties=WorkflowRunProperties,
            response=DelayScheduled,
            description="Schedule a run to resume after a delay",
        ),
        SchemaDefinition(
            kind="RESOLVE_DELAY",
            data=ResolveDelay,
            properties=WorkflowRunProperties,
            description="A scheduled delay elapsed",
        ),
    ],
)

"""Workflow run lifecycle commands."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, JsonValue, StrictStr

from platform_messages.group import SchemaGroup
from platform_messages.schema import MessageModel, SchemaDefinition
from platform_messages.schemas.common import (
    ApiKeyProperties,
    SerializableError,
    WorkflowRunProperties,
)


class TriggerEvent(MessageModel):
    name: StrictStr = Field(min_length=1)
    payload: JsonValue = None
    context: JsonValue = None
    timestamp: datetime | None = None


class TriggerWorkflow(MessageModel):
    workflow_id: StrictStr = Field(min_length=1)
    event: TriggerEvent


class WorkflowRunCreated(MessageModel):
    run_id: StrictStr = Field(min_length=1)


class StartWorkflowRun(MessageModel):
    id: StrictStr = Field(min_length=1)


class CompleteWorkflowRun(MessageModel):
    output: JsonValue = None


class FailWorkflowRun(MessageModel):
    error: SerializableError


COMMANDS = SchemaGroup(
    "workflowRuns",
    [
        SchemaDefinition(
            kind="TRIGGER_WORKFLOW",
            data=TriggerWorkflow,
            properties=ApiKeyProperties,
            response=WorkflowRunCreated,
            description="Start a new run of a workflow from an event",
        ),
        SchemaDefinition(
            kind="START_WORKFLOW_RUN",
            data=StartWorkflowRun,
            properties=WorkflowRunProperties,
            description="The host began executing a run",
        ),
        SchemaDefinition(
            kind="COMPLETE_WORKFLOW_RUN",
            data=CompleteWorkflowRun,
            properties=WorkflowRunProperties,
            description="A run finished successfully",
        ),
        SchemaDefinition(
            kind="FAIL_WORKFLOW_RUN",
            data=FailWorkflowRun,
            properties=WorkflowRunProperties,
            description="A run finished with an error",
        ),
    ],
)

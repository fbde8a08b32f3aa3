"""Models shared by several schema groups."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, StrictStr

from platform_messages.schema import MessageModel

RuntimeEnvironment = Literal["live", "development"]


class WorkflowRunProperties(MessageModel):
    """Headers sent with every message that belongs to a workflow run."""

    workflow_run_id: StrictStr = Field(alias="x-workflow-run-id", min_length=1)
    api_key: StrictStr = Field(alias="x-api-key", min_length=1)
    org_id: StrictStr = Field(alias="x-org-id", min_length=1)
    env: RuntimeEnvironment = Field(alias="x-env")
    timestamp: StrictStr | None = Field(default=None, alias="x-timestamp")


class ApiKeyProperties(MessageModel):
    """Headers for messages sent before a run exists."""

    api_key: StrictStr = Field(alias="x-api-key", min_length=1)
    env: RuntimeEnvironment = Field(alias="x-env")


class SerializableError(MessageModel):
    name: StrictStr
    message: StrictStr
    stack_trace: StrictStr | None = None


class RequestAccepted(MessageModel):
    request_id: StrictStr = Field(min_length=1)

"""HTTP requests performed by the platform for a workflow run."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, JsonValue, StrictBool, StrictInt, StrictStr

from platform_messages.group import SchemaGroup
from platform_messages.schema import MessageModel, SchemaDefinition
from platform_messages.schemas.common import (
    RequestAccepted,
    SerializableError,
    WorkflowRunProperties,
)

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


class RetryOptions(MessageModel):
    enabled: StrictBool = True
    max_attempts: StrictInt = Field(default=3, ge=1, le=25)


class FetchRequest(MessageModel):
    url: StrictStr = Field(min_length=1)
    method: HttpMethod = "GET"
    headers: dict[str, StrictStr] | None = None
    body: StrictStr | None = None
    retry: RetryOptions | None = None


class SendFetch(MessageModel):
    key: StrictStr = Field(min_length=1)
    fetch: FetchRequest


class ResolveFetchRequest(MessageModel):
    request_id: StrictStr = Field(min_length=1)
    status: StrictInt = Field(ge=100, le=599)
    headers: dict[str, StrictStr] = Field(default_factory=dict)
    body: JsonValue = None


class RejectFetchRequest(MessageModel):
    request_id: StrictStr = Field(min_length=1)
    error: SerializableError


COMMANDS = SchemaGroup(
    "fetchRequests",
    [
        SchemaDefinition(
            kind="SEND_FETCH",
            data=SendFetch,
            properties=WorkflowRunProperties,
            response=RequestAccepted,
            description="Perform an HTTP request on behalf of a run",
        ),
        SchemaDefinition(
            kind="RESOLVE_FETCH_REQUEST",
            data=ResolveFetchRequest,
            properties=WorkflowRunProperties,
            description="A fetch request returned a response",
        ),
        SchemaDefinition(
            kind="REJECT_FETCH_REQUEST",
            data=RejectFetchRequest,
            properties=WorkflowRunProperties,
            description="A fetch request failed",
        ),
    ],
)

"""Requests made to third-party integrations on behalf of a workflow run."""

from __future__ import annotations

from pydantic import Field, JsonValue, StrictStr

from platform_messages.group import SchemaGroup
from platform_messages.schema import MessageModel, SchemaDefinition
from platform_messages.schemas.common import (
    RequestAccepted,
    SerializableError,
    WorkflowRunProperties,
)


class IntegrationRequest(MessageModel):
    service: StrictStr = Field(min_length=1)
    endpoint: StrictStr = Field(min_length=1)
    params: JsonValue = None


class SendIntegrationRequest(MessageModel):
    key: StrictStr = Field(min_length=1)
    request: IntegrationRequest


class ResolveIntegrationRequest(MessageModel):
    request_id: StrictStr = Field(min_length=1)
    output: JsonValue = None


class RejectIntegrationRequest(MessageModel):
    request_id: StrictStr = Field(min_length=1)
    error: SerializableError


COMMANDS = SchemaGroup(
    "integrationRequests",
    [
        SchemaDefinition(
            kind="SEND_INTEGRATION_REQUEST",
            data=SendIntegrationRequest,
            properties=WorkflowRunProperties,
            response=RequestAccepted,
            description="Ask an integration service to perform a request",
        ),
        SchemaDefinition(
            kind="RESOLVE_INTEGRATION_REQUEST",
            data=ResolveIntegrationRequest,
            properties=WorkflowRunProperties,
            description="An integration request completed",
        ),
        SchemaDefinition(
            kind="REJECT_INTEGRATION_REQUEST",
            data=RejectIntegrationRequest,
            properties=WorkflowRunProperties,
            description="An integration request failed",
        ),
    ],
)

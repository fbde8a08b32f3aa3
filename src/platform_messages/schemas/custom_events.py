"""Custom events sent from inside a workflow run."""

from __future__ import annotations

from pydantic import Field, JsonValue, StrictInt, StrictStr, model_validator

from platform_messages.group import SchemaGroup
from platform_messages.schema import MessageModel, SchemaDefinition
from platform_messages.schemas.common import WorkflowRunProperties


class EventDelay(MessageModel):
    """Delivery delay; at least one unit must be set."""

    seconds: StrictInt | None = Field(default=None, ge=0)
    minutes: StrictInt | None = Field(default=None, ge=0)
    hours: StrictInt | None = Field(default=None, ge=0)
    days: StrictInt | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _require_a_unit(self) -> EventDelay:
        if all(v is None for v in (self.seconds, self.minutes, self.hours, self.days)):
            raise ValueError("delay needs at least one of seconds, minutes, hours, days")
        return self

    @property
    def total_seconds(self) -> int:
        return (
            (self.seconds or 0)
            + (self.minutes or 0) * 60
            + (self.hours or 0) * 3600
            + (self.days or 0) * 86400
        )


class CustomEvent(MessageModel):
    name: StrictStr = Field(min_length=1)
    payload: JsonValue = None
    context: JsonValue = None
    delay: EventDelay | None = None


class SendCustomEvent(MessageModel):
    key: StrictStr = Field(min_length=1)
    event: CustomEvent


COMMANDS = SchemaGroup(
    "customEvents",
    [
        SchemaDefinition(
            kind="SEND_CUSTOM_EVENT",
            data=SendCustomEvent,
            properties=WorkflowRunProperties,
            description="Publish a custom event, optionally delayed",
        ),
    ],
)

"""Settings for a process that hosts the message catalog.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

A process role usually only composes the groups it serves; `MESSAGES_GROUPS`
selects them.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from platform_messages.catalogs.commands import COMMAND_GROUP_NAMES


class MessagingSettings(BaseSettings):
    """Settings for catalog composition and dispatch.

    Environment variables:
    - LOG_LEVEL                          (optional)
    - MESSAGES_GROUPS                    (optional, comma-separated)
    - MESSAGES_HANDLER_TIMEOUT_SECONDS   (optional)
    - MESSAGES_REQUIRE_HANDLERS          (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `MessagingSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    groups: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(),
        validation_alias="MESSAGES_GROUPS",
        description="Schema groups composed by this process (empty means all)",
    )

    handler_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        validation_alias="MESSAGES_HANDLER_TIMEOUT_SECONDS",
        description="Default limit for a single handler invocation",
    )

    require_handlers: bool = Field(
        default=False,
        validation_alias="MESSAGES_REQUIRE_HANDLERS",
        description="Refuse to start unless every composed kind has a handler",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("groups", mode="before")
    @classmethod
    def _split_groups(cls, value: object) -> object:
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    @field_validator("groups")
    @classmethod
    def _known_groups(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        unknown = [name for name in value if name not in COMMAND_GROUP_NAMES]
        if unknown:
            raise ValueError(f"Unknown schema groups: {', '.join(unknown)}")
        return value

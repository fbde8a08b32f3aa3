"""Unit tests for process start-up wiring."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from platform_messages.bootstrap import create_dispatcher
from platform_messages.config import MessagingSettings
from platform_messages.errors import NoHandler, UnknownKind


@pytest.fixture
def settings_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ("LOG_LEVEL", "MESSAGES_HANDLER_TIMEOUT_SECONDS", "MESSAGES_REQUIRE_HANDLERS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MESSAGES_GROUPS", "logs,delays")
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_create_dispatcher_for_a_role(
    settings_env: pytest.MonkeyPatch, run_properties: dict[str, str]
) -> None:
    received = []

    async def log_message(message, properties):
        received.append((message.text, properties.org_id))

    dispatcher = create_dispatcher(MessagingSettings(), {"LOG_MESSAGE": log_message})

    assert dispatcher.catalog.groups() == ("logs", "delays")
    assert dispatcher.unhandled_kinds() == {"ENQUEUE_DELAY", "RESOLVE_DELAY"}

    result = asyncio.run(
        dispatcher.dispatch(
            "LOG_MESSAGE", {"level": "info", "text": "hi"}, properties=run_properties
        )
    )

    assert result is None
    assert received == [("hi", "org_1")]


def test_handlers_outside_the_role_are_rejected(settings_env: pytest.MonkeyPatch) -> None:
    with pytest.raises(UnknownKind) as exc_info:
        create_dispatcher(MessagingSettings(), {"SEND_FETCH": lambda payload, props: None})

    assert exc_info.value.kind == "SEND_FETCH"


def test_require_handlers_aborts_start_up(settings_env: pytest.MonkeyPatch) -> None:
    settings_env.setenv("MESSAGES_REQUIRE_HANDLERS", "1")

    with pytest.raises(NoHandler) as exc_info:
        create_dispatcher(MessagingSettings(), {"LOG_MESSAGE": lambda message, props: None})

    assert exc_info.value.kind == "ENQUEUE_DELAY"

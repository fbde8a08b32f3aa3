"""Unit tests for structured logging."""

from __future__ import annotations

import io
import json
import logging

from platform_messages.logging import JsonFormatter, configure_logging


def test_json_formatter_lifts_message_kind() -> None:
    record = logging.LogRecord(
        "platform_messages.dispatcher", logging.INFO, __file__, 1, "Rejected %s", ("x",), None
    )
    record.kind = "ENQUEUE_DELAY"
    record.fields = ["durationMs"]

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Rejected x"
    assert payload["level"] == "INFO"
    assert payload["kind"] == "ENQUEUE_DELAY"
    assert payload["extra"] == {"fields": ["durationMs"]}


def test_configure_logging_writes_json_lines() -> None:
    stream = io.StringIO()
    configure_logging("debug", stream=stream)

    logging.getLogger("platform_messages.test").debug("hello", extra={"group": "logs"})

    line = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert line["message"] == "hello"
    assert line["group"] == "logs"
    assert logging.getLogger().level == logging.DEBUG

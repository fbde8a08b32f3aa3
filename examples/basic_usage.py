#!/usr/bin/env python3
"""Programmatic dispatch example.

This demonstrates using the catalog components directly:

* load settings from `.env`
* compose the command catalog for one process role
* register handlers and dispatch a message
"""

from __future__ import annotations

import argparse
import asyncio
import json
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from platform_messages.bootstrap import create_dispatcher
from platform_messages.config import MessagingSettings
from platform_messages.errors import DispatchError
from platform_messages.logging import configure_logging
from platform_messages.schemas.delays import DelayScheduled, EnqueueDelay


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dispatch one ENQUEUE_DELAY command.")
    parser.add_argument("--run-id", default="run_example", help="Workflow run id")
    parser.add_argument("--duration-ms", type=int, default=5000, help="Delay in milliseconds")
    return parser.parse_args(argv)


def enqueue_delay(command: EnqueueDelay, properties: object) -> DelayScheduled:
    resolves_at = datetime.now(tz=UTC) + timedelta(milliseconds=command.duration_ms)
    return DelayScheduled(resolves_at=resolves_at)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = MessagingSettings()
    configure_logging(settings.log_level)

    dispatcher = create_dispatcher(settings, {"ENQUEUE_DELAY": enqueue_delay})
    properties = {
        "x-workflow-run-id": args.run_id,
        "x-api-key": "example_key",
        "x-org-id": "example_org",
        "x-env": "development",
    }
    try:
        response = asyncio.run(
            dispatcher.dispatch(
                "ENQUEUE_DELAY",
                {"workflowRunId": args.run_id, "durationMs": args.duration_ms},
                properties=properties,
            )
        )
    except DispatchError as e:
        print(str(e))
        return 1

    print(json.dumps(response, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

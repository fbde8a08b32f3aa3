"""Unit tests for the built-in command catalog."""

from __future__ import annotations

import json

import pytest

from platform_messages.catalogs.commands import (
    COMMAND_GROUP_NAMES,
    COMMAND_GROUPS,
    build_command_catalog,
)
from platform_messages.errors import SchemaValidationError

# One representative payload per kind, in wire form.
SAMPLES: dict[str, dict[str, object]] = {
    "SEND_INTEGRATION_REQUEST": {
        "key": "issue-1",
        "request": {"service": "github", "endpoint": "issues.create", "params": {"title": "x"}},
    },
    "RESOLVE_INTEGRATION_REQUEST": {"requestId": "req_1", "output": {"number": 12}},
    "REJECT_INTEGRATION_REQUEST": {
        "requestId": "req_1",
        "error": {"name": "HttpError", "message": "rate limited"},
    },
    "TRIGGER_WORKFLOW": {
        "workflowId": "wf_1",
        "event": {
            "name": "user.created",
            "payload": {"id": 1},
            "timestamp": "2024-01-01T00:00:00Z",
        },
    },
    "START_WORKFLOW_RUN": {"id": "run_1"},
    "COMPLETE_WORKFLOW_RUN": {"output": "done"},
    "FAIL_WORKFLOW_RUN": {
        "error": {"name": "Error", "message": "boom", "stackTrace": "at step 1"},
    },
    "LOG_MESSAGE": {"level": "debug", "text": "hello", "properties": {"step": 2}},
    "SEND_CUSTOM_EVENT": {
        "key": "evt-1",
        "event": {"name": "invoice.paid", "payload": [1, 2], "delay": {"minutes": 5}},
    },
    "ENQUEUE_DELAY": {"workflowRunId": "run_1", "durationMs": 5000, "stepKey": "wait-1"},
    "RESOLVE_DELAY": {"workflowRunId": "run_1", "stepKey": "wait-1"},
    "SEND_FETCH": {
        "key": "fetch-1",
        "fetch": {
            "url": "https://example.com/hook",
            "method": "POST",
            "headers": {"content-type": "application/json"},
            "body": "{}",
            "retry": {"enabled": True, "maxAttempts": 5},
        },
    },
    "RESOLVE_FETCH_REQUEST": {
        "requestId": "req_2",
        "status": 201,
        "headers": {"etag": "abc"},
        "body": {"ok": True},
    },
    "REJECT_FETCH_REQUEST": {
        "requestId": "req_2",
        "error": {"name": "FetchError", "message": "timeout"},
    },
    "INITIALIZE_RUN_ONCE": {"key": "charge-card", "type": "REMOTE"},
    "COMPLETE_RUN_ONCE": {"key": "charge-card", "idempotencyKey": "idem_1", "output": 3},
}

REQUEST_RESPONSE_KINDS = {
    "SEND_INTEGRATION_REQUEST",
    "TRIGGER_WORKFLOW",
    "ENQUEUE_DELAY",
    "SEND_FETCH",
    "INITIALIZE_RUN_ONCE",
}

# One representative handler response per request/response kind, in wire form.
RESPONSE_SAMPLES: dict[str, dict[str, object]] = {
    "SEND_INTEGRATION_REQUEST": {"requestId": "req_1"},
    "TRIGGER_WORKFLOW": {"runId": "run_1"},
    "ENQUEUE_DELAY": {"resolvesAt": "2024-01-01T00:00:05Z"},
    "SEND_FETCH": {"requestId": "req_2"},
    "INITIALIZE_RUN_ONCE": {"idempotencyKey": "idem_1", "hasRun": True, "output": {"charged": 12}},
}


def test_catalog_composes_every_group_in_order() -> None:
    catalog = build_command_catalog()

    assert catalog.groups() == (
        "integrationRequests",
        "workflowRuns",
        "logs",
        "customEvents",
        "delays",
        "fetchRequests",
        "runOnce",
    )
    assert catalog.kinds() == set(SAMPLES)
    assert len(catalog) == sum(len(group) for group in COMMAND_GROUPS)


def test_request_response_kinds() -> None:
    catalog = build_command_catalog()

    assert {k for k in catalog if catalog.lookup(k).is_request_response} == REQUEST_RESPONSE_KINDS


def test_every_kind_declares_properties_and_a_description() -> None:
    catalog = build_command_catalog()

    for kind in catalog:
        schema = catalog.lookup(kind)
        assert schema.has_properties, kind
        assert schema.description, kind


@pytest.mark.parametrize("kind", sorted(SAMPLES))
def test_sample_payload_survives_serialization(kind: str) -> None:
    schema = build_command_catalog().lookup(kind)

    value = schema.validate(SAMPLES[kind])

    assert schema.validate(schema.serialize(value)) == value


def test_select_groups_for_a_process_role() -> None:
    catalog = build_command_catalog(["delays", "logs"])

    assert catalog.groups() == ("logs", "delays")
    assert catalog.kinds() == {"ENQUEUE_DELAY", "RESOLVE_DELAY", "LOG_MESSAGE"}


def test_unknown_group_is_rejected() -> None:
    with pytest.raises(ValueError, match="nope"):
        build_command_catalog(["logs", "nope"])


def test_group_names() -> None:
    assert "fetchRequests" in COMMAND_GROUP_NAMES
    assert len(COMMAND_GROUP_NAMES) == len(COMMAND_GROUPS)


@pytest.mark.parametrize("kind", sorted(SAMPLES))
def test_dropping_a_required_field_names_it(kind: str) -> None:
    schema = build_command_catalog().lookup(kind)
    required = schema.json_schema()["data"].get("required", [])

    for name in required:
        payload = {k: v for k, v in SAMPLES[kind].items() if k != name}
        with pytest.raises(SchemaValidationError) as exc_info:
            schema.validate(payload)
        assert name in exc_info.value.paths, (kind, name)


def test_response_samples_cover_every_request_response_kind() -> None:
    assert set(RESPONSE_SAMPLES) == REQUEST_RESPONSE_KINDS


@pytest.mark.parametrize("kind", sorted(RESPONSE_SAMPLES))
def test_sample_response_survives_serialization(kind: str) -> None:
    schema = build_command_catalog().lookup(kind)

    value = schema.validate_response(RESPONSE_SAMPLES[kind])
    wire = schema.serialize_response(value)

    assert schema.validate_response(wire) == value
    assert set(json.loads(wire)) == set(RESPONSE_SAMPLES[kind])

"""CLI entrypoint for inspecting the message catalog and checking payloads."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from platform_messages import __version__
from platform_messages.catalogs.commands import build_command_catalog
from platform_messages.config import MessagingSettings
from platform_messages.errors import SchemaValidationError, UnknownKind
from platform_messages.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="platform-messages",
        description="Inspect the workflow platform's command catalog",
    )
    parser.add_argument("--version", action="version", version=f"platform-messages {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("kinds", help="List every message kind and the group defining it")

    schema = subparsers.add_parser("schema", help="Print the JSON schema of a message kind")
    schema.add_argument("kind", help="Message kind, e.g. ENQUEUE_DELAY")

    validate = subparsers.add_parser(
        "validate",
        help="Validate a JSON payload and print its normalized wire form",
    )
    validate.add_argument("kind", help="Message kind, e.g. ENQUEUE_DELAY")
    validate.add_argument("payload", help="Payload as a JSON document")
    validate.add_argument(
        "--properties",
        default=None,
        help="Message properties as a JSON object (required by most kinds)",
    )
    return parser


def _print_json(value: object) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = MessagingSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, stream=sys.stderr)

    try:
        catalog = build_command_catalog(settings.groups)

        if args.command == "kinds":
            for kind in sorted(catalog):
                schema = catalog.lookup(kind)
                mode = "request/response" if schema.is_request_response else "fire-and-forget"
                print(f"{kind}\t{catalog.group_of(kind)}\t{mode}")
            return 0

        if args.command == "schema":
            _print_json(catalog.lookup(args.kind).json_schema())
            return 0

        if args.command == "validate":
            schema = catalog.lookup(args.kind)
            out: dict[str, object] = {"kind": schema.kind, "version": schema.version}
            out["payload"] = schema.encode(json.loads(args.payload))
            if schema.has_properties:
                properties = args.properties if args.properties is not None else "{}"
                out["properties"] = schema.encode_properties(json.loads(properties))
            _print_json(out)
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except UnknownKind as e:
        print(str(e), file=sys.stderr)
        return 3

    except SchemaValidationError as e:
        for issue in e.issues:
            print(str(issue), file=sys.stderr)
        return 1

    except json.JSONDecodeError as e:
        print(f"Invalid JSON: {e}", file=sys.stderr)
        return 1

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

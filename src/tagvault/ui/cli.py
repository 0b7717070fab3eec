# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from tagvault.app import build_ephemeral_secret, build_tagging_service
from tagvault.config import configure_logging
from tagvault.domain.context import InvocationContext
from tagvault.ephemeral import Severity

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from tagvault.ephemeral import OpenSecretResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile resource tags and read secrets")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Overall deadline for the command in seconds",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    tags = subparsers.add_parser("tags", help="Tag commands")
    tags_sub = tags.add_subparsers(dest="tags_command", required=True)

    tags_list = tags_sub.add_parser("list", help="List the tags of a resource")
    tags_list.add_argument("identifier", help="Resource ARN")

    tags_update = tags_sub.add_parser("update", help="Converge the tags of a resource")
    tags_update.add_argument("identifier", help="Resource ARN")
    tags_update.add_argument(
        "--set",
        dest="set_tags",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Tag to add or change (repeatable)",
    )
    tags_update.add_argument(
        "--unset",
        dest="unset_tags",
        action="append",
        default=[],
        metavar="KEY",
        help="Tag key to remove (repeatable)",
    )

    secret = subparsers.add_parser("secret", help="Secret commands")
    secret_sub = secret.add_subparsers(dest="secret_command", required=True)
    secret_get = secret_sub.add_parser("get", help="Read one secret version")
    secret_get.add_argument("secret_id", help="Secret name or ARN")
    selector = secret_get.add_mutually_exclusive_group()
    selector.add_argument("--version-id", type=str, help="Opaque version identifier")
    selector.add_argument("--version-stage", type=str, help="Stage label, e.g. AWSCURRENT")
    secret_get.add_argument(
        "--reveal",
        action="store_true",
        help="Print the secret payload to stdout",
    )

    return parser.parse_args(list(argv))


def _parse_assignments(values: Sequence[str]) -> dict[str, str]:
    tags: dict[str, str] = {}
    for value in values:
        key, sep, tag_value = value.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid tag assignment: {value!r} (expected KEY=VALUE)")
        tags[key] = tag_value
    return tags


def _build_context(args: argparse.Namespace) -> InvocationContext:
    if args.timeout is None:
        return InvocationContext.background()
    if args.timeout <= 0:
        raise ValueError("Timeout must be positive")
    return InvocationContext.with_timeout(args.timeout)


def _run_tags(args: argparse.Namespace, ctx: InvocationContext) -> None:
    service = build_tagging_service()
    if args.tags_command == "list":
        tags = service.list_tags(ctx, args.identifier)
        for key in tags.keys():
            print(f"{key}={tags[key]}")
        return

    assignments = _parse_assignments(args.set_tags)
    current = service.list_tags(ctx, args.identifier)
    unset = set(args.unset_tags)
    desired = {k: v for k, v in current.items() if k not in unset}
    desired.update(assignments)
    service.update_tags(ctx, args.identifier, current, desired)
    log.info("Updated tags for %s", args.identifier)


def _run_secret(args: argparse.Namespace, ctx: InvocationContext) -> bool:
    ephemeral = build_ephemeral_secret()
    response = ephemeral.open(
        ctx,
        {
            "secret_id": args.secret_id,
            "version_id": args.version_id,
            "version_stage": args.version_stage,
        },
    )
    for diagnostic in response.diagnostics:
        log.log(
            logging.ERROR if diagnostic.severity is Severity.ERROR else logging.WARNING,
            "%s: %s",
            diagnostic.summary,
            diagnostic.detail,
        )
    if response.result is None:
        return False

    result = response.result
    print(f"arn={result.arn}")
    print(f"created_date={result.created_date}")
    if args.reveal:
        _reveal(result)
    return True


def _reveal(result: OpenSecretResult) -> None:
    text = result.secret_string.get_secret_value()
    if text:
        print(text)
        return
    # binary payloads need not be valid text in any encoding
    sys.stdout.flush()
    sys.stdout.buffer.write(result.secret_binary_bytes())
    sys.stdout.buffer.flush()


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        ctx = _build_context(parsed_args)
        if parsed_args.command == "tags" and parsed_args.tags_command == "update":
            _parse_assignments(parsed_args.set_tags)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "tags":
            _run_tags(parsed_args, ctx)
        elif parsed_args.command == "secret":
            if not _run_secret(parsed_args, ctx):
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Command failed")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

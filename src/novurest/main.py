#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

import httpx
from dotenv import load_dotenv

from novurest.adapters.novu import DeviceTokenBatchError, NovuClient
from novurest.common.logging import configure_logging
from novurest.config import ConfigurationError
from novurest.domain.types import parse_provider_id

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence
    from types import FrameType


def _parse_json_object(value: str) -> dict[str, Any]:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"Invalid JSON: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("Expected a JSON object")
    return parsed


def _provider(value: str) -> str:
    try:
        return parse_provider_id(value).value
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Talk to the Novu API")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    trigger = commands.add_parser("trigger", help="Trigger a workflow")
    trigger.add_argument("event", help="Workflow trigger identifier")
    trigger.add_argument("--to", required=True, help="Subscriber id to notify")
    trigger.add_argument(
        "--payload",
        type=_parse_json_object,
        default={},
        help="JSON object passed to the workflow (default: {})",
    )

    delete_tokens = commands.add_parser(
        "delete-tokens", help="Remove device tokens from one subscriber channel"
    )
    delete_tokens.add_argument("subscriber", help="Subscriber id")
    delete_tokens.add_argument("provider", type=_provider, help="Provider id, e.g. fcm")
    delete_tokens.add_argument("tokens", nargs="+", help="Device tokens to remove")

    replace_tokens = commands.add_parser(
        "replace-tokens", help="Swap device tokens on several subscribers"
    )
    replace_tokens.add_argument("provider", type=_provider, help="Provider id, e.g. fcm")
    replace_tokens.add_argument("--subscriber", dest="subscribers", nargs="+", required=True)
    replace_tokens.add_argument("--old", dest="old_tokens", nargs="+", required=True)
    replace_tokens.add_argument("--new", dest="new_tokens", nargs="+", required=True)

    return parser.parse_args(list(argv))


async def _run_trigger(client: NovuClient, args: argparse.Namespace) -> int:
    response = await client.trigger(args.event, to=args.to, payload=args.payload)
    print(f"{response.status_code} {response.text}")
    return 0 if response.is_success else 1


async def _run_delete_tokens(client: NovuClient, args: argparse.Namespace) -> int:
    result = await client.subscribers.delete_device_tokens(
        args.subscriber, args.provider, args.tokens
    )
    if result is True:
        print("Nothing to remove")
        return 0
    print(f"{result.status_code} {result.text}")
    return 0 if result.is_success else 1


async def _run_replace_tokens(client: NovuClient, args: argparse.Namespace) -> int:
    try:
        await client.subscribers.replace_device_tokens(
            args.subscribers, args.provider, args.old_tokens, args.new_tokens
        )
    except DeviceTokenBatchError as exc:
        for subscriber_id, failure in exc.outcomes.items():
            print(f"{subscriber_id}: {'ok' if failure is None else failure}")
        return 1
    print(f"Replaced device tokens for {len(args.subscribers)} subscribers")
    return 0


_COMMANDS: dict[str, Callable[[NovuClient, argparse.Namespace], Awaitable[int]]] = {
    "trigger": _run_trigger,
    "delete-tokens": _run_delete_tokens,
    "replace-tokens": _run_replace_tokens,
}


async def _dispatch(args: argparse.Namespace, client_factory: Callable[[], NovuClient]) -> int:
    async with client_factory() as client:
        return await _COMMANDS[args.command](client, args)


def main(
    argv: Sequence[str] | None = None,
    *,
    client_factory: Callable[[], NovuClient] = NovuClient,
) -> None:
    """Main application entry point."""
    parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        exit_code = asyncio.run(_dispatch(parsed_args, client_factory))
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except (httpx.HTTPError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

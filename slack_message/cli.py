"""Command-line entry point: ``slack-message MESSAGE [options]``."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Callable, List, Optional

import shtab

from slack_message.config import (
    CHANNEL_ENV,
    TOKEN_ENV,
    AppConfig,
    __version__,
    is_valid_timeout,
    load_env_file,
)
from slack_message.credentials import Credential, resolve_credential
from slack_message.errors import CredentialNotFound, MalformedResponse, SlackMessageError
from slack_message.message import build_message
from slack_message.ports.outbound import ChatPort
from slack_message.slack_client import SlackClient

ClientFactory = Callable[[Credential, AppConfig], ChatPort]


def _log(msg: str):
    print(msg, file=sys.stderr)


def _default_client(credential: Credential, config: AppConfig) -> ChatPort:
    return SlackClient(credential.token, url=config.api_url, timeout=config.timeout)


def _timeout_arg(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid timeout: {raw!r}")
    if not is_valid_timeout(value):
        raise argparse.ArgumentTypeError(f"timeout must be a positive number, got {raw!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slack-message",
        description="Send a message to a Slack channel",
    )
    parser.add_argument("message", help="Message text to send")
    parser.add_argument(
        "-c", "--channel", help=f"Channel ID or name; defaults to {CHANNEL_ENV} env"
    )
    parser.add_argument(
        "-a", "--auth-token", help=f"Slack OAuth token; defaults to {TOKEN_ENV} env"
    )
    parser.add_argument("-u", "--username", help="Display name for the message")
    parser.add_argument("-i", "--icon", help="Emoji icon, e.g. :robot_face:")
    parser.add_argument(
        "-t", "--timestamp", help="Timestamp of a message to reply to in its thread"
    )
    parser.add_argument("--config", help="Path to a TOML config file with channel/token")
    parser.add_argument(
        "--timeout", type=_timeout_arg, help="Request timeout in seconds (default: 30)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print progress to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    shtab.add_argument_to(parser, "--completion", help="Print a shell completion script and exit")
    return parser


async def run(
    args: argparse.Namespace,
    config: Optional[AppConfig] = None,
    client_factory: ClientFactory = _default_client,
) -> int:
    """Resolve credentials, send the message and report the outcome.

    Returns the process exit code.
    """
    config = config or AppConfig.from_env()
    if args.config:
        config.config_path = Path(args.config)
    if args.timeout is not None:
        config.timeout = args.timeout

    try:
        try:
            credential = resolve_credential(args.channel, args.auth_token)
        except CredentialNotFound:
            # Config file is only consulted when arguments and env fall short
            credential = resolve_credential(
                args.channel, args.auth_token, config.load_file_config()
            )
        message = build_message(
            channel=credential.channel,
            text=args.message,
            icon_emoji=args.icon,
            username=args.username,
            thread_ts=args.timestamp,
        )
        if args.verbose:
            _log(f"Posting to {config.api_url} (channel={credential.channel})")
        client = client_factory(credential, config)
        response = await client.send(message)
    except MalformedResponse as e:
        _log(f"Error: {e}")
        if e.body is not None:
            _log(e.body)
        return 1
    except SlackMessageError as e:
        _log(f"Error: {e}")
        return 1

    if response.ok:
        if response.warning and args.verbose:
            _log(f"Warning: {response.warning}")
        print(f"Message sent, timestamp: {response.ts}")
        return 0

    _log(response.to_json(indent=2))
    _log(f"Error: Message not sent ({response.failure_reason})")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    load_env_file()
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())

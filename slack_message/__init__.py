"""slack-message — post a single message to Slack from the command line."""

from slack_message.config import __version__, AppConfig, FileConfig
from slack_message.credentials import Credential, resolve, resolve_credential
from slack_message.errors import (
    ConfigError,
    CredentialNotFound,
    MalformedResponse,
    SlackMessageError,
    TransportError,
)
from slack_message.message import OutboundMessage, build_message
from slack_message.response import InboundResponse, parse_response
from slack_message.slack_client import PreparedRequest, SlackClient

__all__ = [
    "__version__",
    "AppConfig",
    "FileConfig",
    "Credential",
    "resolve",
    "resolve_credential",
    "ConfigError",
    "CredentialNotFound",
    "MalformedResponse",
    "SlackMessageError",
    "TransportError",
    "OutboundMessage",
    "build_message",
    "InboundResponse",
    "parse_response",
    "PreparedRequest",
    "SlackClient",
]

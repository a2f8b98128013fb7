"""Channel and token resolution: argument, then environment, then config file."""

import os
from dataclasses import dataclass
from typing import Callable, Optional

from slack_message.config import CHANNEL_ENV, TOKEN_ENV, FileConfig
from slack_message.errors import CredentialNotFound

Source = Callable[[], Optional[str]]


@dataclass(frozen=True)
class Credential:
    channel: str
    token: str

    def __repr__(self) -> str:
        return f"Credential(channel={self.channel!r}, token='***')"


def first_present(*sources: Source) -> Optional[str]:
    """Return the first value that is not None, trying sources in order."""
    for source in sources:
        value = source()
        if value is not None:
            return value
    return None


def from_value(value: Optional[str]) -> Source:
    return lambda: value


def from_env(name: str) -> Source:
    return lambda: os.environ.get(name)


def resolve(
    arg_value: Optional[str],
    env_var: str,
    fallback: Optional[str] = None,
) -> str:
    """Resolve one credential.

    An explicit argument wins even when empty; an environment variable that
    is set (even to "") beats the config-file fallback.

    Raises:
        CredentialNotFound: no source produced a value.
    """
    value = first_present(from_value(arg_value), from_env(env_var), from_value(fallback))
    if value is None:
        raise CredentialNotFound(env_var)
    return value


def resolve_credential(
    channel_arg: Optional[str],
    token_arg: Optional[str],
    file_config: Optional[FileConfig] = None,
) -> Credential:
    channel = resolve(
        channel_arg, CHANNEL_ENV, file_config.channel if file_config else None
    )
    token = resolve(token_arg, TOKEN_ENV, file_config.token if file_config else None)
    return Credential(channel=channel, token=token)

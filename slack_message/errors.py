"""Error types raised by the message pipeline."""

import asyncio
from pathlib import Path
from typing import Optional, Union


class SlackMessageError(Exception):
    """Base class for all slack-message failures."""
    pass


class CredentialNotFound(SlackMessageError):
    """Raised when neither an argument nor the environment supplies a credential"""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"Couldn't find {variable}")


class ConfigError(SlackMessageError):
    """Raised when a config file is missing, unreadable or incomplete"""

    def __init__(self, path: Path, cause: Union[Exception, str]):
        self.path = path
        self.cause = cause
        super().__init__(f"Invalid config file {path}: {cause}")


class TransportError(SlackMessageError):
    """Raised when the HTTP round trip itself fails (connection, DNS, timeout)."""

    def __init__(self, cause: Exception):
        self.cause = cause
        if self.timed_out:
            detail = "request timed out"
        else:
            detail = str(cause) or type(cause).__name__
        super().__init__(f"Transport failure: {detail}")

    @property
    def timed_out(self) -> bool:
        return isinstance(self.cause, asyncio.TimeoutError)


class MalformedResponse(SlackMessageError):
    """Raised when the response body is not the JSON shape Slack promises."""

    def __init__(self, cause: Exception, body: Optional[str] = None):
        self.cause = cause
        self.body = body
        super().__init__(f"Malformed response: {cause}")

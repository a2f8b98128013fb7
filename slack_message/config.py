"""Configuration: environment variables, .env loading and the TOML config file."""

__version__ = "0.1.0"

import math
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ValidationError

from slack_message.errors import ConfigError

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

CHANNEL_ENV = "SLACK_CHANNEL"
TOKEN_ENV = "SLACK_TOKEN"
API_URL_ENV = "SLACK_MESSAGE_API_URL"
TIMEOUT_ENV = "SLACK_MESSAGE_TIMEOUT"
CONFIG_PATH_ENV = "SLACK_MESSAGE_CONFIG"

SLACK_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Searched in order; the first existing file wins
CONFIG_SEARCH_PATHS = (
    "~/.slack-message.toml",
    "~/.config/slack-message/config.toml",
    "~/.config/slack-message/slack-message.toml",
)


def load_env_file(path: Optional[str] = None) -> bool:
    """Load a .env file without overriding variables already set.

    With no path, the nearest .env from the working directory upwards is used.
    """
    if path is None:
        path = find_dotenv(usecwd=True)
    return load_dotenv(dotenv_path=path, override=False)


def is_valid_timeout(value: float) -> bool:
    return math.isfinite(value) and value > 0


def parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if not is_valid_timeout(value):
        _stderr_print(
            f"Unsupported {TIMEOUT_ENV}={raw!r}, falling back to {DEFAULT_TIMEOUT_SECONDS:g}s"
        )
        return DEFAULT_TIMEOUT_SECONDS
    return value


class FileConfig(BaseModel):
    """Credentials stored in a slack-message TOML file."""

    channel: str
    token: str


def find_config_file(paths: Sequence[str] = CONFIG_SEARCH_PATHS) -> Optional[Path]:
    for raw in paths:
        path = Path(raw).expanduser()
        if path.is_file():
            return path
    return None


def read_config_file(path: Path) -> FileConfig:
    """Parse a TOML config file.

    Raises:
        ConfigError: the file can't be read, isn't TOML, or lacks
            ``channel``/``token``.
    """
    path = Path(path).expanduser()
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(path, e) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(path, e) from e

    try:
        return FileConfig.model_validate(data)
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigError(path, f"missing or invalid field(s): {', '.join(missing)}") from e


@dataclass
class AppConfig:
    """Typed runtime configuration for one invocation."""

    api_url: str = SLACK_POST_MESSAGE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    config_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        config_path = os.getenv(CONFIG_PATH_ENV, "").strip()
        return cls(
            api_url=os.getenv(API_URL_ENV, "").strip() or SLACK_POST_MESSAGE_URL,
            timeout=parse_timeout(os.getenv(TIMEOUT_ENV)),
            config_path=Path(config_path) if config_path else None,
        )

    def load_file_config(self) -> Optional[FileConfig]:
        """Read the explicit config file, or the first one found on disk.

        An explicit path must exist; discovered files are optional.
        """
        if self.config_path is not None:
            return read_config_file(self.config_path)
        found = find_config_file()
        if found is None:
            return None
        return read_config_file(found)

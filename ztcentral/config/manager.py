"""
Configuration for the ztcentral client.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from ztcentral.core.common import DEFAULT_API_URL, DEFAULT_TIMEOUT
from ztcentral.network.retry import DEFAULT_BACKOFF_BASE, DEFAULT_BACKOFF_CAP, DEFAULT_MAX_ATTEMPTS

logger = logging.getLogger(__name__)

TOKEN_ENV = "ZEROTIER_CENTRAL_TOKEN"
LEGACY_TOKEN_ENV = "ZEROTIER_CENTRAL_API_KEY"
URL_ENV = "ZEROTIER_CENTRAL_URL"
TIMEOUT_ENV = "ZEROTIER_CENTRAL_TIMEOUT"
MAX_ATTEMPTS_ENV = "ZEROTIER_CENTRAL_MAX_ATTEMPTS"
PACING_ENV = "ZEROTIER_CENTRAL_PACING"
BACKOFF_BASE_ENV = "ZEROTIER_CENTRAL_BACKOFF_BASE"
BACKOFF_CAP_ENV = "ZEROTIER_CENTRAL_BACKOFF_CAP"
USER_AGENT_ENV = "ZEROTIER_CENTRAL_USER_AGENT"
TOKEN_FILE = Path("test-token.txt")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """Invalid or incomplete client configuration."""


@dataclass(frozen=True)
class ClientConfig:
    """Settings used to build a ``Client``."""

    token: str
    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    backoff_base: float = DEFAULT_BACKOFF_BASE
    backoff_cap: float = DEFAULT_BACKOFF_CAP
    pacing: bool = False
    user_agent: Optional[str] = None

    def __post_init__(self):
        if not self.token:
            raise ConfigError("an API token is required")
        if self.max_attempts < 1:
            raise ConfigError("max_attempts must be at least 1")
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive")
        if self.backoff_base < 0:
            raise ConfigError("backoff_base must not be negative")
        if self.backoff_cap < self.backoff_base:
            raise ConfigError("backoff_cap must be at least backoff_base")

    def __repr__(self) -> str:
        # Never show the token
        return (f"ClientConfig(token='***', base_url={self.base_url!r}, timeout={self.timeout!r}, "
                f"max_attempts={self.max_attempts!r}, backoff_base={self.backoff_base!r}, "
                f"backoff_cap={self.backoff_cap!r}, pacing={self.pacing!r}, user_agent={self.user_agent!r})")


def read_token_file(path: Union[str, Path] = TOKEN_FILE) -> Optional[str]:
    """
    Reads a token from ``path``, trimming surrounding whitespace.

    Returns:
        The token, or None if the file does not exist or is empty
    """
    path = Path(path)
    if not path.exists():
        return None
    if not path.is_file():
        raise ConfigError(f"{path} is not a regular file")
    token = path.read_text(encoding="utf-8").strip()
    return token or None


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _parse_number(name: str, value: str, kind: type):
    try:
        return kind(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


def load_config(token: Optional[str] = None, *,
                env: Optional[Mapping[str, str]] = None,
                token_file: Optional[Union[str, Path]] = TOKEN_FILE,
                **overrides) -> ClientConfig:
    """
    Builds a ``ClientConfig`` from arguments, the environment and a token file.

    Explicit arguments win over environment variables. The token is looked up
    in ``token``, then ``ZEROTIER_CENTRAL_TOKEN``, then
    ``ZEROTIER_CENTRAL_API_KEY``, then ``token_file``.

    Args:
        token: API token
        env: Environment to read (defaults to ``os.environ``)
        token_file: File holding the token, or None to skip it
        **overrides: Any other ``ClientConfig`` field

    Raises:
        ConfigError: If no token is found or a value cannot be parsed
    """
    env = os.environ if env is None else env

    token = token or env.get(TOKEN_ENV) or env.get(LEGACY_TOKEN_ENV)
    if not token and token_file is not None:
        token = read_token_file(token_file)
        if token:
            logger.debug(f"API token read from {token_file}")
    if not token:
        raise ConfigError(
            f"No API token: pass one explicitly, set {TOKEN_ENV} or put it in {token_file}"
        )

    values = {}
    if URL_ENV in env:
        values["base_url"] = env[URL_ENV]
    if TIMEOUT_ENV in env:
        values["timeout"] = _parse_number(TIMEOUT_ENV, env[TIMEOUT_ENV], float)
    if MAX_ATTEMPTS_ENV in env:
        values["max_attempts"] = _parse_number(MAX_ATTEMPTS_ENV, env[MAX_ATTEMPTS_ENV], int)
    if BACKOFF_BASE_ENV in env:
        values["backoff_base"] = _parse_number(BACKOFF_BASE_ENV, env[BACKOFF_BASE_ENV], float)
    if BACKOFF_CAP_ENV in env:
        values["backoff_cap"] = _parse_number(BACKOFF_CAP_ENV, env[BACKOFF_CAP_ENV], float)
    if PACING_ENV in env:
        values["pacing"] = _parse_bool(PACING_ENV, env[PACING_ENV])
    if env.get(USER_AGENT_ENV):
        values["user_agent"] = env[USER_AGENT_ENV]

    values.update({key: value for key, value in overrides.items() if value is not None})
    return ClientConfig(token=token, **values)

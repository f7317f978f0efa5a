"""Configuration for the MEMPRO client.

Immutable dataclass read once from the environment at startup and passed
explicitly to the backend client and the tool dispatcher.
Override via environment variables with MEMPRO_ prefix, or a .env file.
"""

import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

from mempro_client.log_config import get_logger

log = get_logger("config")

# Load .env file from the working directory (or a parent) if present.
# Variables already set in the environment take precedence.
_env_loaded = load_dotenv(find_dotenv(usecwd=True))
log.debug(f"Loaded .env file: {_env_loaded}")

DEFAULT_BACKEND_URL = "http://135.181.128.98:8821"
# TODO: confirm with backend owners whether a shared production user id is the
# intended fallback for callers that omit user_id.
DEFAULT_USER_ID = "thorsten-secstack-prod"
DEFAULT_TIMEOUT = 30.0


class ConfigError(ValueError):
    """Invalid configuration value in the environment."""


def _get_env(key: str, default: str) -> str:
    """Get environment variable with MEMPRO_ prefix; empty values use the default."""
    return os.getenv(f"MEMPRO_{key}") or default


def _get_env_float(key: str, default: float) -> float:
    """Get a positive float environment variable."""
    val = os.getenv(f"MEMPRO_{key}")
    if val is None or not val.strip():
        return default
    try:
        parsed = float(val)
    except ValueError as e:
        raise ConfigError(f"MEMPRO_{key} must be a number, got {val!r}") from e
    if parsed <= 0:
        raise ConfigError(f"MEMPRO_{key} must be positive, got {val!r}")
    return parsed


@dataclass(frozen=True)
class Config:
    """MEMPRO client configuration.

    Attributes:
        backend_url: MEMPRO backend base URL (MEMPRO_URL)
        default_user_id: user_id sent when a caller omits it (MEMPRO_DEFAULT_USER)
        timeout: Per-request timeout in seconds (MEMPRO_TIMEOUT, default: 30)
    """

    backend_url: str = field(
        default_factory=lambda: _get_env("URL", DEFAULT_BACKEND_URL)
    )
    default_user_id: str = field(
        default_factory=lambda: _get_env("DEFAULT_USER", DEFAULT_USER_ID)
    )
    timeout: float = field(
        default_factory=lambda: _get_env_float("TIMEOUT", DEFAULT_TIMEOUT)
    )

    def __post_init__(self):
        """Normalize the backend URL and log the effective configuration."""
        # Paths are appended verbatim, so a trailing slash would double up
        object.__setattr__(self, "backend_url", self.backend_url.rstrip("/"))

        log.debug(f"backend_url={self.backend_url}")
        log.debug(f"default_user_id={self.default_user_id}")
        log.debug(f"timeout={self.timeout}")
        log.info(f"Config initialized: backend={self.backend_url}")

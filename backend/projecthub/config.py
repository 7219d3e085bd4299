"""Configuration helpers for the projecthub service.

This module centralises runtime configuration. Secrets are expected to be
provided via environment variables and are never read from source control.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Final


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class SecurityConfig:
    """Security-sensitive configuration options.

    Attributes:
        session_secret_env_var: Name of the environment variable that stores the
            hex-encoded HMAC key used to sign session tokens.
        min_secret_bytes: Minimum accepted key length.
    """

    session_secret_env_var: str = "PROJECTHUB_SESSION_SECRET"
    min_secret_bytes: int = 32


SECURITY_CONFIG: Final = SecurityConfig()


@dataclass(frozen=True)
class DataConfig:
    """Configuration for persistent application storage."""

    database_url_env_var: str = "PROJECTHUB_DATABASE_URL"
    sql_echo_env_var: str = "PROJECTHUB_SQL_ECHO"
    default_sqlite_path: Path = Path("var/sqlite/app.db")


DATA_CONFIG: Final = DataConfig()


@dataclass(frozen=True)
class LoggingConfig:
    level_env_var: str = "PROJECTHUB_LOG_LEVEL"
    default_level: str = "INFO"


LOGGING_CONFIG: Final = LoggingConfig()


def load_session_secret(*, env_var: str | None = None) -> bytes:
    """Load the session signing secret from the environment.

    Args:
        env_var: Optional override for the environment variable name. Defaults
            to :data:`SecurityConfig.session_secret_env_var`.

    Returns:
        The raw bytes of the HMAC key.

    Raises:
        ConfigurationError: If the secret is missing or improperly formatted.
    """

    key_var = env_var or SECURITY_CONFIG.session_secret_env_var
    secret_hex = os.environ.get(key_var)
    if secret_hex is None:
        raise ConfigurationError(f"Session signing secret missing. Set the environment variable {key_var}.")

    try:
        secret = bytes.fromhex(secret_hex)
    except ValueError as exc:
        raise ConfigurationError("Session signing secret must be hex-encoded.") from exc

    if len(secret) < SECURITY_CONFIG.min_secret_bytes:
        raise ConfigurationError(
            f"Session signing secret must be at least {SECURITY_CONFIG.min_secret_bytes} bytes."
        )

    return secret


def resolve_database_url() -> str:
    """Return the configured SQLAlchemy database URL.

    The URL is resolved on demand so tests can override the environment
    variable before instantiating application components. Without an
    override the service uses a SQLite file relative to the working directory.
    """

    candidate = os.environ.get(DATA_CONFIG.database_url_env_var)
    if candidate:
        return candidate
    path = DATA_CONFIG.default_sqlite_path.expanduser().resolve()
    return f"sqlite:///{path}"


def resolve_sql_echo() -> bool:
    value = os.environ.get(DATA_CONFIG.sql_echo_env_var, "false")
    return value.strip().lower() in ("true", "1", "yes")


def resolve_log_level() -> str:
    return os.environ.get(LOGGING_CONFIG.level_env_var, LOGGING_CONFIG.default_level)

"""
Configuration loading for Timestampr.

Connection parameters come from a ``.env`` file in the working directory and
from the process environment, read with Pydantic BaseSettings. Variables that
are already set in the environment take precedence over the file.

Required variables:
- DB_HOST, DB_USERNAME, DB_PASSWORD, DB_DATABASE

Optional variables:
- DB_PORT: Database port (default: 3306, overridden by the CLI argument)
- LOG_LEVEL: Logging level for structured logs (default: WARNING)

The result is a frozen ``DatabaseConfig`` built once at startup and handed to
the components that need it.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timestampr.exceptions import (
    EnvFileNotFoundError,
    EnvFileUnreadableError,
    InvalidPortError,
    MissingCredentialsError,
)

ENV_FILE_NAME = ".env"
DEFAULT_PORT = 3306

REQUIRED_VARIABLES = ("DB_HOST", "DB_USERNAME", "DB_PASSWORD", "DB_DATABASE")


class EnvironmentSettings(BaseSettings):
    """
    Raw settings as read from the environment and the ``.env`` file.

    Every field defaults to an empty string so that missing values can be
    reported together instead of failing on the first one.
    """

    DB_HOST: str = Field(default="", description="Database host")
    DB_PORT: str = Field(default="", description="Database port")
    DB_USERNAME: str = Field(default="", description="Database user")
    DB_PASSWORD: str = Field(default="", description="Database password")
    DB_DATABASE: str = Field(default="", description="Database (schema) name")
    LOG_LEVEL: str = Field(default="WARNING", description="Logging level")

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # DB_PASSWORD is passed through untouched; spaces may be part of it.
    @field_validator(
        "DB_HOST", "DB_PORT", "DB_USERNAME", "DB_DATABASE", "LOG_LEVEL", mode="before"
    )
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    def missing_credentials(self) -> List[str]:
        """Names of required variables that are empty or blank."""
        return [
            name for name in REQUIRED_VARIABLES if not getattr(self, name).strip()
        ]


@dataclass(frozen=True)
class DatabaseConfig:
    """Resolved connection parameters for a single run."""

    host: str
    username: str
    password: str = field(repr=False)
    database: str
    port: int = DEFAULT_PORT


def locate_env_file(directory: Optional[Path] = None) -> Path:
    """
    Return the path of the ``.env`` file in ``directory``.

    Args:
        directory: Directory to look in (defaults to the current directory)

    Raises:
        EnvFileNotFoundError: If the file does not exist
    """
    env_file = (directory or Path.cwd()) / ENV_FILE_NAME
    if not env_file.is_file():
        raise EnvFileNotFoundError(str(env_file))
    return env_file


def read_environment(env_file: Path) -> EnvironmentSettings:
    """
    Read settings from ``env_file`` layered under the process environment.

    Args:
        env_file: Path returned by ``locate_env_file``

    Raises:
        EnvFileUnreadableError: If the file cannot be read or decoded
    """
    try:
        return EnvironmentSettings(_env_file=env_file)
    except (UnicodeDecodeError, OSError, ValidationError) as e:
        raise EnvFileUnreadableError(str(env_file), e) from e


def resolve_port(
    port_override: Optional[str] = None, env_port: Optional[str] = None
) -> int:
    """
    Pick the database port.

    Priority order:
    1) Port passed on the command line
    2) DB_PORT from the environment or ``.env``
    3) 3306

    Raises:
        InvalidPortError: If the chosen value is not a valid TCP port
    """
    raw = (port_override or "").strip() or (env_port or "").strip()
    if not raw:
        return DEFAULT_PORT

    try:
        port = int(raw)
    except ValueError:
        raise InvalidPortError(raw) from None

    if not 0 < port < 65536:
        raise InvalidPortError(raw)
    return port


def build_database_config(
    settings: EnvironmentSettings, port_override: Optional[str] = None
) -> DatabaseConfig:
    """
    Validate ``settings`` and turn them into a ``DatabaseConfig``.

    Raises:
        MissingCredentialsError: If any required variable is empty
        InvalidPortError: If the resolved port is not usable
    """
    missing = settings.missing_credentials()
    if missing:
        raise MissingCredentialsError(missing)

    return DatabaseConfig(
        host=settings.DB_HOST,
        port=resolve_port(port_override, settings.DB_PORT),
        username=settings.DB_USERNAME,
        password=settings.DB_PASSWORD,
        database=settings.DB_DATABASE,
    )


def load_database_config(
    directory: Optional[Path] = None, port_override: Optional[str] = None
) -> DatabaseConfig:
    """Locate, read and validate configuration in one call."""
    env_file = locate_env_file(directory)
    return build_database_config(read_environment(env_file), port_override)

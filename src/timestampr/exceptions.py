"""
Error types raised by the migration steps.

Each step raises; only the CLI entry point turns an error into an exit code.
"""

from typing import List, Optional


class TimestamprError(Exception):
    """Base class for expected, user-facing failures."""

    exit_code = 1


class ConfigurationError(TimestamprError):
    """Configuration could not be loaded or is incomplete."""


class EnvFileNotFoundError(ConfigurationError):
    def __init__(self, path: Optional[str] = None):
        self.path = path
        super().__init__("No .env file found. Aborting...")


class EnvFileUnreadableError(ConfigurationError):
    """The .env file exists but could not be read or decoded."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        super().__init__(f"Could not read .env: {cause}")


class MissingCredentialsError(ConfigurationError):
    """One or more required DB_* variables are empty."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required database parameters: {', '.join(self.missing)}"
        )


class InvalidPortError(ConfigurationError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid database port: {value!r}")


class DatabaseConnectionError(TimestamprError):
    """Raised when the database server rejects or cannot take the connection."""


class NothingToUpdateError(TimestamprError):
    """No NOT NULL timestamp columns were found in the schema.

    Not a failure as such, but the run still ends with exit code 1.
    """

    def __init__(self) -> None:
        super().__init__("No tables needs updating.")

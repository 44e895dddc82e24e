"""
Single-connection management for the target database.

One SQLAlchemy engine and one connection are opened per run through the
PyMySQL driver. The engine runs in AUTOCOMMIT isolation so every ALTER TABLE
is applied as issued, with no surrounding transaction.
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from timestampr.config.settings import DatabaseConfig
from timestampr.exceptions import DatabaseConnectionError
from timestampr.utils.logging import get_logger

logger = get_logger(__name__)

DRIVER_NAME = "mysql+pymysql"
CHARSET = "utf8mb4"

# "localhost" makes MySQL clients try the unix socket instead of TCP.
LOOPBACK_ADDRESS = "127.0.0.1"


def resolve_host(host: str) -> str:
    """
    Normalize the configured host.

    Examples:
        >>> resolve_host("localhost")
        '127.0.0.1'
        >>> resolve_host("db.internal")
        'db.internal'
    """
    if host == "localhost":
        return LOOPBACK_ADDRESS
    return host


def build_connection_url(config: DatabaseConfig) -> URL:
    """Build the SQLAlchemy URL for ``config`` with the host already resolved."""
    return URL.create(
        DRIVER_NAME,
        username=config.username,
        password=config.password,
        host=resolve_host(config.host),
        port=config.port,
        database=config.database,
        query={"charset": CHARSET},
    )


def _driver_message(exc: SQLAlchemyError) -> str:
    # DBAPIError wraps the PyMySQL exception in .orig
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class ConnectionManager:
    """
    Own the engine and the one connection used during a run.

    Usage:
        >>> with ConnectionManager(config) as connection:
        ...     connection.exec_driver_sql("SELECT 1")
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._engine: Optional[Engine] = None
        self._connection: Optional[Connection] = None

    @property
    def connection(self) -> Optional[Connection]:
        return self._connection

    def open(self) -> Connection:
        """
        Connect to the database.

        Returns:
            An open SQLAlchemy Connection in AUTOCOMMIT mode

        Raises:
            DatabaseConnectionError: With the driver's message when the
                server cannot be reached or rejects the credentials
        """
        if self._connection is not None:
            return self._connection

        url = build_connection_url(self.config)
        logger.info(
            "connection.opening", url=url.render_as_string(hide_password=True)
        )

        try:
            self._engine = create_engine(url, isolation_level="AUTOCOMMIT")
            self._connection = self._engine.connect()
        except SQLAlchemyError as exc:
            message = _driver_message(exc)
            logger.info("connection.failed", host=url.host, error=message)
            self.close()
            raise DatabaseConnectionError(message) from exc

        logger.info("connection.opened", host=url.host, database=url.database)
        return self._connection

    def close(self) -> None:
        """Close the connection and dispose of the engine. Idempotent."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> Connection:
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

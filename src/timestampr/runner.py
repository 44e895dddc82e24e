"""
Migration runner: wires discovery, DDL generation and execution together.

The runner raises typed errors and never exits the process; the CLI decides
the exit code.
"""

from typing import Optional

from timestampr.cli.reporting import ConsoleReporter
from timestampr.config.settings import DatabaseConfig
from timestampr.exceptions import NothingToUpdateError
from timestampr.infrastructure.database import ConnectionManager
from timestampr.infrastructure.schema import (
    RunStats,
    SchemaDiscoverer,
    build_nullable_timestamp_statement,
)
from timestampr.utils.logging import bind_context, get_logger

logger = get_logger(__name__)


class MigrationRunner:
    """
    Make every NOT NULL timestamp column in one schema nullable.

    Usage:
        >>> runner = MigrationRunner(config, ConsoleReporter())
        >>> stats = runner.run()
        >>> print(stats.summary())
    """

    def __init__(
        self,
        config: DatabaseConfig,
        reporter: ConsoleReporter,
        connection_manager: Optional[ConnectionManager] = None,
    ):
        self.config = config
        self.reporter = reporter
        self.connection_manager = connection_manager or ConnectionManager(config)

    def run(self) -> RunStats:
        """
        Execute the migration.

        Returns:
            Counters for the tables and columns that were altered

        Raises:
            DatabaseConnectionError: If the connection cannot be opened
            NothingToUpdateError: If no table has a NOT NULL timestamp column

        Errors raised while executing ALTER TABLE are not caught. The
        connection is closed either way.
        """
        connection = self.connection_manager.open()
        try:
            self.reporter.status("Connected to database.")
            return self._migrate(connection)
        finally:
            self.connection_manager.close()

    def _migrate(self, connection) -> RunStats:
        discoverer = SchemaDiscoverer(connection, self.config.database)

        tables = discoverer.fetch_tables()
        if not tables:
            logger.info("migration.nothing_to_update", schema=self.config.database)
            raise NothingToUpdateError()

        stats = RunStats(table_count=len(tables))

        with self.reporter.progress(len(tables)) as progress_bar:
            for table in tables:
                column_set = discoverer.fetch_columns(table)
                statement = build_nullable_timestamp_statement(column_set)

                connection.exec_driver_sql(statement)

                stats.add(column_set)
                progress_bar.update(1)
                bind_context(schema=self.config.database, table=table).info(
                    "migration.table_altered", columns=list(column_set.columns)
                )

        logger.info(
            "migration.completed",
            schema=self.config.database,
            table_count=stats.table_count,
            column_count=stats.column_count,
        )
        return stats

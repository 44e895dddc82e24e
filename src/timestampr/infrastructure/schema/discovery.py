"""
Discovery of NOT NULL timestamp columns through ``information_schema``.

Both queries use bound parameters for the schema and table names.
"""

from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Connection

from timestampr.utils.logging import get_logger

from .types import TableColumnSet

logger = get_logger(__name__)

TABLES_QUERY = text(
    "SELECT DISTINCT TABLE_NAME FROM information_schema.columns "
    "WHERE TABLE_SCHEMA = :schema "
    "AND DATA_TYPE = 'timestamp' AND IS_NULLABLE = 'NO' "
    "ORDER BY TABLE_NAME"
)

COLUMNS_QUERY = text(
    "SELECT COLUMN_NAME FROM information_schema.columns "
    "WHERE TABLE_SCHEMA = :schema AND TABLE_NAME = :table "
    "AND DATA_TYPE = 'timestamp' AND IS_NULLABLE = 'NO' "
    "ORDER BY ORDINAL_POSITION"
)


class SchemaDiscoverer:
    """Find tables and columns that need their timestamps relaxed."""

    def __init__(self, connection: Connection, schema: str):
        self.connection = connection
        self.schema = schema

    def fetch_tables(self) -> List[str]:
        """
        Tables in the schema with at least one NOT NULL timestamp column.

        Returns:
            Table names sorted alphabetically; empty if nothing qualifies
        """
        result = self.connection.execute(TABLES_QUERY, {"schema": self.schema})
        tables = list(result.scalars().all())
        logger.info(
            "schema.tables_discovered", schema=self.schema, table_count=len(tables)
        )
        return tables

    def fetch_columns(self, table: str) -> TableColumnSet:
        """NOT NULL timestamp columns of ``table`` in declaration order."""
        result = self.connection.execute(
            COLUMNS_QUERY, {"schema": self.schema, "table": table}
        )
        return TableColumnSet(table=table, columns=tuple(result.scalars().all()))

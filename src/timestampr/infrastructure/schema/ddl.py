"""
DDL generation for relaxing NOT NULL timestamp columns.

Identifiers are emitted exactly as reported by ``information_schema``,
without quoting.
"""

from .types import TableColumnSet

MODIFY_CLAUSE = "MODIFY COLUMN {column} TIMESTAMP NULL"


def build_nullable_timestamp_statement(column_set: TableColumnSet) -> str:
    """
    Build one ALTER TABLE statement covering every column in ``column_set``.

    Args:
        column_set: Table name and its columns in ordinal order

    Returns:
        The statement, terminated with a semicolon

    Raises:
        ValueError: If the column set is empty

    Examples:
        >>> build_nullable_timestamp_statement(
        ...     TableColumnSet("orders", ("created_at", "updated_at"))
        ... )
        'ALTER TABLE orders MODIFY COLUMN created_at TIMESTAMP NULL, MODIFY COLUMN updated_at TIMESTAMP NULL;'
    """
    if not column_set.columns:
        raise ValueError(f"No columns to modify for table {column_set.table!r}")

    clauses = ", ".join(
        MODIFY_CLAUSE.format(column=column) for column in column_set.columns
    )
    return f"ALTER TABLE {column_set.table} {clauses};"

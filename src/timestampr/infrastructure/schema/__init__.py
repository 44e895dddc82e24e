"""
Schema discovery and DDL generation for NOT NULL timestamp columns.

The discoverer reads ``information_schema.columns``; the DDL builder is pure
and needs no database.
"""

from .ddl import build_nullable_timestamp_statement
from .discovery import SchemaDiscoverer
from .types import RunStats, TableColumnSet

__all__ = [
    "build_nullable_timestamp_statement",
    "SchemaDiscoverer",
    "RunStats",
    "TableColumnSet",
]

"""Value types passed between discovery, DDL generation and reporting."""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class TableColumnSet:
    """A table and its NOT NULL timestamp columns, in ordinal order."""

    table: str
    columns: Tuple[str, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.columns)


@dataclass
class RunStats:
    table_count: int = 0
    column_count: int = 0

    def add(self, column_set: TableColumnSet) -> None:
        self.column_count += len(column_set)

    def summary(self) -> str:
        return (
            f"Updated {self.column_count} columns in {self.table_count} tables."
        )

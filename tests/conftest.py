"""Shared pytest fixtures for Timestampr tests.

Provides:
- isolation from DB_* / LOG_LEVEL variables set in the developer's shell
- a helper to write a ``.env`` file into a temporary working directory
- fake connection objects for runner and CLI tests
- an in-memory SQLite engine exposing an ``information_schema.columns`` table
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine

ENV_VARIABLES = (
    "DB_HOST",
    "DB_PORT",
    "DB_USERNAME",
    "DB_PASSWORD",
    "DB_DATABASE",
    "LOG_LEVEL",
)

VALID_ENV = {
    "DB_HOST": "localhost",
    "DB_USERNAME": "root",
    "DB_PASSWORD": "secret",
    "DB_DATABASE": "shop",
}


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_env_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Callable[..., Path]:
    """Write a .env file into tmp_path and make it the working directory."""
    monkeypatch.chdir(tmp_path)

    def _write(values: Optional[Dict[str, str]] = None, **overrides: str) -> Path:
        content = dict(VALID_ENV if values is None else values)
        content.update(overrides)
        env_file = tmp_path / ".env"
        env_file.write_text(
            "".join(f"{key}={value}\n" for key, value in content.items()),
            encoding="utf-8",
        )
        return env_file

    return _write


class FakeResult:
    def __init__(self, values: Iterable[str]):
        self._values = list(values)

    def scalars(self) -> "FakeResult":
        return self

    def all(self) -> List[str]:
        return list(self._values)


class FakeConnection:
    """
    Answers the two discovery queries from an in-memory mapping.

    ``tables`` maps table name to its NOT NULL timestamp columns in ordinal
    order. Statements passed to ``exec_driver_sql`` are recorded.
    """

    def __init__(
        self,
        tables: Dict[str, List[str]],
        fail_with: Optional[Exception] = None,
    ):
        self.tables = tables
        self.fail_with = fail_with
        self.queries: List[Dict[str, str]] = []
        self.executed: List[str] = []

    def execute(self, clause, params=None) -> FakeResult:
        params = dict(params or {})
        self.queries.append(params)
        if "table" in params:
            return FakeResult(self.tables.get(params["table"], []))
        return FakeResult(sorted(name for name, cols in self.tables.items() if cols))

    def exec_driver_sql(self, statement: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.executed.append(statement)


class FakeConnectionManager:
    def __init__(
        self,
        connection: Optional[FakeConnection] = None,
        error: Optional[Exception] = None,
    ):
        self.connection = connection
        self.error = error
        self.opened = False
        self.closed = False

    def open(self) -> FakeConnection:
        if self.error is not None:
            raise self.error
        self.opened = True
        return self.connection

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_connection() -> type:
    return FakeConnection


@pytest.fixture
def fake_connection_manager() -> type:
    return FakeConnectionManager


ColumnRow = Tuple[str, str, str, str, str, int]


@pytest.fixture
def information_schema_engine() -> Engine:
    """SQLite engine with an attached ``information_schema`` database."""
    engine = create_engine("sqlite://")

    @event.listens_for(engine, "connect")
    def _attach_information_schema(dbapi_connection, _record) -> None:
        dbapi_connection.execute("ATTACH DATABASE ':memory:' AS information_schema")

    with engine.begin() as connection:
        connection.exec_driver_sql(
            "CREATE TABLE information_schema.columns ("
            "TABLE_SCHEMA TEXT, TABLE_NAME TEXT, COLUMN_NAME TEXT, "
            "DATA_TYPE TEXT, IS_NULLABLE TEXT, ORDINAL_POSITION INTEGER)"
        )

    yield engine
    engine.dispose()


@pytest.fixture
def seed_columns(information_schema_engine: Engine) -> Callable[[List[ColumnRow]], None]:
    """Insert (schema, table, column, data_type, is_nullable, position) rows."""

    def _seed(rows: List[ColumnRow]) -> None:
        with information_schema_engine.begin() as connection:
            connection.execute(
                text(
                    "INSERT INTO information_schema.columns VALUES "
                    "(:schema, :table, :column, :data_type, :nullable, :position)"
                ),
                [
                    {
                        "schema": schema,
                        "table": table,
                        "column": column,
                        "data_type": data_type,
                        "nullable": nullable,
                        "position": position,
                    }
                    for schema, table, column, data_type, nullable, position in rows
                ],
            )

    return _seed

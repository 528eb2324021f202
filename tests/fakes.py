"""Instrumented in-memory driver used by the unit tests.

Every call is recorded so tests can assert on exact call sequences and on
how many times ``close`` ran.
"""

from typing import Any, Optional


class DriverFailure(Exception):
    """Stand-in for a driver-specific database error."""

    def __init__(self, message: str, sqlstate: Optional[str] = None, errno: Optional[int] = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate
        self.errno = errno


class FakeResult:
    def __init__(self, rows: "list[tuple[Any, ...]]") -> None:
        self.rows = rows
        self.close_count = 0

    def fetchall(self) -> "list[tuple[Any, ...]]":
        return list(self.rows)

    def close(self) -> None:
        self.close_count += 1


class FakeStatement:
    def __init__(self, connection: "FakeConnection", sql: str) -> None:
        self.connection = connection
        self.sql = sql
        self.set_calls: list[tuple[int, Any, Any]] = []
        self.parameters: dict[int, Any] = {}
        self.batch_rows: list[dict[int, Any]] = []
        self.calls: list[str] = []
        self.close_count = 0
        self.result: Optional[FakeResult] = None

    def set_parameter(self, position: int, value: Any, sql_type: Optional[Any] = None) -> None:
        self.calls.append("set_parameter")
        self.set_calls.append((position, value, sql_type))
        self.parameters[position] = value

    def execute_update(self) -> int:
        self.calls.append("execute_update")
        if self.connection.execute_error is not None:
            raise self.connection.execute_error
        return self.connection.update_count

    def add_batch(self) -> None:
        self.calls.append("add_batch")
        if self.connection.add_batch_error is not None:
            raise self.connection.add_batch_error
        self.batch_rows.append(dict(self.parameters))
        self.parameters = {}

    def execute_batch(self) -> "list[int]":
        self.calls.append("execute_batch")
        if self.connection.execute_error is not None:
            raise self.connection.execute_error
        return [self.connection.update_count for _ in self.batch_rows]

    def execute_query(self) -> FakeResult:
        self.calls.append("execute_query")
        if self.connection.execute_error is not None:
            raise self.connection.execute_error
        self.result = FakeResult(self.connection.rows)
        return self.result

    def close(self) -> None:
        self.calls.append("close")
        self.close_count += 1
        if self.connection.statement_close_error is not None:
            raise self.connection.statement_close_error


class FakeConnection:
    def __init__(self, update_count: int = 1, rows: "Optional[list[tuple[Any, ...]]]" = None) -> None:
        self.update_count = update_count
        self.rows = rows or []
        self.statements: list[FakeStatement] = []
        self.close_count = 0
        self.prepare_error: Optional[Exception] = None
        self.execute_error: Optional[Exception] = None
        self.add_batch_error: Optional[Exception] = None
        self.statement_close_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None

    @property
    def statement(self) -> FakeStatement:
        return self.statements[-1]

    def prepare(self, sql: str) -> FakeStatement:
        if self.prepare_error is not None:
            raise self.prepare_error
        statement = FakeStatement(self, sql)
        self.statements.append(statement)
        return statement

    def close(self) -> None:
        self.close_count += 1
        if self.close_error is not None:
            raise self.close_error

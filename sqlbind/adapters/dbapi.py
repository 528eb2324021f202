"""Adapter from PEP 249 (DB-API 2.0) connections to sqlbind's protocols.

DB-API has no prepared statement object, so :class:`DBAPIStatement` buffers
parameters and runs them through a cursor. Batches are executed row by row
because ``executemany`` only reports a total row count.
"""

from typing import Any, Final, Optional, Union

from sqlbind.parameters.types import ParameterStyle

__all__ = ("PEP249_PARAMETER_STYLES", "DBAPIConnection", "DBAPIStatement")

# PEP 249 ``paramstyle`` values with a positional sqlbind equivalent
PEP249_PARAMETER_STYLES: Final["dict[str, ParameterStyle]"] = {
    "qmark": ParameterStyle.QMARK,
    "numeric": ParameterStyle.POSITIONAL_COLON,
    "format": ParameterStyle.POSITIONAL_PYFORMAT,
}

_UNSET: Final = object()


class DBAPIStatement:
    """Prepared statement emulation on top of DB-API cursors."""

    __slots__ = ("_connection", "_cursors", "_parameters", "_rows", "sql")

    def __init__(self, connection: Any, sql: str) -> None:
        self._connection = connection
        self.sql = sql
        self._parameters: list[Any] = []
        self._rows: list[tuple[Any, ...]] = []
        self._cursors: list[Any] = []

    def _cursor(self) -> Any:
        cursor = self._connection.cursor()
        self._cursors.append(cursor)
        return cursor

    def _current(self) -> "tuple[Any, ...]":
        missing = [index + 1 for index, value in enumerate(self._parameters) if value is _UNSET]
        if missing:
            msg = f"No value set for position(s) {missing}"
            raise IndexError(msg)
        return tuple(self._parameters)

    def set_parameter(self, position: int, value: Any, sql_type: Optional[Any] = None) -> None:
        """Set a 1-based position. ``sql_type`` is ignored: DB-API has no typed null."""
        if position < 1:
            msg = f"Parameter positions start at 1, got {position}"
            raise IndexError(msg)
        if len(self._parameters) < position:
            self._parameters.extend([_UNSET] * (position - len(self._parameters)))
        self._parameters[position - 1] = value

    def execute_update(self) -> int:
        cursor = self._cursor()
        cursor.execute(self.sql, self._current())
        return cursor.rowcount

    def execute_query(self) -> Any:
        """Execute and return the cursor for the caller to fetch from."""
        cursor = self._cursor()
        cursor.execute(self.sql, self._current())
        return cursor

    def add_batch(self) -> None:
        self._rows.append(self._current())
        self._parameters = []

    def execute_batch(self) -> "list[int]":
        cursor = self._cursor()
        counts: list[int] = []
        rows, self._rows = self._rows, []
        for row in rows:
            cursor.execute(self.sql, row)
            counts.append(cursor.rowcount)
        return counts

    def close(self) -> None:
        """Close every cursor this statement opened; the first failure is re-raised."""
        cursors, self._cursors = self._cursors, []
        self._rows = []
        first_error: Optional[Exception] = None
        for cursor in cursors:
            try:
                cursor.close()
            except Exception as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error


class DBAPIConnection:
    """Wraps a DB-API connection so executors can prepare statements on it.

    Args:
        connection: The DB-API connection, e.g. from ``sqlite3.connect``.
        parameter_style: A :class:`ParameterStyle`, or the driver module's
            ``paramstyle`` string (``"qmark"``, ``"numeric"`` or ``"format"``).
    """

    __slots__ = ("connection", "parameter_style")

    def __init__(self, connection: Any, parameter_style: Union[ParameterStyle, str] = ParameterStyle.QMARK) -> None:
        self.connection = connection
        if type(parameter_style) is str:
            try:
                parameter_style = PEP249_PARAMETER_STYLES[parameter_style]
            except KeyError:
                msg = f"Unsupported DB-API paramstyle {parameter_style!r}; expected one of {sorted(PEP249_PARAMETER_STYLES)}"
                raise ValueError(msg) from None
        self.parameter_style = ParameterStyle(parameter_style)

    def prepare(self, sql: str) -> DBAPIStatement:
        return DBAPIStatement(self.connection, sql)

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    def close(self) -> None:
        self.connection.close()

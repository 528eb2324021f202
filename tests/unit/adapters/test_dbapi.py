"""Unit tests for the DB-API adapter."""

from unittest.mock import MagicMock, call

import pytest

from sqlbind import ParameterStyle
from sqlbind.adapters import DBAPIConnection, DBAPIStatement


@pytest.fixture
def raw_connection() -> MagicMock:
    conn = MagicMock()
    conn.cursor.return_value.rowcount = 1
    return conn


@pytest.mark.parametrize(
    ("paramstyle", "expected"),
    [
        ("qmark", ParameterStyle.QMARK),
        ("numeric", ParameterStyle.POSITIONAL_COLON),
        ("format", ParameterStyle.POSITIONAL_PYFORMAT),
        (ParameterStyle.NUMERIC, ParameterStyle.NUMERIC),
    ],
)
def test_parameter_style_mapping(raw_connection: MagicMock, paramstyle: str, expected: ParameterStyle) -> None:
    assert DBAPIConnection(raw_connection, paramstyle).parameter_style is expected


def test_unknown_paramstyle(raw_connection: MagicMock) -> None:
    with pytest.raises(ValueError, match="pyformat"):
        DBAPIConnection(raw_connection, "pyformat")


def test_execute_update_passes_positional_tuple(raw_connection: MagicMock) -> None:
    statement = DBAPIConnection(raw_connection).prepare("UPDATE t SET a = ? WHERE b = ?")
    statement.set_parameter(2, "x")
    statement.set_parameter(1, 5, sql_type="INTEGER")

    assert statement.execute_update() == 1
    raw_connection.cursor.return_value.execute.assert_called_once_with("UPDATE t SET a = ? WHERE b = ?", (5, "x"))


def test_missing_position_raises(raw_connection: MagicMock) -> None:
    statement = DBAPIStatement(raw_connection, "SELECT ?, ?")
    statement.set_parameter(2, "x")

    with pytest.raises(IndexError, match=r"\[1\]"):
        statement.execute_query()


def test_positions_start_at_one(raw_connection: MagicMock) -> None:
    with pytest.raises(IndexError):
        DBAPIStatement(raw_connection, "SELECT ?").set_parameter(0, 1)


def test_batch_runs_each_row(raw_connection: MagicMock) -> None:
    cursor = raw_connection.cursor.return_value
    statement = DBAPIStatement(raw_connection, "INSERT INTO t VALUES (?)")
    for value in (1, 2):
        statement.set_parameter(1, value)
        statement.add_batch()

    assert statement.execute_batch() == [1, 1]
    assert cursor.execute.call_args_list == [call("INSERT INTO t VALUES (?)", (1,)), call("INSERT INTO t VALUES (?)", (2,))]
    assert statement.execute_batch() == []


def test_close_closes_all_cursors_and_reraises_first_error(raw_connection: MagicMock) -> None:
    first, second = MagicMock(), MagicMock()
    first.close.side_effect = RuntimeError("first")
    second.close.side_effect = RuntimeError("second")
    raw_connection.cursor.side_effect = [first, second]
    statement = DBAPIStatement(raw_connection, "SELECT 1")
    statement.execute_query()
    statement.execute_query()

    with pytest.raises(RuntimeError, match="first"):
        statement.close()

    second.close.assert_called_once_with()
    statement.close()


def test_connection_passthrough(raw_connection: MagicMock) -> None:
    connection = DBAPIConnection(raw_connection)

    connection.commit()
    connection.rollback()
    connection.close()

    assert [method_call[0] for method_call in raw_connection.method_calls] == ["commit", "rollback", "close"]

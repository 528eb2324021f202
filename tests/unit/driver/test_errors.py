"""Unit tests for driver error enrichment."""

import sqlite3

import pytest

from sqlbind.driver import handle_database_exceptions, wrap_driver_error
from sqlbind.exceptions import DriverError, UnknownParameterError
from sqlbind.parameters import BindingState, SQLType, parse_template
from tests.fakes import DriverFailure


def test_wrap_driver_error_message_and_context() -> None:
    template = parse_template("INSERT INTO t(a,b) VALUES(:x,:y)")
    bindings = BindingState(template)
    bindings.bind("x", 1)
    bindings.bind_null("y", SQLType.INTEGER)
    failure = DriverFailure("UNIQUE constraint failed", sqlstate="23000", errno=19)

    error = wrap_driver_error(failure, template, bindings)

    assert str(error) == "UNIQUE constraint failed Query: INSERT INTO t(a,b) VALUES(?,?) Parameters: x=1 y=None"
    assert error.template == "INSERT INTO t(a,b) VALUES(:x,:y)"
    assert error.parameters == {"x": 1, "y": None}
    assert error.sqlstate == "23000"
    assert error.error_code == 19
    assert error.driver_error is failure


def test_wrap_driver_error_without_bindings_or_message() -> None:
    template = parse_template("DELETE FROM t")

    error = wrap_driver_error(RuntimeError(), template)

    assert str(error) == "RuntimeError Query: DELETE FROM t Parameters:"
    assert error.parameters == {}
    assert error.sqlstate is None


def test_handle_database_exceptions_keeps_driver_category() -> None:
    template = parse_template("INSERT INTO t VALUES (:a)")

    with pytest.raises(DriverError) as exc_info, handle_database_exceptions(template):
        raise sqlite3.IntegrityError("NOT NULL constraint failed: t.a")

    assert isinstance(exc_info.value.driver_error, sqlite3.IntegrityError)
    assert exc_info.value.__cause__ is exc_info.value.driver_error


def test_handle_database_exceptions_passes_library_errors_through() -> None:
    template = parse_template("SELECT :a")
    original = UnknownParameterError("b")

    with pytest.raises(UnknownParameterError) as exc_info, handle_database_exceptions(template):
        raise original

    assert exc_info.value is original


def test_handle_database_exceptions_is_transparent_on_success() -> None:
    template = parse_template("SELECT 1")

    with handle_database_exceptions(template):
        value = 1

    assert value == 1

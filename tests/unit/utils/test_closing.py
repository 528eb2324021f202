"""Unit tests for the close/commit/rollback helpers."""

import logging
from unittest.mock import Mock

import pytest

from sqlbind.utils.closing import close, close_after_error, close_quietly, commit_and_close, rollback, rollback_and_close


def test_close_none_is_noop() -> None:
    close(None)


def test_close_propagates_errors() -> None:
    resource = Mock()
    resource.close.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        close(resource)


def test_close_quietly_closes_everything() -> None:
    failing = Mock()
    failing.close.side_effect = RuntimeError("boom")
    other = Mock()

    close_quietly(failing, None, other)

    failing.close.assert_called_once_with()
    other.close.assert_called_once_with()


def test_commit_and_close() -> None:
    connection = Mock()

    commit_and_close(connection)

    assert [method_call[0] for method_call in connection.method_calls] == ["commit", "close"]


def test_commit_failure_still_closes() -> None:
    connection = Mock()
    connection.commit.side_effect = RuntimeError("commit failed")

    with pytest.raises(RuntimeError, match="commit failed"):
        commit_and_close(connection)

    connection.close.assert_called_once_with()


def test_rollback_and_close() -> None:
    connection = Mock()
    connection.rollback.side_effect = RuntimeError("rollback failed")

    with pytest.raises(RuntimeError):
        rollback_and_close(connection)

    connection.close.assert_called_once_with()


def test_none_connections() -> None:
    commit_and_close(None)
    rollback(None)
    rollback_and_close(None)


def test_rollback() -> None:
    connection = Mock()

    rollback(connection)

    connection.rollback.assert_called_once_with()
    connection.close.assert_not_called()


def test_close_after_error_logs_and_suppresses(caplog: pytest.LogCaptureFixture) -> None:
    resource = Mock()
    resource.close.side_effect = RuntimeError("boom")

    with caplog.at_level(logging.WARNING, logger="sqlbind"):
        close_after_error(resource, "cursor")
    close_after_error(None)

    resource.close.assert_called_once_with()
    assert "Failed to release cursor after an error" in caplog.text

"""Prepared statement lifecycle.

A :class:`StatementHandle` owns one prepared statement and, optionally, the
connection that produced it. Every execute call releases both exactly once,
whatever the outcome.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from sqlbind.driver.errors import handle_database_exceptions
from sqlbind.exceptions import ImproperConfigurationError, StatementClosedError, UnboundParameterError
from sqlbind.parameters.tracker import BindingState
from sqlbind.protocols import SupportsClose
from sqlbind.utils.closing import close_after_error, close_quietly
from sqlbind.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from sqlbind.parameters.parser import ParsedTemplate
    from sqlbind.protocols import ConnectionProtocol

__all__ = ("StatementHandle",)

logger = get_logger("driver.statement")

T = TypeVar("T")


class StatementHandle:
    """Owns a prepared statement and enforces binding before execution.

    The statement is prepared on construction. :meth:`single_execute`,
    :meth:`execute_batch` and :meth:`query_execute` close it (and the
    connection, when ``owns_connection`` is set) on their way out, on success
    and on failure alike. :meth:`commit_batch_row` leaves it open.

    Single owner, single thread: the handle holds mutable binding state and
    takes no locks.
    """

    __slots__ = ("_closed", "_connection", "_pending_rows", "_statement", "bindings", "owns_connection", "template")

    def __init__(
        self,
        connection: "ConnectionProtocol",
        template: "ParsedTemplate",
        owns_connection: bool = False,
        bindings: Optional[BindingState] = None,
    ) -> None:
        self._connection = connection
        self.template = template
        self.owns_connection = owns_connection
        self.bindings = bindings if bindings is not None else BindingState(template)
        self._pending_rows = 0
        self._closed = False
        try:
            with handle_database_exceptions(template):
                self._statement = connection.prepare(template.sql)
        except BaseException:
            self._closed = True
            if owns_connection:
                close_after_error(connection, "connection")
            raise
        logger.debug("Prepared statement: %s", template.sql)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def connection(self) -> "ConnectionProtocol":
        return self._connection

    @property
    def pending_rows(self) -> int:
        """Rows committed to the batch and not yet executed."""
        return self._pending_rows

    def _ensure_open(self) -> None:
        if self._closed:
            msg = "Statement is closed"
            raise StatementClosedError(msg)

    def _validate(self) -> None:
        unbound = self.bindings.unbound_names()
        if unbound:
            raise UnboundParameterError(unbound, self.template.template)

    def _submit(self) -> None:
        for position, bound in self.bindings.ordered_values():
            self._statement.set_parameter(position, bound.value, bound.sql_type)

    @contextmanager
    def _released(self) -> Generator[None, None, None]:
        """Close on the way out of the block.

        On failure the original error propagates; an error raised while
        closing is logged instead of replacing it.
        """
        try:
            yield
        except BaseException:
            close_after_error(self, "statement")
            raise
        self.close()

    def single_execute(self) -> int:
        """Execute once and return the affected row count.

        Raises:
            UnboundParameterError: If any parameter is unbound; the driver is not called.
            DriverError: If the driver fails.
            StatementClosedError: If the handle was already released.
        """
        self._ensure_open()
        with self._released():
            self._validate()
            with handle_database_exceptions(self.template, self.bindings):
                self._submit()
                rows = self._statement.execute_update()
            log_with_context(logger, logging.DEBUG, "Executed statement", sql=self.template.sql, rows=rows)
            return rows

    def commit_batch_row(self) -> None:
        """Queue the bound values as one batch row and reset the bindings."""
        self._ensure_open()
        self._validate()
        with handle_database_exceptions(self.template, self.bindings):
            self._submit()
            self._statement.add_batch()
        self._pending_rows += 1
        self.bindings.reset()

    def execute_batch(self) -> "list[int]":
        """Execute every committed row; counts are returned in commit order."""
        self._ensure_open()
        with self._released():
            if self.bindings.bound_count:
                logger.warning(
                    "Discarding bound values not added to the batch: %s", sorted(self.bindings.snapshot())
                )
            with handle_database_exceptions(self.template, self.bindings):
                counts = list(self._statement.execute_batch())
            log_with_context(
                logger, logging.DEBUG, "Executed batch", sql=self.template.sql, batch_rows=self._pending_rows
            )
            self._pending_rows = 0
            return counts

    def query_execute(self, handler: "Optional[Callable[[Any], T]]") -> T:
        """Execute and hand the driver's result to ``handler``.

        The result is closed after the handler returns, then the statement.
        Exceptions raised by the handler itself are not translated.
        """
        self._ensure_open()
        with self._released():
            if handler is None:
                msg = "Null result handler"
                raise ImproperConfigurationError(msg)
            self._validate()
            with handle_database_exceptions(self.template, self.bindings):
                self._submit()
                result = self._statement.execute_query()  # type: ignore[attr-defined]
            try:
                value = handler(result)
            except BaseException:
                close_quietly(result if isinstance(result, SupportsClose) else None)
                raise
            if isinstance(result, SupportsClose):
                with handle_database_exceptions(self.template, self.bindings):
                    result.close()
            return value

    def close(self) -> None:
        """Release the statement, then the connection if owned. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self.bindings.reset()
        try:
            with handle_database_exceptions(self.template):
                self._statement.close()
        finally:
            if self.owns_connection:
                with handle_database_exceptions(self.template):
                    self._connection.close()
        logger.debug("Closed statement%s", " and connection" if self.owns_connection else "")

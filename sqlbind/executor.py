"""Named-parameter executors.

Example:
    >>> with UpdateExecutor(conn, "UPDATE users SET name = :name WHERE id = :id") as update:
    ...     rows = update.bind("name", "Ada").bind("id", 7).execute()

Executors are single-use and single-threaded. Each executor prepares exactly
one statement; running it releases the statement (and the connection when
``close_connection`` is set). The fluent ``bind`` chain mutates and returns
the same instance; it is not safe to share an executor between threads.
"""

from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from typing_extensions import Self

from sqlbind.driver.statement import StatementHandle
from sqlbind.exceptions import StatementClosedError
from sqlbind.parameters.config import ParameterStyleConfig, resolve_config
from sqlbind.parameters.parser import TemplateParser
from sqlbind.parameters.tracker import BindingState
from sqlbind.utils.closing import close_after_error

if TYPE_CHECKING:
    from types import TracebackType

    from sqlbind.parameters.parser import ParsedTemplate
    from sqlbind.protocols import ConnectionProtocol

__all__ = ("AbstractExecutor", "BatchExecutor", "QueryExecutor", "UpdateExecutor")

T = TypeVar("T")


class AbstractExecutor:
    """Shared binding surface for every executor.

    Args:
        connection: Connection used to prepare the statement.
        sql: Template using ``:name`` placeholders (or the configured prefix).
        close_connection: Close ``connection`` together with the statement.
        config: Parameter configuration. Defaults to the connection's
            ``parameter_style`` when it has one, ``qmark`` otherwise.
        parser: Parser to reuse, e.g. one shared by a :class:`~sqlbind.runner.QueryRunner`.
            Its configuration wins over ``config``.
    """

    __slots__ = ("_handle", "config")

    def __init__(
        self,
        connection: "ConnectionProtocol",
        sql: str,
        close_connection: bool = False,
        *,
        config: Optional[ParameterStyleConfig] = None,
        parser: Optional[TemplateParser] = None,
    ) -> None:
        try:
            if parser is None:
                parser = TemplateParser(resolve_config(config, connection))
            self.config = parser.config
            template = parser.parse(sql)
        except BaseException:
            if close_connection:
                close_after_error(connection, "connection")
            raise
        self._handle = StatementHandle(
            connection, template, close_connection, BindingState(template, self.config.default_null_type)
        )

    def _allow_rebind(self, allow_rebind: Optional[bool]) -> bool:
        return self.config.allow_rebind if allow_rebind is None else allow_rebind

    def _ensure_open(self) -> None:
        if self._handle.closed:
            msg = "Executor has already run and released its statement"
            raise StatementClosedError(msg)

    def bind(self, name: str, value: Any, allow_rebind: Optional[bool] = None) -> Self:
        """Bind ``value`` to every occurrence of ``name``.

        Args:
            name: Parameter name; ``"id"`` and ``":id"`` are equivalent.
            value: Value passed to the driver.
            allow_rebind: Replace an existing binding. Defaults to the config (strict).

        Returns:
            This executor, for chaining.
        """
        self._ensure_open()
        self._handle.bindings.bind(name, value, self._allow_rebind(allow_rebind))
        return self

    def bind_null(self, name: str, sql_type: Optional[Any] = None, allow_rebind: Optional[bool] = None) -> Self:
        """Bind a ``NULL`` tagged with ``sql_type`` to every occurrence of ``name``.

        ``sql_type`` defaults to ``SQLType.VARCHAR``, which most drivers accept;
        some need the column's real type.
        """
        self._ensure_open()
        self._handle.bindings.bind_null(name, sql_type, self._allow_rebind(allow_rebind))
        return self

    @property
    def template(self) -> "ParsedTemplate":
        return self._handle.template

    @property
    def sql(self) -> str:
        """The positional SQL sent to the driver."""
        return self._handle.template.sql

    @property
    def unbound_names(self) -> "tuple[str, ...]":
        return self._handle.bindings.unbound_names()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def close(self) -> None:
        """Release the statement without running it."""
        self._handle.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: "Optional[type[BaseException]]",
        exc_val: "Optional[BaseException]",
        exc_tb: "Optional[TracebackType]",
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self.sql!r}, unbound={list(self.unbound_names)})"


class UpdateExecutor(AbstractExecutor):
    """Runs a single INSERT, UPDATE, DELETE or DDL statement."""

    __slots__ = ()

    def execute(self) -> int:
        """Execute the statement and return the number of affected rows.

        Raises:
            UnboundParameterError: If a parameter is unbound.
            DriverError: If the driver fails.
        """
        self._ensure_open()
        return self._handle.single_execute()


class BatchExecutor(AbstractExecutor):
    """Runs one statement for many rows of bindings."""

    __slots__ = ()

    def add_row(self) -> Self:
        """Commit the current bindings as a batch row and start a fresh row.

        Raises:
            UnboundParameterError: If the row is incomplete. The statement stays open.
        """
        self._ensure_open()
        self._handle.commit_batch_row()
        return self

    add_batch = add_row

    @property
    def pending_rows(self) -> int:
        return self._handle.pending_rows

    def execute_batch(self) -> "list[int]":
        """Execute every committed row.

        Returns:
            Affected row counts, one per committed row, in commit order.
        """
        self._ensure_open()
        return self._handle.execute_batch()


class QueryExecutor(AbstractExecutor):
    """Runs a row-returning statement and hands the result to a handler."""

    __slots__ = ()

    def execute(self, handler: "Callable[[Any], T]") -> T:
        """Execute the query and return ``handler(result)``.

        The handler receives the driver's result handle (a cursor for DB-API
        connections) and must consume it before returning.
        """
        self._ensure_open()
        return self._handle.query_execute(handler)

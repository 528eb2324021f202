"""Executor factory bound to an explicit connection source."""

from typing import TYPE_CHECKING, Callable, Optional, TypeVar

from sqlbind.exceptions import ImproperConfigurationError
from sqlbind.executor import AbstractExecutor, BatchExecutor, QueryExecutor, UpdateExecutor
from sqlbind.parameters.config import ParameterStyleConfig
from sqlbind.parameters.parser import TemplateParser
from sqlbind.utils.closing import close_after_error
from sqlbind.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlbind.protocols import ConnectionProtocol

__all__ = ("QueryRunner",)

logger = get_logger("runner")

ExecutorT = TypeVar("ExecutorT", bound=AbstractExecutor)


class QueryRunner:
    """Creates executors that share one parser and one connection source.

    A runner holds no global state: callers create as many as they need, each
    with its own ``connection_factory`` and configuration.

    Args:
        connection_factory: Zero-argument callable returning a new connection.
            Executors built from it own the connection and close it.
        config: Parameter configuration shared by every executor.
    """

    __slots__ = ("connection_factory", "parser")

    def __init__(
        self,
        connection_factory: "Optional[Callable[[], ConnectionProtocol]]" = None,
        config: Optional[ParameterStyleConfig] = None,
    ) -> None:
        self.connection_factory = connection_factory
        self.parser = TemplateParser(config)

    @property
    def config(self) -> ParameterStyleConfig:
        return self.parser.config

    def _acquire(self) -> "ConnectionProtocol":
        if self.connection_factory is None:
            msg = "QueryRunner requires a connection factory to be invoked in this way, or a connection should be passed in"
            raise ImproperConfigurationError(msg)
        return self.connection_factory()

    def _create(
        self,
        executor_class: "type[ExecutorT]",
        sql: Optional[str],
        connection: "Optional[ConnectionProtocol]",
        close_connection: Optional[bool],
    ) -> ExecutorT:
        if connection is None:
            connection = self._acquire()
            owns = True if close_connection is None else close_connection
        else:
            owns = bool(close_connection)
        if sql is None:
            if owns:
                close_after_error(connection, "connection")
            msg = "Null SQL statement"
            raise ImproperConfigurationError(msg)
        logger.debug("Creating %s (owns connection: %s)", executor_class.__name__, owns)
        return executor_class(connection, sql, owns, parser=self.parser)

    def update(
        self,
        sql: Optional[str],
        connection: "Optional[ConnectionProtocol]" = None,
        close_connection: Optional[bool] = None,
    ) -> UpdateExecutor:
        """Create an :class:`UpdateExecutor`.

        Without ``connection`` a new one is taken from the factory and closed
        with the statement. With a caller connection it stays open unless
        ``close_connection`` is true.
        """
        return self._create(UpdateExecutor, sql, connection, close_connection)

    def batch(
        self,
        sql: Optional[str],
        connection: "Optional[ConnectionProtocol]" = None,
        close_connection: Optional[bool] = None,
    ) -> BatchExecutor:
        return self._create(BatchExecutor, sql, connection, close_connection)

    def query(
        self,
        sql: Optional[str],
        connection: "Optional[ConnectionProtocol]" = None,
        close_connection: Optional[bool] = None,
    ) -> QueryExecutor:
        return self._create(QueryExecutor, sql, connection, close_connection)

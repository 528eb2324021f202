"""sqlbind: named parameters, binding checks and guaranteed cleanup for SQL statements."""

from sqlbind import adapters, driver, exceptions, parameters, utils
from sqlbind.__metadata__ import __version__
from sqlbind.adapters import DBAPIConnection
from sqlbind.driver import StatementHandle
from sqlbind.exceptions import (
    AlreadyBoundError,
    DriverError,
    ImproperConfigurationError,
    ParseError,
    SQLBindError,
    SQLFileNotFoundError,
    SQLFileParseError,
    StatementClosedError,
    UnboundParameterError,
    UnknownParameterError,
)
from sqlbind.executor import AbstractExecutor, BatchExecutor, QueryExecutor, UpdateExecutor
from sqlbind.loader import QueryLoader
from sqlbind.parameters import (
    BindingState,
    ParameterStyle,
    ParameterStyleConfig,
    ParsedTemplate,
    SQLType,
    TemplateParser,
    parse_template,
)
from sqlbind.protocols import ConnectionProtocol, PreparedStatementProtocol, QueryStatementProtocol
from sqlbind.runner import QueryRunner

__all__ = (
    "AbstractExecutor",
    "AlreadyBoundError",
    "BatchExecutor",
    "BindingState",
    "ConnectionProtocol",
    "DBAPIConnection",
    "DriverError",
    "ImproperConfigurationError",
    "ParameterStyle",
    "ParameterStyleConfig",
    "ParseError",
    "ParsedTemplate",
    "PreparedStatementProtocol",
    "QueryExecutor",
    "QueryLoader",
    "QueryRunner",
    "QueryStatementProtocol",
    "SQLBindError",
    "SQLFileNotFoundError",
    "SQLFileParseError",
    "SQLType",
    "StatementClosedError",
    "StatementHandle",
    "TemplateParser",
    "UnboundParameterError",
    "UnknownParameterError",
    "UpdateExecutor",
    "__version__",
    "adapters",
    "driver",
    "exceptions",
    "parameters",
    "parse_template",
    "utils",
)

from collections.abc import Iterable, Mapping
from typing import Any, Optional

__all__ = (
    "AlreadyBoundError",
    "DriverError",
    "ImproperConfigurationError",
    "ParameterError",
    "ParseError",
    "SQLBindError",
    "SQLFileNotFoundError",
    "SQLFileParseError",
    "StatementClosedError",
    "UnboundParameterError",
    "UnknownParameterError",
)


class SQLBindError(Exception):
    """Base exception class from which all sqlbind exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLBindError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(SQLBindError):
    """Improper Configuration error.

    Raised when a config object, runner or executor is constructed or invoked
    with settings that cannot work.
    """


class StatementClosedError(SQLBindError):
    """Raised when a statement is used after it has been released."""


# -- SQL Parameter Errors --
class ParameterError(SQLBindError):
    """Base class for parameter-related errors."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional SQL context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class ParseError(ParameterError):
    """Raised when a template holds a parameter prefix with no name after it."""

    position: Optional[int]

    def __init__(self, message: str, sql: Optional[str] = None, position: Optional[int] = None) -> None:
        super().__init__(message, sql)
        self.position = position


class UnknownParameterError(ParameterError):
    """Raised when binding a name that does not appear in the template."""

    name: str

    def __init__(self, name: str, sql: Optional[str] = None) -> None:
        super().__init__(f"{name} is not found in the SQL statement", sql)
        self.name = name


class AlreadyBoundError(ParameterError):
    """Raised when a parameter is bound twice without permission to rebind."""

    name: str

    def __init__(self, name: str, sql: Optional[str] = None) -> None:
        super().__init__(f"{name} is already bound", sql)
        self.name = name


class UnboundParameterError(ParameterError):
    """Raised when execution is attempted while parameters remain unbound."""

    names: "tuple[str, ...]"

    def __init__(self, names: "Iterable[str]", sql: Optional[str] = None) -> None:
        self.names = tuple(names)
        super().__init__(f"There are unbound parameters: {', '.join(self.names)}", sql)


# -- Driver Errors --
class DriverError(SQLBindError):
    """A failure reported by the underlying connection or statement.

    The original driver exception is chained as ``__cause__`` and left
    unclassified: callers that need the driver's own category (integrity
    violation, lost connection, ...) inspect :attr:`driver_error`.
    """

    sql: Optional[str]
    template: Optional[str]
    parameters: "dict[str, Any]"
    sqlstate: Optional[str]
    error_code: Optional[Any]

    def __init__(
        self,
        message: str,
        sql: Optional[str] = None,
        template: Optional[str] = None,
        parameters: "Optional[Mapping[str, Any]]" = None,
        sqlstate: Optional[str] = None,
        error_code: Optional[Any] = None,
    ) -> None:
        super().__init__(detail=message)
        self.sql = sql
        self.template = template
        self.parameters = dict(parameters or {})
        self.sqlstate = sqlstate
        self.error_code = error_code

    @property
    def driver_error(self) -> Optional[BaseException]:
        """The exception raised by the driver, if any."""
        return self.__cause__


# -- SQL File Errors --
class SQLFileNotFoundError(SQLBindError):
    """Raised when a named query file does not exist."""

    path: str

    def __init__(self, path: str) -> None:
        super().__init__(f"SQL file not found: {path}")
        self.path = path


class SQLFileParseError(SQLBindError):
    """Raised when a named query file cannot be split into named statements."""

    path: str

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"Failed to parse SQL file {path}: {message}")
        self.path = path

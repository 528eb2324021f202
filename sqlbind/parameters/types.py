"""Core parameter types used throughout sqlbind."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Optional

__all__ = (
    "POSITIONAL_MARKERS",
    "BoundValue",
    "ParameterStyle",
    "SQLType",
)


class ParameterStyle(str, Enum):
    """Positional parameter styles a prepared statement can be rewritten to."""

    QMARK = "qmark"
    NUMERIC = "numeric"
    POSITIONAL_COLON = "positional_colon"
    POSITIONAL_PYFORMAT = "format"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value

    def marker(self, position: int) -> str:
        """Render the driver's placeholder for a 1-based position."""
        return POSITIONAL_MARKERS[self].format(position=position)


POSITIONAL_MARKERS: Final["dict[ParameterStyle, str]"] = {
    ParameterStyle.QMARK: "?",
    ParameterStyle.NUMERIC: "${position}",
    ParameterStyle.POSITIONAL_COLON: ":{position}",
    ParameterStyle.POSITIONAL_PYFORMAT: "%s",
}


class SQLType(str, Enum):
    """Declared database types used to tag typed ``NULL`` bindings.

    Drivers that cannot infer the type of an untyped ``NULL`` use the tag to
    pick the wire type. The names follow the generic SQL type codes shared by
    most drivers.
    """

    ARRAY = "ARRAY"
    BIGINT = "BIGINT"
    BINARY = "BINARY"
    BLOB = "BLOB"
    BOOLEAN = "BOOLEAN"
    CHAR = "CHAR"
    CLOB = "CLOB"
    DATE = "DATE"
    DECIMAL = "DECIMAL"
    DOUBLE = "DOUBLE"
    FLOAT = "FLOAT"
    INTEGER = "INTEGER"
    JSON = "JSON"
    NULL = "NULL"
    NUMERIC = "NUMERIC"
    OTHER = "OTHER"
    REAL = "REAL"
    SMALLINT = "SMALLINT"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    VARBINARY = "VARBINARY"
    VARCHAR = "VARCHAR"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BoundValue:
    """A value bound to one parameter position.

    ``sql_type`` is only set for typed nulls; ordinary values leave the type to
    the driver.
    """

    value: Any
    sql_type: Optional[Any] = None
    is_null: bool = False

    @classmethod
    def null(cls, sql_type: Any) -> "BoundValue":
        return cls(None, sql_type, True)

    def __str__(self) -> str:
        if self.is_null:
            return f"NULL[{self.sql_type}]"
        return repr(self.value)

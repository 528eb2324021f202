"""Runtime-checkable protocols for the database objects sqlbind drives.

Any object that implements these methods can be handed to an executor; no
registration or wrapping step is involved.
"""

from collections.abc import Sequence
from typing import Any, Optional, Protocol, runtime_checkable

__all__ = (
    "ConnectionProtocol",
    "PreparedStatementProtocol",
    "QueryStatementProtocol",
    "SupportsClose",
)


@runtime_checkable
class SupportsClose(Protocol):
    """Protocol for anything that releases a resource on ``close()``."""

    def close(self) -> None:
        """Release the resource."""
        ...


@runtime_checkable
class PreparedStatementProtocol(Protocol):
    """A statement prepared against positional SQL."""

    def set_parameter(self, position: int, value: Any, sql_type: Optional[Any] = None) -> None:
        """Set the value of a 1-based position; ``sql_type`` is only given for typed nulls."""
        ...

    def execute_update(self) -> int:
        """Execute with the current parameters and return the affected row count."""
        ...

    def add_batch(self) -> None:
        """Queue the current parameters as one batch row."""
        ...

    def execute_batch(self) -> Sequence[int]:
        """Execute every queued row and return one affected row count per row."""
        ...

    def close(self) -> None:
        """Release the statement."""
        ...


@runtime_checkable
class QueryStatementProtocol(PreparedStatementProtocol, Protocol):
    """A prepared statement that can also return rows."""

    def execute_query(self) -> Any:
        """Execute and return a result handle for a row handler to consume."""
        ...


@runtime_checkable
class ConnectionProtocol(Protocol):
    """A connection able to prepare statements."""

    def prepare(self, sql: str) -> PreparedStatementProtocol:
        """Prepare ``sql``, which uses the connection's positional markers."""
        ...

    def close(self) -> None:
        """Release the connection."""
        ...

"""Statement lifecycle and driver error handling."""

from sqlbind.driver.errors import handle_database_exceptions, wrap_driver_error
from sqlbind.driver.statement import StatementHandle

__all__ = ("StatementHandle", "handle_database_exceptions", "wrap_driver_error")

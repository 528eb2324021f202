"""Enrichment of driver failures with statement context."""

from collections.abc import Generator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Final, Optional

from sqlbind.exceptions import DriverError, SQLBindError

if TYPE_CHECKING:
    from sqlbind.parameters.parser import ParsedTemplate
    from sqlbind.parameters.tracker import BindingState

__all__ = ("format_parameters", "handle_database_exceptions", "wrap_driver_error")

# attribute names drivers use for the SQLSTATE and the vendor error code
_SQLSTATE_ATTRIBUTES: Final = ("sqlstate", "pgcode", "sqlstate_code")
_ERROR_CODE_ATTRIBUTES: Final = ("errno", "error_code", "sqlite_errorcode", "code")


def _first_attribute(error: BaseException, names: "tuple[str, ...]") -> Any:
    for name in names:
        value = getattr(error, name, None)
        if value is not None:
            return value
    return None


def format_parameters(parameters: "Mapping[str, Any]") -> str:
    return " ".join(f"{name}={value!r}" for name, value in parameters.items())


def wrap_driver_error(
    error: BaseException, template: "ParsedTemplate", bindings: "Optional[BindingState]" = None
) -> DriverError:
    """Build a :class:`DriverError` describing ``error``.

    The message carries the driver's own text followed by the positional SQL
    and the bound values by name. The driver exception is attached as the
    cause; its type is left untouched for callers that branch on it.

    Args:
        error: The exception raised by the driver.
        template: The statement's parsed template.
        bindings: The binding state at the moment of failure, if any.

    Returns:
        The enriched error, ready to be raised ``from error``.
    """
    parameters = bindings.snapshot() if bindings is not None else {}
    message = f"{str(error) or type(error).__name__} Query: {template.sql} Parameters: {format_parameters(parameters)}"
    wrapped = DriverError(
        message.rstrip(),
        sql=template.sql,
        template=template.template,
        parameters=parameters,
        sqlstate=_first_attribute(error, _SQLSTATE_ATTRIBUTES),
        error_code=_first_attribute(error, _ERROR_CODE_ATTRIBUTES),
    )
    wrapped.__cause__ = error
    return wrapped


@contextmanager
def handle_database_exceptions(
    template: "ParsedTemplate", bindings: "Optional[BindingState]" = None
) -> Generator[None, None, None]:
    """Translate driver failures raised inside the block into :class:`DriverError`.

    sqlbind's own errors pass through unchanged. Nothing is suppressed.
    """
    try:
        yield
    except SQLBindError:
        raise
    except Exception as exc:
        raise wrap_driver_error(exc, template, bindings) from exc

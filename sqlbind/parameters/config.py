"""Parameter configuration for named templates."""

from typing import Any, Optional

from sqlbind.exceptions import ImproperConfigurationError
from sqlbind.parameters.types import ParameterStyle, SQLType

__all__ = ("DEFAULT_PREFIX", "ParameterStyleConfig", "resolve_config")

DEFAULT_PREFIX = ":"

_FORBIDDEN_PREFIXES = frozenset("'\"-/$%")


class ParameterStyleConfig:
    """Declarative configuration for named parameter handling."""

    __slots__ = ("allow_rebind", "backslash_escapes", "default_null_type", "execution_parameter_style", "prefix")

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        execution_parameter_style: ParameterStyle = ParameterStyle.QMARK,
        default_null_type: Any = SQLType.VARCHAR,
        allow_rebind: bool = False,
        backslash_escapes: bool = False,
    ) -> None:
        """Initialize parameter configuration.

        Args:
            prefix: Single character that introduces a named parameter.
            execution_parameter_style: Positional style the driver expects.
            default_null_type: Type tag used by ``bind_null`` when the caller gives none.
                ``VARCHAR`` works with most drivers but some reject it for non-text columns.
            allow_rebind: Whether binding an already bound name replaces the value
                instead of raising.
            backslash_escapes: Treat ``\\`` as an escape character inside quoted
                text, as MySQL does by default. Standard SQL, SQLite and PostgreSQL
                only escape a quote by doubling it, so this is off by default.

        Raises:
            ImproperConfigurationError: If the prefix cannot be told apart from SQL text.
        """
        if len(prefix) != 1 or prefix.isalnum() or prefix == "_" or prefix.isspace() or prefix in _FORBIDDEN_PREFIXES:
            msg = f"Invalid parameter prefix {prefix!r}: expected a single punctuation character"
            raise ImproperConfigurationError(msg)
        self.prefix = prefix
        self.execution_parameter_style = ParameterStyle(execution_parameter_style)
        self.default_null_type = default_null_type
        self.allow_rebind = allow_rebind
        self.backslash_escapes = backslash_escapes

    def hash(self) -> int:
        """Hash of the settings that change parser output.

        Configs with equal hashes produce identical templates, so
        :func:`~sqlbind.parameters.parser.parse_template` shares one parser
        between them.
        """
        return hash((self.prefix, self.execution_parameter_style.value, self.backslash_escapes))

    def replace(self, **changes: Any) -> "ParameterStyleConfig":
        """Return a copy with the given fields replaced."""
        values = {name: getattr(self, name) for name in self.__slots__}
        values.update(changes)
        return ParameterStyleConfig(**values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterStyleConfig):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__slots__)
        return f"{type(self).__name__}({fields})"


def resolve_config(config: Optional[ParameterStyleConfig], connection: Any = None) -> ParameterStyleConfig:
    """Pick the effective configuration for a connection.

    An explicit config wins; otherwise a connection that advertises a
    ``parameter_style`` attribute decides the execution style.
    """
    if config is not None:
        return config
    style = getattr(connection, "parameter_style", None)
    if isinstance(style, (ParameterStyle, str)):
        return ParameterStyleConfig(execution_parameter_style=ParameterStyle(style))
    return ParameterStyleConfig()

"""Named parameter parsing, configuration and binding state."""

from sqlbind.parameters.config import DEFAULT_PREFIX, ParameterStyleConfig, resolve_config
from sqlbind.parameters.parser import ParsedTemplate, TemplateParser, parse_template
from sqlbind.parameters.tracker import BindingState
from sqlbind.parameters.types import BoundValue, ParameterStyle, SQLType

__all__ = (
    "DEFAULT_PREFIX",
    "BindingState",
    "BoundValue",
    "ParameterStyle",
    "ParameterStyleConfig",
    "ParsedTemplate",
    "SQLType",
    "TemplateParser",
    "parse_template",
    "resolve_config",
)

"""Named template parsing.

Rewrites ``:name`` placeholders into the driver's positional markers with a
single left-to-right regular expression scan. Quoted strings, dollar-quoted
bodies and comments are matched first and copied through whole, so a prefix
character inside them is never read as a parameter.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Optional

from mypy_extensions import mypyc_attr

from sqlbind.exceptions import ParseError, UnknownParameterError
from sqlbind.parameters.config import ParameterStyleConfig
from sqlbind.parameters.types import ParameterStyle
from sqlbind.utils.logging import get_logger

__all__ = ("ParsedTemplate", "TemplateParser", "parse_template")

logger = get_logger("parameters.parser")

_IDENTIFIER: Final = r"[A-Za-z_][A-Za-z0-9_]*"

# Quote bodies: doubling always escapes a quote; backslash only when configured.
_QUOTE_BODIES: Final = {
    False: (r'(?:[^"]|"")*', r"(?:[^']|'')*"),
    True: (r'(?:[^"\\]|\\.|"")*', r"(?:[^'\\]|\\.|'')*"),
}

# Literals and comments come first; everything after them only sees plain SQL text.
_PATTERN_TEMPLATE: Final = r"""
    (?P<dquote>"{dquote_body}") |
    (?P<squote>'{squote_body}') |
    (?P<dollar_quoted>\$(?P<dollar_tag>(?:[A-Za-z_]\w*)?)\$[\s\S]*?\$(?P=dollar_tag)\$) |
    (?P<line_comment>--[^\r\n]*) |
    (?P<block_comment>/\*(?:[^*]|\*(?!/))*\*/) |
    (?P<double_prefix>{prefix}{prefix}[A-Za-z0-9_]*) |
    (?P<named>{prefix}(?P<name>{identifier})) |
    (?P<bare_prefix>{prefix})
"""


@dataclass(frozen=True)
class ParsedTemplate:
    """Immutable result of rewriting a named template.

    Attributes:
        template: The SQL text as written by the caller.
        sql: The SQL text with every named parameter replaced by a positional marker.
        positions: Parameter name to the 1-based positions it occupies, in order.
        style: The positional style used for ``sql``.
        prefix: The character that introduced parameter names in ``template``.
    """

    template: str
    sql: str
    positions: "MappingProxyType[str, tuple[int, ...]]"
    style: ParameterStyle = ParameterStyle.QMARK
    prefix: str = ":"

    @property
    def parameter_count(self) -> int:
        return sum(len(indices) for indices in self.positions.values())

    @property
    def names(self) -> "tuple[str, ...]":
        """Parameter names in order of first appearance."""
        return tuple(self.positions)

    def normalize_name(self, name: str) -> str:
        """Accept both ``name`` and ``:name``."""
        if name.startswith(self.prefix):
            return name[len(self.prefix) :]
        return name

    def positions_of(self, name: str) -> "tuple[int, ...]":
        """Return the positions bound by ``name``.

        Raises:
            UnknownParameterError: If the template has no parameter called ``name``.
        """
        key = self.normalize_name(name)
        try:
            return self.positions[key]
        except KeyError:
            raise UnknownParameterError(key, self.template) from None

    def name_at(self, position: int) -> str:
        for name, indices in self.positions.items():
            if position in indices:
                return name
        msg = f"Position {position} is outside 1..{self.parameter_count}"
        raise IndexError(msg)


@mypyc_attr(allow_interpreted_subclasses=False)
class TemplateParser:
    """Parses named templates and caches the result per template text.

    One parser is bound to one :class:`ParameterStyleConfig`; the cache is
    local to the instance.
    """

    __slots__ = ("_cache", "_pattern", "config")

    DEFAULT_CACHE_SIZE: Final[int] = 1000

    def __init__(self, config: Optional[ParameterStyleConfig] = None) -> None:
        self.config = config or ParameterStyleConfig()
        dquote_body, squote_body = _QUOTE_BODIES[bool(self.config.backslash_escapes)]
        self._pattern = re.compile(
            _PATTERN_TEMPLATE.format(
                prefix=re.escape(self.config.prefix),
                identifier=_IDENTIFIER,
                dquote_body=dquote_body,
                squote_body=squote_body,
            ),
            re.VERBOSE,
        )
        self._cache: dict[str, ParsedTemplate] = {}

    def parse(self, template: str) -> ParsedTemplate:
        """Rewrite ``template`` into positional SQL.

        Args:
            template: SQL text using ``<prefix><name>`` placeholders.

        Raises:
            ParseError: If a prefix character is not followed by a parameter name.

        Returns:
            The parsed template.
        """
        cached = self._cache.get(template)
        if cached is not None:
            return cached

        style = self.config.execution_parameter_style
        # format-style drivers read every bare "%" as a marker
        escape_percent = style is ParameterStyle.POSITIONAL_PYFORMAT
        parts: list[str] = []
        positions: dict[str, list[int]] = {}
        count = 0
        last = 0

        def copy(text: str) -> None:
            parts.append(text.replace("%", "%%") if escape_percent else text)

        for match in self._pattern.finditer(template):
            copy(template[last : match.start()])
            last = match.end()
            if match.group("bare_prefix") is not None:
                msg = (
                    f"Parameter prefix {self.config.prefix!r} at offset {match.start()} "
                    "is not followed by a parameter name"
                )
                raise ParseError(msg, template, match.start())
            name = match.group("name")
            if name is None:
                copy(match.group(0))
                continue
            count += 1
            positions.setdefault(name, []).append(count)
            parts.append(style.marker(count))
        copy(template[last:])

        parsed = ParsedTemplate(
            template=template,
            sql="".join(parts),
            positions=MappingProxyType({name: tuple(indices) for name, indices in positions.items()}),
            style=style,
            prefix=self.config.prefix,
        )
        logger.debug("Parsed template with %d parameter(s): %s", count, parsed.sql)
        if len(self._cache) < self.DEFAULT_CACHE_SIZE:
            self._cache[template] = parsed
        return parsed

    def clear_cache(self) -> None:
        self._cache.clear()


_shared_parsers: "dict[int, TemplateParser]" = {}


def parse_template(template: str, config: Optional[ParameterStyleConfig] = None) -> ParsedTemplate:
    """Parse ``template`` with a parser shared by every config of equal :meth:`~ParameterStyleConfig.hash`."""
    config = config or ParameterStyleConfig()
    parser = _shared_parsers.get(config.hash())
    if parser is None:
        parser = _shared_parsers.setdefault(config.hash(), TemplateParser(config))
    return parser.parse(template)

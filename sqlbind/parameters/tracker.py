"""Per-statement record of bound parameter values."""

from typing import Any, Optional

from mypy_extensions import mypyc_attr

from sqlbind.exceptions import AlreadyBoundError
from sqlbind.parameters.parser import ParsedTemplate
from sqlbind.parameters.types import BoundValue, SQLType

__all__ = ("BindingState",)


@mypyc_attr(allow_interpreted_subclasses=False)
class BindingState:
    """Tracks which positions of a parsed template hold a value.

    Binding a name fans the value out to every position the name occupies.
    The position map itself belongs to the template and is never modified;
    :meth:`reset` only forgets values.

    Not thread safe: one instance belongs to one statement attempt.
    """

    __slots__ = ("bound_positions", "default_null_type", "template", "values")

    def __init__(self, template: ParsedTemplate, default_null_type: Any = SQLType.VARCHAR) -> None:
        self.template = template
        self.default_null_type = default_null_type
        self.bound_positions: set[int] = set()
        self.values: dict[int, BoundValue] = {}

    def bind(self, name: str, value: Any, allow_rebind: bool = False) -> None:
        """Bind ``value`` to every position of ``name``.

        Args:
            name: Parameter name, with or without the prefix character.
            value: Value handed to the driver.
            allow_rebind: Replace an existing binding instead of raising.

        Raises:
            UnknownParameterError: If the template has no such parameter.
            AlreadyBoundError: If the name is bound and ``allow_rebind`` is false.
        """
        self._store(name, BoundValue(value), allow_rebind)

    def bind_null(self, name: str, sql_type: Optional[Any] = None, allow_rebind: bool = False) -> None:
        """Bind a typed ``NULL`` to every position of ``name``.

        Without ``sql_type`` the tracker's default type tag (``VARCHAR`` unless
        configured otherwise) is used. Some drivers reject a ``VARCHAR`` null
        for non-text columns; pass the column's type for those.
        """
        self._store(name, BoundValue.null(sql_type if sql_type is not None else self.default_null_type), allow_rebind)

    def _store(self, name: str, bound: BoundValue, allow_rebind: bool) -> None:
        positions = self.template.positions_of(name)
        if not allow_rebind and not self.bound_positions.isdisjoint(positions):
            raise AlreadyBoundError(self.template.normalize_name(name), self.template.template)
        for position in positions:
            self.values[position] = bound
        self.bound_positions.update(positions)

    def is_bound(self, name: str) -> bool:
        return self.bound_positions.issuperset(self.template.positions_of(name))

    def unbound_names(self) -> "tuple[str, ...]":
        """Names with at least one unbound position, in template order."""
        return tuple(
            name
            for name, positions in self.template.positions.items()
            if not self.bound_positions.issuperset(positions)
        )

    @property
    def bound_count(self) -> int:
        return len(self.bound_positions)

    def ordered_values(self) -> "list[tuple[int, BoundValue]]":
        """Bound values as ``(position, value)`` pairs sorted by position."""
        return sorted(self.values.items())

    def snapshot(self) -> "dict[str, Any]":
        """Bound values keyed by parameter name; typed nulls appear as ``None``."""
        return {
            name: self.values[positions[0]].value
            for name, positions in self.template.positions.items()
            if positions[0] in self.values
        }

    def reset(self) -> None:
        """Forget every bound value. The template's position map is kept."""
        self.bound_positions.clear()
        self.values.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(bound={sorted(self.bound_positions)}, unbound={list(self.unbound_names())})"

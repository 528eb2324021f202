"""Unit tests for BindingState."""

import pytest

from sqlbind.exceptions import AlreadyBoundError, UnknownParameterError
from sqlbind.parameters import BindingState, BoundValue, SQLType, parse_template


@pytest.fixture
def state() -> BindingState:
    return BindingState(parse_template("SELECT * FROM t WHERE a = :p OR b = :q OR c = :p"))


def test_bind_fans_out_to_every_position(state: BindingState) -> None:
    state.bind("p", 42)

    assert state.bound_positions == {1, 3}
    assert state.values[1] == state.values[3] == BoundValue(42)
    assert state.unbound_names() == ("q",)


def test_bind_accepts_prefixed_name(state: BindingState) -> None:
    state.bind(":q", "x")

    assert state.is_bound("q")
    assert not state.is_bound("p")


def test_unknown_name(state: BindingState) -> None:
    with pytest.raises(UnknownParameterError) as exc_info:
        state.bind("missing", 1)

    assert exc_info.value.name == "missing"
    assert state.bound_count == 0


def test_strict_rebind_is_rejected(state: BindingState) -> None:
    state.bind("p", 1)

    with pytest.raises(AlreadyBoundError) as exc_info:
        state.bind("p", 2)

    assert exc_info.value.name == "p"
    assert state.values[1].value == 1


def test_rebind_with_permission_replaces_value(state: BindingState) -> None:
    state.bind("p", 1)
    state.bind("p", 2, allow_rebind=True)

    assert state.values[1].value == 2
    assert state.values[3].value == 2


def test_bind_null_uses_declared_type(state: BindingState) -> None:
    state.bind_null("p", SQLType.INTEGER)

    assert state.values[1] == BoundValue(None, SQLType.INTEGER, True)
    assert state.values[3].is_null


def test_bind_null_defaults_to_varchar(state: BindingState) -> None:
    state.bind_null("q")

    assert state.values[2].sql_type is SQLType.VARCHAR


def test_bind_null_respects_configured_default() -> None:
    state = BindingState(parse_template("SELECT :a"), default_null_type=SQLType.NULL)

    state.bind_null("a")

    assert state.values[1].sql_type is SQLType.NULL


def test_bind_null_is_strict_too(state: BindingState) -> None:
    state.bind("p", 1)

    with pytest.raises(AlreadyBoundError):
        state.bind_null("p")


def test_reset_keeps_position_map(state: BindingState) -> None:
    positions = dict(state.template.positions)
    state.bind("p", 1)
    state.bind("q", 2)

    state.reset()

    assert state.bound_count == 0
    assert state.values == {}
    assert dict(state.template.positions) == positions
    assert state.unbound_names() == ("p", "q")
    state.bind("p", 3)
    assert state.values[1].value == 3


def test_ordered_values_and_snapshot(state: BindingState) -> None:
    state.bind("q", "b")
    state.bind_null("p", SQLType.INTEGER)

    assert [position for position, _ in state.ordered_values()] == [1, 2, 3]
    assert state.snapshot() == {"p": None, "q": "b"}


def test_template_without_parameters_is_fully_bound() -> None:
    state = BindingState(parse_template("SELECT 1"))

    assert state.unbound_names() == ()
    assert state.ordered_values() == []

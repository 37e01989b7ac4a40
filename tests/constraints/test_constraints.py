"""
Tests for the constraint data model - coercion, leaf predicates and combinators.

Raw specification values are coerced into constraint objects:
- Classes become type tests, literals become equality tests
- ``range`` objects and compiled patterns become range/pattern tests
- Any other callable is used as a predicate
- Lists and dicts become destructuring ``ListOf``/``MapOf`` constraints
"""
from __future__ import annotations

import operator
import re

import pytest

from clause.constraints import (
    MISSING,
    Absent,
    And,
    Atom,
    Block,
    Executable,
    ListOf,
    MapOf,
    Maybe,
    Not,
    Or,
    Returns,
    Splat,
    Test,
    Xor,
    as_constraint,
)
from clause.constraints.predicates import ExactValue, Range, TypeTag, UserFunction
from clause.exceptions import MalformedContractError


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def test_raw_values_are_coerced_to_matching_constraint_kinds():
    assert isinstance(as_constraint(int), Atom)
    assert isinstance(as_constraint(int).predicate, TypeTag)
    assert isinstance(as_constraint(42).predicate, ExactValue)
    assert isinstance(as_constraint(range(0, 5)).predicate, Range)
    assert isinstance(as_constraint(callable).predicate, UserFunction)
    assert isinstance(as_constraint([int]), ListOf)
    assert isinstance(as_constraint((int, str)), ListOf)
    assert isinstance(as_constraint({"a": int}), MapOf)


def test_existing_constraint_is_returned_unchanged():
    constraint = Maybe(int)
    assert as_constraint(constraint) is constraint


def test_bare_parameterless_constraint_classes_are_instantiated():
    assert isinstance(as_constraint(Absent), Absent)
    assert isinstance(as_constraint(Executable), Executable)
    assert not as_constraint(Executable).parameterized


@pytest.mark.parametrize("bare", [Splat, Returns])
def test_bare_splat_and_returns_are_malformed(bare):
    with pytest.raises(MalformedContractError, match="please supply a parameter"):
        as_constraint(bare)


def test_bare_class_requiring_parameters_is_malformed():
    with pytest.raises(MalformedContractError, match="requires parameters"):
        as_constraint(Not)


# ---------------------------------------------------------------------------
# Leaf predicates
# ---------------------------------------------------------------------------


def test_type_tag_uses_isinstance():
    constraint = as_constraint(int)
    assert constraint.test(3)
    assert not constraint.test("3")
    assert not constraint.test(MISSING)


def test_exact_value_never_confuses_booleans_and_numbers():
    assert as_constraint(1).test(1)
    assert not as_constraint(1).test(True)
    assert not as_constraint(True).test(1)
    assert as_constraint(None).test(None)
    assert not as_constraint(None).test(MISSING)


def test_range_object_is_end_exclusive():
    constraint = as_constraint(range(0, 5))
    assert constraint.test(0)
    assert constraint.test(4)
    assert not constraint.test(5)
    assert not constraint.test("3")
    assert constraint.describe() == "(0...5)"


def test_range_object_only_contains_integers():
    constraint = as_constraint(range(0, 5))
    assert not constraint.test(2.5)
    assert constraint.test(2)
    # explicit bounds still compare any orderable value
    assert Atom(Range(0, 5)).test(2.5)


def test_stepped_range_uses_membership():
    constraint = as_constraint(range(0, 10, 2))
    assert constraint.test(4)
    assert not constraint.test(3)


def test_inclusive_range_predicate():
    constraint = Atom(Range(1, 3))
    assert constraint.test(3)
    assert constraint.describe() == "(1..3)"


def test_pattern_only_matches_strings():
    constraint = as_constraint(re.compile(r"^/tmp/"))
    assert constraint.test("/tmp/file")
    assert not constraint.test("/etc/passwd")
    assert not constraint.test(42)
    assert constraint.describe() == "/^/tmp//"


def test_user_function_truthiness():
    constraint = as_constraint(lambda value: value % 2 == 0)
    assert constraint.test(4)
    assert not constraint.test(3)


def test_raising_predicate_is_a_non_match():
    constraint = as_constraint(lambda value: 1 / 0)
    assert constraint.test(1) is False


# ---------------------------------------------------------------------------
# Test (message sending)
# ---------------------------------------------------------------------------


def test_operator_symbols():
    assert Test(">", 1).test(2)
    assert not Test(">", 1).test(1)
    assert Test("<=", 3).test(3)


def test_named_method_is_called_on_the_value():
    constraint = Test("startswith", "/tmp")
    assert constraint.test("/tmp/x")
    assert not constraint.test("/var/x")
    # ints have no startswith; treated as a non-match
    assert not constraint.test(3)


def test_callable_method_receives_value_first():
    assert Test(operator.contains, "x").test("xyz")
    assert Test(">", 1).describe() == "Test['>', 1]"


def test_incomparable_values_do_not_raise():
    assert Test(">", 1).test("a") is False


# ---------------------------------------------------------------------------
# Logical combinators
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("value", [-3, 0, 4, "x", None, 2.5])
def test_combinators_agree_with_boolean_logic(value):
    x, y = as_constraint(int), Test(">", 0)
    assert And(int, Test(">", 0)).test(value) == (x.test(value) and y.test(value))
    assert Or(int, Test(">", 0)).test(value) == (x.test(value) or y.test(value))
    assert Xor(int, Test(">", 0)).test(value) == (x.test(value) != y.test(value))
    assert Not(int).test(value) == (not x.test(value))


def test_or_of_literals():
    constraint = Or(0, 1)
    assert constraint.test(0)
    assert constraint.test(1)
    assert not constraint.test(2)
    assert constraint.describe() == "Or[0, 1]"


def test_combinators_destructure_nested_lists():
    constraint = Or([int, int], str)
    assert constraint.test([1, 2])
    assert not constraint.test([1, "2"])
    assert constraint.test("x")


def test_combinator_needs_two_members():
    with pytest.raises(MalformedContractError, match="at least two"):
        And(int)


def test_not_refuses_parameterized_executable():
    with pytest.raises(MalformedContractError, match="Not"):
        Not(Executable(int))
    # An unparameterized executable can be negated.
    assert Not(Executable()).test(3)


@pytest.mark.parametrize(
    "inner",
    [
        lambda: Maybe(Executable(int)),
        lambda: Or(Executable(int), str),
        lambda: And(Maybe(Executable(returns=int)), object),
        lambda: [Executable(int)],
        lambda: {"callback": Executable(int)},
    ],
)
def test_not_refuses_executable_contracts_nested_below_it(inner):
    with pytest.raises(MalformedContractError, match="`Not` cannot wrap"):
        Not(inner())


def test_not_accepts_unparameterized_executables_nested_below_it():
    assert Not(Or(Executable(), str)).test(3)


def test_maybe_accepts_none_and_absence():
    constraint = Maybe(int)
    assert constraint.test(None)
    assert constraint.test(MISSING)
    assert constraint.test(3)
    assert not constraint.test("3")
    assert constraint.optional


def test_absent_only_matches_missing():
    assert Absent().test(MISSING)
    assert not Absent().test(None)


def test_optionality_propagates_through_combinators():
    assert And(Absent, Absent).optional
    assert not And(Absent, int).optional
    assert Or(True, Absent).optional
    assert Xor(int, Maybe(str)).optional
    assert not Or(int, str).optional
    assert Splat(int).optional
    assert not as_constraint(int).optional


# ---------------------------------------------------------------------------
# Structural constraints
# ---------------------------------------------------------------------------


def test_list_constraint_requires_list_shape():
    constraint = ListOf([int])
    assert constraint.test([1])
    assert constraint.test((1,))
    assert not constraint.test([1, 2])
    assert not constraint.test(1)
    assert not constraint.test("1")


def test_list_constraint_with_splat():
    constraint = ListOf([int, Splat(str)])
    assert constraint.test([1])
    assert constraint.test([1, "a", "b"])
    assert not constraint.test([1, "a", 2])
    assert constraint.describe() == "[int, Splat[str]]"


def test_one_splat_per_list():
    with pytest.raises(MalformedContractError, match="Only one `Splat`"):
        ListOf([Splat(int), Splat(str)])


@pytest.mark.parametrize("marker", [Returns(int), Block(int)])
def test_list_rejects_nested_positional_markers(marker):
    with pytest.raises(MalformedContractError, match="cannot be nested"):
        ListOf([int, marker])


def test_map_constraint_ignores_extra_keys():
    constraint = MapOf({"a": int})
    assert constraint.test({"a": 1, "b": 2})
    assert not constraint.test({"b": 2})
    assert not constraint.test([("a", 1)])


def test_map_constraint_with_optional_value():
    constraint = MapOf({"a": int, "b": Maybe(str)})
    assert constraint.test({"a": 1})
    assert constraint.test({"a": 1, "b": None})
    assert not constraint.test({"a": 1, "b": 2})


def test_map_rejects_splat_values():
    with pytest.raises(MalformedContractError, match="wrapping it in a list"):
        MapOf({"a": Splat(int)})


def test_map_accepts_splat_inside_list_value():
    constraint = MapOf({"tags": [Splat(str)]})
    assert constraint.test({"tags": ["a", "b"]})
    assert constraint.test({"tags": []})


def test_splat_cannot_wrap_markers():
    with pytest.raises(MalformedContractError):
        Splat(Splat(int))


def test_constraints_are_immutable():
    constraint = Maybe(int)
    with pytest.raises(AttributeError):
        constraint.inner = as_constraint(str)


# ---------------------------------------------------------------------------
# Executables
# ---------------------------------------------------------------------------


def test_executable_only_checks_callability():
    constraint = Executable(int, returns=int)
    assert constraint.test(len)
    assert constraint.test(lambda x: x)
    assert not constraint.test(3)
    assert constraint.parameterized


def test_executable_rendering():
    assert Executable().describe() == "Executable"
    assert Executable(int, returns=int).describe() == "Executable[(int) -> int]"
    assert Block(Returns(str)).describe() == "Block[() -> str]"

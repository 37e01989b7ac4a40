"""
Tests for @match dispatch - choosing an implementation by its contract.

Several definitions of the same function register as candidates; a call runs
the first one, in declaration order, whose contract accepts the arguments.
"""
from __future__ import annotations

import pytest

from clause import (
    And,
    Block,
    ContractViolationError,
    NoMatchingContractError,
    Or,
    Returns,
    Splat,
    Test,
    match,
)
from clause.matching import candidates, clear_registry


def test_recursive_dispatch():
    @match(Or(0, 1), Returns(int))
    def fib(n):
        return n

    @match(And(int, Test(">", 1)), Returns(int))
    def fib(n):  # noqa: F811
        return fib(n - 1) + fib(n - 2)

    assert [fib(n) for n in range(8)] == [0, 1, 1, 2, 3, 5, 8, 13]
    with pytest.raises(NoMatchingContractError):
        fib(-1)


def test_no_candidate_matches():
    @match(int)
    def kind(value):
        return "int"

    @match(str)
    def kind(value):  # noqa: F811
        return "str"

    assert kind(1) == "int"
    assert kind("a") == "str"
    with pytest.raises(NoMatchingContractError) as excinfo:
        kind(1.5)
    assert "Contract(int)" in str(excinfo.value)
    assert "Contract(str)" in str(excinfo.value)


def test_first_declared_candidate_wins():
    @match(int)
    def pick(value):
        return "first"

    @match(Or(int, str))
    def pick(value):  # noqa: F811
        return "second"

    assert pick(1) == "first"
    assert pick("x") == "second"


def test_arity_selects_candidates():
    @match()
    def arity():
        return 0

    @match(int)
    def arity(value):  # noqa: F811
        return 1

    @match(int, Splat(int))
    def arity(first, *rest):  # noqa: F811
        return 1 + len(rest)

    assert arity() == 0
    assert arity(5) == 1
    assert arity(5, 6, 7) == 3


def test_block_participates_in_selection():
    @match(Block(Returns(int)))
    def run(block):
        return ("int", block())

    @match(Block(Returns(str)))
    def run(block):  # noqa: F811
        return ("str", block())

    assert run(lambda: 1) == ("int", 1)
    # Selection only checks callability; the first candidate runs and its
    # wrapped block enforces the nested return constraint.
    with pytest.raises(ContractViolationError):
        run(lambda: "a")


def test_chosen_candidate_return_is_validated():
    @match(int, returns=str)
    def broken(value):
        return value

    with pytest.raises(ContractViolationError):
        broken(1)


def test_candidates_are_listed_in_declaration_order():
    @match(int)
    def listed(value):
        return value

    @match(str)
    def listed(value):  # noqa: F811
        return value

    key = listed.__clause_dispatch_key__
    assert [c.contract.signature() for c in candidates(key)] == ["(int)", "(str)"]


def test_clear_registry_forgets_candidates():
    @match(int)
    def gone(value):
        return value

    assert gone(1) == 1
    clear_registry(gone.__clause_dispatch_key__)
    with pytest.raises(NoMatchingContractError):
        gone(1)

# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Logical combinators: And, Or, Xor, Not, Maybe and Absent."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from ..exceptions import MalformedContractError
from .base import MISSING, Constraint, ConstraintKind, reject_markers
from .structural import as_constraint


@dataclass(frozen=True, repr=False, init=False)
class _Combinator(Constraint):
    members: Tuple[Constraint, ...]

    kind = ConstraintKind.LOGICAL

    def __init__(self, *members: Any):
        coerced = tuple(as_constraint(member) for member in members)
        owner = self._render(coerced)
        if len(coerced) < 2:
            raise MalformedContractError(owner, f"`{type(self).__name__}` needs at least two constraints")
        reject_markers(owner, coerced)
        object.__setattr__(self, "members", coerced)

    @classmethod
    def _render(cls, members: Tuple[Constraint, ...]) -> str:
        return f"{cls.__name__}[" + ", ".join(m.describe() for m in members) + "]"

    def describe(self) -> str:
        return self._render(self.members)


class And(_Combinator):
    """Passes when every member passes."""

    def test(self, value: Any) -> bool:
        return all(member.test(value) for member in self.members)

    def culprit(self, value: Any) -> Constraint:
        for member in self.members:
            if not member.test(value):
                return member.culprit(value)
        return self

    @property
    def optional(self) -> bool:
        return all(member.optional for member in self.members)


class Or(_Combinator):
    """Passes when at least one member passes."""

    def test(self, value: Any) -> bool:
        return any(member.test(value) for member in self.members)

    @property
    def optional(self) -> bool:
        return any(member.optional for member in self.members)


class Xor(_Combinator):
    """Passes when exactly one member passes."""

    def test(self, value: Any) -> bool:
        return sum(1 for member in self.members if member.test(value)) == 1

    @property
    def optional(self) -> bool:
        return any(member.optional for member in self.members)


def _holds_executable_contract(constraint: Constraint) -> bool:
    """True when *constraint* holds an ``Executable`` with its own contract anywhere below it."""

    if constraint.kind in (ConstraintKind.EXECUTABLE, ConstraintKind.BLOCK):
        return bool(getattr(constraint, "parameterized", False))
    children = []
    for attribute in ("inner", "members", "elements"):
        child = getattr(constraint, attribute, None)
        if isinstance(child, Constraint):
            children.append(child)
        elif isinstance(child, tuple):
            children.extend(child)
    if constraint.kind is ConstraintKind.MAP:
        children.extend(constraint.constraints)
    return any(_holds_executable_contract(child) for child in children)


@dataclass(frozen=True, repr=False, init=False)
class Not(Constraint):
    """Negates the wrapped constraint.

    Negating an executable constraint that carries its own contract has no
    sensible meaning, so it is refused at construction.
    """

    inner: Constraint

    kind = ConstraintKind.LOGICAL

    def __init__(self, inner: Any):
        coerced = as_constraint(inner)
        owner = f"Not[{coerced.describe()}]"
        reject_markers(owner, (coerced,))
        if _holds_executable_contract(coerced):
            raise MalformedContractError(
                owner, "`Not` cannot wrap an `Executable` that declares its own contract"
            )
        object.__setattr__(self, "inner", coerced)

    def test(self, value: Any) -> bool:
        return not self.inner.test(value)

    def describe(self) -> str:
        return f"Not[{self.inner.describe()}]"


@dataclass(frozen=True, repr=False, init=False)
class Maybe(Constraint):
    """Passes for an absent or ``None`` value, otherwise defers to *inner*."""

    inner: Constraint

    kind = ConstraintKind.OPTIONAL

    def __init__(self, inner: Any):
        coerced = as_constraint(inner)
        reject_markers(f"Maybe[{coerced.describe()}]", (coerced,))
        object.__setattr__(self, "inner", coerced)

    def test(self, value: Any) -> bool:
        return value is None or value is MISSING or self.inner.test(value)

    @property
    def optional(self) -> bool:
        return True

    def describe(self) -> str:
        return f"Maybe[{self.inner.describe()}]"


@dataclass(frozen=True, repr=False)
class Absent(Constraint):
    """Passes only when no argument was supplied at this position."""

    kind = ConstraintKind.ABSENT

    def test(self, value: Any) -> bool:
        return value is MISSING

    @property
    def optional(self) -> bool:
        return True

    def describe(self) -> str:
        return "Absent"


__all__ = ["Absent", "And", "Maybe", "Not", "Or", "Xor"]

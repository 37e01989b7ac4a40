# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Shared building blocks for constraint variants."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Iterable, Sequence

from ..exceptions import MalformedContractError


class _Missing:
    """Marker for an argument that was not supplied at all (as opposed to ``None``)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()


class ConstraintKind(str, Enum):
    """Closed set of shapes the matcher dispatches on."""

    VALUE = "value"
    LIST = "list"
    MAP = "map"
    LOGICAL = "logical"
    OPTIONAL = "optional"
    ABSENT = "absent"
    SPLAT = "splat"
    EXECUTABLE = "executable"
    BLOCK = "block"
    RETURNS = "returns"


# Kinds that are only legal at a specific position of a specification.
POSITIONAL_MARKERS = frozenset({ConstraintKind.SPLAT, ConstraintKind.BLOCK, ConstraintKind.RETURNS})


class Constraint(ABC):
    """A node of a contract specification tree.

    Constraints are immutable once built; testing never mutates them, so a
    single tree can be shared by any number of concurrent calls.
    """

    kind: ClassVar[ConstraintKind] = ConstraintKind.VALUE

    @abstractmethod
    def test(self, value: Any) -> bool:
        """Return True when *value* satisfies this constraint."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable rendering used in signatures and error messages."""

    @property
    def optional(self) -> bool:
        """Whether the position may be left unfilled."""
        return False

    def culprit(self, value: Any) -> "Constraint":
        """The most specific node to blame when *value* fails this constraint."""
        return self

    def __repr__(self) -> str:
        return self.describe()

    def __str__(self) -> str:
        return self.describe()


def describe(value: Any) -> str:
    """Render a constraint or a raw specification value."""

    if isinstance(value, Constraint):
        return value.describe()
    if isinstance(value, type):
        return value.__qualname__
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(describe(item) for item in value) + "]"
    if isinstance(value, dict):
        return "{" + ", ".join(f"{k!r}: {describe(v)}" for k, v in value.items()) + "}"
    try:
        return repr(value)
    except Exception:
        return f"<{type(value).__name__}>"


def is_list_shaped(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def reject_markers(owner: str, children: Iterable[Constraint], *, allow: Sequence[ConstraintKind] = ()) -> None:
    """Refuse positional markers nested where they have no meaning."""

    for child in children:
        if child.kind in POSITIONAL_MARKERS and child.kind not in allow:
            raise MalformedContractError(
                owner,
                f"`{child.describe()}` cannot be nested inside another constraint",
            )


def count_splats(owner: str, children: Sequence[Constraint]) -> None:
    seen = sum(1 for child in children if child.kind is ConstraintKind.SPLAT)
    if seen > 1:
        raise MalformedContractError(owner, "Only one `Splat` can be used in each list in a contract")


__all__ = [
    "MISSING",
    "Constraint",
    "ConstraintKind",
    "POSITIONAL_MARKERS",
    "count_splats",
    "describe",
    "is_list_shaped",
    "reject_markers",
]

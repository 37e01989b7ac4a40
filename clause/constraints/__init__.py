"""Constraint data model.

Raw specification values are coerced with :func:`as_constraint`; every
variant exposes ``test(value) -> bool`` and ``describe()``.
"""

from .base import MISSING, Constraint, ConstraintKind, describe
from .logical import Absent, And, Maybe, Not, Or, Xor
from .markers import Block, Executable, Returns, Splat
from .predicates import Atom, ExactValue, Pattern, Predicate, Range, Test, TypeTag, UserFunction
from .structural import ListOf, MapOf, as_constraint

__all__ = [
    "MISSING",
    "Absent",
    "And",
    "Atom",
    "Block",
    "Constraint",
    "ConstraintKind",
    "ExactValue",
    "Executable",
    "ListOf",
    "MapOf",
    "Maybe",
    "Not",
    "Or",
    "Pattern",
    "Predicate",
    "Range",
    "Returns",
    "Splat",
    "Test",
    "TypeTag",
    "UserFunction",
    "Xor",
    "as_constraint",
    "describe",
]

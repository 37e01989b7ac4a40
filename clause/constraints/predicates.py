# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Leaf constraints: an :class:`Atom` wraps one value-testing predicate.

Predicates come in five flavours:

* :class:`ExactValue` - equality with a literal (``42``, ``"users"``, ``None``)
* :class:`TypeTag` - ``isinstance`` membership (``int``, ``str``)
* :class:`Range` - containment between two bounds
* :class:`Pattern` - regular expression search over strings
* :class:`UserFunction` - any callable returning a truthy/falsey verdict

Predicates are expected to be pure. One that raises is treated as a
non-match rather than an engine error.
"""

from __future__ import annotations

import logging
import operator
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Union

from .base import MISSING, Constraint

logger = logging.getLogger(__name__)


class Predicate(ABC):
    """A single value test dispatched by :class:`Atom`."""

    @abstractmethod
    def __call__(self, value: Any) -> bool:
        ...

    @abstractmethod
    def describe(self) -> str:
        ...


@dataclass(frozen=True, repr=False)
class ExactValue(Predicate):
    expected: Any

    def __call__(self, value: Any) -> bool:
        # True == 1 in Python; a boolean literal should only match booleans.
        if isinstance(value, bool) != isinstance(self.expected, bool):
            return False
        return bool(value == self.expected)

    def describe(self) -> str:
        return repr(self.expected)


@dataclass(frozen=True, repr=False)
class TypeTag(Predicate):
    cls: Union[type, Tuple[type, ...]]

    def __call__(self, value: Any) -> bool:
        if value is MISSING:
            return False
        return isinstance(value, self.cls)

    def describe(self) -> str:
        if isinstance(self.cls, tuple):
            return "(" + " | ".join(c.__qualname__ for c in self.cls) + ")"
        return self.cls.__qualname__


@dataclass(frozen=True, repr=False)
class Range(Predicate):
    """Containment between *low* and *high*; *high* is inclusive unless ``exclusive``.

    Ranges built from a Python ``range`` set ``integers_only``, matching ``in``.
    """

    low: Any
    high: Any
    exclusive: bool = False
    integers_only: bool = False

    def __call__(self, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if self.integers_only and not isinstance(value, int):
            return False
        if self.exclusive:
            return self.low <= value < self.high
        return self.low <= value <= self.high

    def describe(self) -> str:
        joiner = "..." if self.exclusive else ".."
        return f"({self.low!r}{joiner}{self.high!r})"


@dataclass(frozen=True, repr=False)
class Pattern(Predicate):
    regex: "re.Pattern"

    def __call__(self, value: Any) -> bool:
        if not isinstance(value, type(self.regex.pattern)):
            return False
        return self.regex.search(value) is not None

    def describe(self) -> str:
        return f"/{self.regex.pattern}/"


@dataclass(frozen=True, repr=False)
class UserFunction(Predicate):
    fn: Callable[[Any], Any]
    name: Optional[str] = None

    def __call__(self, value: Any) -> bool:
        return bool(self.fn(value))

    def describe(self) -> str:
        if self.name:
            return self.name
        return getattr(self.fn, "__qualname__", None) or repr(self.fn)


@dataclass(frozen=True, repr=False)
class Atom(Constraint):
    """Leaf constraint delegating to a :class:`Predicate`."""

    predicate: Predicate

    def test(self, value: Any) -> bool:
        try:
            return bool(self.predicate(value))
        except Exception as exc:
            logger.debug("Predicate %s raised %r; treating as non-match", self.describe(), exc)
            return False

    def describe(self) -> str:
        return self.predicate.describe()


_OPERATORS = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
}


@dataclass(frozen=True, repr=False, init=False)
class Test(Constraint):
    """Send a message to the value and check the answer.

    ``Test(">", 1)`` passes for values greater than one, ``Test("startswith", "/tmp")``
    calls ``value.startswith("/tmp")`` and ``Test(operator.contains, "x")`` calls
    ``operator.contains(value, "x")``.
    """

    method: Union[str, Callable[..., Any]]
    args: Tuple[Any, ...]

    __test__ = False  # keep pytest from collecting this class

    def __init__(self, method: Union[str, Callable[..., Any]], *args: Any):
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "args", tuple(args))

    def test(self, value: Any) -> bool:
        try:
            if callable(self.method):
                return bool(self.method(value, *self.args))
            if self.method in _OPERATORS:
                return bool(_OPERATORS[self.method](value, *self.args))
            return bool(getattr(value, self.method)(*self.args))
        except Exception as exc:
            logger.debug("Test %s raised %r; treating as non-match", self.describe(), exc)
            return False

    def describe(self) -> str:
        method = self.method if isinstance(self.method, str) else getattr(self.method, "__name__", repr(self.method))
        rendered = ", ".join([repr(method) if isinstance(method, str) else method] + [repr(a) for a in self.args])
        return f"Test[{rendered}]"


def predicate_for(raw: Any) -> Predicate:
    """Pick the predicate a raw specification value stands for."""

    if isinstance(raw, Predicate):
        return raw
    if isinstance(raw, type):
        return TypeTag(raw)
    if isinstance(raw, range):
        if raw.step == 1:
            return Range(raw.start, raw.stop, exclusive=True, integers_only=True)
        return UserFunction(raw.__contains__, name=repr(raw))
    if isinstance(raw, re.Pattern):
        return Pattern(raw)
    if callable(raw):
        return UserFunction(raw)
    return ExactValue(raw)


__all__ = [
    "Atom",
    "ExactValue",
    "Pattern",
    "Predicate",
    "Range",
    "Test",
    "TypeTag",
    "UserFunction",
    "predicate_for",
]

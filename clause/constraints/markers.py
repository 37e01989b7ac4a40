# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Positional markers: Splat, Returns, Executable and Block.

These are not ordinary value tests. ``Splat`` is consumed by the matcher's
arity balancing, ``Returns`` is lifted out of the parameter list by
:class:`~clause.contracts.Contract`, and ``Executable``/``Block`` replace the
matched callable with a wrapper enforcing their nested contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from .base import Constraint, ConstraintKind, reject_markers
from .structural import as_constraint

if TYPE_CHECKING:
    from ..contracts import Contract
    from ..validation.base import CallSite
    from ..validation.policy import Callbacks

_NO_RETURN = object()


@dataclass(frozen=True, repr=False, init=False)
class Splat(Constraint):
    """Zero or more consecutive positions matching *inner*.

    .. code-block:: python

        @contract(Splat(int), returns=int)
        def total(*numbers):
            return sum(numbers)
    """

    inner: Constraint

    kind = ConstraintKind.SPLAT

    def __init__(self, inner: Any):
        coerced = as_constraint(inner)
        reject_markers(f"Splat[{coerced.describe()}]", (coerced,))
        object.__setattr__(self, "inner", coerced)

    def test(self, value: Any) -> bool:
        return self.inner.test(value)

    @property
    def optional(self) -> bool:
        return True

    def describe(self) -> str:
        return f"Splat[{self.inner.describe()}]"


@dataclass(frozen=True, repr=False, init=False)
class Returns(Constraint):
    """Constraint on a callable's return value; only legal as the last element of a contract."""

    inner: Constraint

    kind = ConstraintKind.RETURNS

    def __init__(self, inner: Any):
        coerced = as_constraint(inner)
        reject_markers(f"Returns[{coerced.describe()}]", (coerced,))
        object.__setattr__(self, "inner", coerced)

    def test(self, value: Any) -> bool:
        return self.inner.test(value)

    def describe(self) -> str:
        return f"Returns[{self.inner.describe()}]"


@dataclass(frozen=True, repr=False, init=False)
class Executable(Constraint):
    """Matches any callable.

    Given parameters (the same grammar as :class:`~clause.contracts.Contract`,
    or a ready-made contract), the matched callable is swapped for a wrapper
    that applies that nested contract every time it is invoked later.
    """

    contract: Optional["Contract"]

    kind = ConstraintKind.EXECUTABLE

    def __init__(self, *spec: Any, returns: Any = _NO_RETURN):
        from ..contracts import Contract

        nested: Optional[Contract]
        if len(spec) == 1 and isinstance(spec[0], Contract) and returns is _NO_RETURN:
            nested = spec[0]
        elif returns is not _NO_RETURN:
            nested = Contract(*spec, returns=returns)
        elif spec:
            nested = Contract(*spec)
        else:
            nested = None
        object.__setattr__(self, "contract", nested)

    @property
    def parameterized(self) -> bool:
        return self.contract is not None

    def test(self, value: Any) -> bool:
        return callable(value)

    def wrap(
        self,
        func: Callable[..., Any],
        callbacks: Optional["Callbacks"] = None,
        location: Optional["CallSite"] = None,
    ) -> Callable[..., Any]:
        """Return *func* guarded by the nested contract (or *func* itself when unparameterized)."""

        if self.contract is None:
            return func
        return self.contract.wrap(func, callbacks=callbacks, location=location)

    def describe(self) -> str:
        name = type(self).__name__
        if self.contract is None:
            return name
        return f"{name}[{self.contract.signature()}]"


class Block(Executable):
    """An :class:`Executable` bound to the distinguished callback parameter of a function."""

    kind = ConstraintKind.BLOCK


__all__ = ["Block", "Executable", "Returns", "Splat"]

# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""The Contract aggregate: parsed positional, block and return constraints."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple

from .constraints.base import MISSING, Constraint, ConstraintKind, count_splats, describe
from .constraints.markers import Block
from .constraints.structural import as_constraint
from .exceptions import MalformedContractError
from .validation.base import CallSite, ValidationResult
from .validation.matcher import Matcher
from .validation.policy import Callback, Callbacks, accept, failure_callback_for

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class Contract:
    """Constraints on a callable's parameters, block and return value.

    A contract is built once from a flat specification and is read-only
    afterwards, so one instance can guard any number of concurrent calls.
    All per-call state (rewritten values, violations, call site) lives in
    the :class:`~clause.validation.matcher.Matcher` created for that call.

    .. code-block:: python

        from clause import Contract, Returns, Splat

        Contract(int, int, Returns(int))        # (int, int) -> int
        Contract(int, int, returns=int)         # same thing
        Contract(str, {"path": str}, [int])     # map and list destructuring
        Contract(Splat(int), returns=int)       # variadic
        Contract(Returns(str))                  # parameters unchecked

    :param spec: Parameter constraints (raw values or :class:`Constraint`),
                 optionally followed by a :class:`Block` and a :class:`Returns`.
    :param returns: Shorthand for a trailing ``Returns(...)``.
    :param on_success: Callback invoked after each passing comparison.
    :param on_failure: Callback invoked after each failing comparison.
                       Defaults to the configured failure mode (raise).
    """

    __slots__ = ("_positional", "_block", "_returns", "_callbacks")

    def __init__(
        self,
        *spec: Any,
        returns: Any = UNSET,
        on_success: Optional[Callback] = None,
        on_failure: Optional[Callback] = None,
    ):
        positional, block, returned = _parse(spec, returns)
        self._positional: Tuple[Constraint, ...] = positional
        self._block: Optional[Block] = block
        self._returns: Optional[Constraint] = returned
        if on_failure is None:
            from .runtime.settings import load_settings

            on_failure = failure_callback_for(load_settings().failure_mode)
        self._callbacks = Callbacks(on_success=on_success or accept, on_failure=on_failure)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def positional(self) -> Tuple[Constraint, ...]:
        return self._positional

    @property
    def block(self) -> Optional[Block]:
        return self._block

    @property
    def returns(self) -> Optional[Constraint]:
        return self._returns

    @property
    def callbacks(self) -> Callbacks:
        return self._callbacks

    @property
    def on_success(self) -> Callback:
        return self._callbacks.on_success

    @property
    def on_failure(self) -> Callback:
        return self._callbacks.on_failure

    def with_callbacks(
        self,
        *,
        on_success: Optional[Callback] = None,
        on_failure: Optional[Callback] = None,
    ) -> "Contract":
        """Return a contract sharing these constraints but using other callbacks."""

        clone = object.__new__(Contract)
        clone._positional = self._positional
        clone._block = self._block
        clone._returns = self._returns
        clone._callbacks = Callbacks(
            on_success=on_success or self._callbacks.on_success,
            on_failure=on_failure or self._callbacks.on_failure,
        )
        return clone

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_arguments(
        self,
        args: Sequence[Any],
        block: Any = MISSING,
        *,
        location: Optional[CallSite] = None,
        callbacks: Optional[Callbacks] = None,
    ) -> ValidationResult:
        """Validate positional arguments, then the block if one is declared.

        The returned result carries the arguments (and block) to forward to
        the callable; executable values in it may have been wrapped.
        """

        callbacks = callbacks or self._callbacks
        if self._positional:
            matcher = Matcher(callbacks, contract=self, location=location)
            result = matcher.validate(self._positional, args)
        else:
            result = ValidationResult(passed=True, values=tuple(args))

        if not result.passed or self._block is None:
            result.block = block
            return result

        matcher = Matcher(callbacks, contract=self, location=location)
        block_result = matcher.validate((self._block,), (block,))
        result.merge(block_result)
        result.block = block_result.values[0] if block_result.values else block
        return result

    def accepts(self, args: Sequence[Any], block: Any = MISSING) -> bool:
        """Quietly test whether *args* (and *block*) satisfy this contract.

        No callbacks run and no executable is wrapped.
        """

        if self._positional and not Matcher.quiet().validate(self._positional, args).passed:
            return False
        if self._block is not None and not Matcher.quiet().validate((self._block,), (block,)).passed:
            return False
        return True

    def validate_return(
        self,
        value: Any,
        *,
        location: Optional[CallSite] = None,
        callbacks: Optional[Callbacks] = None,
    ) -> ValidationResult:
        """Validate a return value; ``result.values[0]`` is the value to hand back."""

        if self._returns is None:
            return ValidationResult(passed=True, values=(value,))
        matcher = Matcher(callbacks or self._callbacks, contract=self, location=location)
        return matcher.validate((self._returns,), (value,))

    def wrap(
        self,
        func: Callable[..., Any],
        *,
        callbacks: Optional[Callbacks] = None,
        location: Optional[CallSite] = None,
    ) -> Callable[..., Any]:
        """Return a callable enforcing this contract on every call to *func*."""

        from .runtime.wrapping import wrap_callable

        return wrap_callable(self, func, callbacks=callbacks or self._callbacks, location=location)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def signature(self) -> str:
        params = [c.describe() for c in self._positional]
        if self._block is not None:
            params.append(self._block.describe())
        rendered = "(" + ", ".join(params) + ")"
        if self._returns is not None:
            rendered += f" -> {self._returns.describe()}"
        return rendered

    def to_display_string(self) -> str:
        return f"Contract{self.signature()}"

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        return f"<{self.to_display_string()}>"


def _render_spec(spec: Iterable[Any], returns: Any) -> str:
    rendered = "Contract(" + ", ".join(describe(item) for item in spec) + ")"
    if returns is not UNSET:
        rendered += f" -> {describe(returns)}"
    return rendered


def _parse(spec: Sequence[Any], returns: Any) -> Tuple[Tuple[Constraint, ...], Optional[Block], Optional[Constraint]]:
    signature = _render_spec(spec, returns)
    try:
        items = [as_constraint(item) for item in spec]
        explicit_returns = None if returns is UNSET else as_constraint(returns)
    except MalformedContractError as exc:
        logger.error("Malformed contract %s: %s", signature, exc.reason)
        raise MalformedContractError(signature, exc.reason) from exc

    def malformed(reason: str) -> MalformedContractError:
        logger.error("Malformed contract %s: %s", signature, reason)
        return MalformedContractError(signature, reason)

    returned: Optional[Constraint] = None
    if items and items[-1].kind is ConstraintKind.RETURNS:
        returned = items.pop().inner
    if explicit_returns is not None:
        if returned is not None:
            raise malformed("The return constraint is declared twice (`Returns(...)` and `returns=`)")
        if explicit_returns.kind in (ConstraintKind.RETURNS, ConstraintKind.SPLAT, ConstraintKind.BLOCK):
            raise malformed(f"`{explicit_returns.describe()}` cannot be used as a return constraint")
        returned = explicit_returns

    block: Optional[Block] = None
    if items and items[-1].kind is ConstraintKind.BLOCK:
        block = items.pop()

    for item in items:
        if item.kind is ConstraintKind.RETURNS:
            raise malformed(
                f"`{item.describe()}` cannot be used as a value; it must be the last value of the contract"
            )
        if item.kind is ConstraintKind.BLOCK:
            raise malformed(
                f"`{item.describe()}` must be the last parameter, before any return constraint"
            )

    try:
        count_splats(signature, items)
    except MalformedContractError as exc:
        logger.error("Malformed contract %s: %s", signature, exc.reason)
        raise

    return tuple(items), block, returned


__all__ = ["Contract", "UNSET"]

# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Build the sync/async wrappers that enforce a contract around a callable."""

from __future__ import annotations

import functools
import inspect
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

from ..constraints.base import MISSING
from ..telemetry.metrics import record_bypass
from ..validation.base import CallSite, ValidationResult
from ..validation.policy import Callbacks
from .binding import BoundCall, CallLayout
from .guard import check_arguments, check_return
from .settings import is_enabled

if TYPE_CHECKING:
    from ..contracts import Contract

DEFAULT_BLOCK_PARAM = "block"


def _layout_for(contract: "Contract", func: Callable[..., Any], block_param: str, owner: str) -> Optional[CallLayout]:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins expose no signature; their arguments are taken as passed.
        return None
    return CallLayout(signature, block_param=block_param if contract.block is not None else None, owner=owner)


class _RawLayout:
    """Fallback for callables without an introspectable signature."""

    def __init__(self, block_param: Optional[str]):
        self._block_param = block_param

    def split(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> BoundCall:
        keywords = dict(kwargs)
        block = keywords.pop(self._block_param, MISSING) if self._block_param else MISSING
        return BoundCall(receiver=(), values=list(args), block=block, keywords=keywords)

    def rebuild(self, call: BoundCall, values: Tuple[Any, ...], block: Any = MISSING):
        kwargs = dict(call.keywords)
        if self._block_param and block is not MISSING:
            kwargs[self._block_param] = block
        return list(values), kwargs


def resolve_abort(on_abort: Any, result: ValidationResult) -> Any:
    """Produce the value returned by a call whose validation was aborted.

    A plain value is returned as-is. A callable receives the
    :class:`ValidationResult` when it accepts an argument.
    """

    if not callable(on_abort):
        return on_abort
    try:
        accepts_result = bool(inspect.signature(on_abort).parameters)
    except (TypeError, ValueError):
        accepts_result = True
    return on_abort(result) if accepts_result else on_abort()


def wrap_callable(
    contract: "Contract",
    func: Callable[..., Any],
    *,
    callbacks: Optional[Callbacks] = None,
    location: Optional[CallSite] = None,
    block_param: str = DEFAULT_BLOCK_PARAM,
    on_abort: Any = None,
) -> Callable[..., Any]:
    """Wrap *func* so every call is validated against *contract*.

    Args:
        contract: The contract to enforce
        func: Sync or async callable to guard
        callbacks: Callbacks to validate with (defaults to the contract's own)
        location: Where the contract was declared (defaults to *func* itself)
        block_param: Name of the parameter matched against a ``Block`` constraint
        on_abort: Result of a call whose validation a callback aborted

    Returns:
        A wrapper with the same metadata as *func*; coroutine functions get a
        coroutine wrapper.
    """

    callbacks = callbacks or contract.callbacks
    location = location or CallSite.of(func)
    layout: Any = _layout_for(contract, func, block_param, owner=contract.to_display_string())
    if layout is None:
        layout = _RawLayout(block_param if contract.block is not None else None)

    def before(args: Tuple[Any, ...], kwargs: Dict[str, Any]):
        call = layout.split(args, kwargs)
        result = check_arguments(contract, call.values, call.block, location=location, callbacks=callbacks)
        if not result.passed:
            return result, None, None
        new_args, new_kwargs = layout.rebuild(call, result.values, result.block)
        return result, new_args, new_kwargs

    def after(value: Any) -> Tuple[bool, Any]:
        result = check_return(contract, value, location=location, callbacks=callbacks)
        if not result.passed:
            return False, resolve_abort(on_abort, result)
        return True, result.values[0]

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            if not is_enabled():
                record_bypass(location.function)
                return await func(*args, **kwargs)

            result, new_args, new_kwargs = before(args, kwargs)
            if new_args is None:
                outcome = resolve_abort(on_abort, result)
                return await outcome if inspect.isawaitable(outcome) else outcome

            passed, value = after(await func(*new_args, **new_kwargs))
            if not passed and inspect.isawaitable(value):
                return await value
            return value

        wrapper = async_wrapper
    else:

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            if not is_enabled():
                record_bypass(location.function)
                return func(*args, **kwargs)

            result, new_args, new_kwargs = before(args, kwargs)
            if new_args is None:
                return resolve_abort(on_abort, result)

            _, value = after(func(*new_args, **new_kwargs))
            return value

        wrapper = sync_wrapper

    wrapper.__clause_contract__ = contract
    return wrapper


__all__ = ["DEFAULT_BLOCK_PARAM", "resolve_abort", "wrap_callable"]

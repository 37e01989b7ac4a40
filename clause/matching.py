# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Pattern-matching dispatch over several contracts.

Decorating several definitions of the same function with :func:`match`
registers each of them as a candidate. A call runs the first candidate, in
declaration order, whose contract accepts the arguments:

.. code-block:: python

    from clause import And, Or, Returns, Test, match

    @match(Or(0, 1), Returns(int))
    def fib(n):
        return n

    @match(And(int, Test(">", 1)), Returns(int))
    def fib(n):
        return fib(n - 1) + fib(n - 2)

Candidate selection is silent; the chosen candidate is then validated again
with its own callbacks so executables get wrapped and the return value is
checked. Dispatch is synchronous.
"""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .contracts import UNSET, Contract
from .exceptions import NoMatchingContractError
from .runtime import DEFAULT_BLOCK_PARAM, CallLayout, check_arguments, check_return
from .runtime.settings import is_enabled
from .telemetry.metrics import record_bypass
from .validation.base import CallSite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    contract: Contract
    func: Callable[..., Any]
    layout: CallLayout
    location: CallSite


_registry: Dict[str, List[Candidate]] = {}
_registry_lock = threading.Lock()


def candidates(key: str) -> List[Candidate]:
    with _registry_lock:
        return list(_registry.get(key, ()))


def clear_registry(key: Optional[str] = None) -> None:
    """Forget registered candidates, for one dispatch key or all of them."""

    with _registry_lock:
        if key is None:
            _registry.clear()
        else:
            _registry.pop(key, None)


def match(*spec: Any, returns: Any = UNSET, block: str = DEFAULT_BLOCK_PARAM):
    """Register the decorated function as one candidate of a dispatching function.

    Args:
        spec: Contract of this candidate (same grammar as :class:`Contract`)
        returns: Shorthand for a trailing ``Returns(...)``
        block: Name of the parameter a ``Block`` constraint applies to

    Returns:
        A decorator producing the shared dispatcher for the function's
        qualified name.
    """

    if len(spec) == 1 and isinstance(spec[0], Contract) and returns is UNSET:
        declared = spec[0]
    else:
        declared = Contract(*spec, returns=returns)

    def decorator(func: Callable[..., Any]):
        key = f"{func.__module__}.{func.__qualname__}"
        candidate = Candidate(
            contract=declared,
            func=func,
            layout=CallLayout.of(
                func,
                block_param=block if declared.block is not None else None,
                owner=declared.to_display_string(),
            ),
            location=CallSite.of(func),
        )
        with _registry_lock:
            _registry.setdefault(key, []).append(candidate)
        logger.debug("Registered %s as candidate of %s", declared, key)
        return _dispatcher(key, func)

    return decorator


def _dispatcher(key: str, func: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(func)
    def dispatch(*args, **kwargs):
        for candidate in candidates(key):
            try:
                call = candidate.layout.split(args, kwargs)
            except TypeError:
                continue
            if not candidate.contract.accepts(call.values, call.block):
                continue
            return _run(candidate, call)

        raise NoMatchingContractError(key, [c.contract.to_display_string() for c in candidates(key)])

    dispatch.__clause_dispatch_key__ = key
    return dispatch


def _run(candidate: Candidate, call) -> Any:
    contract, layout, location = candidate.contract, candidate.layout, candidate.location
    if not is_enabled():
        record_bypass(location.function)
        args, kwargs = layout.rebuild(call, tuple(call.values), call.block)
        return candidate.func(*args, **kwargs)

    result = check_arguments(contract, call.values, call.block, location=location)
    if not result.passed:
        return None
    args, kwargs = layout.rebuild(call, result.values, result.block)
    returned = check_return(contract, candidate.func(*args, **kwargs), location=location)
    return returned.values[0] if returned.passed else None


__all__ = ["Candidate", "candidates", "clear_registry", "match"]

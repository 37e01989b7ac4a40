# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

# clause/decorator.py

import logging
from typing import Any, Callable, Optional

from .contracts import UNSET, Contract
from .runtime import DEFAULT_BLOCK_PARAM, wrap_callable
from .validation.base import CallSite
from .validation.policy import Callback

logger = logging.getLogger(__name__)


def contract(
    *spec: Any,
    returns: Any = UNSET,
    on_success: Optional[Callback] = None,
    on_failure: Optional[Callback] = None,
    on_abort: Any = None,
    block: str = DEFAULT_BLOCK_PARAM,
):
    """
    The primary decorator of clause.

    Every call of the decorated function is bound against its signature and
    validated against the contract before the body runs; the return value is
    validated afterwards. Works on plain functions, methods (``self``/``cls``
    is never validated) and ``async def`` coroutines.

    :param spec: Parameter constraints, optionally ending with a ``Block(...)``
                 and/or ``Returns(...)``. A single ready-made :class:`Contract`
                 is accepted too.
    :param returns: Shorthand for a trailing ``Returns(...)``.
    :param on_success: Optional callback run after each passing comparison.
    :param on_failure: Optional callback run after each failing comparison.
                       By default a :class:`ContractViolationError` is raised.
    :param on_abort: What the call returns when a callback returned False and
                     validation stopped. A callable is invoked (with the
                     ``ValidationResult`` if it accepts an argument) and its
                     result returned; any other value is returned directly.
    :param block: Name of the parameter a ``Block`` constraint applies to.

    **Ways to Handle Violations:**

    .. code-block:: python

        from clause import contract, Returns, Splat
        from clause.validation import log_and_continue, abort_silently

        # Option 1: Raise (the default)
        @contract(int, int, Returns(int))
        def add(a, b):
            return a + b

        # Option 2: Log a warning and run anyway
        @contract(str, on_failure=log_and_continue)
        def greet(name): ...

        # Option 3: Skip the body and return a fallback
        @contract(Splat(int), returns=int, on_failure=abort_silently, on_abort=0)
        def total(*numbers):
            return sum(numbers)
    """

    if len(spec) == 1 and isinstance(spec[0], Contract) and returns is UNSET:
        declared = spec[0]
        if on_success is not None or on_failure is not None:
            declared = declared.with_callbacks(on_success=on_success, on_failure=on_failure)
    else:
        declared = Contract(*spec, returns=returns, on_success=on_success, on_failure=on_failure)

    def decorator(func: Callable):
        # Support being stacked above @staticmethod / @classmethod.
        if isinstance(func, (staticmethod, classmethod)):
            return type(func)(decorator(func.__func__))

        location = CallSite.of(func)
        wrapper = wrap_callable(
            declared,
            func,
            callbacks=declared.callbacks,
            location=location,
            block_param=block,
            on_abort=on_abort,
        )
        logger.debug("Attached %s to %s", declared, location.function)
        return wrapper

    return decorator


__all__ = ["contract"]

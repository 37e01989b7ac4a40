# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Helper functions used by the wrapper guard logic."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Optional, Sequence

from ..constraints.base import MISSING
from ..exceptions import ContractViolationError
from ..telemetry.metrics import record_check_metrics
from ..telemetry.runtime import get_tracer
from ..validation.base import CallSite, ValidationResult
from ..validation.policy import Callbacks

if TYPE_CHECKING:
    from ..contracts import Contract

logger = logging.getLogger(__name__)

ARGUMENTS = "arguments"
RETURN = "return"


def _status(result: ValidationResult) -> str:
    if not result.passed:
        return "aborted"
    return "passed" if not result.violations else "violation"


def check_arguments(
    contract: "Contract",
    values: Sequence[Any],
    block: Any = MISSING,
    *,
    location: CallSite,
    callbacks: Optional[Callbacks] = None,
) -> ValidationResult:
    """Validate call arguments inside a span and record the outcome."""

    started = time.perf_counter()
    with get_tracer().start_as_current_span(
        f"clause.check:{location.function}",
        attributes={"clause.function": location.function, "clause.phase": ARGUMENTS},
    ) as span:
        try:
            result = contract.validate_arguments(values, block, location=location, callbacks=callbacks)
        except ContractViolationError:
            span.set_attribute("clause.passed", False)
            record_check_metrics(location.function, ARGUMENTS, "violation", started)
            raise
        span.set_attribute("clause.passed", result.passed)

    status = _status(result)
    record_check_metrics(location.function, ARGUMENTS, status, started)
    if status == "aborted":
        logger.debug("Arguments rejected for %s; skipping the call", location.function)
    return result


def check_return(
    contract: "Contract",
    value: Any,
    *,
    location: CallSite,
    callbacks: Optional[Callbacks] = None,
) -> ValidationResult:
    """Validate a return value inside a span and record the outcome."""

    if contract.returns is None:
        return ValidationResult(passed=True, values=(value,))

    started = time.perf_counter()
    with get_tracer().start_as_current_span(
        f"clause.check:{location.function}",
        attributes={"clause.function": location.function, "clause.phase": RETURN},
    ) as span:
        try:
            result = contract.validate_return(value, location=location, callbacks=callbacks)
        except ContractViolationError:
            span.set_attribute("clause.passed", False)
            record_check_metrics(location.function, RETURN, "violation", started)
            raise
        span.set_attribute("clause.passed", result.passed)

    record_check_metrics(location.function, RETURN, _status(result), started)
    return result


__all__ = ["ARGUMENTS", "RETURN", "check_arguments", "check_return"]

# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Success/failure callback strategies.

A callback receives a :class:`~clause.validation.base.ValidationEvent` and
returns True to let validation continue or False to abort the call. The
default failure callback raises :class:`~clause.exceptions.ContractViolationError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..exceptions import ContractViolationError
from .base import ValidationEvent

logger = logging.getLogger(__name__)

Callback = Callable[[ValidationEvent], bool]

RAISE = "raise"
LOG = "log"
ABORT = "abort"
FAILURE_MODES = (RAISE, LOG, ABORT)


def accept(event: ValidationEvent) -> bool:
    return True


def raise_violation(event: ValidationEvent) -> bool:
    raise ContractViolationError(
        contract=event.contract,
        constraint=event.constraint,
        value=event.value,
        location=event.location,
    )


def log_and_continue(event: ValidationEvent) -> bool:
    """Report the violation through logging and let the call proceed."""

    logger.warning(
        "Contract violation%s: expected %r, received %r",
        f" for {event.location.function}" if event.location is not None else "",
        event.constraint,
        event.value,
    )
    return True


def abort_silently(event: ValidationEvent) -> bool:
    return False


@dataclass(frozen=True)
class Callbacks:
    """The pair of strategies a contract validates with."""

    on_success: Callback = accept
    on_failure: Callback = raise_violation


QUIET = Callbacks(on_success=accept, on_failure=abort_silently)


def failure_callback_for(mode: str) -> Callback:
    """Map a configured failure mode name to its callback."""

    if mode == LOG:
        return log_and_continue
    if mode == ABORT:
        return abort_silently
    if mode != RAISE:
        logger.warning("Unknown contract failure mode %r; falling back to %r", mode, RAISE)
    return raise_violation


__all__ = [
    "ABORT",
    "FAILURE_MODES",
    "LOG",
    "QUIET",
    "RAISE",
    "Callback",
    "Callbacks",
    "abort_silently",
    "accept",
    "failure_callback_for",
    "log_and_continue",
    "raise_violation",
]

"""Validation package - the recursive matcher and its callback strategies."""

from .base import CallSite, ValidationEvent, ValidationResult
from .matcher import Matcher
from .policy import (
    ABORT,
    FAILURE_MODES,
    LOG,
    QUIET,
    RAISE,
    Callback,
    Callbacks,
    abort_silently,
    accept,
    failure_callback_for,
    log_and_continue,
    raise_violation,
)

__all__ = [
    "ABORT",
    "FAILURE_MODES",
    "LOG",
    "QUIET",
    "RAISE",
    "CallSite",
    "Callback",
    "Callbacks",
    "Matcher",
    "ValidationEvent",
    "ValidationResult",
    "abort_silently",
    "accept",
    "failure_callback_for",
    "log_and_continue",
    "raise_violation",
]

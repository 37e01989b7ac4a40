# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Recursive matching of constraint lists against value lists.

The matcher walks a list of constraints and a list of values in lock-step,
destructuring nested lists and mappings, balancing a single ``Splat`` per
list, and reporting every leaf comparison to the configured callbacks. The
first callback that answers False stops the walk.

A matcher instance holds only per-call state (the violations seen so far)
and must not be shared between calls.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..constraints.base import MISSING, Constraint, ConstraintKind, is_list_shaped
from .base import CallSite, ValidationEvent, ValidationResult
from .policy import QUIET, Callbacks

logger = logging.getLogger(__name__)

_EXECUTABLE_KINDS = (ConstraintKind.EXECUTABLE, ConstraintKind.BLOCK)


class Matcher:
    """Match constraint sequences against value sequences.

    Args:
        callbacks: Success/failure strategies consulted after each comparison.
        contract: Contract reported in events (for error messages).
        location: Declaration site reported in events.
        wrap_executables: Replace callables matched by a parameterized
            ``Executable``/``Block`` with their guarded wrapper.
    """

    def __init__(
        self,
        callbacks: Callbacks = QUIET,
        *,
        contract: Any = None,
        location: Optional[CallSite] = None,
        wrap_executables: bool = True,
    ):
        self._callbacks = callbacks
        self._contract = contract
        self._location = location
        self._wrap_executables = wrap_executables
        self._violations: List[ValidationEvent] = []

    @classmethod
    def quiet(cls) -> "Matcher":
        """A matcher that stops at the first failure without raising or wrapping."""
        return cls(QUIET, wrap_executables=False)

    def validate(self, constraints: Sequence[Constraint], values: Sequence[Any]) -> ValidationResult:
        proceed, rewritten = self._validate(tuple(constraints), list(values))
        return ValidationResult(passed=proceed, values=tuple(rewritten), violations=list(self._violations))

    def check(self, constraint: Constraint, value: Any) -> Tuple[bool, Any]:
        """Compare a single pair, returning ``(proceed, possibly-wrapped value)``."""
        return self._check(constraint, value)

    # ------------------------------------------------------------------
    # Core walk
    # ------------------------------------------------------------------

    def _validate(self, constraints: Tuple[Constraint, ...], values: List[Any]) -> Tuple[bool, List[Any]]:
        pending = deque(constraints)
        rewritten = list(values)
        index = 0

        while True:
            exhausted = index >= len(rewritten)
            if exhausted:
                if not pending or all(c.optional for c in pending):
                    return True, rewritten
            elif not pending:
                # Surplus values with nothing left to absorb them.
                event = ValidationEvent(
                    constraint=constraints,
                    value=tuple(values),
                    location=self._location,
                    contract=self._contract,
                )
                return self._failure(event), rewritten

            constraint = pending.popleft()

            if constraint.kind is ConstraintKind.SPLAT:
                constraints_left = len(pending)
                values_left = len(rewritten) - index - 1
                if constraints_left > values_left:
                    continue
                if constraints_left < values_left:
                    pending.appendleft(constraint)
                constraint = constraint.inner

            if exhausted and not constraint.optional:
                # Nothing was supplied for a required position.
                event = ValidationEvent(
                    constraint=constraint,
                    value=MISSING,
                    location=self._location,
                    contract=self._contract,
                )
                if not self._failure(event):
                    return False, rewritten
                index += 1
                continue

            value = rewritten[index] if not exhausted else MISSING
            proceed, value = self._check(constraint, value)
            if not proceed:
                return False, rewritten
            if not exhausted:
                rewritten[index] = value
            index += 1

    def _check(self, constraint: Constraint, value: Any) -> Tuple[bool, Any]:
        kind = constraint.kind

        if kind is ConstraintKind.LIST:
            if not is_list_shaped(value):
                return self._emit(False, constraint, value), value
            seen = len(self._violations)
            proceed, inner = self._validate(constraint.elements, list(value))
            if not proceed:
                return False, value
            value = _rebuild_sequence(value, inner)
            return self._emit(len(self._violations) == seen, constraint, value), value

        if kind is ConstraintKind.MAP:
            if not isinstance(value, Mapping):
                return self._emit(False, constraint, value), value
            keys = constraint.keys
            originals = [value.get(key, MISSING) for key in keys]
            seen = len(self._violations)
            proceed, inner = self._validate(constraint.constraints, originals)
            if not proceed:
                return False, value
            value = _rebuild_mapping(value, keys, originals, inner)
            return self._emit(len(self._violations) == seen, constraint, value), value

        if kind is ConstraintKind.OPTIONAL:
            if value is None or value is MISSING:
                return self._emit(True, constraint, value), value
            return self._check(constraint.inner, value)

        if kind is ConstraintKind.SPLAT:
            return self._check(constraint.inner, value)

        if kind in _EXECUTABLE_KINDS:
            matched = constraint.test(value)
            if matched and self._wrap_executables and constraint.parameterized:
                value = constraint.wrap(value, self._callbacks, self._location)
            return self._emit(matched, constraint, value), value

        if constraint.test(value):
            return self._emit(True, constraint, value), value
        return self._emit(False, constraint.culprit(value), value), value

    # ------------------------------------------------------------------
    # Callback plumbing
    # ------------------------------------------------------------------

    def _emit(self, passed: bool, constraint: Constraint, value: Any) -> bool:
        event = ValidationEvent(
            constraint=constraint,
            value=value,
            location=self._location,
            contract=self._contract,
        )
        if passed:
            return bool(self._callbacks.on_success(event))
        return self._failure(event)

    def _failure(self, event: ValidationEvent) -> bool:
        logger.debug("Constraint %r rejected %r", event.constraint, event.value)
        self._violations.append(event)
        return bool(self._callbacks.on_failure(event))


def _rebuild_sequence(original: Sequence[Any], values: List[Any]) -> Sequence[Any]:
    if all(new is old for new, old in zip(values, original)):
        return original
    if isinstance(original, tuple):
        return tuple(values)
    return list(values)


def _rebuild_mapping(original: Mapping, keys: Sequence[Any], before: List[Any], after: List[Any]) -> Mapping:
    changed = [(key, new) for key, old, new in zip(keys, before, after) if new is not old]
    if not changed:
        return original
    rebuilt = dict(original)
    rebuilt.update(changed)
    return rebuilt


__all__ = ["Matcher"]

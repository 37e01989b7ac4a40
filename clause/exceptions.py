# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Exception hierarchy for the clause contract engine."""

from __future__ import annotations

from typing import Any, Optional


class ClauseError(Exception):
    """Base class for every error raised by clause."""


class MalformedContractError(ClauseError):
    """A contract declaration is structurally invalid.

    Raised synchronously while the contract (or one of its constraints) is
    being built, never deferred to call time.
    """

    def __init__(self, signature: str, reason: str):
        self.signature = signature
        self.reason = reason
        super().__init__(f"Malformed contract for\n  {signature}\n  {reason}")


class ContractViolationError(ClauseError):
    """A call did not satisfy its contract.

    Carries the failing constraint, the offending value and the location the
    contract was declared at.
    """

    def __init__(
        self,
        *,
        contract: Any = None,
        constraint: Any = None,
        value: Any = None,
        location: Any = None,
    ):
        self.contract = contract
        self.constraint = constraint
        self.value = value
        self.location = location
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        function = getattr(self.location, "function", None) or "<anonymous callable>"
        lines = [f"Contract violation for {function}:"]
        if self.location is not None:
            lines.append(f"(declared in {self.location})")
        if self.contract is not None:
            lines.append(f"  {self.contract}")
        lines.append(f"  Expected {_render(self.constraint)}")
        lines.append(f"  Received {_render(self.value)}")
        return "\n".join(lines)


class NoMatchingContractError(ClauseError):
    """No registered implementation accepted the call arguments."""

    def __init__(self, function: str, candidates: Optional[list] = None):
        self.function = function
        self.candidates = list(candidates or [])
        rendered = "".join(f"\n  {candidate}" for candidate in self.candidates)
        super().__init__(f"No contract of '{function}' matches the given arguments:{rendered}")


def _render(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return "<unrepresentable>"


__all__ = [
    "ClauseError",
    "ContractViolationError",
    "MalformedContractError",
    "NoMatchingContractError",
]

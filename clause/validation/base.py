# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Per-call validation payloads: call sites, events and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from ..constraints.base import MISSING


@dataclass(frozen=True)
class CallSite:
    """Where a contract was declared, used to point error messages at source."""

    function: str
    filename: Optional[str] = None
    lineno: Optional[int] = None

    @classmethod
    def of(cls, func: Callable[..., Any]) -> "CallSite":
        code = getattr(func, "__code__", None)
        name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None) or repr(func)
        module = getattr(func, "__module__", None)
        if module and module != "__main__":
            name = f"{module}.{name}"
        return cls(
            function=name,
            filename=getattr(code, "co_filename", None),
            lineno=getattr(code, "co_firstlineno", None),
        )

    def __str__(self) -> str:
        if self.filename is None:
            return self.function
        if self.lineno is None:
            return self.filename
        return f"{self.filename}:{self.lineno}"


@dataclass(frozen=True)
class ValidationEvent:
    """One (constraint, value) comparison handed to success/failure callbacks."""

    constraint: Any
    value: Any
    location: Optional[CallSite] = None
    contract: Any = None


@dataclass
class ValidationResult:
    """Outcome of a validation pass.

    ``values`` holds the validated sequence after executable values were
    replaced by their contract-enforcing wrappers; callers must forward these
    rather than the originals. ``passed`` is False only when a callback asked
    to stop.
    """

    passed: bool
    values: Tuple[Any, ...] = ()
    violations: List[ValidationEvent] = field(default_factory=list)
    block: Any = MISSING

    def __bool__(self) -> bool:
        return self.passed

    @property
    def clean(self) -> bool:
        """True when no comparison failed, even under a continue-on-failure policy."""
        return self.passed and not self.violations

    def merge(self, other: "ValidationResult") -> None:
        self.passed = self.passed and other.passed
        self.violations.extend(other.violations)


__all__ = ["CallSite", "ValidationEvent", "ValidationResult"]

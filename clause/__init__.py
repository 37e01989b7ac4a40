"""clause - runtime contracts for Python callables.

Declare what a function accepts and returns, and clause checks every call:

.. code-block:: python

    from clause import contract, Returns, Splat

    @contract(Splat(int), Returns(int))
    def total(*numbers):
        return sum(numbers)
"""

from .constraints import (
    MISSING,
    Absent,
    And,
    Block,
    Constraint,
    Executable,
    ListOf,
    MapOf,
    Maybe,
    Not,
    Or,
    Pattern,
    Range,
    Returns,
    Splat,
    Test,
    TypeTag,
    UserFunction,
    Xor,
    as_constraint,
)
from .contracts import Contract
from .decorator import contract
from .exceptions import (
    ClauseError,
    ContractViolationError,
    MalformedContractError,
    NoMatchingContractError,
)
from .matching import clear_registry, match
from .runtime.settings import is_enabled, load_settings, reload_settings, set_enabled
from .validation import (
    CallSite,
    Callbacks,
    Matcher,
    ValidationEvent,
    ValidationResult,
    abort_silently,
    accept,
    log_and_continue,
    raise_violation,
)

__version__ = "0.3.0"

__all__ = [
    "MISSING",
    "Absent",
    "And",
    "Block",
    "CallSite",
    "Callbacks",
    "ClauseError",
    "Constraint",
    "Contract",
    "ContractViolationError",
    "Executable",
    "ListOf",
    "MalformedContractError",
    "MapOf",
    "Matcher",
    "Maybe",
    "NoMatchingContractError",
    "Not",
    "Or",
    "Pattern",
    "Range",
    "Returns",
    "Splat",
    "Test",
    "TypeTag",
    "UserFunction",
    "ValidationEvent",
    "ValidationResult",
    "Xor",
    "abort_silently",
    "accept",
    "as_constraint",
    "clear_registry",
    "contract",
    "is_enabled",
    "load_settings",
    "log_and_continue",
    "match",
    "raise_violation",
    "reload_settings",
    "set_enabled",
]

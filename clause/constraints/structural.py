# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""List and map constraints, plus coercion of raw specification values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Mapping, Tuple

from ..exceptions import MalformedContractError
from .base import (
    MISSING,
    Constraint,
    ConstraintKind,
    count_splats,
    describe,
    is_list_shaped,
    reject_markers,
)
from .predicates import Atom, predicate_for


def as_constraint(raw: Any) -> Constraint:
    """Coerce a raw specification value into a :class:`Constraint`.

    Lists and tuples become :class:`ListOf`, mappings become :class:`MapOf`,
    everything else becomes an :class:`Atom` around the matching predicate.
    Constraint classes passed without being instantiated are accepted when
    they take no parameters and refused otherwise.
    """

    if isinstance(raw, Constraint):
        return raw
    if isinstance(raw, type) and issubclass(raw, Constraint):
        return _bare_constraint_class(raw)
    if isinstance(raw, (list, tuple)):
        return ListOf(raw)
    if isinstance(raw, Mapping):
        return MapOf(raw)
    return Atom(predicate_for(raw))


def _bare_constraint_class(cls: type) -> Constraint:
    name = cls.__name__
    if cls.kind in (ConstraintKind.SPLAT, ConstraintKind.RETURNS):
        raise MalformedContractError(
            name,
            f"`{name}` is not a constraint; please supply a parameter (e.g. `{name}(str)`)",
        )
    try:
        return cls()
    except TypeError:
        raise MalformedContractError(
            name, f"`{name}` requires parameters and cannot be used bare"
        ) from None


@dataclass(frozen=True, repr=False, init=False)
class ListOf(Constraint):
    """Matches list-shaped values element-wise, with at most one ``Splat``."""

    elements: Tuple[Constraint, ...]

    kind = ConstraintKind.LIST

    def __init__(self, elements: Iterable[Any] = ()):
        coerced = tuple(as_constraint(item) for item in elements)
        owner = describe(list(coerced))
        reject_markers(owner, coerced, allow=(ConstraintKind.SPLAT,))
        count_splats(owner, coerced)
        object.__setattr__(self, "elements", coerced)

    def test(self, value: Any) -> bool:
        if not is_list_shaped(value):
            return False
        from ..validation.matcher import Matcher

        return Matcher.quiet().validate(self.elements, value).passed

    def describe(self) -> str:
        return "[" + ", ".join(e.describe() for e in self.elements) + "]"


@dataclass(frozen=True, repr=False, init=False)
class MapOf(Constraint):
    """Matches mappings by the keys it declares; extra keys in the value are ignored."""

    entries: Tuple[Tuple[Hashable, Constraint], ...]

    kind = ConstraintKind.MAP

    def __init__(self, entries: Any = ()):
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        coerced = tuple((key, as_constraint(raw)) for key, raw in pairs)
        owner = "{" + ", ".join(f"{k!r}: {c.describe()}" for k, c in coerced) + "}"
        for key, constraint in coerced:
            if constraint.kind is ConstraintKind.SPLAT:
                raise MalformedContractError(
                    owner,
                    f"`Splat` cannot be used as a mapping value (key {key!r}); "
                    "try wrapping it in a list first (e.g. `[Splat(str)]`)",
                )
        reject_markers(owner, (c for _, c in coerced))
        keys = [key for key, _ in coerced]
        if len(set(keys)) != len(keys):
            raise MalformedContractError(owner, "Mapping constraint declares the same key twice")
        object.__setattr__(self, "entries", coerced)

    @property
    def keys(self) -> Tuple[Hashable, ...]:
        return tuple(key for key, _ in self.entries)

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return tuple(constraint for _, constraint in self.entries)

    def test(self, value: Any) -> bool:
        if not isinstance(value, Mapping):
            return False
        from ..validation.matcher import Matcher

        values = [value.get(key, MISSING) for key in self.keys]
        return Matcher.quiet().validate(self.constraints, values).passed

    def describe(self) -> str:
        return "{" + ", ".join(f"{k!r}: {c.describe()}" for k, c in self.entries) + "}"


__all__ = ["ListOf", "MapOf", "as_constraint"]

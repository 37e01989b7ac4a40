# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Translate Python calls to and from the positional view contracts match on.

Contracts describe parameters positionally. A Python call may pass them by
keyword, skip defaulted ones or pass a receiver (``self``/``cls``), so the
decorator binds every call against the function signature first:

* the receiver is set aside and never validated,
* named positional parameters appear in order, with ``MISSING`` for gaps,
* ``*args`` values are appended,
* keyword-only parameters and ``**kwargs`` pass through untouched,
* the block parameter (if any) is pulled out for the contract's ``Block``.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..constraints.base import MISSING
from ..exceptions import MalformedContractError

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_RECEIVER_NAMES = ("self", "cls")


@dataclass
class BoundCall:
    receiver: Tuple[Any, ...]
    values: List[Any]
    block: Any = MISSING
    keywords: Dict[str, Any] = field(default_factory=dict)


class CallLayout:
    """Signature-derived recipe for splitting and rebuilding calls of one function."""

    def __init__(self, signature: inspect.Signature, *, block_param: Optional[str] = None, owner: str = "function"):
        params = list(signature.parameters.values())
        self._signature = signature
        self._receiver: Optional[inspect.Parameter] = None
        if params and params[0].kind in _POSITIONAL_KINDS and params[0].name in _RECEIVER_NAMES:
            self._receiver = params.pop(0)

        self._ordered = [p for p in params if p.kind in _POSITIONAL_KINDS]
        self._var_positional = next((p for p in params if p.kind is inspect.Parameter.VAR_POSITIONAL), None)
        self._var_keyword = next((p for p in params if p.kind is inspect.Parameter.VAR_KEYWORD), None)
        self._block_param = block_param

        if block_param is not None:
            named = {p.name: p for p in params}
            block = named.get(block_param)
            if block is None and self._var_keyword is None:
                raise MalformedContractError(
                    owner,
                    f"The contract declares a `Block` but the function has no `{block_param}` parameter",
                )
            if block is not None and block.kind is inspect.Parameter.POSITIONAL_ONLY:
                raise MalformedContractError(
                    owner, f"The block parameter `{block_param}` must accept keyword arguments"
                )

    @classmethod
    def of(cls, func: Any, *, block_param: Optional[str] = None, owner: Optional[str] = None) -> "CallLayout":
        return cls(
            inspect.signature(func),
            block_param=block_param,
            owner=owner or getattr(func, "__qualname__", repr(func)),
        )

    @property
    def positional_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self._ordered if p.name != self._block_param)

    def split(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> BoundCall:
        """Bind a call; raises ``TypeError`` exactly like calling the function would."""

        arguments = self._signature.bind(*args, **kwargs).arguments

        receiver: Tuple[Any, ...] = ()
        if self._receiver is not None and self._receiver.name in arguments:
            receiver = (arguments[self._receiver.name],)

        values = [arguments.get(p.name, MISSING) for p in self._ordered if p.name != self._block_param]
        while values and values[-1] is MISSING:
            values.pop()
        if self._var_positional is not None:
            values.extend(arguments.get(self._var_positional.name, ()))

        keywords: Dict[str, Any] = {}
        for name, value in arguments.items():
            param = self._signature.parameters[name]
            if param.kind is inspect.Parameter.KEYWORD_ONLY and name != self._block_param:
                keywords[name] = value
        if self._var_keyword is not None:
            keywords.update(arguments.get(self._var_keyword.name, {}))

        block = MISSING
        if self._block_param is not None:
            if self._block_param in arguments and self._block_param in self._signature.parameters:
                block = arguments[self._block_param]
            else:
                block = keywords.pop(self._block_param, MISSING)

        return BoundCall(receiver=receiver, values=values, block=block, keywords=keywords)

    def rebuild(self, call: BoundCall, values: Tuple[Any, ...], block: Any = MISSING) -> Tuple[List[Any], Dict[str, Any]]:
        """Turn a (possibly rewritten) positional view back into call arguments."""

        args: List[Any] = list(call.receiver)
        kwargs: Dict[str, Any] = dict(call.keywords)
        remaining = list(values)
        contiguous = True

        for param in self._ordered:
            if param.name == self._block_param:
                value = block
            elif remaining:
                value = remaining.pop(0)
            else:
                value = MISSING
            if value is MISSING:
                contiguous = False
                continue
            if contiguous:
                args.append(value)
            else:
                kwargs[param.name] = value

        if remaining:
            args.extend(remaining)
        if self._block_param is not None and block is not MISSING and self._block_param not in {p.name for p in self._ordered}:
            kwargs[self._block_param] = block
        return args, kwargs


__all__ = ["BoundCall", "CallLayout"]

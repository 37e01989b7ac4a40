"""
Tests for call binding - translating Python calls to positional contract views.
"""
from __future__ import annotations

import inspect

import pytest

from clause.constraints import MISSING
from clause.exceptions import MalformedContractError
from clause.runtime.binding import CallLayout


def _layout(func, **kwargs):
    return CallLayout(inspect.signature(func), **kwargs)


def test_positional_and_keyword_arguments_share_one_view():
    def f(a, b, c=3):
        return a, b, c

    layout = _layout(f)
    assert layout.split((1, 2), {}).values == [1, 2]
    assert layout.split((1,), {"b": 2}).values == [1, 2]
    assert layout.split((), {"a": 1, "b": 2, "c": 4}).values == [1, 2, 4]


def test_gaps_are_missing_and_trailing_gaps_trimmed():
    def f(a, b=None, c=None):
        return a, b, c

    layout = _layout(f)
    assert layout.split((1,), {"c": 3}).values == [1, MISSING, 3]
    assert layout.split((1,), {}).values == [1]


def test_var_positional_values_are_appended():
    def f(a, *rest, flag=False, **extra):
        return a, rest, flag, extra

    call = _layout(f).split((1, 2, 3), {"flag": True, "other": 4})
    assert call.values == [1, 2, 3]
    assert call.keywords == {"flag": True, "other": 4}


def test_receiver_is_set_aside():
    class Thing:
        def method(self, value):
            return value

    layout = CallLayout.of(Thing.method)
    thing = Thing()
    call = layout.split((thing, 5), {})
    assert call.receiver == (thing,)
    assert call.values == [5]
    assert layout.rebuild(call, (6,)) == ([thing, 6], {})


def test_rebuild_passes_values_after_a_gap_by_keyword():
    def f(a, b=None, c=None):
        return a, b, c

    layout = _layout(f)
    call = layout.split((1,), {"c": 3})
    args, kwargs = layout.rebuild(call, (10, MISSING, 30))
    assert args == [10]
    assert kwargs == {"c": 30}
    assert f(*args, **kwargs) == (10, None, 30)


def test_block_parameter_is_extracted_and_restored():
    def f(a, block=None):
        return a, block

    layout = _layout(f, block_param="block")
    marker = object()
    call = layout.split((1, marker), {})
    assert call.values == [1]
    assert call.block is marker
    replacement = object()
    assert layout.rebuild(call, (1,), replacement) == ([1, replacement], {})


def test_block_through_var_keyword():
    def f(a, **options):
        return a, options

    layout = _layout(f, block_param="block")
    marker = object()
    call = layout.split((1,), {"block": marker, "x": 2})
    assert call.block is marker
    assert call.keywords == {"x": 2}
    assert layout.rebuild(call, (1,), marker) == ([1], {"x": 2, "block": marker})


def test_missing_block_parameter_is_malformed():
    def f(a):
        return a

    with pytest.raises(MalformedContractError):
        _layout(f, block_param="block")


def test_bad_call_raises_type_error():
    def f(a):
        return a

    with pytest.raises(TypeError):
        _layout(f).split((1, 2), {})

import math

import pytest

from modu.packages.json_package import new_object
from modu.printer import format_float, to_display, to_repr
from modu.types.function import Function, NativeFunction
from modu.types.null import Null
from modu.types.object import ModuObject


@pytest.mark.parametrize(
    "value,expected",
    [
        (1.0, "1"),
        (-3.0, "-3"),
        (2.5, "2.5"),
        (0.1, "0.1"),
        (math.nan, "NaN"),
        (math.inf, "inf"),
        (-math.inf, "-inf"),
    ]
)
def test_format_float(value, expected):
    assert format_float(value) == expected


@pytest.mark.parametrize(
    "value,display,rep",
    [
        ("text", "text", '"text"'),
        (True, "true", "true"),
        (False, "false", "false"),
        (42, "42", "42"),
        (Null, "null", "null"),
        (ModuObject.new_array([1, "a"]), '[1, "a"]', '[1, "a"]'),
        (ModuObject({"k": ModuObject.new_array()}), '{"k": []}', '{"k": []}'),
        (ModuObject(), "{}", "{}"),
    ]
)
def test_display_and_repr(value, display, rep):
    assert to_display(value) == display
    assert to_repr(value) == rep


def test_method_keys_are_not_printed():
    obj = new_object({"a": 1})
    assert "set" in obj
    assert to_display(obj) == '{"a": 1}'


def test_functions_print_their_signature():
    fn = Function("f", ["a", "__args__"], [])
    assert to_display(fn) == "<fn f(a, __args__)>"
    assert to_display(NativeFunction("print", ["__args__"], lambda *a: Null)) == "<native fn print>"


def test_self_referencing_containers():
    obj = ModuObject({"a": 1})
    obj["self"] = obj
    assert to_display(obj) == '{"a": 1, "self": {...}}'
    arr = ModuObject.new_array()
    arr.push(arr)
    assert to_display(arr) == "[[...]]"

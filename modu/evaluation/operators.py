"""Arithmetic and comparison on Modu values.

Only `+`, `-`, `==` and `!=` exist. Kinds are decided with `kind_of`, which
tests bool before int because bool is an int subclass in Python.
"""

from modu import ModuValue
from modu.errors import ModuTypeError
from modu.printer import to_display
from modu.reader.lexer import INT64_MAX, INT64_MIN
from modu.types.function import Function, NativeFunction
from modu.types.null import Null, NullType
from modu.types.object import ModuObject


COMPARABLE_KINDS = frozenset({"Number", "Float", "String", "Boolean"})
NUMERIC_KINDS = frozenset({"Number", "Float"})


def kind_of(value: ModuValue) -> str:
    match value:
        case bool():
            return "Boolean"
        case int():
            return "Number"
        case float():
            return "Float"
        case str():
            return "String"
        case NullType():
            return "Null"
        case ModuObject():
            return "Object"
        case Function():
            return "Function"
        case NativeFunction():
            return "NativeFunction"
    raise ModuTypeError(f"Unknown value {value!r}")


def _checked(result: int) -> int:
    if result < INT64_MIN or result > INT64_MAX:
        raise ModuTypeError("Integer overflow")
    return result


def add(left: ModuValue, right: ModuValue) -> ModuValue:
    match kind_of(left), kind_of(right):
        case "Number", "Number":
            return _checked(left + right)
        case ("Number" | "Float"), ("Number" | "Float"):
            return float(left) + float(right)
        case "String", "String":
            return left + right
    raise ModuTypeError(f"Cannot add {to_display(left)} and {to_display(right)}")


def subtract(left: ModuValue, right: ModuValue) -> ModuValue:
    if right is Null:
        return left
    lk, rk = kind_of(left), kind_of(right)
    if lk == "Null" and rk == "Number":
        return _checked(-right)
    if lk == "Null" and rk == "Float":
        return -right
    if lk == rk == "Number":
        return _checked(left - right)
    if lk in NUMERIC_KINDS and rk in NUMERIC_KINDS:
        return float(left) - float(right)
    raise ModuTypeError(f"Cannot subtract {to_display(right)} from {to_display(left)}")


def is_equal(left: ModuValue, right: ModuValue) -> bool:
    lk = kind_of(left)
    if lk not in COMPARABLE_KINDS or lk != kind_of(right):
        return False
    return left == right


def is_unequal(left: ModuValue, right: ModuValue) -> bool:
    return not is_equal(left, right)


def exists(value: ModuValue) -> bool:
    return value is not Null

"""The `math` package: division and the usual numeric helpers.

Results follow the language's number rules: integer inputs give integer
results wherever the answer is exact, anything else is a float.
"""

import math
import random

from modu import ModuValue
from modu.errors import ModuRuntimeError, ModuTypeError
from modu.reader.lexer import INT64_MAX, INT64_MIN
from modu.types.function import native, evaluate_args
from modu.types.object import ModuObject


def _number(value: ModuValue, fn_name: str) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ModuTypeError(f"{fn_name}() requires a number")
    return value


def _as_int(value: float) -> int:
    result = int(value)
    if result < INT64_MIN or result > INT64_MAX:
        raise ModuRuntimeError("Integer overflow")
    return result


@native("div", "a", "b")
def div(args, env, evaluate_fn):
    a, b = evaluate_args(args, env, evaluate_fn)
    if isinstance(a, bool) or isinstance(b, bool) \
            or not isinstance(a, (int, float)) or not isinstance(b, (int, float)):
        raise ModuTypeError("div requires 2 numbers")
    if b == 0:
        raise ModuRuntimeError("cannot divide by zero")
    if isinstance(a, int) and isinstance(b, int):
        if a % b == 0:
            return _as_int(a // b)
        return a / b
    return a / b


@native("abs", "x")
def abs_(args, env, evaluate_fn):
    (x,) = evaluate_args(args, env, evaluate_fn)
    x = _number(x, "abs")
    return _as_int(abs(x)) if isinstance(x, int) else abs(x)


@native("pow", "base", "exponent")
def pow_(args, env, evaluate_fn):
    base, exponent = evaluate_args(args, env, evaluate_fn)
    base, exponent = _number(base, "pow"), _number(exponent, "pow")
    if isinstance(base, int) and isinstance(exponent, int) and exponent >= 0:
        # |base| >= 2 overflows int64 once the exponent passes 63.
        if abs(base) > 1 and exponent > 63:
            raise ModuRuntimeError("Integer overflow")
        return _as_int(base ** exponent)
    try:
        return math.pow(base, exponent)
    except (OverflowError, ValueError) as err:
        raise ModuRuntimeError(f"pow() failed: {err}") from err


@native("sqrt", "x")
def sqrt(args, env, evaluate_fn):
    (x,) = evaluate_args(args, env, evaluate_fn)
    x = _number(x, "sqrt")
    if x < 0:
        raise ModuRuntimeError("sqrt() of a negative number")
    return math.sqrt(x)


def _rounding(name: str, fn):
    @native(name, "x")
    def rounding(args, env, evaluate_fn):
        (x,) = evaluate_args(args, env, evaluate_fn)
        x = _number(x, name)
        if isinstance(x, int):
            return x
        if math.isnan(x) or math.isinf(x):
            raise ModuRuntimeError(f"{name}() of a non-finite number")
        return _as_int(fn(x))
    return rounding


floor = _rounding("floor", math.floor)
ceil = _rounding("ceil", math.ceil)
round_ = _rounding("round", round)


def _extreme(name: str, pick):
    @native(name, "__args__")
    def extreme(args, env, evaluate_fn):
        values = [_number(v, name) for v in evaluate_args(args, env, evaluate_fn)]
        if not values:
            raise ModuTypeError(f"{name}() requires at least one number")
        return pick(values)
    return extreme


max_ = _extreme("max", max)
min_ = _extreme("min", min)


@native("random")
def random_(args, env, evaluate_fn):
    return random.random()


def get_object() -> ModuObject:
    members = {fn.name: fn for fn in (div, abs_, pow_, sqrt, floor, ceil, round_, max_, min_, random_)}
    members["PI"] = math.pi
    members["E"] = math.e
    return ModuObject(members)

"""The `array` package.

Arrays are ordinary objects keyed "0", "1", ... plus "length"; every
operation here mutates the array it is given and keeps the indices
contiguous.
"""

from modu import ModuValue
from modu.errors import ModuNameError, ModuTypeError
from modu.types.function import native, evaluate_args
from modu.types.null import Null
from modu.types.object import ModuObject, copy_value


def _array(value: ModuValue, fn_name: str) -> ModuObject:
    if not isinstance(value, ModuObject):
        raise ModuTypeError(f"{fn_name}() expects an array")
    return value


@native("new")
def new(args, env, evaluate_fn):
    return ModuObject.new_array()


@native("at", "array", "index")
def at(args, env, evaluate_fn):
    arr, index = evaluate_args(args, env, evaluate_fn)
    if not isinstance(arr, ModuObject) or isinstance(index, bool) or not isinstance(index, int):
        raise ModuTypeError("at() expects an array and a number")
    key = str(index)
    if key not in arr:
        raise ModuNameError("no such element at that index")
    return arr[key]


@native("push", "array", "value")
def push(args, env, evaluate_fn):
    arr, item = evaluate_args(args, env, evaluate_fn)
    _array(arr, "push").push(copy_value(item))
    return Null


@native("pop", "array")
def pop(args, env, evaluate_fn):
    (arr,) = evaluate_args(args, env, evaluate_fn)
    return _array(arr, "pop").pop()


@native("shift", "array")
def shift(args, env, evaluate_fn):
    (arr,) = evaluate_args(args, env, evaluate_fn)
    return _array(arr, "shift").shift()


@native("unshift", "array", "value")
def unshift(args, env, evaluate_fn):
    arr, item = evaluate_args(args, env, evaluate_fn)
    _array(arr, "unshift").unshift(copy_value(item))
    return Null


def get_object() -> ModuObject:
    return ModuObject({fn.name: fn for fn in (new, at, push, pop, shift, unshift)})

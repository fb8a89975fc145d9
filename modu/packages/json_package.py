"""The `json` package.

Objects produced here carry an injected `set` method (a method key, see
ModuObject.methods) which never shows up when printing or encoding.
Arrays encode as JSON lists and JSON lists decode back into arrays.
"""

import json

from modu import ModuValue
from modu.errors import ModuRuntimeError, ModuTypeError
from modu.printer import to_display
from modu.types.function import Function, NativeFunction, native, evaluate_args
from modu.types.null import Null, NullType
from modu.types.object import ModuObject, copy_value

METHODS = ("set",)


@native("set", "self", "key", "value")
def set_(args, env, evaluate_fn):
    obj, key, value = evaluate_args(args, env, evaluate_fn)
    if not isinstance(obj, ModuObject):
        raise ModuTypeError("json.set must be called on an object")
    if not isinstance(key, str):
        raise ModuTypeError("json.set key must be a string")
    if key in obj.methods:
        raise ModuTypeError(f"json.set cannot overwrite the {key} method")
    obj[key] = copy_value(value)
    return obj


def new_object(properties=None) -> ModuObject:
    obj = ModuObject(properties, methods=METHODS)
    obj["set"] = set_
    return obj


def to_python(value: ModuValue):
    """Convert a Modu value into plain Python data for json.dumps."""
    match value:
        case NullType():
            return None
        case bool() | int() | float() | str():
            return value
        case ModuObject() if value.is_array:
            return [to_python(item) for item in value.elements()]
        case ModuObject():
            return {key: to_python(item) for key, item in value.plain_items()}
        case Function() | NativeFunction():
            raise ModuTypeError(f"Cannot encode {to_display(value)} as JSON")
    raise ModuTypeError(f"Cannot encode {value!r} as JSON")


def from_python(data) -> ModuValue:
    match data:
        case None:
            return Null
        case dict():
            return new_object({key: from_python(item) for key, item in data.items()})
        case list():
            return ModuObject.new_array(from_python(item) for item in data)
    return data


@native("new")
def new(args, env, evaluate_fn):
    return new_object()


@native("stringify", "object")
def stringify(args, env, evaluate_fn):
    (value,) = evaluate_args(args, env, evaluate_fn)
    if not isinstance(value, ModuObject):
        raise ModuTypeError("json.stringify argument must be an object")
    return json.dumps(to_python(value), separators=(",", ":"), ensure_ascii=False)


@native("parse", "string")
def parse(args, env, evaluate_fn):
    (text,) = evaluate_args(args, env, evaluate_fn)
    if not isinstance(text, str):
        raise ModuTypeError("json.parse argument must be a string")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise ModuRuntimeError(f"Invalid JSON: {err.msg} at line {err.lineno} column {err.colno}") from err
    if not isinstance(data, (dict, list)):
        raise ModuTypeError("json.parse expects an object or an array")
    return from_python(data)


def get_object() -> ModuObject:
    return ModuObject({fn.name: fn for fn in (new, stringify, parse)})

import math

from modu import ModuValue
from modu.types.null import NullType
from modu.types.object import ModuObject
from modu.types.function import Function, NativeFunction


def format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_display(value: ModuValue) -> str:
    """Render a value the way `print` shows it: top-level strings unquoted."""
    if isinstance(value, str):
        return value
    return to_repr(value)


def to_repr(value: ModuValue, _seen: frozenset[int] = frozenset()) -> str:
    """Render a value as it appears inside a container: strings quoted."""
    match value:
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case float():
            return format_float(value)
        case str():
            return f'"{value}"'
        case NullType():
            return "null"
        case Function() | NativeFunction():
            return str(value)
        case ModuObject():
            if id(value) in _seen:
                return "[...]" if value.is_array else "{...}"
            seen = _seen | {id(value)}
            if value.is_array:
                return "[" + ", ".join(to_repr(item, seen) for item in value.elements()) + "]"
            pairs = (f'"{key}": {to_repr(item, seen)}' for key, item in value.plain_items())
            return "{" + ", ".join(pairs) + "}"
    return repr(value)

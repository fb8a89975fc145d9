from modu.types.null import Null, NullType
from modu.types.object import ModuObject
from modu.types.function import Function, NativeFunction, VARIADIC_SENTINEL
from modu.types.environment import Environment

__all__ = [
    "Null",
    "NullType",
    "ModuObject",
    "Function",
    "NativeFunction",
    "VARIADIC_SENTINEL",
    "Environment",
]

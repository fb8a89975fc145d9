"""The `ffi` package: call a C function in a shared library.

The callee is invoked as `void *fn(int argc, char **argv)` with every extra
argument passed as a C string. A null result is null; a result that fits in
a 32-bit int is a number; anything else is read back as a C string.
"""

import ctypes
import logging

from modu.errors import ModuRuntimeError, ModuTypeError
from modu.types.function import native, evaluate_args
from modu.types.null import Null
from modu.types.object import ModuObject

logger = logging.getLogger(__name__)

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


@native("call", "__args__")
def call(args, env, evaluate_fn):
    values = evaluate_args(args, env, evaluate_fn)
    if len(values) < 2:
        raise ModuTypeError("ffi.call requires at least 2 arguments")
    path, name, *rest = values
    if not isinstance(path, str):
        raise ModuTypeError("ffi.call first argument must be a string")
    if not isinstance(name, str):
        raise ModuTypeError("ffi.call second argument must be a string")
    if not all(isinstance(v, str) for v in rest):
        raise ModuTypeError("ffi.call arguments must be strings")

    try:
        lib = ctypes.CDLL(path)
    except OSError as err:
        raise ModuRuntimeError(f"Failed to load library: {err}") from err
    try:
        fn = getattr(lib, name)
    except AttributeError as err:
        raise ModuRuntimeError(f"Failed to load function: {name}") from err

    fn.argtypes = [ctypes.c_int, ctypes.POINTER(ctypes.c_char_p)]
    fn.restype = ctypes.c_void_p
    argv = (ctypes.c_char_p * len(rest))(*(v.encode("utf-8") for v in rest))
    logger.debug("ffi call %s:%s with %d argument(s)", path, name, len(rest))
    result = fn(len(rest), argv)

    if result is None:
        return Null
    if INT32_MIN <= result <= INT32_MAX:
        return result
    return ctypes.string_at(result).decode("utf-8", errors="replace")


def get_object() -> ModuObject:
    return ModuObject({call.name: call})

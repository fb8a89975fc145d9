"""User-defined and host-provided function values for Modu."""

from __future__ import annotations

from io import StringIO
from typing import Callable

from modu import ModuValue, Node

# Parameter-list marker that disables the argument-count check.
VARIADIC_SENTINEL = "__args__"


class _Callable:
    __slots__ = ("name", "params")

    def __init__(self, name: str, params: list[str]):
        self.name: str = name
        self.params: list[str] = list(params)

    @property
    def is_variadic(self) -> bool:
        return bool(self.params) and self.params[-1] == VARIADIC_SENTINEL

    def accepts(self, count: int) -> bool:
        return self.is_variadic or count == len(self.params)

    # Functions are immutable once built; clones of an environment share them.
    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


class Function(_Callable):
    """A function defined in Modu source: parameter names plus a statement list."""

    __slots__ = ("body",)

    def __init__(self, name: str, params: list[str], body: list[Node]):
        super().__init__(name, params)
        self.body: list[Node] = list(body)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<fn ")
            buffer.write(self.name)
            buffer.write("(")
            buffer.write(", ".join(self.params))
            buffer.write(")>")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Function({self.name!r}, {self.params!r}, <{len(self.body)} statements>)"


# impl(args, env, evaluate_fn) -> value; args are unevaluated nodes.
NativeImpl = Callable[..., ModuValue]


class NativeFunction(_Callable):
    """A host-implemented function exposed to Modu code (builtins and packages)."""

    __slots__ = ("impl",)

    def __init__(self, name: str, params: list[str], impl: NativeImpl):
        super().__init__(name, params)
        self.impl: NativeImpl = impl

    def __call__(self, args, env, evaluate_fn) -> ModuValue:
        return self.impl(args, env, evaluate_fn)

    def __str__(self) -> str:
        return f"<native fn {self.name}>"

    def __repr__(self) -> str:
        return f"NativeFunction({self.name!r}, {self.params!r})"


def native(name: str, *params: str) -> Callable[[NativeImpl], NativeFunction]:
    """Decorator turning a plain Python function into a NativeFunction."""
    def wrap(impl: NativeImpl) -> NativeFunction:
        return NativeFunction(name, list(params), impl)
    return wrap


def evaluate_args(args, env, evaluate_fn) -> list[ModuValue]:
    """Evaluate every argument node of a native call, left to right."""
    return [evaluate_fn(arg, env) for arg in args]

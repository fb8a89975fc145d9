"""Built-in functions for the Modu runtime environment.

This module defines the functions every program can call without an import:
printing, reading input, primitive conversions and exit. They are native
functions, so each receives its argument nodes unevaluated.
"""
from __future__ import annotations

import math
import sys
from typing import Optional, TextIO

from modu import ModuValue
from modu.config import EvalConfig
from modu.errors import ModuRuntimeError, ModuTypeError
from modu.printer import to_display
from modu.types.environment import Environment
from modu.types.function import NativeFunction, native, evaluate_args
from modu.types.null import Null, NullType


def _output(config: EvalConfig) -> TextIO:
    return config.stdout if config.stdout is not None else sys.stdout


def make_print(config: EvalConfig) -> NativeFunction:
    @native("print", "__args__")
    def print_builtin(args, env, evaluate_fn):
        """Write the display forms of all arguments, unseparated, then a newline."""
        out = _output(config)
        out.write("".join(to_display(v) for v in evaluate_args(args, env, evaluate_fn)) + "\n")
        out.flush()
        return Null
    return print_builtin


def make_input(config: EvalConfig) -> NativeFunction:
    @native("input", "__args__")
    def input_builtin(args, env, evaluate_fn):
        """Show the arguments as a prompt and return one stripped line of stdin."""
        if config.server_mode:
            raise ModuRuntimeError("input() is disabled on the server")
        out = _output(config)
        out.write("".join(to_display(v) for v in evaluate_args(args, env, evaluate_fn)))
        out.flush()
        return sys.stdin.readline().strip()
    return input_builtin


def make_exit(config: EvalConfig) -> NativeFunction:
    @native("exit")
    def exit_builtin(args, env, evaluate_fn):
        if config.server_mode:
            raise ModuRuntimeError("exit() is disabled on the server")
        raise SystemExit(0)
    return exit_builtin


# -------------------------------
# Conversions
# -------------------------------
def _parse_number(text: str, target: str) -> int | float:
    try:
        return int(text.strip())
    except ValueError:
        pass
    try:
        return float(text.strip())
    except ValueError:
        raise ModuTypeError(f"Cannot convert \"{text}\" to {target}") from None


@native("int", "value")
def int_builtin(args, env, evaluate_fn) -> ModuValue:
    """int("42") / int("4.7") / int(true) / int(4.7): truncating conversion."""
    (value,) = evaluate_args(args, env, evaluate_fn)
    match value:
        case bool():
            return int(value)
        case int():
            return value
        case float() if not math.isfinite(value):
            raise ModuTypeError(f"Cannot convert {to_display(value)} to int")
        case float():
            return int(value)
        case str():
            number = _parse_number(value, "int")
            if isinstance(number, float) and not math.isfinite(number):
                raise ModuTypeError(f"Cannot convert \"{value}\" to int")
            return int(number)
    raise ModuTypeError("int() requires a string or boolean")


@native("float", "value")
def float_builtin(args, env, evaluate_fn) -> ModuValue:
    (value,) = evaluate_args(args, env, evaluate_fn)
    match value:
        case bool() | int() | float():
            return float(value)
        case str():
            return float(_parse_number(value, "float"))
    raise ModuTypeError("float() requires a string, boolean or number")


@native("str", "value")
def str_builtin(args, env, evaluate_fn) -> ModuValue:
    (value,) = evaluate_args(args, env, evaluate_fn)
    match value:
        case bool() | int() | float() | str() | NullType():
            return to_display(value)
    raise ModuTypeError("str() requires a string, number or boolean")


def register(env: Environment, config: Optional[EvalConfig] = None) -> None:
    """Register all builtin functions into the given environment."""
    config = config or EvalConfig()
    env.update(
        {
            "print": make_print(config),
            "input": make_input(config),
            "exit": make_exit(config),
            "int": int_builtin,
            "float": float_builtin,
            "str": str_builtin,
        }
    )

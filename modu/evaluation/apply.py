"""Application engine for Modu.

This module centralizes call semantics for the evaluator:
- Calls by name (`f(x)`) and calls through a property (`obj.f(x)`).
- User functions run in a clone of the caller's environment, so nothing a
  call binds is visible after it returns.
- Native functions receive their argument nodes unevaluated together with
  an evaluator callback, and decide themselves what to evaluate.
- Native methods injected into an object (see ModuObject.methods) get the
  object prepended as their first argument.
"""

from __future__ import annotations

from typing import Sequence

from modu import EvaluatorFn, ModuValue, Node
from modu.ast import Call, Identifier, Literal, PropertyAccess, PropertyCall
from modu.errors import ModuArityError, ModuNameError, ModuTypeError
from modu.evaluation.context import EvalContext, make_callback
from modu.evaluation.statements import ReturnSignal
from modu.printer import to_display
from modu.types.environment import Environment
from modu.types.function import Function, NativeFunction, VARIADIC_SENTINEL
from modu.types.null import Null
from modu.types.object import ModuObject


def _check_arity(fn: Function | NativeFunction, count: int) -> None:
    if not fn.accepts(count):
        expected = len(fn.params)
        noun = "argument" if expected == 1 else "arguments"
        raise ModuArityError(f"{fn.name} takes {expected} {noun}, got {count}")


def call_function(
    fn: Function,
    arg_nodes: Sequence[Node],
    env: Environment,
    ctx: EvalContext,
    evaluate_fn: EvaluatorFn,
    propagate_return: bool = True,
) -> ModuValue:
    """Apply a user-defined Function.

    - The call environment is a clone of `env`; arguments are evaluated in a
      second clone taken before any parameter is bound, so parameters never
      see each other.
    - For a variadic function the extra arguments are collected into an
      array bound to `__args__`; named parameters left without an argument
      are bound to null.
    - With `propagate_return` false a `return` is still evaluated, but it
      neither ends the body nor supplies the result, which is then null.
    """
    _check_arity(fn, len(arg_nodes))

    call_env = env.clone()
    arg_env = call_env.clone()
    values = [evaluate_fn(node, arg_env, ctx) for node in arg_nodes]

    named = fn.params[:-1] if fn.is_variadic else fn.params
    for i, param in enumerate(named):
        call_env.define(param, values[i] if i < len(values) else Null)
    if fn.is_variadic:
        call_env.define(VARIADIC_SENTINEL, ModuObject.new_array(values[len(named):]))

    with ctx.frame(fn.name):
        for statement in fn.body:
            ctx.count_statement(statement)
            try:
                evaluate_fn(statement, call_env, ctx)
            except ReturnSignal as ret:
                if propagate_return:
                    return ret.value
    return Null


def call_native(
    fn: NativeFunction,
    arg_nodes: Sequence[Node],
    env: Environment,
    ctx: EvalContext,
    evaluate_fn: EvaluatorFn,
) -> ModuValue:
    _check_arity(fn, len(arg_nodes))
    return fn(list(arg_nodes), env, make_callback(ctx, evaluate_fn))


def call_value(
    target: ModuValue,
    name: str,
    arg_nodes: Sequence[Node],
    env: Environment,
    ctx: EvalContext,
    evaluate_fn: EvaluatorFn,
) -> ModuValue:
    if isinstance(target, Function):
        return call_function(target, arg_nodes, env, ctx, evaluate_fn)
    if isinstance(target, NativeFunction):
        return call_native(target, arg_nodes, env, ctx, evaluate_fn)
    raise ModuTypeError(f"{name} is not a function")


def call_named(node: Call, env: Environment, ctx: EvalContext, evaluate_fn: EvaluatorFn) -> ModuValue:
    if node.name not in env:
        raise ModuNameError(f"Function {node.name} not found")
    return call_value(env[node.name], node.name, node.args, env, ctx, evaluate_fn)


def resolve_object(expr: Node, env: Environment, ctx: EvalContext, evaluate_fn: EvaluatorFn) -> ModuObject:
    if isinstance(expr, Identifier):
        if expr.name not in env:
            raise ModuNameError(f"Object {expr.name} not found")
        value = env[expr.name]
    else:
        value = evaluate_fn(expr, env, ctx)
    if not isinstance(value, ModuObject):
        raise ModuTypeError(f"{to_display(value)} is not an object")
    return value


def property_access(node: PropertyAccess, env: Environment, ctx: EvalContext, evaluate_fn: EvaluatorFn) -> ModuValue:
    obj = resolve_object(node.object, env, ctx, evaluate_fn)
    if node.property not in obj:
        raise ModuNameError(f"Property {node.property} not found")
    return obj[node.property]


def property_call(node: PropertyCall, env: Environment, ctx: EvalContext, evaluate_fn: EvaluatorFn) -> ModuValue:
    obj = resolve_object(node.object, env, ctx, evaluate_fn)
    if node.property not in obj:
        raise ModuNameError(f"Property {node.property} not found")
    member = obj[node.property]

    if isinstance(member, NativeFunction):
        args: tuple[Node, ...] = node.args
        if node.property in obj.methods:
            args = (Literal(obj, node.line),) + args
        return call_native(member, args, env, ctx, evaluate_fn)
    if isinstance(member, Function):
        return call_function(
            member, node.args, env, ctx, evaluate_fn,
            propagate_return=ctx.config.propagate_method_return,
        )
    raise ModuTypeError(f"{node.property} is not a function")

"""Core evaluator for the Modu interpreter.

Reduces one AST node to a value against a mutable Environment. Statements
are dispatched through STATEMENT_FORMS, calls through the application
engine, and everything else is matched here.
"""

from __future__ import annotations

from modu import ModuValue, Node
from modu.ast import (
    Addition, Call, Exists, Identifier, IsEqual, IsUnequal, Literal,
    ObjectLiteral, PropertyAccess, PropertyCall, StringLiteral, Subtraction,
)
from modu.errors import ModuError, ModuRuntimeError
from modu.evaluation.apply import call_named, property_access, property_call
from modu.evaluation.context import EvalContext
from modu.evaluation.operators import add, exists, is_equal, is_unequal, subtract
from modu.evaluation.statements import STATEMENT_FORMS
from modu.reader.lexer import unquote
from modu.types.environment import Environment
from modu.types.object import ModuObject, copy_value


def evaluate(node: Node, env: Environment, ctx: EvalContext | None = None) -> ModuValue:
    """
    Evaluate `node` in `env`. Any ModuError escaping without a line number
    is stamped with the line of the innermost node that saw it.
    """
    if ctx is None:
        ctx = EvalContext()
    try:
        return evaluate0(node, env, ctx)
    except ModuError as err:
        raise err.at_line(getattr(node, "line", 0))


def evaluate0(node: Node, env: Environment, ctx: EvalContext) -> ModuValue:
    handler = STATEMENT_FORMS.get(type(node))
    if handler is not None:
        return handler(node, env, ctx, evaluate)

    match node:
        case Literal(value=value):
            return value
        case StringLiteral(raw=raw):
            return unquote(raw)
        case Identifier(name=name):
            return env.lookup(name)
        case ObjectLiteral(properties=properties):
            return ModuObject({key: copy_value(evaluate(expr, env, ctx)) for key, expr in properties})
        case Addition(left=left, right=right):
            return add(evaluate(left, env, ctx), evaluate(right, env, ctx))
        case Subtraction(left=left, right=right):
            return subtract(evaluate(left, env, ctx), evaluate(right, env, ctx))
        case IsEqual(left=left, right=right):
            return is_equal(evaluate(left, env, ctx), evaluate(right, env, ctx))
        case IsUnequal(left=left, right=right):
            return is_unequal(evaluate(left, env, ctx), evaluate(right, env, ctx))
        case Exists(value=value):
            return exists(evaluate(value, env, ctx))
        case Call():
            return call_named(node, env, ctx, evaluate)
        case PropertyAccess():
            return property_access(node, env, ctx, evaluate)
        case PropertyCall():
            return property_call(node, env, ctx, evaluate)

    raise ModuRuntimeError(f"Cannot evaluate {type(node).__name__}")

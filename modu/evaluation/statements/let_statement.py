from modu import EvaluatorFn, ModuValue
from modu.ast import Identifier, Let
from modu.errors import ModuSyntaxError
from modu.types.environment import Environment
from modu.types.null import Null
from modu.types.object import copy_value

RESERVED_NAMES = frozenset({"let", "fn", "import", "if", "null"})


def let_statement(node: Let, env: Environment, ctx, evaluate_fn: EvaluatorFn) -> ModuValue:
    """
    let name = expr
    Copying a bare variable requires it to be bound, unlike a plain lookup.
    Objects are copied, so later changes to the source do not show through.
    """
    if node.name in RESERVED_NAMES:
        raise ModuSyntaxError(f"Cannot use reserved keyword '{node.name}' as a variable name")

    if isinstance(node.value, Identifier):
        value = env.require(node.value.name)
    else:
        value = evaluate_fn(node.value, env, ctx)
    env.define(node.name, copy_value(value))
    return Null

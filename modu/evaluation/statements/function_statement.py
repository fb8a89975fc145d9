from modu import EvaluatorFn, ModuValue
from modu.ast import FunctionDef
from modu.types.environment import Environment
from modu.types.function import Function
from modu.types.null import Null


def function_statement(node: FunctionDef, env: Environment, ctx, evaluate_fn: EvaluatorFn) -> ModuValue:
    env.define(node.name, Function(node.name, list(node.params), list(node.body)))
    return Null

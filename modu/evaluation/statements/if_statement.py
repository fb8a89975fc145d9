from modu import EvaluatorFn, ModuValue
from modu.ast import If
from modu.errors import ModuTypeError
from modu.evaluation.context import EvalContext, run_block
from modu.types.environment import Environment
from modu.types.null import Null


def if_statement(node: If, env: Environment, ctx: EvalContext, evaluate_fn: EvaluatorFn) -> ModuValue:
    """
    if cond { ... }
    The body runs against the enclosing environment itself, so its bindings
    outlive the statement. There is no else branch.
    """
    cond = evaluate_fn(node.condition, env, ctx)
    if not isinstance(cond, bool):
        raise ModuTypeError("If condition must evaluate to a boolean")
    if cond:
        run_block(node.body, env, ctx, evaluate_fn)
    return Null

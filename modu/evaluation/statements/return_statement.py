from modu import EvaluatorFn, ModuValue
from modu.ast import Return
from modu.types.environment import Environment
from modu.types.null import Null


class ReturnSignal(Exception):
    """Non-local exit from a function body carrying the returned value."""

    def __init__(self, value: ModuValue):
        super().__init__("return outside of a function call")
        self.value: ModuValue = value


def return_statement(node: Return, env: Environment, ctx, evaluate_fn: EvaluatorFn) -> ModuValue:
    """
    return [expr]
    Unwinds to the innermost function call; a bare `return` yields null.
    """
    value = Null if node.value is None else evaluate_fn(node.value, env, ctx)
    raise ReturnSignal(value)

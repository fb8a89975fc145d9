from modu.evaluation.context import EvalContext
from modu.evaluation.evaluator import evaluate

__all__ = ["EvalContext", "evaluate"]

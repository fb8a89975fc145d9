"""Per-run evaluation state.

An EvalContext is created once per program run and threaded through every
evaluation step. It carries the immutable EvalConfig and the stack of active
call frames used by the runaway guards:

- each frame counts the statements it has executed (if-bodies included, `return`
  excluded) and refuses to go past `config.max_body_statements`;
- the number of frames is bounded by `config.max_call_depth`.

Top-level program statements run outside any frame and are never counted.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from modu import EvaluatorFn, ModuValue, Node
from modu.ast import Return
from modu.config import EvalConfig
from modu.errors import ModuRecursionError
from modu.types.environment import Environment
from modu.types.null import Null

RECURSION_MESSAGE = "maximum recursion depth exceeded"


@dataclass
class Frame:
    name: str
    counted: bool = True
    statements: int = 0


@dataclass
class EvalContext:
    config: EvalConfig = field(default_factory=EvalConfig)
    frames: list[Frame] = field(default_factory=list)

    def derive(self, config: EvalConfig) -> EvalContext:
        """Context for a nested import: new config, same frame stack."""
        return EvalContext(config, self.frames)

    @contextmanager
    def frame(self, name: str, counted: bool = True) -> Iterator[Frame]:
        if len(self.frames) >= self.config.max_call_depth:
            raise ModuRecursionError(RECURSION_MESSAGE)
        current = Frame(name, counted)
        self.frames.append(current)
        try:
            yield current
        finally:
            self.frames.pop()

    def count_statement(self, statement: Node) -> None:
        # A reached `return` ends the body, so it never counts toward the cap.
        if not self.frames or isinstance(statement, Return):
            return
        current = self.frames[-1]
        if not current.counted:
            return
        current.statements += 1
        if current.statements > self.config.max_body_statements:
            raise ModuRecursionError(RECURSION_MESSAGE)


def run_block(
    body: Iterable[Node], env: Environment, ctx: EvalContext, evaluate_fn: EvaluatorFn
) -> ModuValue:
    """Execute statements in order against `env`, counting each one."""
    for statement in body:
        ctx.count_statement(statement)
        evaluate_fn(statement, env, ctx)
    return Null


def make_callback(ctx: EvalContext, evaluate_fn: EvaluatorFn) -> EvaluatorFn:
    """The (node, env) evaluator handed to native functions."""
    def evaluate_arg(node: Node, env: Environment) -> ModuValue:
        return evaluate_fn(node, env, ctx)
    return evaluate_arg


__all__ = ["EvalContext", "Frame", "RECURSION_MESSAGE", "run_block", "make_callback"]

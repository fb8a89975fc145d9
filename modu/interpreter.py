from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from modu.builtin.env_builtin import register
from modu.config import EvalConfig
from modu.errors import ModuError, ModuRecursionError
from modu.evaluation.context import EvalContext, RECURSION_MESSAGE
from modu.evaluation.evaluator import evaluate
from modu.reader.lexer import tokenize
from modu.reader.parser import parse_program
from modu.types.environment import Environment

logger = logging.getLogger(__name__)


def run_program(source: str, env: Environment, config: Optional[EvalConfig] = None) -> None:
    """Parse `source` and run each top-level statement as soon as it is read.

    Bindings land in `env`, which the caller keeps. The first error aborts
    the rest of the program and propagates as a ModuError.
    """
    ctx = EvalContext(config or EvalConfig())
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("tokens: %s", [(tok.kind, tok.text, tok.line) for tok in tokenize(source)])

    line = 0
    try:
        for statement in parse_program(source):
            line = statement.line
            logger.debug("statement: %r", statement)
            evaluate(statement, env, ctx)
    except RecursionError:
        raise ModuRecursionError(RECURSION_MESSAGE, line) from None


def format_error(err: ModuError, filename: str, source: Optional[str] = None) -> str:
    """Traceback-style report shown by the front ends.

    ⚠️  <message>
    Traceback (most recent call last):
        File "<filename>", line <n>
    followed by the offending source line when it is known.
    """
    lines = [
        f"⚠️  {err.message}",
        "Traceback (most recent call last):",
        f'    File "{filename}", line {err.line}',
    ]
    if source is not None and err.line > 0:
        source_lines = source.split("\n")
        if err.line <= len(source_lines):
            lines.append(f"      {source_lines[err.line - 1].strip()}")
    return "\n".join(lines)


class Interpreter:
    """
    A Modu session: one environment, seeded with the builtins, that programs
    are fed into one after the other. Bindings made by one call to `eval`
    are visible to the next.
    """
    def __init__(self, config: Optional[EvalConfig] = None):
        self.config = config or EvalConfig()
        self.env = Environment()
        register(self.env, self.config)

    def eval(self, source: str) -> None:
        run_program(source, self.env, self.config)

    def run_file(self, path: str | Path) -> None:
        """Run a source file; imports inside it resolve next to it."""
        path = Path(path)
        self.config = self.config.with_script(path)
        source = path.read_text(encoding="utf-8")
        run_program(source, self.env, self.config)

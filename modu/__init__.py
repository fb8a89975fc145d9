# Core type aliases for Modu's data model.
# Runtime values are plain Python types (bool, int, float, str) plus a few
# small classes: the Null singleton, Function, NativeFunction and ModuObject.
#
# Naming guidance:
# - Node:        an AST node produced by the parser (see modu.ast).
# - ModuValue:   an evaluated runtime value.
# - EvaluatorFn: the callback handed to native functions so they can decide
#                when (and whether) to evaluate their argument nodes.

import logging
from typing import Any, Callable

# Runtime value alias
ModuValue = Any
# AST node alias (concrete classes live in modu.ast)
Node = Any

# Evaluator callback: (node, env) -> value
EvaluatorFn = Callable[..., ModuValue]

# The library stays silent unless the embedding application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

SOURCE_EXTENSION = ".modu"

"""Registry of statement handlers for the Modu evaluator.

Maps AST node types to handler functions called as
`handler(node, env, ctx, evaluate_fn)`. The evaluator consults this table
before falling back to expression evaluation.
"""

from modu.ast import FunctionDef, If, Import, Let, Return
from modu.evaluation.statements.let_statement import let_statement
from modu.evaluation.statements.function_statement import function_statement
from modu.evaluation.statements.if_statement import if_statement
from modu.evaluation.statements.import_statement import import_statement
from modu.evaluation.statements.return_statement import return_statement, ReturnSignal

STATEMENT_FORMS = {
    Let: let_statement,
    FunctionDef: function_statement,
    If: if_statement,
    Import: import_statement,
    Return: return_statement,
}

__all__ = ["STATEMENT_FORMS", "ReturnSignal"]

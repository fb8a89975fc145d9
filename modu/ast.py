"""AST node definitions.

Every node is an immutable dataclass carrying the source line it came from,
which is what error messages report. Statements and expressions share one
closed set of node types; the evaluator matches on them exhaustively.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from modu import ModuValue


@dataclass(frozen=True)
class Literal:
    """Number, float, boolean or null literal; also any host value the
    evaluator needs to pass around as a node (e.g. a method's self object)."""
    value: ModuValue
    line: int = 0


@dataclass(frozen=True)
class StringLiteral:
    """String literal, still wrapped in its quotes and with escapes unresolved."""
    raw: str
    line: int = 0


@dataclass(frozen=True)
class Identifier:
    name: str
    line: int = 0


@dataclass(frozen=True)
class ObjectLiteral:
    properties: tuple[tuple[str, Expr], ...] = ()
    line: int = 0


@dataclass(frozen=True)
class Addition:
    left: Expr
    right: Expr
    line: int = 0


@dataclass(frozen=True)
class Subtraction:
    left: Expr
    right: Expr
    line: int = 0


@dataclass(frozen=True)
class IsEqual:
    left: Expr
    right: Expr
    line: int = 0


@dataclass(frozen=True)
class IsUnequal:
    left: Expr
    right: Expr
    line: int = 0


@dataclass(frozen=True)
class Exists:
    value: Expr
    line: int = 0


@dataclass(frozen=True)
class Call:
    name: str
    args: tuple[Expr, ...] = ()
    line: int = 0


@dataclass(frozen=True)
class PropertyAccess:
    object: Expr
    property: str
    line: int = 0


@dataclass(frozen=True)
class PropertyCall:
    object: Expr
    property: str
    args: tuple[Expr, ...] = ()
    line: int = 0


# --- Statements ---

@dataclass(frozen=True)
class Let:
    name: str
    value: Expr
    line: int = 0


@dataclass(frozen=True)
class Import:
    target: StringLiteral
    alias: Optional[str] = None     # None, an identifier, or "*"
    line: int = 0


@dataclass(frozen=True)
class FunctionDef:
    name: str
    params: tuple[str, ...] = ()
    body: tuple[Statement, ...] = ()
    line: int = 0


@dataclass(frozen=True)
class If:
    condition: Expr
    body: tuple[Statement, ...] = ()
    line: int = 0


@dataclass(frozen=True)
class Return:
    value: Optional[Expr] = None
    line: int = 0


Expr = Union[
    Literal, StringLiteral, Identifier, ObjectLiteral, Addition, Subtraction,
    IsEqual, IsUnequal, Exists, Call, PropertyAccess, PropertyCall,
]
Statement = Union[Let, Import, FunctionDef, If, Return, Expr]

STATEMENT_NODES = (Let, Import, FunctionDef, If, Return)

__all__ = [
    "Literal", "StringLiteral", "Identifier", "ObjectLiteral", "Addition",
    "Subtraction", "IsEqual", "IsUnequal", "Exists", "Call", "PropertyAccess",
    "PropertyCall", "Let", "Import", "FunctionDef", "If", "Return", "Expr",
    "Statement", "STATEMENT_NODES",
]

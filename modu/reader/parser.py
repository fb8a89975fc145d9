"""
  Modu parser

- Recursive descent over a TokenStream produced by `tokenize`.
- Lazy: `Parser.parse_program` yields each top-level statement as soon as it
  is complete, so the caller can run it before the next line is even lexed.
- Bodies of `fn` and `if` are tracked with a nesting counter; `return` is only
  accepted while a function body is open.
- An expression never continues across a line break, except inside an
  argument list or an object literal.
"""

from __future__ import annotations

from typing import Iterator, Iterable, Optional

from modu.errors import ModuSyntaxError, ModuLexError
from modu.types.null import Null
from modu.reader.lexer import Token, tokenize, unquote
from modu.ast import (
    Addition, Call, Exists, Expr, FunctionDef, Identifier, If, Import,
    IsEqual, IsUnequal, Let, Literal, ObjectLiteral, PropertyAccess,
    PropertyCall, Return, Statement, StringLiteral, Subtraction,
)

# Tokens that may be used as a binding name after `let` so that the evaluator
# can reject reserved words with a proper message.
NAME_TOKENS = ("identifier", "let", "fn", "import", "if", "return", "as")

STATEMENT_END = ("newline", "semicolon", "rbrace", "eof")


def _describe(tok: Token) -> str:
    if tok.kind == "eof":
        return "end of input"
    if tok.kind == "newline":
        return "end of line"
    return f"'{tok.text}'"


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.last_line = 0

    def peek(self) -> Token:
        if not self.buffer:
            try:
                tok = next(self.tokens)
            except StopIteration:
                return Token("eof", "", self.last_line)
            self.last_line = tok.line
            self.buffer.append(tok)
        return self.buffer[0]

    def advance(self) -> Token:
        tok = self.peek()
        if self.buffer:
            self.buffer.pop(0)
        return tok

    def expect(self, kind: str, message: str) -> Token:
        tok = self.peek()
        if tok.kind != kind:
            raise ModuSyntaxError(f"{message}, got {_describe(tok)}", tok.line)
        return self.advance()


class Parser:
    def __init__(self, stream: TokenStream):
        self.stream = stream
        # Open fn/if bodies, innermost last (line of the opening '{').
        self.open_bodies: list[int] = []
        self.function_depth = 0

    @property
    def depth(self) -> int:
        return len(self.open_bodies)

    # ------------------------
    # Program & statements
    # ------------------------
    def parse_program(self) -> Iterator[Statement]:
        while True:
            self._skip_separators()
            tok = self.stream.peek()
            if tok.kind == "eof":
                return
            if tok.kind == "rbrace":
                raise ModuSyntaxError("Unexpected '}' without an open body", tok.line)
            yield self._end_statement(self.parse_statement())

    def parse_statement(self) -> Statement:
        tok = self.stream.peek()
        match tok.kind:
            case "let":
                return self._parse_let()
            case "import":
                return self._parse_import()
            case "fn":
                return self._parse_function()
            case "if":
                return self._parse_if()
            case "return":
                return self._parse_return()
            case _:
                return self.parse_expr()

    def _end_statement(self, statement: Statement) -> Statement:
        tok = self.stream.peek()
        if tok.kind not in STATEMENT_END:
            raise ModuSyntaxError(f"Expected end of statement, got {_describe(tok)}", tok.line)
        return statement

    def _skip_separators(self) -> None:
        while self.stream.peek().kind in ("newline", "semicolon"):
            self.stream.advance()

    def _skip_newlines(self) -> None:
        while self.stream.peek().kind == "newline":
            self.stream.advance()

    def _parse_let(self) -> Let:
        let_tok = self.stream.advance()
        name_tok = self.stream.peek()
        if name_tok.kind not in NAME_TOKENS:
            raise ModuSyntaxError(
                f"Expected a variable name after 'let', got {_describe(name_tok)}", name_tok.line
            )
        self.stream.advance()
        self.stream.expect("assign", f"Expected '=' after 'let {name_tok.text}'")
        value = self.parse_expr()
        return Let(name_tok.text, value, let_tok.line)

    def _parse_import(self) -> Import:
        import_tok = self.stream.advance()
        target_tok = self.stream.expect("string", "Expected a string after 'import'")
        alias: Optional[str] = None
        if self.stream.peek().kind == "as":
            self.stream.advance()
            alias_tok = self.stream.peek()
            if alias_tok.kind not in ("identifier", "star"):
                raise ModuSyntaxError(
                    f"Expected an identifier or '*' after 'as', got {_describe(alias_tok)}",
                    alias_tok.line,
                )
            self.stream.advance()
            alias = alias_tok.text
        target = StringLiteral(target_tok.text, target_tok.line)
        return Import(target, alias, import_tok.line)

    def _parse_function(self) -> FunctionDef:
        fn_tok = self.stream.advance()
        name_tok = self.stream.expect("identifier", "Expected an identifier after 'fn'")
        self.stream.expect("lparen", f"Expected '(' after 'fn {name_tok.text}'")
        params: list[str] = []
        if self.stream.peek().kind != "rparen":
            while True:
                param = self.stream.expect("identifier", "Expected a parameter name")
                params.append(param.text)
                if self.stream.peek().kind != "comma":
                    break
                self.stream.advance()
        self.stream.expect("rparen", "Expected ')' after parameters")
        self.function_depth += 1
        try:
            body = self._parse_body()
        finally:
            self.function_depth -= 1
        return FunctionDef(name_tok.text, tuple(params), body, fn_tok.line)

    def _parse_if(self) -> If:
        if_tok = self.stream.advance()
        left = self.parse_expr()
        op = self.stream.peek()
        condition: Expr
        if op.kind in ("eq", "neq"):
            self.stream.advance()
            right = self.parse_expr()
            node_type = IsEqual if op.kind == "eq" else IsUnequal
            condition = node_type(left, right, if_tok.line)
        else:
            condition = Exists(left, if_tok.line)
        body = self._parse_body()
        return If(condition, body, if_tok.line)

    def _parse_return(self) -> Return:
        ret_tok = self.stream.advance()
        if self.function_depth == 0:
            raise ModuSyntaxError("'return' is only allowed inside a function body", ret_tok.line)
        if self.stream.peek().kind in STATEMENT_END:
            return Return(None, ret_tok.line)
        return Return(self.parse_expr(), ret_tok.line)

    def _parse_body(self) -> tuple[Statement, ...]:
        open_tok = self.stream.expect("lbrace", "Expected '{' to open the body")
        self.open_bodies.append(open_tok.line)
        statements: list[Statement] = []
        while True:
            self._skip_separators()
            tok = self.stream.peek()
            if tok.kind == "rbrace":
                self.stream.advance()
                self.open_bodies.pop()
                return tuple(statements)
            if tok.kind == "eof":
                raise ModuSyntaxError(
                    f"Expected '}}' to close the body opened on line {open_tok.line}", tok.line
                )
            statements.append(self._end_statement(self.parse_statement()))

    # ------------------------
    # Expressions
    # ------------------------
    def parse_expr(self) -> Expr:
        """expr := operand (("+" | "-") operand)*, left-associative."""
        left = self._parse_operand()
        while self.stream.peek().kind in ("plus", "minus"):
            op = self.stream.advance()
            right = self._parse_operand()
            if op.kind == "plus":
                left = Addition(left, right, op.line)
            else:
                left = Subtraction(left, right, op.line)
        return left

    def _parse_operand(self) -> Expr:
        tok = self.stream.peek()
        if tok.kind == "minus":
            # Unary minus is subtraction from an absent (null) left operand.
            self.stream.advance()
            return Subtraction(Literal(Null, tok.line), self._parse_operand(), tok.line)
        return self.parse_term()

    def parse_term(self) -> Expr:
        tok = self.stream.peek()
        match tok.kind:
            case "number":
                self.stream.advance()
                return Literal(int(tok.text), tok.line)
            case "float":
                self.stream.advance()
                return Literal(float(tok.text), tok.line)
            case "boolean":
                self.stream.advance()
                return Literal(tok.text == "true", tok.line)
            case "string":
                self.stream.advance()
                return StringLiteral(tok.text, tok.line)
            case "lbrace":
                return self._parse_object_literal()
            case "identifier":
                self.stream.advance()
                node: Expr = Identifier(tok.text, tok.line)
                if self.stream.peek().kind == "lparen":
                    node = Call(tok.text, self._parse_args(), tok.line)
                return self._parse_property_chain(node)
        raise ModuSyntaxError(f"Unexpected {_describe(tok)}, expected an expression", tok.line)

    def _parse_property_chain(self, node: Expr) -> Expr:
        while self.stream.peek().kind == "dot":
            self.stream.advance()
            prop = self.stream.expect("identifier", "Expected a property name after '.'")
            if self.stream.peek().kind == "lparen":
                node = PropertyCall(node, prop.text, self._parse_args(), prop.line)
            else:
                node = PropertyAccess(node, prop.text, prop.line)
        return node

    def _parse_args(self) -> tuple[Expr, ...]:
        self.stream.expect("lparen", "Expected '('")
        args: list[Expr] = []
        self._skip_newlines()
        if self.stream.peek().kind == "rparen":
            self.stream.advance()
            return ()
        while True:
            self._skip_newlines()
            args.append(self.parse_expr())
            self._skip_newlines()
            tok = self.stream.peek()
            if tok.kind == "comma":
                self.stream.advance()
                continue
            if tok.kind == "rparen":
                self.stream.advance()
                return tuple(args)
            raise ModuSyntaxError(
                f"Expected ',' or ')' after argument, got {_describe(tok)}", tok.line
            )

    def _parse_object_literal(self) -> ObjectLiteral:
        open_tok = self.stream.advance()
        properties: list[tuple[str, Expr]] = []
        while True:
            self._skip_newlines()
            tok = self.stream.peek()
            if tok.kind == "rbrace":
                self.stream.advance()
                return ObjectLiteral(tuple(properties), open_tok.line)
            if tok.kind == "string":
                key = unquote(tok.text)
            elif tok.kind in NAME_TOKENS or tok.kind == "boolean":
                key = tok.text
            else:
                raise ModuSyntaxError(
                    f"Expected a property name in object literal, got {_describe(tok)}", tok.line
                )
            self.stream.advance()
            self.stream.expect("colon", f"Expected ':' after property name '{key}'")
            self._skip_newlines()
            properties.append((key, self.parse_expr()))
            self._skip_newlines()
            sep = self.stream.peek()
            if sep.kind == "comma":
                self.stream.advance()
            elif sep.kind != "rbrace":
                raise ModuSyntaxError(
                    f"Expected ',' or '}}' in object literal, got {_describe(sep)}", sep.line
                )


def parse_program(source: str) -> Iterator[Statement]:
    """Lazily parse a whole program, yielding top-level statements."""
    return Parser(TokenStream(tokenize(source))).parse_program()


def parse_all(source: str) -> list[Statement]:
    return list(parse_program(source))


def needs_more_input(source: str) -> bool:
    """True while `source` still has an unclosed '{' or '('.

    Used by the interactive shell to decide whether to keep reading lines.
    Lexical errors are left for the real parse to report.
    """
    depth = 0
    try:
        for tok in tokenize(source):
            if tok.kind in ("lbrace", "lparen"):
                depth += 1
            elif tok.kind in ("rbrace", "rparen"):
                depth -= 1
    except ModuLexError:
        return False
    return depth > 0

import pytest
from hypothesis import given, strategies as st

from modu.ast import (
    Addition, Call, Exists, FunctionDef, Identifier, If, Import, IsEqual,
    IsUnequal, Let, Literal, ObjectLiteral, PropertyAccess, PropertyCall,
    Return, StringLiteral, Subtraction,
)
from modu.errors import ModuInvalidInteger, ModuLexError, ModuSyntaxError
from modu.reader.lexer import INT64_MAX, lex, tokenize, unquote
from modu.reader.parser import needs_more_input, parse_all, parse_program
from modu.types.null import Null


@pytest.mark.parametrize(
    "source,expected",
    [
        ("let x = 1", [("let", "let"), ("identifier", "x"), ("assign", "="), ("number", "1")]),
        ('"a b" + c', [("string", '"a b"'), ("plus", "+"), ("identifier", "c")]),
        ("3.14 == 2 != 1", [("float", "3.14"), ("eq", "=="), ("number", "2"), ("neq", "!="), ("number", "1")]),
        ('import "m.modu" as *', [("import", "import"), ("string", '"m.modu"'), ("as", "as"), ("star", "*")]),
        ("f(a, b); // trailing", [
            ("identifier", "f"), ("lparen", "("), ("identifier", "a"), ("comma", ","),
            ("identifier", "b"), ("rparen", ")"), ("semicolon", ";"),
        ]),
        ("/* gone */ true false", [("boolean", "true"), ("boolean", "false")]),
        ("{a: 1}", [("lbrace", "{"), ("identifier", "a"), ("colon", ":"), ("number", "1"), ("rbrace", "}")]),
        ("obj.p - 2", [("identifier", "obj"), ("dot", "."), ("identifier", "p"), ("minus", "-"), ("number", "2")]),
        ("fn return if", [("fn", "fn"), ("return", "return"), ("if", "if")]),
        ("_under_score9", [("identifier", "_under_score9")]),
    ]
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == expected


def test_lexer_rejects_unknown_text():
    with pytest.raises(ModuLexError) as excinfo:
        list(lex("let x = @", 4))
    assert excinfo.value.message == "Unexpected token: '@'"
    assert excinfo.value.line == 4


def test_integer_literal_range():
    assert list(lex(str(INT64_MAX))) == [("number", str(INT64_MAX))]
    with pytest.raises(ModuInvalidInteger) as excinfo:
        list(lex(str(INT64_MAX + 1)))
    assert str(excinfo.value) == f"Invalid integer: {INT64_MAX + 1}"


def test_tokenize_tags_lines_and_newlines():
    tokens = list(tokenize("let a = 1\nprint(a)"))
    assert [(t.kind, t.line) for t in tokens] == [
        ("let", 1), ("identifier", 1), ("assign", 1), ("number", 1), ("newline", 1),
        ("identifier", 2), ("lparen", 2), ("identifier", 2), ("rparen", 2), ("newline", 2),
    ]


def test_block_comment_spanning_lines():
    tokens = list(tokenize("a /* one\ntwo */ b"))
    assert [(t.kind, t.text) for t in tokens if t.kind != "newline"] == [
        ("identifier", "a"), ("identifier", "b"),
    ]


def test_unterminated_block_comment():
    with pytest.raises(ModuLexError, match="Unterminated block comment"):
        list(tokenize("a /* never\nclosed"))


@pytest.mark.parametrize(
    "raw,expected",
    [
        ('"plain"', "plain"),
        ('"tab\\there"', "tab\there"),
        ('"line\\nbreak"', "line\nbreak"),
        ('"back\\\\slash"', "back\\slash"),
        ('"keep \\q"', "keep \\q"),
        ('""', ""),
    ]
)
def test_unquote(raw, expected):
    assert unquote(raw) == expected


# ------------------------
# Parser
# ------------------------

def test_let_with_addition():
    assert parse_all("let x = 1 + 2") == [
        Let("x", Addition(Literal(1, 1), Literal(2, 1), 1), 1)
    ]


def test_unary_minus_is_subtraction_from_null():
    (node,) = parse_all("-5")
    assert node == Subtraction(Literal(Null, 1), Literal(5, 1), 1)


def test_binary_operators_are_left_associative():
    (node,) = parse_all("1 - 2 - 3")
    assert isinstance(node, Subtraction)
    assert isinstance(node.left, Subtraction)
    assert node.right == Literal(3, 1)


def test_deeply_nested_arguments():
    (node,) = parse_all('f(g(h(1+2), "x").y(3))')
    assert isinstance(node, Call) and node.name == "f"
    (inner,) = node.args
    assert isinstance(inner, PropertyCall)
    assert inner.property == "y"
    assert inner.args == (Literal(3, 1),)
    g = inner.object
    assert isinstance(g, Call) and g.name == "g"
    h, x = g.args
    assert isinstance(h, Call) and isinstance(h.args[0], Addition)
    assert x == StringLiteral('"x"', 1)


def test_property_chain():
    (node,) = parse_all("a.b.c")
    assert node == PropertyAccess(PropertyAccess(Identifier("a", 1), "b", 1), "c", 1)


def test_if_with_comparison_and_existence():
    eq, neq, exists = parse_all('if 1 + 1 == 2 { print("ok") }\nif a != b { }\nif x { }')
    assert isinstance(eq, If) and isinstance(eq.condition, IsEqual)
    assert isinstance(eq.condition.left, Addition)
    assert isinstance(eq.body[0], Call)
    assert isinstance(neq.condition, IsUnequal)
    assert neq.body == ()
    assert exists.condition == Exists(Identifier("x", 3), 3)


def test_function_definition():
    (node,) = parse_all("fn add(a, b) {\n  return a + b\n}")
    assert isinstance(node, FunctionDef)
    assert node.name == "add"
    assert node.params == ("a", "b")
    (ret,) = node.body
    assert isinstance(ret, Return) and isinstance(ret.value, Addition)
    assert ret.line == 2


def test_bare_return():
    (node,) = parse_all("fn f() { return }")
    assert node.body == (Return(None, 1),)


@pytest.mark.parametrize(
    "source,alias",
    [
        ('import "math"', None),
        ('import "math" as m', "m"),
        ('import "lib.modu" as *', "*"),
    ]
)
def test_import(source, alias):
    (node,) = parse_all(source)
    assert isinstance(node, Import)
    assert node.alias == alias


def test_object_literal():
    (node,) = parse_all('let o = {a: 1, "b c": "x",\n  d: f(2),}')
    assert isinstance(node.value, ObjectLiteral)
    keys = [key for key, _ in node.value.properties]
    assert keys == ["a", "b c", "d"]


def test_object_literal_string_keys_are_unquoted():
    (node,) = parse_all('let o = {"tab\\there": 1}')
    ((key, _),) = node.value.properties
    assert key == "tab\there"


def test_statement_separators():
    assert len(parse_all("let a = 1; let b = 2\n\nprint(a)")) == 3


def test_parse_program_is_lazy():
    statements = parse_program("let a = 1\nlet = 2")
    assert isinstance(next(statements), Let)
    with pytest.raises(ModuSyntaxError):
        next(statements)


@pytest.mark.parametrize(
    "source,message",
    [
        ("return 1", "'return' is only allowed inside a function body"),
        ("fn (a) { }", "Expected an identifier after 'fn'"),
        ("fn f(a { }", "Expected ')' after parameters"),
        ("f(1 2)", "Expected ',' or ')' after argument"),
        ("let 5 = 1", "Expected a variable name after 'let'"),
        ("}", "Unexpected '}'"),
        ("print(1 +)", "expected an expression"),
        ('import math', "Expected a string after 'import'"),
        ('import "m" as 1', "Expected an identifier or '*' after 'as'"),
        ("let x = 1 2", "Expected end of statement, got '2'"),
        ("fn f() { } print(1)", "Expected end of statement"),
        ("if x { let a = 1 let b = 2 }", "Expected end of statement"),
    ]
)
def test_syntax_errors(source, message):
    with pytest.raises(ModuSyntaxError) as excinfo:
        parse_all(source)
    assert message in excinfo.value.message


def test_unclosed_body_names_its_line():
    with pytest.raises(ModuSyntaxError) as excinfo:
        parse_all("let a = 1\nfn f() {\n  let x = 1\n")
    assert "opened on line 2" in excinfo.value.message


@pytest.mark.parametrize(
    "source,expected",
    [
        ("fn f() {", True),
        ("fn f() {\n}", False),
        ("print(1,", True),
        ("let a = 1", False),
        ("", False),
        ("let a = @", False),
    ]
)
def test_needs_more_input(source, expected):
    assert needs_more_input(source) is expected


@given(st.integers(min_value=0, max_value=INT64_MAX))
def test_integer_literals_parse_exactly(n):
    assert parse_all(str(n)) == [Literal(n, 1)]


@given(st.text(alphabet=st.characters(exclude_characters='"\\\n\r'), max_size=20))
def test_string_literals_round_trip(text):
    (node,) = parse_all(f'"{text}"')
    assert isinstance(node, StringLiteral)
    assert unquote(node.raw) == text

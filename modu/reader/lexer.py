"""
  Modu tokenizer

- Works one source line at a time: `lex(line)` yields (kind, text) pairs.
- `tokenize(source)` drives it over a whole program, tagging each token with
  its line number and emitting a `newline` token at the end of every line.
- Whitespace and comments are skipped; a `/* ... */` comment may span lines
  when a whole program is tokenized.
- Integer literals are checked against the signed 64-bit range.
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple

from modu.errors import ModuInvalidInteger, ModuLexError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

KEYWORDS: dict[str, str] = {
    "let": "let",
    "fn": "fn",
    "import": "import",
    "return": "return",
    "as": "as",
    "if": "if",
    "true": "boolean",
    "false": "boolean",
}

TOKEN_RE = re.compile(
    r"(?P<line_comment>//[^\n]*)"  # single-line comment
    r"|(?P<block_comment>/\*(?:[^*]|\*(?!/))*\*/)"  # complete block comment
    r"|(?P<block_start>/\*)"  # block comment continuing on later lines
    r"|(?P<float>[0-9]+\.[0-9]+)"
    r"|(?P<number>[0-9]+)"
    r'|(?P<string>"[^"]*")'  # no escaped-quote awareness
    r"|(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<eq>==)"
    r"|(?P<neq>!=)"
    r"|(?P<assign>=)"
    r"|(?P<plus>\+)"
    r"|(?P<minus>-)"
    r"|(?P<star>\*)"
    r"|(?P<dot>\.)"
    r"|(?P<comma>,)"
    r"|(?P<semicolon>;)"
    r"|(?P<colon>:)"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<lbrace>\{)"
    r"|(?P<rbrace>\})"
)

WHITESPACE_RE = re.compile(r"[ \t\r\f\v]+")
BLOCK_END_RE = re.compile(r"(?:[^*]|\*(?!/))*\*/")


class Token(NamedTuple):
    kind: str
    text: str
    line: int


class UnterminatedComment(ModuLexError):
    """Raised when a line ends inside a block comment."""

    def __init__(self, line: int = 0):
        super().__init__("Unterminated block comment", line)


def _check_integer(text: str, line: int) -> None:
    if int(text) > INT64_MAX:
        raise ModuInvalidInteger(f"Invalid integer: {text}", line)


def lex(source: str, line: int = 0) -> Iterator[tuple[str, str]]:
    """Token generator for one line: yields (kind, text) tuples.

    Raises ModuLexError for unrecognised text and ModuInvalidInteger for an
    integer literal that overflows 64 bits. Raises UnterminatedComment when
    the line ends inside a block comment.
    """
    pos = 0
    n = len(source)
    while pos < n:
        ws = WHITESPACE_RE.match(source, pos)
        if ws:
            pos = ws.end()
            continue

        m = TOKEN_RE.match(source, pos)
        if not m:
            # Report the whole run of unrecognised text up to the next space.
            end = pos + 1
            while end < n and not source[end].isspace() and not TOKEN_RE.match(source, end):
                end += 1
            raise ModuLexError(f"Unexpected token: {source[pos:end]!r}", line)

        kind = m.lastgroup
        text = m.group(kind)
        pos = m.end()

        if kind in ("line_comment", "block_comment"):
            continue
        if kind == "block_start":
            raise UnterminatedComment(line)
        if kind == "identifier":
            kind = KEYWORDS.get(text, "identifier")
        elif kind == "number":
            _check_integer(text, line)
        yield kind, text


def tokenize(source: str) -> Iterator[Token]:
    """Token generator for a whole program, one line at a time."""
    in_comment_since = 0
    for line_no, line in enumerate(source.split("\n"), start=1):
        if in_comment_since:
            end = BLOCK_END_RE.match(line)
            if not end:
                continue
            line = " " * end.end() + line[end.end():]
            in_comment_since = 0

        tokens: list[tuple[str, str]] = []
        try:
            for kind, text in lex(line, line_no):
                tokens.append((kind, text))
        except UnterminatedComment:
            in_comment_since = line_no

        for kind, text in tokens:
            yield Token(kind, text, line_no)
        yield Token("newline", "\n", line_no)

    if in_comment_since:
        raise ModuLexError("Unterminated block comment", in_comment_since)


ESCAPES = {"t": "\t", "n": "\n", "r": "\r", '"': '"', "\\": "\\"}


def unquote(raw: str) -> str:
    """Strip the surrounding quotes of a string token and resolve its escapes.

    Only \\t \\n \\r \\" and \\\\ are escapes; any other backslash is kept as is.
    """
    body = raw[1:-1] if len(raw) >= 2 and raw[0] == raw[-1] == '"' else raw
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body) and body[i + 1] in ESCAPES:
            out.append(ESCAPES[body[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)

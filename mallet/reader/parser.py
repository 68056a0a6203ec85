"""
  Mallet Reader: Lexer and Parser

- Streaming, lazy parsing over a token generator
- Emits Mallet values directly:

    - nil / true / false -> Nil / True / False
    - numbers            -> float
    - "strings"          -> str (escapes resolved)
    - :keywords          -> Keyword
    - symbols            -> Symbol
    - ( ... )            -> List
    - [ ... ]            -> Vector
    - { ... }            -> HashMap (string/keyword keys only)
    - 'x `x ~x ~@x @x    -> (quote x) (quasiquote x) (unquote x) (splice-unquote x) (deref x)
    - ^m x               -> (with-meta x m)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional, Iterable

from mallet import SExpression
from mallet.errors import EmptyProgram, ParserError, TokenizerError
from mallet.types.collections import HashMap, List, Vector
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword, Symbol


TOKEN_RE = re.compile(
    r"[\s,]*(?:"
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<splice_unquote>~@)"  # ~@
    r"|(?P<special>[\[\]{}()'`~^@])"  # delimiters and reader macros
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<bad_string>")'  # string missing its closing quote
    r"|(?P<atom>[^\s\[\]{}('\"`,;)]+)"  # numbers, keywords, symbols
    r")"
)

SEPARATORS_RE = re.compile(r"[\s,]*")

NUMBER_RE = re.compile(r"-?\d+(?:\.\d*)?(?:[eE][-+]?\d+)?")

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    "~": Symbol("unquote"),
    "~@": Symbol("splice-unquote"),
    "@": Symbol("deref"),
}

CLOSERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}

ESCAPES: dict[str, str] = {"n": "\n", "\\": "\\", '"': '"'}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            # Only separators remain
            if SEPARATORS_RE.fullmatch(source, pos):
                return
            raise TokenizerError(f"unexpected character {source[pos]!r} at {pos}")
        pos = m.end()
        kind = m.lastgroup
        if kind == "comment":
            continue
        if kind == "bad_string":
            raise TokenizerError("expected '\"', got EOF")
        yield kind, m.group(kind)


def _unescape(body: str) -> str:
    return re.sub(r"\\(.)", lambda m: ESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)


def _read_atom(tok_val: str) -> SExpression:
    if tok_val == "nil":
        return Nil
    if tok_val == "true":
        return True
    if tok_val == "false":
        return False
    if NUMBER_RE.fullmatch(tok_val):
        return float(tok_val)
    if tok_val.startswith(":") and len(tok_val) > 1:
        return Keyword(tok_val[1:])
    return Symbol(tok_val)


class TokenStream:
    def __init__(self, token_iter: Iterable[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[SExpression]:
        """Parse the next form, or return None when the tokens run out."""
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None
        return self._parse_form()

    def _parse_form(self) -> SExpression:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise ParserError("unexpected EOF")

        if tok_type == "atom":
            return _read_atom(tok_val)

        if tok_type == "string":
            return _unescape(tok_val[1:-1])

        # Reader macros wrap the following form
        if tok_val in QUOTE_FORMS:
            return List([QUOTE_FORMS[tok_val], self._parse_form()])

        if tok_val == "^":
            meta = self._parse_form()
            target = self._parse_form()
            return List([Symbol("with-meta"), target, meta])

        if tok_val in CLOSERS:
            items = self._parse_seq(CLOSERS[tok_val])
            if tok_val == "(":
                return List(items)
            if tok_val == "[":
                return Vector(items)
            return HashMap.from_arguments(items)

        raise ParserError(f"unexpected '{tok_val}'")

    def _parse_seq(self, closer: str) -> list[SExpression]:
        items: list[SExpression] = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise ParserError(f"expected '{closer}', got EOF")
            if tok_type == "special" and tok_val == closer:
                self.advance()
                return items
            items.append(self._parse_form())

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self._parse_form()


def read_str(source: str) -> SExpression:
    """Read the first form in `source`.

    Raises EmptyProgram when the text holds no form at all (only whitespace
    or comments).
    """
    stream = TokenStream(lex(source))
    expr = stream.parse_expr()
    if expr is None:
        raise EmptyProgram()
    return expr


def read_all(source: str) -> Iterator[SExpression]:
    """Yield every form in `source` in order."""
    return TokenStream(lex(source)).parse_all()

"""
  Reader, Lexer and Parser

- Streaming lexer, recursive-descent parser
- Emits plain Python values:

    - numbers -> float
    - strings -> str (quotes stripped, escapes kept verbatim)
    - #t / #true / #f / #false -> bool
    - groups -> list; ( and [ both open, ) and ] both close
    - anything else -> Symbol

 The reader is lenient: an unclosed group keeps what was read, a stray closer
 at top level is skipped and an unterminated string is dropped. Each of these
 sets TokenStream.truncated so callers may report it.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from stepwise import SExpression
from stepwise.errors import StepwiseSyntaxError
from stepwise.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"(?P<space>\s+)"
    r"|(?P<lparen>[(\[])"  # ( or [
    r"|(?P<rparen>[)\]])"  # ) or ]
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings, backslash skips one char
    r'|(?P<open_string>"(?:\\.|[^\\"])*\\?\Z)'  # string running off the end
    r'|(?P<symbol>[^\s()\[\]"]+)',  # bare tokens
    re.DOTALL,
)

NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

TRUE_TOKENS = ("#t", "#true")
FALSE_TOKENS = ("#f", "#false")


def bake_token(token: str) -> SExpression:
    """Turn a raw token into a literal, in order: boolean, number, string, symbol."""
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    if NUMBER_RE.fullmatch(token):
        return float(token)
    if len(token) >= 2 and token[0] == '"' and token[-1] == '"':
        return token[1:-1]
    return Symbol(token)


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples, whitespace skipped."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        # Every character matches one alternative, so m is never None here.
        pos = m.end()
        kind = m.lastgroup
        if kind == "space":
            continue
        yield kind, m.group(kind)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []
        self.truncated = False

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

    def _skip_unreadable(self) -> None:
        """Drop stray closers and unterminated strings, noting the truncation."""
        while self.peek()[0] in ("rparen", "open_string"):
            self.truncated = True
            self.advance()

    def parse_expr(self) -> SExpression:
        """Parse one expression. The caller must have checked that a token remains."""
        tok_type, tok_val = self.advance()

        if tok_type == "lparen":
            items = []
            while True:
                nxt_type, _ = self.peek()
                if nxt_type is None:
                    # Ran off the end inside a group
                    self.truncated = True
                    break
                if nxt_type == "rparen":
                    self.advance()
                    break
                if nxt_type == "open_string":
                    self.truncated = True
                    self.advance()
                    continue
                items.append(self.parse_expr())
            return items

        return bake_token(tok_val)

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            self._skip_unreadable()
            if self.peek()[0] is None:
                break
            yield self.parse_expr()


def tokenize(source: str, strict: bool = False) -> list[SExpression]:
    """Read `source` into the program: the list of its top-level forms.

    With `strict`, a truncated read raises StepwiseSyntaxError instead of
    returning the partial tree.
    """
    stream = TokenStream(lex(source))
    program = list(stream.parse_all())
    if strict and stream.truncated:
        raise StepwiseSyntaxError("Unbalanced group or unterminated string in source")
    return program

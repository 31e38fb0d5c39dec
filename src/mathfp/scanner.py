## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import functools
from typing import Iterator
from dataclasses import dataclass

import lark
from .errors import MathLexError


TERMINALS = r"""start: (NUMBER | NAME | MAPSTO | ASSIGN | COMPARE | ARITH | LPAR | RPAR | COMMA | SEMI | NEWLINE)*

// NUMBERS accept unfinished fractions and signed exponents; they are rejected after matching.
NUMBER: /(?:\d+(?:\.\d*)?|\.\d+)(?:[eE](?:[+-]\d*|\d+))?/
NAME: /[A-Za-z_][A-Za-z0-9_]*/

// OPERATORS, longest first by construction of the lexer.
MAPSTO: "|->"
ASSIGN: ":="
COMPARE: "<=" | ">=" | "==" | "!=" | "<" | ">"
ARITH: "+" | "-" | "*" | "/" | "%"

// PUNCTUATION
LPAR: "("
RPAR: ")"
COMMA: ","
SEMI: ";"
NEWLINE: /\r?\n/

// WHITESPACE & COMMENTS
COMMENT: /#[^\n]*/
WS_INLINE: /[ \t\f\r]+/
%ignore WS_INLINE
%ignore COMMENT
"""

NUMBER, IDENTIFIER, KEYWORD, OPERATOR, PUNCTUATION, END = \
    'number', 'identifier', 'keyword', 'operator', 'punctuation', 'end'

KEYWORDS = frozenset(('if', 'then', 'else'))

_KIND_OF_TERMINAL = {
    'NUMBER': NUMBER, 'NAME': IDENTIFIER,
    'MAPSTO': OPERATOR, 'ASSIGN': OPERATOR, 'COMPARE': OPERATOR, 'ARITH': OPERATOR,
    'LPAR': PUNCTUATION, 'RPAR': PUNCTUATION, 'COMMA': PUNCTUATION, 'SEMI': PUNCTUATION,
    'NEWLINE': PUNCTUATION,
}

_COMPLETE_NUMBER = re.compile(r'(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][+-]?\d+)?')


@dataclass(frozen=True)
class Token:
    kind: str
    lexeme: str
    line: int
    column: int

    def is_(self, lexeme: str) -> bool:
        return self.kind in (OPERATOR, PUNCTUATION, KEYWORD) and self.lexeme == lexeme

    def describe(self) -> str:
        if self.kind == END: return "end of input"
        if self.lexeme == '\n': return "newline"
        if self.kind == NUMBER: return f"number {self.lexeme}"
        if self.kind == IDENTIFIER: return f"identifier `{self.lexeme}`"
        return f"`{self.lexeme}`"


@functools.cache
def _lexer() -> lark.Lark:
    return lark.Lark(TERMINALS, parser="lalr", lexer="basic")


def _end_position(source: str) -> tuple[int, int]:
    return source.count('\n') + 1, len(source) - source.rfind('\n')


def scan(source: str, filename=None) -> Iterator[Token]:
    """Lazily turn source text into tokens, finishing with a single end-of-input token.

    Newlines end a statement like `;` does, unless they appear inside parentheses. Scanning stops at
    the first malformed character or literal; tokens already yielded are not retracted, but callers
    are expected to discard them.
    """
    depth = 0
    try:
        for tok in _lexer().lex(source):
            kind = _KIND_OF_TERMINAL[tok.type]
            if tok.type == 'NEWLINE':
                if depth > 0: continue
                yield Token(PUNCTUATION, '\n', tok.line, tok.column)
                continue
            if tok.type == 'LPAR': depth += 1
            if tok.type == 'RPAR': depth = max(0, depth - 1)
            if tok.type == 'NUMBER' and not _COMPLETE_NUMBER.fullmatch(tok.value):
                raise MathLexError(f"unterminated numeric literal `{tok.value}`", line=tok.line, column=tok.column,
                                   reason="unterminated numeric literal", token=tok.value, filename=filename)
            if tok.type == 'NAME' and tok.value in KEYWORDS:
                kind = KEYWORD
            yield Token(kind, str(tok.value), tok.line, tok.column)
    except lark.exceptions.UnexpectedCharacters as exc:
        raise MathLexError(f"invalid character {exc.char!r}", line=exc.line, column=exc.column,
                           reason="invalid character", token=exc.char, filename=filename) from None

    line, column = _end_position(source)
    yield Token(END, '', line, column)

## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import collections
from typing import Iterable

from .scanner import Token, scan, IDENTIFIER, NUMBER, OPERATOR, END
from .errors import MathParseError
from .builtins import CONSTANTS
from .nodes import (Node, Literal, Identifier, Binding, FunctionLiteral, Call,
                    BinaryOp, UnaryOp, Grouping, Conditional, Sequence)


# Binding strength of binary operators, all left-associative.
PRECEDENCES: dict[str, int] = {
    '<': 1, '>': 1, '<=': 1, '>=': 1, '==': 1, '!=': 1,
    '+': 2, '-': 2,
    '*': 3, '/': 3, '%': 3,
}


class Parser:
    """Recursive descent over a lazy token stream, one `Sequence` per source unit.

    Errors are reported fail-fast: the first problem aborts the whole input and nothing of it is kept.
    """

    def __init__(self, tokens: Iterable[Token], filename=None):
        self._tokens = iter(tokens)
        self._buffer: collections.deque[Token] = collections.deque()
        self._last: Token | None = None
        self.filename = filename

    # Token stream ────────────────────────────────────────────────────────────────────────────
    def _peek(self, offset: int = 0) -> Token:
        while len(self._buffer) <= offset:
            if (tok := next(self._tokens, None)) is None:
                return self._last
            self._buffer.append(tok)
            self._last = tok
        return self._buffer[offset]

    def _advance(self) -> Token:
        tok = self._peek()
        if tok.kind != END: self._buffer.popleft()
        return tok

    def _error(self, reason: str, message: str, tok: Token | Node | None = None) -> MathParseError:
        tok = tok or self._peek()
        found = tok.lexeme if isinstance(tok, Token) else None
        return MathParseError(message, line=tok.line, column=tok.column, reason=reason,
                              token=found, filename=self.filename)

    def _expect(self, lexeme: str) -> Token:
        if not (tok := self._peek()).is_(lexeme):
            raise self._error("missing expected token", f"expected `{lexeme}`, found {tok.describe()}")
        return self._advance()

    def _expect_identifier(self) -> Token:
        if (tok := self._peek()).kind != IDENTIFIER:
            raise self._error("malformed function", f"expected parameter name, found {tok.describe()}")
        return self._advance()

    def _at_separator(self) -> bool:
        tok = self._peek()
        return tok.is_(';') or tok.is_('\n')

    @property
    def current(self) -> Token:
        """Token under the cursor, without pulling more input."""
        return self._buffer[0] if self._buffer else self._last

    # Statements ──────────────────────────────────────────────────────────────────────────────
    def parse_sequence(self) -> Sequence:
        first = self._peek()
        statements = []
        while True:
            while self._at_separator():
                self._advance()
            if self._peek().kind == END:
                break
            statements.append(self.parse_expression())
            if not self._at_separator() and (tok := self._peek()).kind != END:
                raise self._error("unexpected token", f"expected `;` or newline after statement, found {tok.describe()}")
        return Sequence(tuple(statements), line=first.line, column=first.column)

    # Expressions ─────────────────────────────────────────────────────────────────────────────
    def parse_expression(self) -> Node:
        tok = self._peek()
        if tok.kind == IDENTIFIER and self._peek(1).is_(':='):
            return self._binding()
        if self._at_function_literal():
            return self._function_literal()

        expr = self._binary(1)
        if (tok := self._peek()).is_(':='):
            raise self._error("malformed binding", "left side of `:=` must be a single identifier", expr)
        if tok.is_('|->'):
            raise self._error("malformed function", "parameters before `|->` must be a name or a parenthesized list of names", expr)
        return expr

    def _binding(self) -> Binding:
        name = self._advance()
        self._expect(':=')
        value = self.parse_expression()
        return Binding(name.lexeme, value, line=name.line, column=name.column)

    def _at_function_literal(self) -> bool:
        if self._peek().kind == IDENTIFIER:
            return self._peek(1).is_('|->')
        if not self._peek().is_('('):
            return False
        if self._peek(1).is_(')'):
            return self._peek(2).is_('|->')

        i = 1
        while self._peek(i).kind == IDENTIFIER:
            if self._peek(i + 1).is_(')'):
                return self._peek(i + 2).is_('|->')
            if not self._peek(i + 1).is_(','):
                return False
            i += 2
        return False

    def _function_literal(self) -> FunctionLiteral:
        start = self._peek()
        if start.kind == IDENTIFIER:
            params = [self._advance()]
        else:
            self._expect('(')
            params = []
            if not self._peek().is_(')'):
                params.append(self._expect_identifier())
                while self._peek().is_(','):
                    self._advance()
                    params.append(self._expect_identifier())
            self._expect(')')

        seen = set()
        for p in params:
            if p.lexeme in CONSTANTS:
                raise self._error("malformed function", f"constant `{p.lexeme}` cannot be a parameter", p)
            if p.lexeme in seen:
                raise self._error("malformed function", f"duplicate parameter `{p.lexeme}`", p)
            seen.add(p.lexeme)

        self._expect('|->')
        body = self.parse_expression()
        return FunctionLiteral(tuple(p.lexeme for p in params), body, line=start.line, column=start.column)

    def _binary(self, min_precedence: int) -> Node:
        left = self._unary()
        while (tok := self._peek()).kind == OPERATOR and PRECEDENCES.get(tok.lexeme, 0) >= min_precedence:
            self._advance()
            right = self._binary(PRECEDENCES[tok.lexeme] + 1)
            left = BinaryOp(tok.lexeme, left, right, line=tok.line, column=tok.column)
        return left

    def _unary(self) -> Node:
        if (tok := self._peek()).is_('-'):
            self._advance()
            return UnaryOp('-', self._unary(), line=tok.line, column=tok.column)
        return self._call()

    def _call(self) -> Node:
        expr = self._primary()
        while self._peek().is_('('):
            self._advance()
            args = []
            if not self._peek().is_(')'):
                args.append(self.parse_expression())
                while self._peek().is_(','):
                    self._advance()
                    args.append(self.parse_expression())
            self._expect(')')
            expr = Call(expr, tuple(args), line=expr.line, column=expr.column)
        return expr

    def _primary(self) -> Node:
        tok = self._peek()
        if tok.kind == NUMBER:
            self._advance()
            return Literal(float(tok.lexeme), line=tok.line, column=tok.column)
        if tok.kind == IDENTIFIER:
            self._advance()
            return Identifier(tok.lexeme, line=tok.line, column=tok.column)
        if tok.is_('('):
            self._advance()
            inner = self.parse_expression()
            self._expect(')')
            return Grouping(inner, line=tok.line, column=tok.column)
        if tok.is_('if'):
            return self._conditional()
        raise self._error("unexpected token", f"expected expression, found {tok.describe()}")

    def _conditional(self) -> Conditional:
        start = self._expect('if')
        test = self.parse_expression()
        self._expect('then')
        then = self.parse_expression()
        self._expect('else')
        orelse = self.parse_expression()
        return Conditional(test, then, orelse, line=start.line, column=start.column)


def parse(source: str, filename=None) -> Sequence:
    parser = Parser(scan(source, filename=filename), filename=filename)
    try:
        return parser.parse_sequence()
    except RecursionError:
        tok = parser.current
        raise MathParseError("expression nested too deeply", line=tok.line, column=tok.column,
                             reason="unexpected token", token=tok.lexeme, filename=filename) from None


def format_source_context(filename, line, column, token_value, source=None):
    lines = source.splitlines(keepends=True) if source is not None else open(filename, 'r').readlines()
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]
    width = max(1, len(token_value or ''))

    for i in range(start_line, end_line):
        line_content = lines[i].rstrip('\n')
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if column > 0 and column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+width-1]}\033[0m" +
                    line_content[column+width-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'

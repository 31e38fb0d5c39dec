## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import dataclass


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    line: int
    column: int

    def __str__(self):
        return f"{self.kind}: {self.message} at {self.line}:{self.column}"


class MathError(Exception):
    kind = 'Error'

    def __init__(self, message: str = "", *, line=None, column=None, reason=None, token=None, filename=None):
        """Base class for all errors raised by scanning, parsing or evaluating source."""
        super().__init__(message)
        self.message: str = message
        self.line: int = line
        self.column: int = column
        self.reason: str = reason
        self.token: str = token
        self.filename: str = filename

    @property
    def diagnostic(self) -> Diagnostic:
        return Diagnostic(self.kind, self.message, self.line, self.column)

    def __str__(self):
        return str(self.diagnostic)


class MathLexError(MathError, ValueError):
    kind = 'LexError'

class MathParseError(MathError, ValueError):
    kind = 'ParseError'


class MathRuntimeError(MathError, RuntimeError):
    kind = 'RuntimeError'

class MathNameError(MathRuntimeError, NameError):
    pass

class MathTypeError(MathRuntimeError, TypeError):
    """Operands or callees of the wrong variant, and calls with the wrong number of arguments."""
    pass

class MathZeroDivisionError(MathRuntimeError, ZeroDivisionError):
    pass

class MathRecursionError(MathRuntimeError, RecursionError):
    def __init__(self, message: str = "", *, depth=None, **kwargs):
        super().__init__(message, **kwargs)
        self.depth = depth

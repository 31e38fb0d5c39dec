## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Syntax tree produced by the parser; every node remembers where it came from.
#

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Node:
    line: int
    column: int


@dataclass(frozen=True)
class Literal(Node):
    value: float

@dataclass(frozen=True)
class Identifier(Node):
    name: str

@dataclass(frozen=True)
class Binding(Node):
    name: str
    value: Node

@dataclass(frozen=True)
class FunctionLiteral(Node):
    params: tuple[str, ...]
    body: Node

@dataclass(frozen=True)
class Call(Node):
    callee: Node
    args: tuple[Node, ...]

@dataclass(frozen=True)
class BinaryOp(Node):
    """Positioned on the operator token, which is what runtime errors point at."""
    op: str
    left: Node
    right: Node

@dataclass(frozen=True)
class UnaryOp(Node):
    op: str
    operand: Node

@dataclass(frozen=True)
class Grouping(Node):
    inner: Node

@dataclass(frozen=True)
class Conditional(Node):
    test: Node
    then: Node
    orelse: Node

@dataclass(frozen=True)
class Sequence(Node):
    statements: tuple[Node, ...]

## mathfp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Runtime values: Number is a Python `float`, Boolean is a `bool`, plus `nil` and `Function`.
#

from __future__ import annotations

from typing import TYPE_CHECKING, Union
from dataclasses import dataclass

from .nodes import Node

if TYPE_CHECKING:
    from .environment import Environment


class Nil:
    __slots__ = ()
    _singleton = None

    def __new__(cls):
        # Only one instance exists, by convention all code compares with `is nil`.
        if cls._singleton is None:
            cls._singleton = super().__new__(cls)
        return cls._singleton

    def __repr__(self):
        return "nil"

    def __bool__(self):
        raise TypeError("nil truth value is ambiguous; compare with `is nil` or `is not nil`.")


nil = Nil()


@dataclass(frozen=True, eq=False)
class Function:
    """Closure over the environment it was created in, held by reference and never copied."""
    params: tuple[str, ...]
    body: Node
    env: Environment
    name: str | None = None

    @property
    def arity(self) -> int:
        return len(self.params)

    def __repr__(self):
        return f"<function {self.name or ''}({', '.join(self.params)})>"


Value = Union[float, bool, Nil, Function]

TYPE_NAME_MAP: dict[type, str] = {
    float: 'number',
    bool: 'boolean',
    Nil: 'nil',
    Function: 'function',
}


def type_name(value: Value) -> str:
    return TYPE_NAME_MAP.get(type(value), type(value).__name__)


def is_number(value: Value) -> bool:
    return type(value) is float

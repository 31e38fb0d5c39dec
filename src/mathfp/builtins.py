## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable

from . import operators as O
from .types import nil
from .environment import Environment


BINARY_OPERATORS: dict[str, Callable] = {
    '+': O.op_add, '-': O.op_sub, '*': O.op_mul, '/': O.op_div, '%': O.op_rem,
    '>': O.op_gt, '>=': O.op_gte, '<': O.op_lt, '<=': O.op_lte,
    '==': O.op_equal_q, '!=': O.op_differ_q,
}

UNARY_OPERATORS: dict[str, Callable] = {
    '-': O.op_neg,
}

# Operators accepting any operand type; the rest only take numbers.
POLYMORPHIC = frozenset(('==', '!='))

CONSTANTS = {'true': True, 'false': False, 'nil': nil}


def load_builtins_environment() -> Environment:
    env = Environment()
    for name, value in CONSTANTS.items():
        env.define_constant(name, value)
    return env

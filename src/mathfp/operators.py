## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math

from .types import Value, Function


num = float

## ARITHMETIC
def op_add(a: num, b: num) -> num: return a + b
def op_sub(a: num, b: num) -> num: return a - b
def op_mul(a: num, b: num) -> num: return a * b
def op_div(a: num, b: num) -> num: return a / b
def op_rem(a: num, b: num) -> num:
    if b == 0.0: raise ZeroDivisionError("float modulo")
    if math.isinf(a) or math.isnan(a) or math.isnan(b): return math.nan
    return math.fmod(a, b)
def op_neg(x: num) -> num: return -x
## COMPARISON
def op_gt(a: num, b: num) -> bool: return a > b
def op_gte(a: num, b: num) -> bool: return a >= b
def op_lt(a: num, b: num) -> bool: return a < b
def op_lte(a: num, b: num) -> bool: return a <= b
## EQUALITY, any two values; `true == 1` is false and functions compare by identity.
def op_equal_q(a: Value, b: Value) -> bool:
    if isinstance(a, Function) or isinstance(b, Function): return a is b
    return type(a) is type(b) and a == b
def op_differ_q(a: Value, b: Value) -> bool: return not op_equal_q(a, b)

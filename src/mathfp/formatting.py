## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import math

from .types import Value, Function, Nil
from .nodes import Node


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_number(x: float) -> str:
    if math.isnan(x): return 'nan'
    if math.isinf(x): return 'inf' if x > 0 else '-inf'
    if x.is_integer() and abs(x) < 1e16: return str(int(x))
    return repr(x)

def format_value(it: Value) -> str:
    match it:
        case bool(): return str(it).lower()
        case float(): return format_number(it)
        case Nil(): return 'nil'
        case Function(): return repr(it)
    raise TypeError(f"Not a runtime value: {it!r}")

def format_node(node: Node, width=48) -> str:
    text = f"{type(node).__name__} @ {node.line}:{node.column}"
    return text if len(text) <= width else text[:width-2] + ' …'


def show_call(depth: int, fn: Function, args: list, file=None):
    args_str = ', '.join(format_value(a) for a in args)
    print(f"\033[90m{depth:>3} :\033[0m  {'  ' * depth}\033[97m{fn.name or 'λ'}({args_str})\033[0m", file=file)

def show_step(step: int, depth: int, node: Node, file=None):
    print(f"\033[90m{step:>5} :\033[0m  {'  ' * depth}\033[36m{format_node(node)}\033[0m", file=file)

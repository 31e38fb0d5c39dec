## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
from dataclasses import replace

from .types import Value, Function, nil, type_name, is_number
from .errors import MathNameError, MathTypeError, MathZeroDivisionError, MathRecursionError
from .nodes import (Node, Literal, Identifier, Binding, FunctionLiteral, Call,
                    BinaryOp, UnaryOp, Grouping, Conditional, Sequence)
from .environment import Environment
from .builtins import BINARY_OPERATORS, UNARY_OPERATORS, POLYMORPHIC
from .formatting import show_call, show_step


DEFAULT_MAX_DEPTH = 200

# Python frames used per nested call in the worst common case, with head-room for the caller.
_FRAMES_PER_CALL = 16
_FRAMES_RESERVED = 1000


class Evaluator:
    """Tree-walking evaluator: one `Node` in one `Environment` gives one value, or raises.

    Call depth is counted explicitly and bounded by `max_depth`, so runaway recursion is reported as
    a `MathRecursionError` at the offending call rather than crashing the host interpreter.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, verbosity: int = 0, stats: dict | None = None,
                 filename: str | None = None):
        self.max_depth = max_depth
        self.verbosity = verbosity
        self.stats = stats
        self.filename = filename
        self.depth = 0
        self.steps = 0
        self.calls = 0
        self.max_depth_reached = 0
        self.node: Node | None = None

        if (needed := max_depth * _FRAMES_PER_CALL + _FRAMES_RESERVED) > sys.getrecursionlimit():
            sys.setrecursionlimit(needed)

    def run(self, program: Node, env: Environment) -> Value:
        self.depth = self.steps = self.calls = self.max_depth_reached = 0
        self.node = None
        try:
            return self.evaluate(program, env)
        except RecursionError as exc:
            if isinstance(exc, MathRecursionError): raise
            # Innermost node reached before the host stack ran out.
            node = self.node or program
            raise MathRecursionError("stack depth exceeded while evaluating nested expressions",
                                     line=node.line, column=node.column, reason="stack depth exceeded",
                                     depth=self.depth, filename=self.filename) from None
        finally:
            if self.stats is not None:
                self.stats['steps'] = self.stats.get('steps', 0) + self.steps
                self.stats['calls'] = self.stats.get('calls', 0) + self.calls
                self.stats['depth'] = max(self.stats.get('depth', 0), self.max_depth_reached)

    def evaluate(self, node: Node, env: Environment) -> Value:
        self.steps += 1
        self.node = node
        if self.verbosity >= 2:
            show_step(self.steps, self.depth, node)

        match node:
            case Literal(value=value):
                return value
            case Identifier(name=name):
                try:
                    return env[name]
                except KeyError:
                    raise self._error(MathNameError, node, f"undefined identifier `{name}`", "undefined identifier", name) from None
            case Binding(name=name, value=expr):
                return self._bind(node, name, expr, env)
            case FunctionLiteral(params=params, body=body):
                return Function(params, body, env)
            case Call(callee=callee_expr, args=arg_exprs):
                callee = self.evaluate(callee_expr, env)
                if not isinstance(callee, Function):
                    raise self._error(MathTypeError, callee_expr, f"{type_name(callee)} is not callable", "not callable")
                args = [self.evaluate(arg, env) for arg in arg_exprs]
                return self.invoke(callee, args, node)
            case BinaryOp(op=op, left=left, right=right):
                return self._binary(node, op, self.evaluate(left, env), self.evaluate(right, env))
            case UnaryOp(op=op, operand=operand):
                value = self.evaluate(operand, env)
                if not is_number(value):
                    raise self._error(MathTypeError, node, f"operator `{op}` expects a number, got {type_name(value)}", "type mismatch", op)
                return UNARY_OPERATORS[op](value)
            case Grouping(inner=inner):
                return self.evaluate(inner, env)
            case Conditional(test=test, then=then, orelse=orelse):
                cond = self.evaluate(test, env)
                if type(cond) is not bool:
                    raise self._error(MathTypeError, test, f"condition must be a boolean, got {type_name(cond)}", "type mismatch")
                return self.evaluate(then if cond else orelse, env)
            case Sequence(statements=statements):
                result = nil
                for stmt in statements:
                    result = self.evaluate(stmt, env)
                return result

        raise NotImplementedError(f"Unexpected node from parser: {type(node).__name__}.")

    def invoke(self, fn: Function, args: list[Value], site: Node) -> Value:
        if len(args) != fn.arity:
            label = f"`{fn.name}`" if fn.name else "function"
            raise self._error(MathTypeError, site, f"arity mismatch: {label} expects {fn.arity} argument(s), got {len(args)}", "arity mismatch", fn.name)
        if self.depth >= self.max_depth:
            raise self._error(MathRecursionError, site, f"stack depth exceeded ({self.max_depth} nested calls)", "stack depth exceeded", fn.name)

        frame = fn.env.child()
        for name, value in zip(fn.params, args):
            frame.define(name, value)

        self.calls += 1
        self.depth += 1
        self.max_depth_reached = max(self.max_depth_reached, self.depth)
        if self.verbosity >= 1:
            show_call(self.depth, fn, args)
        try:
            return self.evaluate(fn.body, frame)
        finally:
            self.depth -= 1

    def _bind(self, node: Binding, name: str, expr: Node, env: Environment) -> Value:
        if env.is_constant(name):
            raise self._error(MathNameError, node, f"cannot rebind constant `{name}`", "cannot rebind constant", name)
        value = self.evaluate(expr, env)
        if isinstance(value, Function) and value.name is None:
            value = replace(value, name=name)
        env.define(name, value)
        return value

    def _binary(self, node: BinaryOp, op: str, left: Value, right: Value) -> Value:
        if op not in POLYMORPHIC and not (is_number(left) and is_number(right)):
            raise self._error(MathTypeError, node, f"operator `{op}` expects numbers, got {type_name(left)} and {type_name(right)}", "type mismatch", op)
        try:
            return BINARY_OPERATORS[op](left, right)
        except ZeroDivisionError:
            raise self._error(MathZeroDivisionError, node, "division by zero", "division by zero", op) from None

    def _error(self, cls, node: Node, message: str, reason: str, token: str | None = None):
        kwargs = {'depth': self.depth} if cls is MathRecursionError else {}
        return cls(message, line=node.line, column=node.column, reason=reason, token=token,
                   filename=self.filename, **kwargs)


def interpret(program: Node, env: Environment, max_depth: int = DEFAULT_MAX_DEPTH, verbosity=0, stats=None, filename=None) -> Value:
    return Evaluator(max_depth=max_depth, verbosity=verbosity, stats=stats, filename=filename).run(program, env)

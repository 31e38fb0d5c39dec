## mathfp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import enum

from .types import Value
from .nodes import Sequence
from .parser import parse
from .environment import Environment
from .builtins import load_builtins_environment
from .interpreter import Evaluator, DEFAULT_MAX_DEPTH


class State(enum.Enum):
    IDLE = 'idle'
    RUNNING = 'running'


class Session:
    """Sequence of inputs evaluated against one persistent top-level environment.

    Each input (a REPL line or a whole script) is scanned and parsed completely before anything runs,
    so a syntax error leaves the environment untouched. A runtime error aborts the rest of that input,
    but bindings made by the statements before it are kept.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, verbosity: int = 0, stats: dict | None = None):
        self._environment = load_builtins_environment()
        self.max_depth = max_depth
        self.verbosity = verbosity
        self.stats = stats
        self.state = State.IDLE
        self.inputs = 0

    @property
    def environment(self) -> Environment:
        return self._environment

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def parse(self, source: str, filename: str | None = None) -> Sequence:
        return parse(source, filename=filename)

    def run(self, source: str, filename: str | None = None) -> Value:
        if self.state is not State.IDLE:
            raise RuntimeError("Session is already evaluating an input.")

        program = self.parse(source, filename=filename)
        evaluator = Evaluator(max_depth=self.max_depth, verbosity=self.verbosity, stats=self.stats, filename=filename)

        self.state = State.RUNNING
        try:
            return evaluator.run(program, self._environment)
        finally:
            self.state = State.IDLE
            self.inputs += 1

    # Bindings ────────────────────────────────────────────────────────────────────────────────
    def lookup(self, name: str) -> Value:
        return self._environment[name]

    def bind(self, name: str, value: Value) -> None:
        if self._environment.is_constant(name):
            raise ValueError(f"Cannot rebind constant `{name}`.")
        self._environment.define(name, value)

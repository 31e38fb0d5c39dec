## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Value


class Environment:
    """One lexical scope: its own bindings plus a link to the enclosing scope.

    Scopes are shared, never copied. Every closure created here and every child scope hold a reference,
    so a binding added later (e.g. the name of a recursive function) is visible to all of them.
    """

    def __init__(self, parent: 'Environment | None' = None):
        self.parent = parent
        self.values: dict[str, Value] = {}
        self.constants: set[str] = set()

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def __getitem__(self, name: str) -> Value:
        env = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise KeyError(name)

    def __contains__(self, name: str) -> bool:
        try:
            self[name]
        except KeyError:
            return False
        return True

    def get(self, name: str, default=None):
        try:
            return self[name]
        except KeyError:
            return default

    def is_constant(self, name: str) -> bool:
        env = self
        while env is not None:
            if name in env.constants:
                return True
            env = env.parent
        return False

    def define(self, name: str, value: Value) -> None:
        """Insert or overwrite in this scope only; enclosing scopes are never written."""
        self.values[name] = value

    def define_constant(self, name: str, value: Value) -> None:
        self.values[name] = value
        self.constants.add(name)

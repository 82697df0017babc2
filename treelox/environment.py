from typing import Any, Dict, Optional

from treelox.errors import UndefinedAssignmentTarget, UndefinedVariableError
from treelox.scanner import Token


class Environment:
    """A lexical scope mapping variable names to values.

    Lookups and assignments that miss in this scope are delegated to the
    parent, ending at the global scope whose parent is None. Closures keep
    a reference to the environment they were declared in, so an
    environment is shared rather than copied.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any):
        # Redeclaring a name in the same scope replaces the old binding
        self.values[name] = value

    def get(self, name: Token) -> Any:
        env = self.find(name.lexeme)
        if env is None:
            raise UndefinedVariableError(name.line, f"Undefined variable '{name.lexeme}'.")
        return env.values[name.lexeme]

    def assign(self, name: Token, value: Any):
        env = self.find(name.lexeme)
        if env is None:
            raise UndefinedAssignmentTarget(name.line, f"Undefined variable '{name.lexeme}'.")
        env.values[name.lexeme] = value

    def find(self, name: str) -> Optional['Environment']:
        """Return the nearest enclosing environment that binds `name`."""
        env = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __repr__(self) -> str:
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return f"<Environment depth={depth} names={sorted(self.values)}>"

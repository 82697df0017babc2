from typing import Any, List, Tuple


class LoxError(Exception):
    """Base class for every error reported against a line of Lox source."""
    def __init__(self, line: int, message: str, where: str = ''):
        super().__init__(f"[line {line}] Error{where}: {message}")
        self.line = line
        self.message = message
        self.where = where


class LexicalError(LoxError):
    """Malformed token, e.g. an unterminated string."""


class ParseError(LoxError):
    """Token sequence that matches no grammar production."""


class StaticErrors(Exception):
    """All lexical and syntax errors found in one source text."""
    def __init__(self, errors: List[LoxError]):
        super().__init__('\n'.join(str(e) for e in errors))
        self.errors = errors

    @property
    def diagnostics(self) -> List[Tuple[int, str]]:
        return [(e.line, e.message) for e in self.errors]


class LoxRuntimeError(LoxError):
    """Raised during evaluation; aborts the rest of the run."""


class RuntimeTypeError(LoxRuntimeError):
    pass


class UndefinedVariableError(LoxRuntimeError):
    pass


class UndefinedAssignmentTarget(LoxRuntimeError):
    pass


class ArityMismatchError(LoxRuntimeError):
    pass


class NotCallableError(LoxRuntimeError):
    pass


class StackOverflowError(LoxRuntimeError):
    pass


class ReturnSignal:
    """Result of executing a `return` statement.

    Statement executors return either None (completed normally) or a
    ReturnSignal, which is passed upward until the enclosing call turns it
    into the call's value.
    """
    __slots__ = ('value',)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"

"""Tree-walking interpreter for Lox.

The interpreter executes a parsed `Program` statement by statement
against a chain of `Environment` objects. Environments are passed
explicitly to `execute` and `evaluate`, so leaving a block (normally, by
`return` or by an error) simply stops using the child environment.

`return` is not implemented with exceptions: `execute` yields None when a
statement completes normally and a `ReturnSignal` when a `return` ran.
Every compound statement hands a `ReturnSignal` straight back to its
caller until `call_function` turns it into the value of the call.

Runtime errors are raised as `LoxRuntimeError` subclasses and abort the
current run.
"""

from __future__ import annotations

import math
import sys
from typing import Any, List, Optional, TextIO

from .ast import (
    Assign, Binary, Block, Call, Expr, ExprStmt, FuncDecl, Grouping, IfStmt,
    Literal, Logical, PrintStmt, Program, ReturnStmt, Stmt, Unary,
    VarDecl, Variable, WhileStmt,
)
from .builtin_function import BuiltinFunction, populate_globals
from .environment import Environment
from .errors import (
    ArityMismatchError, NotCallableError, ReturnSignal, RuntimeTypeError,
    StackOverflowError,
)
from .parser import parse_program
from .printer import sexp
from .scanner import Token, TokenType
from .types import NIL, is_equal, is_number, is_truthy, to_string

T = TokenType

# Python frame budget while a program runs. One Lox call nests about five
# interpreter frames, so this allows Lox recursion roughly 4000 calls deep.
RECURSION_LIMIT = 20000


class FunctionValue:
    """Represents a user-defined Lox function and its closure."""
    def __init__(self, declaration: FuncDecl, closure: Environment):
        self.declaration = declaration
        self.closure = closure  # shared with every other closure of this scope

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    @property
    def arity(self) -> int:
        return len(self.declaration.params)

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


def is_callable(value: Any) -> bool:
    return isinstance(value, (FunctionValue, BuiltinFunction))


def divide(a: float, b: float) -> float:
    """IEEE-754 division: dividing by zero gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


class Interpreter:
    """Core interpreter that executes Lox ASTs."""
    def __init__(self, out: Optional[TextIO] = None, debug_level: int = 0,
                 debug_file: Optional[str] = None):
        self.out = out
        self.global_env = populate_globals(Environment())
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            fp = self.debug_fp or sys.stderr
            fp.write(msg + '\n')
            fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None):
        if env is None:
            env = self.global_env
        self.debug(f"run: {len(program.body)} statements")
        saved_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(saved_limit, RECURSION_LIMIT))
        try:
            self.execute_block(program.body, env)
        finally:
            sys.setrecursionlimit(saved_limit)
        self.debug("run: finished")

    def execute_block(self, statements: List[Stmt], env: Environment) -> Optional[ReturnSignal]:
        for stmt in statements:
            result = self.execute(stmt, env)
            if result is not None:
                return result
        return None

    def execute(self, node: Stmt, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(node, ExprStmt):
            self.evaluate(node.expression, env)
            return None
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expression, env)
            if self.debug_level >= 3:
                self.debug(f"print {sexp(node.expression)} -> {value!r}")
            print(to_string(value), file=self.out if self.out is not None else sys.stdout)
            return None
        if isinstance(node, VarDecl):
            value = self.evaluate(node.initializer, env) if node.initializer is not None else NIL
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme} = {to_string(value)}")
            return None
        if isinstance(node, Block):
            return self.execute_block(node.statements, Environment(parent=env))
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                return self.execute(node.then_branch, env)
            if node.else_branch is not None:
                return self.execute(node.else_branch, env)
            return None
        if isinstance(node, WhileStmt):
            while is_truthy(self.evaluate(node.condition, env)):
                result = self.execute(node.body, env)
                if result is not None:
                    return result
            return None
        if isinstance(node, FuncDecl):
            # The closure is the declaring scope itself, so the function can
            # see its own name and call itself recursively.
            env.define(node.name.lexeme, FunctionValue(node, env))
            if self.debug_level >= 2:
                self.debug(f"define function {node.name.lexeme}")
            return None
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value, env) if node.value is not None else NIL
            return ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            return value
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            if node.operator.type == T.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, Unary):
            operand = self.evaluate(node.right, env)
            if node.operator.type == T.BANG:
                return not is_truthy(operand)
            if node.operator.type == T.MINUS:
                if is_number(operand):
                    return -operand
                raise RuntimeTypeError(node.operator.line, "Operand must be a number.")
            raise NotImplementedError(f"unsupported unary operator {node.operator.lexeme}")
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee, env)
            args = [self.evaluate(arg, env) for arg in node.arguments]
            return self.call_function(callee, args, node.paren)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Any, args: List[Any], paren: Token) -> Any:
        if not is_callable(func):
            raise NotCallableError(paren.line, "Can only call functions.")
        if len(args) != func.arity:
            raise ArityMismatchError(
                paren.line, f"Expected {func.arity} arguments but got {len(args)}.")
        if isinstance(func, BuiltinFunction):
            return func.fn(args)
        if self.debug_level >= 2:
            self.debug(f"call {func.name}({', '.join(to_string(a) for a in args)})")
        call_env = Environment(parent=func.closure)
        for param, arg in zip(func.declaration.params, args):
            call_env.define(param.lexeme, arg)
        try:
            result = self.execute_block(func.declaration.body, call_env)
        except RecursionError:
            raise StackOverflowError(paren.line, "Stack overflow.") from None
        if result is None:
            return NIL
        return result.value

    def apply_binary_op(self, op: Token, a: Any, b: Any) -> Any:
        kind = op.type
        if kind == T.EQUAL_EQUAL:
            return is_equal(a, b)
        if kind == T.BANG_EQUAL:
            return not is_equal(a, b)
        if kind == T.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise RuntimeTypeError(op.line, "Operands must be two numbers or two strings.")
        if not (is_number(a) and is_number(b)):
            raise RuntimeTypeError(op.line, "Operands must be numbers.")
        if kind == T.MINUS:
            return a - b
        if kind == T.STAR:
            return a * b
        if kind == T.SLASH:
            return divide(a, b)
        if kind == T.GREATER:
            return a > b
        if kind == T.GREATER_EQUAL:
            return a >= b
        if kind == T.LESS:
            return a < b
        if kind == T.LESS_EQUAL:
            return a <= b
        raise NotImplementedError(f"unknown operator {op.lexeme}")


def run_program(source: str, out: Optional[TextIO] = None, debug_level: int = 0) -> Interpreter:
    """Convenience function to parse and run a Lox program from source."""
    program = parse_program(source)
    interpreter = Interpreter(out=out, debug_level=debug_level)
    interpreter.run(program)
    return interpreter

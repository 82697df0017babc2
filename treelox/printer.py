"""Printers for Lox ASTs.

`sexp` renders an expression in a parenthesized prefix form that makes
precedence and grouping visible, e.g. ``(* (- 123) (group 45.67))``.

`format_program` turns a whole program back into Lox source. Grouping
nodes keep their parentheses and no others are added, so parsing the
printed text yields an AST equal to the one that was printed.
"""

from __future__ import annotations

from typing import List

from .ast import (
    Assign, Binary, Block, Call, Expr, ExprStmt, FuncDecl, Grouping, IfStmt,
    Literal, Logical, PrintStmt, Program, ReturnStmt, Stmt, Unary, VarDecl,
    Variable, WhileStmt,
)
from .types import NilVal, format_number, to_string

INDENT = '  '


def parenthesize(name: str, *exprs: Expr) -> str:
    parts = [name] + [sexp(e) for e in exprs]
    return '(' + ' '.join(parts) + ')'


def sexp(expr: Expr) -> str:
    if isinstance(expr, Literal):
        return to_string(expr.value)
    if isinstance(expr, Grouping):
        return parenthesize('group', expr.expression)
    if isinstance(expr, Unary):
        return parenthesize(expr.operator.lexeme, expr.right)
    if isinstance(expr, (Binary, Logical)):
        return parenthesize(expr.operator.lexeme, expr.left, expr.right)
    if isinstance(expr, Variable):
        return expr.name.lexeme
    if isinstance(expr, Assign):
        return '(= ' + expr.name.lexeme + ' ' + sexp(expr.value) + ')'
    if isinstance(expr, Call):
        return parenthesize('call', expr.callee, *expr.arguments)
    raise NotImplementedError(f"sexp: unexpected node type {type(expr)}")


def format_literal(value) -> str:
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return '"' + value + '"'
    raise NotImplementedError(f"format_literal: unexpected value {value!r}")


def format_expr(expr: Expr) -> str:
    """Render an expression as Lox source."""
    if isinstance(expr, Literal):
        return format_literal(expr.value)
    if isinstance(expr, Grouping):
        return '(' + format_expr(expr.expression) + ')'
    if isinstance(expr, Unary):
        return expr.operator.lexeme + format_expr(expr.right)
    if isinstance(expr, (Binary, Logical)):
        return f"{format_expr(expr.left)} {expr.operator.lexeme} {format_expr(expr.right)}"
    if isinstance(expr, Variable):
        return expr.name.lexeme
    if isinstance(expr, Assign):
        return f"{expr.name.lexeme} = {format_expr(expr.value)}"
    if isinstance(expr, Call):
        args = ', '.join(format_expr(a) for a in expr.arguments)
        return f"{format_expr(expr.callee)}({args})"
    raise NotImplementedError(f"format_expr: unexpected node type {type(expr)}")


class SourcePrinter:
    def __init__(self):
        self.lines: List[str] = []

    def emit(self, depth: int, text: str):
        self.lines.append(INDENT * depth + text)

    def statements(self, stmts: List[Stmt], depth: int):
        for stmt in stmts:
            self.statement(stmt, depth)

    def branch(self, header: str, stmt: Stmt, depth: int):
        # Blocks open on the header line; other bodies go on their own line
        if isinstance(stmt, Block):
            self.emit(depth, header + ' {')
            self.statements(stmt.statements, depth + 1)
            self.emit(depth, '}')
        else:
            self.emit(depth, header)
            self.statement(stmt, depth + 1)

    def statement(self, stmt: Stmt, depth: int):
        if isinstance(stmt, ExprStmt):
            self.emit(depth, format_expr(stmt.expression) + ';')
        elif isinstance(stmt, PrintStmt):
            self.emit(depth, 'print ' + format_expr(stmt.expression) + ';')
        elif isinstance(stmt, VarDecl):
            if stmt.initializer is None:
                self.emit(depth, f"var {stmt.name.lexeme};")
            else:
                self.emit(depth, f"var {stmt.name.lexeme} = {format_expr(stmt.initializer)};")
        elif isinstance(stmt, Block):
            self.emit(depth, '{')
            self.statements(stmt.statements, depth + 1)
            self.emit(depth, '}')
        elif isinstance(stmt, IfStmt):
            self.branch(f"if ({format_expr(stmt.condition)})", stmt.then_branch, depth)
            if stmt.else_branch is not None:
                self.branch('else', stmt.else_branch, depth)
        elif isinstance(stmt, WhileStmt):
            self.branch(f"while ({format_expr(stmt.condition)})", stmt.body, depth)
        elif isinstance(stmt, FuncDecl):
            params = ', '.join(p.lexeme for p in stmt.params)
            self.emit(depth, f"fun {stmt.name.lexeme}({params}) {{")
            self.statements(stmt.body, depth + 1)
            self.emit(depth, '}')
        elif isinstance(stmt, ReturnStmt):
            if stmt.value is None:
                self.emit(depth, 'return;')
            else:
                self.emit(depth, 'return ' + format_expr(stmt.value) + ';')
        else:
            raise NotImplementedError(f"format: unexpected node type {type(stmt)}")


def format_program(program: Program) -> str:
    printer = SourcePrinter()
    printer.statements(program.body, 0)
    return ''.join(line + '\n' for line in printer.lines)

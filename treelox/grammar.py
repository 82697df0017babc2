"""Reference grammar for Lox, built on Lark.

The hand-written parser in `parser.py` is what the interpreter uses; it
recovers from errors and reports all of them. This module states the same
language declaratively as a Lark LALR grammar and transforms Lark's parse
tree into the very same AST classes, including the `for` desugaring. It is
fail-fast: the first error is raised as a `ParseError`.

Keeping both parsers lets the test suite check the recursive-descent
implementation against an independent description of the grammar.
"""

from __future__ import annotations

from typing import List, Optional

from lark import Lark, Transformer, UnexpectedCharacters, UnexpectedEOF, UnexpectedInput
from lark import Token as LarkToken

from .ast import (
    Assign, Binary, Block, Call, ExprStmt, FuncDecl, Grouping, IfStmt,
    Literal, Logical, PrintStmt, Program, ReturnStmt, Unary, VarDecl,
    Variable, WhileStmt,
)
from .errors import ParseError
from .parser import desugar_for
from .scanner import KEYWORDS, OPERATORS, Token, TokenType
from .types import NIL


LOX_GRAMMAR = r"""
    start: declaration*

    ?declaration: fun_decl
                | var_decl
                | statement

    fun_decl: "fun" IDENT "(" [parameters] ")" block
    parameters: IDENT ("," IDENT)*
    var_decl: "var" IDENT ["=" expression] ";"

    ?statement: expr_stmt
              | for_stmt
              | if_stmt
              | print_stmt
              | return_stmt
              | while_stmt
              | block

    expr_stmt: expression ";"
    for_stmt: "for" "(" for_init [expression] ";" [expression] ")" statement
    ?for_init: var_decl
             | expr_stmt
             | ";" -> no_init
    if_stmt: "if" "(" expression ")" statement ["else" statement]
    print_stmt: "print" expression ";"
    !return_stmt: "return" [expression] ";"
    while_stmt: "while" "(" expression ")" statement
    block: "{" declaration* "}"

    // Expressions, lowest precedence first
    ?expression: assignment
    ?assignment: IDENT "=" assignment -> assign
               | logic_or
    ?logic_or: logic_and (or_op logic_and)*
    ?logic_and: equality (and_op equality)*
    ?equality: comparison (equality_op comparison)*
    ?comparison: term (comparison_op term)*
    ?term: factor (term_op factor)*
    ?factor: unary (factor_op unary)*
    ?unary: unary_op unary
          | call
    ?call: primary
         | call_expr
    !call_expr: call "(" [arguments] ")"
    arguments: expression ("," expression)*
    ?primary: "true" -> true
            | "false" -> false
            | "nil" -> nil
            | NUMBER -> number
            | STRING -> string
            | IDENT -> variable
            | "(" expression ")" -> grouping

    !or_op: "or"
    !and_op: "and"
    !equality_op: "!=" | "=="
    !comparison_op: ">" | ">=" | "<" | "<="
    !term_op: "-" | "+"
    !factor_op: "/" | "*"
    !unary_op: "!" | "-"

    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"\n]*"/
    COMMENT: /\/\/[^\n]*/

    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


LOX_PARSER = Lark(
    LOX_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=True,
)


def to_token(tok: LarkToken) -> Token:
    """Convert a Lark token into the scanner's Token type."""
    text = str(tok)
    if tok.type == 'IDENT':
        return Token(TokenType.IDENTIFIER, text, None, tok.line)
    kind = KEYWORDS.get(text) or OPERATORS[text]
    return Token(kind, text, None, tok.line)


class ASTTransformer(Transformer):
    """Transforms the Lark parse tree into Lox AST nodes."""

    def start(self, items):
        return Program(list(items))

    # Declarations

    def fun_decl(self, items):
        name, params, body = items
        return FuncDecl(to_token(name), params or [], body.statements)

    def parameters(self, items):
        return [to_token(t) for t in items]

    def var_decl(self, items):
        name, initializer = items
        return VarDecl(to_token(name), initializer)

    # Statements

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    def no_init(self, items):
        return None

    def for_stmt(self, items):
        initializer, condition, increment, body = items
        return desugar_for(initializer, condition, increment, body)

    def if_stmt(self, items):
        condition, then_branch, else_branch = items
        return IfStmt(condition, then_branch, else_branch)

    def print_stmt(self, items):
        return PrintStmt(items[0])

    def return_stmt(self, items):
        # items: "return" keyword, optional value, ";"
        return ReturnStmt(to_token(items[0]), items[1])

    def while_stmt(self, items):
        condition, body = items
        return WhileStmt(condition, body)

    def block(self, items):
        return Block(list(items))

    # Expressions

    def assign(self, items):
        name, value = items
        return Assign(to_token(name), value)

    def _fold(self, node_type, items):
        # items pattern: operand (operator operand)*
        left = items[0]
        i = 1
        while i < len(items):
            left = node_type(left, items[i], items[i + 1])
            i += 2
        return left

    def logic_or(self, items):
        return self._fold(Logical, items)

    def logic_and(self, items):
        return self._fold(Logical, items)

    def equality(self, items):
        return self._fold(Binary, items)

    def comparison(self, items):
        return self._fold(Binary, items)

    def term(self, items):
        return self._fold(Binary, items)

    def factor(self, items):
        return self._fold(Binary, items)

    def unary(self, items):
        operator, operand = items
        return Unary(operator, operand)

    def call_expr(self, items):
        # items: callee, "(", arguments or None, ")"
        callee, _, arguments, paren = items
        return Call(callee, to_token(paren), arguments or [])

    def arguments(self, items):
        return list(items)

    def true(self, items):
        return Literal(True)

    def false(self, items):
        return Literal(False)

    def nil(self, items):
        return Literal(NIL)

    def number(self, items):
        return Literal(float(items[0]))

    def string(self, items):
        return Literal(str(items[0])[1:-1])

    def variable(self, items):
        return Variable(to_token(items[0]))

    def grouping(self, items):
        return Grouping(items[0])

    # Operators are kept as tokens by the `!` rules
    def _operator(self, items):
        return to_token(items[0])

    or_op = and_op = equality_op = comparison_op = _operator
    term_op = factor_op = unary_op = _operator


def parse_with_lark(source: str) -> Program:
    """Parse Lox source with the reference grammar.

    Raises ParseError for the first syntax or lexical error.
    """
    try:
        tree = LOX_PARSER.parse(source)
    except UnexpectedCharacters as e:
        raise ParseError(e.line, f"Unexpected character '{e.char}'.") from None
    except UnexpectedEOF:
        line = source.count('\n') + 1
        raise ParseError(line, "Unexpected end of input.", ' at end') from None
    except UnexpectedInput as e:
        token = getattr(e, 'token', None)
        where = f" at '{token}'" if token else ''
        raise ParseError(e.line, "Unexpected token.", where) from None
    return ASTTransformer().transform(tree)

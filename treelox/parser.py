"""Recursive-descent parser for Lox.

Each grammar rule is one method; precedence climbs from `assignment`
(lowest) to `primary` (highest)::

    program     -> declaration* EOF
    declaration -> funDecl | varDecl | statement
    statement   -> exprStmt | forStmt | ifStmt | printStmt
                 | returnStmt | whileStmt | block
    expression  -> assignment
    assignment  -> IDENTIFIER "=" assignment | logic_or
    logic_or    -> logic_and ( "or" logic_and )*
    logic_and   -> equality ( "and" equality )*
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | call
    call        -> primary ( "(" arguments? ")" )*
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | IDENTIFIER | "(" expression ")"

Syntax errors are collected rather than raised to the caller. After an
error the parser discards tokens up to the next statement boundary and
carries on, so one parse reports every independent error. `for` loops are
desugared here into `while` loops; the interpreter never sees them.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .ast import (
    Assign, Binary, Block, Call, Expr, ExprStmt, FuncDecl, Grouping, IfStmt,
    Literal, Logical, PrintStmt, Program, ReturnStmt, Stmt, Unary, VarDecl,
    Variable, WhileStmt,
)
from .errors import LoxError, ParseError, StaticErrors
from .scanner import Token, TokenType, scan_tokens
from .types import NIL

T = TokenType

# Keywords that start a new declaration or statement; synchronization
# stops in front of them.
STATEMENT_STARTS = {T.FUN, T.VAR, T.FOR, T.IF, T.WHILE, T.PRINT, T.RETURN}


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type != T.EOF:
            line = tokens[-1].line if tokens else 1
            tokens = list(tokens) + [Token(T.EOF, '', None, line)]
        self.tokens = tokens
        self.pos = 0
        self.errors: List[ParseError] = []
        self.function_depth = 0

    # Token cursor

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().type == T.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def check(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def match(self, *types: TokenType) -> Optional[Token]:
        if self.check(*types):
            return self.advance()
        return None

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> ParseError:
        """Record a syntax error at `token` and return it for raising."""
        where = ' at end' if token.type == T.EOF else f" at '{token.lexeme}'"
        err = ParseError(token.line, message, where)
        self.errors.append(err)
        return err

    def synchronize(self):
        self.advance()
        while not self.is_at_end():
            if self.previous().type == T.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()

    # Declarations

    def parse(self) -> Program:
        statements: List[Stmt] = []
        try:
            while not self.is_at_end():
                stmt = self.declaration()
                if stmt is not None:
                    statements.append(stmt)
        except RecursionError:
            self.error(self.peek(), "Expression nesting too deep.")
        return Program(statements)

    def declaration(self) -> Optional[Stmt]:
        try:
            if self.match(T.FUN):
                return self.function_declaration()
            if self.match(T.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def function_declaration(self) -> FuncDecl:
        name = self.consume(T.IDENTIFIER, "Expect function name.")
        self.consume(T.LEFT_PAREN, "Expect '(' after function name.")
        params: List[Token] = []
        if not self.check(T.RIGHT_PAREN):
            params.append(self.consume(T.IDENTIFIER, "Expect parameter name."))
            while self.match(T.COMMA):
                params.append(self.consume(T.IDENTIFIER, "Expect parameter name."))
        self.consume(T.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(T.LEFT_BRACE, "Expect '{' before function body.")
        self.function_depth += 1
        try:
            body = self.block()
        finally:
            self.function_depth -= 1
        return FuncDecl(name, params, body)

    def var_declaration(self) -> VarDecl:
        name = self.consume(T.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.match(T.EQUAL):
            initializer = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDecl(name, initializer)

    # Statements

    def statement(self) -> Stmt:
        if self.match(T.FOR):
            return self.for_statement()
        if self.match(T.IF):
            return self.if_statement()
        if self.match(T.PRINT):
            return self.print_statement()
        if self.match(T.RETURN):
            return self.return_statement()
        if self.match(T.WHILE):
            return self.while_statement()
        if self.match(T.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def for_statement(self) -> Stmt:
        self.consume(T.LEFT_PAREN, "Expect '(' after 'for'.")
        if self.match(T.SEMICOLON):
            initializer = None
        elif self.match(T.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(T.SEMICOLON):
            condition = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(T.RIGHT_PAREN):
            increment = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()
        return desugar_for(initializer, condition, increment, body)

    def if_statement(self) -> IfStmt:
        self.consume(T.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.statement()
        else_branch = None
        if self.match(T.ELSE):
            else_branch = self.statement()
        return IfStmt(condition, then_branch, else_branch)

    def print_statement(self) -> PrintStmt:
        value = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(value)

    def return_statement(self) -> ReturnStmt:
        keyword = self.previous()
        if self.function_depth == 0:
            # Reported without unwinding; the statement itself is well formed
            self.error(keyword, "Can't return from top-level code.")
        value = None
        if not self.check(T.SEMICOLON):
            value = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after return value.")
        return ReturnStmt(keyword, value)

    def while_statement(self) -> WhileStmt:
        self.consume(T.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after condition.")
        body = self.statement()
        return WhileStmt(condition, body)

    def block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(T.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> ExprStmt:
        expr = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after expression.")
        return ExprStmt(expr)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()
        equals = self.match(T.EQUAL)
        if equals is not None:
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # Not fatal: the parser is still in a known state
            self.error(equals, "Invalid assignment target.")
        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while True:
            operator = self.match(T.OR)
            if operator is None:
                return expr
            expr = Logical(expr, operator, self.logic_and())

    def logic_and(self) -> Expr:
        expr = self.equality()
        while True:
            operator = self.match(T.AND)
            if operator is None:
                return expr
            expr = Logical(expr, operator, self.equality())

    def binary(self, operand: Callable[[], Expr], *types: TokenType) -> Expr:
        """Left-associative loop shared by the binary precedence levels."""
        expr = operand()
        while True:
            operator = self.match(*types)
            if operator is None:
                return expr
            expr = Binary(expr, operator, operand())

    def equality(self) -> Expr:
        return self.binary(self.comparison, T.BANG_EQUAL, T.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self.binary(self.term, T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL)

    def term(self) -> Expr:
        return self.binary(self.factor, T.MINUS, T.PLUS)

    def factor(self) -> Expr:
        return self.binary(self.unary, T.SLASH, T.STAR)

    def unary(self) -> Expr:
        operator = self.match(T.BANG, T.MINUS)
        if operator is not None:
            return Unary(operator, self.unary())
        return self.call()

    def call(self) -> Expr:
        expr = self.primary()
        while self.match(T.LEFT_PAREN):
            arguments: List[Expr] = []
            if not self.check(T.RIGHT_PAREN):
                arguments.append(self.expression())
                while self.match(T.COMMA):
                    arguments.append(self.expression())
            paren = self.consume(T.RIGHT_PAREN, "Expect ')' after arguments.")
            expr = Call(expr, paren, arguments)
        return expr

    def primary(self) -> Expr:
        if self.match(T.FALSE):
            return Literal(False)
        if self.match(T.TRUE):
            return Literal(True)
        if self.match(T.NIL):
            return Literal(NIL)
        token = self.match(T.NUMBER, T.STRING)
        if token is not None:
            return Literal(token.literal)
        token = self.match(T.IDENTIFIER)
        if token is not None:
            return Variable(token)
        if self.match(T.LEFT_PAREN):
            expr = self.expression()
            self.consume(T.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), "Expect expression.")


def desugar_for(initializer: Optional[Stmt], condition: Optional[Expr],
                increment: Optional[Expr], body: Stmt) -> Stmt:
    """Rewrite a `for` loop as the equivalent `while` loop.

    The increment runs after the body inside the loop, a missing condition
    becomes `true`, and the initializer runs once before the loop inside a
    block of its own so that its variable is scoped to the loop.
    """
    if increment is not None:
        body = Block([body, ExprStmt(increment)])
    if condition is None:
        condition = Literal(True)
    loop: Stmt = WhileStmt(condition, body)
    if initializer is not None:
        loop = Block([initializer, loop])
    return loop


def parse_program(source: str) -> Program:
    """Scan and parse Lox source into a Program AST.

    Every lexical and syntax error is collected; if there are any, a single
    StaticErrors carrying all of them is raised instead of returning.
    """
    tokens, lex_errors = scan_tokens(source)
    parser = Parser(tokens)
    program = parser.parse()
    errors: List[LoxError] = [*lex_errors, *parser.errors]
    if errors:
        errors.sort(key=lambda e: e.line)
        raise StaticErrors(errors)
    return program

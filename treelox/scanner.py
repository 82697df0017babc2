"""Lexical analysis for Lox.

The scanner turns source text into a list of tokens terminated by an EOF
token. Errors do not stop scanning: each malformed lexeme is recorded in
`Scanner.errors` and scanning resumes with the next character, so a single
pass reports every lexical problem in the source.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .errors import LexicalError


class TokenType(enum.Enum):
    # Single-character tokens
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_BRACE = '{'
    RIGHT_BRACE = '}'
    COMMA = ','
    DOT = '.'
    MINUS = '-'
    PLUS = '+'
    SEMICOLON = ';'
    SLASH = '/'
    STAR = '*'

    # One or two character tokens
    BANG = '!'
    BANG_EQUAL = '!='
    EQUAL = '='
    EQUAL_EQUAL = '=='
    GREATER = '>'
    GREATER_EQUAL = '>='
    LESS = '<'
    LESS_EQUAL = '<='

    # Literals
    IDENTIFIER = 'identifier'
    STRING = 'string'
    NUMBER = 'number'

    # Keywords
    AND = 'and'
    ELSE = 'else'
    FALSE = 'false'
    FUN = 'fun'
    FOR = 'for'
    IF = 'if'
    NIL = 'nil'
    OR = 'or'
    PRINT = 'print'
    RETURN = 'return'
    TRUE = 'true'
    VAR = 'var'
    WHILE = 'while'

    EOF = 'eof'


KEYWORDS: Dict[str, TokenType] = {
    t.value: t for t in (
        TokenType.AND, TokenType.ELSE, TokenType.FALSE, TokenType.FUN,
        TokenType.FOR, TokenType.IF, TokenType.NIL, TokenType.OR,
        TokenType.PRINT, TokenType.RETURN, TokenType.TRUE, TokenType.VAR,
        TokenType.WHILE,
    )
}

# Operators and punctuation keyed by lexeme. Two-character entries are
# tried first so that `>=` wins over `>`.
OPERATORS: Dict[str, TokenType] = {
    t.value: t for t in TokenType
    if not t.value.isalpha()
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Any
    # Tokens compare equal regardless of where they appear in the source
    line: int = field(compare=False)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, line {self.line})"


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_identifier_start(c: str) -> bool:
    return c.isascii() and (c.isalpha() or c == '_')


def is_identifier_part(c: str) -> bool:
    return is_identifier_start(c) or is_digit(c)


class Scanner:
    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[LexicalError] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, '', None, self.line))
        return self.tokens

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def peek(self, offset: int = 0) -> str:
        pos = self.current + offset
        if pos >= len(self.source):
            return '\0'
        return self.source[pos]

    def add_token(self, token_type: TokenType, literal: Any = None):
        text = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, text, literal, self.line))

    def error(self, message: str):
        self.errors.append(LexicalError(self.line, message))

    def scan_token(self):
        c = self.advance()
        if c == '\n':
            self.line += 1
            return
        if c in ' \r\t':
            return
        if c == '/' and self.peek() == '/':
            # Comment runs to the end of the line
            while self.peek() != '\n' and not self.is_at_end():
                self.advance()
            return
        if c == '"':
            self.string()
            return
        if is_digit(c):
            self.number()
            return
        if is_identifier_start(c):
            self.identifier()
            return
        pair = c + self.peek()
        if pair in OPERATORS:
            self.advance()
            self.add_token(OPERATORS[pair])
            return
        if c in OPERATORS:
            self.add_token(OPERATORS[c])
            return
        self.error(f"Unexpected character '{c}'.")

    def string(self):
        while self.peek() != '"' and self.peek() != '\n' and not self.is_at_end():
            self.advance()
        if self.peek() != '"':
            # The newline (if any) is consumed by the main loop so the line
            # counter stays correct.
            self.error("Unterminated string.")
            return
        self.advance()  # closing quote
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while is_digit(self.peek()):
            self.advance()
        if self.peek() == '.' and is_digit(self.peek(1)):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while is_identifier_part(self.peek()):
            self.advance()
        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))


def scan_tokens(source: str) -> Tuple[List[Token], List[LexicalError]]:
    """Scan `source`, returning the tokens and every lexical error found."""
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    return tokens, scanner.errors

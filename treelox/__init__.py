# treelox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import (
    LoxError, LexicalError, ParseError, StaticErrors, LoxRuntimeError,
    RuntimeTypeError, UndefinedVariableError, UndefinedAssignmentTarget,
    ArityMismatchError, NotCallableError, StackOverflowError,
)
from .grammar import parse_with_lark
from .interpreter import Interpreter, run_program
from .parser import Parser, parse_program
from .scanner import Scanner, Token, TokenType, scan_tokens

__all__ = [
    'Interpreter',
    'Parser',
    'Scanner',
    'Token',
    'TokenType',
    'parse_program',
    'parse_with_lark',
    'run_program',
    'scan_tokens',
    'LoxError',
    'LexicalError',
    'ParseError',
    'StaticErrors',
    'LoxRuntimeError',
    'RuntimeTypeError',
    'UndefinedVariableError',
    'UndefinedAssignmentTarget',
    'ArityMismatchError',
    'NotCallableError',
    'StackOverflowError',
]

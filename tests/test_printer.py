import pytest

from treelox.ast import Binary, Grouping, Literal, Unary
from treelox.parser import parse_program
from treelox.printer import format_program, sexp
from treelox.scanner import Token, TokenType
from treelox.types import NIL


def test_sexp_of_hand_built_tree():
    expr = Binary(
        Unary(Token(TokenType.MINUS, '-', None, 1), Literal(123.0)),
        Token(TokenType.STAR, '*', None, 1),
        Grouping(Literal(45.67)),
    )
    assert sexp(expr) == '(* (- 123) (group 45.67))'


@pytest.mark.parametrize('source, expected', [
    ('nil', 'nil'),
    ('"hi"', 'hi'),
    ('x = f(1)', '(= x (call f 1))'),
    ('a or !b', '(or a (! b))'),
])
def test_sexp_forms(source, expected):
    assert sexp(parse_program(source + ';').body[0].expression) == expected


def test_sexp_literal_nil():
    assert sexp(Literal(NIL)) == 'nil'


def test_format_program_layout():
    source = (
        'fun add(a,b){return a+b;}'
        'var x=add(1,2);'
        'if(x>2){print "big";}else print "small";'
        'while(x>0)x=x-1;'
    )
    assert format_program(parse_program(source)) == (
        'fun add(a, b) {\n'
        '  return a + b;\n'
        '}\n'
        'var x = add(1, 2);\n'
        'if (x > 2) {\n'
        '  print "big";\n'
        '}\n'
        'else\n'
        '  print "small";\n'
        'while (x > 0)\n'
        '  x = x - 1;\n'
    )


STABLE_SOURCES = [
    'print -(1 + 2) * 3 / (4 - 5);',
    'var a; var b = nil; a = b = !true;',
    'if (a) if (b) print 1; else print 2;',
    'if (a) { print 1; } else if (b) { print 2; } else { print 3; }',
    'for (var i = 0; i < 3; i = i + 1) { print i; }',
    'fun outer() { var n = 0; fun inner() { n = n + 1; return n; } return inner; }',
    'print f(1)(2, "three") or 4.5 and -0;',
    '{ { } }',
]


@pytest.mark.parametrize('source', STABLE_SOURCES)
def test_printed_program_parses_back_to_same_tree(source):
    program = parse_program(source)
    printed = format_program(program)
    reparsed = parse_program(printed)
    assert reparsed == program
    assert format_program(reparsed) == printed

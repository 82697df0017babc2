from pathlib import Path

import pytest

import treelox
from treelox.errors import ParseError
from treelox.grammar import parse_with_lark
from treelox.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'

PROGRAMS = [
    'print 1 + 2 * 3 - 4 / 5;',
    'print (1 + 2) * -3;',
    'print !true == false != nil;',
    'print 1 < 2 and 3 >= 4 or "x" <= "y";',
    'var a; var b = "text"; a = b = 3;',
    '{ var a = 1; { print a; } }',
    'if (a) if (b) print 1; else print 2;',
    'if (a) { print 1; } else { print 2; }',
    'while (i < 10) i = i + 1;',
    'for (var i = 0; i < 3; i = i + 1) print i;',
    'for (;;) print 1;',
    'for (i = 0; i < 1;) { print i; }',
    'fun f() {} fun g(a, b, c) { return a(b)(c); }',
    'fun h() { return; }',
    'print clock() > 0; // trailing comment',
    'f(1, g(2, 3), -4);',
]


@pytest.mark.parametrize('source', PROGRAMS)
def test_lark_grammar_agrees_with_hand_parser(source):
    assert parse_with_lark(source) == parse_program(source)


def test_example_programs_agree():
    for path in sorted(EXAMPLES.glob('*.lox')):
        if path.name == 'syntax_errors.lox':
            continue
        source = path.read_text()
        assert parse_with_lark(source) == parse_program(source), path.name


def test_lark_tokens_keep_line_numbers():
    program = parse_with_lark('var a = 1;\n\nprint b;')
    assert program.body[0].name.line == 1
    assert program.body[1].expression.name.line == 3


@pytest.mark.parametrize('source', [
    'print 1 +;',
    'var = 1;',
    '1 = 2;',
    'print "open;',
    'print @;',
    'print 1',
])
def test_lark_grammar_rejects_invalid_programs(source):
    with pytest.raises(ParseError):
        parse_with_lark(source)


def test_reference_parser_exported_from_package():
    assert treelox.parse_with_lark is parse_with_lark
    assert treelox.parse_with_lark('print 1;') == treelox.parse_program('print 1;')

from pathlib import Path

from treelox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def run_example(name, capsys):
    source = (EXAMPLES / name).read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    return capsys.readouterr().out


def test_program_for_loop(capsys):
    out = run_example('for_loop.lox', capsys)
    assert out.split() == ['0', '1', '3', '6', '10']


def test_program_for_matches_while(capsys):
    # The for loop and its hand-written while equivalent print the same lines
    assert run_example('for_loop.lox', capsys) == run_example('while_loop.lox', capsys)

"""CLI entry point for the treelox interpreter.

Usage:
    python -m treelox [-v|-vv|-vvv] <program_file>
    python -m treelox --ast <program_file>
    python -m treelox --debug-file FILE -vv <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --ast         Parse the program and print it back as formatted source
  --debug-file  Write debug output to FILE instead of stderr

Exit status is 65 when the program has lexical or syntax errors and 70
when it stops with a runtime error.
"""

import argparse
import sys
from pathlib import Path

from .errors import LoxRuntimeError, StaticErrors
from .interpreter import Interpreter
from .parser import parse_program
from .printer import format_program

EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Lox tree-walking interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--ast', action='store_true', help='print the parsed program instead of running it')
    parser.add_argument('--debug-file', metavar='FILE', help='write debug output to FILE')
    parser.add_argument('program', help='Lox program file to execute')
    args = parser.parse_args(argv)

    program_file = Path(args.program)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        source = f.read()

    try:
        program = parse_program(source)
    except StaticErrors as e:
        for err in e.errors:
            print(err, file=sys.stderr)
        sys.exit(EXIT_STATIC_ERROR)

    if args.ast:
        sys.stdout.write(format_program(program))
        return

    interpreter = Interpreter(debug_level=args.v, debug_file=args.debug_file)
    try:
        interpreter.run(program)
    except LoxRuntimeError as e:
        print(e, file=sys.stderr)
        sys.exit(EXIT_RUNTIME_ERROR)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()

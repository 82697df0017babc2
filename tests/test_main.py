import pytest

from treelox.__main__ import EXIT_RUNTIME_ERROR, EXIT_STATIC_ERROR, main


def write_program(tmp_path, source):
    path = tmp_path / 'program.lox'
    path.write_text(source)
    return str(path)


def test_runs_program(tmp_path, capsys):
    main([write_program(tmp_path, 'print "hi"; print 1 + 1;')])
    assert capsys.readouterr().out == 'hi\n2\n'


def test_static_errors_exit_65(tmp_path, capsys):
    path = write_program(tmp_path, 'print "never";\nprint 1 +;\nvar = 2;')
    with pytest.raises(SystemExit) as excinfo:
        main([path])
    assert excinfo.value.code == EXIT_STATIC_ERROR == 65
    captured = capsys.readouterr()
    # Nothing runs when the program does not parse
    assert captured.out == ''
    assert captured.err.splitlines() == [
        "[line 2] Error at ';': Expect expression.",
        "[line 3] Error at '=': Expect variable name.",
    ]


def test_runtime_error_exit_70(tmp_path, capsys):
    path = write_program(tmp_path, 'print "start";\nprint -"x";\nprint "end";')
    with pytest.raises(SystemExit) as excinfo:
        main([path])
    assert excinfo.value.code == EXIT_RUNTIME_ERROR == 70
    captured = capsys.readouterr()
    assert captured.out == 'start\n'
    assert captured.err == '[line 2] Error: Operand must be a number.\n'


def test_ast_flag_prints_formatted_source(tmp_path, capsys):
    main(['--ast', write_program(tmp_path, 'var a=1;print a;')])
    assert capsys.readouterr().out == 'var a = 1;\nprint a;\n'


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'nope.lox')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_debug_file_option(tmp_path, capsys):
    debug_file = tmp_path / 'trace.txt'
    main(['-vv', '--debug-file', str(debug_file), write_program(tmp_path, 'var a = 2;')])
    assert capsys.readouterr().err == ''
    assert 'declare a = 2' in debug_file.read_text()

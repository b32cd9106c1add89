import json
from pathlib import Path

import pytest

from fnlang.__main__ import main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def write(tmp_path, text, name='prog.fn'):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


@pytest.mark.parametrize('front_end', ['rd', 'lark'])
def test_run_program_file(front_end, capsys):
    main(['--parser', front_end, str(EXAMPLES / 'count.fn')])
    assert capsys.readouterr().out == '0\n1\n2\n'


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / 'nope.fn')])
    assert exc.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_runtime_error_exits_with_diagnostic(tmp_path, capsys):
    path = write(tmp_path, 'fn main() {\n  print(5 / 0);\n}\n')
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.strip() == 'Error: [evaluating] DivisionByZero: division by zero (line 2)'


def test_syntax_error_exits_with_stage(tmp_path, capsys):
    path = write(tmp_path, 'fn main() { x = 1 }')
    with pytest.raises(SystemExit):
        main([str(path)])
    assert '[parsing] SyntaxError' in capsys.readouterr().err


def test_lex_error_exits_with_stage(tmp_path, capsys):
    path = write(tmp_path, 'fn main() { print("x); }')
    with pytest.raises(SystemExit):
        main([str(path)])
    assert '[lexing] UnterminatedString' in capsys.readouterr().err


def test_emit_then_run_ast(tmp_path, capsys):
    path = write(tmp_path, (EXAMPLES / 'gcd.fn').read_text(encoding='utf-8'), name='gcd.fn')
    main(['--emit-ast', str(path)])
    ast_path = Path(capsys.readouterr().out.strip())
    assert ast_path == tmp_path / 'gcd.fn.ast.json'
    data = json.loads(ast_path.read_text(encoding='utf-8'))
    assert [f['name'] for f in data['functions']] == ['gcd', 'main']
    main(['--ast', str(ast_path)])
    assert capsys.readouterr().out.splitlines() == ['6', '1', '4']


def test_max_depth_option(tmp_path, capsys):
    path = write(tmp_path, 'fn f(n) { if (n == 0) { return 0; } return f(n - 1); } fn main() { print(f(50)); }')
    with pytest.raises(SystemExit):
        main(['--max-depth', '10', str(path)])
    assert 'StackOverflow' in capsys.readouterr().err


def test_verbose_writes_debug_file(tmp_path, capsys):
    debug_file = tmp_path / 'debug.txt'
    main(['-vv', '--debug-file', str(debug_file), str(EXAMPLES / 'hello.fn')])
    assert capsys.readouterr().out == 'Hello World\n'
    assert 'call main()' in debug_file.read_text(encoding='utf-8')


def test_missing_program_argument(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_too_deep_nesting_exits_with_stage(tmp_path, capsys):
    path = write(tmp_path, 'fn main() { print(' + '(' * 5000 + '1' + ')' * 5000 + '); }')
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 1
    assert '[parsing] SyntaxError: expression nested too deeply' in capsys.readouterr().err

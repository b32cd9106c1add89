from pathlib import Path

from fnlang.interpreter import Interpreter
from fnlang.parser import parse_program

PROGRAM = Path(__file__).resolve().parent.parent / 'examples' / 'strings.fn'


def test_program_strings_and_unit(capsys):
    with open(PROGRAM, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out
    # print itself returns unit, shown as ()
    assert out.splitlines() == ['Hello, fnlang', 'true', 'true', 'true', 'side effect', '()']

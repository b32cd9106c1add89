from pathlib import Path

from fnlang.interpreter import Interpreter
from fnlang.parser import parse_program

PROGRAM = Path(__file__).resolve().parent.parent / 'examples' / 'nested_break.fn'


def test_program_nested_break(capsys):
    with open(PROGRAM, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out
    assert out.splitlines() == ['1', '12', '23', 'done']

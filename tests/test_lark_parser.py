from pathlib import Path

import pytest

from fnlang.ast_json import ast_to_obj
from fnlang.errors import EvalError, LexError, ParseError
from fnlang.interpreter import Interpreter
from fnlang.lark_parser import parse_program_lark
from fnlang.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


@pytest.mark.parametrize('path', sorted(EXAMPLES.glob('*.fn')), ids=lambda p: p.name)
def test_lark_matches_recursive_descent(path):
    source = path.read_text(encoding='utf-8')
    assert parse_program_lark(source) == parse_program(source)


@pytest.mark.parametrize('path', sorted(EXAMPLES.glob('*.fn')), ids=lambda p: p.name)
def test_lark_keeps_source_lines(path):
    source = path.read_text(encoding='utf-8')
    assert ast_to_obj(parse_program_lark(source)) == ast_to_obj(parse_program(source))


def test_lark_statement_lines():
    source = 'fn main() {\n  while (true) {\n    break;\n  }\n  if (false) {\n    return;\n  }\n  print(true);\n}\n'
    loop, branch, call = parse_program_lark(source).functions[0].body
    assert (loop.line, loop.body[0].line) == (2, 3)
    assert (branch.line, branch.then_body[0].line) == (5, 6)
    assert call.line == 8
    assert call.expr.args[0].line == 8


def test_lark_runtime_error_has_line():
    program = parse_program_lark('fn main() {\n  x = 1;\n  break;\n}\n')
    with pytest.raises(EvalError) as exc:
        Interpreter().run(program)
    assert exc.value.kind == 'LoopControlError'
    assert exc.value.err.line == 3


def test_lark_deeply_parenthesised_expression():
    source = 'fn main() { print(' + '(' * 300 + '1' + ')' * 300 + '); }'
    assert parse_program_lark(source) == parse_program(source)


def test_lark_keywords_inside_identifiers():
    source = 'fn main() { iffy = true; fnord = falsehood; returned(whileX); }'
    assert parse_program_lark(source) == parse_program(source)


def test_lark_empty_lists():
    source = 'fn f() { return; } fn main() { f(); if (true) { } else { } }'
    assert parse_program_lark(source) == parse_program(source)


@pytest.mark.parametrize('source', [
    'fn main() { a < b < c; }',
    'fn main() { f(1,); }',
    'fn main() { x = 1 }',
    'fn main() { 1 = 2; }',
    'fn main() { (x) = 1; }',
    'fn main() { while (true) { }',
    'fn main() { x = !y; }',
    'fn main() { } x',
])
def test_lark_syntax_errors(source):
    with pytest.raises(ParseError) as exc:
        parse_program_lark(source)
    assert exc.value.kind == 'SyntaxError'


def test_lark_unterminated_string():
    with pytest.raises(LexError) as exc:
        parse_program_lark('fn main() { print("oops); }')
    assert exc.value.kind == 'UnterminatedString'

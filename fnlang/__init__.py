# fnlang package
# This package provides a lexer, parser and tree-walking interpreter for fnlang.
from .errors import FnError, LexError, ParseError, EvalError
from .lexer import tokenize, Token, TokenKind
from .parser import parse, parse_program
from .interpreter import run_program, run_file, Interpreter

__all__ = [
    'tokenize',
    'Token',
    'TokenKind',
    'parse',
    'parse_program',
    'run_program',
    'run_file',
    'Interpreter',
    'FnError',
    'LexError',
    'ParseError',
    'EvalError',
]

"""Lark grammar front end for fnlang.

This module parses fnlang with a Lark LALR(1) parser instead of the
hand-written lexer and recursive-descent parser in `fnlang.parser`. The
parse tree is transformed into exactly the same AST, which makes it useful
for cross-checking the hand-written parser and as an alternative selected
with `--parser lark` on the command line.

Lark exceptions are translated into the fnlang error taxonomy: a stray
double quote means a string was never closed (`LexError`,
`UnterminatedString`) and every other failure is a `ParseError` with kind
`SyntaxError`.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from .ast import (
    Program, FunctionDef, ExprStmt, Assign, IfStmt, WhileStmt, BreakStmt,
    ReturnStmt, IntLiteral, StrLiteral, BoolLiteral, Ident, BinaryOp, Call,
)
from .errors import LexError, ParseError
from .types import ErrorVal


FN_GRAMMAR = r"""
    start: funcdef*

    funcdef: "fn" IDENT "(" [params] ")" block
    params: IDENT ("," IDENT)*
    block: "{" stmt* "}"

    ?stmt: while_stmt
         | if_stmt
         | break_stmt
         | return_stmt
         | assign_stmt
         | expr_stmt

    while_stmt: "while" "(" expr ")" block
    if_stmt: "if" "(" expr ")" block [else_clause]
    else_clause: "else" (if_stmt | block)
    break_stmt: "break" ";"
    return_stmt: "return" [expr] ";"
    assign_stmt: IDENT "=" expr ";"
    expr_stmt: expr ";"

    // Expressions with precedence; relations do not chain
    ?expr: relation
    ?relation: sum
             | sum REL_OP sum -> binary
    ?sum: product
        | sum ADD_OP product -> binary
    ?product: unary
            | product MUL_OP unary -> binary
    ?unary: "(" expr ")"
          | call
          | INT -> int_lit
          | STRING -> str_lit
          | "true" -> true_lit
          | "false" -> false_lit
          | IDENT -> ident
    call: IDENT "(" [args] ")"
    args: expr ("," expr)*

    // Tokens
    REL_OP: "==" | "!=" | "<=" | ">=" | "<" | ">"
    ADD_OP: "+" | "-"
    MUL_OP: "*" | "/" | "%"
    IDENT: /[A-Za-z][A-Za-z0-9]*/
    INT: /[0-9]+/
    STRING: /"[^"]*"/

    %ignore /[ \t\r\n]+/
"""


FN_PARSER = Lark(
    FN_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=True,
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return Program(functions=list(items))

    @v_args(meta=True)
    def funcdef(self, meta, items):
        name, params, body = items
        return FunctionDef(name=str(name), params=params or [], body=body, line=meta.line)

    def params(self, items):
        return [str(item) for item in items]

    def block(self, items):
        return list(items)

    @v_args(meta=True)
    def while_stmt(self, meta, items):
        condition, body = items
        return WhileStmt(condition, body, line=meta.line)

    @v_args(meta=True)
    def if_stmt(self, meta, items):
        condition, then_body, else_body = items
        return IfStmt(condition, then_body, else_body, line=meta.line)

    def else_clause(self, items):
        branch = items[0]
        # `else if` nests a single IfStmt; a plain `else` already gives a list
        if isinstance(branch, IfStmt):
            return [branch]
        return branch

    @v_args(meta=True)
    def break_stmt(self, meta, items):
        return BreakStmt(line=meta.line)

    @v_args(meta=True)
    def return_stmt(self, meta, items):
        return ReturnStmt(items[0], line=meta.line)

    def assign_stmt(self, items):
        name, value = items
        return Assign(str(name), value, line=name.line)

    @v_args(meta=True)
    def expr_stmt(self, meta, items):
        return ExprStmt(items[0], line=meta.line)

    def binary(self, items):
        left, op, right = items
        return BinaryOp(op=str(op), left=left, right=right, line=op.line)

    def call(self, items):
        name, args = items
        return Call(str(name), args or [], line=name.line)

    def args(self, items):
        return list(items)

    def int_lit(self, items):
        token = items[0]
        return IntLiteral(int(token.value), line=token.line)

    def str_lit(self, items):
        token = items[0]
        return StrLiteral(token.value[1:-1], line=token.line)

    @v_args(meta=True)
    def true_lit(self, meta, items):
        return BoolLiteral(True, line=meta.line)

    @v_args(meta=True)
    def false_lit(self, meta, items):
        return BoolLiteral(False, line=meta.line)

    def ident(self, items):
        token = items[0]
        return Ident(str(token), line=token.line)


def syntax_error(message: str, line: int, column: int, expected: List[str], actual: str,
                 lexeme: str) -> ParseError:
    err = ErrorVal('SyntaxError', message, ParseError.stage, line, column)
    return ParseError(err, expected=expected, actual=actual, lexeme=lexeme)


def parse_program_lark(source: str) -> Program:
    """Parse fnlang source code into a Program AST using the Lark grammar."""
    try:
        tree = FN_PARSER.parse(source)
    except UnexpectedCharacters as e:
        if e.char == '"':
            raise LexError.make('UnterminatedString', 'closing quote never found', e.line, e.column) from None
        raise syntax_error(f"unexpected character {e.char!r}", e.line, e.column,
                           sorted(e.allowed or ()), 'Unknown', e.char) from None
    except UnexpectedEOF as e:
        raise syntax_error("unexpected end of input", 0, 0, sorted(e.expected), 'EOF', '') from None
    except UnexpectedToken as e:
        token = e.token
        actual = '$END' if token.type == '$END' else token.type
        lexeme = '' if token.type == '$END' else str(token)
        line = getattr(token, 'line', None) or 0
        column = getattr(token, 'column', None) or 0
        raise syntax_error(f"expected one of {', '.join(sorted(e.expected))}, got {actual} {lexeme!r}",
                           line, column, sorted(e.expected), actual, lexeme) from None
    return ASTTransformer().transform(tree)

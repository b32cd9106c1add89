"""Recursive-descent parser for fnlang.

The parser walks an immutable token list with an explicit cursor and one
token of lookahead. It builds the AST defined in `fnlang.ast` and stops at
the first grammar violation with a `ParseError` (kind `SyntaxError`)
describing the token kinds it expected and the token it found.

Grammar:

    Program     := FuncDef* EOF
    FuncDef     := 'fn' Ident '(' ParamList? ')' Block
    ParamList   := Ident (',' Ident)*
    Block       := '{' Stmt* '}'
    Stmt        := While | If | Break | Return | Assignment | ExprStmt
    While       := 'while' '(' Expr ')' Block
    If          := 'if' '(' Expr ')' Block ('else' (If | Block))?
    Break       := 'break' ';'
    Return      := 'return' Expr? ';'
    Assignment  := Ident '=' Expr ';'
    ExprStmt    := Expr ';'
    Expr        := Add (RelOp Add)?
    Add         := Mul (('+'|'-') Mul)*
    Mul         := Unary (('*'|'/'|'%') Unary)*
    Unary       := '(' Expr ')' | Ident '(' ArgList? ')' | Literal
    ArgList     := Expr (',' Expr)*
    Literal     := Int | String | Bool | Ident
"""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence

from .ast import (
    Program, FunctionDef, ExprStmt, Assign, IfStmt, WhileStmt, BreakStmt,
    ReturnStmt, IntLiteral, StrLiteral, BoolLiteral, Ident, BinaryOp, Call, Node,
)
from .errors import ParseError
from .lexer import Token, TokenKind, tokenize
from .types import ErrorVal

# token kinds that can start an expression
EXPR_START = (TokenKind.PAREN_OPEN, TokenKind.IDENT, TokenKind.INT, TokenKind.STRING, TokenKind.BOOL)

# Python frames used by one level of parenthesised nesting, and how many
# levels the parser accepts before reporting the input as too deeply nested
PY_FRAMES_PER_NESTING = 6
MAX_NESTING = 1000


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tuple(tokens)
        if not self.tokens or self.tokens[-1].kind != TokenKind.EOF:
            self.tokens += (Token(TokenKind.EOF, ''),)
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def match(self, *kinds: TokenKind) -> bool:
        return self.peek().kind in kinds

    def consume(self, *kinds: TokenKind) -> Token:
        token = self.peek()
        if token.kind not in kinds:
            raise self.error(kinds)
        # EOF is never consumed so peek() stays in bounds
        if token.kind != TokenKind.EOF:
            self.pos += 1
        return token

    def error(self, expected: Sequence[TokenKind]) -> ParseError:
        token = self.peek()
        names = [str(k) for k in expected]
        shown = names[0] if len(names) == 1 else 'one of ' + ', '.join(names)
        lexeme = token.text if token.kind != TokenKind.EOF else 'end of input'
        message = f"expected {shown}, got {token.kind} {lexeme!r}"
        err = ErrorVal('SyntaxError', message, ParseError.stage, token.line, token.column)
        return ParseError(err, expected=names, actual=str(token.kind), lexeme=token.text)

    def parse(self) -> Program:
        old_limit = sys.getrecursionlimit()
        needed = MAX_NESTING * PY_FRAMES_PER_NESTING + 1000
        if needed > old_limit:
            sys.setrecursionlimit(needed)
        try:
            functions: List[FunctionDef] = []
            while self.match(TokenKind.FUNC_DEF):
                functions.append(self.parse_func_def())
            self.consume(TokenKind.EOF, TokenKind.FUNC_DEF)
            return Program(functions)
        except RecursionError:
            token = self.peek()
            err = ErrorVal('SyntaxError', 'expression nested too deeply', ParseError.stage,
                           token.line, token.column)
            raise ParseError(err, actual=str(token.kind), lexeme=token.text) from None
        finally:
            sys.setrecursionlimit(old_limit)

    def parse_func_def(self) -> FunctionDef:
        fn_token = self.consume(TokenKind.FUNC_DEF)
        name_token = self.consume(TokenKind.IDENT)
        self.consume(TokenKind.PAREN_OPEN)
        params: List[str] = []
        if self.match(TokenKind.IDENT):
            params = self.parse_param_list()
        self.consume(TokenKind.PAREN_CLOSE)
        body = self.parse_block()
        return FunctionDef(name_token.text, params, body, line=fn_token.line)

    def parse_param_list(self) -> List[str]:
        params = [self.consume(TokenKind.IDENT).text]
        while self.match(TokenKind.COMMA):
            self.consume(TokenKind.COMMA)
            params.append(self.consume(TokenKind.IDENT).text)
        return params

    def parse_block(self) -> List[Node]:
        self.consume(TokenKind.BEGIN)
        statements: List[Node] = []
        while not self.match(TokenKind.END, TokenKind.EOF):
            statements.append(self.parse_statement())
        self.consume(TokenKind.END)
        return statements

    def parse_statement(self) -> Node:
        token = self.peek()
        if token.kind == TokenKind.WHILE:
            return self.parse_while_stmt()
        if token.kind == TokenKind.IF:
            return self.parse_if_stmt()
        if token.kind == TokenKind.BREAK:
            self.consume(TokenKind.BREAK)
            self.consume(TokenKind.SEMICOLON)
            return BreakStmt(line=token.line)
        if token.kind == TokenKind.RETURN:
            return self.parse_return_stmt()
        if not self.match(*EXPR_START):
            raise self.error((TokenKind.WHILE, TokenKind.IF, TokenKind.BREAK, TokenKind.RETURN) + EXPR_START)
        start = self.pos
        expr = self.parse_expression()
        # only a lone identifier token followed by '=' is an assignment target
        if isinstance(expr, Ident) and self.pos == start + 1 and self.match(TokenKind.ASSIGN):
            self.consume(TokenKind.ASSIGN)
            value = self.parse_expression()
            self.consume(TokenKind.SEMICOLON)
            return Assign(expr.name, value, line=token.line)
        self.consume(TokenKind.SEMICOLON)
        return ExprStmt(expr, line=token.line)

    def parse_while_stmt(self) -> WhileStmt:
        token = self.consume(TokenKind.WHILE)
        self.consume(TokenKind.PAREN_OPEN)
        condition = self.parse_expression()
        self.consume(TokenKind.PAREN_CLOSE)
        body = self.parse_block()
        return WhileStmt(condition, body, line=token.line)

    def parse_if_stmt(self) -> IfStmt:
        token = self.consume(TokenKind.IF)
        self.consume(TokenKind.PAREN_OPEN)
        condition = self.parse_expression()
        self.consume(TokenKind.PAREN_CLOSE)
        then_body = self.parse_block()
        else_body: Optional[List[Node]] = None
        if self.match(TokenKind.ELSE):
            self.consume(TokenKind.ELSE)
            if self.match(TokenKind.IF):
                else_body = [self.parse_if_stmt()]
            else:
                else_body = self.parse_block()
        return IfStmt(condition, then_body, else_body, line=token.line)

    def parse_return_stmt(self) -> ReturnStmt:
        token = self.consume(TokenKind.RETURN)
        if self.match(TokenKind.SEMICOLON):
            self.consume(TokenKind.SEMICOLON)
            return ReturnStmt(None, line=token.line)
        value = self.parse_expression()
        self.consume(TokenKind.SEMICOLON)
        return ReturnStmt(value, line=token.line)

    # Expressions

    def parse_expression(self) -> Node:
        return self.parse_relation()

    def parse_relation(self) -> Node:
        # non-associative: at most one relational operator per level
        node = self.parse_add()
        if self.match(TokenKind.OP_REL):
            op_token = self.consume(TokenKind.OP_REL)
            right = self.parse_add()
            node = BinaryOp(op_token.text, node, right, line=op_token.line)
        return node

    def parse_add(self) -> Node:
        node = self.parse_mul()
        while self.match(TokenKind.OP_ADD):
            op_token = self.consume(TokenKind.OP_ADD)
            right = self.parse_mul()
            node = BinaryOp(op_token.text, node, right, line=op_token.line)
        return node

    def parse_mul(self) -> Node:
        node = self.parse_unary()
        while self.match(TokenKind.OP_MUL):
            op_token = self.consume(TokenKind.OP_MUL)
            right = self.parse_unary()
            node = BinaryOp(op_token.text, node, right, line=op_token.line)
        return node

    def parse_unary(self) -> Node:
        token = self.peek()
        if token.kind == TokenKind.PAREN_OPEN:
            self.consume(TokenKind.PAREN_OPEN)
            expr = self.parse_expression()
            self.consume(TokenKind.PAREN_CLOSE)
            return expr
        if token.kind == TokenKind.IDENT:
            self.consume(TokenKind.IDENT)
            if self.match(TokenKind.PAREN_OPEN):
                return self.parse_call(token)
            return Ident(token.text, line=token.line)
        if token.kind == TokenKind.INT:
            self.consume(TokenKind.INT)
            return IntLiteral(int(token.text), line=token.line)
        if token.kind == TokenKind.STRING:
            self.consume(TokenKind.STRING)
            return StrLiteral(token.text[1:-1], line=token.line)
        if token.kind == TokenKind.BOOL:
            self.consume(TokenKind.BOOL)
            return BoolLiteral(token.text == 'true', line=token.line)
        raise self.error(EXPR_START)

    def parse_call(self, name_token: Token) -> Call:
        self.consume(TokenKind.PAREN_OPEN)
        args: List[Node] = []
        if not self.match(TokenKind.PAREN_CLOSE):
            args.append(self.parse_expression())
            while self.match(TokenKind.COMMA):
                self.consume(TokenKind.COMMA)
                args.append(self.parse_expression())
        self.consume(TokenKind.PAREN_CLOSE)
        return Call(name_token.text, args, line=name_token.line)


def parse(tokens: Sequence[Token]) -> Program:
    """Parse a token sequence into a Program AST."""
    return Parser(tokens).parse()


def parse_program(source: str) -> Program:
    """Tokenize and parse fnlang source code into a Program AST."""
    return parse(tokenize(source))

"""Tokenizer for fnlang.

`tokenize` turns program text into a list of `Token` objects in a single
left-to-right scan. It is total apart from one case: a string literal with
no closing quote raises `LexError` (kind `UnterminatedString`). Characters
the language has no use for become `UNKNOWN` tokens and are left for the
parser to reject. The list always ends with an `EOF` token so the parser
can peek one token ahead without bounds checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .errors import LexError


class TokenKind(Enum):
    FUNC_DEF = 'FuncDef'
    WHILE = 'While'
    IF = 'If'
    ELSE = 'Else'
    BREAK = 'Break'
    RETURN = 'Return'
    BOOL = 'Bool'
    IDENT = 'Ident'
    INT = 'Int'
    STRING = 'String'
    ASSIGN = 'Assign'
    OP_REL = 'OpRel'
    OP_ADD = 'OpAdd'
    OP_MUL = 'OpMul'
    NOT = 'Not'
    PAREN_OPEN = 'ParenOpen'
    PAREN_CLOSE = 'ParenClose'
    BEGIN = 'Begin'
    END = 'End'
    SEMICOLON = 'Semicolon'
    COMMA = 'Comma'
    UNKNOWN = 'Unknown'
    EOF = 'EOF'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    # position is informational; two tokens are equal when kind and text are
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r})"


KEYWORDS = {
    'fn': TokenKind.FUNC_DEF,
    'while': TokenKind.WHILE,
    'if': TokenKind.IF,
    'else': TokenKind.ELSE,
    'break': TokenKind.BREAK,
    'return': TokenKind.RETURN,
    'true': TokenKind.BOOL,
    'false': TokenKind.BOOL,
}

SINGLE_CHAR = {
    '(': TokenKind.PAREN_OPEN,
    ')': TokenKind.PAREN_CLOSE,
    '{': TokenKind.BEGIN,
    '}': TokenKind.END,
    ';': TokenKind.SEMICOLON,
    ',': TokenKind.COMMA,
    '+': TokenKind.OP_ADD,
    '-': TokenKind.OP_ADD,
    '*': TokenKind.OP_MUL,
    '/': TokenKind.OP_MUL,
    '%': TokenKind.OP_MUL,
}

# characters that may take a trailing '=' and their kind when they don't
RELATIONAL_LEAD = {
    '=': TokenKind.ASSIGN,
    '<': TokenKind.OP_REL,
    '>': TokenKind.OP_REL,
    '!': TokenKind.NOT,
}

WHITESPACE = ' \n\t\r'


def is_letter(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z')


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def classify_word(word: str) -> TokenKind:
    return KEYWORDS.get(word, TokenKind.IDENT)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    tokens: List[Token] = []
    i = 0
    line = 1
    col = 1
    length = len(source)

    def advance(n: int = 1):
        nonlocal i, col, line
        for _ in range(n):
            if i < length and source[i] == '\n':
                line += 1
                col = 1
            else:
                col += 1
            i += 1

    while i < length:
        c = source[i]
        if c in WHITESPACE:
            advance()
            continue
        start_i, start_line, start_col = i, line, col
        # String literal, taken verbatim including both quotes
        if c == '"':
            advance()
            while i < length and source[i] != '"':
                advance()
            if i >= length:
                raise LexError.make('UnterminatedString', 'closing quote never found',
                                    start_line, start_col)
            advance()
            tokens.append(Token(TokenKind.STRING, source[start_i:i], start_line, start_col))
            continue
        if is_digit(c):
            while i < length and is_digit(source[i]):
                advance()
            tokens.append(Token(TokenKind.INT, source[start_i:i], start_line, start_col))
            continue
        # Identifiers or keywords
        if is_letter(c):
            while i < length and (is_letter(source[i]) or is_digit(source[i])):
                advance()
            word = source[start_i:i]
            tokens.append(Token(classify_word(word), word, start_line, start_col))
            continue
        if c in RELATIONAL_LEAD:
            if i + 1 < length and source[i + 1] == '=':
                advance(2)
                tokens.append(Token(TokenKind.OP_REL, c + '=', start_line, start_col))
            else:
                advance()
                tokens.append(Token(RELATIONAL_LEAD[c], c, start_line, start_col))
            continue
        advance()
        tokens.append(Token(SINGLE_CHAR.get(c, TokenKind.UNKNOWN), c, start_line, start_col))
    tokens.append(Token(TokenKind.EOF, '', line, col))
    return tokens

import pytest

from fnlang.errors import LexError
from fnlang.lexer import Token, TokenKind, tokenize


def kinds(source):
    return [t.kind for t in tokenize(source)]


def test_hello_world_tokens():
    tokens = tokenize('fn main2() {\n    print("Hello World");\n}\n')
    assert tokens == [
        Token(TokenKind.FUNC_DEF, 'fn'),
        Token(TokenKind.IDENT, 'main2'),
        Token(TokenKind.PAREN_OPEN, '('),
        Token(TokenKind.PAREN_CLOSE, ')'),
        Token(TokenKind.BEGIN, '{'),
        Token(TokenKind.IDENT, 'print'),
        Token(TokenKind.PAREN_OPEN, '('),
        Token(TokenKind.STRING, '"Hello World"'),
        Token(TokenKind.PAREN_CLOSE, ')'),
        Token(TokenKind.SEMICOLON, ';'),
        Token(TokenKind.END, '}'),
        Token(TokenKind.EOF, ''),
    ]


def test_keywords_and_identifiers():
    tokens = tokenize('while if else break return true false fn iffy fn2 x1y')
    assert [t.kind for t in tokens] == [
        TokenKind.WHILE, TokenKind.IF, TokenKind.ELSE, TokenKind.BREAK, TokenKind.RETURN,
        TokenKind.BOOL, TokenKind.BOOL, TokenKind.FUNC_DEF,
        TokenKind.IDENT, TokenKind.IDENT, TokenKind.IDENT, TokenKind.EOF,
    ]


def test_relational_operators_use_maximal_munch():
    tokens = tokenize('== <= >= != < > = !')
    assert [(t.kind, t.text) for t in tokens[:-1]] == [
        (TokenKind.OP_REL, '=='),
        (TokenKind.OP_REL, '<='),
        (TokenKind.OP_REL, '>='),
        (TokenKind.OP_REL, '!='),
        (TokenKind.OP_REL, '<'),
        (TokenKind.OP_REL, '>'),
        (TokenKind.ASSIGN, '='),
        (TokenKind.NOT, '!'),
    ]


def test_assignment_next_to_operand():
    assert [t.text for t in tokenize('a=b<c')][:-1] == ['a', '=', 'b', '<', 'c']


def test_arithmetic_operators():
    assert kinds('+-*/%') == [
        TokenKind.OP_ADD, TokenKind.OP_ADD, TokenKind.OP_MUL, TokenKind.OP_MUL, TokenKind.OP_MUL, TokenKind.EOF,
    ]


def test_numbers_have_no_sign_or_fraction():
    tokens = tokenize('-12.5')
    assert [(t.kind, t.text) for t in tokens[:-1]] == [
        (TokenKind.OP_ADD, '-'),
        (TokenKind.INT, '12'),
        (TokenKind.UNKNOWN, '.'),
        (TokenKind.INT, '5'),
    ]


def test_digits_then_letters_split():
    assert [(t.kind, t.text) for t in tokenize('12ab')][:-1] == [(TokenKind.INT, '12'), (TokenKind.IDENT, 'ab')]


def test_string_is_verbatim():
    tokens = tokenize(r'"a \n b; fn"')
    assert tokens[0] == Token(TokenKind.STRING, r'"a \n b; fn"')
    assert len(tokens) == 2


def test_unterminated_string():
    with pytest.raises(LexError) as exc:
        tokenize('fn main() {\n  print("oops);\n}')
    assert exc.value.kind == 'UnterminatedString'
    assert exc.value.err.stage == 'lexing'
    assert (exc.value.err.line, exc.value.err.column) == (2, 9)


def test_unknown_characters_are_tokens():
    assert [(t.kind, t.text) for t in tokenize('@ _')][:-1] == [(TokenKind.UNKNOWN, '@'), (TokenKind.UNKNOWN, '_')]


def test_empty_source_is_just_eof():
    assert tokenize('') == [Token(TokenKind.EOF, '')]
    assert tokenize(' \n\t ') == [Token(TokenKind.EOF, '')]


def test_positions():
    tokens = tokenize('fn f() {\n  x = 10;\n}')
    x = tokens[5]
    ten = tokens[7]
    assert (x.text, x.line, x.column) == ('x', 2, 3)
    assert (ten.text, ten.line, ten.column) == ('10', 2, 7)


def test_equality_ignores_position():
    assert Token(TokenKind.IDENT, 'a', 1, 1) == Token(TokenKind.IDENT, 'a', 5, 9)
    assert Token(TokenKind.IDENT, 'a') != Token(TokenKind.STRING, 'a')


@pytest.mark.parametrize('left, right', [
    ('fn main() {', ' print(1); }'),
    ('x = 1 ', '+ 2;'),
    ('a < ', '= b'),
    ('"str" ', '"str"'),
    ('while(', 'true){break;}'),
])
def test_tokenize_concatenation(left, right):
    assert tokenize(left)[:-1] + tokenize(right) == tokenize(left + right)

"""
Mana Lexer Tests

1. Token kinds
2. Integers versus symbols
3. Comments and whitespace
4. Positions
5. Lexical errors
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mana.errors import LexError
from mana.lexer import TokenType, is_symbol, tokenize


def types(source):
    return [t.type for t in tokenize(source)]


# --- Test 1: Token kinds ---

def test_list_of_booleans():
    assert types("(#t #f)") == [
        TokenType.LPAREN, TokenType.TRUE, TokenType.FALSE,
        TokenType.RPAREN, TokenType.EOF,
    ]


def test_literal_form():
    tokens = tokenize('#[ foo () "" ]')
    assert [t.type for t in tokens] == [
        TokenType.HASH_LBRACKET, TokenType.SYMBOL, TokenType.LPAREN,
        TokenType.RPAREN, TokenType.STRING, TokenType.RBRACKET, TokenType.EOF,
    ]
    assert tokens[1].value == "foo"
    assert tokens[4].value == ""


def test_booleans_next_to_delimiters():
    assert types("(#t)") == [
        TokenType.LPAREN, TokenType.TRUE, TokenType.RPAREN, TokenType.EOF,
    ]


def test_string_keeps_raw_escapes():
    tokens = tokenize('"a\\"b\\x00"')
    assert tokens[0].type == TokenType.STRING
    assert tokens[0].value == 'a\\"b\\x00'


def test_empty_source():
    assert types("") == [TokenType.EOF]


def test_bytes_source():
    assert types(b"(1)") == [
        TokenType.LPAREN, TokenType.INTEGER, TokenType.RPAREN, TokenType.EOF,
    ]


# --- Test 2: Integers and symbols ---

def test_integers():
    tokens = tokenize("-12 0 7")
    assert [(t.type, t.value) for t in tokens[:-1]] == [
        (TokenType.INTEGER, "-12"),
        (TokenType.INTEGER, "0"),
        (TokenType.INTEGER, "7"),
    ]


def test_minus_alone_is_symbol():
    tokens = tokenize("- -x")
    assert [(t.type, t.value) for t in tokens[:-1]] == [
        (TokenType.SYMBOL, "-"),
        (TokenType.SYMBOL, "-x"),
    ]


def test_is_symbol():
    assert is_symbol("cons")
    assert is_symbol("my-tag?")
    assert not is_symbol("12")
    assert not is_symbol("-3")
    assert not is_symbol("")
    assert not is_symbol("a b")


# --- Test 3: Comments ---

def test_comment_stripped():
    tokens = tokenize("123 ; comment\n456")
    assert [(t.type, t.value) for t in tokens] == [
        (TokenType.INTEGER, "123"),
        (TokenType.INTEGER, "456"),
        (TokenType.EOF, ""),
    ]


def test_comment_at_end_of_input():
    assert types("1 ; trailing") == [TokenType.INTEGER, TokenType.EOF]


def test_semicolon_inside_string():
    tokens = tokenize('"a;b" ; gone')
    assert tokens[0].value == "a;b"
    assert len(tokens) == 2


# --- Test 4: Positions ---

def test_line_and_column():
    tokens = tokenize("1\n  2")
    second = tokens[1]
    assert second.offset == 4
    assert second.line == 2
    assert second.col == 2


# --- Test 5: Errors ---

def test_unterminated_string():
    with pytest.raises(LexError) as info:
        tokenize('  "abc')
    assert info.value.offset == 2


def test_escaped_quote_does_not_terminate():
    with pytest.raises(LexError):
        tokenize('"ab\\"')


@pytest.mark.parametrize("source", ["#", "#x", "#true", "#t1"])
def test_bad_hash(source):
    with pytest.raises(LexError):
        tokenize(source)


def test_malformed_integer():
    with pytest.raises(LexError):
        tokenize("12ab")


def test_invalid_character_position():
    with pytest.raises(LexError) as info:
        tokenize("ab {")
    assert info.value.offset == 3
    assert info.value.line == 1
    assert info.value.col == 3


def test_invalid_utf8():
    with pytest.raises(LexError):
        tokenize(b"\xff")

"""
Mana Lexer

Turns S-expression source text into a token stream.

Token kinds:
    (  )  #[  ]  #t  #f  INTEGER  STRING  SYMBOL  EOF

Whitespace separates tokens. A ';' starts a comment running to the end of
the line, except inside a string where it is an ordinary character.
STRING tokens carry the raw text between the quotes; the reader decodes
escapes through mana.escape so that both directions share one rule set.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from mana.errors import LexError


class TokenType(Enum):
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    HASH_LBRACKET = auto()  # #[
    RBRACKET = auto()       # ]
    TRUE = auto()           # #t
    FALSE = auto()          # #f
    INTEGER = auto()
    STRING = auto()
    SYMBOL = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    offset: int
    line: int
    col: int

    def __repr__(self) -> str:
        return f"<{self.type.name}:{self.value!r}>"


SYMBOL_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "_-+*/.:?!<>=$%&~^@"
)
WHITESPACE = frozenset(" \t\r\n")
DELIMITERS = WHITESPACE | frozenset('()[]";')

_SYMBOL_RUN = re.compile(r"[A-Za-z0-9_\-+*/.:?!<>=$%&~^@]+")
_INTEGER = re.compile(r"-?[0-9]+")
_NUMERIC_START = re.compile(r"-?[0-9]")


def is_symbol(text: str) -> bool:
    """Whether `text` lexes as a single SYMBOL token."""
    return (
        _SYMBOL_RUN.fullmatch(text) is not None
        and _NUMERIC_START.match(text) is None
    )


class _Scanner:
    """Cursor over the source that keeps line and column in step."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 0

    def peek(self, ahead: int = 0) -> str:
        i = self.pos + ahead
        return self.source[i] if i < len(self.source) else ""

    def skip(self, count: int = 1) -> None:
        for ch in self.source[self.pos:self.pos + count]:
            if ch == "\n":
                self.line += 1
                self.col = 0
            else:
                self.col += 1
        self.pos += count

    def token(self, ttype: TokenType, value: str) -> Token:
        return Token(ttype, value, self.pos, self.line, self.col)

    def error(self, message: str) -> LexError:
        return LexError(message, self.pos, self.line, self.col)


def tokenize(source: Union[str, bytes]) -> list[Token]:
    """Tokenize mana source into a token stream ending in EOF."""
    if isinstance(source, (bytes, bytearray)):
        try:
            source = bytes(source).decode("utf-8")
        except UnicodeDecodeError as e:
            raise LexError(f"Invalid UTF-8: {e.reason}", e.start) from e

    tokens: list[Token] = []
    s = _Scanner(source)

    while s.pos < len(source):
        ch = s.peek()

        if ch in WHITESPACE:
            s.skip()
            continue

        # Comment to end of line
        if ch == ";":
            end = source.find("\n", s.pos)
            s.skip((end if end >= 0 else len(source)) - s.pos)
            continue

        if ch == "(":
            tokens.append(s.token(TokenType.LPAREN, ch))
            s.skip()
            continue
        if ch == ")":
            tokens.append(s.token(TokenType.RPAREN, ch))
            s.skip()
            continue
        if ch == "]":
            tokens.append(s.token(TokenType.RBRACKET, ch))
            s.skip()
            continue

        if ch == "#":
            nxt = s.peek(1)
            if nxt == "[":
                tokens.append(s.token(TokenType.HASH_LBRACKET, "#["))
                s.skip(2)
                continue
            if nxt in ("t", "f"):
                after = s.peek(2)
                if after and after not in DELIMITERS:
                    raise s.error(f"Unexpected character after '#{nxt}': {after!r}")
                ttype = TokenType.TRUE if nxt == "t" else TokenType.FALSE
                tokens.append(s.token(ttype, "#" + nxt))
                s.skip(2)
                continue
            raise s.error("Expected '[', 't' or 'f' after '#'")

        # Quoted byte literal
        if ch == '"':
            i = s.pos + 1
            while i < len(source) and source[i] != '"':
                i += 2 if source[i] == "\\" else 1
            if i >= len(source):
                raise s.error("Unterminated string")
            tokens.append(s.token(TokenType.STRING, source[s.pos + 1:i]))
            s.skip(i + 1 - s.pos)
            continue

        # Integer or symbol
        match = _SYMBOL_RUN.match(source, s.pos)
        if match:
            word = match.group()
            if _INTEGER.fullmatch(word):
                tokens.append(s.token(TokenType.INTEGER, word))
            elif _NUMERIC_START.match(word):
                raise s.error(f"Malformed integer: {word!r}")
            else:
                tokens.append(s.token(TokenType.SYMBOL, word))
            s.skip(len(word))
            continue

        raise s.error(f"Unexpected character: {ch!r}")

    tokens.append(s.token(TokenType.EOF, ""))
    return tokens

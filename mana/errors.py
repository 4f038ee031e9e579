"""
Mana Errors

Every failure while reading text is reported as a structured error that
carries the position of the offending input. Nothing is recovered: the
first error aborts the whole read and no partial datum is returned.

Hierarchy:
    ManaError
    ├── LexError
    ├── EscapeError
    │   ├── InvalidEscape
    │   └── TruncatedEscape
    ├── ParseError
    │   ├── UnexpectedToken
    │   │   └── ExpectedSymbol
    │   ├── UnbalancedDelimiter
    │   ├── ShapeMismatch
    │   ├── IntegerOutOfRange
    │   └── NestingTooDeep
    └── RedefinitionError
"""

from __future__ import annotations

from typing import Optional


class ManaError(Exception):
    """Base class for all errors raised by mana."""

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        line: Optional[int] = None,
        col: Optional[int] = None,
    ):
        if line is not None:
            super().__init__(f"Line {line}, Col {col}: {message}")
        else:
            super().__init__(message)
        self.message = message
        self.offset = offset
        self.line = line
        self.col = col

    @property
    def kind(self) -> str:
        return type(self).__name__


class LexError(ManaError):
    """Unterminated string, or a character that cannot start a token."""


class EscapeError(ManaError):
    """A byte literal could not be decoded."""


class InvalidEscape(EscapeError):
    pass


class TruncatedEscape(EscapeError):
    pass


class ParseError(ManaError):
    pass


class UnexpectedToken(ParseError):
    def __init__(self, message: str, token):
        super().__init__(
            f"{message} (got {token})", token.offset, token.line, token.col
        )
        self.token = token


class ExpectedSymbol(UnexpectedToken):
    pass


class UnbalancedDelimiter(ParseError):
    def __init__(self, delimiter: str, opener, token):
        super().__init__(
            f"Missing {delimiter!r} to close {opener.value!r} opened at "
            f"line {opener.line}, col {opener.col}",
            token.offset, token.line, token.col,
        )
        self.delimiter = delimiter
        self.opener = opener


class ShapeMismatch(ParseError):
    """A literal with a registered tag has the wrong arity or byte length."""

    def __init__(
        self,
        tag: str,
        expected: tuple[int, int],
        actual: tuple[int, int],
        offset: Optional[int] = None,
        line: Optional[int] = None,
        col: Optional[int] = None,
    ):
        super().__init__(
            f"Tag '{tag}' expects {expected[0]} element(s) and "
            f"{expected[1]} byte(s), got {actual[0]} element(s) and "
            f"{actual[1]} byte(s)",
            offset, line, col,
        )
        self.tag = tag
        self.expected = expected
        self.actual = actual


class IntegerOutOfRange(ParseError):
    def __init__(
        self,
        text: str,
        offset: Optional[int] = None,
        line: Optional[int] = None,
        col: Optional[int] = None,
    ):
        super().__init__(
            f"Integer {text} does not fit in a signed 64-bit integer",
            offset, line, col,
        )
        self.text = text


class NestingTooDeep(ParseError):
    pass


class RedefinitionError(ManaError):
    """A tag rule with the same name is already registered."""

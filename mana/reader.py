"""
Mana Reader

Reader from a token stream to data. Nested forms are tracked on an
explicit stack of open forms, so nesting depth is bounded only by memory
unless a `max_depth` is given.

Grammar (alternatives tried in this order):
    Datum    ::= Literal | "#t" | "#f" | Integer | List
    Literal  ::= "#[" Symbol "(" Datum* ")" String "]"
    List     ::= "(" Datum* ")"
    Integer  ::= "-"? Digit+

A literal whose tag is registered must match the registered shape. A list
folds to the right into cons cells and always ends in nil. Bare symbols
are only accepted when a registered rule claims them.

All state lives on the Reader instance; the first error aborts the read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

import structlog

from mana.datum import FALSE, TRUE, Builtin, Datum, from_list
from mana.errors import (
    ExpectedSymbol,
    IntegerOutOfRange,
    NestingTooDeep,
    UnbalancedDelimiter,
    UnexpectedToken,
)
from mana.escape import decode_body
from mana.lexer import Token, TokenType, tokenize
from mana.numeric import INT64_MAX_DIGITS, encode_int64, fits_int64
from mana.registry import TagRegistry, default_registry
from mana.sigil import Sigils

logger = structlog.get_logger(__name__)

DEFAULT_MAX_DEPTH: Optional[int] = None

_CLOSERS = {
    TokenType.LPAREN: ")",
    TokenType.HASH_LBRACKET: "]",
}


class Reader:
    """Reads data from a token stream."""

    def __init__(
        self,
        tokens: list[Token],
        registry: Optional[TagRegistry] = None,
        sigils: Optional[Sigils] = None,
        max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
    ):
        self._tokens = tokens
        self._pos = 0
        self.registry = registry if registry is not None else default_registry()
        self.sigils = sigils
        self.max_depth = max_depth

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.type != TokenType.EOF:
            self._pos += 1
        return tok

    def _at(self, ttype: TokenType) -> bool:
        return self._peek().type == ttype

    def _expect(self, ttype: TokenType, opener: Token, what: str) -> Token:
        """Consume a `ttype` token inside the form started by `opener`."""
        tok = self._peek()
        if tok.type == TokenType.EOF:
            raise UnbalancedDelimiter(_CLOSERS[opener.type], opener, tok)
        if tok.type != ttype:
            raise UnexpectedToken(f"Expected {what}", tok)
        return self._advance()

    def at_end(self) -> bool:
        return self._at(TokenType.EOF)

    def read_one(self) -> Datum:
        """Read the next top-level datum."""
        if self.at_end():
            raise UnexpectedToken("Unexpected end of input", self._peek())
        return self._read_datum()

    def read_all(self) -> list[Datum]:
        data = []
        while not self.at_end():
            data.append(self._read_datum())
        logger.debug("read_complete", count=len(data))
        return data

    # -- Grammar ----------------------------------------------------------

    def _read_datum(self) -> Datum:
        """Read one complete datum, keeping unfinished forms on a stack."""
        stack: list[_Form] = []

        while True:
            tok = self._peek()

            if stack and tok.type == TokenType.RPAREN:
                form = stack.pop()
                self._advance()
                if form.tag is None:
                    value = from_list(form.items)
                else:
                    value = self._finish_literal(form)
            elif stack and tok.type == TokenType.EOF:
                form = stack[-1]
                raise UnbalancedDelimiter(")", form.paren, tok)
            elif tok.type == TokenType.HASH_LBRACKET:
                self._check_depth(len(stack), tok)
                stack.append(self._open_literal())
                continue
            elif tok.type == TokenType.LPAREN:
                self._check_depth(len(stack), tok)
                self._advance()
                stack.append(_Form(opener=tok, paren=tok))
                continue
            else:
                value = self._read_atom(tok)

            if not stack:
                return value
            stack[-1].items.append(value)

    def _read_atom(self, tok: Token) -> Datum:
        if tok.type == TokenType.TRUE:
            self._advance()
            return TRUE
        if tok.type == TokenType.FALSE:
            self._advance()
            return FALSE
        if tok.type == TokenType.INTEGER:
            return self._read_integer()
        if tok.type == TokenType.SYMBOL:
            datum = self.registry.read_symbol(tok.value)
            if datum is not None:
                self._advance()
                return datum
        raise UnexpectedToken("Expected a datum", tok)

    def _check_depth(self, depth: int, tok: Token) -> None:
        if self.max_depth is not None and depth >= self.max_depth:
            raise NestingTooDeep(
                f"Nesting deeper than {self.max_depth} levels",
                tok.offset, tok.line, tok.col,
            )

    def _open_literal(self) -> _Form:
        """Consume `#[ tag (` and return the open literal form."""
        opener = self._advance()

        tok = self._peek()
        if tok.type == TokenType.EOF:
            raise UnbalancedDelimiter("]", opener, tok)
        if tok.type != TokenType.SYMBOL:
            raise ExpectedSymbol("Expected a tag symbol after '#['", tok)
        tag = self._advance().value
        if self.sigils is not None:
            tag = self.sigils.canonical(tag)

        paren = self._expect(TokenType.LPAREN, opener, "'(' before elements")
        return _Form(opener=opener, paren=paren, tag=tag)

    def _finish_literal(self, form: _Form) -> Datum:
        """Consume `"bytes" ]` after the element list of a literal."""
        string = self._expect(TokenType.STRING, form.opener, "a byte string")
        auxiliary = decode_body(
            string.value, string.offset + 1, string.line, string.col + 1
        )
        self._expect(TokenType.RBRACKET, form.opener, "']' to close literal")

        datum = Datum(form.tag, tuple(form.items), auxiliary)
        self.registry.check_shape(datum, form.opener)
        return datum

    def _read_integer(self) -> Datum:
        tok = self._advance()
        # int() refuses very long digit strings, leading zeros included
        digits = tok.value.lstrip("-").lstrip("0")
        if len(digits) > INT64_MAX_DIGITS:
            raise IntegerOutOfRange(tok.value, tok.offset, tok.line, tok.col)
        value = int(digits or "0")
        if tok.value.startswith("-"):
            value = -value
        if not fits_int64(value):
            raise IntegerOutOfRange(tok.value, tok.offset, tok.line, tok.col)
        return Datum(Builtin.INT.value, (), encode_int64(value))


@dataclass
class _Form:
    """A list or literal whose closing ')' has not been read yet."""
    opener: Token
    paren: Token
    tag: Optional[str] = None
    items: list[Datum] = field(default_factory=list)


# ============================================================================
# Public API
# ============================================================================

Source = Union[str, bytes]


def _reader(source: Source, registry, sigils, max_depth) -> Reader:
    return Reader(tokenize(source), registry, sigils, max_depth)


def read(
    source: Source,
    registry: Optional[TagRegistry] = None,
    sigils: Optional[Sigils] = None,
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
) -> Datum:
    """Read exactly one datum from `source`."""
    reader = _reader(source, registry, sigils, max_depth)
    datum = reader.read_one()
    if not reader.at_end():
        raise UnexpectedToken("Expected end of input", reader._peek())
    return datum


def read_all(
    source: Source,
    registry: Optional[TagRegistry] = None,
    sigils: Optional[Sigils] = None,
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
) -> list[Datum]:
    """Read every datum in `source`."""
    return _reader(source, registry, sigils, max_depth).read_all()


def iter_read(
    source: Source,
    registry: Optional[TagRegistry] = None,
    sigils: Optional[Sigils] = None,
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
) -> Iterator[Datum]:
    """Yield data one at a time.

    The whole source is tokenized up front, so lexical errors surface before
    the first datum; parse errors surface when the bad datum is reached.
    """
    reader = _reader(source, registry, sigils, max_depth)
    while not reader.at_end():
        yield reader.read_one()

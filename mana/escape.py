"""
Mana Byte-Literal Codec

Converts between raw bytes and their quoted text form. The reader and the
writer both go through this module, so decode(encode(b)) == b for every
byte sequence.

Encoding:
    0x20-0x7E except '"' and '\\'   the ASCII character itself
    '"'  and '\\'                  \\"  and  \\\\
    anything else                  \\xHH, lowercase hex

Decoding accepts \\", \\\\ and \\xHH (either case). Any other escape, a \\x
with fewer than two following characters, and any raw character outside
printable ASCII are errors.
"""

from __future__ import annotations

from mana.errors import InvalidEscape, TruncatedEscape

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Index by byte value
_ENCODE_TABLE = tuple(
    "\\\"" if b == 0x22
    else "\\\\" if b == 0x5C
    else chr(b) if 0x20 <= b <= 0x7E
    else f"\\x{b:02x}"
    for b in range(256)
)


def encode_body(data: bytes) -> str:
    """Escape `data` without the surrounding quotes."""
    return "".join(_ENCODE_TABLE[b] for b in data)


def encode(data: bytes) -> str:
    return f'"{encode_body(data)}"'


def decode_body(body: str, offset: int = 0, line: int = 1, col: int = 0) -> bytes:
    """Decode the text between the quotes of a byte literal.

    `offset`, `line` and `col` locate the first character of `body` in the
    enclosing source so that errors point at the offending character.
    Decoding stops at the first character that is not printable ASCII, so
    no line break ever precedes the error position within `body`.
    """
    out = bytearray()
    i = 0
    n = len(body)

    def where(index: int) -> dict:
        return {"offset": offset + index, "line": line, "col": col + index}

    while i < n:
        ch = body[i]
        if ch == "\\":
            if i + 1 >= n:
                raise TruncatedEscape("Truncated escape at end of string", **where(i))
            esc = body[i + 1]
            if esc == '"' or esc == "\\":
                out.append(ord(esc))
                i += 2
            elif esc == "x":
                digits = body[i + 2:i + 4]
                if len(digits) < 2:
                    raise TruncatedEscape(
                        f"Truncated escape '\\x{digits}': expected two hex digits",
                        **where(i),
                    )
                if not all(d in _HEX_DIGITS for d in digits):
                    raise InvalidEscape(f"Invalid hex escape '\\x{digits}'", **where(i))
                out.append(int(digits, 16))
                i += 4
            else:
                raise InvalidEscape(f"Unknown escape '\\{esc}'", **where(i))
        elif " " <= ch <= "~" and ch != '"':
            out.append(ord(ch))
            i += 1
        else:
            raise InvalidEscape(
                f"Character {ch!r} must be written as an escape", **where(i)
            )
    return bytes(out)


def decode(text: str) -> bytes:
    """Decode a complete quoted byte literal such as '"a\\x00"'."""
    if len(text) < 2 or text[0] != '"' or text[-1] != '"':
        raise InvalidEscape(f"Byte literal must be enclosed in quotes: {text!r}", 0)
    return decode_body(text[1:-1], offset=1, col=1)

"""
Mana Byte-Literal Codec Tests

1. Encoding printable, quoted and non-printable bytes
2. Decoding escapes in either hex case
3. Escape errors and their positions
4. encode/decode agreement
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mana.escape import decode, decode_body, encode, encode_body
from mana.errors import EscapeError, InvalidEscape, TruncatedEscape


# --- Test 1: Encoding ---

def test_encode_control_byte():
    assert encode(b"\x01") == '"\\x01"'


def test_encode_empty():
    assert encode(b"") == '""'


def test_encode_quote_and_backslash():
    assert encode(b'a"b\\c') == '"a\\"b\\\\c"'


def test_encode_printable_bounds():
    data = bytes([0x1F, 0x20, 0x7E, 0x7F, 0x80, 0xFF])
    assert encode_body(data) == "\\x1f ~\\x7f\\x80\\xff"


def test_encode_semicolon_is_literal():
    assert encode(b"a;b") == '"a;b"'


# --- Test 2: Decoding ---

def test_decode_control_byte():
    assert decode('"\\x01"') == b"\x01"


def test_decode_upper_and_lower_hex():
    assert decode('"\\xAB\\xcd"') == b"\xab\xcd"


def test_decode_simple_escapes():
    assert decode('"\\"\\\\"') == b'"\\'


def test_decode_empty():
    assert decode('""') == b""


# --- Test 3: Errors ---

def test_invalid_hex_digit():
    with pytest.raises(InvalidEscape):
        decode('"\\xG1"')


def test_unknown_escape():
    with pytest.raises(InvalidEscape):
        decode('"\\n"')


def test_truncated_hex_escape():
    with pytest.raises(TruncatedEscape):
        decode('"\\x1"')


def test_lone_backslash():
    with pytest.raises(TruncatedEscape):
        decode_body("abc\\")


def test_raw_control_character():
    with pytest.raises(InvalidEscape):
        decode('"a\tb"')


def test_non_ascii_character():
    with pytest.raises(InvalidEscape):
        decode('"é"')


def test_unquoted_text():
    with pytest.raises(EscapeError):
        decode("abc")


def test_error_position_is_mapped():
    with pytest.raises(InvalidEscape) as info:
        decode_body("ab\\q", offset=10, line=3, col=4)
    assert info.value.offset == 12
    assert info.value.line == 3
    assert info.value.col == 6


# --- Test 4: Agreement ---

def test_every_byte_survives():
    data = bytes(range(256))
    assert decode(encode(data)) == data


def test_reencoding_is_idempotent():
    text = '"\\xAB;x\\x7F"'
    once = encode(decode(text))
    assert once == '"\\xab;x\\x7f"'
    assert encode(decode(once)) == once

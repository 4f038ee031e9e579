"""
Mana Numeric Codec

Integers are carried in a datum's auxiliary bytes as 8-byte little-endian
two's complement. Packing goes through struct; unpacking reads the
signed 64-bit field through a KaitaiStream, the same runtime the binary
format contexts use.
"""

from __future__ import annotations

import io
import struct

from kaitaistruct import KaitaiStream

from mana.errors import IntegerOutOfRange

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
INT64_SIZE = 8
# Decimal digits in INT64_MIN, the longest value in range
INT64_MAX_DIGITS = 19


def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def encode_int64(value: int) -> bytes:
    """Pack `value` as 8 little-endian bytes."""
    if not fits_int64(value):
        raise IntegerOutOfRange(str(value))
    return struct.pack("<q", value)


def decode_int64(data: bytes) -> int:
    """Unpack exactly 8 little-endian bytes into a signed integer."""
    if len(data) != INT64_SIZE:
        raise ValueError(f"Expected {INT64_SIZE} bytes, got {len(data)}")
    stream = KaitaiStream(io.BytesIO(bytes(data)))
    return stream.read_s8le()

"""
Mana int Rule

Eight auxiliary bytes holding a little-endian two's complement integer,
printed in decimal.
"""

from __future__ import annotations

from typing import Optional

from mana.datum import Builtin, Datum
from mana.numeric import INT64_SIZE, decode_int64
from mana.registry import TagRule, TagShape


class IntRule(TagRule):

    @property
    def name(self) -> str:
        return Builtin.INT.value

    @property
    def shape(self) -> TagShape:
        return TagShape(0, INT64_SIZE)

    def shorthand(self, datum: Datum, writer) -> Optional[str]:
        return str(decode_int64(datum.auxiliary))

"""
Mana bool Rule

One auxiliary byte: 0x01 is true and prints as #t, 0x00 is false and
prints as #f. Any other byte is well-shaped but has no shorthand.
"""

from __future__ import annotations

from typing import Optional

from mana.datum import Builtin, Datum
from mana.registry import TagRule, TagShape


class BoolRule(TagRule):

    @property
    def name(self) -> str:
        return Builtin.BOOL.value

    @property
    def shape(self) -> TagShape:
        return TagShape(0, 1)

    def shorthand(self, datum: Datum, writer) -> Optional[str]:
        if datum.auxiliary == b"\x01":
            return "#t"
        if datum.auxiliary == b"\x00":
            return "#f"
        return None

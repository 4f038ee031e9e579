"""
Mana nil Rule

The empty list. No elements, no bytes, prints as ().
"""

from __future__ import annotations

from typing import Optional

from mana.datum import Builtin, Datum
from mana.registry import TagRule, TagShape


class NilRule(TagRule):

    @property
    def name(self) -> str:
        return Builtin.NIL.value

    @property
    def shape(self) -> TagShape:
        return TagShape(0, 0)

    def shorthand(self, datum: Datum, writer) -> Optional[str]:
        return "()"

"""
Mana cons Rule

A pair (head, tail) with no bytes. A chain of cons cells ending in nil
prints as a flat list, (e1 e2 ... en). A chain ending in anything else
has no shorthand at all: every cell of it prints in literal form.
"""

from __future__ import annotations

from typing import Optional

from mana.datum import Builtin, Datum
from mana.registry import TagRule, TagShape
from mana.writer import spaced


class ConsRule(TagRule):

    @property
    def name(self) -> str:
        return Builtin.CONS.value

    @property
    def shape(self) -> TagShape:
        return TagShape(2, 0)

    def shorthand(self, datum: Datum, writer) -> Optional[list]:
        items = writer.list_items(datum)
        if items is None:
            return None
        return ["(", *spaced(items), ")"]

"""
Mana Writer

Prints a datum as canonical text. Output depends only on the datum's three
parts: shorthand is chosen whenever the registry has a rule for the tag,
the datum matches the rule's shape exactly, and the rule supplies a
shorthand. Everything else prints in literal form:

    #[ tag (elem1 elem2 ...) "bytes" ]

with each element printed by the same rules and the bytes escaped through
mana.escape.

Printing runs off an explicit work stack of text pieces and data still to
be printed, so neither long cons chains nor deep nesting recurse.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

import structlog

from mana.datum import Datum
from mana.escape import encode
from mana.registry import TagRegistry, default_registry

logger = structlog.get_logger(__name__)

Piece = Union[str, Datum]


class Writer:
    """Canonical printer bound to one tag registry."""

    def __init__(self, registry: Optional[TagRegistry] = None):
        self.registry = registry if registry is not None else default_registry()
        # ids of cons cells whose chain does not end in nil, for one write()
        self._improper: set[int] = set()

    def write(self, datum: Datum) -> str:
        self._improper.clear()
        try:
            return self.render(datum)
        finally:
            self._improper.clear()

    def render(self, datum: Datum) -> str:
        out: list[str] = []
        stack: list[Piece] = [datum]
        while stack:
            piece = stack.pop()
            if isinstance(piece, str):
                out.append(piece)
                continue
            pieces = self.expand(piece)
            if isinstance(pieces, str):
                out.append(pieces)
            else:
                stack.extend(reversed(pieces))
        return "".join(out)

    def expand(self, datum: Datum) -> Union[str, list[Piece]]:
        """Text for `datum`, or the pieces it prints as."""
        rule = self.registry.rule_for(datum.tag)
        if rule is not None and rule.shape.matches(datum):
            shorthand = rule.shorthand(datum, self)
            if shorthand is not None:
                return shorthand
            logger.debug("literal_fallback", tag=datum.tag)
        return self.literal(datum)

    def literal(self, datum: Datum) -> list[Piece]:
        pieces: list[Piece] = [f"#[ {datum.tag} ("]
        pieces.extend(spaced(datum.elements))
        pieces.append(f") {encode(datum.auxiliary)} ]")
        return pieces

    def list_items(self, datum: Datum) -> Optional[list[Datum]]:
        """Heads of a nil-terminated cons chain, or None if it is not one."""
        items = []
        cells = []
        node = datum
        while node.is_cons() and id(node) not in self._improper:
            cells.append(node)
            items.append(node.elements[0])
            node = node.elements[1]
        if node.is_nil():
            return items
        self._improper.update(id(cell) for cell in cells)
        return None


def spaced(data: Iterable[Datum]) -> list[Piece]:
    """`data` with a single space between neighbours."""
    pieces: list[Piece] = []
    for datum in data:
        if pieces:
            pieces.append(" ")
        pieces.append(datum)
    return pieces


def write(datum: Datum, registry: Optional[TagRegistry] = None) -> str:
    """Canonical text for `datum`."""
    return Writer(registry).write(datum)


def write_all(
    data: Iterable[Datum],
    registry: Optional[TagRegistry] = None,
    separator: str = "\n",
) -> str:
    writer = Writer(registry)
    return separator.join(writer.write(datum) for datum in data)

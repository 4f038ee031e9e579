"""
Mana Tag Registry

A TagRule describes one tag: the fixed shape its data must have and,
optionally, a shorthand text form. The registry maps tag names to rules
and is consulted by the reader (to validate literal forms) and by the
writer (to decide whether shorthand applies).

Tags absent from the registry are opaque: no shape is enforced and they
only ever print in literal form.

Usage:
    registry = TagRegistry.default()
    registry.shape_of("int")     # TagShape(arity=0, byte_length=8)
    registry.shape_of("point")   # None

    class PointRule(TagRule):
        name = "point"
        shape = TagShape(0, 2)

    registry.register(PointRule())
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

import structlog

from mana.errors import RedefinitionError, ShapeMismatch

if TYPE_CHECKING:
    from mana.datum import Datum
    from mana.lexer import Token
    from mana.writer import Writer

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TagShape:
    """Required element count and auxiliary byte length."""
    arity: int
    byte_length: int

    def matches(self, datum: Datum) -> bool:
        return (
            len(datum.elements) == self.arity
            and len(datum.auxiliary) == self.byte_length
        )

    def as_tuple(self) -> tuple[int, int]:
        return (self.arity, self.byte_length)

    def __repr__(self) -> str:
        return f"TagShape(arity={self.arity}, byte_length={self.byte_length})"


class TagRule(ABC):
    """Base class for tag rules.

    Subclasses provide:
        - name: the tag this rule governs
        - shape: the fixed TagShape of well-formed data
        - shorthand(): optional compact text form for printing
        - read_symbol(): optional hook claiming bare symbols when reading
    """

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def shape(self) -> TagShape:
        ...

    def shorthand(self, datum: Datum, writer: Writer) -> Optional[Union[str, list]]:
        """Text for `datum`, or None to print the literal form.

        Compound forms return a list of pieces instead: strings are copied
        to the output and nested data are printed in their place, so the
        writer never recurses. Only called when `datum` already matches
        `shape`. The output must read back as an equal datum.
        """
        return None

    def read_symbol(self, text: str) -> Optional[Datum]:
        """Datum for a bare symbol in datum position, or None to decline."""
        return None

    def __repr__(self) -> str:
        return f"<TagRule {self.name} {self.shape.as_tuple()}>"


class TagRegistry:
    """Name-keyed table of TagRules."""

    def __init__(self) -> None:
        self._rules: dict[str, TagRule] = {}

    @classmethod
    def default(cls) -> TagRegistry:
        """A fresh registry holding the four built-in rules."""
        from mana.rules import BUILTIN_RULES

        registry = cls()
        for rule_cls in BUILTIN_RULES:
            registry.register(rule_cls())
        return registry

    def register(self, rule: TagRule) -> None:
        if rule.name in self._rules:
            raise RedefinitionError(f"Tag '{rule.name}' is already registered")
        self._rules[rule.name] = rule
        logger.debug("tag_registered", tag=rule.name, shape=rule.shape.as_tuple())

    def unregister(self, name: str) -> TagRule:
        rule = self.get_rule(name)
        del self._rules[name]
        logger.debug("tag_unregistered", tag=name)
        return rule

    def get_rule(self, name: str) -> TagRule:
        if name not in self._rules:
            raise KeyError(
                f"Unknown tag '{name}'. "
                f"Registered: {list(self._rules.keys())}"
            )
        return self._rules[name]

    def rule_for(self, tag: str) -> Optional[TagRule]:
        return self._rules.get(tag)

    def shape_of(self, tag: str) -> Optional[TagShape]:
        rule = self._rules.get(tag)
        return rule.shape if rule is not None else None

    @property
    def tags(self) -> list[str]:
        return list(self._rules.keys())

    def __contains__(self, tag: str) -> bool:
        return tag in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def check_shape(self, datum: Datum, at: Optional[Token] = None) -> None:
        """Raise ShapeMismatch if a registered tag's shape is violated."""
        shape = self.shape_of(datum.tag)
        if shape is None or shape.matches(datum):
            return
        actual = (len(datum.elements), len(datum.auxiliary))
        if at is not None:
            raise ShapeMismatch(
                datum.tag, shape.as_tuple(), actual, at.offset, at.line, at.col
            )
        raise ShapeMismatch(datum.tag, shape.as_tuple(), actual)

    def read_symbol(self, text: str) -> Optional[Datum]:
        """Offer a bare symbol to each rule in registration order."""
        for rule in self._rules.values():
            datum = rule.read_symbol(text)
            if datum is not None:
                return datum
        return None


_default: Optional[TagRegistry] = None


def default_registry() -> TagRegistry:
    """The shared registry used when none is passed explicitly."""
    global _default
    if _default is None:
        _default = TagRegistry.default()
    return _default

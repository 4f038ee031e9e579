"""
Mana Datum

A datum is the single kind of value in mana. It has exactly three parts:

    tag        - a symbol selecting how the other two parts are read
    elements   - ordered references to other data
    auxiliary  - raw bytes for primitive payloads

Data are immutable. Elements are held by reference, never copied, so one
datum may appear under any number of parents and be traversed from any
number of threads at once.

Usage:
    xs = from_list([integer(1), boolean(True)])
    assert xs.tag == "cons"
    assert [x for x in xs.iter_list()] == [integer(1), TRUE]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union

from mana.lexer import is_symbol
from mana.numeric import INT64_SIZE, decode_int64, encode_int64


class Builtin(str, Enum):
    BOOL = "bool"
    INT = "int"
    NIL = "nil"
    CONS = "cons"


@dataclass(frozen=True)
class Opaque:
    """A tag with no built-in interpretation."""
    name: str


_BUILTINS = {b.value: b for b in Builtin}


@dataclass(frozen=True, eq=False)
class Datum:
    tag: str
    elements: tuple[Datum, ...] = ()
    auxiliary: bytes = b""

    def __post_init__(self) -> None:
        if isinstance(self.tag, Builtin):
            object.__setattr__(self, "tag", self.tag.value)
        if not isinstance(self.tag, str) or not is_symbol(self.tag):
            raise ValueError(f"Invalid tag {self.tag!r}")
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))
        for element in self.elements:
            if not isinstance(element, Datum):
                raise TypeError(f"Element {element!r} is not a Datum")
        if not isinstance(self.auxiliary, bytes):
            object.__setattr__(self, "auxiliary", bytes(self.auxiliary))

    @property
    def kind(self) -> Union[Builtin, Opaque]:
        return _BUILTINS.get(self.tag) or Opaque(self.tag)

    @property
    def arity(self) -> int:
        return len(self.elements)

    # -- Interpretation ---------------------------------------------------

    def as_bool(self) -> bool:
        if (self.tag != Builtin.BOOL or self.elements
                or self.auxiliary not in (b"\x00", b"\x01")):
            raise TypeError(f"{self!r} is not a boolean")
        return self.auxiliary == b"\x01"

    def as_int(self) -> int:
        if (self.tag != Builtin.INT or self.elements
                or len(self.auxiliary) != INT64_SIZE):
            raise TypeError(f"{self!r} is not an integer")
        return decode_int64(self.auxiliary)

    def is_nil(self) -> bool:
        return self.tag == Builtin.NIL and not self.elements and not self.auxiliary

    def is_cons(self) -> bool:
        return self.tag == Builtin.CONS and len(self.elements) == 2 and not self.auxiliary

    def is_list(self) -> bool:
        """Whether this is a chain of cons cells terminated by nil."""
        node = self
        while node.is_cons():
            node = node.elements[1]
        return node.is_nil()

    def iter_list(self) -> Iterator[Datum]:
        if not self.is_list():
            raise TypeError(f"{self!r} is not a proper list")
        node = self
        while node.is_cons():
            yield node.elements[0]
            node = node.elements[1]

    def to_list(self) -> list[Datum]:
        return list(self.iter_list())

    # -- Structural equality ----------------------------------------------
    # Both walk with an explicit stack; long lists are deep cons chains.

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Datum):
            return NotImplemented
        stack = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a is b:
                continue
            if (a.tag != b.tag or a.auxiliary != b.auxiliary
                    or len(a.elements) != len(b.elements)):
                return False
            stack.extend(zip(a.elements, b.elements))
        return True

    def __hash__(self) -> int:
        cached = self.__dict__.get("_hash")
        if cached is not None:
            return cached
        stack = [self]
        while stack:
            node = stack[-1]
            pending = [e for e in node.elements if "_hash" not in e.__dict__]
            if pending:
                stack.extend(pending)
                continue
            stack.pop()
            if "_hash" not in node.__dict__:
                child_hashes = tuple(e.__dict__["_hash"] for e in node.elements)
                object.__setattr__(
                    node, "_hash", hash((node.tag, child_hashes, node.auxiliary))
                )
        return self.__dict__["_hash"]

    def __repr__(self) -> str:
        if not self.elements and not self.auxiliary:
            return f"Datum({self.tag!r})"
        elements = ", ".join(repr(e) for e in self.elements)
        if len(self.elements) == 1:
            elements += ","
        return f"Datum({self.tag!r}, ({elements}), {self.auxiliary!r})"


# ============================================================================
# Constructors
# ============================================================================

TRUE = Datum(Builtin.BOOL.value, (), b"\x01")
FALSE = Datum(Builtin.BOOL.value, (), b"\x00")
NIL = Datum(Builtin.NIL.value)


def boolean(flag: bool) -> Datum:
    return TRUE if flag else FALSE


def integer(value: int) -> Datum:
    """Raises IntegerOutOfRange when `value` does not fit in 64 bits."""
    return Datum(Builtin.INT.value, (), encode_int64(value))


def nil() -> Datum:
    return NIL


def cons(head: Datum, tail: Datum) -> Datum:
    return Datum(Builtin.CONS.value, (head, tail))


def from_list(items: Iterable[Datum], tail: Datum = NIL) -> Datum:
    """Right-fold `items` into cons cells ending in `tail`."""
    result = tail
    for item in reversed(list(items)):
        result = cons(item, result)
    return result


def opaque(tag: str, elements: Iterable[Datum] = (), auxiliary: bytes = b"") -> Datum:
    return Datum(tag, tuple(elements), bytes(auxiliary))

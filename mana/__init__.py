"""
Mana - immutable data and their canonical S-expression text

A datum has three parts: a tag, a tuple of element data and a byte
string. The reader turns text into data, the writer turns data back into
one canonical text that reads back as an equal datum.

    from mana import read, write
    datum = read("(1 #t #[ point () \"\\x01\\x02\" ])")
    write(datum)
"""

__version__ = "0.1.0"

from mana.datum import (
    Datum,
    Builtin,
    Opaque,
    TRUE,
    FALSE,
    NIL,
    boolean,
    integer,
    nil,
    cons,
    from_list,
    opaque,
)
from mana.errors import (
    ManaError,
    LexError,
    EscapeError,
    InvalidEscape,
    TruncatedEscape,
    ParseError,
    UnexpectedToken,
    ExpectedSymbol,
    UnbalancedDelimiter,
    ShapeMismatch,
    IntegerOutOfRange,
    NestingTooDeep,
    RedefinitionError,
)
from mana.registry import TagRegistry, TagRule, TagShape, default_registry
from mana.sigil import Sigil, Sigils
from mana.reader import Reader, read, read_all, iter_read
from mana.writer import Writer, write, write_all

__all__ = [
    "Datum",
    "Builtin",
    "Opaque",
    "TRUE",
    "FALSE",
    "NIL",
    "boolean",
    "integer",
    "nil",
    "cons",
    "from_list",
    "opaque",
    "ManaError",
    "LexError",
    "EscapeError",
    "InvalidEscape",
    "TruncatedEscape",
    "ParseError",
    "UnexpectedToken",
    "ExpectedSymbol",
    "UnbalancedDelimiter",
    "ShapeMismatch",
    "IntegerOutOfRange",
    "NestingTooDeep",
    "RedefinitionError",
    "TagRegistry",
    "TagRule",
    "TagShape",
    "default_registry",
    "Sigil",
    "Sigils",
    "Reader",
    "read",
    "read_all",
    "iter_read",
    "Writer",
    "write",
    "write_all",
]

"""
Mana Built-in Tag Rules

Each rule fixes the shape of one built-in tag and supplies its shorthand
text form.
"""

from mana.rules.boolean import BoolRule
from mana.rules.integer import IntRule
from mana.rules.nil import NilRule
from mana.rules.cons import ConsRule

BUILTIN_RULES = (BoolRule, IntRule, NilRule, ConsRule)

__all__ = [
    "BoolRule",
    "IntRule",
    "NilRule",
    "ConsRule",
    "BUILTIN_RULES",
]

"""
Mana Sigils

A sigil is an interned tag name. The Sigils table hands out one small
integer per distinct name and keeps exactly one copy of each name, so
readers that intern their tags share a single string object between all
data carrying the same tag.

Sigils are never released until the table itself is dropped, so a table
should not be fed names from untrusted input without bound.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Sigil:
    id: int

    def __repr__(self) -> str:
        return f"Sigil({self.id})"


class Sigils:
    """Bidirectional mapping between tag names and sigils."""

    def __init__(self) -> None:
        self._by_id: list[str] = []
        self._by_name: dict[str, Sigil] = {}

    def intern(self, name: str) -> Sigil:
        """Return the sigil for `name`, creating it on first use."""
        sigil = self._by_name.get(name)
        if sigil is None:
            sigil = Sigil(len(self._by_id))
            self._by_id.append(name)
            self._by_name[name] = sigil
        return sigil

    def name(self, sigil: Sigil) -> Optional[str]:
        if 0 <= sigil.id < len(self._by_id):
            return self._by_id[sigil.id]
        return None

    def canonical(self, name: str) -> str:
        """The single shared copy of `name` held by this table."""
        return self._by_id[self.intern(name).id]

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_id)

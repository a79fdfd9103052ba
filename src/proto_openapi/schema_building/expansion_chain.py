"""Active expansion path used to bound recursive descent through message types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExpansionChain:
    """Ordered message identities currently being expanded on one recursive path.

    Chains are immutable; descending returns a new chain, so sibling branches
    never observe each other's entries.
    """

    entries: tuple[str, ...] = ()

    def __contains__(self, full_name: object) -> bool:
        return full_name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def occurrences(self, full_name: str) -> int:
        return self.entries.count(full_name)

    def can_enter(self, full_name: str, depth: int) -> bool:
        """Return True while re-entries of `full_name` on this path stay within `depth`."""
        return self.occurrences(full_name) < depth

    def push(self, full_name: str) -> ExpansionChain:
        return ExpansionChain(self.entries + (full_name,))

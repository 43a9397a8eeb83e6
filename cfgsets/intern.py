"""Interning of symbols and mappings between symbol spaces."""

from __future__ import annotations

from dataclasses import dataclass, field

from .symbol import Symbol, SymbolSource


@dataclass
class Mapping:
    """Translation tables between external and internal symbols.

    ``to_internal`` is indexed by external symbol id, ``to_external`` by
    internal symbol id.
    """

    to_internal: list[Symbol | None] = field(default_factory=list)
    to_external: list[Symbol] = field(default_factory=list)

    @classmethod
    def for_external(cls, num_external: int) -> Mapping:
        """Create an empty mapping over ``num_external`` external symbols."""
        return cls([None] * num_external, [])

    def translate(self, other: Mapping) -> None:
        """Compose this mapping with ``other``, which maps this one's internal symbols further."""
        self.to_internal = [
            None if internal is None else other.to_internal[internal]
            for internal in self.to_internal
        ]
        self.to_external = [self.to_external[middle] for middle in other.to_external]


class Intern:
    """Assigns fresh internal symbols to external symbols on first sight."""

    def __init__(self, num_external: int) -> None:
        self.source = SymbolSource()
        self.mapping = Mapping.for_external(num_external)

    def intern(self, symbol: Symbol) -> Symbol:
        """Return the internal symbol for ``symbol``, creating it if needed."""
        internal = self.mapping.to_internal[symbol]
        if internal is not None:
            return internal
        new_sym = self.source.next_sym()
        self.mapping.to_internal[symbol] = new_sym
        assert len(self.mapping.to_external) == new_sym.id
        self.mapping.to_external.append(symbol)
        return new_sym
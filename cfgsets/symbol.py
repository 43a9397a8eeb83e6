"""Grammar symbols and sources of fresh symbols."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

#: The first usable symbol id.
FIRST_ID = 0
#: The id reserved for "no symbol"; it can never be given to a symbol.
NULL_ID = 0xFFFF_FFFF


@dataclass(frozen=True, order=True)
class Symbol:
    """A grammar symbol, distinguished by its numeric id.

    Ids are unsigned 32-bit values; ``NULL_ID`` is reserved.
    """

    id: int = FIRST_ID

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise TypeError(f"symbol id must be an int, not {type(self.id).__name__}")
        if not FIRST_ID <= self.id < NULL_ID:
            raise ValueError(f"symbol id {self.id} is outside the valid range")

    def __index__(self) -> int:
        return self.id

    def __repr__(self) -> str:
        return f"Symbol({self.id})"


@dataclass
class SymbolSource:
    """A source of fresh, consecutively numbered symbols."""

    next_id: int = FIRST_ID

    def sym(self, n: int) -> tuple[Symbol, ...]:
        """Return ``n`` newly generated symbols."""
        if n < 0:
            raise ValueError("cannot generate a negative number of symbols")
        return tuple(self.next_sym() for _ in range(n))

    def next_sym(self) -> Symbol:
        """Generate a new unique symbol."""
        sym = Symbol(self.next_id)
        if self.next_id + 1 == NULL_ID:
            raise OverflowError("ran out of symbol space")
        self.next_id += 1
        return sym

    def num_syms(self) -> int:
        """Return the number of symbols in use."""
        return self.next_id

    def generate(self) -> Iterator[Symbol]:
        """Yield fresh symbols without end."""
        while True:
            yield self.next_sym()
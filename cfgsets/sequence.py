"""Sequence rules: repetitions of one symbol, with optional separators.

A sequence rule ``lhs ::= rhs{start, end}`` says that ``lhs`` derives between
``start`` and ``end`` (inclusive) repetitions of ``rhs``. ``end`` is ``None``
when the number of repetitions is unlimited.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from .symbol import Symbol


class SeparatorKind(Enum):
    """The mode of separation between the elements of a sequence."""

    #: Every element is followed by the separator.
    TRAILING = "trailing"
    #: The separator occurs only between elements.
    PROPER = "proper"
    #: Either proper or trailing: the final separator is optional.
    LIBERAL = "liberal"
    #: No separation.
    NULL = "null"


@dataclass(frozen=True)
class Separator:
    """A separator symbol together with its mode of separation."""

    kind: SeparatorKind = SeparatorKind.NULL
    symbol: Optional[Symbol] = None

    def __post_init__(self) -> None:
        if self.kind is SeparatorKind.NULL:
            if self.symbol is not None:
                raise ValueError("a null separator carries no symbol")
        elif self.symbol is None:
            raise ValueError(f"a {self.kind.value} separator needs a symbol")

    @classmethod
    def trailing(cls, symbol: Symbol) -> Separator:
        """Separation in which every element is followed by ``symbol``."""
        return cls(SeparatorKind.TRAILING, symbol)

    @classmethod
    def proper(cls, symbol: Symbol) -> Separator:
        """Separation with ``symbol`` only between elements."""
        return cls(SeparatorKind.PROPER, symbol)

    @classmethod
    def liberal(cls, symbol: Symbol) -> Separator:
        """Separation with ``symbol`` between elements and an optional trailing one."""
        return cls(SeparatorKind.LIBERAL, symbol)

    @classmethod
    def null(cls) -> Separator:
        """No separation."""
        return cls(SeparatorKind.NULL, None)

    def prefix_separator(self) -> Separator:
        """Return the kind of separation for a prefix of a sequence."""
        if self.kind in (SeparatorKind.PROPER, SeparatorKind.LIBERAL):
            return Separator.trailing(self.symbol)
        return self

    def trailing_symbol(self) -> Optional[Symbol]:
        """Return the separator symbol if the separation is trailing, else ``None``."""
        if self.kind is SeparatorKind.TRAILING:
            return self.symbol
        return None


def _inclusive_bounds(start: Optional[int], end: Optional[int]) -> tuple[int, Optional[int]]:
    """Convert half-open bounds into an inclusive ``(start, end)`` pair."""
    low = 0 if start is None else start
    if low < 0:
        raise ValueError(f"range start {low} is negative")
    if end is None:
        return low, None
    if end < 1:
        raise ValueError(f"range end {end} leaves no repetitions")
    return low, end - 1


@dataclass(frozen=True)
class Sequence:
    """A sequence rule ``lhs ::= rhs{start, end}``."""

    lhs: Symbol
    rhs: Symbol
    start: int = 0
    end: Optional[int] = None
    separator: Separator = field(default_factory=Separator.null)
    history_id: Optional[int] = None

    def inclusive(self, start: int, end: Optional[int]) -> Sequence:
        """Return a copy with the inclusive range ``start..=end`` of repetitions."""
        return dataclasses.replace(self, start=start, end=end)

    def with_separator(self, sep: Separator) -> Sequence:
        """Return a copy with the given separator."""
        return dataclasses.replace(self, separator=sep)

    def with_range(self, start: Optional[int] = None, end: Optional[int] = None) -> Sequence:
        """Return a copy with the half-open range ``[start, end)`` of repetitions.

        A missing ``start`` means zero; a missing ``end`` means unlimited.
        """
        return self.inclusive(*_inclusive_bounds(start, end))


class SequenceDestination(ABC):
    """Something that stores sequence rules, possibly rewriting them."""

    @abstractmethod
    def add_sequence(self, seq: Sequence) -> None:
        """Insert a sequence rule."""

    def sequence(self, lhs: Symbol) -> SequenceRuleBuilder:
        """Start building a sequence rule for ``lhs``."""
        return SequenceRuleBuilder(self).sequence(lhs)


class SequenceList(SequenceDestination):
    """A destination that collects sequence rules in a list."""

    def __init__(self, sequences: Optional[list[Sequence]] = None) -> None:
        self.sequences: list[Sequence] = [] if sequences is None else sequences

    def add_sequence(self, seq: Sequence) -> None:
        """Append a sequence rule."""
        self.sequences.append(seq)

    def __iter__(self) -> Iterator[Sequence]:
        return iter(self.sequences)

    def __len__(self) -> int:
        return len(self.sequences)


class SequenceRuleBuilder:
    """Builds sequence rules through chained calls and hands them to a destination."""

    def __init__(self, destination: SequenceDestination) -> None:
        self.destination = destination
        self._lhs: Optional[Symbol] = None
        self._range: Optional[tuple[int, Optional[int]]] = None
        self._separator = Separator.null()
        self._history: Optional[int] = None
        self._default_history: Optional[int] = None

    def default_history(self, default_history: int) -> SequenceRuleBuilder:
        """Set the history used when no other is given."""
        self._default_history = default_history
        return self

    def sequence(self, lhs: Symbol) -> SequenceRuleBuilder:
        """Start a sequence rule for ``lhs``; the separator is reset to none."""
        self._lhs = lhs
        self._separator = Separator.null()
        return self

    def separator(self, sep: Separator) -> SequenceRuleBuilder:
        """Set the separator and mode of separation."""
        self._separator = sep
        return self

    def intersperse(self, sym: Symbol) -> SequenceRuleBuilder:
        """Use proper separation with ``sym``."""
        return self.separator(Separator.proper(sym))

    def history(self, history: int) -> SequenceRuleBuilder:
        """Set the history for the next call to ``rhs``."""
        self._history = history
        return self

    def inclusive(self, start: int, end: Optional[int]) -> SequenceRuleBuilder:
        """Set the inclusive range of repetitions for the next rule."""
        self._range = (start, end)
        return self

    def range(self, start: Optional[int] = None, end: Optional[int] = None) -> SequenceRuleBuilder:
        """Set the half-open range ``[start, end)`` of repetitions for the next rule."""
        return self.inclusive(*_inclusive_bounds(start, end))

    def rhs(self, rhs: Symbol) -> SequenceRuleBuilder:
        """Add a sequence rule repeating ``rhs``."""
        history, self._history = self._history, None
        if history is None:
            history = self._default_history
        return self.rhs_with_history(rhs, history)

    def rhs_with_range(
        self, rhs: Symbol, start: Optional[int] = None, end: Optional[int] = None
    ) -> SequenceRuleBuilder:
        """Add a sequence rule repeating ``rhs`` within the half-open range."""
        return self.range(start, end).rhs(rhs)

    def rhs_with_history(self, rhs: Symbol, history_id: Optional[int]) -> SequenceRuleBuilder:
        """Add a sequence rule repeating ``rhs`` with an explicit history."""
        if self._range is None:
            raise RuntimeError("a range must be set with inclusive(n, m) before rhs")
        if self._lhs is None:
            raise RuntimeError("a right-hand side was given before sequence(lhs)")
        (start, end), self._range = self._range, None
        self.destination.add_sequence(
            Sequence(
                lhs=self._lhs,
                rhs=rhs,
                start=start,
                end=end,
                separator=self._separator,
                history_id=history_id,
            )
        )
        return self
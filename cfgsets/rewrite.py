"""Rewriting of sequence rules into ordinary production rules."""

from __future__ import annotations

import dataclasses
from typing import Iterable, Optional

from .grammar import Grammar, NoOpNode, SequenceNode
from .sequence import (
    Separator,
    SeparatorKind,
    Sequence,
    SequenceDestination,
    SequenceRuleBuilder,
)
from .symbol import Symbol

_PartialSequence = tuple[Symbol, int, Optional[int], Separator]


def _next_power_of_two(n: int) -> int:
    """Return the smallest power of two that is at least ``n`` (1 for 0)."""
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


class SequencesToProductions(SequenceDestination):
    """A sequence destination that turns every sequence into production rules.

    Repetition counts are split into blocks whose sizes are powers of two, so
    a sequence with an upper bound ``n`` produces ``O(log n)`` helper symbols.
    """

    def __init__(self, destination: Grammar) -> None:
        self.destination = destination
        self._stack: list[Sequence] = []
        self._map: dict[_PartialSequence, Symbol] = {}
        self._top: Optional[int] = None
        self._lhs: Optional[Symbol] = None

    def add_sequence(self, seq: Sequence) -> None:
        """Rewrite ``seq`` into production rules of the destination grammar."""
        self.rewrite(seq)

    def rewrite(self, top: Sequence) -> None:
        """Rewrite a sequence rule and all helper sequences it needs."""
        self._stack.clear()
        self._map.clear()
        self._top = self._history_node(top, is_top=True)
        self._reduce(top)
        self._top = self._history_node(top, is_top=False)
        while self._stack:
            self._reduce(self._stack.pop())

    def _history_node(self, seq: Sequence, *, is_top: bool) -> int:
        prev = seq.history_id
        if prev is None:
            prev = self.destination.add_history_node(NoOpNode())
        return self.destination.add_history_node(
            SequenceNode(
                top=is_top,
                rhs=seq.rhs,
                sep=seq.separator.trailing_symbol(),
                prev=prev,
            )
        )

    def _recurse(self, seq: Sequence) -> Symbol:
        key = (seq.rhs, seq.start, seq.end, seq.separator)
        lhs = self._map.get(key)
        if lhs is None:
            lhs = self.destination.next_sym()
            self._map[key] = lhs
            self._stack.append(dataclasses.replace(seq, lhs=lhs))
        return lhs

    def _rhs(self, rhs: Iterable[Symbol]) -> None:
        assert self._lhs is not None and self._top is not None
        self.destination.add_rule(self._lhs, rhs, self._top)

    def _reduce(self, sequence: Sequence) -> None:
        lhs, rhs = sequence.lhs, sequence.rhs
        start, end = sequence.start, sequence.end
        separator = sequence.separator
        kind, sep = separator.kind, separator.symbol
        if start < 0 or (end is not None and start > end):
            raise ValueError(f"invalid repetition range {start}..={end}")
        self._lhs = lhs

        if kind is SeparatorKind.LIBERAL:
            sym1 = self._recurse(sequence.with_separator(Separator.proper(sep)))
            sym2 = self._recurse(sequence.with_separator(Separator.trailing(sep)))
            self._rhs([sym1])
            self._rhs([sym2])
        elif start == 0 and end == 0:
            self._rhs([])
        elif start == 0:
            self._rhs([])
            sym = self._recurse(sequence.inclusive(1, end))
            self._rhs([sym])
        elif kind is SeparatorKind.TRAILING:
            sym = self._recurse(sequence.with_separator(Separator.proper(sep)))
            self._rhs([sym, sep])
        elif start == 1 and end is None:
            self._rhs([rhs])
            # Left recursive.
            if kind is SeparatorKind.PROPER:
                self._rhs([lhs, sep, rhs])
            else:
                self._rhs([lhs, rhs])
        elif start == 1 and end == 1:
            self._rhs([rhs])
        elif start == 1 and end == 2:
            sym1 = self._recurse(sequence.inclusive(1, 1))
            sym2 = self._recurse(sequence.inclusive(2, 2))
            self._rhs([sym1])
            self._rhs([sym2])
        elif start == 1:
            assert end is not None
            pow2 = _next_power_of_two(end) // 2
            rhs1 = self._recurse(sequence.inclusive(1, pow2))
            block = self._recurse(
                sequence.inclusive(pow2, pow2).with_separator(separator.prefix_separator())
            )
            rhs2 = self._recurse(sequence.inclusive(1, end - pow2))
            self._rhs([rhs1])
            self._rhs([block, rhs2])
        elif start == 2 and end == 2:
            if kind is SeparatorKind.PROPER:
                self._rhs([rhs, sep, rhs])
            else:
                self._rhs([rhs, rhs])
        else:
            if end == start:
                # A block of fixed length.
                pow2 = _next_power_of_two(start) // 2
                seq1 = sequence.inclusive(pow2, pow2)
                seq2 = sequence.inclusive(start - pow2, start - pow2)
            else:
                # A span of lengths.
                seq1 = sequence.inclusive(start - 1, start - 1)
                seq2 = sequence.inclusive(1, None if end is None else end - start + 1)
            rhs1 = self._recurse(seq1.with_separator(separator.prefix_separator()))
            rhs2 = self._recurse(seq2.with_separator(separator))
            self._rhs([rhs1, rhs2])


def rewrite_sequences(sequence_rules: Iterable[Sequence], grammar: Grammar) -> None:
    """Rewrite every sequence rule into production rules of ``grammar``."""
    builder = SequenceRuleBuilder(SequencesToProductions(grammar))
    for rule in sequence_rules:
        builder = (
            builder.sequence(rule.lhs)
            .separator(rule.separator)
            .inclusive(rule.start, rule.end)
            .rhs_with_history(rule.rhs, rule.history_id)
        )
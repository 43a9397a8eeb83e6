"""Minimal distances from one part of a grammar to another.

The calculation resembles a multi-source shortest path search: positions in
rules marked by a ``DistancesNode`` in their history are the sources, and the
result tells, for every dot position of every rule, the length of the
shortest string that must be consumed to reach one of those positions.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .grammar import DistancesNode, Grammar, Rule
from .symbol import Symbol

Distances = list[Optional[int]]


def _set_min(values: list[Optional[int]], index: int, new: int) -> bool:
    """Lower ``values[index]`` to ``new`` if that is smaller; report a change."""
    current = values[index]
    if current is None or current > new:
        values[index] = new
        return True
    return False


class MinimalDistance:
    """Minimal distances within and across the rules of a grammar."""

    def __init__(self, grammar: Grammar) -> None:
        self._grammar = grammar
        self._rules: list[Rule] = list(grammar.rules())
        num_syms = grammar.num_syms()
        self._distances: list[tuple[int, Distances]] = [
            (rule.history_id, [None] * (len(rule.rhs) + 1)) for rule in self._rules
        ]
        self._prediction: list[Optional[int]] = [None] * num_syms
        self._completion: list[Optional[int]] = [None] * num_syms
        self._min_of: list[Optional[int]] = [None] * num_syms

    def distances(self) -> list[tuple[int, Distances]]:
        """Return ``(history_id, distances)`` pairs in rule order."""
        return [(history_id, list(values)) for history_id, values in self._distances]

    def minimal_distances(self) -> list[tuple[int, Distances]]:
        """Compute the minimal distances and return them in rule order."""
        self._minimal_sentence_lengths()
        self._immediate_minimal_distances()
        self._transitive_minimal_distances()
        return self.distances()

    def _minimal_sentence_lengths(self) -> None:
        for terminal in self._grammar.terminal_set():
            self._min_of[terminal.id] = 1
        for rule in self._rules:
            if not rule.rhs:
                self._min_of[rule.lhs.id] = 0
        # Propagate lengths through right-hand sides until nothing improves.
        changed = True
        while changed:
            changed = False
            for rule in self._rules:
                lengths = [self._min_of[sym.id] for sym in rule.rhs]
                if any(length is None for length in lengths):
                    continue
                changed |= _set_min(self._min_of, rule.lhs.id, sum(lengths))

    def _distance_positions(self, rule: Rule) -> tuple[int, ...]:
        positions: tuple[int, ...] = ()
        history_id: Optional[int] = rule.history_id
        while history_id is not None:
            node = self._grammar.history_node(history_id)
            if isinstance(node, DistancesNode):
                positions = node.events
            history_id = getattr(node, "prev", None)
        return positions

    def _immediate_minimal_distances(self) -> None:
        for idx, rule in enumerate(self._rules):
            for position in self._distance_positions(rule):
                if not 0 <= position <= len(rule.rhs):
                    raise IndexError(
                        f"distance position {position} is outside a rule "
                        f"with {len(rule.rhs)} right-hand side symbols"
                    )
                reached, _ = self._update_rule_distances(0, rule.rhs[:position], idx)
                _set_min(self._prediction, rule.lhs.id, reached)

    def _transitive_minimal_distances(self) -> None:
        changed = True
        while changed:
            changed = False
            for idx, rule in enumerate(self._rules):
                distance = self._completion[rule.lhs.id]
                if distance is not None:
                    _, changed_now = self._update_rule_distances(distance, rule.rhs, idx)
                    changed |= changed_now

    def _update_rule_distances(
        self, cur: int, rhs: Sequence[Symbol], idx: int
    ) -> tuple[int, bool]:
        values = self._distances[idx][1]
        for dot in reversed(range(len(rhs))):
            sym = rhs[dot]
            _set_min(self._completion, sym.id, cur)
            _set_min(values, dot + 1, cur)
            length = self._min_of[sym.id]
            if length is None:
                raise ValueError(f"{sym!r} derives no finite sentence")
            cur += length
            predicted = self._prediction[sym.id]
            if predicted is not None:
                cur = min(cur, predicted)
        changed = _set_min(values, 0, cur)
        return cur, changed
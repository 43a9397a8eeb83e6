"""FIRST, FOLLOW and LAST sets for predictive parsing.

In every set ``None`` stands for the empty string (FIRST/LAST) or for the end
of input (FOLLOW).
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Protocol

from .grammar import Grammar
from .symbol import Symbol

#: Sets of terminals (or ``None``) keyed by nonterminal.
PerSymbolSets = Dict[Symbol, FrozenSet[Optional[Symbol]]]


class PredictSets(Protocol):
    """Anything that exposes per-symbol prediction sets."""

    def predict_sets(self) -> PerSymbolSets:
        ...


class FirstSets:
    """FIRST sets of every nonterminal of a grammar.

    A nonterminal N is related to S when the grammar has a rule
    ``N ::= α S β`` where α is nullable; the sets are the transitive
    closure of that relation restricted to terminals, with ``None``
    marking nullable nonterminals.
    """

    def __init__(self, grammar: Grammar) -> None:
        self._terminals = grammar.terminal_set()
        self._map: dict[Symbol, set[Optional[Symbol]]] = {}
        rules = list(grammar.rules())
        changed = True
        while changed:
            changed = False
            for rule in rules:
                lookahead = self._collect(rule.rhs)
                first_set = self._map.setdefault(rule.lhs, set())
                before = len(first_set)
                first_set.update(lookahead)
                changed |= before != len(first_set)
        self._frozen: PerSymbolSets = {
            sym: frozenset(values) for sym, values in self._map.items()
        }

    def _collect(self, rhs: Iterable[Symbol]) -> list[Optional[Symbol]]:
        lookahead: list[Optional[Symbol]] = []
        for sym in rhs:
            nullable = False
            if sym in self._terminals:
                lookahead.append(sym)
            else:
                # A nonterminal without an entry yet contributes nothing.
                for maybe_terminal in self._map.get(sym, ()):
                    if maybe_terminal is None:
                        nullable = True
                    else:
                        lookahead.append(maybe_terminal)
            if not nullable:
                return lookahead
        lookahead.append(None)
        return lookahead

    def first_set_for_string(self, string: Iterable[Symbol]) -> frozenset[Optional[Symbol]]:
        """Return the FIRST set of a string of symbols."""
        result: set[Optional[Symbol]] = set()
        for sym in string:
            before = len(result)
            if sym in self._terminals:
                result.add(sym)
            else:
                try:
                    first_set = self._map[sym]
                except KeyError:
                    raise KeyError(f"no FIRST set for {sym!r}") from None
                result.update(t for t in first_set if t is not None)
            if before != len(result):
                break
        if not result:
            result.add(None)
        return frozenset(result)

    def predict_sets(self) -> PerSymbolSets:
        """Return the FIRST sets keyed by nonterminal."""
        return dict(self._frozen)


class FollowSets:
    """FOLLOW sets of every nonterminal of a grammar."""

    def __init__(
        self,
        grammar: Grammar,
        start_sym: Symbol,
        first_sets: Mapping[Symbol, Iterable[Optional[Symbol]]],
    ) -> None:
        rules = list(grammar.rules())
        terminals = grammar.terminal_set()
        firsts = {sym: frozenset(values) for sym, values in first_sets.items()}
        follow: dict[Symbol, set[Optional[Symbol]]] = {}
        for rule in rules:
            follow_set = follow.setdefault(rule.lhs, set())
            if rule.lhs == start_sym:
                follow_set.add(None)

        changed = True
        while changed:
            changed = False
            for rule in rules:
                current = set(follow[rule.lhs])
                for sym in reversed(rule.rhs):
                    if sym in terminals:
                        current = {sym}
                        continue
                    followed = follow[sym]
                    before = len(followed)
                    followed.update(current)
                    changed |= before != len(followed)
                    first_set = firsts[sym]
                    if None not in first_set:
                        current.clear()
                    current.update(first_set)

        self._map: PerSymbolSets = {
            sym: frozenset(values) for sym, values in follow.items()
        }

    def predict_sets(self) -> PerSymbolSets:
        """Return the FOLLOW sets keyed by nonterminal."""
        return dict(self._map)


class LastSets:
    """LAST sets: like FIRST sets, but for the ends of right-hand sides.

    A nonterminal N is related to S when the grammar has a rule
    ``N ::= α S β`` where β is nullable.
    """

    def __init__(self, grammar: Grammar) -> None:
        self._map = FirstSets(grammar.reverse()).predict_sets()

    def predict_sets(self) -> PerSymbolSets:
        """Return the LAST sets keyed by nonterminal."""
        return dict(self._map)
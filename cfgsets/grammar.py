"""A context-free grammar that stores rules together with their histories."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from .symbol import Symbol, SymbolSource


@dataclass(frozen=True)
class Rule:
    """A production rule ``lhs ::= rhs`` with the id of its history node."""

    lhs: Symbol
    rhs: tuple[Symbol, ...]
    history_id: int


@dataclass(frozen=True)
class NoOpNode:
    """A root history node that carries no information."""


@dataclass(frozen=True)
class DistancesNode:
    """A history node that marks rhs positions for distance calculation."""

    events: tuple[int, ...] = ()
    prev: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "events", tuple(self.events))


@dataclass(frozen=True)
class SequenceNode:
    """A history node recording that a rule came from a sequence rewrite."""

    top: bool
    rhs: Symbol
    sep: Symbol | None = None
    prev: int | None = None


HistoryNode = Union[NoOpNode, DistancesNode, SequenceNode]


class Grammar:
    """A container of production rules, symbols and history nodes."""

    def __init__(self) -> None:
        self._sym_source = SymbolSource()
        self._rules: list[Rule] = []
        self._history: list[HistoryNode] = []

    @property
    def sym_source(self) -> SymbolSource:
        """The source that hands out this grammar's symbols."""
        return self._sym_source

    def sym(self, n: int) -> tuple[Symbol, ...]:
        """Return ``n`` new symbols."""
        return self._sym_source.sym(n)

    def next_sym(self) -> Symbol:
        """Return one new symbol."""
        return self._sym_source.next_sym()

    def num_syms(self) -> int:
        """Return the number of symbols in use."""
        return self._sym_source.num_syms()

    def rules(self) -> Iterator[Rule]:
        """Iterate over the rules in insertion order."""
        return iter(list(self._rules))

    def add_rule(
        self, lhs: Symbol, rhs: Iterable[Symbol], history_id: int | None = None
    ) -> Rule:
        """Add a rule; without a history id a fresh root node is attached."""
        if history_id is None:
            history_id = self.add_history_node(NoOpNode())
        else:
            self.history_node(history_id)
        rule = Rule(lhs, tuple(rhs), history_id)
        self._rules.append(rule)
        return rule

    def add_history_node(self, node: HistoryNode) -> int:
        """Store a history node and return its id."""
        self._history.append(node)
        return len(self._history) - 1

    def history_node(self, history_id: int) -> HistoryNode:
        """Return the history node with the given id."""
        if not 0 <= history_id < len(self._history):
            raise IndexError(f"unknown history id {history_id}")
        return self._history[history_id]

    def terminal_set(self) -> frozenset[Symbol]:
        """Return all symbols that are the left-hand side of no rule."""
        nonterminals = {rule.lhs for rule in self._rules}
        return frozenset(
            sym
            for sym in map(Symbol, range(self.num_syms()))
            if sym not in nonterminals
        )

    def reverse(self) -> Grammar:
        """Return a copy of the grammar with every right-hand side reversed."""
        reversed_grammar = Grammar()
        reversed_grammar._sym_source = SymbolSource(self._sym_source.next_id)
        reversed_grammar._history = list(self._history)
        reversed_grammar._rules = [
            Rule(rule.lhs, rule.rhs[::-1], rule.history_id) for rule in self._rules
        ]
        return reversed_grammar

    def rule(self, lhs: Symbol) -> RuleBuilder:
        """Start building rules for ``lhs``."""
        return RuleBuilder(self).rule(lhs)


class RuleBuilder:
    """Adds rules to a grammar through chained calls."""

    def __init__(self, grammar: Grammar) -> None:
        self._grammar = grammar
        self._lhs: Symbol | None = None
        self._history_id: int | None = None

    def rule(self, lhs: Symbol) -> RuleBuilder:
        """Set the left-hand side for the following rules."""
        self._lhs = lhs
        self._history_id = None
        return self

    def history(self, history_id: int) -> RuleBuilder:
        """Use ``history_id`` for the next rule only."""
        self._history_id = history_id
        return self

    def rhs(self, rhs: Iterable[Symbol]) -> RuleBuilder:
        """Add a rule with the given right-hand side."""
        lhs = self._require_lhs()
        history_id, self._history_id = self._history_id, None
        self._grammar.add_rule(lhs, rhs, history_id)
        return self

    def rhs_with_history(self, rhs: Iterable[Symbol], node: HistoryNode) -> RuleBuilder:
        """Add a rule whose history is ``node`` linked to a fresh root node."""
        lhs = self._require_lhs()
        self._history_id = None
        if isinstance(node, NoOpNode):
            history_id = self._grammar.add_history_node(node)
        else:
            root = self._grammar.add_history_node(NoOpNode())
            history_id = self._grammar.add_history_node(dataclasses.replace(node, prev=root))
        self._grammar.add_rule(lhs, rhs, history_id)
        return self

    def _require_lhs(self) -> Symbol:
        if self._lhs is None:
            raise RuntimeError("a right-hand side was given before rule(lhs)")
        return self._lhs
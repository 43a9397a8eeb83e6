# cfgsets

Building blocks for working with context-free grammars:

- numeric grammar symbols and a source that hands them out (`cfgsets.symbol`),
- interning of symbols and translation of symbol mappings (`cfgsets.intern`),
- a rule container with history nodes and a chained rule builder (`cfgsets.grammar`),
- FIRST, FOLLOW and LAST sets (`cfgsets.predict`),
- minimal distances between parts of a grammar (`cfgsets.distance`),
- sequence rules, similar to counted regex repetitions (`cfgsets.sequence`),
- rewriting of sequence rules into ordinary productions (`cfgsets.rewrite`).

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

Install the test tools with `pip install .[test]` and run `pytest`.

## Symbols

A `Symbol` is a frozen, ordered value holding an unsigned 32-bit id; the id
`0xFFFFFFFF` is reserved and rejected. A `SymbolSource` hands out
consecutively numbered symbols:

```python
from cfgsets.symbol import SymbolSource

source = SymbolSource()
a, b = source.sym(2)        # Symbol(0), Symbol(1)
c = source.next_sym()       # Symbol(2)
source.num_syms()           # 3
fresh = source.generate()   # an endless iterator of new symbols
```

`cfgsets.intern.Intern` assigns new internal symbols to external symbols the
first time it sees them, recording both directions in a `Mapping`
(`to_internal`, indexed by external id, and `to_external`, indexed by
internal id). `Mapping.translate(other)` composes one mapping with another.

## Defining a grammar

```python
from cfgsets.grammar import Grammar

g = Grammar()
start, a, x, b, c, y = g.sym(6)

(g.rule(start).rhs([a, x, b]).rhs([c])
  .rule(b).rhs([a, a]).rhs([a, c])
  .rule(c).rhs([x]).rhs([y])
  .rule(a).rhs([]))
```

Symbols that are the left-hand side of no rule are terminals;
`g.terminal_set()` returns them. `g.rules()` yields `Rule` objects
(`lhs`, `rhs`, `history_id`) in insertion order, and `g.reverse()` returns a
copy with every right-hand side reversed.

Every rule carries the id of a history node (`NoOpNode`, `DistancesNode` or
`SequenceNode`). `RuleBuilder.rhs` attaches a fresh `NoOpNode` unless
`history(history_id)` was called just before; `rhs_with_history(rhs, node)`
links the given node to a fresh root node.

## FIRST, FOLLOW and LAST sets

```python
from cfgsets.predict import FirstSets, FollowSets, LastSets

first = FirstSets(g)
first.predict_sets()[b]            # frozenset({None, x, y})
first.first_set_for_string([a, x]) # frozenset({x})

follow = FollowSets(g, start, first.predict_sets())
last = LastSets(g)
```

Each `predict_sets()` returns a dict from nonterminal to a frozenset of
terminals, where `None` stands for the empty string (for FOLLOW sets: the end
of input).

## Minimal distances

Positions in a rule's right-hand side are marked with a `DistancesNode` in
the rule's history. `MinimalDistance` then computes, for every dot position of
every rule, the length of the shortest string to consume before one of those
marked positions is reached:

```python
from cfgsets.distance import MinimalDistance
from cfgsets.grammar import DistancesNode, Grammar

g = Grammar()
start, a, b, c, x, y = g.sym(6)
(g.rule(a).rhs_with_history([], DistancesNode())
  .rule(start).rhs_with_history([a, x, b, c, y], DistancesNode((3,)))
  .rule(b).rhs_with_history([a, a], DistancesNode())
  .rule(c).rhs_with_history([x], DistancesNode()).rhs_with_history([y], DistancesNode()))

for history_id, dots in MinimalDistance(g).minimal_distances():
    print(history_id, dots)   # one entry per dot position; None if unreachable
```

## Sequence rules

A `Sequence` repeats one symbol between `start` and `end` times (`end=None`
for no limit). A `Separator` is built with `Separator.proper(sym)` (between
elements), `Separator.trailing(sym)` (after every element),
`Separator.liberal(sym)` (either) or `Separator.null()`.

`SequencesToProductions` is a sequence destination that rewrites each
sequence into production rules of a grammar, splitting repetition counts into
power-of-two blocks:

```python
from cfgsets.grammar import Grammar
from cfgsets.rewrite import SequencesToProductions
from cfgsets.sequence import Separator

g = Grammar()
start, elem, sep = g.sym(3)

(SequencesToProductions(g)
    .sequence(start)
    .separator(Separator.trailing(sep))
    .inclusive(1, 4)
    .rhs(elem))

for rule in g.rules():
    print(rule.lhs, rule.rhs)
```

`SequenceRuleBuilder` also offers `range(start, end)` and
`rhs_with_range(rhs, start, end)` with half-open bounds, `intersperse(sym)`
for proper separation, and `history` / `default_history` for the history id
given to each sequence. `rewrite_sequences(sequences, grammar)` rewrites a
whole iterable of `Sequence` objects at once, and `SequenceList` collects
sequences without rewriting them.

## What the package does not do

It does not parse input, and it does not transform or classify grammars:
there is no binarization, no elimination of nulling rules, no cycle removal,
no symbol remapping by usefulness and no LL or LR table construction. It
offers no command-line tool.
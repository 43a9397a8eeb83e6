import pytest

from cfgsets.grammar import Grammar
from cfgsets.predict import FirstSets, FollowSets, LastSets
from cfgsets.symbol import Symbol


def _simple_grammar(with_c_alternative=True):
    cfg = Grammar()
    start, a, x, b, c, y = cfg.sym(6)
    builder = cfg.rule(start).rhs([a, x, b])
    if with_c_alternative:
        builder.rhs([c])
    (
        builder.rule(b)
        .rhs([a, a])
        .rhs([a, c])
        .rule(c)
        .rhs([x])
        .rhs([y])
        .rule(a)
        .rhs([])
    )
    return cfg, (start, a, x, b, c, y)


def test_simple_first_sets():
    cfg, (start, a, x, b, c, y) = _simple_grammar()
    sets = FirstSets(cfg).predict_sets()
    assert sets == {
        start: {x, y},
        a: {None},
        b: {None, x, y},
        c: {x, y},
    }


def test_simple_first_sets_altered():
    cfg, (start, a, x, b, c, y) = _simple_grammar(with_c_alternative=False)
    sets = FirstSets(cfg).predict_sets()
    assert sets == {
        start: {x},
        a: {None},
        b: {None, x, y},
        c: {x, y},
    }


def test_simple_last_sets():
    cfg, (start, a, x, b, c, y) = _simple_grammar()
    sets = LastSets(cfg).predict_sets()
    assert sets == {
        start: {x, y},
        a: {None},
        b: {None, x, y},
        c: {x, y},
    }


def test_simple_last_sets_altered():
    cfg, (start, a, x, b, c, y) = _simple_grammar(with_c_alternative=False)
    sets = LastSets(cfg).predict_sets()
    assert sets == {
        start: {x, y},
        a: {None},
        b: {None, x, y},
        c: {x, y},
    }


def test_last_sets_leave_grammar_unchanged():
    cfg, (start, a, x, b, c, y) = _simple_grammar()
    before = [(rule.lhs, rule.rhs) for rule in cfg.rules()]
    LastSets(cfg)
    assert [(rule.lhs, rule.rhs) for rule in cfg.rules()] == before


def test_first_set_for_string_skips_nullable_prefix():
    cfg, (start, a, x, b, c, y) = _simple_grammar()
    first = FirstSets(cfg)
    assert first.first_set_for_string([a, x]) == {x}
    assert first.first_set_for_string([c, y]) == {x, y}


def test_first_set_for_string_of_nullable_string_is_empty_marker():
    cfg, (start, a, x, b, c, y) = _simple_grammar()
    first = FirstSets(cfg)
    assert first.first_set_for_string([a, a]) == {None}
    assert first.first_set_for_string([]) == {None}


def test_first_set_for_string_stops_after_first_contribution():
    cfg, (start, a, x, b, c, y) = _simple_grammar()
    first = FirstSets(cfg)
    assert first.first_set_for_string([b, y]) == {x, y}


def test_first_set_for_string_unknown_symbol():
    cfg, _ = _simple_grammar()
    first = FirstSets(cfg)
    with pytest.raises(KeyError):
        first.first_set_for_string([Symbol(100)])


def test_follow_sets():
    cfg, (start, a, x, b, c, y) = _simple_grammar()
    first = FirstSets(cfg).predict_sets()
    follow = FollowSets(cfg, start, first).predict_sets()
    assert follow == {
        start: {None},
        a: {None, x, y},
        b: {None},
        c: {None},
    }


def test_follow_sets_of_terminal_followers():
    cfg = Grammar()
    start, inner, x, y = cfg.sym(4)
    cfg.rule(start).rhs([inner, y]).rule(inner).rhs([x])
    first = FirstSets(cfg).predict_sets()
    follow = FollowSets(cfg, start, first).predict_sets()
    assert follow == {start: {None}, inner: {y}}


def test_predict_sets_returns_copy():
    cfg, (start, a, x, b, c, y) = _simple_grammar()
    first = FirstSets(cfg)
    sets = first.predict_sets()
    sets.clear()
    assert first.predict_sets()[c] == {x, y}
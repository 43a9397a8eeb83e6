import pytest

from cfgsets.distance import MinimalDistance
from cfgsets.grammar import DistancesNode, Grammar


def empty():
    return DistancesNode(())


def distances(elems):
    return DistancesNode(tuple(elems))


def build_source_grammar():
    cfg = Grammar()
    start, a, b, c, x, y = cfg.sym(6)
    (
        cfg.rule(a)
        .rhs_with_history([], empty())
        .rule(start)
        .rhs_with_history([a, x, b, c, y], distances([3]))
        .rhs_with_history([c], empty())
        .rule(b)
        .rhs_with_history([a, a], empty())
        .rhs_with_history([a, c], empty())
        .rule(c)
        .rhs_with_history([x], empty())
        .rhs_with_history([y], empty())
    )
    return cfg


def test_minimum_distance():
    cfg = build_source_grammar()
    result = MinimalDistance(cfg).minimal_distances()
    expected_values = [
        [0],
        [1, 1, 0, 0, None, None],
        [None, None],
        [0, 0, 0],
        [1, 1, 0],
        [1, 0],
        [1, 0],
    ]
    history_ids = [rule.history_id for rule in cfg.rules()]
    assert result == list(zip(history_ids, expected_values))


def test_history_ids_follow_rule_order():
    cfg = build_source_grammar()
    result = MinimalDistance(cfg).minimal_distances()
    assert [history_id for history_id, _ in result] == [1, 3, 5, 7, 9, 11, 13]


def test_distances_before_computation_are_unknown():
    cfg = build_source_grammar()
    md = MinimalDistance(cfg)
    assert [values for _, values in md.distances()] == [
        [None],
        [None] * 6,
        [None] * 2,
        [None] * 3,
        [None] * 3,
        [None] * 2,
        [None] * 2,
    ]


def test_repeated_computation_is_stable():
    cfg = build_source_grammar()
    md = MinimalDistance(cfg)
    first = md.minimal_distances()
    assert md.minimal_distances() == first
    assert md.distances() == first


def test_no_markers_leaves_everything_unknown():
    cfg = Grammar()
    start, a, x = cfg.sym(3)
    cfg.rule(start).rhs([a, x]).rule(a).rhs([x])
    result = MinimalDistance(cfg).minimal_distances()
    assert [values for _, values in result] == [[None, None, None], [None, None]]


def test_distances_lengths_match_rules():
    cfg = build_source_grammar()
    result = MinimalDistance(cfg).minimal_distances()
    assert [len(values) for _, values in result] == [
        len(rule.rhs) + 1 for rule in cfg.rules()
    ]


def test_unproductive_symbol_raises():
    cfg = Grammar()
    start, a, x = cfg.sym(3)
    cfg.rule(start).rhs_with_history([a, x], distances([1])).rule(a).rhs([a])
    with pytest.raises(ValueError):
        MinimalDistance(cfg).minimal_distances()


def test_position_out_of_range_raises():
    cfg = Grammar()
    start, x = cfg.sym(2)
    cfg.rule(start).rhs_with_history([x], distances([5]))
    with pytest.raises(IndexError):
        MinimalDistance(cfg).minimal_distances()
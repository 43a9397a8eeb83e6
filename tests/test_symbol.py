import itertools

import pytest

from cfgsets.symbol import FIRST_ID, NULL_ID, Symbol, SymbolSource


def test_symbol_id_fits_in_four_bytes():
    largest = Symbol(NULL_ID - 1)
    raw = largest.id.to_bytes(4, "little")
    assert Symbol(int.from_bytes(raw, "little")) == largest


def test_null_id_is_not_a_symbol():
    with pytest.raises(ValueError):
        Symbol(NULL_ID)


def test_negative_id_rejected():
    with pytest.raises(ValueError):
        Symbol(-1)


def test_non_int_id_rejected():
    with pytest.raises(TypeError):
        Symbol("a")


def test_default_symbol_is_first_id():
    assert Symbol().id == FIRST_ID


def test_symbol_ordering_and_index():
    a, b = Symbol(2), Symbol(7)
    assert a < b
    assert sorted([b, a]) == [a, b]
    items = list(range(10))
    assert items[b] == 7
    assert int(a) == 2


def test_symbols_hash_by_id():
    assert {Symbol(3), Symbol(3), Symbol(4)} == {Symbol(3), Symbol(4)}


def test_source_generates_consecutive_symbols():
    source = SymbolSource()
    start, a, b = source.sym(3)
    assert (start, a, b) == (Symbol(0), Symbol(1), Symbol(2))
    assert source.num_syms() == 3
    assert source.next_sym() == Symbol(3)
    assert source.num_syms() == 4


def test_sym_zero_returns_empty():
    source = SymbolSource()
    assert source.sym(0) == ()
    assert source.num_syms() == 0


def test_generate_continues_from_source():
    source = SymbolSource()
    source.sym(2)
    generated = list(itertools.islice(source.generate(), 3))
    assert generated == [Symbol(2), Symbol(3), Symbol(4)]
    assert source.num_syms() == 5


def test_running_out_of_symbol_space():
    source = SymbolSource(next_id=NULL_ID - 2)
    assert source.next_sym() == Symbol(NULL_ID - 2)
    with pytest.raises(OverflowError):
        source.next_sym()
    assert source.num_syms() == NULL_ID - 1
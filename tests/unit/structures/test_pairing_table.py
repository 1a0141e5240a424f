"""
Unit tests for `BasePair` and `PairingTable`.

The pairing table is the single source of truth for "paired" / "unpaired";
these tests pin down the matching invariant, crossing detection and the
restriction used by persistence.
"""
import pytest

from rna_topology.errors import InvalidInputError
from rna_topology.structures.pairing import BasePair, PairingMode, PairingTable


# ---------------------------------------------------------------------------
# BasePair
# ---------------------------------------------------------------------------
def test_base_pair_properties():
    """Span is inclusive, `loop_len` counts enclosed positions."""
    pr = BasePair(3, 7)
    assert pr.span == 5
    assert pr.loop_len == 3
    assert pr.as_tuple() == (3, 7)
    assert BasePair.of(7, 3) == pr


def test_base_pair_requires_i_less_than_j():
    with pytest.raises(InvalidInputError):
        BasePair(5, 5)
    with pytest.raises(InvalidInputError):
        BasePair(6, 2)


def test_base_pair_relations():
    """
    Nesting and crossing are mutually exclusive relations.
    """
    outer, inner = BasePair(1, 10), BasePair(3, 7)
    assert outer.encloses(inner)
    assert not inner.encloses(outer)
    assert not outer.crosses(inner)

    a, b = BasePair(1, 9), BasePair(5, 13)
    assert a.crosses(b) and b.crosses(a)
    assert not a.encloses(b)
    assert a.encloses_position(5)
    assert not a.encloses_position(9)


# ---------------------------------------------------------------------------
# PairingTable
# ---------------------------------------------------------------------------
def test_table_sorts_pairs_and_indexes_partners():
    table = PairingTable.from_tuples(12, [(4, 9), (12, 1), (2, 11)])
    assert table.as_tuples() == [(1, 12), (2, 11), (4, 9)]
    assert table.partner(9) == 4
    assert table.partner(4) == 9
    assert table.partner(3) is None
    assert table.is_paired(12)
    assert table.mode is PairingMode.DECLARED
    assert len(table) == 3


def test_table_rejects_broken_matching():
    """A position may appear in at most one pair."""
    with pytest.raises(InvalidInputError):
        PairingTable.from_tuples(10, [(1, 8), (8, 10)])


def test_table_rejects_out_of_range_pairs():
    with pytest.raises(InvalidInputError):
        PairingTable.from_tuples(8, [(1, 9)])
    with pytest.raises(InvalidInputError):
        PairingTable.from_tuples(8, [(0, 5)])


def test_has_crossing():
    nested = PairingTable.from_tuples(12, [(1, 12), (2, 11), (4, 9)])
    crossed = PairingTable.from_tuples(14, [(1, 9), (5, 13)])
    assert not nested.has_crossing()
    assert crossed.has_crossing()
    assert not PairingTable.empty(5).has_crossing()


def test_restricted_to_keeps_pairs_with_both_ends():
    table = PairingTable.from_tuples(12, [(1, 12), (2, 11), (4, 9)])
    sub = table.restricted_to(range(1, 10))
    assert sub.as_tuples() == [(4, 9)]
    assert sub.length == 12
    assert sub.mode is table.mode


def test_to_dot_bracket_multilayer():
    table = PairingTable.from_tuples(14, [(1, 10), (2, 9), (5, 14), (6, 13)])
    assert table.to_dot_bracket() == "((..[[..))..]]"

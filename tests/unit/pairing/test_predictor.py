"""
Unit tests for the pairing predictor.

Pass-through mode must accept any matching (crossing included) and reject
structurally invalid declarations; computed mode must only emit valid,
nested pairs and never raise.
"""
import numpy as np
import pytest

from rna_topology.errors import InvalidInputError
from rna_topology.pairing.predictor import DeclaredPairing, predict_pairs
from rna_topology.rules import can_pair, has_min_separation
from rna_topology.structures.molecule import ConformationalFields, Molecule
from rna_topology.structures.pairing import PairingMode

PAIRED = ConformationalFields(e0=True, e1=True, e2=True, e3=True)


# ---------------------------------------------------------------------------
# Pass-through
# ---------------------------------------------------------------------------
def test_pass_through_collapses_duplicates_and_mirrors():
    mol = Molecule.from_sequence("GGGAAACCC")
    declared = DeclaredPairing(((1, 9), (9, 1), (2, 8), (2, 8), (7, 3)))
    table = predict_pairs(mol, declared=declared)
    assert table.as_tuples() == [(1, 9), (2, 8), (3, 7)]
    assert table.mode is PairingMode.DECLARED


def test_pass_through_accepts_crossing_and_unscored_pairs():
    """
    Neither complementarity nor separation is checked for declared pairs.
    """
    mol = Molecule.from_sequence("AAAAAAAAAAAAAA")
    table = predict_pairs(mol, declared=DeclaredPairing(((1, 9), (5, 13), (10, 11))))
    assert table.has_crossing()
    assert (10, 11) in table.as_tuples()


@pytest.mark.parametrize(
    "partners",
    [
        ((0, 5),),           # below 1
        ((3, 10),),          # beyond n
        ((4, 4),),           # self-pair
        ((1, 9), (1, 8)),    # 1 has two partners
        ((1, 9), (5, 9)),    # 9 has two partners
    ],
)
def test_pass_through_rejects_invalid_declarations(partners):
    mol = Molecule.from_sequence("GGGAAACCC")
    with pytest.raises(InvalidInputError):
        predict_pairs(mol, declared=DeclaredPairing(partners))


def test_declared_pairing_constructors():
    """Partner maps and dot-bracket strings are alternative declarations."""
    mol = Molecule.from_sequence("GGGAAACCC")
    from_map = predict_pairs(mol, declared=DeclaredPairing.from_partner_map({1: 9, 9: 1, 2: 8}))
    from_db = predict_pairs(mol, declared=DeclaredPairing.from_dot_bracket("((.....))"))
    assert from_map.as_tuples() == from_db.as_tuples() == [(1, 9), (2, 8)]

    with pytest.raises(InvalidInputError):
        predict_pairs(mol, declared=DeclaredPairing.from_partner_map({1: 9, 9: 2}))


# ---------------------------------------------------------------------------
# Computed
# ---------------------------------------------------------------------------
def test_computed_empty_molecule():
    table = predict_pairs(Molecule.from_sequence(""))
    assert table.length == 0
    assert len(table) == 0
    assert table.mode is PairingMode.COMPUTED


def test_computed_stem_loop():
    seq = "GGGGAAAACCCC"
    mol = Molecule.from_sequence(seq, fields=[PAIRED] * len(seq))
    table = predict_pairs(mol)
    assert table.as_tuples() == [(1, 12), (2, 11), (3, 10), (4, 9)]
    assert table.mode is PairingMode.COMPUTED


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_computed_pairs_obey_rules(seed):
    """
    Computed pairs form a nested matching of complementary bases at least
    four positions apart.
    """
    rng = np.random.default_rng(seed)
    n = 45
    seq = "".join(rng.choice(list("ACGU"), size=n))
    fields = [ConformationalFields.from_index(int(k)) for k in rng.integers(0, 256, size=n)]
    mol = Molecule.from_sequence(seq, fields=fields)

    table = predict_pairs(mol)

    assert not table.has_crossing()
    for pr in table:
        assert has_min_separation(pr.base_i, pr.base_j)
        assert can_pair(seq[pr.base_i - 1], seq[pr.base_j - 1])

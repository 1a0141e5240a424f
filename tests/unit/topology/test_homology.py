"""
Unit tests for homology orchestration.

H0 from the rank of ∂1 must agree with the union-find component count, and
recomputing the homology of the same snapshot must give the same record.
"""
import pytest

from rna_topology.errors import InvalidInputError
from rna_topology.pairing.predictor import DeclaredPairing
from rna_topology.structures.features import Homology, LoopType
from rna_topology.structures.molecule import ConformationalFields, Molecule
from rna_topology.structures.pairing import PairingTable
from rna_topology.structures.simplex import ChainComplex
from rna_topology.topology.complex_builder import build_complex
from rna_topology.topology.homology import compute_h0, compute_homology, connected_components


def test_empty_molecule_has_zero_homology():
    assert compute_homology(Molecule.from_sequence("")) == Homology(h0=0)


def test_single_nucleotide():
    homology = compute_homology(Molecule.from_sequence("A"))
    assert homology.betti_numbers == (1, 0, 0)


def test_unpaired_chain_is_connected_without_loops():
    homology = compute_homology(Molecule.from_sequence("ACGUACGU"))
    assert homology.h0 == 1
    assert homology.h1 == ()
    assert homology.h2 == ()


def test_h0_counts_components_of_disconnected_complex():
    """
    Rank-based H0 agrees with union-find on a complex with isolated vertices.
    """
    cx = ChainComplex.from_vertex_lists([(1,), (2,), (3,), (4,), (5,), (1, 2), (4, 5)])
    assert compute_h0(cx) == 3
    assert connected_components(cx) == [(1, 2), (3,), (4, 5)]


@pytest.mark.parametrize("included", [[1, 2, 3], [1, 3, 5, 7], [2, 3, 7, 8, 9, 12]])
def test_h0_matches_components_on_subcomplexes(included):
    mol = Molecule.from_sequence("GGGGAAAACCCC")
    table = PairingTable.from_tuples(12, [(1, 12), (2, 11), (3, 10), (4, 9)]).restricted_to(included)
    cx = build_complex(mol, table, included)
    assert compute_h0(cx) == len(connected_components(cx))
    assert compute_h0(cx) >= 1


def test_declared_hairpin():
    mol = Molecule.from_sequence("GGGGAAAACCCC")
    homology = compute_homology(mol, declared=DeclaredPairing(((1, 12), (2, 11), (3, 10), (4, 9))))
    assert homology.h0 == 1
    assert [(loop.positions, loop.loop_type) for loop in homology.h1] == [((5, 6, 7, 8), LoopType.HAIRPIN)]


def test_computed_hairpin():
    """The computed mode recovers the same stem-loop from paired-like flags."""
    paired = ConformationalFields(e0=True, e1=True, e2=True, e3=True)
    mol = Molecule.from_sequence("GGGGAAAACCCC", fields=[paired] * 12)
    homology = compute_homology(mol)
    assert [loop.positions for loop in homology.h1] == [(5, 6, 7, 8)]


def test_recomputation_is_idempotent():
    mol = Molecule.from_sequence("GGGAAACCCAAAGGG")
    table = PairingTable.from_tuples(15, [(1, 15), (2, 14), (3, 13), (6, 12), (7, 11), (8, 10)])
    assert compute_homology(mol, table=table) == compute_homology(mol, table=table)


def test_table_length_mismatch_raises():
    with pytest.raises(InvalidInputError):
        compute_homology(Molecule.from_sequence("AAAA"), table=PairingTable.empty(3))

"""
End-to-end runs: molecule → pairing → complex → homology / persistence.

Each case declares its pairing explicitly (pass-through mode) and checks
the loop classification of the whole pipeline.
"""
from collections import Counter

import pytest

from rna_topology import (
    DeclaredPairing,
    LoopType,
    Molecule,
    build_complex,
    compute_homology,
    compute_persistence,
    position_filtration,
    predict_pairs,
)


def _homology(seq, pairs):
    mol = Molecule.from_sequence(seq)
    return compute_homology(mol, declared=DeclaredPairing(tuple(pairs)))


def _types(homology):
    return Counter(loop.loop_type for loop in homology.h1)


def test_stem_loop_yields_single_hairpin():
    """
    "GGGGAAAACCCC" with a four-pair stem has exactly one hairpin [5, 6, 7, 8].
    """
    homology = _homology("GGGGAAAACCCC", [(1, 12), (2, 11), (3, 10), (4, 9)])
    assert homology.h0 == 1
    assert len(homology.h1) == 1
    loop = homology.h1[0]
    assert loop.loop_type is LoopType.HAIRPIN
    assert loop.positions == (5, 6, 7, 8)


def test_three_nucleotide_terminal_run_is_bulge():
    """
    "GGGAAACCC" closes a three-nucleotide run, classified as a bulge.
    """
    homology = _homology("GGGAAACCC", [(1, 9), (2, 8), (3, 7)])
    assert [(loop.positions, loop.loop_type) for loop in homology.h1] == [((4, 5, 6), LoopType.BULGE)]


def test_asymmetric_interior_gives_one_internal_loop():
    """
    The stem of "GGGAAACCCAAAGGG" pools its split unpaired positions into
    exactly one internal loop [4, 5, 9].
    """
    homology = _homology(
        "GGGAAACCCAAAGGG",
        [(1, 15), (2, 14), (3, 13), (6, 12), (7, 11), (8, 10)],
    )
    internal = [loop for loop in homology.h1 if loop.loop_type is LoopType.INTERNAL]
    assert len(internal) == 1
    assert internal[0].positions == (4, 5, 9)


def test_crossing_stems_form_pseudoknot():
    """
    Two interleaved four-pair stems form at least one pseudoknot loop.
    """
    pairs = [(1, 9), (2, 10), (3, 11), (4, 12), (5, 13), (6, 14), (7, 15), (8, 16)]
    mol = Molecule.from_sequence("GGGGCCCCGGGGCCCC")
    table = predict_pairs(mol, declared=DeclaredPairing(tuple(pairs)))
    assert table.has_crossing()

    homology = compute_homology(mol, table=table)
    assert _types(homology)[LoopType.PSEUDOKNOT] >= 1


def test_two_branch_domain_forms_junction():
    homology = _homology(
        "GGAAGGAGCCACCGUAACCUC",
        [(1, 19), (2, 18), (5, 9), (6, 8), (11, 16), (12, 15)],
    )
    junctions = [loop for loop in homology.h1 if loop.loop_type is LoopType.JUNCTION]
    assert [loop.positions for loop in junctions] == [(3, 4, 10, 17)]


def test_kissing_hairpins_pool_both_loops():
    pairs = [(1, 9), (2, 8), (3, 7), (13, 21), (14, 20), (15, 19), (5, 17)]
    homology = _homology("A" * 21, pairs)
    assert any(
        loop.loop_type is LoopType.PSEUDOKNOT and loop.positions == (4, 6, 16, 18)
        for loop in homology.h1
    )


@pytest.mark.parametrize(
    "seq, pairs",
    [
        ("GGGGAAAACCCC", [(1, 12), (2, 11), (3, 10), (4, 9)]),
        ("GGGAAACCCAAAGGG", [(1, 15), (2, 14), (3, 13), (6, 12), (7, 11), (8, 10)]),
        ("A" * 16, [(1, 9), (2, 10), (3, 11), (4, 12), (5, 13), (6, 14), (7, 15), (8, 16)]),
    ],
)
def test_pipeline_invariants(seq, pairs):
    """
    For every structure: H0 is 1, loop positions are unpaired and distinct,
    the boundary operator squares to zero and exactly one component persists.
    """
    mol = Molecule.from_sequence(seq)
    table = predict_pairs(mol, declared=DeclaredPairing(tuple(pairs)))
    homology = compute_homology(mol, table=table)

    assert homology.h0 == 1
    keys = [loop.positions for loop in homology.h1]
    assert len(keys) == len(set(keys))
    assert all(not table.is_paired(pos) for key in keys for pos in key)

    cx = build_complex(mol, table)
    if cx.triangles:
        assert not (cx.boundary_matrix(1) @ cx.boundary_matrix(2)).any()

    diagram = compute_persistence(mol, position_filtration(mol), table=table)
    infinite_components = [f for f in diagram if f.dimension == 0 and f.is_infinite]
    assert len(infinite_components) == 1
    assert all(f.birth <= f.death for f in diagram)
    assert homology == compute_homology(mol, table=table)

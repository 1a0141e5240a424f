"""
Unit tests for the persistence tracker.

Features are tracked by identity key across the levels of a vertex
filtration; the diagram is sorted by descending persistence.
"""
import math

import pytest

from rna_topology.errors import InvalidInputError
from rna_topology.structures.molecule import Molecule
from rna_topology.structures.pairing import PairingTable
from rna_topology.topology.persistence import (
    bucketed_filtration,
    compute_persistence,
    position_filtration,
)

HAIRPIN_PAIRS = [(1, 12), (2, 11), (3, 10), (4, 9)]


@pytest.fixture
def hairpin():
    mol = Molecule.from_sequence("GGGGAAAACCCC")
    return mol, PairingTable.from_tuples(12, HAIRPIN_PAIRS)


def test_position_filtration_diagram(hairpin):
    """
    Growing the chain one position at a time: each partial chain dies at the
    next level; the full chain and the hairpin survive.
    """
    mol, table = hairpin
    diagram = compute_persistence(mol, position_filtration(mol), table=table)

    components = [f for f in diagram if f.dimension == 0]
    assert len(components) == 12
    assert sum(f.is_infinite for f in components) == 1
    assert all(f.persistence == pytest.approx(1.0) for f in components if not f.is_infinite)

    loops = [f for f in diagram if f.dimension == 1]
    assert len(loops) == 1
    assert loops[0].generator == (5, 6, 7, 8)
    assert loops[0].kind == "hairpin"
    assert loops[0].birth == 9.0
    assert loops[0].is_infinite


def test_diagram_ordering_and_birth_before_death(hairpin):
    mol, table = hairpin
    diagram = compute_persistence(mol, position_filtration(mol), table=table)

    persistences = [f.persistence for f in diagram]
    assert persistences == sorted(persistences, reverse=True)
    assert all(f.birth <= f.death for f in diagram)
    assert diagram[0].is_infinite


def test_components_merge_when_gap_position_enters():
    """
    Positions 1 and 3 enter first as separate components and merge when 2 enters.
    """
    mol = Molecule.from_sequence("AAA")
    diagram = compute_persistence(mol, [0.0, 1.0, 0.0], table=PairingTable.empty(3))
    summary = {(f.generator, f.birth, f.death) for f in diagram}
    assert summary == {((1,), 0.0, 1.0), ((3,), 0.0, 1.0), ((1, 2, 3), 1.0, math.inf)}


def test_mapping_filtration_and_predicted_table():
    """Without a table one is predicted once from the molecule."""
    mol = Molecule.from_sequence("ACGUA")
    diagram = compute_persistence(mol, {1: 0.5, 2: 0.5, 3: 0.5, 4: 0.5, 5: 0.5})
    assert len(diagram) == 1
    assert diagram[0].generator == (1, 2, 3, 4, 5)
    assert diagram[0].is_infinite


def test_bucketed_filtration_levels():
    mol = Molecule.from_sequence("A" * 10)
    values = bucketed_filtration(mol, 4)
    assert sorted(set(values.values())) == [4.0, 8.0, 12.0]
    assert values[1] == values[4] == 4.0
    assert values[5] == 8.0
    assert values[10] == 12.0

    diagram = compute_persistence(mol, values, table=PairingTable.empty(10))
    assert [f.generator for f in diagram if f.is_infinite] == [tuple(range(1, 11))]


def test_bucketed_filtration_rejects_bad_window():
    with pytest.raises(InvalidInputError):
        bucketed_filtration(Molecule.from_sequence("AAA"), 0)


@pytest.mark.parametrize(
    "filtration",
    [
        [0.0, 1.0],                       # too short
        {1: 0.0, 2: 1.0},                 # position 3 missing
        {1: 0.0, 2: 1.0, 3: 2.0, 4: 0.0},  # unknown position
        [0.0, float("nan"), 1.0],
    ],
)
def test_invalid_filtrations_raise(filtration):
    with pytest.raises(InvalidInputError):
        compute_persistence(Molecule.from_sequence("AAA"), filtration, table=PairingTable.empty(3))


def test_empty_molecule_has_empty_diagram():
    assert compute_persistence(Molecule.from_sequence(""), []) == []

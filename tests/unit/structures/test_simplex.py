"""
Unit tests for simplices and the chain complex container.

The boundary convention is fixed: edge (a, b) → -(a) + (b), triangle
(a, b, c) → +(a, b) + (b, c) - (a, c). The composition of the two boundary
maps must vanish.
"""
import numpy as np
import pytest

from rna_topology.errors import InvalidInputError
from rna_topology.structures.simplex import ChainComplex, Simplex


def test_simplex_is_canonically_sorted():
    """Identity is the sorted vertex tuple, independent of orientation."""
    assert Simplex((3, 1, 2)).vertices == (1, 2, 3)
    assert Simplex((2, 1)) == Simplex((1, 2), orientation=-1)
    assert hash(Simplex((2, 1))) == hash(Simplex((1, 2)))
    assert Simplex((5,)).dimension == 0
    assert Simplex((1, 2, 3)).dimension == 2


@pytest.mark.parametrize("verts", [(), (1, 2, 3, 4), (1, 1)])
def test_simplex_rejects_bad_vertex_lists(verts):
    with pytest.raises(InvalidInputError):
        Simplex(verts)


def test_simplex_rejects_bad_orientation():
    with pytest.raises(InvalidInputError):
        Simplex((1, 2), orientation=0)


def test_faces_signs():
    edge_faces = Simplex((1, 2)).faces()
    assert [(f.vertices, f.orientation) for f in edge_faces] == [((1,), -1), ((2,), 1)]

    tri_faces = Simplex((1, 2, 3)).faces()
    assert [(f.vertices, f.orientation) for f in tri_faces] == [
        ((1, 2), 1),
        ((2, 3), 1),
        ((1, 3), -1),
    ]

    flipped = Simplex((1, 2), orientation=-1).faces()
    assert [f.orientation for f in flipped] == [1, -1]


def test_add_deduplicates_and_indexes():
    cx = ChainComplex()
    assert cx.add(Simplex((1,)))
    assert not cx.add(Simplex((1,)))
    cx.add(Simplex((2,)))
    cx.add(Simplex((1, 2)))
    assert cx.index_of(Simplex((2,))) == 1
    assert cx.index_of(Simplex((3,))) == -1
    assert cx.index_of(Simplex((2, 1))) == 0


def test_boundary_matrices_compose_to_zero():
    """
    ∂1 ∘ ∂2 = 0 for a filled triangle.
    """
    cx = ChainComplex.from_vertex_lists([(1,), (2,), (3,), (1, 2), (2, 3), (1, 3), (1, 2, 3)])
    d1 = cx.boundary_matrix(1)
    d2 = cx.boundary_matrix(2)
    assert d1.shape == (3, 3)
    assert d2.shape == (3, 1)
    assert np.allclose(d1 @ d2, 0.0)
    assert cx.euler_characteristic() == 1


def test_boundary_matrix_rejects_dimension_zero():
    with pytest.raises(InvalidInputError):
        ChainComplex().boundary_matrix(0)


def test_empty_complex_matrices():
    cx = ChainComplex()
    assert cx.boundary_matrix(1).shape == (0, 0)
    assert cx.euler_characteristic() == 0

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

from rna_topology.errors import InvalidInputError

MAX_DIMENSION = 2


@dataclass(frozen=True, slots=True)
class Simplex:
    """
    An oriented simplex on 1-3 distinct nucleotide positions.

    Identity (equality and hashing) is the sorted vertex tuple; the orientation
    sign is carried along for boundary bookkeeping only.

    Attributes
    ----------
    vertices : Tuple[int, ...]
        Sorted, distinct positions.
    orientation : int
        +1 or -1.
    """
    vertices: Tuple[int, ...]
    orientation: int = field(default=1, compare=False)

    def __post_init__(self) -> None:
        verts = tuple(sorted(self.vertices))
        if not 1 <= len(verts) <= MAX_DIMENSION + 1:
            raise InvalidInputError(f"A simplex needs 1..3 vertices, got {len(verts)}.")
        if len(set(verts)) != len(verts):
            raise InvalidInputError(f"Simplex vertices must be distinct, got {verts}.")
        if self.orientation not in (1, -1):
            raise InvalidInputError(f"Orientation must be +1 or -1, got {self.orientation}.")
        object.__setattr__(self, "vertices", verts)

    @property
    def dimension(self) -> int:
        return len(self.vertices) - 1

    def faces(self) -> List[Simplex]:
        """
        Signed codimension-1 faces.

        Edge `(a, b)` → `-(a)`, `+(b)`.
        Triangle `(a, b, c)` → `+(a, b)`, `+(b, c)`, `-(a, c)`.
        Signs are multiplied by this simplex's orientation.
        """
        s = self.orientation
        v = self.vertices
        if len(v) == 2:
            return [Simplex((v[0],), -s), Simplex((v[1],), s)]
        if len(v) == 3:
            return [Simplex((v[0], v[1]), s), Simplex((v[1], v[2]), s), Simplex((v[0], v[2]), -s)]
        return []


@dataclass(slots=True)
class ChainComplex:
    """
    Simplices graded by dimension 0..2 together with their boundary operator.

    A fresh complex is built for every query; instances are never shared
    between pairing tables.

    Attributes
    ----------
    simplices : Dict[int, List[Simplex]]
        Dimension → simplices in insertion order (their matrix index order).
    """
    simplices: Dict[int, List[Simplex]] = field(
        default_factory=lambda: {dim: [] for dim in range(MAX_DIMENSION + 1)}
    )
    _index: Dict[int, Dict[Tuple[int, ...], int]] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for dim in range(MAX_DIMENSION + 1):
            self.simplices.setdefault(dim, [])
        self._index = {
            dim: {simp.vertices: k for k, simp in enumerate(items)}
            for dim, items in self.simplices.items()
        }

    @classmethod
    def from_vertex_lists(cls, simplices: Sequence[Sequence[int]]) -> ChainComplex:
        """
        Build a complex from raw vertex lists, adding each simplex once.

        Faces are not added implicitly; callers pass the full closure.
        """
        cx = cls()
        for verts in simplices:
            cx.add(Simplex(tuple(verts)))
        return cx

    def add(self, simplex: Simplex) -> bool:
        """Add a simplex unless an identical one exists; return True when added."""
        dim = simplex.dimension
        table = self._index.setdefault(dim, {})
        if simplex.vertices in table:
            return False
        table[simplex.vertices] = len(self.simplices[dim])
        self.simplices[dim].append(simplex)
        return True

    def of_dim(self, dim: int) -> List[Simplex]:
        return self.simplices.get(dim, [])

    @property
    def vertices(self) -> List[Simplex]:
        return self.of_dim(0)

    @property
    def edges(self) -> List[Simplex]:
        return self.of_dim(1)

    @property
    def triangles(self) -> List[Simplex]:
        return self.of_dim(2)

    def index_of(self, simplex: Simplex) -> int:
        """Matrix index of `simplex` within its dimension, or -1 when absent."""
        return self._index.get(simplex.dimension, {}).get(simplex.vertices, -1)

    def boundary(self, simplex: Simplex) -> List[Simplex]:
        """Signed (k-1)-faces of a k-simplex; empty for vertices."""
        return simplex.faces()

    def boundary_matrix(self, dim: int) -> np.ndarray:
        """
        Dense matrix of the boundary map ∂_dim: C_dim → C_(dim-1).

        Rows index (dim-1)-simplices and columns index dim-simplices. Faces that
        are not part of the complex are skipped.

        Raises
        ------
        InvalidInputError
            If `dim` is not 1 or 2.
        """
        if dim not in (1, 2):
            raise InvalidInputError(f"Boundary matrices exist for dimensions 1 and 2, got {dim}.")
        cols = self.of_dim(dim)
        rows = self.of_dim(dim - 1)
        matrix = np.zeros((len(rows), len(cols)), dtype=np.float64)
        for col, simplex in enumerate(cols):
            for face in self.boundary(simplex):
                row = self.index_of(face)
                if row != -1:
                    matrix[row, col] = face.orientation
        return matrix

    def euler_characteristic(self) -> int:
        """V - E + F."""
        return len(self.vertices) - len(self.edges) + len(self.triangles)

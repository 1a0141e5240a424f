from __future__ import annotations
import logging
from typing import Dict, List, Optional, Tuple

from rna_topology.errors import InvalidInputError
from rna_topology.pairing.predictor import DeclaredPairing, predict_pairs
from rna_topology.params.param_types import DEFAULT_PARAMS, TopologyParams
from rna_topology.structures.features import Homology
from rna_topology.structures.molecule import Molecule
from rna_topology.structures.pairing import PairingTable
from rna_topology.structures.simplex import ChainComplex
from rna_topology.topology.complex_builder import build_complex
from rna_topology.topology.linalg import ZERO_TOLERANCE, rank
from rna_topology.topology.loops import classify_loops
from rna_topology.topology.pockets import find_pockets

logger = logging.getLogger(__name__)


def compute_h0(cx: ChainComplex, tol: float = ZERO_TOLERANCE) -> int:
    """Number of connected components, `#vertices - rank(∂1)`."""
    n_vertices = len(cx.vertices)
    if not cx.edges:
        return n_vertices
    return n_vertices - rank(cx.boundary_matrix(1), tol)


def connected_components(cx: ChainComplex) -> List[Tuple[int, ...]]:
    """
    Vertex sets of the connected components of `cx` (union-find over edges).

    Returns
    -------
    List[Tuple[int, ...]]
        Sorted vertex tuples, ordered by their smallest vertex.
    """
    root: Dict[int, int] = {simp.vertices[0]: simp.vertices[0] for simp in cx.vertices}

    def find(v: int) -> int:
        while root[v] != v:
            root[v] = root[root[v]]
            v = root[v]
        return v

    for edge in cx.edges:
        a, b = (find(v) for v in edge.vertices)
        if a != b:
            root[max(a, b)] = min(a, b)

    groups: Dict[int, List[int]] = {}
    for v in sorted(root):
        groups.setdefault(find(v), []).append(v)
    return [tuple(members) for _, members in sorted(groups.items())]


def homology_of(
    molecule: Molecule,
    table: PairingTable,
    cx: ChainComplex,
    params: Optional[TopologyParams] = None,
) -> Homology:
    """Homology record of a complex already built from `molecule` and `table`."""
    params = params or DEFAULT_PARAMS
    h0 = compute_h0(cx, params.zero_tolerance)
    loops = classify_loops(molecule, table)
    pockets = find_pockets(cx, molecule, params)
    return Homology(h0=h0, h1=tuple(loops), h2=tuple(pockets))


def compute_homology(
    molecule: Molecule,
    table: Optional[PairingTable] = None,
    declared: Optional[DeclaredPairing] = None,
    params: Optional[TopologyParams] = None,
) -> Homology:
    """
    Full homology record of a molecule.

    Parameters
    ----------
    molecule : Molecule
        The molecule snapshot.
    table : Optional[PairingTable]
        A pairing table to use as-is. When None, one is predicted from
        `declared` (pass-through) or from the conformational flags.
    declared : Optional[DeclaredPairing]
        Declared partners; ignored when `table` is given.
    params : Optional[TopologyParams]
        Engine parameters, by default `DEFAULT_PARAMS`.

    Returns
    -------
    Homology
        `Homology(0)` for an empty molecule.

    Raises
    ------
    InvalidInputError
        If `table` does not cover the molecule, or the declared partners are invalid.
    """
    params = params or DEFAULT_PARAMS
    if table is None:
        table = predict_pairs(molecule, declared=declared, params=params)
    elif table.length != molecule.length:
        raise InvalidInputError(
            f"Pairing table covers {table.length} positions, molecule has {molecule.length}."
        )

    if molecule.length == 0:
        return Homology(h0=0)

    cx = build_complex(molecule, table)
    homology = homology_of(molecule, table, cx, params)
    logger.debug(f"Homology of N={molecule.length}: betti={homology.betti_numbers}")
    return homology

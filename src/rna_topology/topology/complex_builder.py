from __future__ import annotations
import logging
from typing import Dict, Iterable, Optional, Set

from rna_topology.errors import InvalidInputError
from rna_topology.structures.molecule import Molecule
from rna_topology.structures.pairing import PairingTable
from rna_topology.structures.simplex import ChainComplex, Simplex

logger = logging.getLogger(__name__)


def build_complex(
    molecule: Molecule,
    table: PairingTable,
    included: Optional[Iterable[int]] = None,
) -> ChainComplex:
    """
    Build the simplicial complex of a paired molecule.

    Vertices are nucleotide positions. Edges join backbone neighbours and the
    two ends of every base pair. A triangle `{a, b, c}` is added when all three
    of its edges exist.

    Parameters
    ----------
    molecule : Molecule
        The molecule whose positions become vertices.
    table : PairingTable
        Base pairs over the same molecule.
    included : Optional[Iterable[int]]
        Restrict the complex to these positions. Edges and triangles need every
        vertex included. Defaults to all positions.

    Returns
    -------
    ChainComplex
        A fresh complex; nothing is shared between calls.

    Raises
    ------
    InvalidInputError
        If the table length does not match the molecule or `included` names a
        position outside `1..n`.
    """
    n = molecule.length
    if table.length != n:
        raise InvalidInputError(f"Pairing table covers {table.length} positions, molecule has {n}.")

    if included is None:
        keep: Set[int] = set(molecule.positions())
    else:
        keep = set(included)
        outside = [pos for pos in keep if not 1 <= pos <= n]
        if outside:
            raise InvalidInputError(f"Included positions outside 1..{n}: {sorted(outside)}")

    cx = ChainComplex()
    for pos in sorted(keep):
        cx.add(Simplex((pos,)))

    adjacency: Dict[int, Set[int]] = {pos: set() for pos in keep}

    def add_edge(a: int, b: int) -> None:
        if a in keep and b in keep and cx.add(Simplex((a, b))):
            adjacency[a].add(b)
            adjacency[b].add(a)

    for pos in range(1, n):
        add_edge(pos, pos + 1)
    for pr in table:
        add_edge(pr.base_i, pr.base_j)

    # Each triangle a < b < c is found once, from its lowest edge (a, b).
    for edge in list(cx.edges):
        a, b = edge.vertices
        for c in sorted(adjacency[a] & adjacency[b]):
            if c > b:
                cx.add(Simplex((a, b, c)))

    logger.debug(
        f"Complex built: V={len(cx.vertices)} E={len(cx.edges)} F={len(cx.triangles)}"
    )
    return cx

from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from rna_topology.params.param_types import DEFAULT_PARAMS, PocketParams, TopologyParams
from rna_topology.structures.features import Pocket, PocketFunction
from rna_topology.structures.molecule import Molecule
from rna_topology.structures.simplex import ChainComplex
from rna_topology.topology.linalg import kernel_basis
from rna_topology.utils.iter_utils import contiguous_runs

logger = logging.getLogger(__name__)

# Semi-axis ratios of the oblate spheroid used for single-segment pockets.
_MID_AXIS_RATIO = 0.8
_SHORT_AXIS_RATIO = 0.6


def two_cycle_supports(cx: ChainComplex, tol: float, min_size: int = 4) -> List[Tuple[int, ...]]:
    """
    Vertex supports of the 2-cycles of `cx`.

    Each kernel vector of the boundary map ∂2 is kept when it has nonzero
    weight on at least `min_size` triangles whose vertices cover at least
    `min_size` positions.

    Returns
    -------
    List[Tuple[int, ...]]
        Sorted vertex tuples, one per kept kernel vector.
    """
    triangles = cx.triangles
    if not triangles:
        return []

    supports: List[Tuple[int, ...]] = []
    for vector in kernel_basis(cx.boundary_matrix(2), tol):
        support = np.flatnonzero(np.abs(vector) > tol)
        if support.size < min_size:
            continue
        verts = sorted({v for k in support for v in triangles[int(k)].vertices})
        if len(verts) >= min_size:
            supports.append(tuple(verts))
    return supports


def classify_function(molecule: Molecule, boundary: Sequence[int], params: PocketParams) -> PocketFunction:
    """
    Vote on a pocket's function from the flags of its boundary nucleotides.

    Fractions are taken over the boundary: ion coordination (e7) together with
    tertiary contact (e4) gives catalytic; edge accessibility (e5) gives
    binding; tertiary contact alone gives structural.
    """
    if not boundary:
        return PocketFunction.UNKNOWN

    fields = [molecule.state(pos).fields for pos in boundary]
    total = len(fields)
    ion = sum(f.e7 for f in fields) / total
    tertiary = sum(f.e4 for f in fields) / total
    edge = sum(f.e5 for f in fields) / total

    if ion > params.catalytic_ion_fraction and tertiary > params.catalytic_tertiary_fraction:
        return PocketFunction.CATALYTIC
    if edge > params.binding_edge_fraction:
        return PocketFunction.BINDING
    if tertiary > params.structural_tertiary_fraction:
        return PocketFunction.STRUCTURAL
    return PocketFunction.UNKNOWN


def estimate_volume(boundary: Sequence[int], params: PocketParams) -> float:
    """
    Closed-form cavity volume (Å³) of a pocket boundary.

    A single contiguous segment of `n` nucleotides is treated as a ring of
    radius `r = n * rise / (2π)` filling an oblate spheroid with semi-axes
    `r`, `0.8 r` and `min(0.6 r, helix_radius)`.

    Several segments are treated as helical tubes. Each segment contributes
    `π (R / √c)² L` with `L = len * rise`, `c = L / (span * rise)` and `R` the
    helix radius. A segment of a single position has no span, hence infinite
    curvature, and adds no tube volume. Each junction between segments adds a
    sphere of radius `R / 2`.

    Both estimates are scaled by the packing factor.
    """
    segments = contiguous_runs(boundary)
    if not segments:
        return 0.0

    rise = params.rise_per_base
    radius = params.helix_radius

    if len(segments) == 1:
        r = len(segments[0]) * rise / (2 * math.pi)
        a, b, c = r, _MID_AXIS_RATIO * r, min(_SHORT_AXIS_RATIO * r, radius)
        volume = 4.0 / 3.0 * math.pi * a * b * c
    else:
        volume = 0.0
        for seg in segments:
            span = seg[-1] - seg[0]
            if span == 0:
                continue
            length = len(seg) * rise
            curvature = length / (span * rise)
            volume += math.pi * (radius / math.sqrt(curvature)) ** 2 * length
        volume += (len(segments) - 1) * 4.0 / 3.0 * math.pi * (radius / 2) ** 3

    return volume * params.packing_factor


def find_pockets(
    cx: ChainComplex,
    molecule: Molecule,
    params: Optional[TopologyParams] = None,
) -> List[Pocket]:
    """
    Turn the 2-cycles of a complex into classified pockets.

    Parameters
    ----------
    cx : ChainComplex
        Complex built over `molecule`.
    molecule : Molecule
        Supplies the flags for the function vote.
    params : Optional[TopologyParams]
        Engine parameters, by default `DEFAULT_PARAMS`.

    Returns
    -------
    List[Pocket]
        Pockets with volume above the minimum, one per distinct boundary.
    """
    params = params or DEFAULT_PARAMS
    pocket_params = params.pockets
    pockets: Dict[Tuple[int, ...], Pocket] = {}

    for boundary in two_cycle_supports(cx, params.zero_tolerance, pocket_params.min_boundary):
        if boundary in pockets:
            continue
        volume = estimate_volume(boundary, pocket_params)
        if volume <= pocket_params.min_volume:
            logger.debug(f"Discarding pocket {boundary}: volume {volume:.1f} Å³")
            continue
        pockets[boundary] = Pocket(
            boundary=boundary,
            volume=volume,
            function=classify_function(molecule, boundary, pocket_params),
        )

    return list(pockets.values())

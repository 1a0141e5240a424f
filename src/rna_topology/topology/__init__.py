from rna_topology.topology.complex_builder import build_complex
from rna_topology.topology.linalg import ZERO_TOLERANCE, kernel_basis, rank, row_echelon
from rna_topology.topology.loops import NestingIndex, classify_loops, field_signature
from rna_topology.topology.pockets import (
    classify_function,
    estimate_volume,
    find_pockets,
    two_cycle_supports,
)
from rna_topology.topology.homology import (
    compute_h0,
    compute_homology,
    connected_components,
    homology_of,
)
from rna_topology.topology.persistence import (
    bucketed_filtration,
    compute_persistence,
    position_filtration,
)

__all__ = [
    "build_complex",
    "ZERO_TOLERANCE",
    "kernel_basis",
    "rank",
    "row_echelon",
    "NestingIndex",
    "classify_loops",
    "field_signature",
    "classify_function",
    "estimate_volume",
    "find_pockets",
    "two_cycle_supports",
    "compute_h0",
    "compute_homology",
    "connected_components",
    "homology_of",
    "bucketed_filtration",
    "compute_persistence",
    "position_filtration",
]

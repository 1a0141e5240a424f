from rna_topology.errors import InvalidInputError, TopologyError
from rna_topology.structures import (
    BasePair,
    ChainComplex,
    ConformationalFields,
    Homology,
    Loop,
    LoopType,
    Molecule,
    NucleotideState,
    PairingMode,
    PairingTable,
    PersistenceFeature,
    Pocket,
    PocketFunction,
    Simplex,
)
from rna_topology.params import DEFAULT_PARAMS, TopologyParams, TopologyParamsLoader
from rna_topology.pairing import DeclaredPairing, NussinovFoldingConfig, predict_pairs
from rna_topology.topology import (
    build_complex,
    bucketed_filtration,
    classify_loops,
    compute_homology,
    compute_persistence,
    find_pockets,
    position_filtration,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidInputError",
    "TopologyError",
    "BasePair",
    "ChainComplex",
    "ConformationalFields",
    "Homology",
    "Loop",
    "LoopType",
    "Molecule",
    "NucleotideState",
    "PairingMode",
    "PairingTable",
    "PersistenceFeature",
    "Pocket",
    "PocketFunction",
    "Simplex",
    "DEFAULT_PARAMS",
    "TopologyParams",
    "TopologyParamsLoader",
    "DeclaredPairing",
    "NussinovFoldingConfig",
    "predict_pairs",
    "build_complex",
    "bucketed_filtration",
    "classify_loops",
    "compute_homology",
    "compute_persistence",
    "find_pockets",
    "position_filtration",
]

from rna_topology.structures.molecule import (
    DEFAULT_FIELDS,
    ConformationalFields,
    Molecule,
    NucleotideState,
)
from rna_topology.structures.pairing import BasePair, PairingMode, PairingTable
from rna_topology.structures.simplex import ChainComplex, Simplex
from rna_topology.structures.features import (
    Homology,
    Loop,
    LoopType,
    PersistenceFeature,
    Pocket,
    PocketFunction,
)

__all__ = [
    "DEFAULT_FIELDS",
    "ConformationalFields",
    "Molecule",
    "NucleotideState",
    "BasePair",
    "PairingMode",
    "PairingTable",
    "ChainComplex",
    "Simplex",
    "Homology",
    "Loop",
    "LoopType",
    "PersistenceFeature",
    "Pocket",
    "PocketFunction",
]

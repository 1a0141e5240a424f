from rna_topology.pairing.scoring import build_score_matrix
from rna_topology.pairing.nussinov_recurrences import (
    NussinovFoldingConfig,
    NussinovFoldingEngine,
    NussinovFoldState,
)
from rna_topology.pairing.nussinov_traceback import TraceResult, traceback_nussinov
from rna_topology.pairing.predictor import (
    DeclaredPairing,
    computed_pairs,
    pass_through_pairs,
    predict_pairs,
)

__all__ = [
    "build_score_matrix",
    "NussinovFoldingConfig",
    "NussinovFoldingEngine",
    "NussinovFoldState",
    "TraceResult",
    "traceback_nussinov",
    "DeclaredPairing",
    "computed_pairs",
    "pass_through_pairs",
    "predict_pairs",
]

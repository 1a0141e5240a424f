from rna_topology.params.param_types import (
    DEFAULT_PARAMS,
    PairingScoreParams,
    PocketParams,
    TopologyParams,
)
from rna_topology.params.param_loader import TopologyParamsLoader, default_params_path

__all__ = [
    "DEFAULT_PARAMS",
    "PairingScoreParams",
    "PocketParams",
    "TopologyParams",
    "TopologyParamsLoader",
    "default_params_path",
]

from rna_topology.utils.nucleotide_utils import normalize_base, pair_key
from rna_topology.utils.dotbracket_utils import (
    assign_layers,
    dotbracket_to_pairs,
    pairs_to_multilayer_dotbracket,
)
from rna_topology.utils.iter_utils import contiguous_runs, iter_spans

__all__ = [
    "normalize_base",
    "pair_key",
    "assign_layers",
    "dotbracket_to_pairs",
    "pairs_to_multilayer_dotbracket",
    "contiguous_runs",
    "iter_spans",
]

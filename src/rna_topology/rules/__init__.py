from rna_topology.rules.constraints import (
    MIN_HAIRPIN_RUN,
    MIN_PAIR_SEPARATION,
    can_pair,
    has_min_separation,
)

__all__ = [
    "MIN_HAIRPIN_RUN",
    "MIN_PAIR_SEPARATION",
    "can_pair",
    "has_min_separation",
]

from __future__ import annotations
from typing import Final

from rna_topology.utils.nucleotide_utils import pair_key

# Minimum index separation j - i of a base pair (i, j). Leaves at least three
# unpaired nucleotides inside the closing pair.
MIN_PAIR_SEPARATION: Final[int] = 4

# Shortest unpaired run that closes as a hairpin; shorter terminal runs are bulges.
MIN_HAIRPIN_RUN: Final[int] = 4

# ---- Pairing rules (RNA) -----------------------------------------------------

# Allowed canonical pairs (including wobble) for RNA.
# Accept both orientations (e.g., "AU" and "UA") for quick membership checks.
_RNA_ALLOWED_PAIRS: Final[frozenset[str]] = frozenset(
    {"AU", "UA", "GC", "CG", "GU", "UG"}
)


def can_pair(base_i: str, base_j: str) -> bool:
    """
    Return True if nucleotides bases `base_i` and `base_j` can base pair
    in RNA.

    We allow canonical Watson-Crick pairs (AU, GC) and GU wobble pairs.

    Parameters
    ----------
    base_i, base_j : str
        Single-character nucleotides, case-insensitive. Expected in {A, U, G, C}.

    Returns
    -------
    bool
        True if (a,b) is in {AU, UA, GC, CG, GU, UG}; False otherwise.
    """
    if not isinstance(base_i, str) or not isinstance(base_j, str):
        return False

    if len(base_i) != 1 or len(base_j) != 1:
        return False

    return pair_key(base_i, base_j) in _RNA_ALLOWED_PAIRS


def has_min_separation(i: int, j: int, min_separation: int = MIN_PAIR_SEPARATION) -> bool:
    """
    Check whether a candidate pair (i, j) satisfies the minimum loop separation.

    Parameters
    ----------
    i, j : int or np.ndarray
        Positions with i < j (any indexing base). Index arrays broadcast
        elementwise and yield a boolean mask.
    min_separation : int, optional
        Minimum allowed `j - i`. Defaults to 4.

    Returns
    -------
    bool
        True if `j - i >= min_separation`, else False.
    """
    return j - i >= min_separation

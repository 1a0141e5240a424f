from __future__ import annotations
from dataclasses import dataclass
from typing import List, Set, Tuple

import numpy as np

from rna_topology.pairing.nussinov_recurrences import NussinovFoldState
from rna_topology.params.param_types import PairingScoreParams
from rna_topology.rules import has_min_separation
from rna_topology.utils.dotbracket_utils import pairs_to_multilayer_dotbracket


@dataclass(frozen=True, slots=True)
class TraceResult:
    """
    Result of a traceback.

    Attributes
    ----------
    pairs : List[Tuple[int, int]]
        0-indexed `(i, j)` pairs with `i < j`, sorted by `i`.
    dot_bracket : str
        Dot-bracket rendering of `pairs`.
    """
    pairs: List[Tuple[int, int]]
    dot_bracket: str


def traceback_nussinov(state: NussinovFoldState, params: PairingScoreParams) -> TraceResult:
    """
    Reconstructs one optimal nested pairing from a filled DP matrix.

    A single top-down pass driven by an explicit stack of `(i, j)` frames.
    For each frame the first decomposition that reproduces `dp[i, j]` within
    `params.traceback_tolerance` is followed, in this order:

    1. `(i, j)` paired (`score[i, j] + dp[i+1, j-1]`),
    2. bifurcation at the smallest matching `k`,
    3. `i` unpaired (`dp[i+1, j]`),
    4. `j` unpaired (`dp[i, j-1]`),
    5. both unpaired (`dp[i+1, j-1]`).

    Parameters
    ----------
    state : NussinovFoldState
        Filled score and DP matrices.
    params : PairingScoreParams
        Supplies the pair threshold and traceback tolerance.

    Returns
    -------
    TraceResult
        The traced pairs and their dot-bracket string.
    """
    seq_len = state.seq_len
    if seq_len == 0:
        return TraceResult(pairs=[], dot_bracket="")

    dp = state.dp_matrix
    score = state.score_matrix
    tol = params.traceback_tolerance

    pairs: Set[Tuple[int, int]] = set()
    stack: List[Tuple[int, int]] = [(0, seq_len - 1)]

    while stack:
        i, j = stack.pop()

        # Spans shorter than a minimal pair hold no structure.
        if not has_min_separation(i, j):
            continue

        value = dp[i, j]
        if value <= tol:
            continue

        pair_score = score[i, j]
        if pair_score > params.pair_threshold and abs(value - (pair_score + dp[i + 1, j - 1])) <= tol:
            pairs.add((i, j))
            stack.append((i + 1, j - 1))
            continue

        bifurcation = dp[i, i + 1:j] + dp[i + 2:j + 1, j]
        hits = np.flatnonzero(np.abs(bifurcation - value) <= tol)
        if hits.size:
            k = i + 1 + int(hits[0])
            stack.append((k + 1, j))
            stack.append((i, k))
            continue

        if abs(value - dp[i + 1, j]) <= tol:
            stack.append((i + 1, j))
        elif abs(value - dp[i, j - 1]) <= tol:
            stack.append((i, j - 1))
        else:
            stack.append((i + 1, j - 1))

    ordered = sorted(pairs)
    dot_bracket = pairs_to_multilayer_dotbracket(seq_len, ((i + 1, j + 1) for i, j in ordered))
    return TraceResult(pairs=ordered, dot_bracket=dot_bracket)

from __future__ import annotations
import logging

import numpy as np

from rna_topology.params.param_types import PairingScoreParams
from rna_topology.rules import can_pair, has_min_separation
from rna_topology.structures.molecule import Molecule
from rna_topology.utils.nucleotide_utils import normalize_base

logger = logging.getLogger(__name__)

_BASE_CODES = {"A": 0, "C": 1, "G": 2, "U": 3}

# complement[a, b] is True when base codes a and b form a canonical or wobble pair.
# Index 4 collects every symbol outside ACGU and never pairs.
_COMPLEMENT = np.zeros((5, 5), dtype=bool)
for _a, _ia in _BASE_CODES.items():
    for _b, _ib in _BASE_CODES.items():
        _COMPLEMENT[_ia, _ib] = can_pair(_a, _b)


def build_score_matrix(molecule: Molecule, params: PairingScoreParams) -> np.ndarray:
    """
    Vectorised compatibility scores for every candidate pair of `molecule`.

    Parameters
    ----------
    molecule : Molecule
        The molecule to score.
    params : PairingScoreParams
        Weights, distance de-rating and stability window.

    Returns
    -------
    np.ndarray
        An `(n, n)` float matrix, 0-indexed. Entry `[i, j]` holds the score of
        positions `i + 1` and `j + 1` for `j - i >= 4` and complementary bases;
        every other entry (including the whole lower triangle) is 0.
    """
    n = molecule.length
    if n == 0:
        return np.zeros((0, 0), dtype=np.float64)

    flags = np.array([state.fields.as_tuple() for state in molecule], dtype=bool)
    codes = np.array(
        [_BASE_CODES.get(normalize_base(state.base), 4) for state in molecule],
        dtype=np.intp,
    )

    def both(k: int) -> np.ndarray:
        return np.logical_and.outer(flags[:, k], flags[:, k])

    score = (
        params.both_e0 * both(0)
        + params.both_e1 * both(1)
        + params.both_e2 * both(2)
        + params.equal_e3 * np.equal.outer(flags[:, 3], flags[:, 3])
        + params.both_e5 * both(5)
        + params.differ_e6 * np.not_equal.outer(flags[:, 6], flags[:, 6])
    )

    idx = np.arange(n)
    distance = idx[None, :] - idx[:, None]
    score = np.where(distance > params.distance_threshold, score * params.distance_factor, score)

    active = flags.sum(axis=1)
    combined = active[:, None] + active[None, :]
    low, high = params.stability_window
    score = np.where((combined >= low) & (combined <= high), score * params.stability_factor, score)

    allowed = has_min_separation(idx[:, None], idx[None, :]) & _COMPLEMENT[codes[:, None], codes[None, :]]
    score = np.where(allowed, score, 0.0)

    logger.debug(f"Score matrix built for N={n}: {int(np.count_nonzero(score))} candidate pairs")
    return score

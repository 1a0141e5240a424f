from __future__ import annotations
from dataclasses import dataclass
import logging
import time

import numpy as np
from tqdm import tqdm

from rna_topology.params.param_types import PairingScoreParams
from rna_topology.rules import MIN_PAIR_SEPARATION
from rna_topology.utils.iter_utils import iter_spans

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NussinovFoldingConfig:
    """
    Run-time settings of the pairing DP.

    Attributes
    ----------
    verbose : bool
        If True, shows a progress bar over spans even when INFO logging is off.
    """
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class NussinovFoldState:
    """
    Filled DP matrices of one pairing prediction.

    Attributes
    ----------
    score_matrix : np.ndarray
        `(n, n)` pair compatibility scores (0-indexed, upper triangle).
    dp_matrix : np.ndarray
        `(n, n)` optimal accumulated scores; `dp[i, j]` is the best total for
        the sub-sequence `[i, j]`.
    """
    score_matrix: np.ndarray
    dp_matrix: np.ndarray

    @property
    def seq_len(self) -> int:
        return self.dp_matrix.shape[0]


@dataclass(slots=True)
class NussinovFoldingEngine:
    """
    Maximises the total compatibility score of a nested pairing with a
    Nussinov-style recurrence.

    For every span with `j - i >= 4` (length 5 or more)::

        dp[i, j] = max(dp[i+1, j-1], dp[i+1, j], dp[i, j-1],
                       score[i, j] + dp[i+1, j-1]     if score[i, j] > threshold,
                       max_{i<k<j} dp[i, k] + dp[k+1, j])

    Shorter spans stay at 0. The bifurcation maximum over `k` is evaluated as
    one numpy reduction per cell.

    Attributes
    ----------
    params : PairingScoreParams
        Provides the pair acceptance threshold.
    config : NussinovFoldingConfig
        Progress display settings.
    """
    params: PairingScoreParams
    config: NussinovFoldingConfig

    def fill_matrix(self, score_matrix: np.ndarray) -> NussinovFoldState:
        """
        Fill the DP matrix bottom-up by increasing span.

        Parameters
        ----------
        score_matrix : np.ndarray
            Output of `build_score_matrix`.

        Returns
        -------
        NussinovFoldState
            The score matrix together with the filled DP matrix.
        """
        start_time = time.perf_counter()
        n = score_matrix.shape[0]
        dp = np.zeros((n, n), dtype=np.float64)

        if n <= MIN_PAIR_SEPARATION:
            logger.info(f"Nussinov DP: N={n} is too short for any pair; nothing to fill.")
            return NussinovFoldState(score_matrix=score_matrix, dp_matrix=dp)

        logger.info("=" * 60)
        logger.info(f"Nussinov DP for sequence length N={n}")
        logger.info(f"Expected complexity: O(N³) ≈ {n ** 3:,} operations")
        logger.info("=" * 60)

        threshold = self.params.pair_threshold
        show_progress = self.config.verbose or logger.isEnabledFor(logging.INFO)
        n_cells = (n - MIN_PAIR_SEPARATION) * (n - MIN_PAIR_SEPARATION + 1) // 2
        span_iter = tqdm(
            iter_spans(n, MIN_PAIR_SEPARATION),
            total=n_cells,
            desc="Nussinov DP",
            leave=True,
            disable=not show_progress,
        )

        for i, j in span_iter:
            best = max(dp[i + 1, j - 1], dp[i + 1, j], dp[i, j - 1])

            pair_score = score_matrix[i, j]
            if pair_score > threshold:
                best = max(best, pair_score + dp[i + 1, j - 1])

            # k runs over i+1..j-1: dp[i, k] + dp[k+1, j]
            bifurcation = dp[i, i + 1:j] + dp[i + 2:j + 1, j]
            if bifurcation.size:
                best = max(best, float(bifurcation.max()))

            dp[i, j] = best

        elapsed = time.perf_counter() - start_time
        logger.info(f"Nussinov DP completed in {elapsed:.2f}s ({elapsed * 1000:.0f}ms)")
        logger.info(f"Final dp[0,{n - 1}] = {dp[0, n - 1]:.3f}")

        return NussinovFoldState(score_matrix=score_matrix, dp_matrix=dp)

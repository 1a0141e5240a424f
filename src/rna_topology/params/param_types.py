from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

# Inclusive (low, high) bounds on the combined active-flag count of a candidate pair.
ActiveWindow = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class PairingScoreParams:
    """
    Weights and cut-offs of the conformational compatibility score.

    Parameters
    ----------
    both_e0, both_e1, both_e2 : float
        Added when both nucleotides have the pairing-capable flag set
        (pairing state, stacking, C3'-endo pucker).
    equal_e3 : float
        Added when both backbone-torsion flags agree.
    both_e5 : float
        Added when both edges are accessible.
    differ_e6 : float
        Added when backbone exposure disagrees.
    distance_threshold : int
        Pairs with `j - i` above this are de-rated by `distance_factor`.
    distance_factor : float
        Multiplier applied past `distance_threshold`.
    stability_window : ActiveWindow
        Combined active-flag counts that earn `stability_factor`.
    stability_factor : float
        Multiplier for pairs inside `stability_window`.
    pair_threshold : float
        A pair is only considered by the DP when its score exceeds this.
    traceback_tolerance : float
        Absolute tolerance used to match DP cells during traceback.
    """
    both_e0: float = 0.3
    both_e1: float = 0.2
    both_e2: float = 0.1
    equal_e3: float = 0.1
    both_e5: float = 0.1
    differ_e6: float = 0.1
    distance_threshold: int = 500
    distance_factor: float = 0.5
    stability_window: ActiveWindow = (6, 10)
    stability_factor: float = 1.1
    pair_threshold: float = 0.5
    traceback_tolerance: float = 1e-6


@dataclass(frozen=True, slots=True)
class PocketParams:
    """
    Constants of the closed-form pocket volume estimate and function vote.

    Lengths are in Ångström, volumes in Å³, thresholds are boundary fractions.
    """
    rise_per_base: float = 3.4
    helix_radius: float = 11.0
    packing_factor: float = 0.65
    min_volume: float = 50.0
    min_boundary: int = 4
    catalytic_ion_fraction: float = 0.3
    catalytic_tertiary_fraction: float = 0.2
    binding_edge_fraction: float = 0.5
    structural_tertiary_fraction: float = 0.4


@dataclass(frozen=True, slots=True)
class TopologyParams:
    """
    Immutable bundle of every tunable constant used by the engine.

    Attributes
    ----------
    pairing : PairingScoreParams
        Compatibility score and DP constants.
    pockets : PocketParams
        Pocket volume and classification constants.
    zero_tolerance : float
        Absolute epsilon below which a matrix entry counts as zero.
    """
    pairing: PairingScoreParams = field(default_factory=PairingScoreParams)
    pockets: PocketParams = field(default_factory=PocketParams)
    zero_tolerance: float = 1e-10


DEFAULT_PARAMS = TopologyParams()

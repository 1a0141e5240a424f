from __future__ import annotations
from typing import Any, Mapping, Optional

from rna_topology.errors import InvalidInputError
from rna_topology.params.param_types import ActiveWindow, PairingScoreParams, PocketParams


def get_section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """
    Return the sub-mapping under `key`, or an empty mapping when absent.

    Raises
    ------
    InvalidInputError
        If the key exists but does not hold a mapping.
    """
    node = data.get(key)
    if node is None:
        return {}
    if not isinstance(node, Mapping):
        raise InvalidInputError(f"Section '{key}' must be a mapping.")
    return node


def get_float(node: Mapping[str, Any], key: str, default: float) -> float:
    """Read a numeric field as float, falling back to `default` when missing."""
    value = node.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Field '{key}' must be numeric, got {value!r}.") from exc


def get_int(node: Mapping[str, Any], key: str, default: int) -> int:
    """Read an integral field, falling back to `default` when missing."""
    value = node.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise InvalidInputError(f"Field '{key}' must be an integer, got {value!r}.")
    return int(value)


def parse_window(node: Mapping[str, Any], default: ActiveWindow) -> ActiveWindow:
    """Parse `min_active` / `max_active` into an inclusive window."""
    low = get_int(node, "min_active", default[0])
    high = get_int(node, "max_active", default[1])
    if low > high:
        raise InvalidInputError(f"Stability window is empty: min_active={low} > max_active={high}.")
    return low, high


# ---------- Pairing score ----------

def parse_pairing(data: Mapping[str, Any], defaults: Optional[PairingScoreParams] = None) -> PairingScoreParams:
    """
    Parse the `pairing` section.

    Expected layout::

        pairing:
          weights: {both_e0: 0.3, both_e1: 0.2, both_e2: 0.1,
                    equal_e3: 0.1, both_e5: 0.1, differ_e6: 0.1}
          distance: {threshold: 500, factor: 0.5}
          stability: {min_active: 6, max_active: 10, factor: 1.1}
          pair_threshold: 0.5
          traceback_tolerance: 1.0e-6

    Every key is optional; missing keys keep the defaults.
    """
    base = defaults or PairingScoreParams()
    node = get_section(data, "pairing")
    weights = get_section(node, "weights")
    distance = get_section(node, "distance")
    stability = get_section(node, "stability")

    return PairingScoreParams(
        both_e0=get_float(weights, "both_e0", base.both_e0),
        both_e1=get_float(weights, "both_e1", base.both_e1),
        both_e2=get_float(weights, "both_e2", base.both_e2),
        equal_e3=get_float(weights, "equal_e3", base.equal_e3),
        both_e5=get_float(weights, "both_e5", base.both_e5),
        differ_e6=get_float(weights, "differ_e6", base.differ_e6),
        distance_threshold=get_int(distance, "threshold", base.distance_threshold),
        distance_factor=get_float(distance, "factor", base.distance_factor),
        stability_window=parse_window(stability, base.stability_window),
        stability_factor=get_float(stability, "factor", base.stability_factor),
        pair_threshold=get_float(node, "pair_threshold", base.pair_threshold),
        traceback_tolerance=get_float(node, "traceback_tolerance", base.traceback_tolerance),
    )


# ---------- Pockets ----------

def parse_pockets(data: Mapping[str, Any], defaults: Optional[PocketParams] = None) -> PocketParams:
    """
    Parse the `pockets` section (geometry + function vote thresholds).

    Raises
    ------
    InvalidInputError
        If `min_boundary` is below 4, or a length/packing constant is not positive.
    """
    base = defaults or PocketParams()
    node = get_section(data, "pockets")
    geometry = get_section(node, "geometry")
    vote = get_section(node, "function_vote")

    params = PocketParams(
        rise_per_base=get_float(geometry, "rise_per_base", base.rise_per_base),
        helix_radius=get_float(geometry, "helix_radius", base.helix_radius),
        packing_factor=get_float(geometry, "packing_factor", base.packing_factor),
        min_volume=get_float(node, "min_volume", base.min_volume),
        min_boundary=get_int(node, "min_boundary", base.min_boundary),
        catalytic_ion_fraction=get_float(vote, "catalytic_ion", base.catalytic_ion_fraction),
        catalytic_tertiary_fraction=get_float(vote, "catalytic_tertiary", base.catalytic_tertiary_fraction),
        binding_edge_fraction=get_float(vote, "binding_edge", base.binding_edge_fraction),
        structural_tertiary_fraction=get_float(vote, "structural_tertiary", base.structural_tertiary_fraction),
    )

    if params.min_boundary < 4:
        raise InvalidInputError("pockets.min_boundary must be at least 4.")
    if min(params.rise_per_base, params.helix_radius, params.packing_factor) <= 0:
        raise InvalidInputError("Pocket geometry constants must be positive.")
    return params

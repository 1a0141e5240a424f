from __future__ import annotations
import logging
import math
from typing import Dict, Hashable, List, Mapping, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from rna_topology.errors import InvalidInputError
from rna_topology.pairing.predictor import DeclaredPairing, predict_pairs
from rna_topology.params.param_types import DEFAULT_PARAMS, TopologyParams
from rna_topology.structures.features import PersistenceFeature
from rna_topology.structures.molecule import Molecule
from rna_topology.structures.pairing import PairingTable
from rna_topology.topology.complex_builder import build_complex
from rna_topology.topology.homology import connected_components
from rna_topology.topology.loops import classify_loops
from rna_topology.topology.pockets import find_pockets

logger = logging.getLogger(__name__)

Filtration = Union[Mapping[int, float], Sequence[float]]

COMPONENT_KIND = "component"


def position_filtration(molecule: Molecule) -> Dict[int, float]:
    """Each position enters at its own index: `{p: float(p)}`."""
    return {pos: float(pos) for pos in molecule.positions()}


def bucketed_filtration(molecule: Molecule, window: int) -> Dict[int, float]:
    """
    Position filtration coarsened into windows of `window` nucleotides.

    Positions `1..window` enter together at level `window`, the next window at
    `2 * window`, and so on, so a molecule of length `n` has
    `ceil(n / window)` levels.

    Raises
    ------
    InvalidInputError
        If `window` is smaller than 1.
    """
    if window < 1:
        raise InvalidInputError(f"Filtration window must be at least 1, got {window}.")
    return {pos: float(((pos - 1) // window + 1) * window) for pos in molecule.positions()}


def _normalise_filtration(molecule: Molecule, filtration: Filtration) -> Dict[int, float]:
    n = molecule.length
    if isinstance(filtration, Mapping):
        values = {int(pos): float(v) for pos, v in filtration.items()}
        missing = [pos for pos in molecule.positions() if pos not in values]
        extra = [pos for pos in values if not 1 <= pos <= n]
        if missing or extra:
            raise InvalidInputError(
                f"Filtration must assign a value to exactly positions 1..{n} "
                f"(missing={missing[:5]}, unknown={extra[:5]})."
            )
    else:
        if len(filtration) != n:
            raise InvalidInputError(f"Expected {n} filtration values, got {len(filtration)}.")
        values = {pos: float(v) for pos, v in zip(molecule.positions(), filtration)}

    if any(math.isnan(v) for v in values.values()):
        raise InvalidInputError("Filtration values must not be NaN.")
    return values


def _level_features(
    molecule: Molecule,
    table: PairingTable,
    included: List[int],
    params: TopologyParams,
) -> Dict[Hashable, Tuple[int, Tuple[int, ...], str]]:
    """Identity key → (dimension, generator, kind) of every feature at one level."""
    sub_table = table.restricted_to(included)
    cx = build_complex(molecule, sub_table, included)
    keep = set(included)
    features: Dict[Hashable, Tuple[int, Tuple[int, ...], str]] = {}

    for component in connected_components(cx):
        features[(COMPONENT_KIND, component)] = (0, component, COMPONENT_KIND)

    for loop in classify_loops(molecule, sub_table):
        if keep.issuperset(loop.positions):
            features[(loop.positions, loop.loop_type.value)] = (1, loop.positions, loop.loop_type.value)

    for pocket in find_pockets(cx, molecule, params):
        features[(pocket.boundary, pocket.function.value)] = (2, pocket.boundary, pocket.function.value)

    return features


def compute_persistence(
    molecule: Molecule,
    filtration: Filtration,
    table: Optional[PairingTable] = None,
    declared: Optional[DeclaredPairing] = None,
    params: Optional[TopologyParams] = None,
    verbose: bool = False,
) -> List[PersistenceFeature]:
    """
    Persistence diagram of a molecule over a vertex filtration.

    For each distinct filtration value `v` (ascending) the induced subcomplex
    on positions with value `<= v` is built, with the pairing table restricted
    to pairs whose both ends are included, and its features are collected:
    components (H0), loops lying on included positions (H1) and pockets (H2).

    A feature is identified by its key: the component vertex set, the loop
    positions and type, or the pocket boundary and function. It is born at the
    first level its key appears and dies at the first later level where the
    key is absent. A key that dies is not revived if it reappears. Features
    alive at the last level never die (`death = inf`).

    Parameters
    ----------
    molecule : Molecule
        The molecule snapshot.
    filtration : Mapping[int, float] | Sequence[float]
        Entry value of every position, as a mapping over `1..n` or a sequence
        of `n` values.
    table : Optional[PairingTable]
        Pairing of the full molecule. Predicted once when omitted.
    declared : Optional[DeclaredPairing]
        Declared partners used when `table` is omitted.
    params : Optional[TopologyParams]
        Engine parameters, by default `DEFAULT_PARAMS`.
    verbose : bool
        Show a progress bar over levels.

    Returns
    -------
    List[PersistenceFeature]
        Sorted by descending persistence (infinite first); ties keep birth order.

    Raises
    ------
    InvalidInputError
        If the filtration does not cover the molecule or contains NaN.
    """
    params = params or DEFAULT_PARAMS
    values = _normalise_filtration(molecule, filtration)
    if molecule.length == 0:
        return []

    if table is None:
        table = predict_pairs(molecule, declared=declared, params=params)
    elif table.length != molecule.length:
        raise InvalidInputError(
            f"Pairing table covers {table.length} positions, molecule has {molecule.length}."
        )

    levels = sorted(set(values.values()))
    alive: Dict[Hashable, Tuple[float, int, Tuple[int, ...], str]] = {}
    retired = set()
    diagram: List[PersistenceFeature] = []

    show_progress = verbose or logger.isEnabledFor(logging.INFO)
    for level in tqdm(levels, desc="Persistence", leave=False, disable=not show_progress):
        included = sorted(pos for pos, v in values.items() if v <= level)
        current = _level_features(molecule, table, included, params)

        for key in [k for k in alive if k not in current]:
            birth, dim, generator, kind = alive.pop(key)
            diagram.append(PersistenceFeature(dim, birth, level, generator, kind))
            retired.add(key)

        for key, (dim, generator, kind) in current.items():
            if key not in alive and key not in retired:
                alive[key] = (level, dim, generator, kind)

        logger.debug(
            f"Level {level:g}: {len(included)} vertices, {len(current)} features, {len(alive)} alive"
        )

    for birth, dim, generator, kind in alive.values():
        diagram.append(PersistenceFeature(dim, birth, math.inf, generator, kind))

    diagram.sort(key=lambda feature: feature.birth)
    diagram.sort(key=lambda feature: -feature.persistence)
    return diagram

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Dict, Mapping, Optional, Tuple

from rna_topology.errors import InvalidInputError
from rna_topology.pairing.nussinov_recurrences import NussinovFoldingConfig, NussinovFoldingEngine
from rna_topology.pairing.nussinov_traceback import traceback_nussinov
from rna_topology.pairing.scoring import build_score_matrix
from rna_topology.params.param_types import DEFAULT_PARAMS, TopologyParams
from rna_topology.structures.molecule import Molecule
from rna_topology.structures.pairing import BasePair, PairingMode, PairingTable
from rna_topology.utils.dotbracket_utils import dotbracket_to_pairs

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeclaredPairing:
    """
    Caller-supplied base partners, selecting pass-through pairing.

    Partners are 1-indexed `(a, b)` tuples in either orientation. Duplicates
    and mirrored duplicates are allowed here and collapsed by `predict_pairs`.

    Attributes
    ----------
    partners : Tuple[Tuple[int, int], ...]
        Declared partner tuples.
    """
    partners: Tuple[Tuple[int, int], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "partners", tuple((int(a), int(b)) for a, b in self.partners))

    @classmethod
    def from_partner_map(cls, partner_of: Mapping[int, int]) -> DeclaredPairing:
        """
        Build from a per-position partner mapping, e.g. `{1: 9, 9: 1}`.

        Both directions may be present; an asymmetric mapping is rejected later
        as a position with two partners.
        """
        return cls(tuple(partner_of.items()))

    @classmethod
    def from_dot_bracket(cls, db: str) -> DeclaredPairing:
        """Parse a (multilayer) dot-bracket string into declared partners."""
        return cls(tuple(sorted(dotbracket_to_pairs(db))))


def predict_pairs(
    molecule: Molecule,
    declared: Optional[DeclaredPairing] = None,
    params: Optional[TopologyParams] = None,
    config: Optional[NussinovFoldingConfig] = None,
) -> PairingTable:
    """
    Produce the pairing table of a molecule.

    When `declared` is given the partners are passed through unchanged
    (crossing structures included). Otherwise pairs are computed with the
    Nussinov DP over conformational compatibility scores; computed tables
    never contain crossing pairs.

    Parameters
    ----------
    molecule : Molecule
        The molecule to pair.
    declared : Optional[DeclaredPairing]
        Explicit partners selecting pass-through mode.
    params : Optional[TopologyParams]
        Engine parameters, by default `DEFAULT_PARAMS`.
    config : Optional[NussinovFoldingConfig]
        Progress display settings of the DP.

    Returns
    -------
    PairingTable
        A matching over positions `1..n`.

    Raises
    ------
    InvalidInputError
        Pass-through only: a declared position outside `1..n`, a self-pair, or
        a position declared with two different partners.
    """
    if declared is not None:
        return pass_through_pairs(molecule, declared)
    return computed_pairs(molecule, params, config)


def pass_through_pairs(molecule: Molecule, declared: DeclaredPairing) -> PairingTable:
    """Collect declared partners into a matching, accepting each pair once."""
    n = molecule.length
    partner: Dict[int, int] = {}
    pairs = []

    for a, b in declared.partners:
        for pos in (a, b):
            if not 1 <= pos <= n:
                raise InvalidInputError(f"Declared partner ({a}, {b}) lies outside positions 1..{n}.")
        if a == b:
            raise InvalidInputError(f"Position {a} is declared as paired with itself.")

        known_a, known_b = partner.get(a), partner.get(b)
        if known_a == b and known_b == a:
            continue
        if known_a is not None or known_b is not None:
            clash = a if known_a is not None else b
            raise InvalidInputError(f"Position {clash} is declared with two different partners.")

        partner[a] = b
        partner[b] = a
        pairs.append(BasePair.of(a, b))

    table = PairingTable(length=n, pairs=tuple(pairs), mode=PairingMode.DECLARED)
    logger.debug(f"Pass-through pairing: {len(table)} pairs, crossing={table.has_crossing()}")
    return table


def computed_pairs(
    molecule: Molecule,
    params: Optional[TopologyParams] = None,
    config: Optional[NussinovFoldingConfig] = None,
) -> PairingTable:
    """Predict a nested pairing by score-maximising DP and traceback."""
    params = params or DEFAULT_PARAMS
    config = config or NussinovFoldingConfig()

    if molecule.length == 0:
        return PairingTable.empty(0, mode=PairingMode.COMPUTED)

    score = build_score_matrix(molecule, params.pairing)
    engine = NussinovFoldingEngine(params=params.pairing, config=config)
    state = engine.fill_matrix(score)
    result = traceback_nussinov(state, params.pairing)

    table = PairingTable(
        length=molecule.length,
        pairs=tuple(BasePair(i + 1, j + 1) for i, j in result.pairs),
        mode=PairingMode.COMPUTED,
    )
    logger.debug(f"Computed pairing: {len(table)} pairs {result.dot_bracket}")
    return table

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class LoopType(str, Enum):
    HAIRPIN = "hairpin"
    BULGE = "bulge"
    INTERNAL = "internal"
    JUNCTION = "junction"
    PSEUDOKNOT = "pseudoknot"


class PocketFunction(str, Enum):
    BINDING = "binding"
    CATALYTIC = "catalytic"
    STRUCTURAL = "structural"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Loop:
    """
    A typed H1 feature: a run (or pooled runs) of unpaired positions.

    Attributes
    ----------
    positions : Tuple[int, ...]
        Sorted unpaired positions. May be empty only for a pseudoknot whose
        crossing stems leave no unpaired nucleotide between them.
    loop_type : LoopType
        Structural classification.
    field_signature : int
        XOR of the tags of the loop positions.
    """
    positions: Tuple[int, ...]
    loop_type: LoopType
    field_signature: int = 0

    @property
    def key(self) -> Tuple[int, ...]:
        """Canonical position-set identity used for de-duplication."""
        return self.positions


@dataclass(frozen=True, slots=True)
class Pocket:
    """
    A typed H2 feature built from a 2-cycle of the complex.

    Attributes
    ----------
    boundary : Tuple[int, ...]
        Sorted vertex positions of the 2-cycle (at least four).
    volume : float
        Closed-form volume estimate in cubic Ångström.
    function : PocketFunction
        Vote over the boundary's conformational flags.
    """
    boundary: Tuple[int, ...]
    volume: float
    function: PocketFunction


@dataclass(frozen=True, slots=True)
class Homology:
    """
    Homology record of one (molecule, pairing table) snapshot.

    Attributes
    ----------
    h0 : int
        Number of connected components.
    h1 : Tuple[Loop, ...]
        Classified loops.
    h2 : Tuple[Pocket, ...]
        Classified pockets.
    """
    h0: int
    h1: Tuple[Loop, ...] = ()
    h2: Tuple[Pocket, ...] = ()

    @property
    def betti_numbers(self) -> Tuple[int, int, int]:
        return self.h0, len(self.h1), len(self.h2)


@dataclass(frozen=True, slots=True)
class PersistenceFeature:
    """
    One point of a persistence diagram.

    Attributes
    ----------
    dimension : int
        0 (component), 1 (loop) or 2 (pocket).
    birth : float
        Filtration value at which the feature first appears.
    death : float
        Filtration value at which it first disappears; `math.inf` if it
        survives to the last level.
    generator : Tuple[int, ...]
        Representative positions.
    kind : str
        "component", a loop type, or a pocket function.
    """
    dimension: int
    birth: float
    death: float
    generator: Tuple[int, ...]
    kind: str

    @property
    def persistence(self) -> float:
        return self.death - self.birth

    @property
    def is_infinite(self) -> bool:
        return self.death == float("inf")

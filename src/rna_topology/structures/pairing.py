from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple

from rna_topology.errors import InvalidInputError
from rna_topology.utils.dotbracket_utils import pairs_to_multilayer_dotbracket


@dataclass(frozen=True, slots=True, order=True)
class BasePair:
    """
    Immutable 1-indexed base pair `(i, j)` with `i < j`.

    Parameters
    ----------
    base_i : int
        5' position (1-based).
    base_j : int
        3' position (1-based), must satisfy `base_j > base_i`.

    Notes
    -----
    - `span` is the inclusive length (j - i + 1).
    - `loop_len` is the number of nts strictly between `i` and `j` (`j - i - 1`).
    """
    base_i: int
    base_j: int

    def __post_init__(self) -> None:
        if self.base_i >= self.base_j:
            raise InvalidInputError(f"BasePair requires i < j, got ({self.base_i}, {self.base_j}).")

    @classmethod
    def of(cls, a: int, b: int) -> BasePair:
        """Build a pair from two positions given in either order."""
        return cls(a, b) if a < b else cls(b, a)

    @property
    def span(self) -> int:
        """Inclusive span length, ``j - i + 1``."""
        return self.base_j - self.base_i + 1

    @property
    def loop_len(self) -> int:
        """Number of positions enclosed by the pair, ``j - i - 1``."""
        return self.base_j - self.base_i - 1

    def as_tuple(self) -> tuple[int, int]:
        return self.base_i, self.base_j

    def encloses(self, other: BasePair) -> bool:
        """True when `other` is strictly nested inside this pair."""
        return self.base_i < other.base_i and other.base_j < self.base_j

    def encloses_position(self, pos: int) -> bool:
        return self.base_i < pos < self.base_j

    def crosses(self, other: BasePair) -> bool:
        """
        True for the crossing patterns ``i1 < i2 < j1 < j2`` and its mirror.

        Crossing pairs cannot be drawn without intersecting arcs; they are the
        signature of a pseudoknot.
        """
        a, b = self, other
        return (a.base_i < b.base_i < a.base_j < b.base_j) or (b.base_i < a.base_i < b.base_j < a.base_j)


class PairingMode(Enum):
    """How a `PairingTable` was produced."""
    COMPUTED = "computed"
    DECLARED = "declared"


@dataclass(frozen=True, slots=True)
class PairingTable:
    """
    An immutable matching of base pairs over a molecule of length `length`.

    No position appears in more than one pair. The table is the single
    source of truth for "paired" / "unpaired" in every downstream view.

    Attributes
    ----------
    length : int
        Number of nucleotides in the molecule the table describes.
    pairs : Tuple[BasePair, ...]
        Pairs sorted by 5' position.
    mode : PairingMode
        Whether the pairs were computed or declared by the caller.
    """
    length: int
    pairs: Tuple[BasePair, ...] = ()
    mode: PairingMode = PairingMode.COMPUTED
    _partner: Dict[int, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.pairs))
        partner: Dict[int, int] = {}
        for pr in ordered:
            i, j = pr.as_tuple()
            if i < 1 or j > self.length:
                raise InvalidInputError(f"Pair ({i}, {j}) lies outside positions 1..{self.length}.")
            for pos in (i, j):
                if pos in partner:
                    raise InvalidInputError(f"Position {pos} appears in more than one pair.")
            partner[i] = j
            partner[j] = i
        object.__setattr__(self, "pairs", ordered)
        object.__setattr__(self, "_partner", partner)

    @classmethod
    def empty(cls, length: int, mode: PairingMode = PairingMode.COMPUTED) -> PairingTable:
        return cls(length=length, pairs=(), mode=mode)

    @classmethod
    def from_tuples(
        cls,
        length: int,
        pairs: Iterable[Tuple[int, int]],
        mode: PairingMode = PairingMode.DECLARED,
    ) -> PairingTable:
        """Build a table from raw `(i, j)` tuples (either orientation)."""
        return cls(length=length, pairs=tuple(BasePair.of(a, b) for a, b in pairs), mode=mode)

    def partner(self, pos: int) -> Optional[int]:
        """Partner of `pos`, or None when unpaired."""
        return self._partner.get(pos)

    def is_paired(self, pos: int) -> bool:
        return pos in self._partner

    def has_crossing(self) -> bool:
        """True when at least two pairs cross (pseudoknotted table)."""
        open_stack: list[int] = []
        for pos in range(1, self.length + 1):
            mate = self._partner.get(pos)
            if mate is None:
                continue
            if mate > pos:
                open_stack.append(mate)
            elif not open_stack or open_stack.pop() != pos:
                return True
        return False

    def restricted_to(self, positions: Iterable[int]) -> PairingTable:
        """Sub-table keeping only the pairs whose both ends are in `positions`."""
        keep = set(positions)
        return PairingTable(
            length=self.length,
            pairs=tuple(pr for pr in self.pairs if pr.base_i in keep and pr.base_j in keep),
            mode=self.mode,
        )

    def to_dot_bracket(self) -> str:
        return pairs_to_multilayer_dotbracket(self.length, (pr.as_tuple() for pr in self.pairs))

    def as_tuples(self) -> list[tuple[int, int]]:
        return [pr.as_tuple() for pr in self.pairs]

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[BasePair]:
        return iter(self.pairs)

from __future__ import annotations
from bisect import bisect_left
from functools import reduce
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from rna_topology.errors import InvalidInputError
from rna_topology.rules import MIN_HAIRPIN_RUN
from rna_topology.structures.features import Loop, LoopType
from rna_topology.structures.molecule import Molecule
from rna_topology.structures.pairing import BasePair, PairingTable
from rna_topology.utils.iter_utils import contiguous_runs

logger = logging.getLogger(__name__)


class NestingIndex:
    """
    Nesting and crossing relations between the pairs of one table.

    Attributes
    ----------
    table : PairingTable
        The indexed table.
    pairs : List[BasePair]
        Pairs sorted by 5' position.
    parent : Dict[BasePair, BasePair]
        Smallest pair strictly enclosing each pair (absent for outermost pairs).
    children : Dict[BasePair, List[BasePair]]
        Pairs whose parent is the key, sorted by 5' position.
    crossing : Dict[BasePair, List[BasePair]]
        Pairs crossing the key.
    """

    def __init__(self, table: PairingTable) -> None:
        self.table = table
        self.pairs: List[BasePair] = list(table.pairs)
        self.parent: Dict[BasePair, BasePair] = {}
        self.children: Dict[BasePair, List[BasePair]] = {pr: [] for pr in self.pairs}
        self.crossing: Dict[BasePair, List[BasePair]] = {pr: [] for pr in self.pairs}

        for pr in self.pairs:
            enclosing = [other for other in self.pairs if other.encloses(pr)]
            if enclosing:
                par = min(enclosing, key=lambda other: other.span)
                self.parent[pr] = par
                self.children[par].append(pr)

        # Sweep: only pairs opening inside `a` can cross it.
        starts = [pr.base_i for pr in self.pairs]
        for idx, a in enumerate(self.pairs):
            stop = bisect_left(starts, a.base_j)
            for b in self.pairs[idx + 1:stop]:
                if b.base_j > a.base_j:
                    self.crossing[a].append(b)
                    self.crossing[b].append(a)

    def unpaired_between(self, lo: int, hi: int) -> List[int]:
        """Unpaired positions strictly between `lo` and `hi`."""
        return [pos for pos in range(lo + 1, hi) if not self.table.is_paired(pos)]

    def is_terminal(self, pr: BasePair) -> bool:
        """True when `pr` encloses at least one position and all of them are unpaired."""
        return pr.loop_len > 0 and len(self.unpaired_between(pr.base_i, pr.base_j)) == pr.loop_len

    def is_nested_region(self, pr: BasePair) -> bool:
        """True when neither `pr` nor its direct children take part in a crossing."""
        return not self.crossing[pr] and not any(self.crossing[child] for child in self.children[pr])

    def free_gap_positions(self, lo: int, hi: int) -> List[int]:
        """
        Unpaired positions strictly between `lo` and `hi` that are not enclosed
        by a pair lying wholly inside the gap.
        """
        covered = set()
        for pr in self.pairs:
            if lo < pr.base_i and pr.base_j < hi:
                covered.update(range(pr.base_i, pr.base_j + 1))
        return [pos for pos in self.unpaired_between(lo, hi) if pos not in covered]


def field_signature(molecule: Molecule, positions: Iterable[int]) -> int:
    """XOR of the signature tags of `positions`; 0 for no positions."""
    return reduce(lambda acc, pos: acc ^ molecule.state(pos).signature, positions, 0)


def classify_loops(molecule: Molecule, table: PairingTable) -> List[Loop]:
    """
    Classify the H1 features (loops) of a paired molecule.

    Passes run in a fixed order:

    1. terminal pairs: hairpin (run >= 4) or bulge,
    2. single-child pairs: internal (both flanks) or bulge (one flank),
    3. multi-child pairs: junction,
    4. pseudoknots: crossing pairs, kissing hairpins and triple crossings,
    5. single-branch domains ending in a short terminal run: internal when
       the pooled unpaired positions form two or more segments.

    Loops are de-duplicated by their position tuple. The first classification
    of a position set is kept, except that an internal classification replaces
    any earlier type.

    Parameters
    ----------
    molecule : Molecule
        Supplies the tags folded into each loop's field signature.
    table : PairingTable
        Pairing over the same molecule.

    Returns
    -------
    List[Loop]
        Loops in discovery order. Every position is unpaired under `table`.

    Raises
    ------
    InvalidInputError
        If the table does not cover the molecule.
    """
    if table.length != molecule.length:
        raise InvalidInputError(
            f"Pairing table covers {table.length} positions, molecule has {molecule.length}."
        )

    index = NestingIndex(table)
    found: Dict[Tuple[int, ...], Loop] = {}

    passes = (
        _terminal_loops,
        _interior_loops,
        _junction_loops,
        _pseudoknot_loops,
        _domain_loops,
    )
    for loop_pass in passes:
        for positions, loop_type in loop_pass(index):
            _record(found, molecule, positions, loop_type)

    loops = list(found.values())
    logger.debug(f"Classified {len(loops)} loops over {len(table)} pairs")
    return loops


def _record(
    found: Dict[Tuple[int, ...], Loop],
    molecule: Molecule,
    positions: Sequence[int],
    loop_type: LoopType,
) -> None:
    key = tuple(sorted(set(positions)))
    previous: Optional[Loop] = found.get(key)
    if previous is not None and not (loop_type is LoopType.INTERNAL and previous.loop_type is not LoopType.INTERNAL):
        return
    found[key] = Loop(positions=key, loop_type=loop_type, field_signature=field_signature(molecule, key))


LoopCandidate = Tuple[List[int], LoopType]


def _terminal_loops(index: NestingIndex) -> Iterator[LoopCandidate]:
    for pr in index.pairs:
        if index.is_terminal(pr):
            run = list(range(pr.base_i + 1, pr.base_j))
            yield run, LoopType.HAIRPIN if len(run) >= MIN_HAIRPIN_RUN else LoopType.BULGE


def _interior_loops(index: NestingIndex) -> Iterator[LoopCandidate]:
    for pr in index.pairs:
        kids = index.children[pr]
        if len(kids) != 1 or not index.is_nested_region(pr):
            continue
        inner = kids[0]
        five_prime = index.unpaired_between(pr.base_i, inner.base_i)
        three_prime = index.unpaired_between(inner.base_j, pr.base_j)
        if five_prime and three_prime:
            yield five_prime + three_prime, LoopType.INTERNAL
        elif five_prime or three_prime:
            yield five_prime or three_prime, LoopType.BULGE


def _junction_loops(index: NestingIndex) -> Iterator[LoopCandidate]:
    for pr in index.pairs:
        kids = index.children[pr]
        if len(kids) < 2 or not index.is_nested_region(pr):
            continue
        pooled = [
            pos for pos in index.unpaired_between(pr.base_i, pr.base_j)
            if not any(kid.encloses_position(pos) for kid in kids)
        ]
        if pooled:
            yield pooled, LoopType.JUNCTION


def _pseudoknot_loops(index: NestingIndex) -> Iterator[LoopCandidate]:
    # H-type: i1 < i2 < j1 < j2, positions straddling the two stems.
    for a in index.pairs:
        for b in index.crossing[a]:
            if b.base_i < a.base_i:
                continue
            yield (
                index.free_gap_positions(a.base_i, b.base_i) + index.free_gap_positions(a.base_j, b.base_j),
                LoopType.PSEUDOKNOT,
            )

    # Kissing hairpins: a pair joining the hairpin regions of two terminal closing pairs.
    for kiss in index.pairs:
        left = [x for x in index.crossing[kiss] if x.base_i < kiss.base_i]
        right = [x for x in index.crossing[kiss] if x.base_i > kiss.base_i]
        if not left or not right:
            continue
        outer_a = min(left, key=lambda x: x.span)
        outer_b = min(right, key=lambda x: x.span)
        if outer_a.base_j >= outer_b.base_i:
            continue
        if index.children[outer_a] or index.children[outer_b]:
            continue
        yield (
            index.unpaired_between(outer_a.base_i, outer_a.base_j)
            + index.unpaired_between(outer_b.base_i, outer_b.base_j),
            LoopType.PSEUDOKNOT,
        )

    # Triple crossings around a middle pair crossing both neighbours.
    for mid in index.pairs:
        left = [x for x in index.crossing[mid] if x.base_i < mid.base_i]
        right = [x for x in index.crossing[mid] if x.base_i > mid.base_i]
        for s0 in left:
            for s2 in right:
                if not _is_triple_crossing(s0, mid, s2):
                    continue
                ends = sorted((s0.base_i, s0.base_j, mid.base_i, mid.base_j, s2.base_i, s2.base_j))
                pooled: List[int] = []
                for lo, hi in zip(ends, ends[1:]):
                    pooled.extend(index.free_gap_positions(lo, hi))
                yield pooled, LoopType.PSEUDOKNOT


def _is_triple_crossing(s0: BasePair, s1: BasePair, s2: BasePair) -> bool:
    """Chained crossing (s0 x s1 x s2, s0 before s2) or three mutually interleaved pairs."""
    chained = s0.base_i < s1.base_i < s0.base_j < s2.base_i < s1.base_j < s2.base_j
    interleaved = s0.base_i < s1.base_i < s2.base_i < s0.base_j < s1.base_j < s2.base_j
    return chained or interleaved


def _domain_loops(index: NestingIndex) -> Iterator[LoopCandidate]:
    for head in index.pairs:
        tail = _single_branch_tail(index, head)
        if tail is None or tail.loop_len >= MIN_HAIRPIN_RUN:
            continue
        pooled = index.unpaired_between(head.base_i, head.base_j)
        if len(contiguous_runs(pooled)) >= 2:
            yield pooled, LoopType.INTERNAL


def _single_branch_tail(index: NestingIndex, head: BasePair) -> Optional[BasePair]:
    """Follow single children from `head`; return the childless end, or None on a branch or crossing."""
    current = head
    while True:
        if index.crossing[current]:
            return None
        kids = index.children[current]
        if not kids:
            return current
        if len(kids) > 1:
            return None
        current = kids[0]

from typing import Iterable, Iterator, List, Tuple


def iter_spans(n: int, min_distance: int = 0) -> Iterator[Tuple[int, int]]:
    """
    Iterates through contiguous spans `(i, j)` of a sequence of length `n`.

    Spans are produced by increasing index distance `j - i`, starting at
    `min_distance`, so every sub-span of a span is visited before it.

    Parameters
    ----------
    n : int
        The length of the sequence.
    min_distance : int, optional
        Smallest `j - i` to yield, by default 0.

    Yields
    ------
    Iterator[Tuple[int, int]]
        `(i, j)` tuples with `0 <= i <= j < n`.
    """
    for distance in range(max(min_distance, 0), n):
        for i in range(0, n - distance):
            yield i, i + distance


def contiguous_runs(positions: Iterable[int]) -> List[List[int]]:
    """
    Split positions into maximal runs of consecutive integers.

    Parameters
    ----------
    positions : Iterable[int]
        Positions in any order; duplicates are ignored.

    Returns
    -------
    List[List[int]]
        Sorted runs, e.g. ``[4, 5, 9]`` → ``[[4, 5], [9]]``.
    """
    runs: List[List[int]] = []
    for pos in sorted(set(positions)):
        if runs and pos == runs[-1][-1] + 1:
            runs[-1].append(pos)
        else:
            runs.append([pos])
    return runs

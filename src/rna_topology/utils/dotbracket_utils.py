from __future__ import annotations
from typing import Dict, Iterable, List, Set, Tuple

# Layers → bracket glyphs
BRACKETS: List[Tuple[str, str]] = [('(', ')'), ('[', ']'), ('{', '}'), ('<', '>')]


def assign_layers(pairs: Iterable[Tuple[int, int]]) -> Dict[Tuple[int, int], int]:
    """
    Greedily assign each pair to the lowest bracket layer it does not cross.

    Pairs are visited by their 5' position; a pair goes into layer `L` when it
    crosses no pair already placed in `L`. Nested structures end up entirely
    in layer 0.

    Parameters
    ----------
    pairs : Iterable[Tuple[int, int]]
        Base pairs `(i, j)` with `i < j` (any indexing base).

    Returns
    -------
    Dict[Tuple[int, int], int]
        Mapping of each pair to its layer index.
    """
    layers: List[List[Tuple[int, int]]] = []
    pair_layer: Dict[Tuple[int, int], int] = {}

    for i, j in sorted(pairs):
        for layer_idx, members in enumerate(layers):
            if not any(a < i < b < j or i < a < j < b for a, b in members):
                members.append((i, j))
                pair_layer[(i, j)] = layer_idx
                break
        else:
            layers.append([(i, j)])
            pair_layer[(i, j)] = len(layers) - 1

    return pair_layer


def pairs_to_multilayer_dotbracket(seq_len: int, pairs: Iterable[Tuple[int, int]]) -> str:
    """
    Render 1-indexed pairs as a multilayer dot-bracket string.

    Crossing pairs are pushed to higher layers and drawn with `[]`, `{}`, `<>`.

    Parameters
    ----------
    seq_len : int
        The total length of the RNA sequence.
    pairs : Iterable[Tuple[int, int]]
        1-indexed base pairs `(i, j)` with `i < j`.

    Returns
    -------
    str
        The dot-bracket string.
    """
    pair_list = list(pairs)
    pair_layer = assign_layers(pair_list)
    chars = ['.'] * seq_len
    for i, j in pair_list:
        br_open, br_close = BRACKETS[pair_layer[(i, j)] % len(BRACKETS)]
        if 1 <= i < j <= seq_len:
            chars[i - 1] = br_open
            chars[j - 1] = br_close

    return ''.join(chars)


def dotbracket_to_pairs(db: str) -> Set[Tuple[int, int]]:
    """
    Parse a (multilayer) dot-bracket string into 1-indexed base pairs.

    Every bracket family in `BRACKETS` is matched on its own stack, so
    pseudoknotted strings such as ``"((..[[..))..]]"`` are supported.
    Unbalanced closing brackets are ignored.

    Parameters
    ----------
    db : str
        The dot-bracket string to parse.

    Returns
    -------
    Set[Tuple[int, int]]
        Set of `(i, j)` pairs, 1-indexed, with `i < j`.
    """
    openers = {br_open: idx for idx, (br_open, _) in enumerate(BRACKETS)}
    closers = {br_close: idx for idx, (_, br_close) in enumerate(BRACKETS)}
    stacks: List[List[int]] = [[] for _ in BRACKETS]
    out: Set[Tuple[int, int]] = set()

    for idx, ch in enumerate(db, start=1):
        if ch in openers:
            stacks[openers[ch]].append(idx)
        elif ch in closers:
            stack = stacks[closers[ch]]
            if stack:
                out.add((stack.pop(), idx))
    return out

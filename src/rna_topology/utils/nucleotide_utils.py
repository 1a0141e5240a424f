def normalize_base(base_raw: str) -> str:
    """
    Upper-case a nucleotide base and map T->U so RNA logic can be applied uniformly.

    Parameters
    ----------
    base_raw : str
        Raw single-character nucleotide base.

    Returns
    -------
    str
        Normalized base in {A, U, G, C, N}.
    """
    if not isinstance(base_raw, str):
        return base_raw

    if len(base_raw) != 1:
        return base_raw

    base_norm = base_raw.upper()

    return "U" if base_norm == "T" else base_norm


def pair_key(base_a: str, base_b: str) -> str:
    """
    Build a two-letter base-pair key (RNA-normalized).

    Concatenates two single-character nucleotides after normalization
    (uppercase; "T" → "U") to form a key such as "AU" or "GC".

    Parameters
    ----------
    base_a : str
        First nucleotide (single character).
    base_b : str
        Second nucleotide (single character).

    Returns
    -------
    str
        Two-character key representing the pair, e.g., ``"AU"`` or ``"GU"``.
    """
    return normalize_base(base_a) + normalize_base(base_b)

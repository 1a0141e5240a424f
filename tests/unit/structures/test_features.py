"""
Unit tests for the derived feature records.
"""
import math

from rna_topology.structures.features import (
    Homology,
    Loop,
    LoopType,
    PersistenceFeature,
    Pocket,
    PocketFunction,
)


def test_loop_key_is_position_tuple():
    loop = Loop(positions=(5, 6, 7, 8), loop_type=LoopType.HAIRPIN)
    assert loop.key == (5, 6, 7, 8)
    assert loop.field_signature == 0
    assert LoopType.HAIRPIN.value == "hairpin"


def test_homology_betti_numbers():
    loops = (Loop((4,), LoopType.BULGE), Loop((9, 10), LoopType.BULGE))
    pockets = (Pocket((1, 5, 9, 13), 1359.0, PocketFunction.UNKNOWN),)
    assert Homology(h0=1, h1=loops, h2=pockets).betti_numbers == (1, 2, 1)
    assert Homology(h0=0).betti_numbers == (0, 0, 0)


def test_persistence_feature_properties():
    finite = PersistenceFeature(0, 2.0, 5.0, (1, 2), "component")
    forever = PersistenceFeature(0, 3.0, math.inf, (1, 2, 3), "component")
    assert finite.persistence == 3.0
    assert not finite.is_infinite
    assert forever.is_infinite
    assert math.isinf(forever.persistence)

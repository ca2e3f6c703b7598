# tests/unit/fec/test_gf2.py
from __future__ import annotations

import random

import pytest

from convcode.errors import LengthMismatch
from convcode.fec.gf2 import hamming_distance, inner_product_mod2


def test_inner_product_known_values():
    assert inner_product_mod2([1, 1, 1], [1, 0, 0]) == 1
    assert inner_product_mod2([1, 1, 1], [1, 1, 0]) == 0
    assert inner_product_mod2("110", "011") == 1
    assert inner_product_mod2([], []) == 0


def test_inner_product_is_exact_on_long_vectors():
    a = [1] * 1001
    assert inner_product_mod2(a, a) == 1


def test_hamming_known_values():
    assert hamming_distance("0000", "1111") == 4
    assert hamming_distance([1, 0, 1], "100") == 1
    assert hamming_distance([], []) == 0


def test_hamming_symmetry_and_identity():
    rng = random.Random(7)
    for _ in range(50):
        n = rng.randrange(0, 40)
        a = [rng.getrandbits(1) for _ in range(n)]
        b = [rng.getrandbits(1) for _ in range(n)]
        assert hamming_distance(a, b) == hamming_distance(b, a)
        assert hamming_distance(a, a) == 0


@pytest.mark.parametrize("fn", [hamming_distance, inner_product_mod2])
def test_length_mismatch(fn):
    with pytest.raises(LengthMismatch):
        fn([1, 0], [1, 0, 1])


def test_length_mismatch_is_a_value_error():
    with pytest.raises(ValueError):
        hamming_distance("1", "")

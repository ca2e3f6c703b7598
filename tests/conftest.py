from __future__ import annotations

import random

import pytest

from convcode.fec.code import ConvolutionalCode


# K=3, G0=111, G1=110 and its hand-written transition table:
# state -> [(new state, output) for input 0, ... for input 1]
EXAMPLE_K = 3
EXAMPLE_GENERATORS = ([1, 1, 1], [1, 1, 0])
EXAMPLE_FSA = {
    "00": [("00", "00"), ("10", "11")],
    "01": [("00", "10"), ("10", "01")],
    "10": [("01", "11"), ("11", "00")],
    "11": [("01", "01"), ("11", "10")],
}


@pytest.fixture
def example_code() -> ConvolutionalCode:
    return ConvolutionalCode(EXAMPLE_K, EXAMPLE_GENERATORS)


def rand_bits(rng: random.Random, n: int) -> list[int]:
    return [rng.getrandbits(1) for _ in range(n)]


def flip_positions(bits: list[int], positions) -> list[int]:
    out = bits[:]
    for p in positions:
        out[p] ^= 1
    return out

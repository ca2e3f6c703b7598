# src/convcode/fec/gf2.py
from __future__ import annotations

from typing import Any, Tuple

import numpy as np

from convcode.errors import LengthMismatch
from convcode.utils.bitops import to_bits


def _pair(a: Any, b: Any, *, op: str) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(to_bits(a), dtype=np.int64)
    y = np.asarray(to_bits(b), dtype=np.int64)
    if x.size != y.size:
        raise LengthMismatch(f"{op}: operand lengths differ ({x.size} != {y.size})")
    return x, y


def inner_product_mod2(a: Any, b: Any) -> int:
    """
    Mod-2 inner product: elementwise multiply, sum, reduce mod 2.
    """
    x, y = _pair(a, b, op="inner_product_mod2")
    return int(np.dot(x, y)) & 1


def hamming_distance(a: Any, b: Any) -> int:
    """
    Number of positions where a and b differ.
    """
    x, y = _pair(a, b, op="hamming_distance")
    return int(np.count_nonzero(x != y))

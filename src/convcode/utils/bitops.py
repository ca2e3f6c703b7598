# src/convcode/utils/bitops.py
from __future__ import annotations

from typing import Any, List, Sequence

import numpy as np

from convcode.errors import InvalidBitSequence


def to_bits(word: Any) -> List[int]:
    """
    Normalize a bit sequence to a list of 0/1 ints.

    Accepts a str of '0'/'1' characters, any sequence of 0/1 ints (bools too),
    or a numpy array. Everything inside convcode runs on the returned list.
    """
    if isinstance(word, str):
        bad = set(word) - {"0", "1"}
        if bad:
            raise InvalidBitSequence(f"bit string may only contain '0'/'1', got {sorted(bad)!r}")
        return [1 if c == "1" else 0 for c in word]

    if isinstance(word, (bytes, bytearray)):
        raise InvalidBitSequence("bytes are not a bit sequence; unpack them with bytes_to_bits()")

    try:
        arr = np.asarray(word)
    except (TypeError, ValueError) as e:
        raise InvalidBitSequence(f"cannot interpret {type(word).__name__} as bits") from e

    if arr.size == 0:
        return []
    if arr.ndim != 1:
        raise InvalidBitSequence(f"bits must be one-dimensional, got shape {arr.shape}")
    if arr.dtype.kind not in "biu":
        raise InvalidBitSequence(f"bits must be integers, got dtype {arr.dtype}")
    if np.any((arr != 0) & (arr != 1)):
        raise InvalidBitSequence("bits must contain only 0/1")

    return arr.astype(np.uint8).tolist()


def bits_to_str(bits: Sequence[int]) -> str:
    return "".join("1" if b else "0" for b in bits)


def bytes_to_bits(data: bytes) -> List[int]:
    # MSB-first
    out: List[int] = []
    for x in data:
        for i in range(7, -1, -1):
            out.append((x >> i) & 1)
    return out


def bits_to_bytes(bits: Sequence[int]) -> bytes:
    """
    Pack bits MSB-first. A trailing partial byte is padded with zeros.
    """
    n = len(bits)
    if n == 0:
        return b""
    pad = (-n) % 8
    if pad:
        bits = list(bits) + [0] * pad

    out = bytearray(len(bits) // 8)
    for bi in range(0, len(bits), 8):
        v = 0
        for j in range(8):
            v = (v << 1) | (bits[bi + j] & 1)
        out[bi // 8] = v
    return bytes(out)

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Tuple

from convcode.fec.code import ConvolutionalCode
from convcode.utils.bitops import bits_to_bytes, bytes_to_bits


@dataclass(frozen=True)
class Config:
    """
    Bit-level convolutional FEC (rate 1/n) with hard-decision Viterbi.

    Input/Output of tx/rx are BYTES, interpreted as a packed bitstream.

    Bit order:
      - bytes are expanded MSB-first: bit7, bit6, ..., bit0
      - encoded bits are packed MSB-first into output bytes

    tail:
      - if True, encoder appends K-1 zeros so the trellis ends in state 0;
        decoder strips those K-1 bits
      - if False, no flush bits are sent

    Defaults are the K=3, (111, 110) code.
    """
    constraint_length: int = 3
    generators: Tuple[str, ...] = ("111", "110")
    tail: bool = True


def tx(data: bytes, *, cfg: Any) -> bytes:
    """
    Encode packed bits (from data bytes) into packed bits (bytes).
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("tx: data must be bytes-like")

    code = _get_code(cfg)
    tail = _get_tail(cfg)

    bits = bytes_to_bits(bytes(data))
    if tail:
        bits.extend([0] * code.memory)
    return bits_to_bytes(code.encode(bits))


def rx(data: bytes, *, cfg: Any) -> bytes:
    """
    Decode packed encoded bits (bytes) back into packed original bits (bytes).
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("rx: data must be bytes-like")

    code = _get_code(cfg)
    tail = _get_tail(cfg)

    rx_bits = bytes_to_bits(bytes(data))

    # tx() zero-pads the last byte; drop that before splitting into blocks
    pad_bits = _enc_pad_bits(code, tail=tail)
    if pad_bits:
        if len(rx_bits) < pad_bits:
            raise ValueError("rx: encoded stream too short")
        rx_bits = rx_bits[:-pad_bits]

    dec_bits = code.decode(rx_bits)

    if tail:
        if len(dec_bits) < code.memory:
            raise ValueError("rx: encoded stream shorter than the tail")
        dec_bits = dec_bits[: len(dec_bits) - code.memory]

    if len(dec_bits) % 8 != 0:
        raise ValueError("rx: decoded bit length not byte-aligned")

    return bits_to_bytes(dec_bits)


def encoded_bit_length(n_bytes: int, *, cfg: Any) -> int:
    """
    Number of code bits tx() produces for n_bytes of payload, before byte padding.
    """
    code = _get_code(cfg)
    n_in = 8 * n_bytes + (code.memory if _get_tail(cfg) else 0)
    return code.n * n_in


# ----------------------------
# Internal
# ----------------------------

def _enc_pad_bits(code: ConvolutionalCode, *, tail: bool) -> int:
    """
    Zeros tx() adds at the end of the encoded stream to byte-align it.

    Encoded bits = n*8*L + n*(K-1 if tail), so the pad is
    (-n*(K-1)) mod 8 with tail and 0 without, independent of L.
    """
    if not tail:
        return 0
    return (-code.n * code.memory) % 8


@lru_cache(maxsize=32)
def _code_for(constraint_length: int, generators: Tuple[Any, ...]) -> ConvolutionalCode:
    return ConvolutionalCode(constraint_length, generators)


def _get_code(cfg: Any) -> ConvolutionalCode:
    k = getattr(cfg, "constraint_length", None)
    gens = getattr(cfg, "generators", None)

    if k is None:
        raise AttributeError("cfg missing required attribute: constraint_length")
    if gens is None:
        raise AttributeError("cfg missing required attribute: generators")
    if isinstance(k, bool) or not isinstance(k, int):
        raise TypeError("cfg.constraint_length must be int")
    if isinstance(gens, str) or not isinstance(gens, (tuple, list)):
        raise TypeError("cfg.generators must be a tuple of generator strings")

    key = tuple(g if isinstance(g, str) else tuple(g) for g in gens)
    return _code_for(k, key)


def _get_tail(cfg: Any) -> bool:
    tail = getattr(cfg, "tail", None)
    if tail is None:
        raise AttributeError("cfg missing required attribute: tail")
    if not isinstance(tail, bool):
        raise TypeError("cfg.tail must be bool")
    return tail

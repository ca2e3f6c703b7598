# src/convcode/fec/code.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Iterable, List, Tuple

from convcode.errors import InvalidBitSequence, InvalidParameters, LengthMismatch
from convcode.fec import viterbi
from convcode.fec.fsa import FSA, build_fsa, start_state, state_space, window_output
from convcode.utils.bitops import to_bits

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CodeParams:
    """
    Constraint length k and n generator polynomials of k coefficients each.

    Coefficient 0 of a generator multiplies the newest input bit, coefficient
    k-1 the oldest one in memory. Generators may be given as '0'/'1' strings
    or 0/1 sequences; they are stored as tuples of ints.
    """
    constraint_length: int
    generators: Tuple[Tuple[int, ...], ...]

    def __post_init__(self) -> None:
        k = self.constraint_length
        if isinstance(k, bool) or not isinstance(k, int):
            raise InvalidParameters("constraint_length must be int")
        if k < 1:
            raise InvalidParameters(f"constraint_length must be >= 1, got {k}")

        try:
            items = tuple(self.generators)
        except TypeError as e:
            raise InvalidParameters("generators must be an iterable of polynomials") from e

        gens = []
        for i, g in enumerate(items):
            try:
                bits = tuple(to_bits(g))
            except InvalidBitSequence as e:
                raise InvalidParameters(f"generator {i}: {e}") from e
            if len(bits) != k:
                raise InvalidParameters(
                    f"generator {i} has {len(bits)} coefficients, expected constraint_length={k}"
                )
            gens.append(bits)
        if not gens:
            raise InvalidParameters("at least one generator polynomial is required")

        object.__setattr__(self, "generators", tuple(gens))

        degenerate = [i for i, g in enumerate(gens) if g[0] == 0]
        if degenerate:
            logger.warning(
                "generators %s do not tap the newest input bit; decoding may be ambiguous",
                degenerate,
            )

    @classmethod
    def from_octal(cls, constraint_length: int, *octals: int) -> "CodeParams":
        """
        Build from octal generator words, e.g. from_octal(3, 0o7, 0o6) for
        G0=111, G1=110. The most significant of the k bits is coefficient 0.
        """
        k = constraint_length
        gens = []
        for o in octals:
            if not isinstance(o, int) or o < 0 or o >= (1 << k):
                raise InvalidParameters(f"octal generator {o!r} does not fit in {k} bits")
            gens.append(tuple((o >> (k - 1 - i)) & 1 for i in range(k)))
        return cls(constraint_length=k, generators=tuple(gens))

    @property
    def n(self) -> int:
        return len(self.generators)


class ConvolutionalCode:
    """
    Rate 1/n binary convolutional code with hard-decision Viterbi decoding.

    The FSA is built once here and shared by every encode/decode call.

    >>> code = ConvolutionalCode(3, ["111", "110"])
    >>> code.encode([1, 0, 1, 1])
    [1, 1, 1, 1, 0, 1, 0, 0]
    """

    def __init__(self, constraint_length: int, generators: Iterable[Any]):
        if isinstance(generators, (str, bytes)):
            raise InvalidParameters("generators must be a collection of polynomials, not a single string")
        try:
            gens = tuple(generators)
        except TypeError as e:
            raise InvalidParameters(
                f"generators must be an iterable of polynomials, got {type(generators).__name__}"
            ) from e
        self.params = CodeParams(constraint_length=constraint_length, generators=gens)
        self._fsa = build_fsa(self.k, self.params.generators)

    @classmethod
    def from_params(cls, params: CodeParams) -> "ConvolutionalCode":
        return cls(params.constraint_length, params.generators)

    def __repr__(self) -> str:
        gens = ", ".join("".join(map(str, g)) for g in self.generators)
        return f"ConvolutionalCode(k={self.k}, generators=[{gens}])"

    # ----------------------------
    # Derived parameters
    # ----------------------------

    @property
    def k(self) -> int:
        return self.params.constraint_length

    @property
    def generators(self) -> Tuple[Tuple[int, ...], ...]:
        return self.params.generators

    @property
    def n(self) -> int:
        return self.params.n

    @property
    def memory(self) -> int:
        return self.k - 1

    @property
    def rate(self) -> Fraction:
        return Fraction(1, self.n)

    @property
    def num_states(self) -> int:
        return 1 << self.memory

    @property
    def start_state(self) -> str:
        return start_state(self.k)

    @property
    def states(self) -> List[str]:
        return state_space(self.k)

    @property
    def fsa(self) -> FSA:
        return self._fsa

    # ----------------------------
    # Encoder
    # ----------------------------

    def output(self, window: Any) -> List[int]:
        """
        n-bit output block for one k-bit window (newest bit first).
        """
        w = to_bits(window)
        if len(w) != self.k:
            raise LengthMismatch(f"window must have {self.k} bits, got {len(w)}")
        return list(window_output(self.generators, w))

    def encode(self, word: Any) -> List[int]:
        """
        Encode from the all-zero state. Returns n * len(word) bits.
        """
        bits = to_bits(word)
        k = self.k
        padded = bits[::-1] + [0] * (k - 1)

        out: List[int] = []
        for i in range(len(padded) - k, -1, -1):
            out.extend(window_output(self.generators, padded[i : i + k]))
        return out

    # ----------------------------
    # Decoder
    # ----------------------------

    def next_paths(self, path: viterbi.Path, block: Any) -> Tuple[viterbi.Path, viterbi.Path]:
        b = to_bits(block)
        if len(b) != self.n:
            raise LengthMismatch(f"block must have {self.n} bits, got {len(b)}")
        return viterbi.extend(path, self._fsa, b)

    def decode(self, received: Any) -> List[int]:
        """
        Most likely input sequence for received (a whole number of n-bit blocks).
        """
        rx = to_bits(received)
        return viterbi.viterbi_decode(self._fsa, self.n, rx, start_state=self.start_state)

# src/convcode/fec/fsa.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple

from convcode.utils.bitops import bits_to_str

logger = logging.getLogger(__name__)

# state -> (transition on input 0, transition on input 1)
FSA = Mapping[str, Tuple["Transition", "Transition"]]


@dataclass(frozen=True, slots=True)
class Transition:
    new_state: str
    output: Tuple[int, ...]

    @property
    def output_str(self) -> str:
        return bits_to_str(self.output)


def start_state(k: int) -> str:
    return "0" * (k - 1)


def state_space(k: int) -> List[str]:
    """
    All (k-1)-bit states in ascending binary order. The leftmost character is
    the most recent input bit.
    """
    m = k - 1
    if m == 0:
        return [""]
    return [format(i, f"0{m}b") for i in range(1 << m)]


def window_output(generators: Sequence[Sequence[int]], window: Sequence[int]) -> Tuple[int, ...]:
    """
    One output block: the mod-2 inner product of each generator with the
    k-bit window, in generator order.

    Operands are already-normalised 0/1 ints of equal length.
    """
    return tuple(sum(a & b for a, b in zip(g, window)) & 1 for g in generators)


def build_fsa(k: int, generators: Sequence[Sequence[int]]) -> FSA:
    """
    Encoder transition table.

    For state s and input x the window is x ++ s; the new state drops the
    oldest memory bit (window[:k-1]) and the output is window_output(window).
    """
    table = {}
    for s in state_space(k):
        pair = []
        for x in (0, 1):
            window = [x] + [int(c) for c in s]
            pair.append(
                Transition(
                    new_state=bits_to_str(window[: k - 1]),
                    output=window_output(generators, window),
                )
            )
        table[s] = (pair[0], pair[1])

    logger.debug("built FSA: k=%d n=%d states=%d", k, len(generators), len(table))
    return MappingProxyType(table)


def format_fsa(fsa: FSA) -> str:
    """
    Printable transition table, one state per line:

      00 | 0 -> 00/00 | 1 -> 10/11
    """
    lines = []
    for s, (t0, t1) in fsa.items():
        label = s or "-"
        lines.append(
            f"{label} | 0 -> {t0.new_state or '-'}/{t0.output_str} | 1 -> {t1.new_state or '-'}/{t1.output_str}"
        )
    return "\n".join(lines)

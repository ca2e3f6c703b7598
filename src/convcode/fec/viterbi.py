# src/convcode/fec/viterbi.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from convcode.errors import InvalidInputLength, InvalidParameters
from convcode.fec.fsa import FSA
from convcode.fec.gf2 import hamming_distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _HistoryNode:
    bit: int
    prev: Optional["_HistoryNode"]


@dataclass(frozen=True, slots=True)
class Path:
    """
    Decoder survivor: input guesses so far, the FSA state reached, and the
    accumulated Hamming distance to the received blocks.

    history is parent-linked so extending a path never copies it.
    """
    state: str
    distance: int = 0
    length: int = 0
    history: Optional[_HistoryNode] = None

    def extended(self, bit: int, new_state: str, delta: int) -> "Path":
        return Path(
            state=new_state,
            distance=self.distance + delta,
            length=self.length + 1,
            history=_HistoryNode(bit, self.history),
        )

    def bits(self) -> List[int]:
        out: List[int] = []
        node = self.history
        while node is not None:
            out.append(node.bit)
            node = node.prev
        out.reverse()
        return out


def extend(
    path: Path,
    fsa: FSA,
    block: Sequence[int],
    *,
    metric_cache: Optional[Dict[Tuple[int, ...], int]] = None,
) -> Tuple[Path, Path]:
    """
    Both successors of path for one received block (input 0 first).
    """
    out = []
    for x, t in enumerate(fsa[path.state]):
        if metric_cache is None:
            delta = hamming_distance(t.output, block)
        else:
            delta = metric_cache.get(t.output)
            if delta is None:
                delta = hamming_distance(t.output, block)
                metric_cache[t.output] = delta
        out.append(path.extended(x, t.new_state, delta))
    return out[0], out[1]


def prune(candidates: Iterable[Path]) -> List[Path]:
    """
    Keep one survivor per state: the minimum distance.

    Equal distances keep the first candidate seen. Callers feed candidates in
    canonical state order, so a tie goes to the predecessor whose discarded
    memory bit is 0. The result is sorted by state.
    """
    best: Dict[str, Path] = {}
    for p in candidates:
        cur = best.get(p.state)
        if cur is None or p.distance < cur.distance:
            best[p.state] = p
    return [best[s] for s in sorted(best)]


def select_best(paths: Sequence[Path]) -> Path:
    """
    Global minimum distance over all survivors; ties go to the smallest state.
    """
    if not paths:
        raise InvalidParameters("select_best: no survivor paths")
    return min(paths, key=lambda p: (p.distance, p.state))


def step(paths: Sequence[Path], fsa: FSA, block: Sequence[int]) -> List[Path]:
    """
    One trellis step: extend every survivor, then prune.
    """
    cache: Dict[Tuple[int, ...], int] = {}
    candidates: List[Path] = []
    for p in paths:
        candidates.extend(extend(p, fsa, block, metric_cache=cache))
    return prune(candidates)


def viterbi_decode(fsa: FSA, n: int, received: Sequence[int], *, start_state: str) -> List[int]:
    """
    Hard-decision Viterbi over the FSA.

    received: flat 0/1 list, a whole number of n-bit blocks.
    Returns one decoded bit per block. The end state is not forced to zero.
    """
    if n < 1:
        raise InvalidParameters("n must be >= 1")
    if start_state not in fsa:
        raise InvalidParameters(f"start_state {start_state!r} is not an FSA state")
    if len(received) % n != 0:
        raise InvalidInputLength(
            f"received length {len(received)} is not a multiple of n={n}"
        )

    n_steps = len(received) // n
    paths = [Path(state=start_state)]
    for i in range(n_steps):
        block = received[i * n : (i + 1) * n]
        paths = step(paths, fsa, block)

    best = select_best(paths)
    logger.debug(
        "viterbi: blocks=%d survivors=%d best_state=%r distance=%d",
        n_steps,
        len(paths),
        best.state,
        best.distance,
    )
    return best.bits()

# segment_tree.py
# Lazy-propagation segment tree amplitude engine.
#  - node i covers [start, end]; children are 2i and 2i+1, root is 1
#  - each node stores the sum of its range and a pending affine tag
#    x -> mul * x + add that its children have not seen yet
#  - oracle: range update [i, i] with (-1, 0)          O(log N)
#  - diffusion: total sum, then whole range (-1, 2*mean) O(log N)
#  - max index: one push-down pass materializes every leaf, then a scan  O(N)
from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from classical_grover.amplitude import (
    MAX_SIZE,
    AmplitudeVector,
    InvalidIndexError,
    validate_index,
)


class SegmentTreeAmplitude(AmplitudeVector):
    """
    Range-affine / range-sum segment tree over the amplitude vector.

    Tag composition: when a parent tag (mul_p, add_p) is pushed onto a child
    already holding (mul_c, add_c), the child ends up with
    (mul_p * mul_c, mul_p * add_c + add_p), i.e. the parent transform is the
    outer one.

    Signed maxima do not compose under affine tags with negative multipliers,
    so the tree keeps sums only. ``find_max_amplitude_index`` and
    ``all_amplitudes`` therefore push every tag down to the leaves in a single
    O(N) traversal; ``amplitude_at`` is an O(log N) point query.
    """

    name = "segment_tree"

    def __init__(self, max_size: int = MAX_SIZE) -> None:
        super().__init__(max_size)
        self.sums = None
        self.muls = None
        self.adds = None

    # ---------------- engine hooks ----------------
    def _build(self, size: int, initial: float) -> None:
        self.sums = np.zeros(4 * size, dtype=np.float64)
        self.muls = np.ones(4 * size, dtype=np.float64)
        self.adds = np.zeros(4 * size, dtype=np.float64)
        self._build_node(1, 0, size - 1, initial)

    def _negate(self, index: int) -> None:
        self._update(1, 0, self._size - 1, index, index, -1.0, 0.0)

    def _reflect_about_mean(self) -> None:
        last = self._size - 1
        mean = self._query(1, 0, last, 0, last) / self._size
        logging.debug(f"{self.name}: diffusion about mean {mean:.6g}")
        self._update(1, 0, last, 0, last, -1.0, 2.0 * mean)

    def _point(self, index: int) -> float:
        return self._query(1, 0, self._size - 1, index, index)

    def _values(self) -> np.ndarray:
        out = np.empty(self._size, dtype=np.float64)
        self._materialize(1, 0, self._size - 1, out)
        return out

    # ---------------- public range operations ----------------
    def range_affine_update(self, start: int, end: int, mul: float, add: float) -> None:
        """Apply x -> mul * x + add to every amplitude in [start, end]."""
        self._require_initialized()
        self._check_range(start, end)
        self._update(1, 0, self._size - 1, int(start), int(end),
                     float(mul), float(add))

    def range_sum(self, start: int, end: int) -> float:
        """Sum of the amplitudes in [start, end]."""
        self._require_initialized()
        self._check_range(start, end)
        return float(self._query(1, 0, self._size - 1, int(start), int(end)))

    def _check_range(self, start: int, end: int) -> None:
        validate_index(start, self._size)
        validate_index(end, self._size)
        if start > end:
            raise InvalidIndexError(
                f"Range start {start} is after range end {end}")

    # ---------------- tree helpers ----------------
    def _build_node(self, node: int, start: int, end: int, initial: float) -> None:
        if start == end:
            self.sums[node] = initial
            return
        mid = (start + end) // 2
        self._build_node(2 * node, start, mid, initial)
        self._build_node(2 * node + 1, mid + 1, end, initial)
        self.sums[node] = self.sums[2 * node] + self.sums[2 * node + 1]

    def _apply(self, node: int, start: int, end: int, mul: float, add: float) -> None:
        self.sums[node] = mul * self.sums[node] + add * (end - start + 1)
        self.muls[node] *= mul
        self.adds[node] = mul * self.adds[node] + add

    def _tag(self, node: int) -> Tuple[float, float]:
        return self.muls[node], self.adds[node]

    def _push(self, node: int, start: int, end: int) -> None:
        mul, add = self._tag(node)
        if mul == 1.0 and add == 0.0:
            return
        if start != end:
            mid = (start + end) // 2
            self._apply(2 * node, start, mid, mul, add)
            self._apply(2 * node + 1, mid + 1, end, mul, add)
        self.muls[node] = 1.0
        self.adds[node] = 0.0

    def _update(self, node: int, start: int, end: int,
                lo: int, hi: int, mul: float, add: float) -> None:
        self._push(node, start, end)
        if end < lo or start > hi:
            return
        if lo <= start and end <= hi:
            self._apply(node, start, end, mul, add)
            return
        mid = (start + end) // 2
        self._update(2 * node, start, mid, lo, hi, mul, add)
        self._update(2 * node + 1, mid + 1, end, lo, hi, mul, add)
        self.sums[node] = self.sums[2 * node] + self.sums[2 * node + 1]

    def _query(self, node: int, start: int, end: int, lo: int, hi: int) -> float:
        self._push(node, start, end)
        if end < lo or start > hi:
            return 0.0
        if lo <= start and end <= hi:
            return self.sums[node]
        mid = (start + end) // 2
        return (self._query(2 * node, start, mid, lo, hi)
                + self._query(2 * node + 1, mid + 1, end, lo, hi))

    def _materialize(self, node: int, start: int, end: int, out: np.ndarray) -> None:
        self._push(node, start, end)
        if start == end:
            out[start] = self.sums[node]
            return
        mid = (start + end) // 2
        self._materialize(2 * node, start, mid, out)
        self._materialize(2 * node + 1, mid + 1, end, out)

# fenwick.py
# Fenwick tree (binary indexed tree) amplitude engine:
#  - raw amplitudes kept 0-indexed, prefix-sum tree kept 1-indexed
#  - oracle: O(log N) point update
#  - diffusion: mean from one O(log N) prefix query, then every index is
#    touched with an O(log N) update -> O(N log N)
#  - max index: O(N) scan of the raw array
from __future__ import annotations

import logging

import numpy as np

from classical_grover.amplitude import MAX_SIZE, AmplitudeVector, validate_index


class FenwickTreeAmplitude(AmplitudeVector):

    name = "fenwick"

    def __init__(self, max_size: int = MAX_SIZE) -> None:
        super().__init__(max_size)
        self.bit = None
        self.amplitudes = None

    def _build(self, size: int, initial: float) -> None:
        self.amplitudes = np.full(size, initial, dtype=np.float64)
        self.bit = np.zeros(size + 1, dtype=np.float64)
        # linear-time build: each node hands its partial sum to its parent
        for i in range(1, size + 1):
            self.bit[i] += self.amplitudes[i - 1]
            parent = i + (i & -i)
            if parent <= size:
                self.bit[parent] += self.bit[i]

    def _negate(self, index: int) -> None:
        old = self.amplitudes[index]
        new = -old
        self.amplitudes[index] = new
        self._update(index, new - old)

    def _reflect_about_mean(self) -> None:
        n = self._size
        mean = self._prefix_sum(n - 1) / n
        logging.debug(f"{self.name}: diffusion about mean {mean:.6g}")
        for i in range(n):
            old = self.amplitudes[i]
            new = 2.0 * mean - old
            self.amplitudes[i] = new
            self._update(i, new - old)

    def _point(self, index: int) -> float:
        return self.amplitudes[index]

    def _values(self) -> np.ndarray:
        return self.amplitudes

    def prefix_sum(self, index: int) -> float:
        """Sum of the amplitudes at indices 0..index, inclusive."""
        self._require_initialized()
        validate_index(index, self._size)
        return float(self._prefix_sum(int(index)))

    # ---------------- tree helpers ----------------
    def _update(self, idx: int, delta: float) -> None:
        idx += 1
        while idx <= self._size:
            self.bit[idx] += delta
            idx += idx & -idx

    def _prefix_sum(self, idx: int) -> float:
        idx += 1
        total = 0.0
        while idx > 0:
            total += self.bit[idx]
            idx -= idx & -idx
        return total

# amplitude.py
# Shared contract for the classical amplitude engines:
#  - uniform init 1/sqrt(N) on every index
#  - oracle: phase-flip one index
#  - diffusion: inversion about the mean (2|s><s| - I for uniform |s>)
#  - measurement stand-in: index of the largest |a_i|^2, lowest index on ties
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod

import numpy as np

MAX_SIZE = 1_000_000


class AmplitudeError(Exception):
    """Base class for amplitude engine errors."""


class InvalidSizeError(AmplitudeError, ValueError):
    pass


class InvalidIndexError(AmplitudeError, IndexError):
    pass


class NotInitializedError(AmplitudeError, RuntimeError):
    pass


def is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def validate_size(size: int, max_size: int = MAX_SIZE) -> None:
    if not is_integer(size):
        raise InvalidSizeError(f"Size must be an integer, got: {size!r}")
    if size <= 0:
        raise InvalidSizeError(f"Size must be positive, got: {size}")
    if size > max_size:
        raise InvalidSizeError(
            f"Size too large for practical use: {size} (max {max_size})")


def validate_index(index: int, size: int) -> None:
    if not is_integer(index) or index < 0 or index >= size:
        raise InvalidIndexError(
            f"Target index {index} is out of bounds [0, {size})")


class AmplitudeVector(ABC):
    """
    Real-valued amplitude vector driven through Grover rounds.

    One instance serves exactly one search: call ``initialize`` once, then any
    number of ``apply_oracle`` / ``apply_diffusion`` rounds, then read
    ``find_max_amplitude_index``. Instances are mutated in place and must not
    be shared between searches.

    Tie-break policy for ``find_max_amplitude_index``: when several indices
    share the largest squared amplitude the lowest index wins.
    """

    name: str = "abstract"

    def __init__(self, max_size: int = MAX_SIZE) -> None:
        self.max_size = max_size
        self._size = 0

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_initialized(self) -> bool:
        return self._size > 0

    # ---------------- contract ----------------
    def initialize(self, size: int) -> None:
        validate_size(size, self.max_size)
        initial = 1.0 / math.sqrt(size)
        self._build(size, initial)
        self._size = int(size)
        logging.debug(
            f"{self.name}: initialized {size} amplitudes at {initial:.6g}")

    def apply_oracle(self, target_index: int) -> None:
        self._require_initialized()
        validate_index(target_index, self._size)
        self._negate(int(target_index))

    def apply_diffusion(self) -> None:
        self._require_initialized()
        self._reflect_about_mean()

    def find_max_amplitude_index(self) -> int:
        self._require_initialized()
        values = self._values()
        # argmax returns the first occurrence, i.e. the lowest index on ties
        return int(np.argmax(values * values))

    # ---------------- diagnostics ----------------
    def amplitude_at(self, index: int) -> float:
        self._require_initialized()
        validate_index(index, self._size)
        return float(self._point(int(index)))

    def all_amplitudes(self) -> np.ndarray:
        self._require_initialized()
        return self._values().copy()

    def probabilities(self) -> np.ndarray:
        values = self.all_amplitudes()
        return values * values

    def total_probability(self) -> float:
        return float(np.sum(self.probabilities()))

    def _require_initialized(self) -> None:
        if not self.is_initialized:
            raise NotInitializedError("Amplitudes not initialized")

    # ---------------- engine hooks ----------------
    @abstractmethod
    def _build(self, size: int, initial: float) -> None:
        """Allocate storage for ``size`` amplitudes all equal to ``initial``."""

    @abstractmethod
    def _negate(self, index: int) -> None:
        ...

    @abstractmethod
    def _reflect_about_mean(self) -> None:
        ...

    @abstractmethod
    def _point(self, index: int) -> float:
        ...

    @abstractmethod
    def _values(self) -> np.ndarray:
        """Current amplitudes with every pending transform applied."""

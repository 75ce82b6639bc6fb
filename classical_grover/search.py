# search.py
# Classical Grover search driver:
#  - fresh engine per call (never shared between searches)
#  - r = floor(pi/4 * sqrt(N)) rounds of oracle + diffusion
#  - "measurement" = index of the largest squared amplitude
from __future__ import annotations

import logging
import math
import time
from dataclasses import asdict, dataclass
from typing import Dict, Optional, Tuple, Type

from classical_grover.amplitude import MAX_SIZE, AmplitudeVector, validate_index
from classical_grover.fenwick import FenwickTreeAmplitude
from classical_grover.segment_tree import SegmentTreeAmplitude

ENGINES: Dict[str, Type[AmplitudeVector]] = {
    SegmentTreeAmplitude.name: SegmentTreeAmplitude,
    FenwickTreeAmplitude.name: FenwickTreeAmplitude,
}

DEFAULT_ENGINE = SegmentTreeAmplitude.name


@dataclass
class SearchConfig:
    engine: str = DEFAULT_ENGINE
    max_size: int = MAX_SIZE


@dataclass
class GroverResult:
    found_index: int
    target_index: int
    success: bool
    elapsed_ms: float
    search_space_size: int
    iterations: int
    engine: str

    def to_dict(self) -> dict:
        return asdict(self)


def iteration_count(size: int) -> int:
    return int(math.floor(math.pi / 4.0 * math.sqrt(size)))


def create_engine(name: str = DEFAULT_ENGINE, max_size: int = MAX_SIZE) -> AmplitudeVector:
    """Build a new, uninitialized engine of the requested kind."""
    try:
        cls = ENGINES[name]
    except KeyError:
        raise ValueError(
            f"Unknown engine {name!r}; expected one of {sorted(ENGINES)}") from None
    return cls(max_size=max_size)


class ClassicalGroverSearch:

    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.config = config if config is not None else SearchConfig()
        if self.config.engine not in ENGINES:
            raise ValueError(
                f"Unknown engine {self.config.engine!r}; expected one of {sorted(ENGINES)}")

    def new_engine(self) -> AmplitudeVector:
        return create_engine(self.config.engine, self.config.max_size)

    def execute_search(self, search_space_size: int, target_index: int) -> GroverResult:
        result, _ = self.execute_search_with_engine(search_space_size, target_index)
        return result

    def execute_search_with_engine(self, search_space_size: int,
                                   target_index: int) -> Tuple[GroverResult, AmplitudeVector]:
        """Run one search and also hand back the engine holding the final state."""
        start = time.perf_counter()

        amplitudes = self.new_engine()
        amplitudes.initialize(search_space_size)
        validate_index(target_index, search_space_size)

        iterations = iteration_count(search_space_size)
        for i in range(iterations):
            amplitudes.apply_oracle(target_index)
            amplitudes.apply_diffusion()
            logging.debug(f"Round {i + 1}/{iterations} done")

        found_index = amplitudes.find_max_amplitude_index()
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        result = GroverResult(
            found_index=found_index,
            target_index=target_index,
            success=found_index == target_index,
            elapsed_ms=elapsed_ms,
            search_space_size=search_space_size,
            iterations=iterations,
            engine=amplitudes.name,
        )
        logging.info(
            f"{amplitudes.name}: N={search_space_size}, target={target_index}, "
            f"found={found_index}, iterations={iterations}, {elapsed_ms:.2f} ms")
        return result, amplitudes

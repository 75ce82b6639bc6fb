# benchmark.py
# Timing sweep over search-space sizes and engines. The ratio column is
# elapsed / (sqrt(N) * log2(N)); it stays roughly flat for the segment tree
# and grows like sqrt(N) for the Fenwick engine.
from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from classical_grover.amplitude import MAX_SIZE
from classical_grover.search import ENGINES, ClassicalGroverSearch, SearchConfig

COLUMNS = ['size', 'engine', 'iterations', 'elapsed_ms', 'success', 'ratio']


def complexity_ratio(elapsed_ms: float, size: int) -> float:
    if size < 2:
        return float('nan')
    return elapsed_ms / (math.sqrt(size) * math.log2(size))


def run_benchmark(sizes: Iterable[int], engines: Optional[Iterable[str]] = None,
                  target: Optional[int] = None, max_size: int = MAX_SIZE) -> pd.DataFrame:
    engines = list(engines) if engines is not None else list(ENGINES)
    rows = []
    for name in engines:
        searcher = ClassicalGroverSearch(SearchConfig(engine=name, max_size=max_size))
        for size in sizes:
            tgt = size // 2 if target is None else target
            result = searcher.execute_search(size, tgt)
            rows.append({
                'size': size,
                'engine': name,
                'iterations': result.iterations,
                'elapsed_ms': result.elapsed_ms,
                'success': result.success,
                'ratio': complexity_ratio(result.elapsed_ms, size),
            })
            logging.info(
                f"Benchmark {name}: N={size}, {result.elapsed_ms:.2f} ms, "
                f"ratio={rows[-1]['ratio']:.4f}")
    df = pd.DataFrame(rows, columns=COLUMNS)
    if not df.empty:
        df['ratio'] = df['ratio'].astype(np.float64)
    return df

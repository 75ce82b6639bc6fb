from classical_grover.amplitude import (
    MAX_SIZE,
    AmplitudeError,
    AmplitudeVector,
    InvalidIndexError,
    InvalidSizeError,
    NotInitializedError,
)
from classical_grover.fenwick import FenwickTreeAmplitude
from classical_grover.search import (
    ClassicalGroverSearch,
    GroverResult,
    SearchConfig,
    create_engine,
    iteration_count,
)
from classical_grover.segment_tree import SegmentTreeAmplitude

__version__ = "0.1.0"

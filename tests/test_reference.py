import numpy as np
import pytest

from classical_grover import (
    ClassicalGroverSearch,
    InvalidSizeError,
    NotInitializedError,
    SearchConfig,
    SegmentTreeAmplitude,
)
from classical_grover.reference import (
    build_grover_circuit,
    compare_with_engine,
    qubits_for_size,
    reference_probabilities,
    run_and_measure,
)


@pytest.mark.parametrize("engine_name", ["segment_tree", "fenwick"])
@pytest.mark.parametrize("size,target", [(2, 0), (2, 1), (4, 3), (8, 5), (16, 0), (32, 21)])
def test_engines_match_statevector(engine_name, size, target):
    searcher = ClassicalGroverSearch(SearchConfig(engine=engine_name))
    result, engine = searcher.execute_search_with_engine(size, target)
    comparison = compare_with_engine(engine, target, result.iterations)
    assert comparison.matches
    assert comparison.n_qubits == qubits_for_size(size)
    assert comparison.max_deviation < 1e-9


def test_zero_rounds_is_uniform():
    probs = reference_probabilities(3, 4, 0)
    np.testing.assert_allclose(probs, np.full(8, 1 / 8), atol=1e-12)


def test_single_round_on_two_qubits_is_exact():
    probs = reference_probabilities(2, 2, 1)
    np.testing.assert_allclose(probs, [0.0, 0.0, 1.0, 0.0], atol=1e-9)


def test_comparison_flags_a_diverging_engine():
    engine = SegmentTreeAmplitude()
    engine.initialize(8)
    # one round on the wrong target
    engine.apply_oracle(1)
    engine.apply_diffusion()
    comparison = compare_with_engine(engine, 6, 1)
    assert not comparison.matches
    assert comparison.max_deviation > 0.1


def test_sampled_counts_favour_target():
    qc = build_grover_circuit(3, 6, 2)
    counts = run_and_measure(qc, shots=512, seed=42)
    assert sum(counts.values()) == 512
    assert max(counts, key=counts.get) == 6


@pytest.mark.parametrize("size", [1, 3, 6, 100])
def test_reference_needs_power_of_two(size):
    with pytest.raises(InvalidSizeError):
        qubits_for_size(size)


def test_compare_needs_initialized_engine():
    with pytest.raises(NotInitializedError):
        compare_with_engine(SegmentTreeAmplitude(), 0, 1)

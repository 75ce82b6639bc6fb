import math

import numpy as np
import pytest

from classical_grover import (
    MAX_SIZE,
    AmplitudeError,
    InvalidIndexError,
    InvalidSizeError,
    NotInitializedError,
)


@pytest.mark.parametrize("size", [1, 2, 3, 7, 16, 1000, 4097])
def test_initialize_is_uniform_and_normalized(engine, size):
    engine.initialize(size)
    amplitudes = engine.all_amplitudes()
    assert len(amplitudes) == size
    np.testing.assert_allclose(amplitudes, 1.0 / math.sqrt(size), atol=1e-12)
    assert engine.total_probability() == pytest.approx(1.0, abs=1e-9)
    assert engine.size == size
    assert engine.is_initialized


def test_initialize_large_vector_is_normalized(engine):
    engine.initialize(100_000)
    assert engine.total_probability() == pytest.approx(1.0, abs=1e-9)


def test_initialize_accepts_default_max_size(engine):
    assert engine.max_size == MAX_SIZE
    engine.initialize(MAX_SIZE)
    assert engine.size == MAX_SIZE
    assert engine.total_probability() == pytest.approx(1.0, abs=1e-9)


def test_initialize_rejects_one_past_default_max_size(engine):
    with pytest.raises(InvalidSizeError):
        engine.initialize(MAX_SIZE + 1)
    assert not engine.is_initialized


def test_oracle_flips_only_target(engine):
    engine.initialize(4)
    engine.apply_oracle(1)
    np.testing.assert_allclose(engine.all_amplitudes(), [0.5, -0.5, 0.5, 0.5], atol=1e-9)
    assert engine.total_probability() == pytest.approx(1.0, abs=1e-9)


def test_oracle_is_an_involution(engine):
    engine.initialize(13)
    engine.apply_oracle(4)
    engine.apply_diffusion()
    before = engine.all_amplitudes()
    engine.apply_oracle(7)
    engine.apply_oracle(7)
    np.testing.assert_allclose(engine.all_amplitudes(), before, atol=1e-9)


def test_worked_example_size_four(engine):
    engine.initialize(4)
    engine.apply_oracle(0)
    np.testing.assert_allclose(engine.all_amplitudes(), [-0.5, 0.5, 0.5, 0.5], atol=1e-9)
    engine.apply_diffusion()
    np.testing.assert_allclose(engine.all_amplitudes(), [1.0, 0.0, 0.0, 0.0], atol=1e-9)
    assert engine.find_max_amplitude_index() == 0


def test_diffusion_reflects_about_mean(engine):
    size = 5
    engine.initialize(size)
    a = 1.0 / math.sqrt(size)
    engine.apply_oracle(3)
    mean = (size - 2) * a / size
    engine.apply_diffusion()
    assert engine.amplitude_at(3) == pytest.approx(2 * mean + a, abs=1e-9)
    for i in (0, 1, 2, 4):
        assert engine.amplitude_at(i) == pytest.approx(2 * mean - a, abs=1e-9)


def test_probability_preserved_across_random_rounds(engine):
    rng = np.random.default_rng(7)
    size = 37
    engine.initialize(size)
    for _ in range(40):
        if rng.random() < 0.5:
            engine.apply_oracle(int(rng.integers(size)))
        else:
            engine.apply_diffusion()
        assert engine.total_probability() == pytest.approx(1.0, abs=1e-9)


def test_single_element_vector(engine):
    engine.initialize(1)
    assert engine.find_max_amplitude_index() == 0
    engine.apply_oracle(0)
    engine.apply_diffusion()
    assert engine.find_max_amplitude_index() == 0
    assert engine.amplitude_at(0) == pytest.approx(-1.0)


def test_ties_go_to_lowest_index(engine):
    engine.initialize(8)
    assert engine.find_max_amplitude_index() == 0
    # all squares stay equal after a lone phase flip
    engine.apply_oracle(5)
    assert engine.find_max_amplitude_index() == 0


def test_max_index_uses_squared_amplitude(engine):
    engine.initialize(4)
    engine.apply_oracle(2)
    engine.apply_diffusion()
    assert engine.amplitude_at(2) == pytest.approx(1.0)
    engine.apply_oracle(2)
    assert engine.amplitude_at(2) == pytest.approx(-1.0)
    assert engine.find_max_amplitude_index() == 2


def test_probabilities_are_squares(engine):
    engine.initialize(6)
    engine.apply_oracle(2)
    engine.apply_diffusion()
    np.testing.assert_allclose(engine.probabilities(), engine.all_amplitudes() ** 2)


def test_all_amplitudes_returns_a_copy(engine):
    engine.initialize(4)
    values = engine.all_amplitudes()
    values[0] = 42.0
    assert engine.amplitude_at(0) == pytest.approx(0.5)


@pytest.mark.parametrize("size", [0, -1, -100])
def test_initialize_rejects_non_positive_size(engine, size):
    with pytest.raises(InvalidSizeError):
        engine.initialize(size)
    assert not engine.is_initialized


@pytest.mark.parametrize("size", [2.0, "4", True, None])
def test_initialize_rejects_non_integer_size(engine, size):
    with pytest.raises(InvalidSizeError):
        engine.initialize(size)


def test_initialize_enforces_upper_bound(engine_cls):
    engine = engine_cls(max_size=10)
    engine.initialize(10)
    with pytest.raises(InvalidSizeError):
        engine.initialize(11)


def test_failed_reinitialize_keeps_previous_state(engine):
    engine.initialize(4)
    engine.apply_oracle(3)
    with pytest.raises(InvalidSizeError):
        engine.initialize(0)
    assert engine.size == 4
    assert engine.amplitude_at(3) == pytest.approx(-0.5)


def test_reinitialize_discards_previous_state(engine):
    engine.initialize(4)
    engine.apply_oracle(0)
    engine.apply_diffusion()
    engine.initialize(9)
    assert engine.size == 9
    np.testing.assert_allclose(engine.all_amplitudes(), 1.0 / 3.0, atol=1e-12)


@pytest.mark.parametrize("index", [-1, 4, 100, 1.0, True])
def test_oracle_rejects_bad_index(engine, index):
    engine.initialize(4)
    with pytest.raises(InvalidIndexError):
        engine.apply_oracle(index)
    np.testing.assert_allclose(engine.all_amplitudes(), 0.5)


def test_amplitude_at_rejects_bad_index(engine):
    engine.initialize(4)
    with pytest.raises(InvalidIndexError):
        engine.amplitude_at(4)


def test_errors_share_a_base_class():
    assert issubclass(InvalidSizeError, ValueError)
    assert issubclass(InvalidIndexError, IndexError)
    assert issubclass(NotInitializedError, RuntimeError)
    for err in (InvalidSizeError, InvalidIndexError, NotInitializedError):
        assert issubclass(err, AmplitudeError)


@pytest.mark.parametrize("call", [
    lambda e: e.apply_oracle(0),
    lambda e: e.apply_diffusion(),
    lambda e: e.find_max_amplitude_index(),
    lambda e: e.amplitude_at(0),
    lambda e: e.all_amplitudes(),
    lambda e: e.total_probability(),
], ids=["oracle", "diffusion", "max_index", "amplitude_at", "all_amplitudes", "total_probability"])
def test_operations_before_initialize_fail(engine, call):
    assert engine.size == 0
    with pytest.raises(NotInitializedError):
        call(engine)

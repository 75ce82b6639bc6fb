import matplotlib
import pytest

matplotlib.use("Agg")

from classical_grover import FenwickTreeAmplitude, SegmentTreeAmplitude


@pytest.fixture(params=[SegmentTreeAmplitude, FenwickTreeAmplitude],
                ids=["segment_tree", "fenwick"])
def engine_cls(request):
    return request.param


@pytest.fixture
def engine(engine_cls):
    return engine_cls()

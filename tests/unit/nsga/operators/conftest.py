import pytest
import numpy as np
from numba import int64
from numba.experimental import jitclass

# fixtures

@pytest.fixture
def rng():
    yield np.random.default_rng()


@jitclass([("retval", int64[:]), ("calls", int64)])
class mock_rngn:
    """Returns the pre-set draws of `integers` in order"""
    def __init__(self, n):
        self.calls = -1
        self.retval = n

    def integers(self, lb, ub):
        self.calls += 1
        return self.retval[self.calls]


@pytest.fixture
def scripted_rng():
    def _make(*draws):
        return mock_rngn(np.array(draws, dtype=np.int64))
    yield _make

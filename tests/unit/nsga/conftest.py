import pytest
import numpy as np

from nsga.commons.types import DEFAULTS

INT, FLOAT = DEFAULTS
from nsga.problem_definition import MultiObjectiveProblem  # noqa: E402


def schaffer(x):
    """Schaffer N.1, bi-objective with a convex front on x in [0, 2]"""
    return np.array([x[0]**2, (x[0] - 2)**2])


def zdt1(points):
    """ZDT1, vectorized"""
    f1 = points[:, 0]
    g = 1 + 9 * points[:, 1:].sum(axis=1) / (points.shape[1] - 1)
    f2 = g * (1 - np.sqrt(f1 / g))
    return np.column_stack((f1, f2))


def dtlz2(points, n_objs=3):
    """DTLZ2, vectorized"""
    k = n_objs - 1
    g = ((points[:, k:] - 0.5)**2).sum(axis=1)
    f = np.ones((points.shape[0], n_objs)) * (1 + g)[:, None]
    for m in range(n_objs):
        for j in range(n_objs - 1 - m):
            f[:, m] *= np.cos(points[:, j] * np.pi / 2)
        if m > 0:
            f[:, m] *= np.sin(points[:, n_objs - 1 - m] * np.pi / 2)
    return f


# fixtures
@pytest.fixture
def rng():
    yield np.random.default_rng()


@pytest.fixture
def schaffer_problem():
    """Provides a scalar-evaluated bi-objective problem."""
    yield MultiObjectiveProblem(schaffer, (np.full(1, -5.0), np.full(1, 5.0)), n_objs=2)


@pytest.fixture
def zdt1_problem():
    """Provides a vectorized bi-objective problem."""
    yield MultiObjectiveProblem(zdt1, (np.zeros(5), np.ones(5)), n_objs=2, vectorized=True)


@pytest.fixture
def dtlz2_problem():
    """Provides a vectorized three-objective problem."""
    yield MultiObjectiveProblem(dtlz2, (np.zeros(6), np.ones(6)), n_objs=3, vectorized=True)

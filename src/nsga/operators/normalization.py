import numpy as np
from numba import njit

from nsga.operators.geometry import ideal_point, extrema_point

# perturbation of the axis weights, keeps Fx_j / w_ij finite when w_ij would be 0
AXIS_EPSILON = 1e-6
# |det(S)| relative to the product of the row norms of S (Hadamard bound)
SINGULAR_TOLERANCE = 1e-12

# API functions

def hyperplane_normalization(objectives, ranks):
    """
    Estimates the ideal and nadir points of a set of objective vectors.

    The nadir is found from the intercepts of the hyperplane through the
    extreme point of each axis. When the extreme points do not span a
    hyperplane (singular matrix, non-positive or non-finite intercepts) the
    nadir falls back to the worst value of each objective on the
    non-dominated front.

    Parameters
    ----------
    objectives : ndarray (n, M)
        Objective values in minimization form.
    ranks : ndarray (n,)
        Pareto rank of each row, 1 being non-dominated.

    Returns
    -------
    (ideal, nadir) : tuple of ndarray (M,)
    """
    if objectives.shape[0] == 0:
        raise ValueError("cannot normalize an empty population")
    n_objs = objectives.shape[1]

    ideal = ideal_point(objectives)
    translated = objectives - ideal

    weights = np.eye(n_objs) + AXIS_EPSILON
    extreme = _extreme_points(translated, weights)
    simplex = translated[extreme, :]

    intercepts = _intercepts(simplex)
    if intercepts is None:
        return ideal, _front_extrema(objectives, ranks)
    return ideal, ideal + intercepts


def normalize(objectives, ranks):
    """
    Rescales objective vectors so the ideal point maps to the origin and the
    nadir point to (1, ..., 1)
    """
    ideal, nadir = hyperplane_normalization(objectives, ranks)
    return rescale(objectives, ideal, nadir)


def rescale(objectives, ideal, nadir):
    span = nadir - ideal
    # collapsed objective range
    span[span < np.finfo(span.dtype).eps] = np.finfo(span.dtype).eps
    return (objectives - ideal) / span

# private helper functions

@njit
def _extreme_points(translated, weights):
    """
    Index of the row minimising the achievement scalarizing function of each axis
    """
    n_points, n_objs = translated.shape
    extreme = np.empty(n_objs, np.int64)
    for i in range(n_objs):
        best = np.inf
        extreme[i] = 0
        for j in range(n_points):
            asf = -np.inf
            for k in range(n_objs):
                value = translated[j, k] / weights[i, k]
                if value > asf:
                    asf = value
            if asf < best:
                best = asf
                extreme[i] = j
    return extreme


def _intercepts(simplex):
    """
    Axis intercepts of the hyperplane through the rows of `simplex`.
    Returns None when no valid hyperplane exists.
    """
    if _is_singular(simplex):
        return None
    try:
        hyperplane = np.linalg.solve(simplex, np.ones(simplex.shape[0]))
    except np.linalg.LinAlgError:
        return None
    with np.errstate(divide="ignore"):
        intercepts = 1.0 / hyperplane
    if not np.isfinite(intercepts).all() or (intercepts <= 0).any():
        return None
    return intercepts


def _is_singular(matrix):
    scale = np.prod(np.linalg.norm(matrix, axis=1))
    if scale == 0.0 or not np.isfinite(scale):
        return True
    return abs(np.linalg.det(matrix)) <= SINGULAR_TOLERANCE * scale


def _front_extrema(objectives, ranks):
    front = ranks == ranks.min()
    return extrema_point(objectives[front])

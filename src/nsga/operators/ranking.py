import numpy as np
from numba import njit

from nsga.commons.types import DEFAULTS

INT, FLOAT = DEFAULTS

# API functions

def non_dominated_rank(objectives, maximize, violations=None):
    """
    Pareto rank of each row of `objectives` by repeated non-dominated sorting.

    Rank 1 is the non-dominated front. Rows with a positive constraint
    violation rank after every feasible front, ordered by total violation
    (equal violations share a rank). Row order is not changed.
    """
    n_points = objectives.shape[0]
    ranks = np.empty(n_points, dtype=INT)
    if violations is None:
        feasible_mask = np.ones(n_points, dtype=np.bool_)
    else:
        feasible_mask = violations <= 0

    remaining_indices = np.where(feasible_mask)[0]
    current_rank = 1

    while len(remaining_indices) > 0:
        non_dominated_mask = _find_non_dominated(objectives[remaining_indices], maximize)
        ranks[remaining_indices[non_dominated_mask]] = current_rank
        remaining_indices = remaining_indices[~non_dominated_mask]
        current_rank += 1

    if not feasible_mask.all():
        infeasible_indices = np.where(~feasible_mask)[0]
        levels = np.unique(violations[infeasible_indices], return_inverse=True)[1]
        ranks[infeasible_indices] = current_rank + levels.reshape(-1)
    return ranks


def minimization_form(objectives, maximize):
    """Negates maximized objectives so that smaller is always better"""
    return np.where(maximize, -objectives, objectives)


def dominates(a, b, maximize):
    """True if objective vector `a` Pareto-dominates `b`"""
    return _dominates(
        np.asarray(a, dtype=np.float64),
        np.asarray(b, dtype=np.float64),
        np.asarray(maximize, dtype=np.bool_),
    )

# private helper functions

@njit
def _dominates(a, b, maximize):
    better_in_one = False
    for k in range(a.shape[0]):
        if maximize[k]:
            if a[k] < b[k]:
                return False
            elif a[k] > b[k]:
                better_in_one = True
        else:
            if a[k] > b[k]:
                return False
            elif a[k] < b[k]:
                better_in_one = True
    return better_in_one


@njit
def _find_non_dominated(objectives, maximize):
    """
    Find non-dominated rows in objective space.
    """
    n_points = objectives.shape[0]
    is_non_dominated = np.ones(n_points, dtype=np.bool_)

    for i in range(n_points):
        for j in range(n_points):
            if i == j:
                continue
            if _dominates(objectives[j], objectives[i], maximize):
                is_non_dominated[i] = False
                break

    return is_non_dominated

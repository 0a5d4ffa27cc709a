import numpy as np
from numba import njit

# API functions

def select_boundary(niches, niche_frequency, distances, n_select, rng):
    """
    Chooses `n_select` members of the boundary front by niche preservation.

    `niches` and `distances` describe the boundary front only. `niche_frequency`
    holds the niche counts of the fully admitted fronts and is updated in place.
    Returns the positions of the admitted candidates in order of admission.
    """
    if n_select < 0:
        raise ValueError(f"'n_select' should be greater than or equal to 0. Got: {n_select}")
    if niches.shape[0] < n_select:
        raise ValueError(
            f"boundary front has {niches.shape[0]} candidates but {n_select} slots remain"
        )
    if niches.shape[0] != distances.shape[0]:
        raise ValueError("'niches' and 'distances' must have the same length")
    if n_select == 0:
        return np.empty(0, np.int64)
    return _select_boundary(niches, niche_frequency, distances, n_select, rng)

# private helper functions

@njit
def _select_boundary(niches, niche_frequency, distances, n_select, rng):  # noqa: C901
    n_refs = niche_frequency.shape[0]
    n_candidates = niches.shape[0]

    selected = np.empty(n_select, np.int64)
    remaining = np.ones(n_candidates, np.bool_)
    available = np.ones(n_refs, np.bool_)
    ties = np.empty(n_refs, np.int64)
    members = np.empty(n_candidates, np.int64)

    k = 0
    while k < n_select:
        mini = _min_available(niche_frequency, available)
        if mini < 0:
            raise RuntimeError("all reference directions exhausted before the population was filled")

        n_ties = 0
        for j in range(n_refs):
            if available[j] and niche_frequency[j] == mini:
                ties[n_ties] = j
                n_ties += 1
        j_hat = ties[rng.integers(0, n_ties)]

        n_members = 0
        for s in range(n_candidates):
            if remaining[s] and niches[s] == j_hat:
                members[n_members] = s
                n_members += 1

        if n_members == 0:
            available[j_hat] = False
            continue

        if mini == 0:
            s = _closest(members[:n_members], distances)
        else:
            s = members[rng.integers(0, n_members)]

        selected[k] = s
        remaining[s] = False
        niche_frequency[j_hat] += 1
        k += 1

    return selected


@njit
def _min_available(niche_frequency, available):
    """
    Lowest frequency among available niches, -1 if none are available
    """
    mini = -1
    for j in range(niche_frequency.shape[0]):
        if not available[j]:
            continue
        if mini < 0 or niche_frequency[j] < mini:
            mini = niche_frequency[j]
    return mini


@njit
def _closest(members, distances):
    best = members[0]
    for s in members[1:]:
        if distances[s] < distances[best]:
            best = s
    return best

import numpy as np
from numba import njit

from nsga.operators.geometry import perpendicular_distance

# API functions

@njit
def associate(normalized, reference_directions, boundary_start):
    """
    Associates each normalized objective vector with its closest reference
    direction (perpendicular distance to the reference line).

    Ties keep the first direction found. Only rows before `boundary_start`
    (fully admitted fronts) count towards the niche frequencies.

    Returns
    -------
    niches : int64 array (n,)
    niche_frequency : int64 array (H,)
    distances : float64 array (n,)
    """
    n_points = normalized.shape[0]
    n_refs = reference_directions.shape[0]

    niches = np.full(n_points, -1, np.int64)
    niche_frequency = np.zeros(n_refs, np.int64)
    distances = np.full(n_points, np.inf)

    for i in range(n_points):
        for j in range(n_refs):
            d = perpendicular_distance(normalized[i], reference_directions[j])
            if d < distances[i]:
                distances[i] = d
                niches[i] = j

        # rows with non-finite coordinates stay unassociated (-1)
        if i < boundary_start and niches[i] >= 0:
            niche_frequency[niches[i]] += 1

    return niches, niche_frequency, distances

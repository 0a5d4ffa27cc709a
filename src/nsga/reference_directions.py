import numpy as np
from math import comb

from nsga.utils import typing


def das_dennis(n_objs: int, partitions: int) -> np.ndarray:
    """
    Das & Dennis simplex-lattice reference directions.

    Each objective's weight is split into `partitions` increments; every
    direction lies on the unit simplex. Returns comb(n_objs + partitions - 1, partitions)
    rows of length `n_objs`.
    """
    typing.sanitize_type(n_objs, "integer", "n_objs")
    typing.sanitize_range(n_objs, "n_objs", ge=1)
    typing.sanitize_type(partitions, "integer", "partitions")
    typing.sanitize_range(partitions, "partitions", ge=1)

    directions = np.empty((comb(n_objs + partitions - 1, partitions), n_objs), dtype=np.float64)
    counter = [0]

    def _fill(current, left, depth):
        if depth == n_objs - 1:
            current[depth] = left
            directions[counter[0], :] = current
            counter[0] += 1
            return
        for i in range(left + 1):
            current[depth] = i
            _fill(current, left - i, depth + 1)

    _fill(np.zeros(n_objs), partitions, 0)
    return directions / partitions


def sanitize_reference_directions(reference_directions, n_objs: int) -> np.ndarray:
    """
    Validates a user supplied set of reference directions
    """
    directions = typing.sanitize_matrix(reference_directions, "reference_directions", ncols=n_objs)
    if (np.abs(directions).sum(axis=1) == 0).any():
        raise ValueError("'reference_directions' must not contain all-zero directions")
    return directions

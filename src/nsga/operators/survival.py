import numpy as np
from typing import NamedTuple

from nsga.operators.normalization import hyperplane_normalization, rescale
from nsga.operators.association import associate
from nsga.operators.niching import select_boundary


class SelectionResult(NamedTuple):
    survivors: np.ndarray         # row indices into the candidate pool, in new population order
    niches: np.ndarray            # reference direction of each survivor, -1 if niching was skipped
    niche_distances: np.ndarray   # distance of each survivor to its reference line
    niche_frequency: np.ndarray   # survivors per reference direction after filling
    boundary_rank: int
    ideal: np.ndarray | None
    nadir: np.ndarray | None


# API functions

def truncate_fronts(ranks, target_size):
    """
    Sorts rows by rank and drops every front after the one that reaches `target_size`.

    Returns
    -------
    kept : ndarray
        Row indices sorted by rank (stable), fronts after the boundary removed.
    boundary_start : int
        Position in `kept` of the first row of the boundary front. Equals
        `len(kept)` when every kept row fits.
    boundary_rank : int
    """
    order = np.argsort(ranks, kind="stable")
    if order.shape[0] <= target_size:
        boundary_rank = int(ranks[order[-1]]) if order.shape[0] > 0 else 0
        return order, order.shape[0], boundary_rank

    boundary_rank = int(ranks[order[target_size - 1]])
    sorted_ranks = ranks[order]
    kept = order[sorted_ranks <= boundary_rank]
    boundary_start = int(np.searchsorted(sorted_ranks, boundary_rank, side="left"))
    if kept.shape[0] == target_size:
        boundary_start = kept.shape[0]
    return kept, boundary_start, boundary_rank


def environmental_selection(objectives, ranks, reference_directions, target_size, rng):
    """
    NSGA-III survival: keeps whole fronts while they fit and fills the
    remaining slots from the boundary front by reference-direction niching.

    Parameters
    ----------
    objectives : ndarray (n, M)
        Objective values in minimization form.
    ranks : ndarray (n,)
        Pareto ranks, 1 being non-dominated.
    reference_directions : ndarray (H, M)
    target_size : int
    rng : np.random.Generator
        Source of the random tie-breaks.
    """
    if target_size < 1:
        raise ValueError(f"'target_size' should be greater than 0. Got: {target_size}")
    if not np.isfinite(objectives).all():
        rows = np.where(~np.isfinite(objectives).all(axis=1))[0]
        raise ValueError(f"non-finite objective values in rows {rows.tolist()}")
    kept, boundary_start, boundary_rank = truncate_fronts(ranks, target_size)

    if kept.shape[0] <= target_size:
        return SelectionResult(
            survivors=kept,
            niches=np.full(kept.shape[0], -1, np.int64),
            niche_distances=np.full(kept.shape[0], np.nan),
            niche_frequency=np.zeros(reference_directions.shape[0], np.int64),
            boundary_rank=boundary_rank,
            ideal=None,
            nadir=None,
        )

    front_objectives = np.ascontiguousarray(objectives[kept], dtype=np.float64)
    ideal, nadir = hyperplane_normalization(front_objectives, ranks[kept])
    normalized = rescale(front_objectives, ideal, nadir)

    niches, niche_frequency, distances = associate(
        normalized, np.ascontiguousarray(reference_directions, dtype=np.float64), boundary_start
    )
    admitted = boundary_start + select_boundary(
        niches[boundary_start:].copy(),
        niche_frequency,
        distances[boundary_start:].copy(),
        target_size - boundary_start,
        rng,
    )
    order = np.concatenate((np.arange(boundary_start), admitted))

    return SelectionResult(
        survivors=kept[order],
        niches=niches[order],
        niche_distances=distances[order],
        niche_frequency=niche_frequency,
        boundary_rank=boundary_rank,
        ideal=ideal,
        nadir=nadir,
    )

from numba import njit


# API functions
@njit
def polynomial_mutation(points, eta, indpb, lb, ub, rng):
    """
    Polynomial mutation of every variable with probability `indpb`, in place
    """
    for j in range(points.shape[0]):
        for k in range(points.shape[1]):
            if rng.random() < indpb:
                points[j, k] = _mutate_polynomial(points[j, k], eta, lb[k], ub[k], rng)


# private helper functions


@njit
def _mutate_polynomial(item, eta, lb, ub, rng):
    """polynomial mutation for single variable, clipped to bounds"""
    if ub <= lb:
        return item
    delta1 = (item - lb) / (ub - lb)
    delta2 = (ub - item) / (ub - lb)
    mut_pow = 1.0 / (eta + 1.0)
    rand = rng.random()
    if rand <= 0.5:
        val = 2.0 * rand + (1.0 - 2.0 * rand) * (1.0 - delta1)**(eta + 1.0)
        deltaq = val**mut_pow - 1.0
    else:
        val = 2.0 * (1.0 - rand) + 2.0 * (rand - 0.5) * (1.0 - delta2)**(eta + 1.0)
        deltaq = 1.0 - val**mut_pow
    return min(ub, max(lb, item + deltaq * (ub - lb)))

from numba import njit

# API functions

@njit
def sbx_crossover(points, eta, indpb, lb, ub, rng):
    """
    Simulated binary crossover on consecutive pairs of rows, in place.
    An odd last row is left untouched.
    """
    for j in range(0, points.shape[0] - 1, 2):
        if rng.random() < indpb:
            _sbx_pair(points[j], points[j + 1], eta, lb, ub, rng)

# private helper functions

@njit
def _sbx_pair(ind1, ind2, eta, lb, ub, rng):
    """
    Crossover of a single pair of parents
    """
    eps = 1e-14
    inv_eta = 1.0 / (eta + 1.0)
    for k in range(ind1.shape[0]):
        if rng.random() > 0.5:
            continue
        y1 = min(ind1[k], ind2[k])
        y2 = max(ind1[k], ind2[k])
        diff = y2 - y1
        if diff <= eps:
            continue

        rand = rng.random()
        betaq = _spread_factor(1.0 + 2.0 * (y1 - lb[k]) / diff, rand, eta, inv_eta)
        c1 = 0.5 * ((y1 + y2) - betaq * diff)
        betaq = _spread_factor(1.0 + 2.0 * (ub[k] - y2) / diff, rand, eta, inv_eta)
        c2 = 0.5 * ((y1 + y2) + betaq * diff)

        c1 = min(ub[k], max(lb[k], c1))
        c2 = min(ub[k], max(lb[k], c2))

        if rng.random() <= 0.5:
            ind1[k], ind2[k] = c2, c1
        else:
            ind1[k], ind2[k] = c1, c2


@njit
def _spread_factor(beta, rand, eta, inv_eta):
    alpha = 2.0 - max(beta, 1e-14)**(-(eta + 1.0))
    if rand <= 1.0 / alpha:
        return (rand * alpha)**inv_eta
    return (1.0 / (2.0 - rand * alpha))**inv_eta

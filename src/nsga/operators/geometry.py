from numba import njit

# API functions

@njit
def perpendicular_distance(point, direction):
    """
    Distance from `point` to the line through the origin along `direction`
    """
    scale = _dot(point, direction) / _dot(direction, direction)
    acc = 0.0
    for k in range(point.shape[0]):
        acc += (point[k] - scale * direction[k])**2
    return acc**0.5


def ideal_point(objectives):
    """Best (minimum) value of each objective"""
    return objectives.min(axis=0)


def extrema_point(objectives):
    """Worst (maximum) value of each objective"""
    return objectives.max(axis=0)

# private helper functions

@njit
def _dot(a, b):
    acc = 0.0
    for k in range(a.shape[0]):
        acc += a[k] * b[k]
    return acc

import numpy as np
from collections.abc import Callable

from nsga.commons.types import DEFAULTS
INT, FLOAT = DEFAULTS
from nsga.utils import typing  # noqa: E402


class MultiObjectiveProblem:
    """
    Encapsulates the definition of a multi-objective optimization problem.
    This includes the objective functions, variable bounds, optimization senses
    and an optional constraint violation.
    """
    def __init__(
        self,
        objective: Callable,
        bounds: tuple[np.ndarray, np.ndarray],
        n_objs: int,
        maximize: bool | np.ndarray[bool] = False,
        vectorized: bool = False,
        constraints: bool = False,
        eq_tolerance: float = 0.0,
        fargs: tuple = (),
        fkwargs: dict = None,
    ):
        """
        Initializes the multi-objective optimization problem definition.

        With `constraints=True` the objective returns either `(f, violation)`, where
        `violation` is the total constraint violation (<= 0 when feasible), or
        `(f, g, h)` with inequality constraints `g <= 0` and equality constraints
        `h == 0`. Equality constraints within `eq_tolerance` count as satisfied.
        """
        fkwargs = {} if fkwargs is None else fkwargs
        typing.sanitize_type(objective, "callable", "objective")
        typing.sanitize_type(bounds, "arraylike", "bounds")
        if len(bounds) != 2:
            raise ValueError(f"'bounds' expected length 2 i.e. (lower, upper). Received length: {len(bounds)}")
        for i, bound in enumerate(bounds):
            name = f"bounds[{i}]"
            typing.sanitize_array_type(bound, "numeric", name)
            typing.sanitize_array_type(bound, "finite", name)
            if len(bound) == 0:
                raise ValueError(f"'{name}' must have length > 0")
        if len(bounds[0]) != len(bounds[1]):
            raise ValueError("Upper and lower bound shapes must match."
                             f"Lower: {len(bounds[0])}, Upper: {len(bounds[1])}")

        typing.sanitize_type(n_objs, "integer", "n_objs")
        typing.sanitize_range(n_objs, "n_objs", ge=1)
        typing.sanitize_type(vectorized, "boolean", "vectorized")
        typing.sanitize_type(constraints, "boolean", "constraints")
        typing.sanitize_type(eq_tolerance, "numeric", "eq_tolerance")
        typing.sanitize_range(eq_tolerance, "eq_tolerance", ge=0)
        typing.sanitize_type(fargs, tuple, "fargs")
        typing.sanitize_type(fkwargs, dict, "fkwargs")

        self.objective = objective
        self.lower_bounds = np.asarray(bounds[0], dtype=FLOAT)
        self.upper_bounds = np.asarray(bounds[1], dtype=FLOAT)
        if not (self.lower_bounds <= self.upper_bounds).all():
            raise ValueError("lower bounds must not exceed upper bounds")
        self.ndim = len(self.lower_bounds)
        self.n_objs = n_objs

        self.vectorized = vectorized
        self.constraints = constraints
        self.eq_tolerance = eq_tolerance
        self.fargs = fargs
        self.fkwargs = fkwargs

        if typing.is_boolean(maximize):
            self.maximize = np.array([maximize] * self.n_objs, dtype=np.bool_)
        else:
            if not typing.is_array_like(maximize) or len(maximize) != self.n_objs:
                raise ValueError(f"'maximize' must be a bool or an iterable of length n_objs ({self.n_objs})")
            self.maximize = np.array(maximize, dtype=np.bool_)

    def evaluate(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """
        Evaluates the objective functions and constraint violation for a set of points.
        Returns objective values (n, n_objs) and violations (n,).
        """
        points = np.atleast_2d(points)
        num_points = points.shape[0]
        obj_values = np.empty((num_points, self.n_objs), dtype=FLOAT)
        violations = np.zeros(num_points, dtype=FLOAT)

        if self.constraints:
            if self.vectorized:
                obj_values[:], violations[:] = self._split(self.objective(points, *self.fargs, **self.fkwargs))
            else:
                for j in range(num_points):
                    obj_values[j, :], violations[j] = self._split(self.objective(points[j, :], *self.fargs, **self.fkwargs))
        else:
            if self.vectorized:
                obj_values[:] = self.objective(points, *self.fargs, **self.fkwargs)
            else:
                for j in range(num_points):
                    obj_values[j, :] = self.objective(points[j, :], *self.fargs, **self.fkwargs)

        return obj_values, violations

    def _split(self, result):
        """
        Objective values and total violation from `(f, violation)` or `(f, g, h)`
        """
        if len(result) == 3:
            f, g, h = result
            return f, total_violation(g, h, self.eq_tolerance)
        if len(result) != 2:
            raise ValueError("A constrained objective should return (f, violation) or (f, g, h). "
                             f"Got a result of length {len(result)}")
        return result


def total_violation(g, h, eq_tolerance=0.0):
    """
    Sum of inequality violations max(g, 0) and equality violations |h| beyond
    `eq_tolerance`, over the last axis. Feasible points have zero violation.
    """
    g = np.asarray(g, dtype=FLOAT)
    h = np.asarray(h, dtype=FLOAT)
    return np.maximum(g, 0).sum(axis=-1) + np.maximum(np.abs(h) - eq_tolerance, 0).sum(axis=-1)

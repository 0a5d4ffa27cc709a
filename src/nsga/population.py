import numpy as np
from numba import njit

from nsga.commons.types import DEFAULTS

INT, FLOAT = DEFAULTS
from nsga.problem_definition import MultiObjectiveProblem  # noqa: E402
from nsga.operators import crossover, mutation  # noqa: E402
from nsga.operators.ranking import non_dominated_rank, minimization_form  # noqa: E402
from nsga.operators.survival import environmental_selection  # noqa: E402


class Population:
    """
    Struct-of-arrays population. Row `j` of every array describes one solution.
    """
    def __init__(
        self,
        problem: MultiObjectiveProblem,
        pop_size: int,
        rng: np.random._generator.Generator,
    ):
        self.problem = problem
        self.pop_size = INT(pop_size)
        self.rng = rng
        self.evaluations = 0
        self.last_selection = None

        self.points = np.empty((pop_size, problem.ndim), dtype=FLOAT)
        self.objective_values = np.empty((pop_size, problem.n_objs), dtype=FLOAT)
        self.violations = np.zeros(pop_size, dtype=FLOAT)

        # recomputed every generation
        self.ranks = np.ones(pop_size, dtype=INT)
        self.niches = np.full(pop_size, -1, dtype=np.int64)
        self.niche_distances = np.full(pop_size, np.nan, dtype=FLOAT)

    def __len__(self):
        return self.points.shape[0]

    def populate(self, x0=None):
        _populate_randomly(
            self.points,
            self.problem.lower_bounds,
            self.problem.upper_bounds,
            self.rng,
        )
        if x0 is not None:
            x0 = np.atleast_2d(np.asarray(x0, dtype=FLOAT))
            if x0.shape[1] != self.problem.ndim:
                raise ValueError("'x0' should have 'problem.ndim' columns")
            _overwrite(self.points, x0[: self.pop_size])
            self._apply_bounds(self.points)
        self.objective_values[:], self.violations[:] = self._evaluate(self.points)
        self._update_ranks()

    def evolve(
        self,
        reference_directions: np.ndarray,
        eta_cr: float,
        p_cr: float,
        eta_m: float,
        p_m: float,
    ):
        """
        One generation: reproduction, evaluation of the offspring and
        environmental selection over parents and offspring.
        """
        offspring = self._generate_offspring(eta_cr, p_cr, eta_m, p_m)
        offspring_objectives, offspring_violations = self._evaluate(offspring)

        self.points = np.concatenate((self.points, offspring))
        self.objective_values = np.concatenate((self.objective_values, offspring_objectives))
        self.violations = np.concatenate((self.violations, offspring_violations))
        self._update_ranks()

        self.select(reference_directions)

    def select(self, reference_directions: np.ndarray):
        """
        Reduces the population to `pop_size` rows by NSGA-III environmental selection.
        """
        result = environmental_selection(
            minimization_form(self.objective_values, self.problem.maximize),
            self.ranks,
            reference_directions,
            self.pop_size,
            self.rng,
        )
        survivors = result.survivors
        self.points = self.points[survivors]
        self.objective_values = self.objective_values[survivors]
        self.violations = self.violations[survivors]
        self.ranks = self.ranks[survivors]
        self.niches = result.niches
        self.niche_distances = result.niche_distances.astype(FLOAT)
        self.last_selection = result

    def pareto(self):
        """
        Points and objective values of the non-dominated feasible solutions
        """
        mask = (self.ranks == 1) & (self.violations <= 0)
        return self.points[mask], self.objective_values[mask]

    def _generate_offspring(self, eta_cr, p_cr, eta_m, p_m):
        offspring = self.points[self.rng.permutation(self.points.shape[0])].copy()
        crossover.sbx_crossover(
            offspring,
            eta_cr,
            p_cr,
            self.problem.lower_bounds,
            self.problem.upper_bounds,
            self.rng,
        )
        mutation.polynomial_mutation(
            offspring,
            eta_m,
            p_m,
            self.problem.lower_bounds,
            self.problem.upper_bounds,
            self.rng,
        )
        self._apply_bounds(offspring)
        return offspring

    def _evaluate(self, points):
        """
        Evaluates objectives and constraint violations
        """
        self.evaluations += points.shape[0]
        return self.problem.evaluate(points)

    def _update_ranks(self):
        self.ranks = non_dominated_rank(
            self.objective_values,
            self.problem.maximize,
            self.violations if self.problem.constraints else None,
        )

    def _apply_bounds(self, points):
        """
        Clips points to stay within the defined bounds.
        """
        _apply_bounds(
            points,
            self.problem.lower_bounds,
            self.problem.upper_bounds,
        )


# %%


@njit
def _populate_randomly(points, lb, ub, rng):
    for j in range(points.shape[0]):
        for k in range(points.shape[1]):
            points[j, k] = rng.uniform(lb[k], ub[k])


@njit
def _apply_bounds(points, lb, ub):
    for j in range(points.shape[0]):
        for k in range(points.shape[1]):
            points[j, k] = min(ub[k], max(lb[k], points[j, k]))


@njit
def _overwrite(target, elites):
    for j in range(elites.shape[0]):
        for k in range(elites.shape[1]):
            target[j, k] = elites[j, k]

import numpy as np
from datetime import datetime as dt

from nsga.commons.types import DEFAULTS
INT, FLOAT = DEFAULTS
import nsga.utils.termination as term  # noqa: E402
from nsga.utils import typing  # noqa: E402
from nsga.utils.logger import Logger  # noqa: E402
from nsga.problem_definition import MultiObjectiveProblem  # noqa: E402
from nsga.population import Population  # noqa: E402
from nsga.reference_directions import das_dennis, sanitize_reference_directions  # noqa: E402


class NSGA3:
    """
    Reference-point based non-dominated sorting genetic algorithm (NSGA-III).
    Manages the generation loop, algorithm state and logging.
    """
    def __init__(
            self,
            problem: MultiObjectiveProblem,
            pop_size: int = 100,
            eta_cr: float = 20.0,  # distribution index of SBX crossover
            p_cr: float = 0.9,  # crossover probability per pair
            eta_m: float = 20.0,  # distribution index of polynomial mutation
            p_m: float | None = None,  # mutation probability per variable, 1/ndim by default
            partitions: int = 12,  # Das and Dennis partitions if no reference directions are given
            reference_directions: np.ndarray | None = None,
            x0: np.ndarray | None = None,
            random_seed: int | None = None,
            log_dir: str | None = None,
            log_freq: int = 1,
            ):
        typing.sanitize_type(problem, MultiObjectiveProblem, "problem")
        typing.sanitize_type(pop_size, "integer", "pop_size")
        typing.sanitize_range(pop_size, "pop_size", ge=2)
        for name, value in (("eta_cr", eta_cr), ("eta_m", eta_m)):
            typing.sanitize_type(value, "numeric", name)
            typing.sanitize_range(value, name, ge=0)
        typing.sanitize_type(p_cr, "numeric", "p_cr")
        typing.sanitize_range(p_cr, "p_cr", ge=0, le=1)
        if p_m is None:
            p_m = 1.0 / problem.ndim
        typing.sanitize_type(p_m, "numeric", "p_m")
        typing.sanitize_range(p_m, "p_m", ge=0, le=1)
        typing.sanitize_type(partitions, "integer", "partitions")
        typing.sanitize_range(partitions, "partitions", ge=1)
        typing.sanitize_type(random_seed, ("integer", "none"), "random_seed")
        typing.sanitize_type(log_dir, (str, "none"), "log_dir")
        typing.sanitize_type(log_freq, "integer", "log_freq")
        typing.sanitize_range(log_freq, "log_freq", ge=1)

        self.problem = problem
        self.pop_size = INT(pop_size)
        self.eta_cr = float(eta_cr)
        self.p_cr = float(p_cr)
        self.eta_m = float(eta_m)
        self.p_m = float(p_m)
        self.partitions = partitions

        if reference_directions is None:
            self.reference_directions = das_dennis(problem.n_objs, partitions)
        else:
            self.reference_directions = sanitize_reference_directions(reference_directions, problem.n_objs)

        self.rng = np.random.default_rng(random_seed)
        self.x0 = x0
        self.logger = Logger(log_dir, problem.n_objs, log_freq) if log_dir else None

        self.population = None
        self.current_iter = 0
        self.start_time = dt.now()

    @property
    def evaluations(self):
        return 0 if self.population is None else self.population.evaluations

    def step(
            self,
            max_iter: int | float | None = None,  # max no of generations in this step
            max_evaluations: int | float | None = None,
            disp_rate: int = 0,
            convergence_criteria: None | term.Convergence | list[term.Convergence] = None,
            ):
        """
        Runs generations until a termination criterion is met. May be called
        repeatedly; the population carries over between calls.
        """
        if max_iter is None and max_evaluations is None:
            max_iter = 500
        if max_iter is None:
            max_iter = np.inf
        typing.sanitize_type(max_iter, "numeric", "max_iter")
        typing.sanitize_range(max_iter, "max_iter", ge=0)
        if max_evaluations is None:
            max_evaluations = self.evaluations + max_iter * self.pop_size + 1
        typing.sanitize_type(max_evaluations, "numeric", "max_evaluations")
        typing.sanitize_range(max_evaluations, "max_evaluations", ge=0)
        typing.sanitize_type(disp_rate, "integer", "disp_rate")

        if convergence_criteria is None:
            convergence_criteria = []
        elif isinstance(convergence_criteria, term.Convergence):
            convergence_criteria = [convergence_criteria]
        termination_handler = term.MultiConvergence(
            criteria=[term.Maxiter(max_iter), term.MaxEvaluations(max_evaluations)] + convergence_criteria
        )

        self.populate()

        while not termination_handler(self):
            if disp_rate > 0 and self.current_iter % disp_rate == 0:
                self._display_progress()

            self.population.evolve(
                reference_directions=self.reference_directions,
                eta_cr=self.eta_cr,
                p_cr=self.p_cr,
                eta_m=self.eta_m,
                p_m=self.p_m,
            )
            self.current_iter += 1
            if self.logger is not None:
                self.logger.log_iteration(self.current_iter, self.population)

        if self.logger is not None:
            self.logger.finalize()

    def populate(self):
        if self.population is not None:
            return
        self.population = Population(
            problem=self.problem,
            pop_size=self.pop_size,
            rng=self.rng,
        )
        self.population.populate(self.x0)

    def get_results(self) -> dict:
        """
        Returns the final results of the optimization.
        """
        if self.population is None:
            raise RuntimeError("Algorithm has not been run yet.")

        pareto, pareto_objs = self.population.pareto()
        return {
            "pareto": pareto,
            "objectives": pareto_objs,
            "population": self.population.points,
            "population_objectives": self.population.objective_values,
            "ranks": self.population.ranks,
            "reference_directions": self.reference_directions,
            "iterations": self.current_iter,
            "evaluations": self.evaluations,
        }

    def _display_progress(self):
        """
        Prints the current progress of the algorithm to the console.
        """
        elapsed = dt.now() - self.start_time
        front_size = int((self.population.ranks == 1).sum())
        print(f"Iter: {self.current_iter}. Evaluations: {self.evaluations}. "
              f"Pareto front: {front_size}/{self.pop_size}. Time: {elapsed}")

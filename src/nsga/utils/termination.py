"""
Termination criteria for the generation loop.

These are classes which need to be instantiated.
They should be called once during an iteration with the running algorithm
and return True if the criterion is met. Otherwise return False
"""

from datetime import datetime as dt
from time import perf_counter


class Convergence:
    """
    Base class for convergence criteria
    """
    def __call__(self, intermediate_result=None):
        raise NotImplementedError


class MultiConvergence(Convergence):
    """
    Combines several convergence criteria with "or"/"and" logic

    Can be stacked to create complex convergence conditions
    """
    def __init__(
            self,
            criteria: list[Convergence],
            how: str = "or"
            ):
        if how not in ("and", "or"):
            raise ValueError(f"'how' should be 'and' or 'or'. Got: {how}")
        for i, crit in enumerate(criteria):
            if not isinstance(crit, Convergence):
                raise TypeError(f"criteria[{i}] is not a Convergence object: {crit}")
        self.how = how
        self.ncrit = len(criteria)
        self.criteria = criteria

    def __call__(
            self,
            intermediate_result=None,
            ):
        # every criterion is called so that stateful counters stay in step
        nTrue = sum([crit(intermediate_result) for crit in self.criteria])

        if self.how == "and":
            return nTrue == self.ncrit
        return nTrue >= 1

    def __repr__(self):
        return f"""Multi Criteria Convergence Object:
    {self.ncrit} criteria with "{self.how}" logic.
    Criteria: {[repr(crit) for crit in self.criteria]}"""


class Maxiter(Convergence):
    """
    Maximum iterations termination criterion
    """
    def __init__(
            self,
            maxiter: int | float,
            ):
        self.maxiter = maxiter
        self.iter = -1

    def __call__(
            self,
            intermediate_result=None,
            ):
        self.iter += 1
        return self.iter >= self.maxiter

    def __repr__(self):
        return f"""Maxiter Convergence Criterion: {self.iter} / {self.maxiter}"""


class MaxEvaluations(Convergence):
    """
    Terminates once the objective has been evaluated `max_evaluations` times
    """
    def __init__(
            self,
            max_evaluations: int | float,
            attribute: str = "evaluations",
            ):
        self.max_evaluations = max_evaluations
        self.attribute = attribute

    def __call__(
            self,
            intermediate_result,
            ):
        return getattr(intermediate_result, self.attribute) >= self.max_evaluations

    def __repr__(self):
        return f"""Max Evaluations Convergence Criterion: {self.max_evaluations}"""


class Timeout(Convergence):
    """
    Terminates once `timeout` has elapsed since the first call.
    `timeout` is a datetime.timedelta for how="dt" and seconds for how="perf"
    """
    def __init__(
            self,
            timeout,
            how: str = "dt"
            ):
        if how not in ("dt", "perf"):
            raise ValueError(f"`how` should be 'dt' (datetime.datetime.now) or 'perf' (time.perf_counter). Supplied {how}")
        self.timeout = timeout
        self.now = dt.now if how == "dt" else perf_counter
        self.start = None

    def __call__(
            self,
            intermediate_result=None,
            ):
        if self.timeout is None:
            return False
        # timer starts at first call, not at init
        if self.start is None:
            self.start = self.now()
        return self.now() - self.start > self.timeout

    def __repr__(self):
        return f"""Timeout Convergence Criterion: {self.timeout}"""

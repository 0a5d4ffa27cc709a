import pytest
import numpy as np
from csv import reader

from nsga.nsga3 import NSGA3
from nsga.utils.termination import Convergence


class StopAt(Convergence):
    def __init__(self, iteration):
        self.iteration = iteration

    def __call__(self, intermediate_result=None):
        return intermediate_result.current_iter >= self.iteration


def test_defaults(zdt1_problem):
    algorithm = NSGA3(zdt1_problem)
    assert algorithm.p_m == pytest.approx(1 / 5)
    assert algorithm.reference_directions.shape == (13, 2)
    assert algorithm.evaluations == 0


def test_reference_directions_supplied(dtlz2_problem):
    directions = [[1, 0, 0], [0, 1, 0], [0, 0, 1], [1 / 3, 1 / 3, 1 / 3]]
    algorithm = NSGA3(dtlz2_problem, pop_size=8, reference_directions=directions)
    assert algorithm.reference_directions.shape == (4, 3)


def test_get_results_before_run(schaffer_problem):
    with pytest.raises(RuntimeError):
        NSGA3(schaffer_problem).get_results()


def test_step_max_iter(schaffer_problem):
    algorithm = NSGA3(schaffer_problem, pop_size=8, partitions=4, random_seed=1)
    algorithm.step(max_iter=3)
    assert algorithm.current_iter == 3
    assert algorithm.evaluations == 8 * 4

    results = algorithm.get_results()
    assert results["iterations"] == 3
    assert results["evaluations"] == 32
    assert results["population"].shape == (8, 1)
    assert results["population_objectives"].shape == (8, 2)
    assert results["pareto"].shape[0] == results["objectives"].shape[0] == (results["ranks"] == 1).sum()


def test_step_resumes(schaffer_problem):
    algorithm = NSGA3(schaffer_problem, pop_size=8, partitions=4)
    algorithm.step(max_iter=2)
    algorithm.step(max_iter=2)
    assert algorithm.current_iter == 4
    assert algorithm.evaluations == 8 * 5


def test_step_max_evaluations(zdt1_problem):
    algorithm = NSGA3(zdt1_problem, pop_size=8, partitions=4)
    algorithm.step(max_evaluations=30)
    assert algorithm.evaluations == 32
    assert algorithm.current_iter == 3


def test_convergence_criteria(zdt1_problem):
    algorithm = NSGA3(zdt1_problem, pop_size=8, partitions=4)
    algorithm.step(max_iter=10, convergence_criteria=StopAt(2))
    assert algorithm.current_iter == 2

    algorithm = NSGA3(zdt1_problem, pop_size=8, partitions=4)
    algorithm.step(max_iter=10, convergence_criteria=[StopAt(5), StopAt(4)])
    assert algorithm.current_iter == 4


def test_deterministic_with_seed(dtlz2_problem):
    results = []
    for _ in range(2):
        algorithm = NSGA3(dtlz2_problem, pop_size=16, partitions=4, random_seed=42)
        algorithm.step(max_iter=5)
        results.append(algorithm.get_results())
    assert (results[0]["population"] == results[1]["population"]).all()
    assert (results[0]["ranks"] == results[1]["ranks"]).all()


def test_x0(schaffer_problem):
    algorithm = NSGA3(schaffer_problem, pop_size=8, partitions=4, x0=np.array([[1.0]]))
    algorithm.step(max_iter=0)
    assert algorithm.get_results()["population"][0, 0] == 1.0


def test_zdt1_converges(zdt1_problem):
    algorithm = NSGA3(zdt1_problem, pop_size=40, partitions=39, random_seed=0)
    algorithm.step(max_iter=150)
    pareto = algorithm.get_results()["pareto"]
    g = 1 + 9 * pareto[:, 1:].mean(axis=1)
    # random points sit near g = 5.5, the front at g = 1
    assert g.max() < 2.0
    assert pareto.shape[0] > 10, "front should be spread over many directions"


def test_display_progress(schaffer_problem, capsys):
    algorithm = NSGA3(schaffer_problem, pop_size=8, partitions=4)
    algorithm.step(max_iter=4, disp_rate=2)
    out = capsys.readouterr().out
    assert out.count("Iter:") == 2


def test_log_file(zdt1_problem, tmp_path):
    prefix = tmp_path / "logs" / "run"
    algorithm = NSGA3(zdt1_problem, pop_size=8, partitions=4, log_dir=str(prefix))
    algorithm.step(max_iter=3)

    with open(f"{prefix}-generations.csv", newline="") as f:
        rows = list(reader(f))
    assert rows[0] == ["iter", "evaluations", "front_size", "boundary_rank",
                       "ideal_0", "ideal_1", "nadir_0", "nadir_1"]
    assert len(rows) == 4
    assert [float(row[0]) for row in rows[1:]] == [1.0, 2.0, 3.0]
    assert [float(row[1]) for row in rows[1:]] == [16.0, 24.0, 32.0]


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"pop_size": 1}, ValueError),
        ({"pop_size": 10.0}, TypeError),
        ({"p_cr": 1.5}, ValueError),
        ({"p_m": -0.1}, ValueError),
        ({"eta_cr": -1}, ValueError),
        ({"eta_m": "20"}, TypeError),
        ({"partitions": 0}, ValueError),
        ({"random_seed": 1.5}, TypeError),
        ({"log_freq": 0}, ValueError),
        ({"log_dir": 1}, TypeError),
        ({"reference_directions": [[1.0, 0.0, 0.0]]}, ValueError),
    ],
)
def test_bad_arguments(zdt1_problem, kwargs, error):
    with pytest.raises(error):
        NSGA3(zdt1_problem, **kwargs)


def test_bad_problem():
    with pytest.raises(TypeError):
        NSGA3(lambda x: x)


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"max_evaluations": "100"}, TypeError),
        ({"max_evaluations": -1}, ValueError),
        ({"max_evaluations": True}, TypeError),
        ({"max_iter": "5"}, TypeError),
        ({"max_iter": -1}, ValueError),
        ({"disp_rate": 1.0}, TypeError),
    ],
)
def test_bad_step_arguments(schaffer_problem, kwargs, error):
    algorithm = NSGA3(schaffer_problem, pop_size=8, partitions=4)
    with pytest.raises(error):
        algorithm.step(**kwargs)
    assert algorithm.population is None, "arguments should be checked before populating"

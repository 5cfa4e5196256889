import numpy as np
import pytest

from gradopt.optimize import (
    ConjugateGradient,
    LineSearchAscent,
    Problem,
    StepwiseAscent,
    WeightsAveraging,
    maximize,
)


def parabola_problem() -> Problem:
    return Problem(
        fun=lambda w: float(-((w[0] - 3.0) ** 2)),
        grad=lambda w: -2.0 * (w - 3.0),
        dim=1,
    )


def test_maximize_parabola_with_line_search():
    x0 = np.array([0.0])
    res = maximize(LineSearchAscent(), parabola_problem(), x0)
    assert res.success
    assert res.message == "Optimizer converged."
    assert abs(res.x[0] - 3.0) < 1e-3
    assert res.grad_norm < 1e-3
    assert res.nfev == res.nit + 1
    assert x0.tolist() == [0.0]


def test_maximize_records_history_and_calls_callback():
    seen = []
    res = maximize(
        LineSearchAscent(),
        parabola_problem(),
        [0.0],
        callback=lambda x, fx, g: seen.append(fx),
        history=True,
    )
    assert len(res.history) == res.nit + 1
    assert res.history[0].tolist() == [0.0]
    assert len(seen) == res.nit
    assert seen[-1] == res.fun


def test_maximize_stops_at_maxiter_for_stepwise():
    res = maximize(StepwiseAscent(rate=0.1), parabola_problem(), np.array([0.0]), maxiter=40)
    assert not res.success
    assert res.message == "Maximum iterations reached."
    assert res.nit == 40
    assert abs(res.x[0] - 3.0) < 1e-2


def test_maximize_averaged_perceptron_style():
    opt = WeightsAveraging(StepwiseAscent(rate=0.25))
    res = maximize(opt, parabola_problem(), np.array([0.0]), maxiter=40)
    assert opt.num_steps == 40
    assert 0.0 < opt.average_weights()[0] < res.x[0]


def test_maximize_conjugate_gradient_rosenbrock_improves():
    def fun(x):
        return float(-((1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2))

    def grad(x):
        return -np.array(
            [
                -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
                200 * (x[1] - x[0] ** 2),
            ]
        )

    x0 = np.array([-1.2, 1.0])
    res = maximize(
        ConjugateGradient(max_iterations=200),
        Problem(fun=fun, grad=grad, dim=2),
        x0,
        maxiter=10_000,
    )
    assert res.success
    assert res.fun > fun(x0)


def test_maximize_rejects_wrong_dimension():
    with pytest.raises(ValueError, match="problem.dim"):
        maximize(LineSearchAscent(), parabola_problem(), np.zeros(2))


def test_maximize_rejects_non_positive_maxiter():
    with pytest.raises(ValueError):
        maximize(LineSearchAscent(), parabola_problem(), np.zeros(1), maxiter=0)

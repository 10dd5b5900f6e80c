import numpy as np
import pytest

from localopt import ConfigurationError, Function, IterationStatus, MaxNumIterTest, SimplexState
from localopt.optimize import NelderMead, NelderMeadSetup


def test_nelder_mead_rosenbrock(rosen):
    res = NelderMead().solve(rosen, np.array([-1.2, 1.0]), solver_setup=NelderMeadSetup(max_iter=5000))
    assert res.status is IterationStatus.SUCCESS
    assert np.allclose(res.x_min, np.ones(2), atol=1e-3)
    # derivative-free
    assert res.num_grad_eval == 0
    assert res.num_hess_eval == 0


def test_nelder_mead_shifted_quadratic():
    center = np.array([1.0, -2.0, 0.5])
    func = Function(lambda x: float(np.sum((x - center) ** 2)), dim=3)
    res = NelderMead().solve(func, np.zeros(3), solver_setup=NelderMeadSetup(max_iter=5000))
    assert res.converged
    assert np.allclose(res.x_min, center, atol=1e-4)


def test_point_array_holds_sorted_simplex(rosen):
    solver = NelderMead()
    res = solver.solve(rosen, np.array([-1.2, 1.0]), solver_setup=NelderMeadSetup(max_iter=5000))
    for state in res.states:
        assert isinstance(state, SimplexState)
        assert state.X.shape == (2, 3)
        assert np.array_equal(state.X[:, 0], state.x)
        assert np.all(np.diff(state.fvals) >= 0)
        assert state.f == state.fvals[0]
    assert solver.get_x_array().shape == (2, 3)


def test_initial_simplex_for_zero_coordinates():
    func = Function(lambda x: float(np.sum(x**2)), dim=2)
    solver = NelderMead()
    solver.setup(func, np.zeros(2), NelderMeadSetup(initial_step=0.1))
    X = solver.get_x_array()
    columns = {tuple(np.round(X[:, j], 12)) for j in range(3)}
    assert columns == {(0.0, 0.0), (0.1, 0.0), (0.0, 0.1)}
    assert solver.get_state().operation == "initial"
    assert func.num_func_eval == 3


def test_external_criterion_is_ignored(rosen):
    res = NelderMead().solve(
        rosen, np.array([-1.2, 1.0]), MaxNumIterTest(1), NelderMeadSetup(max_iter=5000)
    )
    assert res.num_iter > 1
    assert res.status is IterationStatus.SUCCESS


@pytest.mark.parametrize(
    "setup",
    [
        NelderMeadSetup(initial_step=0.0),
        NelderMeadSetup(gamma=1.0),
        NelderMeadSetup(rho=1.5),
        NelderMeadSetup(sigma=0.0),
        NelderMeadSetup(ftol=-1.0),
    ],
)
def test_nelder_mead_setup_validation(rosen, setup):
    with pytest.raises(ConfigurationError):
        NelderMead().solve(rosen, np.zeros(2), solver_setup=setup)


def test_tiny_start_coordinate_gets_full_sized_simplex():
    func = Function(lambda x: float((x[0] - 1.0) ** 2), dim=1)
    solver = NelderMead()
    solver.setup(func, np.array([1e-10]), NelderMeadSetup(initial_step=0.05))
    assert solver.get_state().diameter == pytest.approx(0.05)
    res = NelderMead().solve(func, np.array([1e-10]), solver_setup=NelderMeadSetup(max_iter=5000))
    assert res.converged
    assert res.num_iter > 1
    assert np.allclose(res.x_min, [1.0], atol=1e-4)

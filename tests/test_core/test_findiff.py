import numpy as np
import pytest

from localopt.core.findiff import approx_grad, approx_hessian, is_pos_def, safe_solve


def test_approx_grad_matches_linear_function():
    def fun(x: np.ndarray) -> float:
        return float(3 * x[0] - 2 * x[1])

    grad = approx_grad(fun, np.array([0.2, -0.1]))
    assert np.allclose(grad, np.array([3.0, -2.0]), atol=1e-6)


def test_approx_grad_reports_evaluations():
    grad, evals = approx_grad(lambda x: float(np.sum(x**2)), np.ones(3), return_evals=True)
    assert evals == 6
    assert np.allclose(grad, 2 * np.ones(3), atol=1e-6)


def test_approx_grad_large_coordinates():
    grad = approx_grad(lambda x: float(x[0] ** 2), np.array([1e4]))
    assert grad[0] == pytest.approx(2e4, rel=1e-6)


def test_approx_hessian_matches_quadratic():
    def fun(x: np.ndarray) -> float:
        return float(x[0] ** 2 + 3 * x[1] ** 2 + x[0] * x[1])

    hess = approx_hessian(fun, np.array([0.5, -1.5]))
    assert np.allclose(hess, [[2.0, 1.0], [1.0, 6.0]], atol=1e-3)
    assert np.array_equal(hess, hess.T)


@pytest.mark.parametrize("func", [approx_grad, approx_hessian])
def test_invalid_eps(func):
    with pytest.raises(ValueError):
        func(lambda x: float(x[0]), np.array([0.0]), eps=0.0)


def test_safe_solve_regularizes_singular_matrix():
    mat = np.array([[1.0, 1.0], [1.0, 1.0]])
    vec = np.array([1.0, 1.0])
    solution = safe_solve(mat, vec)
    assert np.allclose(mat @ solution, vec, atol=1e-6)


def test_is_pos_def():
    assert is_pos_def(np.diag([1.0, 2.0]))
    assert not is_pos_def(np.diag([1.0, -2.0]))

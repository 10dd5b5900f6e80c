"""Finite-difference derivatives and guarded linear solves.

Used by :class:`~localopt.core.function.Function` when no analytic gradient
or Hessian is supplied, and by the Newton-type solvers.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]


def _steps(x: Array, eps: float) -> Array:
    # relative step for large coordinates, absolute near zero
    return eps * np.maximum(1.0, np.abs(x))


def approx_grad(
    fun: Objective, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Relative perturbation size.
    return_evals:
        Also return the number of function evaluations performed.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float)
    h = _steps(x, eps)
    grad = np.empty_like(x)
    for i, e in enumerate(np.diag(h)):
        grad[i] = (fun(x + e) - fun(x - e)) / (2.0 * h[i])
    evals = 2 * x.size
    if return_evals:
        return grad, evals
    return grad


def approx_hessian(
    fun: Objective, x: Array, eps: float = 1e-4, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Approximate the Hessian using second-order central differences.

    The result is symmetric by construction.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float)
    n = x.size
    h = _steps(x, eps)
    shifts = np.diag(h)
    hess = np.zeros((n, n), dtype=float)
    fx = fun(x)
    evals = 1
    for i in range(n):
        ei = shifts[i]
        hess[i, i] = (fun(x + ei) - 2.0 * fx + fun(x - ei)) / h[i] ** 2
        evals += 2
        for j in range(i + 1, n):
            ej = shifts[j]
            value = (
                fun(x + ei + ej) - fun(x + ei - ej) - fun(x - ei + ej) + fun(x - ei - ej)
            ) / (4.0 * h[i] * h[j])
            evals += 4
            hess[i, j] = hess[j, i] = value
    if return_evals:
        return hess, evals
    return hess


def is_pos_def(mat: Array, tol: float = 1e-12) -> bool:
    """Check if a matrix is positive definite via eigenvalues of its symmetric part."""
    sym = 0.5 * (mat + mat.T)
    return bool(np.all(np.linalg.eigvalsh(sym) > tol))


def safe_solve(mat: Array, vec: Array, reg: float = 1e-12) -> Array:
    """Solve ``mat @ x = vec``, retrying with a ridge and then least squares."""
    try:
        return np.linalg.solve(mat, vec)
    except np.linalg.LinAlgError:
        pass
    eye = np.eye(mat.shape[0], dtype=float)
    try:
        return np.linalg.solve(mat + reg * eye, vec)
    except np.linalg.LinAlgError:
        sol, *_ = np.linalg.lstsq(mat, vec, rcond=None)
        return sol


__all__ = [
    "Array",
    "Objective",
    "approx_grad",
    "approx_hessian",
    "is_pos_def",
    "safe_solve",
]

"""Deterministic line-search routines following Nocedal & Wright.

Both routines return ``(alpha, nfev)``: the accepted step length along ``p``
and the number of objective evaluations they made. When the objective is a
:class:`~localopt.core.function.Function` the evaluations are also recorded
on its own counters.
"""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from ..core.function import Array, Gradient, Objective


def backtracking_armijo(
    f: Objective,
    x: Array,
    p: Array,
    grad_fx: Array,
    fx: Optional[float] = None,
    alpha0: float = 1.0,
    rho: float = 0.5,
    c: float = 1e-4,
    max_iter: int = 50,
) -> tuple[float, int]:
    """Classic Armijo backtracking line search.

    ``fx`` is the objective value at ``x``; it is evaluated when omitted.
    If no step satisfies the sufficient-decrease condition within
    ``max_iter`` halvings, the last (smallest) trial step is returned.
    """
    if not (0 < c < 1):
        raise ValueError("Armijo constant c must lie in (0, 1)")
    if not (0 < rho < 1):
        raise ValueError("rho must lie in (0, 1)")
    nfev = 0
    if fx is None:
        fx = f(x)
        nfev += 1
    alpha = float(alpha0)
    slope = float(np.dot(grad_fx, p))
    for _ in range(max_iter):
        f_new = f(x + alpha * p)
        nfev += 1
        if np.isfinite(f_new) and f_new <= fx + c * alpha * slope:
            return alpha, nfev
        alpha *= rho
    return alpha, nfev


def wolfe_line_search(
    f: Objective,
    grad: Gradient,
    x: Array,
    p: Array,
    alpha0: float = 1.0,
    c1: float = 1e-4,
    c2: float = 0.9,
    max_iter: int = 40,
) -> tuple[float, int]:
    """Strong Wolfe line search using bracketing and zoom.

    Raises:
        ValueError: If the constants are invalid or ``p`` is not a descent
            direction at ``x``.
    """
    if not (0 < c1 < c2 < 1):
        raise ValueError("Require 0 < c1 < c2 < 1 for Wolfe conditions.")

    nfev = 0

    def phi(alpha: float) -> float:
        nonlocal nfev
        nfev += 1
        return f(x + alpha * p)

    def phi_prime(alpha: float) -> float:
        return float(np.dot(grad(x + alpha * p), p))

    phi0 = phi(0.0)
    der0 = phi_prime(0.0)
    if not der0 < 0:
        raise ValueError("Search direction must be a descent direction.")

    alpha_prev, phi_prev = 0.0, phi0
    alpha = float(alpha0)
    for iteration in range(max_iter):
        phi_alpha = phi(alpha)
        if not np.isfinite(phi_alpha):
            # step left the region where f is defined: bracket it
            return _zoom(phi, phi_prime, alpha_prev, alpha, phi0, der0, c1, c2), nfev
        if phi_alpha > phi0 + c1 * alpha * der0 or (iteration > 0 and phi_alpha >= phi_prev):
            return _zoom(phi, phi_prime, alpha_prev, alpha, phi0, der0, c1, c2), nfev
        der_alpha = phi_prime(alpha)
        if abs(der_alpha) <= -c2 * der0:
            return alpha, nfev
        if der_alpha >= 0:
            return _zoom(phi, phi_prime, alpha, alpha_prev, phi0, der0, c1, c2), nfev
        alpha_prev, phi_prev = alpha, phi_alpha
        alpha *= 2.0
    return alpha, nfev


def _zoom(
    phi: Callable[[float], float],
    phi_prime: Callable[[float], float],
    alo: float,
    ahi: float,
    phi0: float,
    der0: float,
    c1: float,
    c2: float,
    max_iter: int = 32,
) -> float:
    """Bisection zoom enforcing the strong Wolfe conditions."""
    phi_alo = phi(alo) if alo != 0.0 else phi0
    alpha = 0.5 * (alo + ahi)
    for _ in range(max_iter):
        alpha = 0.5 * (alo + ahi)
        phi_alpha = phi(alpha)
        if not np.isfinite(phi_alpha) or phi_alpha > phi0 + c1 * alpha * der0 or phi_alpha >= phi_alo:
            ahi = alpha
        else:
            der_alpha = phi_prime(alpha)
            if abs(der_alpha) <= -c2 * der0:
                return alpha
            if der_alpha * (ahi - alo) >= 0:
                ahi = alo
            alo, phi_alo = alpha, phi_alpha
        if abs(ahi - alo) < 1e-12:
            break
    return alo if alo > 0.0 else alpha


__all__ = ["backtracking_armijo", "wolfe_line_search"]

"""Quasi-Newton solvers (BFGS and L-BFGS)."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

import numpy as np

from ..core.config import Setup
from ..core.errors import ConfigurationError
from ..core.solver import PointSolver
from ..core.state import LineSearchState
from ..core.status import IterationStatus
from .line_search import wolfe_line_search

_CURVATURE_EPS = 1e-12


@dataclass(frozen=True)
class WolfeSetup(Setup):
    """
    Options of the strong Wolfe line search used by the quasi-Newton solvers.

    Args:
        c1: Sufficient-decrease constant.
        c2: Curvature constant, ``c1 < c2 < 1``.
        max_ls_iter: Maximum number of bracketing steps.
    """

    c1: float = 1e-4
    c2: float = 0.9
    max_ls_iter: int = 40

    def validate(self) -> None:
        super().validate()
        if not (0.0 < self.c1 < self.c2 < 1.0):
            raise ConfigurationError("Require 0 < c1 < c2 < 1 for Wolfe conditions.")
        if self.max_ls_iter < 1:
            raise ConfigurationError("max_ls_iter must be at least 1.")


@dataclass(frozen=True)
class LBFGSSetup(WolfeSetup):
    """Options of :class:`LBFGS`; ``m`` is the number of stored correction pairs."""

    m: int = 10

    def validate(self) -> None:
        super().validate()
        if self.m <= 0:
            raise ConfigurationError("Memory parameter m must be positive.")


@dataclass
class BFGSState(LineSearchState):
    """Line-search state carrying the inverse Hessian approximation."""

    inv_hessian: Optional[np.ndarray] = None


class _QuasiNewton(PointSolver):
    """Shared line search and update bookkeeping of the quasi-Newton solvers."""

    setup_type = WolfeSetup

    def _search_direction(self, grad: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def _reset_memory(self, n: int) -> None:
        raise NotImplementedError

    def _update(self, s: np.ndarray, y: np.ndarray) -> None:
        raise NotImplementedError

    def _make_state(self, **kwargs) -> LineSearchState:
        return LineSearchState(**kwargs)

    def _initialize(self, x0: np.ndarray) -> None:
        func = self.get_objective_function()
        self._reset_memory(x0.size)
        self._state = self._make_state(f=func.value(x0), x=x0, gradient=func.gradient(x0))

    def _line_search(self, x: np.ndarray, direction: np.ndarray) -> float:
        func = self.get_objective_function()
        setup = self.get_setup()
        alpha, _ = wolfe_line_search(
            func.value,
            func.gradient,
            x,
            direction,
            c1=setup.c1,
            c2=setup.c2,
            max_iter=setup.max_ls_iter,
        )
        return alpha

    def _iterate(self) -> IterationStatus:
        func = self.get_objective_function()
        state = self._state
        grad = state.gradient
        if not np.any(grad):
            self._state = self._make_state(f=state.f, x=state.x.copy(), gradient=grad)
            return IterationStatus.CONTINUE

        direction = self._search_direction(grad)
        if float(np.dot(direction, grad)) >= 0.0:
            # lost positive definiteness: restart from steepest descent
            self._reset_memory(grad.size)
            direction = -grad
        try:
            alpha = self._line_search(state.x, direction)
        except ValueError:
            # no descent along the direction at working precision
            self._state = self._make_state(f=state.f, x=state.x.copy(), gradient=grad)
            return IterationStatus.CONTINUE

        s = alpha * direction
        x_new = state.x + s
        f_new = func.value(x_new)
        if not (np.isfinite(f_new) and np.all(np.isfinite(x_new))):
            self._state = self._make_state(f=f_new, x=x_new, direction=direction, step_length=alpha)
            return IterationStatus.OUT_OF_CONTROL
        grad_new = func.gradient(x_new)
        if not np.all(np.isfinite(grad_new)):
            self._state = self._make_state(
                f=f_new, x=x_new, gradient=grad_new, direction=direction, step_length=alpha
            )
            return IterationStatus.OUT_OF_CONTROL

        self._update(s, grad_new - grad)
        self._state = self._make_state(
            f=f_new, x=x_new, gradient=grad_new, direction=direction, step_length=alpha
        )
        return IterationStatus.CONTINUE


class BFGS(_QuasiNewton):
    """Full-memory BFGS with strong Wolfe line search.

    The inverse Hessian approximation is reset to the identity whenever the
    curvature condition ``y^T s > 0`` fails.
    """

    name = "BFGS"

    def __init__(self) -> None:
        super().__init__()
        self._inv_hessian = np.eye(0)

    def _make_state(self, **kwargs) -> BFGSState:
        return BFGSState(inv_hessian=self._inv_hessian.copy(), **kwargs)

    def _reset_memory(self, n: int) -> None:
        self._inv_hessian = np.eye(n)

    def _search_direction(self, grad: np.ndarray) -> np.ndarray:
        return -self._inv_hessian @ grad

    def _update(self, s: np.ndarray, y: np.ndarray) -> None:
        ys = float(np.dot(y, s))
        n = s.size
        if ys <= _CURVATURE_EPS:
            self._inv_hessian = np.eye(n)
            return
        rho = 1.0 / ys
        identity = np.eye(n)
        left = identity - rho * np.outer(s, y)
        self._inv_hessian = left @ self._inv_hessian @ left.T + rho * np.outer(s, s)


class LBFGS(_QuasiNewton):
    """Limited-memory BFGS using the two-loop recursion."""

    name = "L-BFGS"
    setup_type = LBFGSSetup

    def __init__(self) -> None:
        super().__init__()
        self._s_history: Deque[np.ndarray] = deque()
        self._y_history: Deque[np.ndarray] = deque()

    def _reset_memory(self, n: int) -> None:
        m = self.get_setup().m
        self._s_history = deque(maxlen=m)
        self._y_history = deque(maxlen=m)

    def _search_direction(self, grad: np.ndarray) -> np.ndarray:
        q = grad.copy()
        alpha_vals = []
        for s, y in reversed(list(zip(self._s_history, self._y_history))):
            rho = 1.0 / float(np.dot(y, s))
            alpha_i = rho * float(np.dot(s, q))
            q = q - alpha_i * y
            alpha_vals.append((rho, alpha_i, s, y))
        if self._s_history:
            last_s = self._s_history[-1]
            last_y = self._y_history[-1]
            gamma = float(np.dot(last_s, last_y) / np.dot(last_y, last_y))
        else:
            gamma = 1.0
        r = gamma * q
        for rho, alpha_i, s, y in reversed(alpha_vals):
            beta = rho * float(np.dot(y, r))
            r = r + s * (alpha_i - beta)
        return -r

    def _update(self, s: np.ndarray, y: np.ndarray) -> None:
        if float(np.dot(y, s)) > _CURVATURE_EPS:
            self._s_history.append(s)
            self._y_history.append(y)


__all__ = ["WolfeSetup", "LBFGSSetup", "BFGSState", "BFGS", "LBFGS"]

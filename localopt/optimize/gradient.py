"""Gradient-based descent solvers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.config import Setup
from ..core.constraints import BoundConstraints, Constraints, NoConstraints
from ..core.errors import ConfigurationError
from ..core.solver import PointSolver
from ..core.state import LineSearchState, PointState
from ..core.status import IterationStatus
from .line_search import backtracking_armijo


@dataclass(frozen=True)
class FixedStepSetup(Setup):
    """
    Options of :class:`GradientDescent`.

    Args:
        step: Step length (learning rate) multiplying the gradient.
        momentum: Heavy-ball coefficient in ``[0, 1)``; 0 disables momentum.
        nesterov: Evaluate the gradient at the look-ahead point.
    """

    step: float = 1e-2
    momentum: float = 0.0
    nesterov: bool = False

    def validate(self) -> None:
        super().validate()
        if self.step <= 0.0:
            raise ConfigurationError("step must be positive.")
        if not (0.0 <= self.momentum < 1.0):
            raise ConfigurationError("momentum must lie in [0, 1).")
        if self.nesterov and self.momentum == 0.0:
            raise ConfigurationError("nesterov requires a positive momentum.")


@dataclass(frozen=True)
class LineSearchSetup(Setup):
    """
    Options of the Armijo backtracking line search.

    Args:
        alpha0: Initial trial step.
        rho: Backtracking factor in ``(0, 1)``.
        c: Sufficient-decrease constant in ``(0, 1)``.
        max_ls_iter: Maximum number of backtracking steps.
    """

    alpha0: float = 1.0
    rho: float = 0.5
    c: float = 1e-4
    max_ls_iter: int = 50

    def validate(self) -> None:
        super().validate()
        if self.alpha0 <= 0.0:
            raise ConfigurationError("alpha0 must be positive.")
        if not (0.0 < self.rho < 1.0):
            raise ConfigurationError("rho must lie in (0, 1).")
        if not (0.0 < self.c < 1.0):
            raise ConfigurationError("c must lie in (0, 1).")
        if self.max_ls_iter < 1:
            raise ConfigurationError("max_ls_iter must be at least 1.")


def _finite(*values) -> bool:
    return all(bool(np.all(np.isfinite(v))) for v in values)


class GradientDescent(PointSolver):
    """Fixed-step gradient descent, optionally with momentum.

    ``x_{k+1} = P(x_k + v_{k+1})`` with ``v_{k+1} = beta v_k - step grad f``,
    where ``P`` projects onto box constraints when they are given.
    """

    name = "gradient descent"
    setup_type = FixedStepSetup

    def __init__(self) -> None:
        super().__init__()
        self._velocity = np.zeros(0)

    def supports_constraints(self, constraints: Constraints) -> bool:
        return isinstance(constraints, (NoConstraints, BoundConstraints))

    def _initialize(self, x0: np.ndarray) -> None:
        func = self.get_objective_function()
        self._velocity = np.zeros_like(x0)
        self._state = PointState(f=func.value(x0), x=x0, gradient=func.gradient(x0))

    def _iterate(self) -> IterationStatus:
        func = self.get_objective_function()
        setup = self.get_setup()
        x = self._state.x
        beta = setup.momentum

        if setup.nesterov:
            grad = func.gradient(x + beta * self._velocity)
        else:
            grad = self._state.gradient
        self._velocity = beta * self._velocity - setup.step * grad
        x_new = self.get_constraints().project(x + self._velocity)

        f_new = func.value(x_new)
        if not _finite(f_new, x_new):
            self._state = PointState(f=f_new, x=x_new)
            return IterationStatus.OUT_OF_CONTROL
        grad_new = func.gradient(x_new)
        self._state = PointState(f=f_new, x=x_new, gradient=grad_new)
        if not _finite(grad_new):
            return IterationStatus.OUT_OF_CONTROL
        return IterationStatus.CONTINUE


class SteepestDescent(PointSolver):
    """Steepest descent with an Armijo backtracking line search."""

    name = "steepest descent"
    setup_type = LineSearchSetup

    def _initialize(self, x0: np.ndarray) -> None:
        func = self.get_objective_function()
        self._state = LineSearchState(f=func.value(x0), x=x0, gradient=func.gradient(x0))

    def _iterate(self) -> IterationStatus:
        func = self.get_objective_function()
        setup = self.get_setup()
        state = self._state
        direction = -state.gradient
        if not np.any(direction):
            # stationary point: keep the state and let the driver decide
            self._state = LineSearchState(
                f=state.f, x=state.x.copy(), gradient=state.gradient, direction=direction
            )
            return IterationStatus.CONTINUE

        alpha, _ = backtracking_armijo(
            func.value,
            state.x,
            direction,
            state.gradient,
            fx=state.f,
            alpha0=setup.alpha0,
            rho=setup.rho,
            c=setup.c,
            max_iter=setup.max_ls_iter,
        )
        x_new = state.x + alpha * direction
        f_new = func.value(x_new)
        if not _finite(f_new, x_new):
            self._state = LineSearchState(f=f_new, x=x_new, direction=direction, step_length=alpha)
            return IterationStatus.OUT_OF_CONTROL
        grad_new = func.gradient(x_new)
        self._state = LineSearchState(
            f=f_new, x=x_new, gradient=grad_new, direction=direction, step_length=alpha
        )
        if not _finite(grad_new):
            return IterationStatus.OUT_OF_CONTROL
        return IterationStatus.CONTINUE


__all__ = [
    "FixedStepSetup",
    "LineSearchSetup",
    "GradientDescent",
    "SteepestDescent",
]

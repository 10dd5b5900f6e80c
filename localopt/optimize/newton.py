"""Newton and damped Newton solvers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.config import Setup
from ..core.errors import ConfigurationError
from ..core.findiff import safe_solve
from ..core.solver import PointSolver
from ..core.state import LineSearchState
from ..core.status import IterationStatus
from .line_search import backtracking_armijo


@dataclass(frozen=True)
class NewtonSetup(Setup):
    """
    Options of :class:`Newton`.

    Args:
        lambda_reg: Ridge added to the Hessian before solving for the step.
        use_line_search: Damp the step with an Armijo backtracking search.
        max_reg_tries: Number of tenfold ridge increases tried when the
            regularized Hessian is singular.
    """

    lambda_reg: float = 0.0
    use_line_search: bool = False
    max_reg_tries: int = 5

    def validate(self) -> None:
        super().validate()
        if self.lambda_reg < 0.0:
            raise ConfigurationError("lambda_reg must be non-negative.")
        if self.max_reg_tries < 0:
            raise ConfigurationError("max_reg_tries must be non-negative.")


class Newton(PointSolver):
    """Newton's method with optional ridge regularization and line search.

    The gradient and Hessian at the current iterate are cached in the state,
    so each iteration costs one gradient and one Hessian evaluation.
    """

    name = "Newton"
    setup_type = NewtonSetup

    def _initialize(self, x0: np.ndarray) -> None:
        func = self.get_objective_function()
        self._state = LineSearchState(
            f=func.value(x0), x=x0, gradient=func.gradient(x0), hessian=func.hessian(x0)
        )

    def _newton_step(self, grad: np.ndarray, hess: np.ndarray) -> np.ndarray:
        setup = self.get_setup()
        reg = setup.lambda_reg
        eye = np.eye(grad.size)
        for _ in range(setup.max_reg_tries):
            try:
                return np.linalg.solve(hess + reg * eye, -grad)
            except np.linalg.LinAlgError:
                reg = reg * 10 + 1e-8
        return safe_solve(hess + reg * eye, -grad)

    def _iterate(self) -> IterationStatus:
        func = self.get_objective_function()
        setup = self.get_setup()
        state = self._state
        if not np.any(state.gradient):
            self._state = LineSearchState(
                f=state.f, x=state.x.copy(), gradient=state.gradient, hessian=state.hessian
            )
            return IterationStatus.CONTINUE

        step = self._newton_step(state.gradient, state.hessian)
        alpha = 1.0
        if setup.use_line_search:
            if float(np.dot(step, state.gradient)) >= 0.0:
                # not a descent direction, fall back to the negative gradient
                step = -state.gradient
            alpha, _ = backtracking_armijo(func.value, state.x, step, state.gradient, fx=state.f)

        x_new = state.x + alpha * step
        f_new = func.value(x_new)
        if not (np.isfinite(f_new) and np.all(np.isfinite(x_new))):
            self._state = LineSearchState(f=f_new, x=x_new, direction=step, step_length=alpha)
            return IterationStatus.OUT_OF_CONTROL
        grad_new = func.gradient(x_new)
        hess_new = func.hessian(x_new)
        self._state = LineSearchState(
            f=f_new,
            x=x_new,
            gradient=grad_new,
            hessian=hess_new,
            direction=step,
            step_length=alpha,
        )
        if not (np.all(np.isfinite(grad_new)) and np.all(np.isfinite(hess_new))):
            return IterationStatus.OUT_OF_CONTROL
        return IterationStatus.CONTINUE


__all__ = ["NewtonSetup", "Newton"]

"""Trust-region method with dogleg and Cauchy point steps."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.config import Setup
from ..core.errors import ConfigurationError
from ..core.findiff import is_pos_def, safe_solve
from ..core.solver import PointSolver
from ..core.state import TrustRegionState
from ..core.status import IterationStatus


@dataclass(frozen=True)
class TrustRegionSetup(Setup):
    """
    Options of :class:`DoglegTrustRegion`.

    Args:
        delta0: Initial trust-region radius.
        max_delta: Upper bound on the radius.
        eta: Minimum ratio of actual to predicted reduction for accepting a step.
    """

    delta0: float = 1.0
    max_delta: float = 100.0
    eta: float = 0.15

    def validate(self) -> None:
        super().validate()
        if not (0.0 < self.delta0 <= self.max_delta):
            raise ConfigurationError("Require 0 < delta0 <= max_delta.")
        if not (0.0 <= self.eta < 0.25):
            raise ConfigurationError("eta must lie in [0, 0.25).")


def _cauchy_point(grad: np.ndarray, hess: np.ndarray, delta: float) -> np.ndarray:
    grad_norm = np.linalg.norm(grad)
    if grad_norm == 0:
        return np.zeros_like(grad)
    gbg = float(grad @ (hess @ grad))
    if gbg <= 0:
        tau = 1.0
    else:
        tau = min((grad_norm**3) / (delta * gbg), 1.0)
    return -(tau * delta / grad_norm) * grad


def _dogleg_step(grad: np.ndarray, hess: np.ndarray, delta: float) -> np.ndarray:
    """Combine the Cauchy point and the Newton step inside the radius ``delta``."""
    p_u = _cauchy_point(grad, hess, delta)
    if not is_pos_def(hess):
        # the dogleg path needs a convex model
        return p_u
    p_b = safe_solve(hess, -grad)
    if np.linalg.norm(p_b) <= delta:
        return p_b
    norm_u = np.linalg.norm(p_u)
    if norm_u >= delta or norm_u == 0:
        return p_u
    diff = p_b - p_u
    a = float(np.dot(diff, diff))
    if a <= 0:
        return (delta / norm_u) * p_u
    b = 2.0 * float(np.dot(p_u, diff))
    c = float(np.dot(p_u, p_u)) - delta**2
    tau = (-b + np.sqrt(max(b * b - 4 * a * c, 0.0))) / (2 * a)
    return p_u + tau * diff


class DoglegTrustRegion(PointSolver):
    """Dogleg trust-region solver.

    A rejected step leaves the iterate unchanged and shrinks the radius, so
    consecutive rejections count towards the stall limit of the solve loop.
    """

    name = "dogleg trust region"
    setup_type = TrustRegionSetup

    def _initialize(self, x0: np.ndarray) -> None:
        func = self.get_objective_function()
        self._state = TrustRegionState(
            f=func.value(x0),
            x=x0,
            gradient=func.gradient(x0),
            hessian=func.hessian(x0),
            radius=self.get_setup().delta0,
        )

    def _iterate(self) -> IterationStatus:
        func = self.get_objective_function()
        setup = self.get_setup()
        state = self._state
        grad, hess, delta = state.gradient, state.hessian, state.radius

        step = _dogleg_step(grad, hess, delta)
        x_candidate = state.x + step
        f_candidate = func.value(x_candidate)
        predicted = -(float(np.dot(grad, step)) + 0.5 * float(step @ (hess @ step)))
        if predicted <= 0 or not np.isfinite(f_candidate):
            rho = 0.0
        else:
            rho = (state.f - f_candidate) / predicted

        if rho < 0.25:
            delta *= 0.25
        elif rho > 0.75 and np.linalg.norm(step) >= 0.9 * state.radius:
            delta = min(2.0 * delta, setup.max_delta)

        if rho > setup.eta:
            grad_new = func.gradient(x_candidate)
            hess_new = func.hessian(x_candidate)
            self._state = TrustRegionState(
                f=f_candidate,
                x=x_candidate,
                gradient=grad_new,
                hessian=hess_new,
                radius=delta,
                ratio=rho,
                accepted=True,
            )
            if not (np.all(np.isfinite(grad_new)) and np.all(np.isfinite(hess_new))):
                return IterationStatus.OUT_OF_CONTROL
        else:
            self._state = TrustRegionState(
                f=state.f,
                x=state.x.copy(),
                gradient=grad,
                hessian=hess,
                radius=delta,
                ratio=rho,
                accepted=False,
            )
        return IterationStatus.CONTINUE


__all__ = ["TrustRegionSetup", "DoglegTrustRegion"]

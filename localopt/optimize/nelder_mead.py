"""Nelder–Mead downhill simplex method.

The method works with function values only and keeps a simplex of ``n + 1``
vertices. Every vertex produced in a step is exposed through the state's
point array ``X``, one vertex per column. Termination is decided by the
method itself, so the solve loop ignores any external stopping criterion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..core.config import Setup
from ..core.errors import ConfigurationError
from ..core.solver import Solver
from ..core.state import SimplexState
from ..core.status import IterationStatus


@dataclass(frozen=True)
class NelderMeadSetup(Setup):
    """
    Options of :class:`NelderMead`.

    Args:
        initial_step: Size of the initial simplex. Vertex ``i`` moves
            coordinate ``i`` of ``x0`` away from zero by
            ``initial_step * max(|x0[i]|, 1)``, so the offset is relative for
            large coordinates and absolute near zero.
        ftol: Stop when the spread of vertex function values falls below it.
        xtol: Stop when the simplex diameter falls below it.
        alpha: Reflection coefficient.
        gamma: Expansion coefficient.
        rho: Contraction coefficient.
        sigma: Shrink coefficient.
    """

    initial_step: float = 0.05
    ftol: float = 1e-10
    xtol: float = 1e-8
    alpha: float = 1.0
    gamma: float = 2.0
    rho: float = 0.5
    sigma: float = 0.5

    def validate(self) -> None:
        super().validate()
        if self.initial_step <= 0.0:
            raise ConfigurationError("initial_step must be positive.")
        if self.ftol < 0.0 or self.xtol < 0.0:
            raise ConfigurationError("Tolerances must be non-negative.")
        if self.alpha <= 0.0 or self.gamma <= 1.0:
            raise ConfigurationError("Require alpha > 0 and gamma > 1.")
        if not (0.0 < self.rho < 1.0 and 0.0 < self.sigma < 1.0):
            raise ConfigurationError("rho and sigma must lie in (0, 1).")


class NelderMead(Solver):
    """Downhill simplex method with a built-in stopping criterion.

    Each iteration sorts the vertices, then tries reflection, expansion,
    contraction and finally shrinks the simplex towards the best vertex.
    The iteration reports ``SUCCESS`` once both the function value spread
    and the simplex diameter fall below ``ftol`` and ``xtol``.
    """

    name = "Nelder-Mead"
    setup_type = NelderMeadSetup

    _state: Optional[SimplexState]

    def get_state(self) -> SimplexState:
        if self._state is None:
            raise RuntimeError(f"{self.name} has not been set up; call setup() or solve() first.")
        return self._state

    def has_builtin_stopping_criterion(self) -> bool:
        return True

    def _initialize(self, x0: np.ndarray) -> None:
        func = self.get_objective_function()
        scale = self.get_setup().initial_step
        n = x0.size

        vertices = np.tile(x0.reshape(-1, 1), (1, n + 1))
        for i in range(n):
            # relative offset, but never smaller than initial_step itself
            vertices[i, i + 1] += np.copysign(scale * max(abs(x0[i]), 1.0), x0[i])
        fvals = np.array([func.value(vertices[:, j]) for j in range(n + 1)])
        self._state = self._sorted_state(vertices, fvals, "initial")

    @staticmethod
    def _sorted_state(vertices: np.ndarray, fvals: np.ndarray, operation: str) -> SimplexState:
        order = np.argsort(fvals, kind="stable")
        vertices = vertices[:, order]
        fvals = fvals[order]
        return SimplexState(
            f=float(fvals[0]),
            x=vertices[:, 0].copy(),
            vertices=vertices,
            fvals=fvals,
            operation=operation,
        )

    def _iterate(self) -> IterationStatus:
        func = self.get_objective_function()
        setup = self.get_setup()
        vertices = self._state.vertices.copy()
        fvals = self._state.fvals.copy()

        best = vertices[:, 0]
        worst = vertices[:, -1]
        f_best, f_second_worst, f_worst = fvals[0], fvals[-2], fvals[-1]
        centroid = vertices[:, :-1].mean(axis=1)

        x_reflect = centroid + setup.alpha * (centroid - worst)
        f_reflect = func.value(x_reflect)

        if f_best <= f_reflect < f_second_worst:
            vertices[:, -1], fvals[-1] = x_reflect, f_reflect
            operation = "reflection"
        elif f_reflect < f_best:
            x_expand = centroid + setup.gamma * (x_reflect - centroid)
            f_expand = func.value(x_expand)
            if f_expand < f_reflect:
                vertices[:, -1], fvals[-1] = x_expand, f_expand
                operation = "expansion"
            else:
                vertices[:, -1], fvals[-1] = x_reflect, f_reflect
                operation = "reflection"
        else:
            if f_reflect < f_worst:
                x_contract = centroid + setup.rho * (x_reflect - centroid)
                operation = "outside contraction"
            else:
                x_contract = centroid - setup.rho * (centroid - worst)
                operation = "inside contraction"
            f_contract = func.value(x_contract)
            if f_contract < min(f_reflect, f_worst):
                vertices[:, -1], fvals[-1] = x_contract, f_contract
            else:
                operation = "shrink"
                for j in range(1, vertices.shape[1]):
                    vertices[:, j] = best + setup.sigma * (vertices[:, j] - best)
                    fvals[j] = func.value(vertices[:, j])

        self._state = self._sorted_state(vertices, fvals, operation)
        if not (np.all(np.isfinite(fvals)) and np.all(np.isfinite(vertices))):
            return IterationStatus.OUT_OF_CONTROL

        f_spread = float(self._state.fvals[-1] - self._state.fvals[0])
        if f_spread <= setup.ftol and self._state.diameter <= setup.xtol:
            return IterationStatus.SUCCESS
        return IterationStatus.CONTINUE


__all__ = ["NelderMeadSetup", "NelderMead"]
